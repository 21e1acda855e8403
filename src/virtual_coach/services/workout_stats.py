"""Dashboard statistics over a user's workout history."""

from datetime import date, timedelta

from ..models.workout_log import WorkoutLog, WorkoutLogListItem, WorkoutStats


def calculate_streak(logs: list[WorkoutLog], today: date | None = None) -> int:
    """Count consecutive training days.

    The streak ends today, or yesterday when nothing has been logged yet
    today. Several sessions on one day count once.
    """
    if not logs:
        return 0

    today = today or date.today()
    days = {log.started_at.date() for log in logs}

    if today in days:
        day = today
    elif today - timedelta(days=1) in days:
        day = today - timedelta(days=1)
    else:
        return 0

    streak = 0
    while day in days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def compute_stats(logs: list[WorkoutLog], today: date | None = None) -> WorkoutStats:
    """Aggregate totals, average rating and streak."""
    if not logs:
        return WorkoutStats()

    ratings = [log.rating for log in logs if log.rating is not None]
    avg_rating = round(sum(ratings) / len(ratings), 1) if ratings else None

    return WorkoutStats(
        total_workouts=len(logs),
        total_minutes=sum(log.duration_minutes for log in logs),
        avg_rating=avg_rating,
        last_workout_at=max(log.started_at for log in logs),
        current_streak=calculate_streak(logs, today),
    )


def summarize_logs(logs: list[WorkoutLog]) -> list[WorkoutLogListItem]:
    """Condense logs for history listings."""
    return [
        WorkoutLogListItem(
            id=log.id,
            started_at=log.started_at,
            duration_minutes=log.duration_minutes,
            goal=log.settings.goal,
            exercise_count=len(log.exercises),
            rating=log.rating,
        )
        for log in logs
    ]
