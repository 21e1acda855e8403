"""Tests for workout statistics."""

from datetime import date, datetime

from virtual_coach.models.workout_log import WorkoutLog, WorkoutSettings
from virtual_coach.services.workout_stats import (
    calculate_streak,
    compute_stats,
    summarize_logs,
)


def _log(log_id: str, started_at: datetime, minutes: int = 30, rating: int | None = None):
    return WorkoutLog(
        id=log_id,
        user_id="user-1",
        started_at=started_at,
        completed_at=started_at,
        duration_minutes=minutes,
        settings=WorkoutSettings(
            goal="endurance", difficulty="beginner", equipment=[], planned_duration=30
        ),
        exercises=[],
        rating=rating,
    )


TODAY = date(2024, 3, 10)


class TestCalculateStreak:
    """Tests for calculate_streak."""

    def test_no_logs(self):
        assert calculate_streak([], TODAY) == 0

    def test_streak_ending_today(self):
        logs = [
            _log("a", datetime(2024, 3, 10, 7)),
            _log("b", datetime(2024, 3, 9, 7)),
            _log("c", datetime(2024, 3, 8, 7)),
            _log("d", datetime(2024, 3, 6, 7)),
        ]
        assert calculate_streak(logs, TODAY) == 3

    def test_streak_ending_yesterday(self):
        """A streak is still alive when nothing is logged yet today."""
        logs = [_log("a", datetime(2024, 3, 9, 7)), _log("b", datetime(2024, 3, 8, 7))]
        assert calculate_streak(logs, TODAY) == 2

    def test_broken_streak(self):
        logs = [_log("a", datetime(2024, 3, 7, 7))]
        assert calculate_streak(logs, TODAY) == 0

    def test_same_day_counts_once(self):
        logs = [_log("a", datetime(2024, 3, 10, 7)), _log("b", datetime(2024, 3, 10, 19))]
        assert calculate_streak(logs, TODAY) == 1


class TestComputeStats:
    """Tests for compute_stats."""

    def test_empty(self):
        stats = compute_stats([], TODAY)

        assert stats.total_workouts == 0
        assert stats.avg_rating is None
        assert stats.last_workout_at is None

    def test_totals(self):
        logs = [
            _log("a", datetime(2024, 3, 10, 7), minutes=30, rating=5),
            _log("b", datetime(2024, 3, 9, 7), minutes=25, rating=4),
            _log("c", datetime(2024, 3, 8, 7), minutes=20, rating=4),
            _log("d", datetime(2024, 3, 1, 7), minutes=45),
        ]
        stats = compute_stats(logs, TODAY)

        assert stats.total_workouts == 4
        assert stats.total_minutes == 120
        assert stats.avg_rating == 4.3
        assert stats.last_workout_at == datetime(2024, 3, 10, 7)
        assert stats.current_streak == 3
        assert stats.to_dict()["last_workout_at"] == "2024-03-10T07:00:00"


def test_summarize_logs():
    items = summarize_logs([_log("a", datetime(2024, 3, 10, 7), rating=3)])

    assert items[0].id == "a"
    assert items[0].goal == "endurance"
    assert items[0].exercise_count == 0
    assert items[0].to_dict()["rating"] == 3
