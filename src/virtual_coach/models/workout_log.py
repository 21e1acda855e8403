"""Workout log data models.

A workout log is the persisted snapshot of one finished training session.
It is created once when the session completes and may later be updated a
single time with a rating and notes.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .preferences import UserPreferences, goal_value

GUEST_USER_ID = "guest"
MIN_RATING = 1
MAX_RATING = 5


class ExerciseFeedback(str, Enum):
    """How an exercise felt to the user."""

    TOO_EASY = "too_easy"
    JUST_RIGHT = "just_right"
    TOO_HARD = "too_hard"


def validate_rating(rating: int | None) -> None:
    """Raise ValueError unless rating is None or a whole number within 1-5."""
    if rating is None:
        return
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValueError(f"Rating must be a whole number, got {rating!r}")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValueError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")


def _parse_datetime(value: str | datetime | None) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def _format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


@dataclass
class ExerciseLogEntry:
    """Execution record for a single exercise of the session."""

    name: str
    planned_duration: int  # seconds
    actual_duration: int  # seconds
    completed: bool
    exercise_id: int | None = None
    feedback: ExerciseFeedback | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "exercise_id": self.exercise_id,
            "planned_duration": self.planned_duration,
            "actual_duration": self.actual_duration,
            "completed": self.completed,
            "feedback": self.feedback.value if self.feedback else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseLogEntry":
        feedback = data.get("feedback")
        return cls(
            name=data["name"],
            exercise_id=data.get("exercise_id"),
            planned_duration=data["planned_duration"],
            actual_duration=data["actual_duration"],
            completed=data["completed"],
            feedback=ExerciseFeedback(feedback) if feedback else None,
        )


@dataclass
class WorkoutSettings:
    """Snapshot of the preferences a session was generated from."""

    goal: str
    difficulty: str
    equipment: list[str]
    planned_duration: int  # minutes

    def to_dict(self) -> dict:
        return {
            "goal": self.goal,
            "difficulty": self.difficulty,
            "equipment": self.equipment,
            "planned_duration": self.planned_duration,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutSettings":
        return cls(
            goal=data["goal"],
            difficulty=data["difficulty"],
            equipment=data.get("equipment", []),
            planned_duration=data["planned_duration"],
        )

    @classmethod
    def from_preferences(cls, prefs: UserPreferences) -> "WorkoutSettings":
        """Build the settings snapshot from session preferences."""
        return cls(
            goal=goal_value(prefs.training_goal),
            difficulty=prefs.difficulty_level.value,
            equipment=list(prefs.equipment_available or []),
            planned_duration=prefs.available_minutes,
        )


@dataclass
class WorkoutLogInput:
    """Data needed to create a workout log (no generated fields)."""

    started_at: datetime
    completed_at: datetime
    duration_minutes: int
    settings: WorkoutSettings
    exercises: list[ExerciseLogEntry]
    rating: int | None = None
    notes: str | None = None

    def __post_init__(self):
        validate_rating(self.rating)

    def to_dict(self) -> dict:
        return {
            "started_at": _format_datetime(self.started_at),
            "completed_at": _format_datetime(self.completed_at),
            "duration_minutes": self.duration_minutes,
            "settings": self.settings.to_dict(),
            "exercises": [e.to_dict() for e in self.exercises],
            "rating": self.rating,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutLogInput":
        return cls(
            started_at=_parse_datetime(data["started_at"]),
            completed_at=_parse_datetime(data["completed_at"]),
            duration_minutes=data["duration_minutes"],
            settings=WorkoutSettings.from_dict(data["settings"]),
            exercises=[ExerciseLogEntry.from_dict(e) for e in data["exercises"]],
            rating=data.get("rating"),
            notes=data.get("notes"),
        )


@dataclass
class WorkoutLogUpdate:
    """Post-session feedback. Only rating and notes may change."""

    rating: int | None = None
    notes: str | None = None

    def __post_init__(self):
        validate_rating(self.rating)


@dataclass
class WorkoutLog:
    """A persisted workout session."""

    id: str
    user_id: str
    started_at: datetime
    completed_at: datetime
    duration_minutes: int
    settings: WorkoutSettings
    exercises: list[ExerciseLogEntry]
    rating: int | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_input(
        cls,
        log_id: str,
        user_id: str,
        log_input: WorkoutLogInput,
        now: datetime | None = None,
    ) -> "WorkoutLog":
        now = now or datetime.now()
        return cls(
            id=log_id,
            user_id=user_id,
            started_at=log_input.started_at,
            completed_at=log_input.completed_at,
            duration_minutes=log_input.duration_minutes,
            settings=log_input.settings,
            exercises=list(log_input.exercises),
            rating=log_input.rating,
            notes=log_input.notes,
            created_at=now,
            updated_at=now,
        )

    def to_input(self) -> WorkoutLogInput:
        """The session data without store-generated fields."""
        return WorkoutLogInput(
            started_at=self.started_at,
            completed_at=self.completed_at,
            duration_minutes=self.duration_minutes,
            settings=self.settings,
            exercises=list(self.exercises),
            rating=self.rating,
            notes=self.notes,
        )

    def apply_update(self, update: WorkoutLogUpdate, now: datetime | None = None) -> None:
        """Apply rating/notes feedback in place."""
        if update.rating is not None:
            self.rating = update.rating
        if update.notes is not None:
            self.notes = update.notes
        self.updated_at = now or datetime.now()

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "started_at": _format_datetime(self.started_at),
            "completed_at": _format_datetime(self.completed_at),
            "duration_minutes": self.duration_minutes,
            "settings": self.settings.to_dict(),
            "exercises": [e.to_dict() for e in self.exercises],
            "rating": self.rating,
            "notes": self.notes,
            "created_at": _format_datetime(self.created_at),
            "updated_at": _format_datetime(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutLog":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            started_at=_parse_datetime(data["started_at"]),
            completed_at=_parse_datetime(data["completed_at"]),
            duration_minutes=data["duration_minutes"],
            settings=WorkoutSettings.from_dict(data["settings"]),
            exercises=[ExerciseLogEntry.from_dict(e) for e in data.get("exercises", [])],
            rating=data.get("rating"),
            notes=data.get("notes"),
            created_at=_parse_datetime(data.get("created_at")),
            updated_at=_parse_datetime(data.get("updated_at")),
        )


@dataclass
class WorkoutLogListItem:
    """Condensed log entry for history listings."""

    id: str
    started_at: datetime
    duration_minutes: int
    goal: str
    exercise_count: int
    rating: int | None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "started_at": _format_datetime(self.started_at),
            "duration_minutes": self.duration_minutes,
            "goal": self.goal,
            "exercise_count": self.exercise_count,
            "rating": self.rating,
        }


@dataclass
class WorkoutStats:
    """Aggregate training statistics for a dashboard."""

    total_workouts: int = 0
    total_minutes: int = 0
    avg_rating: float | None = None
    last_workout_at: datetime | None = None
    current_streak: int = 0

    def to_dict(self) -> dict:
        return {
            "total_workouts": self.total_workouts,
            "total_minutes": self.total_minutes,
            "avg_rating": self.avg_rating,
            "last_workout_at": _format_datetime(self.last_workout_at),
            "current_streak": self.current_streak,
        }

