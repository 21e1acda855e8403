"""Workout plan data models."""

import math
from dataclasses import dataclass, field
from datetime import datetime

from .exercises import Exercise
from .preferences import UserPreferences, goal_value

# Timing assumptions used to estimate how long an exercise takes
SECONDS_PER_REP = 3
REST_BETWEEN_SETS_SECONDS = 30
DEFAULT_REST_SECONDS = 15  # Rest after each exercise except the last


def exercise_time_seconds(
    sets: int,
    reps: int,
    rest_seconds: int,
    seconds_per_rep: int = SECONDS_PER_REP,
    rest_between_sets: int = REST_BETWEEN_SETS_SECONDS,
) -> int:
    """Estimated seconds for one scheduled exercise, including rest after it."""
    return (reps * seconds_per_rep + rest_between_sets) * sets + rest_seconds


def round_minutes(total_seconds: int) -> int:
    """Convert seconds to whole minutes, rounding halves up."""
    return math.floor(total_seconds / 60 + 0.5)


@dataclass
class WorkoutPlanItem:
    """One scheduled exercise within a plan."""

    exercise: Exercise
    sets: int
    reps: int
    rest_seconds: int = DEFAULT_REST_SECONDS

    @property
    def total_seconds(self) -> int:
        """Estimated time for all sets plus the rest that follows."""
        return exercise_time_seconds(self.sets, self.reps, self.rest_seconds)

    @property
    def planned_seconds(self) -> int:
        """Length of the playback countdown for this item."""
        return max(self.exercise.duration_seconds, 0)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "exercise": self.exercise.to_dict(),
            "sets": self.sets,
            "reps": self.reps,
            "rest_seconds": self.rest_seconds,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutPlanItem":
        """Create from dictionary."""
        return cls(
            exercise=Exercise.from_dict(data["exercise"]),
            sets=data["sets"],
            reps=data["reps"],
            rest_seconds=data.get("rest_seconds", DEFAULT_REST_SECONDS),
        )


def calculate_total_duration(
    items: list[WorkoutPlanItem],
    seconds_per_rep: int = SECONDS_PER_REP,
    rest_between_sets: int = REST_BETWEEN_SETS_SECONDS,
) -> int:
    """Estimated plan length in minutes, recomputed from the items."""
    return round_minutes(
        sum(
            exercise_time_seconds(
                item.sets,
                item.reps,
                item.rest_seconds,
                seconds_per_rep=seconds_per_rep,
                rest_between_sets=rest_between_sets,
            )
            for item in items
        )
    )


@dataclass
class WorkoutPlan:
    """A generated workout plan. Read-only once created."""

    id: str
    preferences: UserPreferences
    exercises: list[WorkoutPlanItem]
    estimated_duration_minutes: int
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def total_exercises(self) -> int:
        return len(self.exercises)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "preferences": self.preferences.to_dict(),
            "exercises": [item.to_dict() for item in self.exercises],
            "estimated_duration_minutes": self.estimated_duration_minutes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutPlan":
        """Create from dictionary."""
        created_at = (
            datetime.fromisoformat(data["created_at"])
            if data.get("created_at")
            else datetime.now()
        )
        return cls(
            id=data["id"],
            created_at=created_at,
            preferences=UserPreferences.from_dict(data["preferences"]),
            exercises=[WorkoutPlanItem.from_dict(item) for item in data["exercises"]],
            estimated_duration_minutes=data["estimated_duration_minutes"],
        )

    def get_summary(self) -> str:
        """Generate a human readable summary of the plan."""
        prefs = self.preferences
        summary = f"Workout plan {self.id[:8]}\n"
        summary += f"Goal: {goal_value(prefs.training_goal)}\n"
        summary += f"Difficulty: {prefs.difficulty_level.value}\n"
        summary += f"Target muscles: {', '.join(m.value for m in prefs.target_muscles)}\n"
        summary += (
            f"Estimated duration: {self.estimated_duration_minutes} min "
            f"({self.total_exercises} exercises)\n\n"
        )

        for i, item in enumerate(self.exercises, 1):
            summary += f"  {i}. {item.exercise.name}: {item.sets}x{item.reps}"
            if item.rest_seconds:
                summary += f", rest {item.rest_seconds}s"
            summary += "\n"

        return summary
