"""User workout preferences."""

from dataclasses import dataclass
from enum import Enum

from ..config import MAX_AVAILABLE_MINUTES, MIN_AVAILABLE_MINUTES
from .exercises import DifficultyLevel, MuscleGroup


class TrainingGoal(str, Enum):
    """Primary training goal for a session."""

    MUSCLE_GAIN = "muscle_gain"
    WEIGHT_LOSS = "weight_loss"
    ENDURANCE = "endurance"


def parse_goal(value: str) -> TrainingGoal | str:
    """Return the matching TrainingGoal, or the raw string if unrecognised."""
    try:
        return TrainingGoal(value)
    except ValueError:
        return value


def goal_value(goal: TrainingGoal | str) -> str:
    return goal.value if isinstance(goal, TrainingGoal) else str(goal)


def _parse_equipment(value) -> list[str] | None:
    """Equipment must arrive as a list of names; a bare string is rejected."""
    if value is None:
        return None
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValueError("equipment_available must be a list of equipment names")
    return [str(item) for item in value]


@dataclass
class UserPreferences:
    """Preferences collected by the preference form for one session.

    The plan generator trusts these values; call validate() at the edges
    (CLI, API) before handing them over.
    """

    training_goal: TrainingGoal | str
    target_muscles: list[MuscleGroup]
    difficulty_level: DifficultyLevel
    available_minutes: int = 30
    equipment_available: list[str] | None = None  # None or empty means no constraint

    def validate(
        self,
        min_minutes: int = MIN_AVAILABLE_MINUTES,
        max_minutes: int = MAX_AVAILABLE_MINUTES,
    ) -> list[str]:
        """Return a list of form-level problems (empty when valid)."""
        problems = []
        if not self.target_muscles:
            problems.append("Select at least one target muscle group")
        if not min_minutes <= self.available_minutes <= max_minutes:
            problems.append(
                f"Available time must be between {min_minutes} and {max_minutes} minutes"
            )
        return problems

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "training_goal": goal_value(self.training_goal),
            "target_muscles": [m.value for m in self.target_muscles],
            "difficulty_level": self.difficulty_level.value,
            "available_minutes": self.available_minutes,
            "equipment_available": (
                list(self.equipment_available)
                if self.equipment_available is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserPreferences":
        """Create from dictionary."""
        return cls(
            training_goal=parse_goal(data["training_goal"]),
            target_muscles=[MuscleGroup(m) for m in data["target_muscles"]],
            difficulty_level=DifficultyLevel(data["difficulty_level"]),
            available_minutes=int(data.get("available_minutes", 30)),
            equipment_available=_parse_equipment(data.get("equipment_available")),
        )
