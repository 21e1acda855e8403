"""Exercise catalog definitions."""

from dataclasses import dataclass
from enum import Enum


class MuscleGroup(str, Enum):
    """Target muscle groups."""

    LEGS = "legs"
    CHEST = "chest"
    CORE = "core"
    BACK = "back"
    SHOULDERS = "shoulders"
    ARMS = "arms"
    FULL_BODY = "full_body"


class DifficultyLevel(str, Enum):
    """Exercise difficulty, ordered from easiest to hardest."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @classmethod
    def ordered(cls) -> list["DifficultyLevel"]:
        return [cls.BEGINNER, cls.INTERMEDIATE, cls.ADVANCED]

    def adjacent(self) -> list["DifficultyLevel"]:
        """Return this level plus its direct neighbours (no wraparound)."""
        levels = self.ordered()
        index = levels.index(self)
        allowed = [self]
        if index > 0:
            allowed.append(levels[index - 1])
        if index < len(levels) - 1:
            allowed.append(levels[index + 1])
        return allowed


@dataclass(frozen=True)
class Exercise:
    """A catalog entry. Immutable once loaded."""

    name: str
    target_muscle: MuscleGroup
    difficulty_level: DifficultyLevel
    duration_seconds: int  # Nominal duration, used as the playback timer
    description: str = ""
    equipment_needed: str | None = None  # None means no equipment required
    video_url: str = ""
    calories_per_minute: float | None = None
    is_active: bool = True
    priority_weight: int = 0
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "target_muscle": self.target_muscle.value,
            "difficulty_level": self.difficulty_level.value,
            "equipment_needed": self.equipment_needed,
            "video_url": self.video_url,
            "duration_seconds": self.duration_seconds,
            "calories_per_minute": self.calories_per_minute,
            "is_active": self.is_active,
            "priority_weight": self.priority_weight,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "Exercise":
        """Create from dictionary."""
        return cls(
            id=id if id is not None else data.get("id"),
            name=data["name"],
            description=data.get("description") or "",
            target_muscle=MuscleGroup(data["target_muscle"]),
            difficulty_level=DifficultyLevel(data["difficulty_level"]),
            equipment_needed=data.get("equipment_needed") or None,
            video_url=data.get("video_url") or "",
            duration_seconds=int(data.get("duration_seconds", 0)),
            calories_per_minute=data.get("calories_per_minute"),
            is_active=bool(data.get("is_active", True)),
            priority_weight=int(data.get("priority_weight", 0)),
        )


# Built-in catalog, used to seed the database and as the fallback
# whenever the stored catalog is unavailable.
DEFAULT_EXERCISES: list[Exercise] = [
    # Legs
    Exercise(
        id=1,
        name="Squat",
        description="Classic lower body movement that strengthens the legs.",
        target_muscle=MuscleGroup.LEGS,
        difficulty_level=DifficultyLevel.BEGINNER,
        duration_seconds=45,
        calories_per_minute=8.5,
        priority_weight=10,
    ),
    Exercise(
        id=2,
        name="Reverse Lunge",
        description="Step back into a lunge, alternating legs.",
        target_muscle=MuscleGroup.LEGS,
        difficulty_level=DifficultyLevel.BEGINNER,
        duration_seconds=40,
        calories_per_minute=7.5,
        priority_weight=8,
    ),
    Exercise(
        id=3,
        name="Goblet Squat",
        description="Squat holding a dumbbell at chest height.",
        target_muscle=MuscleGroup.LEGS,
        difficulty_level=DifficultyLevel.INTERMEDIATE,
        equipment_needed="dumbbell",
        duration_seconds=45,
        calories_per_minute=9.0,
        priority_weight=7,
    ),
    Exercise(
        id=4,
        name="Jump Squat",
        description="Explosive squat finishing with a jump.",
        target_muscle=MuscleGroup.LEGS,
        difficulty_level=DifficultyLevel.ADVANCED,
        duration_seconds=30,
        calories_per_minute=11.0,
        priority_weight=6,
    ),
    # Chest
    Exercise(
        id=5,
        name="Push Up",
        description="Compound movement for the chest, shoulders and arms.",
        target_muscle=MuscleGroup.CHEST,
        difficulty_level=DifficultyLevel.BEGINNER,
        duration_seconds=40,
        calories_per_minute=7.0,
        priority_weight=9,
    ),
    Exercise(
        id=6,
        name="Dumbbell Bench Press",
        description="Press a pair of dumbbells from a flat bench.",
        target_muscle=MuscleGroup.CHEST,
        difficulty_level=DifficultyLevel.INTERMEDIATE,
        equipment_needed="dumbbell",
        duration_seconds=45,
        calories_per_minute=6.0,
        priority_weight=8,
    ),
    Exercise(
        id=7,
        name="Decline Push Up",
        description="Push up with the feet raised on a bench.",
        target_muscle=MuscleGroup.CHEST,
        difficulty_level=DifficultyLevel.ADVANCED,
        duration_seconds=40,
        calories_per_minute=8.0,
        priority_weight=5,
    ),
    # Core
    Exercise(
        id=8,
        name="Plank",
        description="Foundational core hold.",
        target_muscle=MuscleGroup.CORE,
        difficulty_level=DifficultyLevel.BEGINNER,
        duration_seconds=60,
        calories_per_minute=5.0,
        priority_weight=8,
    ),
    Exercise(
        id=9,
        name="Bicycle Crunch",
        description="Alternating elbow-to-knee crunch.",
        target_muscle=MuscleGroup.CORE,
        difficulty_level=DifficultyLevel.INTERMEDIATE,
        duration_seconds=45,
        calories_per_minute=6.5,
        priority_weight=6,
    ),
    Exercise(
        id=10,
        name="Hanging Leg Raise",
        description="Raise straight legs while hanging from a bar.",
        target_muscle=MuscleGroup.CORE,
        difficulty_level=DifficultyLevel.ADVANCED,
        equipment_needed="pull_up_bar",
        duration_seconds=30,
        calories_per_minute=7.0,
        priority_weight=5,
    ),
    # Back
    Exercise(
        id=11,
        name="Superman Hold",
        description="Lift arms and legs off the floor while lying face down.",
        target_muscle=MuscleGroup.BACK,
        difficulty_level=DifficultyLevel.BEGINNER,
        duration_seconds=40,
        calories_per_minute=4.5,
        priority_weight=6,
    ),
    Exercise(
        id=12,
        name="Pull Up",
        description="Classic vertical pull for the back.",
        target_muscle=MuscleGroup.BACK,
        difficulty_level=DifficultyLevel.INTERMEDIATE,
        equipment_needed="pull_up_bar",
        duration_seconds=30,
        calories_per_minute=9.0,
        priority_weight=9,
    ),
    Exercise(
        id=13,
        name="One Arm Dumbbell Row",
        description="Row a dumbbell with one arm braced on a bench.",
        target_muscle=MuscleGroup.BACK,
        difficulty_level=DifficultyLevel.INTERMEDIATE,
        equipment_needed="dumbbell",
        duration_seconds=45,
        calories_per_minute=6.0,
        priority_weight=7,
    ),
    # Shoulders
    Exercise(
        id=14,
        name="Pike Push Up",
        description="Push up with hips raised to load the shoulders.",
        target_muscle=MuscleGroup.SHOULDERS,
        difficulty_level=DifficultyLevel.INTERMEDIATE,
        duration_seconds=40,
        calories_per_minute=6.5,
        priority_weight=6,
    ),
    Exercise(
        id=15,
        name="Shoulder Press",
        description="Press dumbbells overhead.",
        target_muscle=MuscleGroup.SHOULDERS,
        difficulty_level=DifficultyLevel.INTERMEDIATE,
        equipment_needed="dumbbell",
        duration_seconds=45,
        calories_per_minute=6.5,
        priority_weight=7,
    ),
    Exercise(
        id=16,
        name="Lateral Raise",
        description="Raise dumbbells out to the sides.",
        target_muscle=MuscleGroup.SHOULDERS,
        difficulty_level=DifficultyLevel.BEGINNER,
        equipment_needed="dumbbell",
        duration_seconds=40,
        calories_per_minute=5.0,
        priority_weight=5,
    ),
    # Arms
    Exercise(
        id=17,
        name="Biceps Curl",
        description="Curl dumbbells to train the biceps.",
        target_muscle=MuscleGroup.ARMS,
        difficulty_level=DifficultyLevel.BEGINNER,
        equipment_needed="dumbbell",
        duration_seconds=40,
        calories_per_minute=5.5,
        priority_weight=6,
    ),
    Exercise(
        id=18,
        name="Bench Dip",
        description="Triceps dip from the edge of a bench.",
        target_muscle=MuscleGroup.ARMS,
        difficulty_level=DifficultyLevel.BEGINNER,
        duration_seconds=40,
        calories_per_minute=6.0,
        priority_weight=5,
    ),
    # Full body
    Exercise(
        id=19,
        name="Burpee",
        description="Squat, plank, push up and jump in one flowing movement.",
        target_muscle=MuscleGroup.FULL_BODY,
        difficulty_level=DifficultyLevel.ADVANCED,
        duration_seconds=30,
        calories_per_minute=12.0,
        priority_weight=8,
    ),
    Exercise(
        id=20,
        name="Mountain Climber",
        description="Drive the knees toward the chest from a plank.",
        target_muscle=MuscleGroup.FULL_BODY,
        difficulty_level=DifficultyLevel.INTERMEDIATE,
        duration_seconds=40,
        calories_per_minute=10.0,
        priority_weight=7,
    ),
]
