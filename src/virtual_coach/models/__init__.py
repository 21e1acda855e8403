"""Data models for virtual-coach."""

from .exercises import DEFAULT_EXERCISES, DifficultyLevel, Exercise, MuscleGroup
from .plan import WorkoutPlan, WorkoutPlanItem
from .preferences import TrainingGoal, UserPreferences
from .workout_log import (
    ExerciseFeedback,
    ExerciseLogEntry,
    WorkoutLog,
    WorkoutLogInput,
    WorkoutLogListItem,
    WorkoutLogUpdate,
    WorkoutSettings,
    WorkoutStats,
)

__all__ = [
    "DEFAULT_EXERCISES",
    "DifficultyLevel",
    "Exercise",
    "ExerciseFeedback",
    "ExerciseLogEntry",
    "MuscleGroup",
    "TrainingGoal",
    "UserPreferences",
    "WorkoutLog",
    "WorkoutLogInput",
    "WorkoutLogListItem",
    "WorkoutLogUpdate",
    "WorkoutPlan",
    "WorkoutPlanItem",
    "WorkoutSettings",
    "WorkoutStats",
]
