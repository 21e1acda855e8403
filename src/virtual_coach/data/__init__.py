"""Exercise catalog loading and caching."""

from .catalog import ExerciseCache, ExerciseCatalog
from .exercise_loader import load_exercises_json, seed_exercises_from_json

__all__ = [
    "ExerciseCache",
    "ExerciseCatalog",
    "load_exercises_json",
    "seed_exercises_from_json",
]
