"""Database layer for virtual-coach."""

from .base import WorkoutLogSink, get_log_sink, migrate_guest_logs
from .engine import get_db_path, init_db, seed_exercises
from .local_store import LocalWorkoutLogStore
from .repositories import ExerciseRepository, WorkoutLogRepository

__all__ = [
    "ExerciseRepository",
    "get_db_path",
    "get_log_sink",
    "init_db",
    "LocalWorkoutLogStore",
    "migrate_guest_logs",
    "seed_exercises",
    "WorkoutLogRepository",
    "WorkoutLogSink",
]
