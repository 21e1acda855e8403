"""Data access layer for virtual-coach."""

import json
import logging
from datetime import datetime
from pathlib import Path
from uuid import uuid4

import aiosqlite

from ..models.exercises import Exercise
from ..models.workout_log import (
    ExerciseLogEntry,
    WorkoutLog,
    WorkoutLogInput,
    WorkoutLogListItem,
    WorkoutLogUpdate,
    WorkoutSettings,
)
from .engine import get_db_path

logger = logging.getLogger(__name__)


class ExerciseRepository:
    """Repository for the exercise catalog."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def upsert(self, exercise: Exercise) -> int:
        """Insert an exercise, or update the existing one with the same name."""
        data = exercise.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO exercises
                (name, description, target_muscle, difficulty_level, equipment_needed,
                 video_url, duration_seconds, calories_per_minute, is_active, priority_weight)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(name) DO UPDATE SET
                    description = excluded.description,
                    target_muscle = excluded.target_muscle,
                    difficulty_level = excluded.difficulty_level,
                    equipment_needed = excluded.equipment_needed,
                    video_url = excluded.video_url,
                    duration_seconds = excluded.duration_seconds,
                    calories_per_minute = excluded.calories_per_minute,
                    is_active = excluded.is_active,
                    priority_weight = excluded.priority_weight
                """,
                (
                    data["name"],
                    data["description"],
                    data["target_muscle"],
                    data["difficulty_level"],
                    data["equipment_needed"],
                    data["video_url"],
                    data["duration_seconds"],
                    data["calories_per_minute"],
                    1 if data["is_active"] else 0,
                    data["priority_weight"],
                ),
            )
            await db.commit()
            cursor = await db.execute(
                "SELECT id FROM exercises WHERE name = ?", (data["name"],)
            )
            row = await cursor.fetchone()
            return row[0]

    async def get(self, exercise_id: int) -> Exercise | None:
        """Get an exercise by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE id = ?", (exercise_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    async def get_all_active(self) -> list[Exercise]:
        """Get all active exercises, highest priority first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM exercises
                WHERE is_active = 1
                ORDER BY priority_weight DESC, name
                """
            )
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    async def list_all(self) -> list[Exercise]:
        """List every exercise, including inactive ones."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM exercises ORDER BY name")
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    async def set_active(self, exercise_id: int, active: bool) -> None:
        """Enable or disable an exercise."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "UPDATE exercises SET is_active = ? WHERE id = ?",
                (1 if active else 0, exercise_id),
            )
            await db.commit()

    def _row_to_exercise(self, row: aiosqlite.Row) -> Exercise:
        """Convert a database row to an Exercise."""
        data = {
            "name": row["name"],
            "description": row["description"],
            "target_muscle": row["target_muscle"],
            "difficulty_level": row["difficulty_level"],
            "equipment_needed": row["equipment_needed"],
            "video_url": row["video_url"],
            "duration_seconds": row["duration_seconds"],
            "calories_per_minute": row["calories_per_minute"],
            "is_active": bool(row["is_active"]),
            "priority_weight": row["priority_weight"],
        }
        return Exercise.from_dict(data, id=row["id"])


class WorkoutLogRepository:
    """Workout log store for signed-in members."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, user_id: str | None, log_input: WorkoutLogInput) -> WorkoutLog:
        """Persist a completed session."""
        if not user_id:
            raise ValueError("A user ID is required to store member workout logs")

        log = WorkoutLog.from_input(str(uuid4()), user_id, log_input)
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO workout_logs
                (id, user_id, started_at, completed_at, duration_minutes, settings,
                 exercises, rating, notes, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    log.id,
                    log.user_id,
                    log.started_at.isoformat(),
                    log.completed_at.isoformat(),
                    log.duration_minutes,
                    json.dumps(log.settings.to_dict()),
                    json.dumps([e.to_dict() for e in log.exercises]),
                    log.rating,
                    log.notes,
                    log.created_at.isoformat(),
                    log.updated_at.isoformat(),
                ),
            )
            await db.commit()

        logger.info("Stored workout log %s for user %s", log.id, user_id)
        return log

    async def get(self, log_id: str, user_id: str | None) -> WorkoutLog | None:
        """Get one of a user's workout logs."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workout_logs WHERE id = ? AND user_id = ?",
                (log_id, user_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_log(row)

    async def update(
        self, log_id: str, user_id: str | None, update: WorkoutLogUpdate
    ) -> WorkoutLog | None:
        """Add rating and notes to a log. Returns None if it does not exist."""
        log = await self.get(log_id, user_id)
        if log is None:
            return None

        log.apply_update(update)
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE workout_logs SET rating = ?, notes = ?, updated_at = ?
                WHERE id = ? AND user_id = ?
                """,
                (log.rating, log.notes, log.updated_at.isoformat(), log_id, user_id),
            )
            await db.commit()
        return log

    async def list_all(self, user_id: str | None) -> list[WorkoutLog]:
        """All of a user's logs, newest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workout_logs WHERE user_id = ? ORDER BY started_at DESC",
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    async def list_logs(
        self, user_id: str | None, limit: int = 20, offset: int = 0
    ) -> list[WorkoutLogListItem]:
        """A page of a user's history, newest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM workout_logs WHERE user_id = ?
                ORDER BY started_at DESC LIMIT ? OFFSET ?
                """,
                (user_id, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_list_item(row) for row in rows]

    async def delete(self, log_id: str, user_id: str | None) -> bool:
        """Delete a log. Returns False if the user has no such log."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM workout_logs WHERE id = ? AND user_id = ?",
                (log_id, user_id),
            )
            await db.commit()
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Deleted workout log %s for user %s", log_id, user_id)
        return deleted

    def _row_to_log(self, row: aiosqlite.Row) -> WorkoutLog:
        """Convert a database row to a WorkoutLog."""
        return WorkoutLog(
            id=row["id"],
            user_id=row["user_id"],
            started_at=datetime.fromisoformat(row["started_at"]),
            completed_at=datetime.fromisoformat(row["completed_at"]),
            duration_minutes=row["duration_minutes"],
            settings=WorkoutSettings.from_dict(json.loads(row["settings"])),
            exercises=[ExerciseLogEntry.from_dict(e) for e in json.loads(row["exercises"])],
            rating=row["rating"],
            notes=row["notes"],
            created_at=datetime.fromisoformat(row["created_at"]) if row["created_at"] else None,
            updated_at=datetime.fromisoformat(row["updated_at"]) if row["updated_at"] else None,
        )

    def _row_to_list_item(self, row: aiosqlite.Row) -> WorkoutLogListItem:
        settings = json.loads(row["settings"]) if row["settings"] else {}
        exercises = json.loads(row["exercises"]) if row["exercises"] else []
        return WorkoutLogListItem(
            id=row["id"],
            started_at=datetime.fromisoformat(row["started_at"]),
            duration_minutes=row["duration_minutes"],
            goal=settings.get("goal", "unknown"),
            exercise_count=len(exercises),
            rating=row["rating"],
        )
