"""Database engine setup and initialization."""

import logging
from pathlib import Path

import aiosqlite

from ..config import load_settings

logger = logging.getLogger(__name__)

DB_FILENAME = "virtual_coach.db"


def get_data_dir() -> Path:
    """Get the configured data directory."""
    return load_settings().data_dir


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / DB_FILENAME


async def _run_migrations(db: aiosqlite.Connection) -> None:
    """Run database migrations for schema updates."""
    cursor = await db.execute("PRAGMA table_info(exercises)")
    columns = await cursor.fetchall()
    column_names = {col[1] for col in columns}

    # Catalogs created before calorie tracking
    if "calories_per_minute" not in column_names:
        await db.execute("ALTER TABLE exercises ADD COLUMN calories_per_minute REAL")

    await db.commit()


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Exercise catalog
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT UNIQUE NOT NULL,
                description TEXT DEFAULT '',
                target_muscle TEXT NOT NULL,
                difficulty_level TEXT NOT NULL,
                equipment_needed TEXT,
                video_url TEXT DEFAULT '',
                duration_seconds INTEGER NOT NULL,
                calories_per_minute REAL,
                is_active INTEGER DEFAULT 1,
                priority_weight INTEGER DEFAULT 0
            )
        """)

        # Completed training sessions (member accounts)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_logs (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                started_at TIMESTAMP NOT NULL,
                completed_at TIMESTAMP NOT NULL,
                duration_minutes INTEGER NOT NULL,
                settings TEXT NOT NULL,
                exercises TEXT NOT NULL DEFAULT '[]',
                rating INTEGER,
                notes TEXT,
                created_at TIMESTAMP,
                updated_at TIMESTAMP
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercises_active_priority
            ON exercises(is_active, priority_weight)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_logs_user_started
            ON workout_logs(user_id, started_at)
        """)

        await db.commit()

        # Run migrations for existing databases
        await _run_migrations(db)

    logger.info("Database initialized at %s", db_path)


async def seed_exercises(db_path: Path | None = None) -> int:
    """Seed the database with the built-in exercise catalog."""
    from ..models.exercises import DEFAULT_EXERCISES
    from .repositories import ExerciseRepository

    repo = ExerciseRepository(db_path)
    for exercise in DEFAULT_EXERCISES:
        await repo.upsert(exercise)
    return len(DEFAULT_EXERCISES)
