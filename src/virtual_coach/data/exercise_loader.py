"""Exercise library loader from JSON."""

import json
import logging
from pathlib import Path

from ..db.engine import get_data_dir, get_db_path
from ..db.repositories import ExerciseRepository
from ..models.exercises import Exercise

logger = logging.getLogger(__name__)

EXERCISES_FILENAME = "exercises.json"


def get_exercises_json_path(data_dir: Path | None = None) -> Path:
    """Get the path to the exercise catalog JSON file."""
    return (data_dir or get_data_dir()) / EXERCISES_FILENAME


def load_exercises_json(path: Path) -> list[Exercise]:
    """Load exercises from a JSON catalog of the form {"exercises": [...]}.

    Invalid entries are skipped with a warning. A missing file yields an
    empty list.
    """
    if not path.exists():
        return []

    with open(path) as f:
        data = json.load(f)

    exercises = []
    for ex_data in data.get("exercises", []):
        try:
            exercises.append(Exercise.from_dict(ex_data, id=None))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(
                "Skipping invalid exercise %s: %s", ex_data.get("name", "unknown"), e
            )

    return exercises


async def seed_exercises_from_json(db_path: Path | None = None, path: Path | None = None) -> int:
    """Seed the database from a JSON catalog.

    Existing exercises with the same name are updated in place.

    Args:
        db_path: Optional database path. Uses default if not provided.
        path: Catalog file. Defaults to exercises.json in the data dir.

    Returns:
        Number of exercises seeded
    """
    if db_path is None:
        db_path = get_db_path()
    if path is None:
        path = get_exercises_json_path()

    exercises = load_exercises_json(path)
    repo = ExerciseRepository(db_path)
    for exercise in exercises:
        await repo.upsert(exercise)

    logger.info("Seeded %d exercises from %s", len(exercises), path)
    return len(exercises)
