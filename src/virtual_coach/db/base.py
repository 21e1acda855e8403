"""Workout log sink protocol and selection."""

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..models.workout_log import (
    WorkoutLog,
    WorkoutLogInput,
    WorkoutLogListItem,
    WorkoutLogUpdate,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class WorkoutLogSink(Protocol):
    """Where finished sessions are written.

    Members write to the SQLite database, guests to a local JSON file.
    Callers pick a sink with get_log_sink() and never branch on the kind.
    """

    async def create(self, user_id: str | None, log_input: WorkoutLogInput) -> WorkoutLog:
        """Persist a finished session and return the stored log."""
        ...

    async def update(
        self, log_id: str, user_id: str | None, update: WorkoutLogUpdate
    ) -> WorkoutLog | None:
        """Attach rating/notes. Returns None for an unknown log."""
        ...

    async def get(self, log_id: str, user_id: str | None) -> WorkoutLog | None:
        ...

    async def delete(self, log_id: str, user_id: str | None) -> bool:
        """Remove a log. Returns False for an unknown log."""
        ...

    async def list_logs(
        self, user_id: str | None, limit: int = 20, offset: int = 0
    ) -> list[WorkoutLogListItem]:
        ...

    async def list_all(self, user_id: str | None) -> list[WorkoutLog]:
        ...


def get_log_sink(
    user_id: str | None,
    db_path: Path | None = None,
    data_dir: Path | None = None,
) -> WorkoutLogSink:
    """Select the log sink for a user.

    Args:
        user_id: Member ID, or None for a guest
        db_path: SQLite file for member logs
        data_dir: Directory holding the guest JSON file
    """
    from .local_store import LocalWorkoutLogStore
    from .repositories import WorkoutLogRepository

    if user_id:
        return WorkoutLogRepository(db_path)
    return LocalWorkoutLogStore(data_dir)


async def migrate_guest_logs(
    user_id: str,
    db_path: Path | None = None,
    data_dir: Path | None = None,
) -> int:
    """Move the guest history on this machine into a member's history.

    Logs are copied oldest first with their ratings and notes, then the
    guest file is removed. Returns the number of logs moved.
    """
    from .local_store import LocalWorkoutLogStore
    from .repositories import WorkoutLogRepository

    if not user_id:
        raise ValueError("A user ID is required to migrate guest workout logs")

    guest_store = LocalWorkoutLogStore(data_dir)
    member_repo = WorkoutLogRepository(db_path)

    guest_logs = await guest_store.list_all()
    for log in reversed(guest_logs):
        await member_repo.create(user_id, log.to_input())

    if guest_logs:
        await guest_store.clear()
        logger.info("Migrated %d guest workout log(s) to user %s", len(guest_logs), user_id)
    return len(guest_logs)
