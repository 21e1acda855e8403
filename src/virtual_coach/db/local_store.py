"""Guest workout history kept in a local JSON file."""

import asyncio
import json
import logging
import time
from pathlib import Path
from uuid import uuid4

from ..models.workout_log import (
    GUEST_USER_ID,
    WorkoutLog,
    WorkoutLogInput,
    WorkoutLogListItem,
    WorkoutLogUpdate,
)
from ..services.workout_stats import summarize_logs
from .engine import get_data_dir

logger = logging.getLogger(__name__)

GUEST_LOGS_FILENAME = "guest_workout_logs.json"


def _local_id() -> str:
    return f"local_{int(time.time() * 1000)}_{uuid4().hex[:9]}"


class LocalWorkoutLogStore:
    """Workout log store for guests.

    Logs are kept newest first in a single JSON document. The user_id
    arguments are accepted for interface parity and ignored; every entry
    belongs to the guest. File access runs in a worker thread.
    """

    def __init__(self, data_dir: Path | None = None):
        self.data_dir = data_dir or get_data_dir()
        self.path = self.data_dir / GUEST_LOGS_FILENAME

    def _read(self) -> list[WorkoutLog]:
        if not self.path.exists():
            return []
        with open(self.path) as f:
            data = json.load(f)
        return [WorkoutLog.from_dict(entry) for entry in data.get("logs", [])]

    def _write(self, logs: list[WorkoutLog]) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump({"logs": [log.to_dict() for log in logs]}, f, indent=2)

    async def _load(self) -> list[WorkoutLog]:
        return await asyncio.to_thread(self._read)

    async def _save(self, logs: list[WorkoutLog]) -> None:
        await asyncio.to_thread(self._write, logs)

    async def create(self, user_id: str | None, log_input: WorkoutLogInput) -> WorkoutLog:
        log = WorkoutLog.from_input(_local_id(), GUEST_USER_ID, log_input)
        logs = await self._load()
        logs.insert(0, log)
        await self._save(logs)
        logger.info("Stored guest workout log %s", log.id)
        return log

    async def get(self, log_id: str, user_id: str | None = None) -> WorkoutLog | None:
        for log in await self._load():
            if log.id == log_id:
                return log
        return None

    async def update(
        self, log_id: str, user_id: str | None, update: WorkoutLogUpdate
    ) -> WorkoutLog | None:
        logs = await self._load()
        for log in logs:
            if log.id == log_id:
                log.apply_update(update)
                await self._save(logs)
                return log
        return None

    async def delete(self, log_id: str, user_id: str | None = None) -> bool:
        logs = await self._load()
        remaining = [log for log in logs if log.id != log_id]
        if len(remaining) == len(logs):
            return False
        await self._save(remaining)
        logger.info("Deleted guest workout log %s", log_id)
        return True

    async def list_all(self, user_id: str | None = None) -> list[WorkoutLog]:
        return await self._load()

    async def list_logs(
        self, user_id: str | None = None, limit: int = 20, offset: int = 0
    ) -> list[WorkoutLogListItem]:
        logs = await self._load()
        return summarize_logs(logs[offset : offset + limit])

    async def clear(self) -> None:
        """Forget all guest history."""
        if self.path.exists():
            await asyncio.to_thread(self.path.unlink)
