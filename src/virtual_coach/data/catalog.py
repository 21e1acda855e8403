"""Cached access to the exercise catalog."""

import logging
import sqlite3
import time
from typing import Callable

from ..config import DEFAULT_CATALOG_TTL_SECONDS
from ..db.repositories import ExerciseRepository
from ..models.exercises import DEFAULT_EXERCISES, Exercise

logger = logging.getLogger(__name__)


class ExerciseCache:
    """Holds one catalog snapshot for a fixed time-to-live."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CATALOG_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._exercises: list[Exercise] | None = None
        self._stored_at = 0.0

    def get(self) -> list[Exercise] | None:
        """Return the cached exercises, or None when empty or expired."""
        if self._exercises is None:
            return None
        if self._clock() - self._stored_at >= self.ttl_seconds:
            self._exercises = None
            return None
        return list(self._exercises)

    def set(self, exercises: list[Exercise]) -> None:
        self._exercises = list(exercises)
        self._stored_at = self._clock()

    def clear(self) -> None:
        self._exercises = None


class ExerciseCatalog:
    """Active exercises from the database, with a built-in fallback."""

    def __init__(self, repository: ExerciseRepository, cache: ExerciseCache | None = None):
        self.repository = repository
        self.cache = cache or ExerciseCache()

    async def get_all(self) -> list[Exercise]:
        """Get all active exercises.

        Serves from the cache while it is fresh. If the database cannot be
        read or holds no active exercises, DEFAULT_EXERCISES is returned and
        nothing is cached, so the next call tries the database again.
        """
        cached = self.cache.get()
        if cached is not None:
            return cached

        try:
            exercises = await self.repository.get_all_active()
        except sqlite3.Error as e:
            logger.warning("Exercise catalog unavailable, using defaults: %s", e)
            return list(DEFAULT_EXERCISES)

        if not exercises:
            logger.warning("Exercise catalog is empty, using defaults")
            return list(DEFAULT_EXERCISES)

        self.cache.set(exercises)
        return exercises

    def clear_cache(self) -> None:
        self.cache.clear()
