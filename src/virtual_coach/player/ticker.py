"""Periodic tick source for a playback engine."""

import asyncio
import logging
from typing import Callable

from ..config import DEFAULT_TICK_INTERVAL_SECONDS
from .engine import PlaybackEngine
from .state import PlaybackState

logger = logging.getLogger(__name__)


class PlaybackTicker:
    """Calls engine.tick() at a fixed interval on the running event loop.

    The ticker is the only timer source for its engine. Stopping it and
    dropping the engine is enough to cancel a session.
    """

    def __init__(
        self,
        engine: PlaybackEngine,
        interval: float = DEFAULT_TICK_INTERVAL_SECONDS,
        on_tick: Callable[[PlaybackState], None] | None = None,
    ):
        self.engine = engine
        self.interval = interval
        self.on_tick = on_tick
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Start ticking. Must be called from within a running event loop."""
        if not self.running:
            self._task = asyncio.create_task(self._run())
        return self._task

    def stop(self) -> None:
        """Stop ticking immediately."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait until the session completes or the ticker is stopped."""
        task = self._task
        if task is None:
            return
        await asyncio.wait({task})
        if not task.cancelled():
            # Re-raise anything the tick loop failed with
            task.result()

    async def _run(self) -> None:
        while not self.engine.is_completed:
            await asyncio.sleep(self.interval)
            state = self.engine.tick()
            if self.on_tick is not None:
                self.on_tick(state)
        logger.debug("Ticker for plan %s finished", self.engine.plan.id)
