"""In-memory tracking of generated plans and live playback sessions."""

import asyncio
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

from ..models.plan import WorkoutPlan
from ..player import PlaybackEngine

logger = logging.getLogger(__name__)


class PlanStore:
    """Recently generated plans, keyed by plan id. Oldest are evicted first."""

    def __init__(self, max_plans: int = 100):
        self._plans: OrderedDict[str, WorkoutPlan] = OrderedDict()
        self._max_plans = max_plans

    def add(self, plan: WorkoutPlan) -> None:
        self._plans[plan.id] = plan
        self._plans.move_to_end(plan.id)
        while len(self._plans) > self._max_plans:
            evicted, _ = self._plans.popitem(last=False)
            logger.debug("Evicted plan %s", evicted)

    def get(self, plan_id: str) -> WorkoutPlan | None:
        return self._plans.get(plan_id)

    def __len__(self) -> int:
        return len(self._plans)


@dataclass
class PlaybackSession:
    """A playback engine exposed over the API."""

    id: str
    engine: PlaybackEngine
    created_at: datetime = field(default_factory=datetime.now)
    last_active_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "session_id": self.id,
            "created_at": self.created_at.isoformat(),
            **self.engine.snapshot(),
        }


class SessionTracker:
    """Tracks active playback sessions.

    When over the limit, finished sessions are dropped before running ones,
    least recently used first.
    """

    def __init__(self, max_sessions: int = 50):
        self._sessions: dict[str, PlaybackSession] = {}
        self._max_sessions = max_sessions
        self._lock = asyncio.Lock()

    async def create_session(self, plan: WorkoutPlan) -> PlaybackSession:
        """Start playing a plan. Raises EmptyPlanError for an empty plan."""
        engine = PlaybackEngine(plan)
        async with self._lock:
            session = PlaybackSession(id=str(uuid4())[:8], engine=engine)
            self._sessions[session.id] = session
            self._cleanup_old_sessions()
            logger.info("Started session %s for plan %s", session.id, plan.id)
            return session

    async def get_session(self, session_id: str) -> PlaybackSession | None:
        session = self._sessions.get(session_id)
        if session:
            session.last_active_at = datetime.now()
        return session

    async def list_sessions(self) -> list[PlaybackSession]:
        return list(self._sessions.values())

    async def end_session(self, session_id: str) -> bool:
        """Drop a session without persisting anything."""
        async with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def _cleanup_old_sessions(self):
        """Remove sessions over the limit, finished and idle ones first."""
        excess = len(self._sessions) - self._max_sessions
        if excess <= 0:
            return
        ranked = sorted(
            self._sessions.values(),
            key=lambda s: (not s.engine.is_completed, s.last_active_at),
        )
        for session in ranked[:excess]:
            del self._sessions[session.id]
