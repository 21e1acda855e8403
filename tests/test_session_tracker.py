"""Tests for the in-memory plan and session tracking used by the API."""

import asyncio
from dataclasses import replace

import pytest

from virtual_coach.errors import EmptyPlanError
from virtual_coach.web.session_tracker import PlanStore, SessionTracker


class TestPlanStore:
    """Tests for PlanStore."""

    def test_evicts_oldest(self, make_plan):
        store = PlanStore(max_plans=2)
        plan = make_plan([30, 30, 30])
        for plan_id in ("a", "b", "c"):
            store.add(replace(plan, id=plan_id))

        assert len(store) == 2
        assert store.get("a") is None
        assert store.get("c").id == "c"

    def test_re_adding_refreshes(self, make_plan):
        store = PlanStore(max_plans=2)
        plan = make_plan([30, 30, 30])
        store.add(replace(plan, id="a"))
        store.add(replace(plan, id="b"))
        store.add(replace(plan, id="a"))
        store.add(replace(plan, id="c"))

        assert store.get("a") is not None
        assert store.get("b") is None


class TestSessionTracker:
    """Tests for SessionTracker."""

    def test_create_get_end(self, make_plan):
        tracker = SessionTracker()

        async def scenario():
            session = await tracker.create_session(make_plan([30, 30, 30]))
            found = await tracker.get_session(session.id)
            ended = await tracker.end_session(session.id)
            return session, found, ended, await tracker.get_session(session.id)

        session, found, ended, after = asyncio.run(scenario())

        assert found is session
        assert session.engine.is_running
        assert ended
        assert after is None

    def test_to_dict(self, make_plan):
        tracker = SessionTracker()
        session = asyncio.run(tracker.create_session(make_plan([30, 30, 30])))
        data = session.to_dict()

        assert data["session_id"] == session.id
        assert data["remaining_seconds"] == 30
        assert data["mode"] == "running"

    def test_empty_plan_rejected(self, make_plan):
        tracker = SessionTracker()

        with pytest.raises(EmptyPlanError):
            asyncio.run(tracker.create_session(make_plan([])))

    def test_completed_sessions_evicted_first(self, make_plan):
        tracker = SessionTracker(max_sessions=2)
        plan = make_plan([30])

        async def scenario():
            finished = await tracker.create_session(plan)
            finished.engine.next()
            running = await tracker.create_session(plan)
            newest = await tracker.create_session(plan)
            return finished, running, newest, await tracker.list_sessions()

        finished, running, newest, sessions = asyncio.run(scenario())

        assert finished.engine.is_completed
        assert {s.id for s in sessions} == {running.id, newest.id}
