"""Playback session routes.

The API is client-driven: the caller sends one "tick" per elapsed second
and the user's pause/resume/next/previous/reset actions. Every action
returns the full session snapshot.
"""

from fastapi import APIRouter, Body, Request

from ..deps import error_response

router = APIRouter(prefix="/sessions", tags=["sessions"])

ACTIONS = {
    "tick": lambda engine: engine.tick(),
    "pause": lambda engine: engine.pause(),
    "resume": lambda engine: engine.resume(),
    "toggle": lambda engine: engine.toggle(),
    "next": lambda engine: engine.next(),
    "previous": lambda engine: engine.previous(),
    "reset": lambda engine: engine.reset(),
}


@router.post("")
async def create_session(request: Request, payload: dict = Body(...)):
    """Start playing a generated plan."""
    plan_id = payload.get("plan_id")
    plan = request.app.state.plans.get(plan_id) if plan_id else None
    if not plan:
        return error_response(404, "Plan not found")

    session = await request.app.state.sessions.create_session(plan)
    return session.to_dict()


@router.get("")
async def list_sessions(request: Request):
    """List active sessions."""
    sessions = await request.app.state.sessions.list_sessions()
    return {"sessions": [s.to_dict() for s in sessions]}


@router.get("/{session_id}")
async def get_session(request: Request, session_id: str):
    """Get the current snapshot of a session."""
    session = await request.app.state.sessions.get_session(session_id)
    if not session:
        return error_response(404, "Session not found")
    return session.to_dict()


@router.post("/{session_id}/{action}")
async def apply_action(request: Request, session_id: str, action: str):
    """Apply a timer or user action to a session."""
    handler = ACTIONS.get(action)
    if handler is None:
        return error_response(400, f"Unknown action '{action}'")

    session = await request.app.state.sessions.get_session(session_id)
    if not session:
        return error_response(404, "Session not found")

    handler(session.engine)
    return session.to_dict()


@router.delete("/{session_id}")
async def end_session(request: Request, session_id: str):
    """Exit a session. Nothing is persisted."""
    if not await request.app.state.sessions.end_session(session_id):
        return error_response(404, "Session not found")
    return {"status": "ended"}
