"""Workout log routes.

The user_id query parameter selects the member store; without it the
guest store is used.
"""

from fastapi import APIRouter, Body, Request

from ...db import migrate_guest_logs
from ...models.workout_log import ExerciseFeedback, WorkoutLogInput, WorkoutLogUpdate
from ...services.workout_stats import compute_stats
from ..deps import error_response, get_sink

router = APIRouter(prefix="/logs", tags=["logs"])


async def _log_input_from_session(request: Request, payload: dict) -> WorkoutLogInput | str:
    """Build a log from a finished session, or return an error message."""
    session = await request.app.state.sessions.get_session(payload["session_id"])
    if not session:
        return "Session not found"
    engine = session.engine
    if engine.summary is None:
        return "Session is not completed"

    feedback = {
        int(index): ExerciseFeedback(value)
        for index, value in (payload.get("feedback") or {}).items()
    }
    return engine.summary.to_log_input(
        engine.plan,
        feedback=feedback,
        rating=payload.get("rating"),
        notes=payload.get("notes"),
    )


@router.post("")
async def create_log(request: Request, payload: dict = Body(...), user_id: str | None = None):
    """Save a finished workout.

    The body is either {"session_id", "rating", "notes", "feedback"} for a
    session completed through this API, or a complete log with
    started_at, completed_at, duration_minutes, settings and exercises.
    """
    try:
        if "session_id" in payload:
            log_input = await _log_input_from_session(request, payload)
            if isinstance(log_input, str):
                return error_response(404 if "not found" in log_input else 409, log_input)
        else:
            log_input = WorkoutLogInput.from_dict(payload)
    except (KeyError, ValueError, TypeError) as e:
        return error_response(422, f"Invalid workout log: {e}")

    log = await get_sink(request, user_id).create(user_id, log_input)
    return log.to_dict()


@router.get("")
async def list_logs(request: Request, user_id: str | None = None, limit: int = 20, offset: int = 0):
    """List a user's workouts, newest first."""
    items = await get_sink(request, user_id).list_logs(user_id, limit=limit, offset=offset)
    return {"logs": [item.to_dict() for item in items]}


@router.post("/migrate")
async def migrate_logs(request: Request, user_id: str | None = None):
    """Move the guest history into a member's history."""
    if not user_id:
        return error_response(422, "user_id is required to migrate guest logs")

    state = request.app.state
    count = await migrate_guest_logs(user_id, state.db_path, state.data_dir)
    return {"migrated": count}


@router.get("/stats")
async def get_stats(request: Request, user_id: str | None = None):
    """Totals, average rating and current streak."""
    logs = await get_sink(request, user_id).list_all(user_id)
    return compute_stats(logs).to_dict()


@router.get("/{log_id}")
async def get_log(request: Request, log_id: str, user_id: str | None = None):
    """Get one workout."""
    log = await get_sink(request, user_id).get(log_id, user_id)
    if not log:
        return error_response(404, "Workout log not found")
    return log.to_dict()


@router.patch("/{log_id}")
async def update_log(
    request: Request, log_id: str, payload: dict = Body(...), user_id: str | None = None
):
    """Add a rating and notes to a workout."""
    try:
        update = WorkoutLogUpdate(rating=payload.get("rating"), notes=payload.get("notes"))
    except (ValueError, TypeError) as e:
        return error_response(422, str(e))

    log = await get_sink(request, user_id).update(log_id, user_id, update)
    if not log:
        return error_response(404, "Workout log not found")
    return log.to_dict()


@router.delete("/{log_id}")
async def delete_log(request: Request, log_id: str, user_id: str | None = None):
    """Delete a workout."""
    if not await get_sink(request, user_id).delete(log_id, user_id):
        return error_response(404, "Workout log not found")
    return {"status": "deleted"}
