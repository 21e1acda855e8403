"""Request helpers shared by the routers."""

from fastapi import Request
from fastapi.responses import JSONResponse

from ..db import get_log_sink
from ..db.base import WorkoutLogSink


def get_sink(request: Request, user_id: str | None) -> WorkoutLogSink:
    """Workout log sink for the requesting user."""
    state = request.app.state
    return get_log_sink(user_id, state.db_path, state.data_dir)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})
