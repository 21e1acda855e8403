"""Exercise catalog routes."""

from fastapi import APIRouter, Request

router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("")
async def list_exercises(request: Request, muscle: str | None = None):
    """List active exercises, optionally for one muscle group."""
    exercises = await request.app.state.catalog.get_all()
    if muscle:
        exercises = [e for e in exercises if e.target_muscle.value == muscle]
    return {"exercises": [e.to_dict() for e in exercises], "total": len(exercises)}
