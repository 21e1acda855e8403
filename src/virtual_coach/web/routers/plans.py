"""Workout plan generation routes."""

import logging

from fastapi import APIRouter, Body, Request

from ...errors import InvalidPreferencesError, PlanGenerationError
from ...generators import CandidateOrder, GeneratorConfig, PlanGenerator
from ...models.preferences import UserPreferences
from ..deps import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/plans", tags=["plans"])


def _parse_preferences(payload: dict) -> UserPreferences:
    """Build preferences from a request body, raising InvalidPreferencesError."""
    try:
        prefs = UserPreferences.from_dict(payload)
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidPreferencesError([f"Invalid preferences: {e}"]) from e
    return prefs


@router.post("")
async def create_plan(request: Request, payload: dict = Body(...)):
    """Generate a workout plan from preferences.

    Body fields: training_goal, target_muscles, difficulty_level,
    available_minutes, equipment_available and optionally order
    ("priority" or "name").
    """
    settings = request.app.state.settings

    try:
        prefs = _parse_preferences(payload)
        problems = prefs.validate(settings.min_minutes, settings.max_minutes)
        if problems:
            raise InvalidPreferencesError(problems)
        ordering = CandidateOrder(payload.get("order", CandidateOrder.PRIORITY.value))
    except ValueError as e:
        return error_response(422, str(e))

    exercises = await request.app.state.catalog.get_all()
    try:
        plan = PlanGenerator(GeneratorConfig(ordering=ordering)).generate(exercises, prefs)
    except PlanGenerationError as e:
        logger.info("Plan generation failed: %s", e)
        return error_response(422, str(e))

    request.app.state.plans.add(plan)
    return plan.to_dict()


@router.get("/{plan_id}")
async def get_plan(request: Request, plan_id: str):
    """Get a previously generated plan."""
    plan = request.app.state.plans.get(plan_id)
    if not plan:
        return error_response(404, "Plan not found")
    return plan.to_dict()
