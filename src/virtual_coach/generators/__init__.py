"""Workout plan generators."""

from .plan_generator import (
    MIN_EXERCISES_COUNT,
    CandidateOrder,
    GeneratorConfig,
    PlanGenerator,
    generate_workout_plan,
)

__all__ = [
    "CandidateOrder",
    "GeneratorConfig",
    "MIN_EXERCISES_COUNT",
    "PlanGenerator",
    "generate_workout_plan",
]
