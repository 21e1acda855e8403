"""Workout plan generation.

Turns an exercise catalog and a set of user preferences into a WorkoutPlan.
Generation is a pure computation: the same inputs always yield the same
exercises in the same order.

Filtering relaxes in tiers until enough candidates are found:

1. exact difficulty, requested muscles, available equipment
2. requested or adjacent difficulty, requested muscles, available equipment
3. requested muscles only

Selection then greedily fills the available time, allowing a 10% overrun.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Callable, Iterable
from uuid import uuid4

from ..errors import InsufficientExercisesError, NoMatchError
from ..models.exercises import Exercise
from ..models.plan import (
    DEFAULT_REST_SECONDS,
    REST_BETWEEN_SETS_SECONDS,
    SECONDS_PER_REP,
    WorkoutPlan,
    WorkoutPlanItem,
    calculate_total_duration,
    exercise_time_seconds,
)
from ..models.preferences import TrainingGoal, UserPreferences, goal_value

logger = logging.getLogger(__name__)

MIN_EXERCISES_COUNT = 3

# (sets, reps) per training goal
GOAL_VOLUME: dict[str, tuple[int, int]] = {
    TrainingGoal.MUSCLE_GAIN.value: (4, 10),
    TrainingGoal.WEIGHT_LOSS.value: (3, 15),
    TrainingGoal.ENDURANCE.value: (3, 20),
}
DEFAULT_VOLUME = (3, 12)


class CandidateOrder(str, Enum):
    """How eligible exercises are ranked before greedy selection."""

    PRIORITY = "priority"  # priority_weight desc, then name desc
    NAME = "name"  # name desc only


@dataclass
class GeneratorConfig:
    """Configuration for plan generation."""

    min_exercises: int = MIN_EXERCISES_COUNT
    seconds_per_rep: int = SECONDS_PER_REP
    rest_between_sets: int = REST_BETWEEN_SETS_SECONDS
    rest_after_exercise: int = DEFAULT_REST_SECONDS
    overrun_tolerance: float = 0.1
    default_minutes: int = 30
    ordering: CandidateOrder = CandidateOrder.PRIORITY


def volume_for_goal(goal: TrainingGoal | str) -> tuple[int, int]:
    """Return (sets, reps) for a training goal, falling back to 3x12."""
    return GOAL_VOLUME.get(goal_value(goal), DEFAULT_VOLUME)


def _equipment_ok(exercise: Exercise, prefs: UserPreferences) -> bool:
    if not prefs.equipment_available:
        return True
    if not exercise.equipment_needed:
        return True
    return exercise.equipment_needed in prefs.equipment_available


def filter_exercises(
    exercises: Iterable[Exercise],
    prefs: UserPreferences,
    min_count: int = MIN_EXERCISES_COUNT,
) -> list[Exercise]:
    """Filter the catalog by preferences, relaxing until min_count is reached.

    Returns the result of the first tier producing at least min_count
    exercises, or the (possibly short) muscle-only tier.
    """
    active = [e for e in exercises if e.is_active]
    muscles = set(prefs.target_muscles)
    allowed_levels = prefs.difficulty_level.adjacent()

    tiers: list[tuple[str, Callable[[Exercise], bool]]] = [
        (
            "exact",
            lambda e: e.difficulty_level == prefs.difficulty_level
            and e.target_muscle in muscles
            and _equipment_ok(e, prefs),
        ),
        (
            "adjacent difficulty",
            lambda e: e.difficulty_level in allowed_levels
            and e.target_muscle in muscles
            and _equipment_ok(e, prefs),
        ),
        ("muscle only", lambda e: e.target_muscle in muscles),
    ]

    filtered: list[Exercise] = []
    for label, predicate in tiers:
        filtered = [e for e in active if predicate(e)]
        logger.debug("Filter tier '%s' matched %d of %d exercises", label, len(filtered), len(active))
        if len(filtered) >= min_count:
            break

    return filtered


def order_candidates(
    exercises: Iterable[Exercise],
    ordering: CandidateOrder = CandidateOrder.PRIORITY,
) -> list[Exercise]:
    """Rank candidates deterministically."""
    if ordering == CandidateOrder.NAME:
        return sorted(exercises, key=lambda e: e.name, reverse=True)
    return sorted(exercises, key=lambda e: (e.priority_weight, e.name), reverse=True)


class PlanGenerator:
    """Generates workout plans from a catalog snapshot."""

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()

    def generate(self, exercises: list[Exercise], prefs: UserPreferences) -> WorkoutPlan:
        """Generate a workout plan.

        Args:
            exercises: Catalog snapshot to choose from
            prefs: Validated user preferences

        Returns:
            A new WorkoutPlan with at least min_exercises items

        Raises:
            NoMatchError: No exercise targets any requested muscle
            InsufficientExercisesError: Too few exercises after relaxation,
                or too few fit in the available time
        """
        minimum = self.config.min_exercises

        candidates = filter_exercises(exercises, prefs, minimum)
        if not candidates:
            raise NoMatchError()
        if len(candidates) < minimum:
            raise InsufficientExercisesError(len(candidates), minimum)

        items = self.select_exercises(candidates, prefs)
        if len(items) < minimum:
            raise InsufficientExercisesError(
                len(items),
                minimum,
                f"Could not fit {minimum} exercises into "
                f"{self._available_minutes(prefs)} minutes. "
                "Increase your available training time.",
            )

        plan = WorkoutPlan(
            id=str(uuid4()),
            created_at=datetime.now(),
            preferences=prefs,
            exercises=items,
            estimated_duration_minutes=calculate_total_duration(
                items,
                seconds_per_rep=self.config.seconds_per_rep,
                rest_between_sets=self.config.rest_between_sets,
            ),
        )
        logger.info(
            "Generated plan %s: %d exercises, ~%d min",
            plan.id,
            len(items),
            plan.estimated_duration_minutes,
        )
        return plan

    def select_exercises(
        self, candidates: list[Exercise], prefs: UserPreferences
    ) -> list[WorkoutPlanItem]:
        """Greedily pick exercises until the available time is filled."""
        config = self.config
        target_seconds = self._available_minutes(prefs) * 60
        limit_seconds = target_seconds * (1 + config.overrun_tolerance)
        sets, reps = volume_for_goal(prefs.training_goal)
        exercise_seconds = exercise_time_seconds(
            sets,
            reps,
            config.rest_after_exercise,
            seconds_per_rep=config.seconds_per_rep,
            rest_between_sets=config.rest_between_sets,
        )

        selected: list[WorkoutPlanItem] = []
        accumulated = 0

        for exercise in order_candidates(candidates, config.ordering):
            if accumulated + exercise_seconds <= limit_seconds:
                selected.append(
                    WorkoutPlanItem(
                        exercise=exercise,
                        sets=sets,
                        reps=reps,
                        rest_seconds=config.rest_after_exercise,
                    )
                )
                accumulated += exercise_seconds

            if accumulated >= target_seconds and len(selected) >= config.min_exercises:
                break

        # No rest after the final exercise
        if selected:
            selected[-1] = replace(selected[-1], rest_seconds=0)

        return selected

    def _available_minutes(self, prefs: UserPreferences) -> int:
        return prefs.available_minutes or self.config.default_minutes


def generate_workout_plan(
    exercises: list[Exercise],
    prefs: UserPreferences,
    config: GeneratorConfig | None = None,
) -> WorkoutPlan:
    """Generate a workout plan with the given (or default) configuration."""
    return PlanGenerator(config).generate(exercises, prefs)
