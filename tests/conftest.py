"""Pytest configuration and fixtures."""

import pytest
import tempfile
from datetime import datetime
from pathlib import Path

from virtual_coach.models.exercises import DifficultyLevel, Exercise, MuscleGroup
from virtual_coach.models.plan import WorkoutPlan, WorkoutPlanItem
from virtual_coach.models.preferences import TrainingGoal, UserPreferences


@pytest.fixture
def temp_data_dir():
    """Create a temporary data directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_db_path(temp_data_dir):
    """Create a temporary database path."""
    return temp_data_dir / "test.db"


@pytest.fixture
def make_exercise():
    """Factory for catalog entries with sensible defaults."""

    def _make(
        name: str,
        muscle: MuscleGroup = MuscleGroup.LEGS,
        difficulty: DifficultyLevel = DifficultyLevel.BEGINNER,
        duration_seconds: int = 30,
        equipment: str | None = None,
        priority: int = 0,
        active: bool = True,
        id: int | None = None,
    ) -> Exercise:
        return Exercise(
            id=id,
            name=name,
            target_muscle=muscle,
            difficulty_level=difficulty,
            duration_seconds=duration_seconds,
            equipment_needed=equipment,
            priority_weight=priority,
            is_active=active,
        )

    return _make


@pytest.fixture
def sample_preferences():
    """Beginner legs and core session for 30 minutes."""
    return UserPreferences(
        training_goal=TrainingGoal.MUSCLE_GAIN,
        target_muscles=[MuscleGroup.LEGS, MuscleGroup.CORE],
        difficulty_level=DifficultyLevel.BEGINNER,
        available_minutes=30,
    )


@pytest.fixture
def make_plan(make_exercise, sample_preferences):
    """Factory for plans whose items play for the given durations."""

    def _make(durations: list[int]) -> WorkoutPlan:
        items = [
            WorkoutPlanItem(
                exercise=make_exercise(f"Exercise {i + 1}", duration_seconds=d, id=i + 1),
                sets=3,
                reps=12,
                rest_seconds=15 if i < len(durations) - 1 else 0,
            )
            for i, d in enumerate(durations)
        ]
        return WorkoutPlan(
            id="plan-1",
            preferences=sample_preferences,
            exercises=items,
            estimated_duration_minutes=len(items) * 3,
            created_at=datetime(2024, 3, 1, 8, 0),
        )

    return _make
