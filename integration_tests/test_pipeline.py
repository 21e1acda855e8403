"""Integration tests for the full pipeline.

These run generation, playback and storage together against a real
SQLite file and guest JSON store.
"""

import asyncio
import tempfile
from dataclasses import replace
from datetime import date
from pathlib import Path

import pytest

from virtual_coach.data import ExerciseCache, ExerciseCatalog
from virtual_coach.db import ExerciseRepository, get_log_sink, init_db, seed_exercises
from virtual_coach.generators import generate_workout_plan
from virtual_coach.models.exercises import DifficultyLevel, MuscleGroup
from virtual_coach.models.preferences import TrainingGoal, UserPreferences
from virtual_coach.player import PlaybackEngine, PlaybackTicker
from virtual_coach.services.workout_stats import compute_stats


@pytest.fixture
def data_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def preferences():
    return UserPreferences(
        training_goal=TrainingGoal.WEIGHT_LOSS,
        target_muscles=[MuscleGroup.LEGS, MuscleGroup.CHEST, MuscleGroup.FULL_BODY],
        difficulty_level=DifficultyLevel.INTERMEDIATE,
        available_minutes=30,
    )


def _speed_up(plan):
    """Shorten every countdown so playback finishes quickly."""
    for item in plan.exercises:
        item.exercise = replace(item.exercise, duration_seconds=2)
    return plan


class TestPipelineIntegration:
    """Integration tests for generate -> play -> log."""

    @pytest.mark.parametrize("user_id", ["member-1", None])
    def test_generate_play_log(self, data_dir, preferences, user_id):
        """A generated plan can be played to completion and logged."""
        db_path = data_dir / "coach.db"

        async def scenario():
            await init_db(db_path)
            await seed_exercises(db_path)

            catalog = ExerciseCatalog(ExerciseRepository(db_path), ExerciseCache())
            plan = _speed_up(generate_workout_plan(await catalog.get_all(), preferences))

            engine = PlaybackEngine(plan)
            finished = []
            engine.on_complete(finished.append)

            ticker = PlaybackTicker(engine, interval=0.001)
            ticker.start()
            await ticker.wait()

            sink = get_log_sink(user_id, db_path, data_dir)
            log = await sink.create(user_id, finished[0].to_log_input(plan, rating=5))
            return plan, log, await sink.list_all(user_id)

        plan, log, history = asyncio.run(scenario())

        assert plan.total_exercises >= 3
        assert [e.name for e in log.exercises] == [i.exercise.name for i in plan.exercises]
        assert all(e.completed for e in log.exercises)
        assert [h.id for h in history] == [log.id]

        stats = compute_stats(history, today=log.started_at.date())
        assert stats.total_workouts == 1
        assert stats.avg_rating == 5.0
        assert stats.current_streak == 1

    def test_catalog_fallback_when_uninitialized(self, data_dir, preferences):
        """Generation still works before the database has been created."""
        catalog = ExerciseCatalog(ExerciseRepository(data_dir / "empty.db"))
        exercises = asyncio.run(catalog.get_all())
        plan = generate_workout_plan(exercises, preferences)

        assert plan.total_exercises >= 3
        assert plan.created_at.date() <= date.today()
