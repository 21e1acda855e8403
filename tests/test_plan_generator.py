"""Tests for workout plan generation."""

import pytest

from virtual_coach.errors import (
    InsufficientExercisesError,
    NoMatchError,
    PlanGenerationError,
)
from virtual_coach.generators import (
    CandidateOrder,
    GeneratorConfig,
    PlanGenerator,
    generate_workout_plan,
)
from virtual_coach.generators.plan_generator import (
    filter_exercises,
    order_candidates,
    volume_for_goal,
)
from virtual_coach.models.exercises import DEFAULT_EXERCISES, DifficultyLevel, MuscleGroup
from virtual_coach.models.plan import exercise_time_seconds, round_minutes
from virtual_coach.models.preferences import TrainingGoal, UserPreferences


def _prefs(
    muscles=(MuscleGroup.LEGS,),
    difficulty=DifficultyLevel.BEGINNER,
    goal=TrainingGoal.MUSCLE_GAIN,
    minutes=30,
    equipment=None,
):
    return UserPreferences(
        training_goal=goal,
        target_muscles=list(muscles),
        difficulty_level=difficulty,
        available_minutes=minutes,
        equipment_available=equipment,
    )


class TestFilterExercises:
    """Tests for tiered catalog filtering."""

    def test_exact_tier_used_when_large_enough(self, make_exercise):
        """Exact matches are returned without relaxing."""
        catalog = [
            make_exercise("Squat"),
            make_exercise("Lunge"),
            make_exercise("Step Up"),
            make_exercise("Pistol Squat", difficulty=DifficultyLevel.INTERMEDIATE),
        ]
        result = filter_exercises(catalog, _prefs())

        assert {e.name for e in result} == {"Squat", "Lunge", "Step Up"}

    def test_adjacent_difficulty_tier(self, make_exercise):
        """Beginner relaxes to intermediate but never to advanced."""
        catalog = [
            make_exercise("Squat"),
            make_exercise("Lunge"),
            make_exercise("Goblet Squat", difficulty=DifficultyLevel.INTERMEDIATE),
            make_exercise("Jump Squat", difficulty=DifficultyLevel.ADVANCED),
        ]
        result = filter_exercises(catalog, _prefs())

        assert {e.name for e in result} == {"Squat", "Lunge", "Goblet Squat"}

    def test_muscle_only_tier_ignores_difficulty_and_equipment(self, make_exercise):
        """The last tier keeps every exercise for the target muscles."""
        catalog = [
            make_exercise("Squat"),
            make_exercise("Jump Squat", difficulty=DifficultyLevel.ADVANCED),
            make_exercise(
                "Barbell Squat", difficulty=DifficultyLevel.ADVANCED, equipment="barbell"
            ),
            make_exercise("Push Up", muscle=MuscleGroup.CHEST),
        ]
        result = filter_exercises(catalog, _prefs(equipment=["dumbbell"]))

        assert {e.name for e in result} == {"Squat", "Jump Squat", "Barbell Squat"}

    def test_equipment_filter(self, make_exercise):
        """Exercises needing unavailable equipment are dropped while relaxing."""
        catalog = [
            make_exercise("Squat"),
            make_exercise("Lunge"),
            make_exercise("Goblet Squat", equipment="dumbbell"),
            make_exercise("Hack Squat", equipment="machine"),
        ]
        result = filter_exercises(catalog, _prefs(equipment=["dumbbell"]))

        assert {e.name for e in result} == {"Squat", "Lunge", "Goblet Squat"}

    def test_no_equipment_means_no_constraint(self, make_exercise):
        """An empty equipment list does not filter anything."""
        catalog = [
            make_exercise("Squat", equipment="barbell"),
            make_exercise("Lunge", equipment="dumbbell"),
            make_exercise("Hack Squat", equipment="machine"),
        ]
        assert len(filter_exercises(catalog, _prefs(equipment=[]))) == 3

    def test_inactive_exercises_excluded(self, make_exercise):
        """Inactive exercises are never candidates."""
        catalog = [
            make_exercise("Squat"),
            make_exercise("Lunge", active=False),
        ]
        result = filter_exercises(catalog, _prefs())

        assert [e.name for e in result] == ["Squat"]


class TestOrderCandidates:
    """Tests for candidate ranking."""

    def test_priority_order(self, make_exercise):
        """Higher priority first, ties broken by name descending."""
        catalog = [
            make_exercise("Alpha", priority=1),
            make_exercise("Bravo", priority=5),
            make_exercise("Charlie", priority=5),
        ]
        names = [e.name for e in order_candidates(catalog, CandidateOrder.PRIORITY)]

        assert names == ["Charlie", "Bravo", "Alpha"]

    def test_name_order(self, make_exercise):
        """Name ordering ignores priority."""
        catalog = [
            make_exercise("Alpha", priority=9),
            make_exercise("Charlie", priority=0),
            make_exercise("Bravo", priority=5),
        ]
        names = [e.name for e in order_candidates(catalog, CandidateOrder.NAME)]

        assert names == ["Charlie", "Bravo", "Alpha"]


class TestVolume:
    """Tests for goal-based volume."""

    def test_known_goals(self):
        assert volume_for_goal(TrainingGoal.MUSCLE_GAIN) == (4, 10)
        assert volume_for_goal(TrainingGoal.WEIGHT_LOSS) == (3, 15)
        assert volume_for_goal(TrainingGoal.ENDURANCE) == (3, 20)

    def test_unknown_goal_defaults(self):
        """Unrecognised goals fall back to 3 sets of 12."""
        assert volume_for_goal("flexibility") == (3, 12)


class TestPlanGenerator:
    """Tests for PlanGenerator."""

    def test_generates_minimum_exercises(self, make_exercise):
        """A valid plan has at least three items."""
        catalog = [make_exercise(n) for n in ("Squat", "Lunge", "Step Up")]
        plan = PlanGenerator().generate(catalog, _prefs())

        assert plan.total_exercises >= 3
        assert plan.id

    def test_last_item_has_no_rest(self, make_exercise):
        """Only the final exercise skips its rest period."""
        catalog = [make_exercise(n) for n in ("Squat", "Lunge", "Step Up")]
        plan = PlanGenerator().generate(catalog, _prefs())

        assert plan.exercises[-1].rest_seconds == 0
        assert all(item.rest_seconds == 15 for item in plan.exercises[:-1])

    def test_goal_sets_and_reps(self, make_exercise):
        """Every item uses the goal's volume."""
        catalog = [make_exercise(n) for n in ("Squat", "Lunge", "Step Up")]
        plan = PlanGenerator().generate(catalog, _prefs(goal=TrainingGoal.ENDURANCE))

        assert all((item.sets, item.reps) == (3, 20) for item in plan.exercises)

    def test_unknown_goal_uses_default_volume(self, make_exercise):
        catalog = [make_exercise(n) for n in ("Squat", "Lunge", "Step Up")]
        plan = PlanGenerator().generate(catalog, _prefs(goal="mobility"))

        assert all((item.sets, item.reps) == (3, 12) for item in plan.exercises)

    def test_estimated_duration_matches_items(self):
        """The estimate is recomputed from the final items."""
        prefs = _prefs(
            muscles=list(MuscleGroup),
            difficulty=DifficultyLevel.INTERMEDIATE,
            goal=TrainingGoal.WEIGHT_LOSS,
        )
        plan = PlanGenerator().generate(DEFAULT_EXERCISES, prefs)

        total = sum(item.total_seconds for item in plan.exercises)
        assert plan.estimated_duration_minutes == round_minutes(total)

    def test_estimate_uses_configured_timing(self):
        """Custom rep and set timing flows into the plan estimate.

        At 6s per rep and 60s between sets a muscle gain item takes 495s,
        so four fit into 33 minutes and the plan is about 33 minutes long.
        """
        config = GeneratorConfig(seconds_per_rep=6, rest_between_sets=60)
        prefs = _prefs(muscles=list(MuscleGroup), difficulty=DifficultyLevel.INTERMEDIATE)
        plan = PlanGenerator(config).generate(DEFAULT_EXERCISES, prefs)

        total = sum(
            exercise_time_seconds(
                item.sets, item.reps, item.rest_seconds, seconds_per_rep=6, rest_between_sets=60
            )
            for item in plan.exercises
        )
        assert plan.total_exercises == 4
        assert plan.estimated_duration_minutes == round_minutes(total) == 33

    def test_fills_available_time(self):
        """Muscle gain items take 255s each; seven fit into 30 minutes."""
        prefs = _prefs(muscles=list(MuscleGroup), difficulty=DifficultyLevel.INTERMEDIATE)
        plan = PlanGenerator().generate(DEFAULT_EXERCISES, prefs)

        assert plan.total_exercises == 7
        assert plan.estimated_duration_minutes == 30

    def test_allows_ten_percent_overrun(self):
        """Weight loss items take 240s each; an eighth one fits within 33 minutes."""
        prefs = _prefs(
            muscles=list(MuscleGroup),
            difficulty=DifficultyLevel.INTERMEDIATE,
            goal=TrainingGoal.WEIGHT_LOSS,
        )
        plan = PlanGenerator().generate(DEFAULT_EXERCISES, prefs)

        assert plan.total_exercises == 8
        assert plan.estimated_duration_minutes == 32
        assert sum(item.total_seconds for item in plan.exercises) <= 30 * 60 * 1.1

    def test_deterministic(self):
        """Same catalog and preferences give the same plan content."""
        prefs = _prefs(muscles=[MuscleGroup.LEGS, MuscleGroup.CORE, MuscleGroup.BACK])
        first = PlanGenerator().generate(DEFAULT_EXERCISES, prefs)
        second = PlanGenerator().generate(DEFAULT_EXERCISES, prefs)

        assert [(i.exercise.name, i.sets, i.reps, i.rest_seconds) for i in first.exercises] == [
            (i.exercise.name, i.sets, i.reps, i.rest_seconds) for i in second.exercises
        ]
        assert first.id != second.id

    def test_priority_ordering_in_plan(self, make_exercise):
        """Selected items follow the candidate ranking."""
        catalog = [
            make_exercise("Lunge", priority=2),
            make_exercise("Squat", priority=9),
            make_exercise("Step Up", priority=5),
        ]
        plan = PlanGenerator().generate(catalog, _prefs())

        assert [i.exercise.name for i in plan.exercises] == ["Squat", "Step Up", "Lunge"]

    def test_name_ordering_option(self, make_exercise):
        catalog = [
            make_exercise("Lunge", priority=2),
            make_exercise("Squat", priority=9),
            make_exercise("Step Up", priority=5),
        ]
        generator = PlanGenerator(GeneratorConfig(ordering=CandidateOrder.NAME))
        plan = generator.generate(catalog, _prefs())

        assert [i.exercise.name for i in plan.exercises] == ["Step Up", "Squat", "Lunge"]

    def test_relaxes_to_adjacent_difficulty_only(self, make_exercise):
        """Advanced falls back to intermediate, never two steps down to beginner."""
        catalog = [
            make_exercise("Pistol Squat", difficulty=DifficultyLevel.INTERMEDIATE),
            make_exercise("Jump Lunge", difficulty=DifficultyLevel.INTERMEDIATE),
            make_exercise("Box Jump", difficulty=DifficultyLevel.INTERMEDIATE),
            make_exercise("Air Squat", difficulty=DifficultyLevel.BEGINNER, priority=10),
        ]
        plan = PlanGenerator().generate(catalog, _prefs(difficulty=DifficultyLevel.ADVANCED))

        assert plan.total_exercises == 3
        assert all(
            item.exercise.difficulty_level == DifficultyLevel.INTERMEDIATE
            for item in plan.exercises
        )

    def test_no_match(self, make_exercise):
        """No exercise for the requested muscles raises NoMatchError."""
        catalog = [make_exercise("Squat"), make_exercise("Lunge")]

        with pytest.raises(NoMatchError):
            PlanGenerator().generate(catalog, _prefs(muscles=[MuscleGroup.ARMS]))

    def test_too_few_exercises(self, make_exercise):
        """Two eligible exercises are not enough for a plan."""
        catalog = [make_exercise("Squat"), make_exercise("Lunge")]

        with pytest.raises(InsufficientExercisesError) as exc_info:
            PlanGenerator().generate(catalog, _prefs())

        assert exc_info.value.found == 2
        assert exc_info.value.minimum == 3

    def test_too_little_time(self, make_exercise):
        """Selection that cannot reach the minimum count fails."""
        catalog = [make_exercise(n) for n in ("Squat", "Lunge", "Step Up")]

        with pytest.raises(InsufficientExercisesError):
            PlanGenerator().generate(catalog, _prefs(minutes=5))

    def test_errors_share_base_class(self, make_exercise):
        with pytest.raises(PlanGenerationError):
            PlanGenerator().generate([], _prefs())

    def test_preferences_kept_on_plan(self, sample_preferences):
        plan = generate_workout_plan(DEFAULT_EXERCISES, sample_preferences)

        assert plan.preferences is sample_preferences
        assert all(
            item.exercise.target_muscle in sample_preferences.target_muscles
            for item in plan.exercises
        )
