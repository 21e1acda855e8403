"""Generate workout plan command."""

import click
import questionary
from questionary import Style

from ..config import load_settings
from ..errors import InvalidPreferencesError, PlanGenerationError
from ..generators import CandidateOrder, GeneratorConfig, PlanGenerator
from ..models.exercises import DifficultyLevel, MuscleGroup
from ..models.preferences import TrainingGoal, UserPreferences, parse_goal
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    load_catalog,
    save_last_plan,
)

custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("instruction", ""),
    ]
)

EQUIPMENT_CHOICES = ["dumbbell", "pull_up_bar", "kettlebell", "resistance_band", "bench"]


async def prompt_preferences() -> UserPreferences | None:
    """Ask for workout preferences interactively. Returns None if cancelled."""
    settings = load_settings()

    goal = await questionary.select(
        "What is your training goal?",
        choices=[
            questionary.Choice("Build muscle", TrainingGoal.MUSCLE_GAIN),
            questionary.Choice("Lose weight", TrainingGoal.WEIGHT_LOSS),
            questionary.Choice("Improve endurance", TrainingGoal.ENDURANCE),
        ],
        style=custom_style,
    ).ask_async()
    if goal is None:
        return None

    muscles = await questionary.checkbox(
        "Which muscle groups do you want to train?",
        choices=[
            questionary.Choice(m.value.replace("_", " ").title(), m) for m in MuscleGroup
        ],
        style=custom_style,
    ).ask_async()
    if muscles is None:
        return None

    difficulty = await questionary.select(
        "How hard should it be?",
        choices=[
            questionary.Choice(level.value.title(), level) for level in DifficultyLevel.ordered()
        ],
        style=custom_style,
    ).ask_async()
    if difficulty is None:
        return None

    minutes = await questionary.select(
        "How much time do you have?",
        choices=[
            questionary.Choice(f"{m} minutes", m)
            for m in range(settings.min_minutes, settings.max_minutes + 1, 15)
        ],
        style=custom_style,
    ).ask_async()
    if minutes is None:
        return None

    equipment = await questionary.checkbox(
        "What equipment do you have? (leave empty for bodyweight only)",
        choices=EQUIPMENT_CHOICES,
        style=custom_style,
    ).ask_async()

    return UserPreferences(
        training_goal=goal,
        target_muscles=muscles,
        difficulty_level=difficulty,
        available_minutes=minutes,
        equipment_available=equipment or None,
    )


@click.command()
@click.option("--goal", "-g", default=TrainingGoal.MUSCLE_GAIN.value, help="Training goal")
@click.option(
    "--muscle",
    "-m",
    "muscles",
    multiple=True,
    type=click.Choice([m.value for m in MuscleGroup]),
    help="Target muscle group (repeatable)",
)
@click.option(
    "--difficulty",
    "-d",
    type=click.Choice([level.value for level in DifficultyLevel]),
    default=DifficultyLevel.BEGINNER.value,
    help="Difficulty level",
)
@click.option("--equipment", "-e", multiple=True, help="Available equipment (repeatable)")
@click.option("--minutes", "-t", type=int, default=30, help="Available minutes (default: 30)")
@click.option(
    "--order",
    type=click.Choice([o.value for o in CandidateOrder]),
    default=CandidateOrder.PRIORITY.value,
    help="How candidates are ranked before selection",
)
@click.option("--interactive", "-i", is_flag=True, help="Answer questions instead of passing options")
@click.pass_context
@async_command
async def generate(
    ctx,
    goal: str,
    muscles: tuple[str, ...],
    difficulty: str,
    equipment: tuple[str, ...],
    minutes: int,
    order: str,
    interactive: bool,
):
    """Generate a workout plan.

    The plan is printed and saved as the current plan for 'virtual-coach play'.

    Examples:

        # Legs and core for 30 minutes
        virtual-coach generate --goal muscle_gain -m legs -m core

        # Advanced endurance session with dumbbells
        virtual-coach generate --goal endurance -m arms -d advanced -e dumbbell -t 45

        # Interactive questionnaire
        virtual-coach generate --interactive
    """
    ensure_initialized(ctx)
    settings = load_settings()

    if interactive:
        prefs = await prompt_preferences()
        if prefs is None:
            echo_info("Cancelled")
            return
    else:
        prefs = UserPreferences(
            training_goal=parse_goal(goal),
            target_muscles=[MuscleGroup(m) for m in muscles],
            difficulty_level=DifficultyLevel(difficulty),
            available_minutes=minutes,
            equipment_available=list(equipment) or None,
        )

    exercises = await load_catalog()
    generator = PlanGenerator(GeneratorConfig(ordering=CandidateOrder(order)))

    try:
        problems = prefs.validate(settings.min_minutes, settings.max_minutes)
        if problems:
            raise InvalidPreferencesError(problems)
        plan = generator.generate(exercises, prefs)
    except (InvalidPreferencesError, PlanGenerationError) as e:
        echo_error(str(e))
        ctx.exit(1)

    click.echo()
    click.echo(plan.get_summary())

    path = save_last_plan(plan, settings.data_dir)
    echo_success(f"Plan saved to {path}")
    echo_info("Start it with 'virtual-coach play'")
