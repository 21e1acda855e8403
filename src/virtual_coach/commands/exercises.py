"""Exercise catalog commands."""

import click

from ..db import ExerciseRepository, get_db_path
from .base import async_command, echo_info, ensure_initialized, format_table


@click.group()
@click.pass_context
def exercises(ctx):
    """Browse the exercise catalog."""
    ensure_initialized(ctx)


@exercises.command(name="list")
@click.option("--muscle", "-m", help="Only show exercises for this muscle group")
@click.option("--all", "show_all", is_flag=True, help="Include inactive exercises")
@async_command
async def list_exercises(muscle: str | None, show_all: bool):
    """List exercises in the catalog."""
    repo = ExerciseRepository(get_db_path())
    catalog = await repo.list_all() if show_all else await repo.get_all_active()
    if muscle:
        catalog = [e for e in catalog if e.target_muscle.value == muscle]

    if not catalog:
        echo_info("No exercises found")
        return

    headers = ["ID", "Name", "Muscle", "Difficulty", "Equipment", "Seconds", "Priority"]
    rows = [
        [
            str(e.id),
            e.name,
            e.target_muscle.value,
            e.difficulty_level.value,
            e.equipment_needed or "-",
            str(e.duration_seconds),
            str(e.priority_weight),
        ]
        for e in catalog
    ]

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(catalog)} exercise(s)")
