"""Initialize project command."""

import click

from ..data.exercise_loader import get_exercises_json_path, seed_exercises_from_json
from ..db import get_db_path, init_db, seed_exercises
from .base import async_command, echo_info, echo_success, get_data_dir


@click.command()
@async_command
async def init():
    """Initialize the virtual-coach data directory and database.

    Creates the SQLite schema and fills the exercise catalog, from
    exercises.json in the data directory when present, otherwise from the
    built-in exercise list.
    """
    data_dir = get_data_dir()
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing virtual-coach in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    json_path = get_exercises_json_path(data_dir)
    count = 0
    if json_path.exists():
        count = await seed_exercises_from_json(db_path, json_path)
    if count:
        echo_success(f"Exercise catalog populated ({count} exercises from {json_path.name})")
    else:
        count = await seed_exercises(db_path)
        echo_success(f"Exercise catalog populated ({count} built-in exercises)")

    click.echo()
    click.echo("virtual-coach is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Generate a workout plan:")
    click.echo("     virtual-coach generate --goal muscle_gain --muscle legs --muscle core")
    click.echo("     virtual-coach generate --interactive")
    click.echo()
    click.echo("  2. Play it:")
    click.echo("     virtual-coach play")
