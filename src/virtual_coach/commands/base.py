"""Shared CLI utilities."""

import asyncio
import json
import logging
from functools import wraps
from pathlib import Path

import click

from ..config import load_settings
from ..data.catalog import ExerciseCache, ExerciseCatalog
from ..db import ExerciseRepository, get_db_path
from ..models.exercises import Exercise
from ..models.plan import WorkoutPlan

LAST_PLAN_FILENAME = "last_plan.json"


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def configure_logging(level: str) -> None:
    """Send library log records to stderr at the given level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_data_dir() -> Path:
    """Get the data directory path."""
    return load_settings().data_dir


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'virtual-coach init' first."
        )
        ctx.exit(1)


async def load_catalog(db_path: Path | None = None) -> list[Exercise]:
    """Load the active exercise catalog, falling back to the built-in one."""
    settings = load_settings()
    catalog = ExerciseCatalog(
        ExerciseRepository(db_path or get_db_path()),
        ExerciseCache(settings.catalog_ttl_seconds),
    )
    return await catalog.get_all()


def save_last_plan(plan: WorkoutPlan, data_dir: Path | None = None) -> Path:
    """Save a plan so 'play' can pick it up."""
    data_dir = data_dir or get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    path = data_dir / LAST_PLAN_FILENAME
    with open(path, "w") as f:
        json.dump(plan.to_dict(), f, indent=2)
    return path


def load_plan(path: Path) -> WorkoutPlan | None:
    """Load a plan saved by 'generate'. Returns None if the file is missing."""
    if not path.exists():
        return None
    with open(path) as f:
        return WorkoutPlan.from_dict(json.load(f))


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = [
        "".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)).rstrip(),
        "".join("-" * w + " " * padding for w in widths).rstrip(),
    ]
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)).rstrip()
        )

    return "\n".join(lines)
