"""Workout history commands."""

import click

from ..config import load_settings
from ..db import get_db_path, get_log_sink, migrate_guest_logs
from ..models.workout_log import MAX_RATING, MIN_RATING, WorkoutLogUpdate
from ..services.workout_stats import compute_stats
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
)

user_option = click.option(
    "--user", "-u", help="Member ID (default: guest history on this machine)"
)


def _sink(user: str | None):
    settings = load_settings()
    return get_log_sink(user, get_db_path(settings.data_dir), settings.data_dir)


@click.group()
def logs():
    """Browse and rate past workouts."""


@logs.command(name="list")
@user_option
@click.option("--limit", "-n", type=int, default=20, help="Number of entries (default: 20)")
@click.option("--offset", type=int, default=0, help="Entries to skip")
@async_command
async def list_logs(user: str | None, limit: int, offset: int):
    """List recent workouts, newest first."""
    items = await _sink(user).list_logs(user, limit=limit, offset=offset)

    if not items:
        echo_info("No workouts logged yet. Play one with 'virtual-coach play'")
        return

    headers = ["ID", "Date", "Minutes", "Goal", "Exercises", "Rating"]
    rows = [
        [
            item.id,
            item.started_at.strftime("%Y-%m-%d %H:%M"),
            str(item.duration_minutes),
            item.goal,
            str(item.exercise_count),
            str(item.rating) if item.rating else "-",
        ]
        for item in items
    ]

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Showing {len(items)} workout(s)")


@logs.command()
@click.argument("log_id")
@user_option
@click.pass_context
@async_command
async def show(ctx, log_id: str, user: str | None):
    """Show one workout in detail."""
    log = await _sink(user).get(log_id, user)
    if not log:
        echo_error(f"Workout {log_id} not found")
        ctx.exit(1)

    click.echo()
    click.echo("=" * 60)
    click.echo(f"Workout {log.id}")
    click.echo("=" * 60)
    click.echo(f"Started:    {log.started_at:%Y-%m-%d %H:%M}")
    click.echo(f"Duration:   {log.duration_minutes} min")
    click.echo(f"Goal:       {log.settings.goal} ({log.settings.difficulty})")
    click.echo(f"Equipment:  {', '.join(log.settings.equipment) or 'none'}")
    click.echo(f"Rating:     {log.rating or '-'}")
    if log.notes:
        click.echo(f"Notes:      {log.notes}")
    click.echo()

    headers = ["Exercise", "Planned", "Actual", "Done"]
    rows = [
        [
            entry.name,
            f"{entry.planned_duration}s",
            f"{entry.actual_duration}s",
            "yes" if entry.completed else "skipped",
        ]
        for entry in log.exercises
    ]
    click.echo(format_table(headers, rows))


@logs.command()
@click.argument("log_id")
@click.argument("rating", type=click.IntRange(MIN_RATING, MAX_RATING))
@click.option("--notes", help="Free text notes")
@user_option
@click.pass_context
@async_command
async def rate(ctx, log_id: str, rating: int, notes: str | None, user: str | None):
    """Rate a workout from 1 to 5."""
    log = await _sink(user).update(log_id, user, WorkoutLogUpdate(rating=rating, notes=notes))
    if not log:
        echo_error(f"Workout {log_id} not found")
        ctx.exit(1)
    echo_success(f"Workout {log.id} rated {log.rating}/5")


@logs.command()
@click.argument("log_id")
@user_option
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, log_id: str, user: str | None, force: bool):
    """Delete a workout from history."""
    sink = _sink(user)
    log = await sink.get(log_id, user)
    if not log:
        echo_error(f"Workout {log_id} not found")
        ctx.exit(1)

    if not force:
        click.echo(f"Workout {log.id} from {log.started_at:%Y-%m-%d %H:%M}")
        if not click.confirm("Are you sure you want to delete this workout?"):
            echo_info("Cancelled")
            return

    await sink.delete(log_id, user)
    echo_success(f"Deleted workout {log_id}")


@logs.command()
@click.option("--user", "-u", required=True, help="Member ID to receive the guest history")
@click.pass_context
@async_command
async def migrate(ctx, user: str):
    """Move guest workouts on this machine into a member's history."""
    ensure_initialized(ctx)
    settings = load_settings()
    count = await migrate_guest_logs(user, get_db_path(settings.data_dir), settings.data_dir)

    if not count:
        echo_info("No guest workouts to migrate")
        return
    echo_success(f"Migrated {count} guest workout(s) to {user}")


@logs.command()
@user_option
@async_command
async def stats(user: str | None):
    """Show totals, average rating and current streak."""
    all_logs = await _sink(user).list_all(user)
    summary = compute_stats(all_logs)

    click.echo()
    click.echo(f"Workouts:        {summary.total_workouts}")
    click.echo(f"Total minutes:   {summary.total_minutes}")
    click.echo(f"Average rating:  {summary.avg_rating if summary.avg_rating is not None else '-'}")
    if summary.last_workout_at:
        click.echo(f"Last workout:    {summary.last_workout_at:%Y-%m-%d}")
    click.echo(f"Current streak:  {summary.current_streak} day(s)")
