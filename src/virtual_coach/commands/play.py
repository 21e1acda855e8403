"""Play a workout plan in the terminal."""

import asyncio
from pathlib import Path

import click
import questionary

from ..config import load_settings
from ..db import get_db_path, get_log_sink
from ..errors import EmptyPlanError
from ..models.workout_log import GUEST_USER_ID
from ..player import PlaybackEngine, PlaybackTicker, PlayerAction, handle_key
from .base import (
    LAST_PLAN_FILENAME,
    async_command,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    load_plan,
)
from .generate import custom_style


def render_status(engine: PlaybackEngine) -> str:
    """One status line for the current tick."""
    item = engine.current_item
    return (
        f"{engine.display_index:>7}  {item.exercise.name[:24]:<24}  "
        f"{engine.formatted_time}  {engine.mode.value:<9}  "
        f"{engine.progress_percent:5.1f}%"
    )


def _redraw(engine: PlaybackEngine) -> None:
    click.echo("\r" + render_status(engine), nl=False)


async def run_session(engine: PlaybackEngine, interval: float) -> bool:
    """Drive a session from the ticker and the keyboard.

    Returns True when the plan was completed, False when the user exited.
    """
    loop = asyncio.get_running_loop()
    ticker = PlaybackTicker(engine, interval, on_tick=lambda _: _redraw(engine))
    ticker_task = ticker.start()
    key_future = None
    exited = False

    _redraw(engine)
    try:
        while not engine.is_completed:
            if key_future is None:
                key_future = loop.run_in_executor(None, click.getchar)
            done, _ = await asyncio.wait(
                {key_future, ticker_task}, return_when=asyncio.FIRST_COMPLETED
            )
            if key_future in done:
                try:
                    key = key_future.result()
                except (KeyboardInterrupt, EOFError):
                    key = "q"
                key_future = None
                if handle_key(engine, key) == PlayerAction.EXIT:
                    exited = True
                    break
                _redraw(engine)
            else:
                ticker_task.result()
    finally:
        ticker.stop()

    click.echo()
    if key_future is not None and not key_future.done():
        # The keyboard reader thread cannot be cancelled; let it finish
        click.echo("Press any key to continue...")
        try:
            await key_future
        except (KeyboardInterrupt, EOFError):
            pass

    return not exited


async def ask_rating() -> int | None:
    """Ask for a 1-5 rating. Returns None when skipped."""
    rating = await questionary.select(
        "How was this workout?",
        choices=[
            questionary.Choice("Skip", 0),
            *[questionary.Choice("*" * r, r) for r in range(5, 0, -1)],
        ],
        style=custom_style,
    ).ask_async()
    return rating or None


@click.command()
@click.option(
    "--plan",
    "plan_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Plan file to play (default: the last generated plan)",
)
@click.option("--user", "-u", help="Member ID to log the session for (default: guest)")
@click.option("--interval", type=float, help="Seconds per tick (default: 1.0)")
@click.option("--rate/--no-rate", default=True, help="Ask for a rating when finished")
@click.pass_context
@async_command
async def play(ctx, plan_path: Path | None, user: str | None, interval: float | None, rate: bool):
    """Play a workout plan with a countdown timer.

    Controls: space pauses/resumes, right arrow or 'n' skips ahead, left
    arrow or 'p' goes back, escape or 'q' quits without saving.
    """
    if user:
        ensure_initialized(ctx)

    settings = load_settings()
    plan_path = plan_path or settings.data_dir / LAST_PLAN_FILENAME

    plan = load_plan(plan_path)
    if plan is None:
        echo_error(f"No plan found at {plan_path}. Run 'virtual-coach generate' first.")
        ctx.exit(1)

    try:
        engine = PlaybackEngine(plan)
    except EmptyPlanError as e:
        echo_error(str(e))
        ctx.exit(1)

    click.echo()
    click.echo(plan.get_summary())
    echo_info("space: pause/resume   n/right: next   p/left: previous   q/esc: quit")
    click.echo()

    completed = await run_session(engine, interval or settings.tick_interval_seconds)
    if not completed:
        echo_warning("Session exited, nothing was saved")
        return

    summary = engine.summary
    echo_success(
        f"Workout complete: {summary.completed_count}/{len(summary.exercises)} exercises "
        f"in {summary.duration_minutes} min"
    )

    rating = await ask_rating() if rate else None

    sink = get_log_sink(user, get_db_path(settings.data_dir), settings.data_dir)
    log = await sink.create(user, summary.to_log_input(plan, rating=rating))
    echo_success(f"Workout saved for {user or GUEST_USER_ID} (ID: {log.id})")
