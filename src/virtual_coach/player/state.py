"""Playback state machine.

The state is an immutable value and every transition is a plain function
``transition(plan, state) -> state``. Nothing here knows about timers,
threads or rendering, so any host (CLI, web API, tests) can drive it.

Modes::

    idle --start--> running <--pause/resume--> paused
    running/paused --(timer runs out on last item | next on last item)--> completed
    completed --reset--> running
"""

from dataclasses import dataclass, replace
from enum import Enum

from ..errors import EmptyPlanError
from ..models.plan import WorkoutPlan


class PlaybackMode(str, Enum):
    """Playback session mode."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass(frozen=True)
class PlaybackState:
    """Position and countdown of one playback session."""

    current_exercise_index: int
    remaining_seconds: int
    mode: PlaybackMode
    total_elapsed_seconds: int = 0
    actual_seconds: tuple[int, ...] = ()  # Seconds spent on each item
    completed_items: tuple[bool, ...] = ()  # True once an item's timer ran out

    @property
    def is_running(self) -> bool:
        return self.mode == PlaybackMode.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.mode == PlaybackMode.PAUSED

    @property
    def is_completed(self) -> bool:
        return self.mode == PlaybackMode.COMPLETED

    def to_dict(self) -> dict:
        return {
            "current_exercise_index": self.current_exercise_index,
            "remaining_seconds": self.remaining_seconds,
            "mode": self.mode.value,
            "total_elapsed_seconds": self.total_elapsed_seconds,
            "actual_seconds": list(self.actual_seconds),
            "completed_items": list(self.completed_items),
        }


def _planned_seconds(plan: WorkoutPlan, index: int) -> int:
    return plan.exercises[index].planned_seconds


def _move_to(plan: WorkoutPlan, state: PlaybackState, index: int) -> PlaybackState:
    """Jump to an item with its timer reset to the full planned duration."""
    return replace(
        state,
        current_exercise_index=index,
        remaining_seconds=_planned_seconds(plan, index),
    )


def _advance(plan: WorkoutPlan, state: PlaybackState) -> PlaybackState:
    """Move to the following item, or complete after the last one."""
    next_index = state.current_exercise_index + 1
    if next_index < len(plan.exercises):
        return _move_to(plan, state, next_index)
    return replace(state, mode=PlaybackMode.COMPLETED, remaining_seconds=0)


def _mark_finished(state: PlaybackState) -> PlaybackState:
    completed = list(state.completed_items)
    completed[state.current_exercise_index] = True
    return replace(state, completed_items=tuple(completed))


def initial_state(plan: WorkoutPlan) -> PlaybackState:
    """Create the idle state for a plan.

    Raises:
        EmptyPlanError: The plan has no exercises
    """
    if not plan.exercises:
        raise EmptyPlanError()
    count = len(plan.exercises)
    return PlaybackState(
        current_exercise_index=0,
        remaining_seconds=_planned_seconds(plan, 0),
        mode=PlaybackMode.IDLE,
        actual_seconds=(0,) * count,
        completed_items=(False,) * count,
    )


def start(plan: WorkoutPlan, state: PlaybackState) -> PlaybackState:
    if state.mode != PlaybackMode.IDLE:
        return state
    return replace(state, mode=PlaybackMode.RUNNING)


def tick(plan: WorkoutPlan, state: PlaybackState) -> PlaybackState:
    """Advance the countdown by one second.

    An item already at zero (a zero-duration item) is passed over before
    the second is consumed, so it never stalls the session.
    """
    if state.mode != PlaybackMode.RUNNING:
        return state

    while state.remaining_seconds <= 0:
        state = _advance(plan, _mark_finished(state))
        if state.mode == PlaybackMode.COMPLETED:
            return state

    index = state.current_exercise_index
    actual = list(state.actual_seconds)
    actual[index] += 1
    state = replace(
        state,
        remaining_seconds=state.remaining_seconds - 1,
        total_elapsed_seconds=state.total_elapsed_seconds + 1,
        actual_seconds=tuple(actual),
    )

    if state.remaining_seconds == 0:
        state = _advance(plan, _mark_finished(state))
    return state


def pause(plan: WorkoutPlan, state: PlaybackState) -> PlaybackState:
    if state.mode != PlaybackMode.RUNNING:
        return state
    return replace(state, mode=PlaybackMode.PAUSED)


def resume(plan: WorkoutPlan, state: PlaybackState) -> PlaybackState:
    if state.mode != PlaybackMode.PAUSED:
        return state
    return replace(state, mode=PlaybackMode.RUNNING)


def toggle(plan: WorkoutPlan, state: PlaybackState) -> PlaybackState:
    """Pause a running session or resume a paused one."""
    if state.mode == PlaybackMode.PAUSED:
        return resume(plan, state)
    return pause(plan, state)


def next_exercise(plan: WorkoutPlan, state: PlaybackState) -> PlaybackState:
    """Skip to the next item; skipping the last item completes the session.

    The current mode is kept, so a paused session stays paused on the new
    item.
    """
    if state.mode not in (PlaybackMode.RUNNING, PlaybackMode.PAUSED):
        return state
    return _advance(plan, state)


def previous_exercise(plan: WorkoutPlan, state: PlaybackState) -> PlaybackState:
    """Go back one item with a full timer. No-op on the first item."""
    if state.mode not in (PlaybackMode.RUNNING, PlaybackMode.PAUSED):
        return state
    if state.current_exercise_index <= 0:
        return state
    return _move_to(plan, state, state.current_exercise_index - 1)


def reset(plan: WorkoutPlan, state: PlaybackState) -> PlaybackState:
    """Restart a completed session from the first item."""
    if state.mode != PlaybackMode.COMPLETED:
        return state
    return start(plan, initial_state(plan))


def format_time(seconds: int) -> str:
    """Format seconds as mm:ss."""
    seconds = max(seconds, 0)
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def progress_percent(plan: WorkoutPlan, state: PlaybackState) -> float:
    """Percent of the current item's planned time already elapsed (0-100)."""
    if state.mode == PlaybackMode.COMPLETED:
        return 100.0
    planned = _planned_seconds(plan, state.current_exercise_index)
    if planned <= 0:
        return 100.0
    percent = (planned - state.remaining_seconds) / planned * 100
    return min(max(percent, 0.0), 100.0)


def display_index(plan: WorkoutPlan, state: PlaybackState) -> str:
    """1-based position for display, e.g. "2 / 5"."""
    return f"{state.current_exercise_index + 1} / {len(plan.exercises)}"
