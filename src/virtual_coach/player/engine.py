"""Stateful playback session driver.

PlaybackEngine owns one WorkoutPlan and the current PlaybackState. Every
transition, whether it comes from the timer or from the user, runs to
completion under a single lock before the next one is applied.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from ..models.plan import WorkoutPlan, WorkoutPlanItem, round_minutes
from ..models.workout_log import (
    ExerciseFeedback,
    ExerciseLogEntry,
    WorkoutLogInput,
    WorkoutSettings,
)
from . import state as transitions
from .state import PlaybackMode, PlaybackState

logger = logging.getLogger(__name__)

Transition = Callable[[WorkoutPlan, PlaybackState], PlaybackState]


@dataclass
class SessionSummary:
    """What happened during a completed playback session."""

    plan_id: str
    started_at: datetime
    completed_at: datetime
    elapsed_seconds: int
    exercises: list[ExerciseLogEntry]

    @property
    def duration_minutes(self) -> int:
        return round_minutes(self.elapsed_seconds)

    @property
    def completed_count(self) -> int:
        return sum(1 for e in self.exercises if e.completed)

    def to_log_input(
        self,
        plan: WorkoutPlan,
        feedback: dict[int, ExerciseFeedback] | None = None,
        rating: int | None = None,
        notes: str | None = None,
    ) -> WorkoutLogInput:
        """Build the payload for the workout log sink.

        Args:
            plan: The plan that was played
            feedback: Optional per-exercise feedback keyed by plan position
            rating: Optional 1-5 rating
            notes: Optional free text
        """
        feedback = feedback or {}
        entries = [
            ExerciseLogEntry(
                name=entry.name,
                exercise_id=entry.exercise_id,
                planned_duration=entry.planned_duration,
                actual_duration=entry.actual_duration,
                completed=entry.completed,
                feedback=feedback.get(i),
            )
            for i, entry in enumerate(self.exercises)
        ]
        return WorkoutLogInput(
            started_at=self.started_at,
            completed_at=self.completed_at,
            duration_minutes=self.duration_minutes,
            settings=WorkoutSettings.from_preferences(plan.preferences),
            exercises=entries,
            rating=rating,
            notes=notes,
        )

    def to_dict(self) -> dict:
        return {
            "plan_id": self.plan_id,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat(),
            "elapsed_seconds": self.elapsed_seconds,
            "duration_minutes": self.duration_minutes,
            "exercises": [e.to_dict() for e in self.exercises],
        }


CompletionListener = Callable[[SessionSummary], None]


class PlaybackEngine:
    """Drives one playback session of a workout plan."""

    def __init__(
        self,
        plan: WorkoutPlan,
        autostart: bool = True,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.plan = plan
        self._clock = clock
        self._state = transitions.initial_state(plan)
        self._lock = threading.Lock()
        self._listeners: list[CompletionListener] = []
        self.started_at: datetime | None = None
        self.summary: SessionSummary | None = None

        if autostart:
            self.start()

    # -- state access ------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def mode(self) -> PlaybackMode:
        return self._state.mode

    @property
    def current_exercise_index(self) -> int:
        return self._state.current_exercise_index

    @property
    def current_item(self) -> WorkoutPlanItem:
        return self.plan.exercises[self._state.current_exercise_index]

    @property
    def remaining_seconds(self) -> int:
        return self._state.remaining_seconds

    @property
    def total_exercises(self) -> int:
        return len(self.plan.exercises)

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def is_paused(self) -> bool:
        return self._state.is_paused

    @property
    def is_completed(self) -> bool:
        return self._state.is_completed

    @property
    def formatted_time(self) -> str:
        return transitions.format_time(self._state.remaining_seconds)

    @property
    def progress_percent(self) -> float:
        return transitions.progress_percent(self.plan, self._state)

    @property
    def display_index(self) -> str:
        return transitions.display_index(self.plan, self._state)

    def on_complete(self, listener: CompletionListener) -> None:
        """Register a callback invoked with the SessionSummary on completion."""
        self._listeners.append(listener)

    # -- transitions -------------------------------------------------------

    def start(self) -> PlaybackState:
        return self._apply(transitions.start)

    def tick(self) -> PlaybackState:
        return self._apply(transitions.tick)

    def pause(self) -> PlaybackState:
        return self._apply(transitions.pause)

    def resume(self) -> PlaybackState:
        return self._apply(transitions.resume)

    def toggle(self) -> PlaybackState:
        """Pause when running, resume when paused."""
        return self._apply(transitions.toggle)

    def next(self) -> PlaybackState:
        return self._apply(transitions.next_exercise)

    def previous(self) -> PlaybackState:
        return self._apply(transitions.previous_exercise)

    def reset(self) -> PlaybackState:
        return self._apply(transitions.reset)

    def snapshot(self) -> dict:
        """Everything a rendering layer needs for the current tick."""
        with self._lock:
            current = self._state
        item = self.plan.exercises[current.current_exercise_index]
        return {
            "plan_id": self.plan.id,
            **current.to_dict(),
            "total_exercises": len(self.plan.exercises),
            "display_index": transitions.display_index(self.plan, current),
            "formatted_time": transitions.format_time(current.remaining_seconds),
            "progress_percent": transitions.progress_percent(self.plan, current),
            "current_exercise": {
                "name": item.exercise.name,
                "description": item.exercise.description,
                "video_url": item.exercise.video_url,
                "sets": item.sets,
                "reps": item.reps,
                "rest_seconds": item.rest_seconds,
                "planned_seconds": item.planned_seconds,
            },
            "summary": self.summary.to_dict() if self.summary else None,
        }

    def _apply(self, transition: Transition) -> PlaybackState:
        with self._lock:
            before = self._state
            after = transition(self.plan, before)
            self._state = after

            # Fresh start or restart after completion
            if (
                before.mode in (PlaybackMode.IDLE, PlaybackMode.COMPLETED)
                and after.mode == PlaybackMode.RUNNING
            ):
                self.started_at = self._clock()
                self.summary = None

            finished = None
            if before.mode != PlaybackMode.COMPLETED and after.mode == PlaybackMode.COMPLETED:
                finished = self._build_summary(after)
                self.summary = finished

        # Listeners run outside the lock so they may query the engine
        if finished is not None:
            logger.info(
                "Playback of plan %s completed: %d/%d exercises finished",
                self.plan.id,
                finished.completed_count,
                len(finished.exercises),
            )
            for listener in self._listeners:
                listener(finished)

        return after

    def _build_summary(self, final: PlaybackState) -> SessionSummary:
        completed_at = self._clock()
        entries = [
            ExerciseLogEntry(
                name=item.exercise.name,
                exercise_id=item.exercise.id,
                planned_duration=item.planned_seconds,
                actual_duration=final.actual_seconds[i],
                completed=final.completed_items[i],
            )
            for i, item in enumerate(self.plan.exercises)
        ]
        return SessionSummary(
            plan_id=self.plan.id,
            started_at=self.started_at or completed_at,
            completed_at=completed_at,
            elapsed_seconds=final.total_elapsed_seconds,
            exercises=entries,
        )
