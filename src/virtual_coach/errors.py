"""Exception types raised by virtual-coach."""


class VirtualCoachError(Exception):
    """Base class for all virtual-coach errors."""


class InvalidPreferencesError(VirtualCoachError, ValueError):
    """User preferences failed form-level validation."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("; ".join(problems))


class PlanGenerationError(VirtualCoachError):
    """A workout plan could not be generated from the given inputs."""


class NoMatchError(PlanGenerationError):
    """No exercise in the catalog targets any of the requested muscles."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "No exercises match your preferences. Try adjusting your filters."
        )


class InsufficientExercisesError(PlanGenerationError):
    """Fewer exercises than the minimum could be assembled."""

    def __init__(self, found: int, minimum: int, message: str | None = None):
        self.found = found
        self.minimum = minimum
        super().__init__(
            message
            or (
                f"Only {found} matching exercise(s) found, at least {minimum} are "
                "needed to build a plan. Increase your available time or relax "
                "your filters."
            )
        )


class EmptyPlanError(VirtualCoachError, ValueError):
    """A playback session was started from a plan with no exercises."""

    def __init__(self):
        super().__init__("Cannot play a workout plan with no exercises")
