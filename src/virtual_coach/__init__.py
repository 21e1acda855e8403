"""virtual-coach: workout plan generation and guided training playback."""

__version__ = "0.1.0"
