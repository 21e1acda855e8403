"""Business logic services."""

from .workout_stats import calculate_streak, compute_stats, summarize_logs

__all__ = ["calculate_streak", "compute_stats", "summarize_logs"]
