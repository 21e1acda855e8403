"""Training playback: state machine, engine, ticker and key bindings."""

from .engine import PlaybackEngine, SessionSummary
from .keys import PlayerAction, handle_key
from .state import PlaybackMode, PlaybackState
from .ticker import PlaybackTicker

__all__ = [
    "PlaybackEngine",
    "PlaybackMode",
    "PlaybackState",
    "PlaybackTicker",
    "PlayerAction",
    "SessionSummary",
    "handle_key",
]
