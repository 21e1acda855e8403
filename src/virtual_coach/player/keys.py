"""Keyboard shortcuts for the training player.

Keys are alternate triggers for the engine transitions; they carry no
behaviour of their own.
"""

from enum import Enum

from .engine import PlaybackEngine


class PlayerAction(str, Enum):
    TOGGLE = "toggle"
    NEXT = "next"
    PREVIOUS = "previous"
    EXIT = "exit"


# Terminal escape sequences for the arrow keys as returned by click.getchar()
KEY_RIGHT = "\x1b[C"
KEY_LEFT = "\x1b[D"
KEY_ESCAPE = "\x1b"

KEY_BINDINGS: dict[str, PlayerAction] = {
    " ": PlayerAction.TOGGLE,
    "space": PlayerAction.TOGGLE,
    KEY_RIGHT: PlayerAction.NEXT,
    "right": PlayerAction.NEXT,
    "n": PlayerAction.NEXT,
    KEY_LEFT: PlayerAction.PREVIOUS,
    "left": PlayerAction.PREVIOUS,
    "p": PlayerAction.PREVIOUS,
    KEY_ESCAPE: PlayerAction.EXIT,
    "escape": PlayerAction.EXIT,
    "q": PlayerAction.EXIT,
}


def action_for_key(key: str) -> PlayerAction | None:
    """Look up the action bound to a key, ignoring case for letters."""
    return KEY_BINDINGS.get(key) or KEY_BINDINGS.get(key.lower())


def handle_key(engine: PlaybackEngine, key: str) -> PlayerAction | None:
    """Apply the transition bound to key.

    Returns the action taken, or None for unbound keys. EXIT is returned
    without touching the engine; tearing the session down is up to the host.
    """
    action = action_for_key(key)
    if action == PlayerAction.TOGGLE:
        engine.toggle()
    elif action == PlayerAction.NEXT:
        engine.next()
    elif action == PlayerAction.PREVIOUS:
        engine.previous()
    return action
