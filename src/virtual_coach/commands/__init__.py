"""CLI commands for virtual-coach."""

from .exercises import exercises
from .generate import generate
from .init import init
from .logs import logs
from .play import play
from .serve import serve

__all__ = [
    "exercises",
    "generate",
    "init",
    "logs",
    "play",
    "serve",
]
