"""JSON API for virtual-coach."""

from .app import create_app

__all__ = ["create_app"]
