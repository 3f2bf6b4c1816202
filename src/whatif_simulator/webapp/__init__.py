"""Flask JSON API for the What If Simulator."""

from .app import create_app

__all__ = ["create_app"]
