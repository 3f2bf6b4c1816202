"""Route blueprints for the webapp."""

from . import feedback, simulator

__all__ = ["feedback", "simulator"]
