"""Outcome generation for the What If Simulator.

This module provides the two generation lenses. Both share retry, content
filtering, quality gating and fallback handling from ``base``.
"""

from .base import OutcomeGenerator, filter_content, normalize_bullets
from .fun import FunOutcomeGenerator
from .serious import SeriousOutcomeGenerator

__all__ = [
    # From base.py
    "OutcomeGenerator",
    "filter_content",
    "normalize_bullets",
    # From serious.py
    "SeriousOutcomeGenerator",
    # From fun.py
    "FunOutcomeGenerator",
]
