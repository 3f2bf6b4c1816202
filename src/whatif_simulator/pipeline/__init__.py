"""Synchronous pipeline stages: validation, processing and formatting.

None of these stages suspend; the only awaits in a simulation are the two
generation calls.
"""

from .formatter import OutputFormatter, parse_presentation_header
from .processor import ScenarioProcessor
from .validator import MAX_LENGTH, MIN_LENGTH, InputValidator

__all__ = [
    # From validator.py
    "InputValidator",
    "MIN_LENGTH",
    "MAX_LENGTH",
    # From processor.py
    "ScenarioProcessor",
    # From formatter.py
    "OutputFormatter",
    "parse_presentation_header",
]
