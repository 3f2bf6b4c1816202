"""Scenario models for the What If Simulator.

This module defines the Pydantic models produced by the first two pipeline
stages: the validation result for raw user text and the structured scenario
record the outcome generators work from.

Field names are snake_case in Python. Every model serializes with camelCase
aliases so JSON crossing the HTTP boundary keeps the public field names
(``isValid``, ``sanitizedInput``, ``scenarioType`` ...).
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ScenarioType(str, Enum):
    """Classification bucket for a scenario."""

    PERSONAL = "personal"
    PROFESSIONAL = "professional"
    HISTORICAL = "historical"
    HYPOTHETICAL = "hypothetical"


class Complexity(str, Enum):
    """Complexity tier for a scenario."""

    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class ContractModel(BaseModel):
    """Base for immutable models serialized with camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )


class ValidationResult(ContractModel):
    """Outcome of validating one raw scenario string.

    Attributes:
        is_valid: Whether the input passed every check
        sanitized_input: Cleaned text (best-effort when invalid, truncated
            to the maximum length for over-long input)
        error_message: Specific, user-facing rejection reason
    """

    is_valid: bool
    sanitized_input: str = ""
    error_message: str | None = None


class KeyElements(ContractModel):
    """Actors, actions and a short context phrase extracted from a scenario."""

    actors: list[str] = Field(default_factory=list)
    actions: list[str] = Field(default_factory=list)
    context: str = ""


class ProcessedScenario(ContractModel):
    """Structured record of a scenario, created once per request.

    ``scenario_type`` and ``complexity`` are always set; the processor
    falls back to ``hypothetical`` / ``simple`` rather than leave them empty.
    """

    original_text: str
    scenario_type: ScenarioType = ScenarioType.HYPOTHETICAL
    key_elements: KeyElements = Field(default_factory=KeyElements)
    complexity: Complexity = Complexity.SIMPLE
