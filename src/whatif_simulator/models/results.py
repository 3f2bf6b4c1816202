"""Result models for the What If Simulator.

Covers everything downstream of generation: the formatted dual output, the
per-stage processing metrics, the simulation result returned by the
orchestrator, and the records exchanged by the API layer (feedback, stats,
responses).
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import Field

from whatif_simulator.models.scenario import ContractModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OutputMetadata(ContractModel):
    """Metadata carried alongside the two formatted versions.

    Attributes:
        processing_time: Generation time in milliseconds
        scenario_type: Scenario type label ("unknown" when unavailable)
        complexity: Complexity tier, when known
    """

    processing_time: int = Field(default=0, ge=0)
    scenario_type: str = "unknown"
    complexity: str | None = None


class FormattedOutput(ContractModel):
    """Serious and fun versions plus metadata, ready for presentation."""

    serious_version: str = Field(min_length=1)
    fun_version: str = Field(min_length=1)
    metadata: OutputMetadata = Field(default_factory=OutputMetadata)


class ProcessingMetrics(ContractModel):
    """Per-stage timings in milliseconds.

    Fields for stages that never ran stay at zero.
    """

    total_processing_time: float = 0.0
    validation_time: float = 0.0
    processing_time: float = 0.0
    serious_generation_time: float = 0.0
    fun_generation_time: float = 0.0
    formatting_time: float = 0.0
    success: bool = False
    error_type: str | None = None


class SimulationResult(ContractModel):
    """Uniform result of one pass through the pipeline."""

    success: bool
    formatted_output: FormattedOutput | None = None
    presentation_output: str | None = None
    error: str | None = None
    metrics: ProcessingMetrics | None = None


class UserFeedback(ContractModel):
    """A user's rating of one simulation, validated by range only."""

    session_id: str = Field(min_length=1)
    scenario: str = Field(min_length=1)
    serious_rating: int = Field(ge=1, le=5)
    fun_rating: int = Field(ge=1, le=5)
    overall_satisfaction: int = Field(ge=1, le=5)
    comments: str | None = None
    timestamp: datetime = Field(default_factory=_utcnow)


class FeedbackStats(ContractModel):
    """Aggregated feedback across all sessions."""

    total_feedbacks: int = 0
    average_serious_rating: float = 0.0
    average_fun_rating: float = 0.0
    average_overall_satisfaction: float = 0.0
    session_count: int = 0


class ScenarioPayload(ContractModel):
    """The ``result`` block of a successful API response."""

    serious_version: str
    fun_version: str
    metadata: OutputMetadata
    presentation_output: str


class ProcessScenarioResponse(ContractModel):
    """API response for one processed scenario."""

    success: bool
    session_id: str
    result: ScenarioPayload | None = None
    error: str | None = None
    metrics: ProcessingMetrics | None = None


class SubmitFeedbackResponse(ContractModel):
    """API response for a feedback submission."""

    success: bool
    message: str
    feedback_id: str | None = None
