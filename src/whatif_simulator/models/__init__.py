"""What If Simulator models.

This module exports the data structures that flow through the pipeline.
"""

from .results import (
    FeedbackStats,
    FormattedOutput,
    OutputMetadata,
    ProcessingMetrics,
    ProcessScenarioResponse,
    ScenarioPayload,
    SimulationResult,
    SubmitFeedbackResponse,
    UserFeedback,
)
from .scenario import (
    Complexity,
    ContractModel,
    KeyElements,
    ProcessedScenario,
    ScenarioType,
    ValidationResult,
)

__all__ = [
    # From scenario.py
    "Complexity",
    "ContractModel",
    "KeyElements",
    "ProcessedScenario",
    "ScenarioType",
    "ValidationResult",
    # From results.py
    "FeedbackStats",
    "FormattedOutput",
    "OutputMetadata",
    "ProcessingMetrics",
    "ProcessScenarioResponse",
    "ScenarioPayload",
    "SimulationResult",
    "SubmitFeedbackResponse",
    "UserFeedback",
]
