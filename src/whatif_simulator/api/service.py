"""Caller-facing API over the simulator and the feedback store.

Used by both the Flask blueprints and the Textual app.
"""

import logging
import time
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from whatif_simulator.config import (
    SimulatorConfig,
    get_llm_timeout,
    get_retry_options,
    get_simulator_config,
)
from whatif_simulator.llm import ClaudeGenerationService
from whatif_simulator.models import (
    FeedbackStats,
    ProcessScenarioResponse,
    ScenarioPayload,
    SubmitFeedbackResponse,
    UserFeedback,
)
from whatif_simulator.prompts import GENERATION_SYSTEM_PROMPT
from whatif_simulator.simulator import WhatIfSimulator

from .feedback import CounterSessionIdGenerator, FeedbackStore, InMemoryFeedbackStore, SessionIdGenerator

logger = logging.getLogger(__name__)

INVALID_FEEDBACK_MESSAGE = "Invalid feedback data provided"
FEEDBACK_ACCEPTED_MESSAGE = "Feedback submitted successfully"


class WhatIfAPI:
    """Processes scenarios and records user feedback.

    Args:
        simulator: The pipeline orchestrator
        feedback_store: Where feedback is kept (in-memory by default)
        session_id_generator: Zero-argument callable returning new session ids
    """

    def __init__(
        self,
        simulator: WhatIfSimulator,
        feedback_store: FeedbackStore | None = None,
        session_id_generator: SessionIdGenerator | None = None,
    ):
        self.simulator = simulator
        self.feedback_store = feedback_store or InMemoryFeedbackStore()
        self.session_id_generator = session_id_generator or CounterSessionIdGenerator()

    async def process_scenario(
        self, scenario: Any, session_id: str | None = None
    ) -> ProcessScenarioResponse:
        """Run a scenario and wrap the result for callers.

        A missing session id gets a fresh one from the generator.
        """
        session_id = session_id or self.session_id_generator()
        result = await self.simulator.process_scenario(scenario)

        if not result.success or result.formatted_output is None:
            return ProcessScenarioResponse(
                success=False,
                session_id=session_id,
                error=result.error or "Processing failed",
                metrics=result.metrics,
            )

        output = result.formatted_output
        return ProcessScenarioResponse(
            success=True,
            session_id=session_id,
            result=ScenarioPayload(
                serious_version=output.serious_version,
                fun_version=output.fun_version,
                metadata=output.metadata,
                presentation_output=result.presentation_output or "",
            ),
            metrics=result.metrics,
        )

    def submit_feedback(self, data: Mapping[str, Any]) -> SubmitFeedbackResponse:
        """Validate and store one feedback record.

        Keys may be camelCase or snake_case. Any client-supplied timestamp is
        replaced with the submission time.
        """
        payload = {k: v for k, v in dict(data).items() if k != "timestamp"}
        try:
            feedback = UserFeedback.model_validate(payload)
        except ValidationError as e:
            logger.info(f"Rejected feedback: {e.error_count()} validation errors")
            return SubmitFeedbackResponse(success=False, message=INVALID_FEEDBACK_MESSAGE)

        self.feedback_store.put(feedback.session_id, feedback)
        feedback_id = f"{feedback.session_id}_{int(time.time() * 1000)}"
        logger.info(f"Stored feedback {feedback_id}")
        return SubmitFeedbackResponse(
            success=True,
            message=FEEDBACK_ACCEPTED_MESSAGE,
            feedback_id=feedback_id,
        )

    def get_feedback(self, session_id: str) -> list[UserFeedback]:
        return self.feedback_store.get_all(session_id)

    def get_feedback_stats(self) -> FeedbackStats:
        """Aggregate ratings across all sessions (zeros when empty)."""
        entries = self.feedback_store.all_feedback()
        if not entries:
            return FeedbackStats()

        total = len(entries)
        return FeedbackStats(
            total_feedbacks=total,
            average_serious_rating=sum(f.serious_rating for f in entries) / total,
            average_fun_rating=sum(f.fun_rating for f in entries) / total,
            average_overall_satisfaction=sum(f.overall_satisfaction for f in entries) / total,
            session_count=self.feedback_store.session_count(),
        )

    def get_config(self) -> SimulatorConfig:
        return self.simulator.get_config()

    def update_config(self, overrides: Mapping[str, Any]) -> SimulatorConfig:
        """Partially update simulator config.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        return self.simulator.update_config(overrides)


def create_default_api() -> WhatIfAPI:
    """Build a WhatIfAPI backed by Claude, configured from the environment."""
    service = ClaudeGenerationService(
        system_prompt=GENERATION_SYSTEM_PROMPT,
        timeout=get_llm_timeout(),
    )
    simulator = WhatIfSimulator(
        service,
        config=get_simulator_config(),
        retry_options=get_retry_options(),
    )
    return WhatIfAPI(simulator)
