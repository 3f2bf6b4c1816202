"""Orchestrator for the What If Simulator.

A simulation runs five stages in strict order, each timed:

    VALIDATE -> PROCESS -> GENERATE(serious, fun) -> FORMAT -> DONE

ERROR is reachable from any stage. Only a validation failure or an
unexpected exception yields ``success=False``; generation failures are
absorbed into fallback content by the generators, and formatting failures
into the formatter's fallback output.

``max_processing_time`` is a soft budget: exceeding it logs a warning but
never cancels work. Hard timeouts belong to the generation service.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Mapping
from enum import Enum
from typing import Any

from .config import SimulatorConfig, merge_config
from .errors import (
    DEFAULT_MIN_CONTENT_LENGTH,
    RetryOptions,
    WhatIfSimulatorError,
    create_fallback_content,
    log_error,
)
from .generation import FunOutcomeGenerator, SeriousOutcomeGenerator
from .llm import GenerationService
from .models import FormattedOutput, ProcessedScenario, ProcessingMetrics, SimulationResult
from .pipeline import InputValidator, OutputFormatter, ScenarioProcessor

logger = logging.getLogger(__name__)

VALIDATION_ERROR_TYPE = "validation"


class PipelineStage(Enum):
    """Stages of one simulation."""

    VALIDATE = "validate"
    PROCESS = "process"
    GENERATE = "generate"
    FORMAT = "format"
    DONE = "done"
    ERROR = "error"


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


async def _timed(awaitable: Awaitable[str]) -> tuple[str, float]:
    start = time.perf_counter()
    result = await awaitable
    return result, _elapsed_ms(start)


class WhatIfSimulator:
    """Runs raw scenario text through the full pipeline.

    The validator, processor, formatter and generators hold no per-request
    state, so one simulator can serve concurrent requests.

    Args:
        generation_service: Text generation capability shared by both lenses
        config: SimulatorConfig or a mapping of overrides on the defaults
        retry_options: Retry policy for generation attempts
        min_content_length: Minimum acceptable generated response length
    """

    def __init__(
        self,
        generation_service: GenerationService,
        config: SimulatorConfig | Mapping[str, Any] | None = None,
        retry_options: RetryOptions | None = None,
        min_content_length: int = DEFAULT_MIN_CONTENT_LENGTH,
    ):
        if isinstance(config, SimulatorConfig):
            self._config = config
        else:
            self._config = merge_config(SimulatorConfig(), dict(config or {}))

        self.validator = InputValidator()
        self.processor = ScenarioProcessor()
        self.formatter = OutputFormatter()
        self.serious_generator = SeriousOutcomeGenerator(
            generation_service, retry_options, min_content_length
        )
        self.fun_generator = FunOutcomeGenerator(
            generation_service, retry_options, min_content_length
        )

    @property
    def config(self) -> SimulatorConfig:
        return self._config

    def get_config(self) -> SimulatorConfig:
        return self._config

    def update_config(self, overrides: Mapping[str, Any]) -> SimulatorConfig:
        """Replace only the supplied keys.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        self._config = merge_config(self._config, dict(overrides))
        self._log(f"Configuration updated: {self._config.model_dump()}")
        return self._config

    def _log(self, message: str, level: int = logging.INFO) -> None:
        if self._config.enable_logging:
            logger.log(level, message)

    async def process_scenario(self, raw: Any) -> SimulationResult:
        """Run one scenario through the pipeline. Never raises."""
        total_start = time.perf_counter()
        metrics: dict[str, Any] = {}
        stage = PipelineStage.VALIDATE

        try:
            self._log(f"Stage {stage.value}: validating input")
            start = time.perf_counter()
            validation = self.validator.validate_input(raw)
            metrics["validation_time"] = _elapsed_ms(start)

            if not validation.is_valid:
                self._log(f"Validation failed: {validation.error_message}")
                metrics["total_processing_time"] = _elapsed_ms(total_start)
                return SimulationResult(
                    success=False,
                    error=validation.error_message,
                    metrics=self._metrics(metrics, success=False, error_type=VALIDATION_ERROR_TYPE),
                )

            stage = PipelineStage.PROCESS
            self._log(f"Stage {stage.value}: classifying scenario")
            start = time.perf_counter()
            scenario = self.processor.process_scenario(validation.sanitized_input)
            metrics["processing_time"] = _elapsed_ms(start)
            self._log(
                f"Scenario classified as {scenario.scenario_type.value} "
                f"({scenario.complexity.value})",
                logging.DEBUG,
            )

            stage = PipelineStage.GENERATE
            self._log(
                f"Stage {stage.value}: generating outcomes "
                f"({'parallel' if self._config.enable_parallel_generation else 'sequential'})"
            )
            start = time.perf_counter()
            (serious, serious_ms), (fun, fun_ms) = await self._generate(scenario)
            generation_ms = _elapsed_ms(start)
            metrics["serious_generation_time"] = serious_ms
            metrics["fun_generation_time"] = fun_ms

            stage = PipelineStage.FORMAT
            self._log(f"Stage {stage.value}: formatting results")
            start = time.perf_counter()
            formatted = self._format(serious, fun, scenario, generation_ms)
            presentation = self.formatter.create_presentation_output(formatted)
            metrics["formatting_time"] = _elapsed_ms(start)

            stage = PipelineStage.DONE
            metrics["total_processing_time"] = _elapsed_ms(total_start)
            self._check_budget(metrics["total_processing_time"])
            self._log(f"Simulation completed in {metrics['total_processing_time']:.0f}ms")

            return SimulationResult(
                success=True,
                formatted_output=formatted,
                presentation_output=presentation,
                metrics=self._metrics(metrics, success=True),
            )
        except Exception as e:
            log_error(e, f"simulation stage {stage.value}")
            self._log(f"Stage {PipelineStage.ERROR.value}: simulation aborted", logging.DEBUG)
            metrics["total_processing_time"] = _elapsed_ms(total_start)
            error_type = (
                e.error_type.value.lower() if isinstance(e, WhatIfSimulatorError) else "unknown"
            )
            return SimulationResult(
                success=False,
                error=f"Unexpected failure while processing your scenario: {e}. Please try again.",
                metrics=self._metrics(metrics, success=False, error_type=error_type),
            )

    async def _generate(
        self, scenario: ProcessedScenario
    ) -> tuple[tuple[str, float], tuple[str, float]]:
        serious_call = self.serious_generator.generate_outcome(scenario)
        fun_call = self.fun_generator.generate_outcome(scenario)
        if self._config.enable_parallel_generation:
            serious, fun = await asyncio.gather(_timed(serious_call), _timed(fun_call))
            return serious, fun
        serious = await _timed(serious_call)
        fun = await _timed(fun_call)
        return serious, fun

    def _format(
        self, serious: str, fun: str, scenario: ProcessedScenario, generation_ms: float
    ) -> FormattedOutput:
        if not self.formatter.validate_outcomes(serious, fun):
            self._log("Generated outcomes failed validation, substituting fallback", logging.WARNING)
            reason = "generated content did not meet quality requirements"
            if not self.formatter.validate_outcome(serious):
                serious = create_fallback_content("serious", scenario.original_text, reason)
            if not self.formatter.validate_outcome(fun):
                fun = create_fallback_content("fun", scenario.original_text, reason)
        return self.formatter.format_results(serious, fun, scenario, round(generation_ms))

    def _check_budget(self, total_ms: float) -> None:
        if total_ms > self._config.max_processing_time:
            logger.warning(
                f"Simulation took {total_ms:.0f}ms, over the "
                f"{self._config.max_processing_time}ms budget"
            )

    def _metrics(
        self, values: dict[str, Any], success: bool, error_type: str | None = None
    ) -> ProcessingMetrics | None:
        if not self._config.enable_metrics:
            return None
        return ProcessingMetrics(success=success, error_type=error_type, **values)
