"""Tests for the pipeline orchestrator."""

import asyncio
import logging
from unittest.mock import patch

import pytest

from whatif_simulator import ErrorType, WhatIfSimulator, WhatIfSimulatorError
from whatif_simulator.config import SimulatorConfig
from whatif_simulator.pipeline.formatter import FUN_LABEL, SERIOUS_LABEL
from whatif_simulator.pipeline.validator import MISSING_INPUT_MESSAGE

SCENARIO = "What if everyone could read minds?"


class ConcurrencyTracker:
    """Generation service that records how many requests overlap."""

    def __init__(self):
        self.active = 0
        self.max_active = 0

    async def generate_response(self, prompt: str) -> str:
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        await asyncio.sleep(0.01)
        self.active -= 1
        lens = "serious realistic analysis" if "serious" in prompt else "fun creative take"
        return f"A {lens} of the scenario, long enough to pass every quality check."


class TestProcessScenario:
    """Tests for the happy path and failure modes."""

    @pytest.mark.asyncio
    async def test_success(self, simulator):
        result = await simulator.process_scenario(SCENARIO)

        assert result.success
        assert result.error is None
        output = result.formatted_output
        assert output.serious_version != output.fun_version
        assert len(output.serious_version) >= 50
        assert len(output.fun_version) >= 50
        assert output.metadata.scenario_type == "hypothetical"
        assert output.metadata.complexity == "moderate"
        assert isinstance(output.metadata.processing_time, int)
        assert SERIOUS_LABEL in result.presentation_output
        assert FUN_LABEL in result.presentation_output

    @pytest.mark.asyncio
    async def test_metrics_on_success(self, simulator):
        result = await simulator.process_scenario(SCENARIO)

        metrics = result.metrics
        assert metrics.success
        assert metrics.error_type is None
        assert metrics.total_processing_time >= metrics.validation_time >= 0
        assert metrics.serious_generation_time >= 0
        assert metrics.fun_generation_time >= 0
        assert metrics.formatting_time >= 0

    @pytest.mark.asyncio
    async def test_validation_failure(self, simulator, lens_service):
        result = await simulator.process_scenario("")

        assert not result.success
        assert result.error == MISSING_INPUT_MESSAGE
        assert result.formatted_output is None
        assert result.metrics.error_type == "validation"
        assert result.metrics.processing_time == 0
        assert lens_service.prompts == []

    @pytest.mark.asyncio
    async def test_generation_failure_still_succeeds(self, failing_simulator):
        """A capability that always rejects yields fallback content, not an error."""
        result = await failing_simulator.process_scenario(SCENARIO)

        assert result.success
        assert result.formatted_output.serious_version.startswith("**Analysis Framework:**")
        assert result.formatted_output.fun_version.startswith("**Creative Prompt:**")
        assert result.metrics.success

    @pytest.mark.asyncio
    async def test_short_outcome_replaced_alone(self, simulator):
        """Only the outcome that is too short is swapped for fallback content."""
        with patch.object(simulator.serious_generator, "generate_outcome", return_value="tiny"):
            result = await simulator.process_scenario(SCENARIO)

        assert result.success
        output = result.formatted_output
        assert output.serious_version.startswith("**Analysis Framework:**")
        assert not output.fun_version.startswith("**Creative Prompt:**")

    @pytest.mark.asyncio
    async def test_unexpected_failure(self, simulator):
        with patch.object(
            simulator.processor, "process_scenario", side_effect=RuntimeError("boom")
        ):
            result = await simulator.process_scenario(SCENARIO)

        assert not result.success
        assert "boom" in result.error
        assert "Please try again" in result.error
        assert result.metrics.error_type == "unknown"

    @pytest.mark.asyncio
    async def test_classified_failure_reports_type(self, simulator):
        error = WhatIfSimulatorError("cannot render", ErrorType.FORMATTING)
        with patch.object(simulator.formatter, "create_presentation_output", side_effect=error):
            result = await simulator.process_scenario(SCENARIO)

        assert not result.success
        assert result.metrics.error_type == "formatting"

    @pytest.mark.asyncio
    async def test_concurrent_requests(self, simulator):
        results = await asyncio.gather(
            simulator.process_scenario(SCENARIO),
            simulator.process_scenario("What if cats could talk?"),
            simulator.process_scenario("hi"),
        )

        assert [r.success for r in results] == [True, True, False]


class TestGenerationMode:
    """Tests for parallel and sequential generation."""

    @pytest.mark.asyncio
    async def test_parallel_generation_overlaps(self, fast_retry):
        tracker = ConcurrencyTracker()
        simulator = WhatIfSimulator(tracker, retry_options=fast_retry)

        result = await simulator.process_scenario(SCENARIO)

        assert result.success
        assert tracker.max_active == 2

    @pytest.mark.asyncio
    async def test_sequential_generation(self, fast_retry):
        tracker = ConcurrencyTracker()
        simulator = WhatIfSimulator(
            tracker, config={"enableParallelGeneration": False}, retry_options=fast_retry
        )

        result = await simulator.process_scenario(SCENARIO)

        assert result.success
        assert tracker.max_active == 1

    @pytest.mark.asyncio
    async def test_modes_produce_identical_content(self, lens_service, fast_retry):
        parallel = WhatIfSimulator(
            lens_service, config={"enableParallelGeneration": True}, retry_options=fast_retry
        )
        sequential = WhatIfSimulator(
            lens_service, config={"enableParallelGeneration": False}, retry_options=fast_retry
        )

        parallel_result = await parallel.process_scenario(SCENARIO)
        sequential_result = await sequential.process_scenario(SCENARIO)

        assert parallel_result.success and sequential_result.success
        parallel_output = parallel_result.formatted_output
        sequential_output = sequential_result.formatted_output
        assert parallel_output.serious_version == sequential_output.serious_version
        assert parallel_output.fun_version == sequential_output.fun_version
        assert parallel_output.metadata.scenario_type == sequential_output.metadata.scenario_type
        assert parallel_output.metadata.complexity == sequential_output.metadata.complexity


class TestConfiguration:
    """Tests for runtime configuration."""

    def test_defaults(self, simulator):
        assert simulator.get_config() == SimulatorConfig()

    def test_mapping_config(self, lens_service):
        simulator = WhatIfSimulator(lens_service, config={"maxProcessingTime": 5000})

        assert simulator.config.max_processing_time == 5000
        assert simulator.config.enable_metrics

    def test_partial_update(self, simulator):
        config = simulator.update_config({"enableMetrics": False})

        assert not config.enable_metrics
        assert config.enable_logging
        assert simulator.get_config() is config

    @pytest.mark.parametrize(
        "overrides", [{"max_processing_time": 10}, {"unknown_key": True}]
    )
    def test_invalid_update(self, simulator, overrides):
        with pytest.raises(ValueError):
            simulator.update_config(overrides)

        assert simulator.get_config() == SimulatorConfig()

    @pytest.mark.asyncio
    async def test_metrics_disabled(self, lens_service, fast_retry, test_profile_config):
        simulator = WhatIfSimulator(lens_service, config=test_profile_config, retry_options=fast_retry)

        result = await simulator.process_scenario(SCENARIO)

        assert result.success
        assert result.metrics is None

    @pytest.mark.asyncio
    async def test_logging_disabled(self, lens_service, fast_retry, caplog):
        simulator = WhatIfSimulator(
            lens_service, config={"enable_logging": False}, retry_options=fast_retry
        )
        caplog.set_level(logging.DEBUG, logger="whatif_simulator.simulator")

        await simulator.process_scenario(SCENARIO)

        assert not [r for r in caplog.records if r.name == "whatif_simulator.simulator"]

    def test_budget_warning(self, simulator, caplog):
        caplog.set_level(logging.WARNING, logger="whatif_simulator.simulator")

        simulator._check_budget(simulator.config.max_processing_time + 1)

        assert "budget" in caplog.text
