"""Tests for dual-output formatting and presentation."""

from types import SimpleNamespace

import pytest

from whatif_simulator.models import (
    Complexity,
    FormattedOutput,
    OutputMetadata,
    ProcessedScenario,
    ScenarioType,
)
from whatif_simulator.pipeline import OutputFormatter, parse_presentation_header
from whatif_simulator.pipeline.formatter import (
    FUN_FALLBACK_LABEL,
    FUN_LABEL,
    SEPARATOR,
    SERIOUS_FALLBACK_LABEL,
    SERIOUS_LABEL,
)

SERIOUS = "Realistic analysis: trust would erode quickly.\nInstitutions would adapt."
FUN = "Imagine poker nights becoming silent staring contests!"


@pytest.fixture
def formatter():
    return OutputFormatter()


@pytest.fixture
def scenario():
    return ProcessedScenario(
        original_text="What if everyone could read minds?",
        scenario_type=ScenarioType.HYPOTHETICAL,
        complexity=Complexity.MODERATE,
    )


class TestValidateOutcomes:
    """Tests for the minimum-length outcome check."""

    def test_both_long_enough(self, formatter):
        assert formatter.validate_outcomes(SERIOUS, FUN)

    def test_single_outcome(self, formatter):
        assert formatter.validate_outcome(SERIOUS)
        assert not formatter.validate_outcome("short")
        assert not formatter.validate_outcome(None)

    @pytest.mark.parametrize("serious,fun", [("short", FUN), (SERIOUS, "   tiny   "), (None, FUN)])
    def test_rejects_short_or_missing(self, formatter, serious, fun):
        assert not formatter.validate_outcomes(serious, fun)


class TestFormatResults:
    """Tests for cleaning and quality checks."""

    def test_attaches_metadata(self, formatter, scenario):
        output = formatter.format_results(SERIOUS, FUN, scenario, 1234)

        assert output.metadata.processing_time == 1234
        assert output.metadata.scenario_type == "hypothetical"
        assert output.metadata.complexity == "moderate"

    def test_cleans_both_versions(self, formatter, scenario):
        output = formatter.format_results(SERIOUS, FUN, scenario, 10)

        assert output.serious_version == (
            "Realistic analysis: trust would erode quickly.\n\nInstitutions would adapt."
        )
        assert output.fun_version == FUN

    def test_generic_failure_text_is_replaced(self, formatter, scenario):
        output = formatter.format_results("An error occurred while generating.", FUN, scenario, 10)

        assert output.serious_version.startswith(SERIOUS_FALLBACK_LABEL)
        assert scenario.original_text in output.serious_version
        assert output.fun_version == FUN

    def test_short_outcome_is_replaced(self, formatter, scenario):
        output = formatter.format_results(SERIOUS, "meh", scenario, 10)

        assert output.fun_version.startswith(FUN_FALLBACK_LABEL)

    def test_without_scenario_type_is_unknown(self, formatter):
        output = formatter.format_results(SERIOUS, FUN, None, 5)

        assert output.metadata.scenario_type == "unknown"
        assert output.metadata.complexity is None

    def test_bad_processing_time_falls_back(self, formatter, scenario):
        """A processing time that cannot be read degrades to a fallback output."""
        output = formatter.format_results(SERIOUS, FUN, scenario, "not-a-number")

        assert output.serious_version.startswith(SERIOUS_FALLBACK_LABEL)
        assert "trust would erode" in output.serious_version
        assert output.fun_version.startswith(FUN_FALLBACK_LABEL)
        assert output.metadata.processing_time == 0


class TestCleanText:
    """Tests for whitespace normalization."""

    def test_collapses_blank_lines(self, formatter):
        assert formatter.clean_text("One.\n\n\n\nTwo.") == "One.\n\nTwo."

    def test_collapses_space_runs(self, formatter):
        assert formatter.clean_text("wide    gap") == "wide gap"

    def test_sentence_end_becomes_paragraph(self, formatter):
        assert formatter.clean_text("First.\nSecond") == "First.\n\nSecond"

    def test_bullets_stay_together(self, formatter):
        assert formatter.clean_text("Points:\n• one\n• two") == "Points:\n• one\n• two"


class TestPresentation:
    """Tests for the combined presentation string."""

    def test_layout(self, formatter, scenario):
        output = formatter.format_results(SERIOUS, FUN, scenario, 1234)

        text = formatter.create_presentation_output(output)

        assert text.startswith("🤔 Scenario Type: Hypothetical | Complexity: Moderate\n\n")
        assert text.index(SERIOUS_LABEL) < text.index(SEPARATOR) < text.index(FUN_LABEL)
        assert text.endswith("⏱️ Generated in 1234ms")

    def test_header_round_trip(self, formatter, scenario):
        output = formatter.format_results(SERIOUS, FUN, scenario, 987)

        label, processing_time = parse_presentation_header(
            formatter.create_presentation_output(output)
        )

        assert label == "Hypothetical"
        assert processing_time == 987

    def test_header_round_trip_ignores_lookalike_content(self, formatter, scenario):
        """Generated text quoting the header or trailer phrases does not win."""
        serious = "The findings were Generated in 5ms by the lab, per Scenario Type: Fake."
        output = formatter.format_results(serious, FUN, scenario, 1234)

        label, processing_time = parse_presentation_header(
            formatter.create_presentation_output(output)
        )

        assert label == "Hypothetical"
        assert processing_time == 1234

    def test_unknown_type_header(self, formatter):
        output = FormattedOutput(
            serious_version=SERIOUS,
            fun_version=FUN,
            metadata=OutputMetadata(processing_time=1, scenario_type="mystery"),
        )

        text = formatter.create_presentation_output(output)

        assert text.startswith("❓ Scenario Type: Unknown\n\n")

    def test_broken_output_uses_fallback_presentation(self, formatter):
        broken = SimpleNamespace(serious_version="Serious text", fun_version="Fun text")

        text = formatter.create_presentation_output(broken)

        assert "**Serious Version:**\nSerious text" in text
        assert "**Fun Version:**\nFun text" in text

    def test_parse_missing_header(self):
        assert parse_presentation_header("no header here") == (None, None)
