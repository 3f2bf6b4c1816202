"""Formatting of the dual serious/fun output.

Both versions are cleaned with the same rules:
- Three or more consecutive newlines collapse to one blank line
- Three or more consecutive spaces collapse to one
- A single newline after sentence-ending punctuation becomes a paragraph break

Presentation layout, in order: header (type emoji, type label, complexity),
the serious section, a separator, the fun section, and a trailing
"Generated in {ms}ms" line.
"""

import logging
import re

from pydantic import ValidationError

from whatif_simulator.errors import is_generic_failure
from whatif_simulator.models import FormattedOutput, OutputMetadata, ProcessedScenario

logger = logging.getLogger(__name__)

SERIOUS_LABEL = "🎯 Serious Analysis"
FUN_LABEL = "🎭 Fun Interpretation"
SEPARATOR = "\n" + "─" * 50 + "\n"
SECTION_SPACING = "\n\n"

SERIOUS_FALLBACK_LABEL = "**Serious Analysis:**"
FUN_FALLBACK_LABEL = "**Fun Interpretation:**"

TYPE_EMOJI = {
    "personal": "👤",
    "professional": "💼",
    "historical": "📚",
    "hypothetical": "🤔",
}
UNKNOWN_EMOJI = "❓"
UNKNOWN_LABEL = "Unknown"

DEFAULT_MIN_OUTCOME_LENGTH = 10

# Header is the first line and the timing trailer the last; generated text sits between
_HEADER_TYPE = re.compile(r"\A[^\n]*?Scenario Type: (\w+)")
_GENERATED_IN = re.compile(r"Generated in (\d+)ms\s*\Z")


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


class OutputFormatter:
    """Merges serious and fun outcomes into a FormattedOutput and renders it.

    Args:
        min_outcome_length: Minimum trimmed length for each outcome
    """

    def __init__(self, min_outcome_length: int = DEFAULT_MIN_OUTCOME_LENGTH):
        self.min_outcome_length = min_outcome_length

    def validate_outcomes(self, serious: str | None, fun: str | None) -> bool:
        """Both outcomes are strings of at least ``min_outcome_length`` characters."""
        return self.validate_outcome(serious) and self.validate_outcome(fun)

    def validate_outcome(self, outcome: str | None) -> bool:
        """One outcome is a string of at least ``min_outcome_length`` characters."""
        return isinstance(outcome, str) and len(outcome.strip()) >= self.min_outcome_length

    def format_results(
        self,
        serious: str,
        fun: str,
        scenario: ProcessedScenario | None,
        processing_time_ms: int | float,
    ) -> FormattedOutput:
        """Clean both outcomes and attach metadata.

        Never raises. An outcome that is too short or reads like a generic
        failure is replaced by a fallback-labeled version.
        """
        try:
            serious_version = self._quality_checked(serious, "serious", scenario)
            fun_version = self._quality_checked(fun, "fun", scenario)
            return FormattedOutput(
                serious_version=serious_version,
                fun_version=fun_version,
                metadata=self._metadata(scenario, processing_time_ms),
            )
        except (ValidationError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Output formatting failed, using fallback: {e}")
            return self.create_fallback_output(serious, fun, scenario, processing_time_ms)

    def _quality_checked(
        self, outcome: str, lens: str, scenario: ProcessedScenario | None
    ) -> str:
        if self.validate_outcome(outcome) and not is_generic_failure(outcome):
            return self.clean_text(outcome)
        logger.warning(f"{lens} outcome failed quality check, substituting fallback")
        return self._fallback_version(lens, None, scenario)

    def _fallback_version(
        self, lens: str, outcome: str | None, scenario: ProcessedScenario | None
    ) -> str:
        if lens == "serious":
            label = SERIOUS_FALLBACK_LABEL
            noun = "serious analysis"
        else:
            label = FUN_FALLBACK_LABEL
            noun = "fun interpretation"

        if isinstance(outcome, str) and outcome.strip():
            body = outcome.strip()
        elif scenario is not None and scenario.original_text:
            body = f'Unable to generate a {noun} for "{scenario.original_text}". Please try again.'
        else:
            body = f"Unable to generate {noun} due to formatting error."
        return f"{label}\n\n{body}"

    @staticmethod
    def _metadata(
        scenario: ProcessedScenario | None, processing_time_ms: int | float
    ) -> OutputMetadata:
        processing_time = max(0, int(processing_time_ms or 0))
        if scenario is None:
            return OutputMetadata(processing_time=processing_time)
        return OutputMetadata(
            processing_time=processing_time,
            scenario_type=scenario.scenario_type.value,
            complexity=scenario.complexity.value,
        )

    def create_fallback_output(
        self,
        serious: str | None,
        fun: str | None,
        scenario: ProcessedScenario | None,
        processing_time_ms: int | float,
    ) -> FormattedOutput:
        """FormattedOutput carrying whatever partial text is available."""
        try:
            metadata = self._metadata(scenario, processing_time_ms)
        except (TypeError, ValueError):
            metadata = OutputMetadata()
        return FormattedOutput(
            serious_version=self._fallback_version("serious", serious, scenario),
            fun_version=self._fallback_version("fun", fun, scenario),
            metadata=metadata,
        )

    def clean_text(self, text: str) -> str:
        cleaned = text.strip()
        cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
        cleaned = re.sub(r" {3,}", " ", cleaned)
        cleaned = re.sub(r"(?<=[.!?:✨🎉🚀])\n(?=[^\n•])", "\n\n", cleaned)
        return cleaned

    def create_presentation_output(self, output: FormattedOutput) -> str:
        """Render the combined, human-readable presentation string."""
        try:
            return "".join(
                [
                    self._header(output.metadata),
                    self._section(SERIOUS_LABEL, output.serious_version),
                    SEPARATOR,
                    self._section(FUN_LABEL, output.fun_version),
                    f"⏱️ Generated in {output.metadata.processing_time}ms",
                ]
            )
        except AttributeError as e:
            logger.error(f"Presentation rendering failed, using fallback: {e}")
            serious = getattr(output, "serious_version", None) or "Not available"
            fun = getattr(output, "fun_version", None) or "Not available"
            return (
                "**What If Simulator Results**\n\n"
                "**Error:** Unable to format presentation properly.\n\n"
                f"**Serious Version:**\n{serious}\n"
                f"{SEPARATOR}\n"
                f"**Fun Version:**\n{fun}"
            )

    def _header(self, metadata: OutputMetadata) -> str:
        scenario_type = metadata.scenario_type
        if scenario_type in TYPE_EMOJI:
            header = f"{TYPE_EMOJI[scenario_type]} Scenario Type: {capitalize_first(scenario_type)}"
        else:
            header = f"{UNKNOWN_EMOJI} Scenario Type: {UNKNOWN_LABEL}"
        if metadata.complexity:
            header += f" | Complexity: {capitalize_first(metadata.complexity)}"
        return header + SECTION_SPACING

    @staticmethod
    def _section(label: str, content: str) -> str:
        return f"{label}{SECTION_SPACING}{content}{SECTION_SPACING}"


def parse_presentation_header(presentation: str) -> tuple[str | None, int | None]:
    """Recover the scenario type label and processing time from a presentation.

    Returns:
        (type label, processing time in ms); either is None when absent.
    """
    type_match = _HEADER_TYPE.search(presentation)
    time_match = _GENERATED_IN.search(presentation)
    return (
        type_match.group(1) if type_match else None,
        int(time_match.group(1)) if time_match else None,
    )
