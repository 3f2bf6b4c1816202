"""Serious lens: realistic cause-and-effect analysis."""

import re

from whatif_simulator.models import ProcessedScenario
from whatif_simulator.prompts import format_serious_prompt, get_serious_context_note

from .base import SHORT_RESPONSE_LENGTH, OutcomeGenerator, collapse_blank_lines, normalize_bullets

SERIOUS_HEADER = "**Realistic Analysis:**"

TRANSITION_WORDS = re.compile(
    r"(?<!\*\*)\b(Therefore|However|Additionally|Furthermore|In conclusion)\b(?!\*\*)"
)


class SeriousOutcomeGenerator(OutcomeGenerator):
    """Generates a realistic analysis of a scenario."""

    lens = "serious"

    def build_prompt(self, scenario: ProcessedScenario) -> str:
        return format_serious_prompt(scenario)

    def decorate(self, text: str, scenario: ProcessedScenario) -> str:
        formatted = text.strip()

        lowered = formatted.lower()
        if "analysis" not in lowered and "outcome" not in lowered:
            formatted = f"{SERIOUS_HEADER}\n\n{formatted}"

        if len(formatted) < SHORT_RESPONSE_LENGTH:
            formatted += f"\n\n{get_serious_context_note(scenario)}"

        formatted = collapse_blank_lines(formatted)
        formatted = normalize_bullets(formatted)
        formatted = TRANSITION_WORDS.sub(r"**\1**", formatted)
        return formatted.strip()
