"""Fun lens: creative, humorous interpretation."""

import re

from whatif_simulator.models import ProcessedScenario
from whatif_simulator.prompts import format_fun_prompt, get_fun_plot_twist

from .base import SHORT_RESPONSE_LENGTH, OutcomeGenerator, collapse_blank_lines, normalize_bullets

FUN_HEADER = "**Creative Interpretation:**"

PLAYFUL_WORDS = re.compile(r"\b(fun|creative|imagine)\b", re.IGNORECASE)

EXCITING_WORDS = re.compile(
    r"(?<!\*\*)\b(amazing|incredible|fantastic|wonderful|hilarious|absurd|magical|extraordinary)\b(?!\*\*)",
    re.IGNORECASE,
)

EXCLAMATION_RUN = re.compile(r"!+")
EXCLAMATION_SUFFIXES = {1: " ✨", 2: " 🎉"}
LONG_RUN_SUFFIX = " 🚀"


def _decorate_exclamations(match: re.Match) -> str:
    run = match.group(0)
    return run + EXCLAMATION_SUFFIXES.get(len(run), LONG_RUN_SUFFIX)


class FunOutcomeGenerator(OutcomeGenerator):
    """Generates a playful, imaginative take on a scenario."""

    lens = "fun"

    def build_prompt(self, scenario: ProcessedScenario) -> str:
        return format_fun_prompt(scenario)

    def decorate(self, text: str, scenario: ProcessedScenario) -> str:
        formatted = text.strip()

        if not PLAYFUL_WORDS.search(formatted):
            formatted = f"{FUN_HEADER}\n\n{formatted}"

        if len(formatted) < SHORT_RESPONSE_LENGTH:
            formatted += f"\n\n{get_fun_plot_twist(scenario)}"

        formatted = collapse_blank_lines(formatted)
        formatted = normalize_bullets(formatted)
        formatted = EXCITING_WORDS.sub(r"**\1**", formatted)
        formatted = EXCLAMATION_RUN.sub(_decorate_exclamations, formatted)
        return formatted.strip()
