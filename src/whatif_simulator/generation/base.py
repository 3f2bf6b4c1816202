"""Shared machinery for the serious and fun outcome generators.

One generation attempt:
1. Build the lens prompt from the processed scenario
2. Call the generation service (failures are classified for retry)
3. Remove recognized inappropriate terms from the response
4. Reject empty, short, or generic-failure responses (retryable)
5. Apply lens-specific decoration

Attempts run under ``with_retry``. When every attempt fails the generator
returns deterministic fallback content; ``generate_outcome`` never raises.
"""

import logging
import re
from abc import ABC, abstractmethod

from whatif_simulator.errors import (
    DEFAULT_MIN_CONTENT_LENGTH,
    ErrorType,
    Lens,
    RetryOptions,
    WhatIfSimulatorError,
    classify_generation_error,
    create_fallback_content,
    log_error,
    validate_content,
    with_retry,
)
from whatif_simulator.llm import GenerationService
from whatif_simulator.models import ProcessedScenario

logger = logging.getLogger(__name__)

# Terms stripped from generated text before it is shown
FILTERED_TERMS = re.compile(
    r"\b(hate|violence|violent|harm|harmful|kill|death|suicide|explicit|sexual|nsfw"
    r"|racist|sexist|discriminatory|discrimination|offensive|dangerous)\b",
    re.IGNORECASE,
)

# Numbered markers and -, *, + bullets at any indentation. The marker must be
# followed by whitespace so "**bold**" lines are left alone.
BULLET_MARKER = re.compile(r"^[ \t]*(?:\d+[.)]|[-*+])[ \t]+", re.MULTILINE)
BULLET = "• "

SHORT_RESPONSE_LENGTH = 100


class OutcomeGenerator(ABC):
    """Base class for one generation lens.

    Args:
        generation_service: The text generation capability
        retry_options: Retry policy for generation attempts
        min_content_length: Minimum length of an acceptable response
    """

    lens: Lens

    def __init__(
        self,
        generation_service: GenerationService,
        retry_options: RetryOptions | None = None,
        min_content_length: int = DEFAULT_MIN_CONTENT_LENGTH,
    ):
        self.generation_service = generation_service
        self.retry_options = retry_options
        self.min_content_length = min_content_length

    @abstractmethod
    def build_prompt(self, scenario: ProcessedScenario) -> str:
        """Build the lens prompt for a scenario."""

    @abstractmethod
    def decorate(self, text: str, scenario: ProcessedScenario) -> str:
        """Apply lens-specific formatting to validated text."""

    async def generate_outcome(self, scenario: ProcessedScenario) -> str:
        """Generate this lens's outcome, falling back to template content."""
        context = f'{self.lens} outcome for "{scenario.original_text}"'

        async def attempt() -> str:
            return await self._attempt(scenario, context)

        try:
            return await with_retry(attempt, self.retry_options)
        except Exception as e:
            log_error(e, context)
            reason = e.message if isinstance(e, WhatIfSimulatorError) else str(e)
            return create_fallback_content(self.lens, scenario.original_text, reason)

    async def _attempt(self, scenario: ProcessedScenario, context: str) -> str:
        prompt = self.build_prompt(scenario)
        try:
            response = await self.generation_service.generate_response(prompt)
        except WhatIfSimulatorError:
            raise
        except Exception as e:
            raise classify_generation_error(e, context) from e

        filtered = filter_content(response) if isinstance(response, str) else ""
        if not validate_content(filtered, self.min_content_length):
            raise WhatIfSimulatorError(
                "AI response was too short or invalid",
                ErrorType.AI_GENERATION,
                retryable=True,
            )
        return self.decorate(filtered, scenario)


def filter_content(text: str) -> str:
    """Remove recognized inappropriate terms and tidy the gaps they leave."""
    filtered = FILTERED_TERMS.sub("", text.strip())
    filtered = re.sub(r"[ \t]{2,}", " ", filtered)
    filtered = re.sub(r"[ \t]+([.,!?;:])", r"\1", filtered)
    return filtered.strip()


def normalize_bullets(text: str) -> str:
    """Rewrite numbered and dash/star/plus list markers as the bullet glyph."""
    return BULLET_MARKER.sub(BULLET, text)


def collapse_blank_lines(text: str) -> str:
    return re.sub(r"\n{3,}", "\n\n", text)
