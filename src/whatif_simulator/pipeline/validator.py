"""Input validation for "What if..." scenarios.

Validation order (first failure wins):
1. Missing input
2. Non-string input
3. Empty after sanitization
4. Too short (< MIN_LENGTH characters)
5. Too long (> MAX_LENGTH characters; sanitized text is truncated)
6. Inappropriate content
7. Not a meaningful scenario

Sanitization trims, strips angle brackets, collapses runs of whitespace to a
single space and removes one wrapping quote from each end.
"""

import logging
import re
from typing import Any

from whatif_simulator.models import ValidationResult

logger = logging.getLogger(__name__)

MIN_LENGTH = 10
MAX_LENGTH = 1000

MISSING_INPUT_MESSAGE = 'Please provide a "What if..." question to explore.'
NOT_TEXT_MESSAGE = "Unable to process input. Please try rephrasing your scenario."
TOO_SHORT_MESSAGE = (
    f'Please provide a more detailed "What if..." scenario (at least {MIN_LENGTH} characters).'
)
TOO_LONG_MESSAGE = f"Scenario is too long. Please keep it under {MAX_LENGTH} characters."
INAPPROPRIATE_MESSAGE = "Please rephrase your scenario to avoid inappropriate content."
NOT_MEANINGFUL_MESSAGE = 'Please provide a more specific "What if..." scenario that can be analyzed.'
UNEXPECTED_MESSAGE = "Unable to validate input. Please try again."

INAPPROPRIATE_PATTERNS = [
    re.compile(r"\b(hate|violence|harm|kill|death|suicide|violent)\b", re.IGNORECASE),
    re.compile(r"\b(explicit|sexual|nsfw)\b", re.IGNORECASE),
    re.compile(r"\b(racist|sexist|discriminatory)\b", re.IGNORECASE),
]

# Any of these openers makes a scenario meaningful on its own
SCENARIO_OPENERS = [
    re.compile(r"^what\s+if\b", re.IGNORECASE),
    re.compile(r"^suppose\b", re.IGNORECASE),
    re.compile(r"^imagine\s+if\b", re.IGNORECASE),
    re.compile(r"^let'?s\s+say\b", re.IGNORECASE),
    re.compile(r"^hypothetically\b", re.IGNORECASE),
]

SUBJECT_PATTERNS = [
    re.compile(
        r"\b(i|you|we|they|people|someone|everyone|nobody|animals|humans|robots)\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(the|a|an)\s+(internet|world|gravity|time|money|government|system)\b",
        re.IGNORECASE,
    ),
]

ACTION_PATTERN = re.compile(
    r"\b(could|would|might|can|will|became|become|change|changed|stop|stopped|start|started"
    r"|disappear|disappeared|teleport|fly|talk|speak|need|needed|only)\b",
    re.IGNORECASE,
)

QUESTION_OPENER = re.compile(r"^(who|when|where|why|how)\b", re.IGNORECASE)
GREETING_OPENER = re.compile(r"^(hello|hi|hey|good|thanks)\b", re.IGNORECASE)
FILLER_WORDS = re.compile(
    r"\b(random|just|some|text|words|without|meaning|structure|together|here)\b",
    re.IGNORECASE,
)

MIN_WORDS = 3


class InputValidator:
    """Validates and sanitizes raw scenario text."""

    def validate_input(self, raw: Any) -> ValidationResult:
        """Validate one raw input value.

        Never raises; an unexpected failure becomes a generic invalid result.
        """
        try:
            return self._validate(raw)
        except Exception as e:
            logger.error(f"Unexpected validation failure: {e}")
            return ValidationResult(
                is_valid=False,
                sanitized_input="",
                error_message=UNEXPECTED_MESSAGE,
            )

    def _validate(self, raw: Any) -> ValidationResult:
        if not raw:
            return ValidationResult(is_valid=False, error_message=MISSING_INPUT_MESSAGE)

        if not isinstance(raw, str):
            return ValidationResult(is_valid=False, error_message=NOT_TEXT_MESSAGE)

        sanitized = self.sanitize_input(raw)

        if not sanitized:
            return ValidationResult(is_valid=False, error_message=MISSING_INPUT_MESSAGE)

        if len(sanitized) < MIN_LENGTH:
            return ValidationResult(
                is_valid=False,
                sanitized_input=sanitized,
                error_message=TOO_SHORT_MESSAGE,
            )

        if len(sanitized) > MAX_LENGTH:
            return ValidationResult(
                is_valid=False,
                sanitized_input=sanitized[:MAX_LENGTH],
                error_message=TOO_LONG_MESSAGE,
            )

        if self.contains_inappropriate_content(sanitized):
            return ValidationResult(
                is_valid=False,
                sanitized_input=sanitized,
                error_message=INAPPROPRIATE_MESSAGE,
            )

        if not self.is_meaningful_scenario(sanitized):
            return ValidationResult(
                is_valid=False,
                sanitized_input=sanitized,
                error_message=NOT_MEANINGFUL_MESSAGE,
            )

        return ValidationResult(is_valid=True, sanitized_input=sanitized)

    def sanitize_input(self, text: str) -> str:
        """Trim, drop angle brackets, collapse whitespace and unwrap quotes."""
        cleaned = text.strip()
        cleaned = re.sub(r"[<>]", "", cleaned)
        cleaned = re.sub(r"\s+", " ", cleaned)
        cleaned = re.sub(r"^[\"']|[\"']$", "", cleaned)
        return cleaned.strip()

    def contains_inappropriate_content(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in INAPPROPRIATE_PATTERNS)

    def is_meaningful_scenario(self, text: str) -> bool:
        """Whether text reads like a scenario that can be analyzed.

        Canonical openers ("What if", "Suppose", ...) are always accepted.
        Otherwise the text needs a subject, an action verb and at least
        MIN_WORDS words, and must not look like a plain question, a greeting,
        or filler text.
        """
        stripped = text.strip()
        if any(pattern.search(stripped) for pattern in SCENARIO_OPENERS):
            return True

        has_subject = any(pattern.search(stripped) for pattern in SUBJECT_PATTERNS)
        has_action = bool(ACTION_PATTERN.search(stripped))
        has_enough_words = len(stripped.split()) >= MIN_WORDS

        if QUESTION_OPENER.search(stripped) or GREETING_OPENER.search(stripped):
            return False
        if FILLER_WORDS.search(stripped):
            return False

        return has_subject and has_action and has_enough_words
