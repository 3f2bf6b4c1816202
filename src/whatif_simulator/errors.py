"""Error taxonomy, retry policy and fallback content.

Errors raised by the external generation capability are classified with a
substring heuristic on the message. This is a best-effort contract, not a
protocol: a backend that reports structured error codes would let
``classify_generation_error`` stop sniffing strings.

Retry policy:
- Only retryable errors are retried (network, timeout, rate limit, and
  generation errors that do not look like a malformed request)
- Exceptions that were never classified count as retryable (UNKNOWN bucket)
- Delay is exponential backoff capped at ``max_delay``, plus random jitter
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Literal, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Lens = Literal["serious", "fun"]


class ErrorType(str, Enum):
    """Kinds of failure the pipeline distinguishes."""

    INPUT_VALIDATION = "INPUT_VALIDATION"
    AI_GENERATION = "AI_GENERATION"
    PROCESSING = "PROCESSING"
    FORMATTING = "FORMATTING"
    NETWORK = "NETWORK"
    TIMEOUT = "TIMEOUT"
    RATE_LIMIT = "RATE_LIMIT"
    UNKNOWN = "UNKNOWN"


class WhatIfSimulatorError(Exception):
    """A classified pipeline error.

    Attributes:
        error_type: Which kind of failure this is
        original_error: The exception this one wraps, if any
        retryable: Whether ``with_retry`` may try the operation again
    """

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        original_error: BaseException | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.original_error = original_error
        self.retryable = retryable


@dataclass(frozen=True)
class RetryOptions:
    """Retry configuration. Delays are in seconds."""

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 10.0
    backoff_multiplier: float = 2.0
    jitter: float = 1.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")

    def delay_for_attempt(self, attempt: int) -> float:
        """Backoff delay (without jitter) after the given 1-based attempt."""
        delay = self.base_delay * self.backoff_multiplier ** (attempt - 1)
        return min(delay, self.max_delay)


DEFAULT_RETRY_OPTIONS = RetryOptions()


def is_retryable(error: BaseException) -> bool:
    """Whether an error may be retried.

    Unclassified exceptions are treated as retryable.
    """
    if isinstance(error, WhatIfSimulatorError):
        return error.retryable
    return True


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    options: RetryOptions | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run an async operation, retrying retryable failures with backoff.

    Args:
        operation: Zero-argument callable returning a fresh awaitable per attempt.
        options: Retry configuration (defaults to DEFAULT_RETRY_OPTIONS).
        sleep: Awaitable sleep function, injectable for tests.

    Returns:
        The operation's result.

    Raises:
        WhatIfSimulatorError: The first non-retryable error unchanged, or a
            non-retryable wrapper once all attempts are exhausted.
    """
    config = options or DEFAULT_RETRY_OPTIONS
    last_error: BaseException | None = None

    for attempt in range(1, config.max_attempts + 1):
        try:
            return await operation()
        except Exception as e:
            last_error = e
            if not is_retryable(e):
                raise

            if attempt == config.max_attempts:
                break

            delay = config.delay_for_attempt(attempt) + random.uniform(0, config.jitter)
            logger.debug(
                f"Attempt {attempt}/{config.max_attempts} failed ({e}); retrying in {delay:.2f}s"
            )
            await sleep(delay)

    error_type = (
        last_error.error_type
        if isinstance(last_error, WhatIfSimulatorError)
        else ErrorType.UNKNOWN
    )
    raise WhatIfSimulatorError(
        f"Operation failed after {config.max_attempts} attempts: {last_error}",
        error_type,
        last_error,
        retryable=False,
    )


def classify_generation_error(error: BaseException, context: str) -> WhatIfSimulatorError:
    """Classify an error raised by the generation capability.

    Order matters: the first matching substring wins.
    """
    error_type = ErrorType.AI_GENERATION
    retryable = True

    lower_message = str(error).lower()
    if "timeout" in lower_message:
        error_type = ErrorType.TIMEOUT
    elif "rate limit" in lower_message or "429" in lower_message:
        error_type = ErrorType.RATE_LIMIT
    elif "network" in lower_message or "connection" in lower_message:
        error_type = ErrorType.NETWORK
    elif "invalid" in lower_message or "malformed" in lower_message:
        retryable = False

    return WhatIfSimulatorError(
        f"AI generation failed for {context}: {error}",
        error_type,
        error,
        retryable,
    )


# Phrases that mark a capability's own error text masquerading as content
GENERIC_FAILURE_PHRASES: tuple[str, ...] = (
    "error occurred",
    "failed to generate",
    "unable to complete",
    "sorry, i cannot",
    "i can't process",
)

DEFAULT_MIN_CONTENT_LENGTH = 50


def is_generic_failure(content: str) -> bool:
    """Whether content contains a generic failure phrase."""
    lowered = content.lower()
    return any(phrase in lowered for phrase in GENERIC_FAILURE_PHRASES)


def validate_content(content: str | None, min_length: int = DEFAULT_MIN_CONTENT_LENGTH) -> bool:
    """Check generated content meets the minimum quality bar."""
    if not content or not isinstance(content, str):
        return False
    trimmed = content.strip()
    return len(trimmed) >= min_length and not is_generic_failure(trimmed)


def create_fallback_content(lens: Lens, scenario: str, reason: str) -> str:
    """Build deterministic substitute text for a lens whose generation failed."""
    base_message = f"Unable to generate {lens} analysis due to: {reason}"

    if lens == "serious":
        return f"""**Analysis Framework:**

{base_message}

**Suggested Analysis Approach:**
• Consider the immediate consequences of: "{scenario}"
• Evaluate potential challenges and obstacles
• Think about short-term and long-term effects
• Assess the likelihood of different outcomes
• Consider real-world constraints and factors

**Next Steps:**
Please try rephrasing your scenario or try again later. You can also analyze this scenario manually using the framework above."""

    return f"""**Creative Prompt:**

{base_message}

**Imagination Starters:**
• What if "{scenario}" happened in a cartoon world?
• How would this scenario play out with magical elements?
• What unexpected characters might get involved?
• What humorous complications could arise?
• How could this lead to delightfully absurd consequences?

**Next Steps:**
Please try rephrasing your scenario or try again later. Use the creative prompts above to spark your own imagination and interpretation!"""


def log_error(error: BaseException, context: str) -> None:
    """Log an error with its classification."""
    if isinstance(error, WhatIfSimulatorError):
        error_type = error.error_type.value
        retryable = error.retryable
    else:
        error_type = ErrorType.UNKNOWN.value
        retryable = is_retryable(error)
    logger.error(
        f"WhatIfSimulator error in {context}: {error} (type={error_type}, retryable={retryable})"
    )
