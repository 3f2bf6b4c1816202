"""Runtime configuration for the What If Simulator.

This module provides the simulator configuration model, named environment
profiles, and helpers that read overrides from environment variables.

Environment variables:
    WHATIF_ENV: Profile name (development, production, test)
    WHATIF_ENABLE_LOGGING: Override enable_logging ("true"/"false")
    WHATIF_ENABLE_METRICS: Override enable_metrics
    WHATIF_ENABLE_PARALLEL_GENERATION: Override enable_parallel_generation
    WHATIF_MAX_PROCESSING_TIME: Override max_processing_time (ms)
    WHATIF_LOG_LEVEL: Logging level name
    WHATIF_LLM_TIMEOUT: Seconds to wait for one generation request
    WHATIF_RETRY_ATTEMPTS: Attempts per generation (1-10)
"""

import logging
import os
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .errors import RetryOptions

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

DEFAULT_LLM_TIMEOUT = 60.0
DEFAULT_RETRY_ATTEMPTS = 3
MAX_RETRY_ATTEMPTS = 10


class Environment(Enum):
    """Named configuration profiles."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"


class SimulatorConfig(BaseModel):
    """Behavior switches for the orchestrator.

    Attributes:
        enable_logging: Emit stage-by-stage log lines
        enable_metrics: Attach ProcessingMetrics to results
        enable_parallel_generation: Run both lenses concurrently
        max_processing_time: Soft budget in milliseconds; exceeding it logs a warning
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    enable_logging: bool = True
    enable_metrics: bool = True
    enable_parallel_generation: bool = True
    max_processing_time: int = Field(default=30000, ge=1000)


PROFILES: dict[Environment, dict[str, Any]] = {
    Environment.DEVELOPMENT: {
        "config": SimulatorConfig(max_processing_time=30000),
        "log_level": "DEBUG",
    },
    Environment.PRODUCTION: {
        "config": SimulatorConfig(max_processing_time=20000),
        "log_level": "WARNING",
    },
    Environment.TEST: {
        "config": SimulatorConfig(
            enable_logging=False,
            enable_metrics=False,
            enable_parallel_generation=False,
            max_processing_time=10000,
        ),
        "log_level": "ERROR",
    },
}


def merge_config(
    base: SimulatorConfig, overrides: dict[str, Any] | None
) -> SimulatorConfig:
    """Return a new config with overrides applied.

    Keys may be snake_case or camelCase. None values are ignored.

    Raises:
        ValueError: On unknown keys or out-of-range values.
    """
    if not overrides:
        return base.model_copy()

    data = base.model_dump()
    for key, value in overrides.items():
        if value is None:
            continue
        data[key] = value

    # Later keys win, so a camelCase override replaces the snake_case base value
    normalized: dict[str, Any] = {}
    for key, value in data.items():
        normalized[_field_name(key)] = value

    try:
        return SimulatorConfig.model_validate(normalized)
    except ValidationError as e:
        raise ValueError(f"Invalid simulator configuration: {e}") from e


def _field_name(key: str) -> str:
    for name, field in SimulatorConfig.model_fields.items():
        if key in (name, field.alias):
            return name
    return key


def get_environment() -> Environment:
    """Get configured profile from environment.

    Returns:
        Environment enum value (development when unset or unrecognized)
    """
    env_str = os.environ.get("WHATIF_ENV", "development").lower()
    for env in Environment:
        if env.value == env_str:
            return env
    return Environment.DEVELOPMENT


def _env_bool(name: str) -> bool | None:
    value = os.environ.get(name)
    if value is None:
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str) -> int | None:
    value = os.environ.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={value!r}")
        return None


def get_simulator_config(env: Environment | None = None) -> SimulatorConfig:
    """Build simulator config from a profile plus environment overrides.

    Args:
        env: Profile to start from. If None, uses WHATIF_ENV.

    Returns:
        SimulatorConfig instance
    """
    if env is None:
        env = get_environment()

    overrides = {
        "enable_logging": _env_bool("WHATIF_ENABLE_LOGGING"),
        "enable_metrics": _env_bool("WHATIF_ENABLE_METRICS"),
        "enable_parallel_generation": _env_bool("WHATIF_ENABLE_PARALLEL_GENERATION"),
        "max_processing_time": _env_int("WHATIF_MAX_PROCESSING_TIME"),
    }
    return merge_config(PROFILES[env]["config"], overrides)


def get_log_level(env: Environment | None = None) -> str:
    """Get configured log level name (WHATIF_LOG_LEVEL wins over the profile)."""
    if env is None:
        env = get_environment()
    return os.environ.get("WHATIF_LOG_LEVEL", PROFILES[env]["log_level"]).upper()


def get_llm_timeout() -> float:
    """Get configured generation timeout in seconds."""
    value = os.environ.get("WHATIF_LLM_TIMEOUT")
    if value is None:
        return DEFAULT_LLM_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric WHATIF_LLM_TIMEOUT={value!r}")
        return DEFAULT_LLM_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_LLM_TIMEOUT


def get_retry_options() -> RetryOptions:
    """Get retry options, honoring WHATIF_RETRY_ATTEMPTS (clamped to 1-10)."""
    attempts = _env_int("WHATIF_RETRY_ATTEMPTS")
    if attempts is None:
        attempts = DEFAULT_RETRY_ATTEMPTS
    attempts = max(1, min(attempts, MAX_RETRY_ATTEMPTS))
    return RetryOptions(max_attempts=attempts)


def configure_logging(
    level: str | int | None = None, handlers: list[logging.Handler] | None = None
) -> None:
    """Configure root logging for scripts and entry points.

    Args:
        level: Level name or number. If None, uses get_log_level().
        handlers: Handlers to install instead of the default stderr stream.
    """
    if level is None:
        level = get_log_level()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
