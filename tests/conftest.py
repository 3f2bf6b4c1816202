"""Shared pytest fixtures and markers for all tests."""

import pytest

from whatif_simulator.api import CounterSessionIdGenerator, WhatIfAPI
from whatif_simulator.config import PROFILES, Environment
from whatif_simulator.errors import RetryOptions
from whatif_simulator.simulator import WhatIfSimulator

SERIOUS_RESPONSE = (
    "This analysis looks at the likely outcome step by step.\n"
    "1. Trust between people would change overnight.\n"
    "2. Privacy law would need a complete rewrite.\n"
    "However, most people would adapt within a generation."
)

FUN_RESPONSE = (
    "Imagine a world where every thought is broadcast like a radio show!\n"
    "- Poker nights become amazing silent staring contests.\n"
    "- Surprise parties are officially extinct!!"
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "llm_integration: marks tests requiring LLM API calls"
    )
    config.addinivalue_line(
        "markers", "webapp: marks webapp-specific tests"
    )
    config.addinivalue_line(
        "markers", "cli: marks Textual app tests"
    )


class LensAwareGenerationService:
    """Answers serious prompts and fun prompts with different canned text."""

    def __init__(self, serious: str = SERIOUS_RESPONSE, fun: str = FUN_RESPONSE):
        self.serious = serious
        self.fun = fun
        self.prompts: list[str] = []

    async def generate_response(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if "serious" in prompt:
            return self.serious
        return self.fun


class FailingGenerationService:
    """Rejects every request with the same error message."""

    def __init__(self, message: str = "Service temporarily unavailable"):
        self.message = message
        self.calls = 0

    async def generate_response(self, prompt: str) -> str:
        self.calls += 1
        raise RuntimeError(self.message)


class ScriptedGenerationService:
    """Plays back a list of responses; exceptions in the list are raised."""

    def __init__(self, script):
        self.script = list(script)
        self.calls = 0

    async def generate_response(self, prompt: str) -> str:
        self.calls += 1
        step = self.script.pop(0)
        if isinstance(step, BaseException):
            raise step
        return step


@pytest.fixture
def fast_retry():
    """Retry policy with no waiting between attempts."""
    return RetryOptions(max_attempts=3, base_delay=0.0, max_delay=0.0, jitter=0.0)


@pytest.fixture
def lens_service():
    """Generation service that always succeeds."""
    return LensAwareGenerationService()


@pytest.fixture
def failing_service():
    """Generation service that always fails."""
    return FailingGenerationService()


@pytest.fixture
def scripted_service():
    """Factory for scripted generation services."""
    return ScriptedGenerationService


@pytest.fixture
def simulator(lens_service, fast_retry):
    """Simulator with a working generation service and metrics on."""
    return WhatIfSimulator(lens_service, retry_options=fast_retry)


@pytest.fixture
def failing_simulator(failing_service, fast_retry):
    """Simulator whose generation service always fails."""
    return WhatIfSimulator(failing_service, retry_options=fast_retry)


@pytest.fixture
def test_profile_config():
    """Quiet config from the test profile."""
    return PROFILES[Environment.TEST]["config"]


@pytest.fixture
def api(simulator):
    """WhatIfAPI with deterministic session ids."""
    return WhatIfAPI(simulator, session_id_generator=CounterSessionIdGenerator())
