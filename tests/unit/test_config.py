"""Tests for configuration profiles and environment overrides."""

import logging
from unittest.mock import patch

import pytest

from whatif_simulator.config import (
    DEFAULT_LLM_TIMEOUT,
    LOG_FORMAT,
    PROFILES,
    Environment,
    SimulatorConfig,
    configure_logging,
    get_environment,
    get_llm_timeout,
    get_log_level,
    get_retry_options,
    get_simulator_config,
    merge_config,
)

ENV_VARS = [
    "WHATIF_ENV",
    "WHATIF_ENABLE_LOGGING",
    "WHATIF_ENABLE_METRICS",
    "WHATIF_ENABLE_PARALLEL_GENERATION",
    "WHATIF_MAX_PROCESSING_TIME",
    "WHATIF_LOG_LEVEL",
    "WHATIF_LLM_TIMEOUT",
    "WHATIF_RETRY_ATTEMPTS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSimulatorConfig:
    """Tests for the config model."""

    def test_defaults(self):
        config = SimulatorConfig()

        assert config.enable_logging
        assert config.enable_metrics
        assert config.enable_parallel_generation
        assert config.max_processing_time == 30000

    def test_camel_case_dump(self):
        data = SimulatorConfig().model_dump(by_alias=True)

        assert set(data) == {
            "enableLogging",
            "enableMetrics",
            "enableParallelGeneration",
            "maxProcessingTime",
        }

    def test_is_immutable(self):
        config = SimulatorConfig()

        with pytest.raises(Exception):
            config.enable_logging = False


class TestMergeConfig:
    """Tests for partial config updates."""

    def test_only_supplied_keys_change(self):
        merged = merge_config(SimulatorConfig(), {"enableMetrics": False})

        assert not merged.enable_metrics
        assert merged.enable_logging
        assert merged.max_processing_time == 30000

    def test_none_values_are_ignored(self):
        merged = merge_config(SimulatorConfig(), {"max_processing_time": None})

        assert merged.max_processing_time == 30000

    def test_base_is_untouched(self):
        base = SimulatorConfig()

        merge_config(base, {"enable_logging": False})

        assert base.enable_logging

    @pytest.mark.parametrize(
        "overrides", [{"maxProcessingTime": 999}, {"bogus": 1}, {"enableLogging": "maybe"}]
    )
    def test_invalid_overrides(self, overrides):
        with pytest.raises(ValueError):
            merge_config(SimulatorConfig(), overrides)


class TestEnvironment:
    """Tests for environment-driven settings."""

    def test_default_profile(self):
        assert get_environment() == Environment.DEVELOPMENT
        assert get_log_level() == "DEBUG"

    def test_unknown_profile_falls_back(self, monkeypatch):
        monkeypatch.setenv("WHATIF_ENV", "staging")

        assert get_environment() == Environment.DEVELOPMENT

    def test_profiles(self):
        assert get_simulator_config(Environment.PRODUCTION).max_processing_time == 20000
        assert get_log_level(Environment.PRODUCTION) == "WARNING"
        assert get_simulator_config(Environment.TEST) == PROFILES[Environment.TEST]["config"]

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("WHATIF_ENV", "production")
        monkeypatch.setenv("WHATIF_ENABLE_METRICS", "false")
        monkeypatch.setenv("WHATIF_MAX_PROCESSING_TIME", "15000")
        monkeypatch.setenv("WHATIF_LOG_LEVEL", "info")

        config = get_simulator_config()

        assert not config.enable_metrics
        assert config.max_processing_time == 15000
        assert get_log_level() == "INFO"

    def test_non_integer_override_is_ignored(self, monkeypatch):
        monkeypatch.setenv("WHATIF_MAX_PROCESSING_TIME", "soon")

        assert get_simulator_config().max_processing_time == 30000

    def test_llm_timeout(self, monkeypatch):
        assert get_llm_timeout() == DEFAULT_LLM_TIMEOUT

        monkeypatch.setenv("WHATIF_LLM_TIMEOUT", "2.5")
        assert get_llm_timeout() == 2.5

        monkeypatch.setenv("WHATIF_LLM_TIMEOUT", "-1")
        assert get_llm_timeout() == DEFAULT_LLM_TIMEOUT

    @pytest.mark.parametrize("value,expected", [(None, 3), ("5", 5), ("0", 1), ("50", 10)])
    def test_retry_attempts_are_clamped(self, monkeypatch, value, expected):
        if value is not None:
            monkeypatch.setenv("WHATIF_RETRY_ATTEMPTS", value)

        assert get_retry_options().max_attempts == expected


class TestConfigureLogging:
    """Tests for root logging setup."""

    def test_uses_shared_format(self):
        with patch("whatif_simulator.config.logging.basicConfig") as basic_config:
            configure_logging("warning")

        basic_config.assert_called_once_with(
            level=logging.WARNING, format=LOG_FORMAT, handlers=None
        )

    def test_custom_handlers(self):
        handler = logging.NullHandler()
        with patch("whatif_simulator.config.logging.basicConfig") as basic_config:
            configure_logging(logging.INFO, handlers=[handler])

        assert basic_config.call_args.kwargs["handlers"] == [handler]
