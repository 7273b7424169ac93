"""Tests for filler_ai/config.py - environment configuration."""

import pytest

from filler_ai.config import load_config, parse_strategy
from filler_ai.errors import ConfigurationError
from filler_ai.models import AIStrategy


class TestLoadConfig:
    def test_defaults(self):
        config = load_config({})
        assert config.ai.strategy is AIStrategy.ADVANCED_BALANCED
        assert config.ai.use_batch_cache is True
        assert config.ai.flood_fill_max_iterations is None
        assert config.log_level == "INFO"
        assert config.metrics_port is None

    def test_reads_os_environ_by_default(self, clean_env):
        clean_env.setenv("FILLER_AI_STRATEGY", "opportunistic")
        assert load_config().ai.strategy is AIStrategy.OPPORTUNISTIC

    def test_all_variables(self):
        config = load_config(
            {
                "FILLER_AI_STRATEGY": "Territorial_Control",
                "FILLER_AI_USE_BATCH_CACHE": "no",
                "FILLER_AI_FLOOD_FILL_MAX_ITERATIONS": "250",
                "FILLER_AI_LOG_LEVEL": "debug",
                "FILLER_AI_METRICS_PORT": "9100",
            }
        )
        assert config.ai.strategy is AIStrategy.TERRITORIAL_CONTROL
        assert config.ai.use_batch_cache is False
        assert config.ai.flood_fill_max_iterations == 250
        assert config.log_level == "DEBUG"
        assert config.metrics_port == 9100

    def test_empty_values_use_defaults(self):
        config = load_config({"FILLER_AI_STRATEGY": "", "FILLER_AI_METRICS_PORT": ""})
        assert config.ai.strategy is AIStrategy.ADVANCED_BALANCED
        assert config.metrics_port is None

    @pytest.mark.parametrize(
        "env",
        [
            {"FILLER_AI_STRATEGY": "telepathy"},
            {"FILLER_AI_USE_BATCH_CACHE": "maybe"},
            {"FILLER_AI_FLOOD_FILL_MAX_ITERATIONS": "-1"},
            {"FILLER_AI_FLOOD_FILL_MAX_ITERATIONS": "lots"},
            {"FILLER_AI_LOG_LEVEL": "LOUD"},
            {"FILLER_AI_METRICS_PORT": "0"},
            {"FILLER_AI_METRICS_PORT": "70000"},
        ],
    )
    def test_invalid_values(self, env):
        with pytest.raises(ConfigurationError):
            load_config(env)

    def test_error_context_names_value(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config({"FILLER_AI_USE_BATCH_CACHE": "maybe"})
        assert exc_info.value.context["value"] == "maybe"
        assert exc_info.value.code == "CONFIGURATION_ERROR"


def test_parse_strategy():
    assert parse_strategy(" Edge_Avoidance ") is AIStrategy.EDGE_AVOIDANCE
    with pytest.raises(ConfigurationError):
        parse_strategy("nope")
