"""
Environment-driven configuration.

All settings are read from ``FILLER_AI_*`` environment variables; command
line flags override them in :mod:`filler_ai.cli`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError
from .models import AIConfig, AIStrategy

ENV_STRATEGY = "FILLER_AI_STRATEGY"
ENV_USE_BATCH_CACHE = "FILLER_AI_USE_BATCH_CACHE"
ENV_FLOOD_FILL_MAX_ITERATIONS = "FILLER_AI_FLOOD_FILL_MAX_ITERATIONS"
ENV_LOG_LEVEL = "FILLER_AI_LOG_LEVEL"
ENV_METRICS_PORT = "FILLER_AI_METRICS_PORT"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class RuntimeConfig(BaseModel):
    """Process-level settings: the AI config plus logging and metrics."""
    model_config = ConfigDict(frozen=True)

    ai: AIConfig = Field(default_factory=AIConfig)
    log_level: str = "INFO"
    metrics_port: int | None = Field(None, ge=1, le=65535)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean", context={"value": raw})


def _parse_int(name: str, raw: str, minimum: int) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer", context={"value": raw}) from None
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}", context={"value": raw})
    return value


def parse_strategy(raw: str) -> AIStrategy:
    """Parse a strategy name, case-insensitively.

    Raises:
        ConfigurationError: If the name is not an :class:`AIStrategy` value.
    """
    try:
        return AIStrategy(raw.strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"Unknown strategy: {raw}",
            context={"available": ", ".join(s.value for s in AIStrategy)},
        ) from None


def load_config(env: Mapping[str, str] | None = None) -> RuntimeConfig:
    """Build a :class:`RuntimeConfig` from ``env`` (defaults to ``os.environ``).

    Raises:
        ConfigurationError: If any variable holds an invalid value.
    """
    env = os.environ if env is None else env

    strategy = AIStrategy.default()
    if env.get(ENV_STRATEGY):
        strategy = parse_strategy(env[ENV_STRATEGY])

    use_cache = _parse_bool(ENV_USE_BATCH_CACHE, env.get(ENV_USE_BATCH_CACHE, "true"))

    max_iterations = None
    if env.get(ENV_FLOOD_FILL_MAX_ITERATIONS):
        max_iterations = _parse_int(
            ENV_FLOOD_FILL_MAX_ITERATIONS, env[ENV_FLOOD_FILL_MAX_ITERATIONS], minimum=0
        )

    log_level = env.get(ENV_LOG_LEVEL, "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"{ENV_LOG_LEVEL} is not a log level", context={"value": log_level})

    metrics_port = None
    if env.get(ENV_METRICS_PORT):
        metrics_port = _parse_int(ENV_METRICS_PORT, env[ENV_METRICS_PORT], minimum=1)
        if metrics_port > 65535:
            raise ConfigurationError(
                f"{ENV_METRICS_PORT} must be a TCP port", context={"value": metrics_port}
            )

    return RuntimeConfig(
        ai=AIConfig(
            strategy=strategy,
            use_batch_cache=use_cache,
            flood_fill_max_iterations=max_iterations,
        ),
        log_level=log_level,
        metrics_port=metrics_port,
    )
