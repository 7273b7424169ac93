"""Logging configuration for the Filler AI.

stdout is the move channel to the game engine, so console output always
goes to stderr.

Usage:
    from filler_ai.logging_config import setup_logging

    logger = setup_logging("filler_ai", level="DEBUG")
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
COMPACT_FORMAT = "%(levelname)s %(name)s: %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(filename)s:%(lineno)d - %(message)s"
)

_FORMATS: dict[str, str] = {
    "default": DEFAULT_FORMAT,
    "compact": COMPACT_FORMAT,
    "detailed": DETAILED_FORMAT,
}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def setup_logging(
    name: str,
    level: int | str = logging.INFO,
    format_style: str = "default",
    console: bool = True,
    log_file: str | Path | None = None,
    propagate: bool = False,
) -> logging.Logger:
    """Configure and return the logger ``name``.

    Handlers are attached only once per logger; repeated calls just update
    the level.

    Args:
        name: Logger name, usually the package name.
        level: Level as an int or a name such as ``"DEBUG"``.
        format_style: One of ``default``, ``compact`` or ``detailed``;
            unknown styles fall back to ``default``.
        console: Attach a stderr handler.
        log_file: Optional file to append log records to.
        propagate: Whether records propagate to the root logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_coerce_level(level))
    logger.propagate = propagate

    if logger.handlers:
        return logger

    formatter = logging.Formatter(_FORMATS.get(format_style, DEFAULT_FORMAT))

    if console:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LogContext:
    """Temporarily change a logger's level."""

    def __init__(self, logger: logging.Logger, level: int | str):
        self.logger = logger
        self.level = _coerce_level(level)
        self._previous = logger.level

    def __enter__(self) -> logging.Logger:
        self._previous = self.logger.level
        self.logger.setLevel(self.level)
        return self.logger

    def __exit__(self, exc_type, exc, tb) -> None:
        self.logger.setLevel(self._previous)
