"""Tests for filler_ai/logging_config.py - logging setup."""

import logging
import sys

import pytest

from filler_ai.logging_config import (
    COMPACT_FORMAT,
    DEFAULT_FORMAT,
    DETAILED_FORMAT,
    LogContext,
    get_logger,
    setup_logging,
)


class TestSetupLogging:
    """Test setup_logging function."""

    def test_returns_logger(self):
        logger = setup_logging("filler_test_logger_1")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "filler_test_logger_1"

    def test_logger_level_default(self):
        """Default level should be INFO."""
        logger = setup_logging("filler_test_logger_2")
        assert logger.level == logging.INFO

    def test_logger_level_custom(self):
        logger = setup_logging("filler_test_logger_3", level=logging.DEBUG)
        assert logger.level == logging.DEBUG

    def test_logger_level_string(self):
        """Level can be specified as string."""
        logger = setup_logging("filler_test_logger_4", level="warning")
        assert logger.level == logging.WARNING

    def test_unknown_level_string(self):
        with pytest.raises(ValueError):
            setup_logging("filler_test_logger_5", level="CHATTY")

    def test_idempotent_logger_creation(self):
        """Calling setup_logging twice returns same logger."""
        logger1 = setup_logging("filler_test_logger_6")
        handler_count = len(logger1.handlers)
        logger2 = setup_logging("filler_test_logger_6", level="DEBUG")
        assert logger1 is logger2
        # Should not add duplicate handlers
        assert len(logger2.handlers) == handler_count
        assert logger2.level == logging.DEBUG

    def test_console_handler_writes_to_stderr(self):
        logger = setup_logging("filler_test_logger_7")
        stream_handlers = [
            h for h in logger.handlers if type(h) is logging.StreamHandler
        ]
        assert len(stream_handlers) == 1
        assert stream_handlers[0].stream is sys.stderr

    def test_console_handler_disabled(self):
        logger = setup_logging("filler_test_logger_8", console=False)
        assert logger.handlers == []

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "filler.log"
        logger = setup_logging("filler_test_logger_9", log_file=log_file, console=False)
        logger.info("Test message")
        for handler in logger.handlers:
            handler.flush()
        assert "Test message" in log_file.read_text()

    def test_propagate_default_false(self):
        logger = setup_logging("filler_test_logger_10")
        assert logger.propagate is False

    def test_unknown_format_uses_default(self):
        logger = setup_logging("filler_test_logger_11", format_style="nonexistent")
        assert logger.handlers[0].formatter._fmt == DEFAULT_FORMAT


class TestLogContext:
    def test_changes_level_temporarily(self):
        logger = setup_logging("filler_test_context_1", level=logging.INFO)
        with LogContext(logger, logging.DEBUG) as ctx_logger:
            assert ctx_logger is logger
            assert logger.level == logging.DEBUG
        assert logger.level == logging.INFO

    def test_restores_level_on_exception(self):
        logger = setup_logging("filler_test_context_2", level=logging.INFO)
        with pytest.raises(ValueError):
            with LogContext(logger, "DEBUG"):
                raise ValueError("test")
        assert logger.level == logging.INFO


def test_get_logger_returns_same_instance():
    assert get_logger("filler_test_get") is get_logger("filler_test_get")


def test_format_constants():
    assert "%(levelname)s" in DEFAULT_FORMAT
    assert len(COMPACT_FORMAT) < len(DEFAULT_FORMAT)
    assert "%(lineno)d" in DETAILED_FORMAT
