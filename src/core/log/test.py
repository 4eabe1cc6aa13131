"""Tests for core logging module."""

import logging
from io import StringIO

from .lib import get_logger, setup_logging


class TestLogging:
    """Test core logging API."""

    def test_get_logger(self) -> None:
        """Verify logger instance creation."""
        logger = get_logger("test")
        assert logger.name == "test"
        assert isinstance(logger, logging.Logger)

    def test_get_logger_default_name(self) -> None:
        """Verify default logger name."""
        logger = get_logger()
        assert logger.name == "ui-layer-builder"

    def test_setup_logging_accepts_level_name(self) -> None:
        """String level names are accepted."""
        stream = StringIO()
        setup_logging(level="debug", stream=stream)
        logger = get_logger("test_setup")
        logger.debug("test message")

        # basicConfig is a no-op once the root logger has handlers,
        # so only the API contract is checked here.
        assert logger.level == logging.NOTSET

    def test_setup_logging_reads_environment(self, monkeypatch) -> None:
        """Level defaults to UI_BUILDER_LOG_LEVEL."""
        monkeypatch.setenv("UI_BUILDER_LOG_LEVEL", "WARNING")
        setup_logging(stream=StringIO())
