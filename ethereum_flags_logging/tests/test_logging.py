"""
Tests for the logging module.

These tests verify the custom logger class, the formatters and the standalone
configuration used by the command-line entry point.
"""

import io
import logging
import re
from pathlib import Path
from unittest.mock import patch

import pytest

from ..logging import (
    FAIL_LEVEL,
    VERBOSE_LEVEL,
    ColorFormatter,
    FlagsLogger,
    LogLevel,
    UTCFormatter,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Restore the root logger handlers and level after each test."""
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            handler.close()
    root_logger.handlers = handlers
    root_logger.setLevel(level)


class TestLoggerSetup:
    """Test the basic setup of loggers and custom levels."""

    def test_custom_levels_registered(self):
        """Test that custom log levels are properly registered."""
        assert logging.getLevelName(VERBOSE_LEVEL) == "VERBOSE"
        assert logging.getLevelName(FAIL_LEVEL) == "FAIL"
        assert logging.getLevelName("VERBOSE") == VERBOSE_LEVEL
        assert logging.getLevelName("FAIL") == FAIL_LEVEL

    def test_get_logger(self):
        """Test that get_logger returns a properly typed logger."""
        logger = get_logger("test_flags_logger")
        assert isinstance(logger, FlagsLogger)
        assert logger.name == "test_flags_logger"


class TestFlagsLogger:
    """Test the custom logger methods."""

    def setup_method(self):
        """Set up a logger and string stream for capturing log output."""
        self.log_output = io.StringIO()
        self.logger = get_logger("test_flags_logger_methods")
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
        handler = logging.StreamHandler(self.log_output)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        self.logger.addHandler(handler)
        self.logger.setLevel(logging.DEBUG)

    def test_verbose_method(self):
        """Test the verbose() method logs at the expected level."""
        self.logger.verbose("client output")
        assert "VERBOSE: client output" in self.log_output.getvalue()

    def test_fail_method(self):
        """Test the fail() method logs at the expected level."""
        self.logger.fail("flag not captured")
        assert "FAIL: flag not captured" in self.log_output.getvalue()

    def test_level_filtering(self):
        """Test that the custom levels respect the logger level."""
        self.logger.setLevel(logging.INFO)
        self.logger.verbose("hidden")
        self.logger.fail("shown")
        output = self.log_output.getvalue()
        assert "hidden" not in output
        assert "FAIL: shown" in output


class TestFormatters:
    """Test the custom log formatters."""

    def test_utc_formatter(self):
        """Test that UTCFormatter formats timestamps correctly."""
        formatter = UTCFormatter(fmt="%(asctime)s: %(message)s")
        record = logging.makeLogRecord({"msg": "Test message", "created": 1609459200.0})
        formatted = formatter.format(record)
        assert re.match(r"2021-01-01 00:00:00\.\d{3}\+00:00: Test message", formatted)

    def test_color_formatter(self, monkeypatch):
        """Test that ColorFormatter only adds color codes outside of Docker."""
        formatter = ColorFormatter(fmt="[%(levelname)s] %(message)s")
        record = logging.makeLogRecord(
            {"levelno": logging.ERROR, "levelname": "ERROR", "msg": "Error message"}
        )

        monkeypatch.setattr(ColorFormatter, "running_in_docker", False)
        assert "\033[31mERROR\033[0m" in formatter.format(record)

        monkeypatch.setattr(ColorFormatter, "running_in_docker", True)
        formatted = formatter.format(record)
        assert "\033[31mERROR\033[0m" not in formatted
        assert "ERROR" in formatted


@pytest.mark.parametrize(
    "value, expected",
    [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("verbose", VERBOSE_LEVEL),
        ("fail", FAIL_LEVEL),
        ("25", 25),
    ],
)
def test_log_level_from_cli(value: str, expected: int):
    """Test parsing of log levels given on the command line."""
    assert LogLevel.from_cli(value) == expected


def test_log_level_from_cli_invalid():
    """Test that unknown log levels are rejected."""
    with pytest.raises(ValueError, match="Invalid log level"):
        LogLevel.from_cli("loud")


class TestStandaloneConfiguration:
    """Test the standalone logging configuration function."""

    def test_configure_logging_defaults(self):
        """Test that logs go to stderr at INFO level by default."""
        stderr = io.StringIO()
        with patch("sys.stderr", new=stderr):
            handler = configure_logging()
            get_logger("test_config_defaults").info("to stderr")

        root_logger = logging.getLogger()
        assert root_logger.level == logging.INFO
        assert handler is None
        assert "to stderr" in stderr.getvalue()

    def test_configure_logging_with_file(self, tmp_path: Path):
        """Test configure_logging with file output."""
        log_file = tmp_path / "logs" / "flag.log"
        handler = configure_logging(log_file=log_file, log_to_stderr=False)

        assert isinstance(handler, logging.FileHandler)
        assert log_file.exists()
        get_logger("test_config_file").info("Test log message")
        handler.flush()
        assert "Test log message" in log_file.read_text()

    def test_configure_logging_with_level(self):
        """Test configure_logging with string and numeric levels."""
        configure_logging(log_level="DEBUG", log_to_stderr=False)
        assert logging.getLogger().level == logging.DEBUG

        configure_logging(log_level=VERBOSE_LEVEL, log_to_stderr=False)
        assert logging.getLogger().level == VERBOSE_LEVEL
