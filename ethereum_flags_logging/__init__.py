"""Logging setup shared by the harness packages and its command-line entry point."""

from .logging import (
    FAIL_LEVEL,
    VERBOSE_LEVEL,
    ColorFormatter,
    FlagsLogger,
    LogLevel,
    UTCFormatter,
    configure_logging,
    get_logger,
)

__all__ = (
    "FAIL_LEVEL",
    "VERBOSE_LEVEL",
    "ColorFormatter",
    "FlagsLogger",
    "LogLevel",
    "UTCFormatter",
    "configure_logging",
    "get_logger",
)
