"""Types describing a client under test and how it is run."""

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import List

from config import HarnessConfig

from ethereum_flags_logging import VERBOSE_LEVEL

defaults = HarnessConfig()


class LogLevel(IntEnum):
    """Verbosity of the client process, passed as its `--verbosity` value."""

    NONE = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5

    @classmethod
    def from_cli(cls, value: str) -> "LogLevel":
        """Parse a client log level name, ignoring case."""
        try:
            return cls[value.strip().upper()]
        except KeyError:
            valid = ", ".join(level.name.lower() for level in cls)
            raise ValueError(f"unknown log level: {value} (expected one of: {valid})") from None

    def to_logging_level(self) -> int:
        """Return the equivalent level of the `logging` module."""
        return {
            LogLevel.NONE: logging.CRITICAL + 10,
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: VERBOSE_LEVEL,
            LogLevel.TRACE: logging.DEBUG,
        }[self]


class ClientState(Enum):
    """Lifecycle state of a client under test."""

    UNINITIALIZED = "uninitialized"
    BUILT = "built"
    INITIALIZED = "initialized"
    RUNNING = "running"
    CLOSED = "closed"


@dataclass(kw_only=True)
class ClientArgs:
    """Runtime arguments of a client under test."""

    data_dir: Path = defaults.DATA_DIR
    genesis_path: Path = defaults.GENESIS_FILE
    chain_path: Path = defaults.CHAIN_FILE
    fake_pow: bool = True
    log_level: LogLevel = LogLevel.ERROR
    network_port: int = defaults.NETWORK_PORT
    http_host: str = defaults.HTTP_HOST
    http_port: int = defaults.HTTP_PORT
    http_api: List[str] = field(default_factory=lambda: list(defaults.HTTP_API))
    close_timeout: float = defaults.CLOSE_TIMEOUT
