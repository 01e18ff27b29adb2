"""Exceptions raised when a flag is not captured."""

from typing import Any


class FlagCheckError(Exception):
    """Base class for errors raised by the verification driver."""

    pass


class ClientUnreachableError(FlagCheckError):
    """Exception raised when the client does not answer JSON-RPC requests in time."""

    def __init__(self, address: str, timeout: float):
        """Initialize the exception."""
        self.address = address
        self.timeout = timeout
        super().__init__(f"client not reachable at {address} after {timeout}s")


class FlagAssertionError(FlagCheckError):
    """Exception raised when the client answers, but with the wrong value."""

    def __init__(self, what: str, expected: Any, actual: Any):
        """Initialize the exception."""
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what} mismatch: expected {expected}, got {actual}")
