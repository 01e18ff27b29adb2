"""Exceptions raised while loading chain fixtures."""


class ChainFixtureError(Exception):
    """Base class for all errors raised by the fixture loader."""

    pass


class MalformedGenesisError(ChainFixtureError):
    """Exception raised when a genesis file cannot be parsed or is incomplete."""

    def __init__(self, path, reason):
        """Initialize the exception."""
        self.path = path
        self.reason = reason
        super().__init__(f"malformed genesis file {path}: {reason}")


class BlockDecodeError(ChainFixtureError):
    """Exception raised when a block in the chain stream cannot be decoded."""

    def __init__(self, index: int, cause: Exception):
        """Initialize the exception."""
        self.index = index
        self.cause = cause
        super().__init__(f"at block index {index}: {cause}")


class BlockSequenceError(ChainFixtureError):
    """Exception raised when a block does not carry the expected number."""

    def __init__(self, index: int, expected: int, got: int):
        """Initialize the exception."""
        self.index = index
        self.expected = expected
        self.got = got
        super().__init__(
            f"at block index {index}: wrong block number, expected {expected}, got {got}"
        )
