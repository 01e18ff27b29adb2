"""Exceptions raised while driving a client under test."""

from typing import List, Sequence


class ClientError(Exception):
    """Base class for all errors raised by client controllers."""

    pass


class UnknownClientError(ClientError):
    """Exception raised if an unknown client family is requested."""

    def __init__(self, name: str, known: Sequence[str]):
        """Initialize the exception."""
        self.name = name
        super().__init__(f"unknown client {name!r}, expected one of: {', '.join(known)}")


class ClientStateError(ClientError):
    """Exception raised when a lifecycle step is called out of order."""

    pass


class ClientBuildError(ClientError):
    """Exception raised when the client cannot be built."""

    def __init__(self, message: str, output: str | None = None):
        """Initialize the exception."""
        self.output = output
        if output:
            message = f"{message}\n{output.rstrip()}"
        super().__init__(message)


class ClientInitError(ClientError):
    """Exception raised when importing the genesis or the chain into the client fails."""

    def __init__(self, command: List[str], returncode: int | None, output: str | None = None):
        """
        Initialize the exception.

        A `returncode` of `None` means the command could not be started at all.
        """
        self.command = command
        self.returncode = returncode
        self.output = output
        if returncode is None:
            message = f"command {' '.join(command)} could not be started"
        else:
            message = f"command {' '.join(command)} exited with status {returncode}"
        if output:
            message = f"{message}\n{output.rstrip()}"
        super().__init__(message)


class ClientStartError(ClientError):
    """Exception raised when the client process cannot be spawned."""

    pass
