"""Library of Python wrappers driving Ethereum execution clients through a flag check."""

from .clients.geth import GethClient
from .ethereum_client import EthereumClient
from .exceptions import (
    ClientBuildError,
    ClientError,
    ClientInitError,
    ClientStartError,
    ClientStateError,
    UnknownClientError,
)
from .types import ClientArgs, ClientState, LogLevel

__all__ = (
    "ClientArgs",
    "ClientBuildError",
    "ClientError",
    "ClientInitError",
    "ClientStartError",
    "ClientState",
    "ClientStateError",
    "EthereumClient",
    "GethClient",
    "LogLevel",
    "UnknownClientError",
)
