"""
A module for managing the harness configuration.

Classes:
- HarnessConfig: Holds the defaults of a flag check run.
"""

from pathlib import Path
from typing import List

from pydantic import BaseModel


class HarnessConfig(BaseModel):
    """
    Defaults used by a flag check run.

    Every value can be overridden per run, which allows several runs to share a
    host as long as they use different ports and data directories.
    """

    NETWORK_PORT: int = 33333
    """The port the client listens on for peer-to-peer connections."""

    HTTP_HOST: str = "localhost"
    """The interface the client serves its JSON-RPC API on."""

    HTTP_PORT: int = 8545
    """The port the client serves its JSON-RPC API on."""

    HTTP_API: List[str] = ["admin", "eth", "debug"]
    """The JSON-RPC namespaces exposed by the client."""

    READY_TIMEOUT: float = 3.0
    """Seconds to wait for the client's JSON-RPC API to answer after start."""

    POLL_INTERVAL: float = 0.05
    """Seconds between two readiness probes of the client's JSON-RPC API."""

    CLOSE_TIMEOUT: float = 10.0
    """Seconds to wait for the client to exit after termination before killing it."""

    DATA_DIR: Path = Path("datadir")
    """The client data directory, removed when the client is closed."""

    GENESIS_FILE: Path = Path("genesis.json")
    """The default genesis description of a challenge."""

    CHAIN_FILE: Path = Path("chain.rlp")
    """The default chain file of a challenge."""

    CLIENT_PATH: Path = Path("go-ethereum")
    """The default source directory of the client under test."""
