"""
Assertions issued against the client once it has imported the chain.

Each expectation sends exactly one JSON-RPC request.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ethereum_flags_base_types import Hash
from ethereum_flags_logging import get_logger
from ethereum_flags_rpc import BlockNumberType, EthRPC

from .exceptions import FlagAssertionError

logger = get_logger(__name__)


class Expectation(ABC):
    """Value the client must report for the flag to be captured."""

    @abstractmethod
    def verify(self, rpc: EthRPC) -> None:
        """Query the client and raise `FlagAssertionError` on a mismatch."""
        pass

    @abstractmethod
    def describe(self) -> str:
        """Return a short description of the expected value."""
        pass


@dataclass(frozen=True)
class HeadNumberExpectation(Expectation):
    """The client's head block has the given number."""

    number: int

    def verify(self, rpc: EthRPC) -> None:
        """Compare the result of `eth_blockNumber`."""
        head = rpc.block_number()
        logger.verbose(f"Client head is block {head}")
        if head != self.number:
            raise FlagAssertionError("head block number", self.number, head)

    def describe(self) -> str:
        """Return a short description of the expected value."""
        return f"head block number {self.number}"


@dataclass(frozen=True)
class BlockHashExpectation(Expectation):
    """The client's block at `block` has the given hash."""

    hash: Hash
    block: BlockNumberType = "latest"

    def verify(self, rpc: EthRPC) -> None:
        """Compare the hash returned by `eth_getBlockByNumber`."""
        result = rpc.get_block_by_number(self.block)
        actual = None if result is None else result.hash
        logger.verbose(f"Client block {self.block} has hash {actual}")
        if actual != self.hash:
            raise FlagAssertionError(f"hash of block {self.block}", self.hash, actual)

    def describe(self) -> str:
        """Return a short description of the expected value."""
        return f"hash {self.hash} for block {self.block}"
