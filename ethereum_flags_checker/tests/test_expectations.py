"""Test the expectations and the challenge registry."""

import pytest

from ethereum_flags_base_types import Hash
from ethereum_flags_rpc import EthRPC, RPCBlock

from ..challenges import CHALLENGES, get_challenge
from ..exceptions import FlagAssertionError
from ..expectations import BlockHashExpectation, HeadNumberExpectation


class StubRPC(EthRPC):
    """`EthRPC` answering from fixed values and counting the requests."""

    def __init__(self, head: int = 0, block: RPCBlock | None = None):
        super().__init__("http://localhost:8545")
        self.head = head
        self.block = block
        self.requests = []

    def block_number(self) -> int:
        self.requests.append("eth_blockNumber")
        return self.head

    def get_block_by_number(self, block_number="latest", full_txs=False):
        self.requests.append(("eth_getBlockByNumber", block_number))
        return self.block


def test_head_number_expectation():
    """Test that the head number is checked with a single request."""
    rpc = StubRPC(head=1)
    HeadNumberExpectation(1).verify(rpc)
    assert rpc.requests == ["eth_blockNumber"]

    with pytest.raises(FlagAssertionError) as e:
        HeadNumberExpectation(2).verify(rpc)
    assert e.value.expected == 2
    assert e.value.actual == 1
    assert str(e.value) == "head block number mismatch: expected 2, got 1"


def test_block_hash_expectation():
    """Test that the block hash is checked with a single request for the given block."""
    block_hash = Hash(0xABCD)
    rpc = StubRPC(block=RPCBlock(number=1, hash=block_hash))
    BlockHashExpectation(block_hash, block=1).verify(rpc)
    assert rpc.requests == [("eth_getBlockByNumber", 1)]

    with pytest.raises(FlagAssertionError) as e:
        BlockHashExpectation(Hash(1), block=1).verify(rpc)
    assert e.value.actual == block_hash
    assert "hash of block 1 mismatch" in str(e.value)


def test_block_hash_expectation_missing_block():
    """Test that a block unknown to the client does not capture the flag."""
    with pytest.raises(FlagAssertionError) as e:
        BlockHashExpectation(Hash(1)).verify(StubRPC(block=None))
    assert e.value.actual is None


def test_challenge_registry():
    """Test the registered challenges and the lookup of unknown ones."""
    wrong_price = get_challenge("wrong-price")
    assert wrong_price.expectation == BlockHashExpectation(
        Hash("0x31553f1bb856b900a24d456f51ac4372fa57e08c5a16812db3ff87e63320bf26"), block=1
    )
    assert str(wrong_price.genesis_file) == "genesis.json"
    assert str(wrong_price.chain_file) == "chain.rlp"
    assert set(CHALLENGES) == {"wrong-price", "chain-import"}
    with pytest.raises(KeyError, match="chain-import, wrong-price"):
        get_challenge("free-money")
