"""
Types and functions for the genesis description of a fixture chain.

The genesis description is a client `genesis.json` file. It is parsed into a
[`GenesisSpec`], from which the genesis block is derived with
[`GenesisSpec.to_block`] using the same rules the client applies when it is
initialized with the file, so that the block hashes the harness computes agree
with those reported by the client.
"""

import json
from pathlib import Path
from typing import Dict

import ethereum_rlp as eth_rlp
from ethereum_types.numeric import Uint
from pydantic import ConfigDict, Field, ValidationError

from ethereum_flags_base_types import (
    Address,
    Bytes,
    CamelModel,
    EmptyRequestsHash,
    EmptyTrieRoot,
    Hash,
    HashInt,
    HeaderNonce,
    HexNumber,
)
from ethereum_flags_logging import get_logger

from .block import Block, BlockHeader
from .exceptions import MalformedGenesisError
from .trie import trie_root

logger = get_logger(__name__)

GENESIS_GAS_LIMIT = 4712388
"""Gas limit of the genesis block when the description does not set one."""

GENESIS_DIFFICULTY = 131072
"""Difficulty of the genesis block when neither difficulty nor mix hash are set."""

INITIAL_BASE_FEE = 1_000_000_000
"""Base fee of the genesis block when London is active and none is set."""


def _block_forked(activation: int | None, number: int) -> bool:
    return activation is not None and activation <= number


def _time_forked(activation: int | None, timestamp: int) -> bool:
    return activation is not None and activation <= timestamp


class ChainConfig(CamelModel):
    """
    Chain configuration section of the genesis description.

    Fork activations are plain integers, as expected by the client. Keys not
    modeled here (consensus engine parameters, blob schedules, ...) are kept
    untouched so that a written genesis file configures the client identically.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    chain_id: int
    homestead_block: int | None = None
    dao_fork_block: int | None = None
    dao_fork_support: bool | None = None
    eip150_block: int | None = None
    eip155_block: int | None = None
    eip158_block: int | None = None
    byzantium_block: int | None = None
    constantinople_block: int | None = None
    petersburg_block: int | None = None
    istanbul_block: int | None = None
    muir_glacier_block: int | None = None
    berlin_block: int | None = None
    london_block: int | None = None
    arrow_glacier_block: int | None = None
    gray_glacier_block: int | None = None
    merge_netsplit_block: int | None = None
    shanghai_time: int | None = None
    cancun_time: int | None = None
    prague_time: int | None = None
    osaka_time: int | None = None
    terminal_total_difficulty: int | None = None

    def is_london(self, number: int) -> bool:
        """Return whether London is active at the given block number."""
        return _block_forked(self.london_block, number)

    def is_shanghai(self, number: int, timestamp: int) -> bool:
        """Return whether Shanghai is active at the given block number and time."""
        return self.is_london(number) and _time_forked(self.shanghai_time, timestamp)

    def is_cancun(self, number: int, timestamp: int) -> bool:
        """Return whether Cancun is active at the given block number and time."""
        return self.is_london(number) and _time_forked(self.cancun_time, timestamp)

    def is_prague(self, number: int, timestamp: int) -> bool:
        """Return whether Prague is active at the given block number and time."""
        return self.is_london(number) and _time_forked(self.prague_time, timestamp)


class GenesisAccount(CamelModel):
    """Account pre-allocated in the genesis state."""

    model_config = ConfigDict(frozen=True)

    balance: HexNumber
    nonce: HexNumber = HexNumber(0)
    code: Bytes = Bytes(b"")
    storage: Dict[HashInt, HashInt] = Field(default_factory=dict)

    def storage_root(self) -> Hash:
        """Compute the root of the storage trie of the account."""
        return trie_root(
            {
                bytes(key): eth_rlp.encode(Uint(value))
                for key, value in self.storage.items()
                if value != 0
            }
        )

    def rlp(self) -> bytes:
        """Encode the account as stored in the state trie."""
        return eth_rlp.encode(
            [
                Uint(self.nonce),
                Uint(self.balance),
                bytes(self.storage_root()),
                bytes(self.code.keccak256()),
            ]
        )


class GenesisSpec(CamelModel):
    """
    Genesis description of a chain: the initial state and the seeds of the
    genesis block header.
    """

    model_config = ConfigDict(frozen=True)

    config: ChainConfig
    """
    Chain identifier and fork activations.
    """

    alloc: Dict[Address, GenesisAccount]
    """
    Accounts present in the genesis state, by address.
    """

    nonce: HexNumber = HexNumber(0)
    timestamp: HexNumber = HexNumber(0)
    extra_data: Bytes = Bytes(b"")
    gas_limit: HexNumber = HexNumber(0)
    """
    Gas limit of the genesis block; zero selects `GENESIS_GAS_LIMIT`.
    """

    difficulty: HexNumber | None = None
    mix_hash: Hash | None = None
    coinbase: Address = Address(0)
    number: HexNumber = HexNumber(0)
    gas_used: HexNumber = HexNumber(0)
    parent_hash: Hash = Hash(0)
    base_fee_per_gas: HexNumber | None = None
    excess_blob_gas: HexNumber | None = None
    blob_gas_used: HexNumber | None = None

    @property
    def network_id(self) -> int:
        """Return the network identity the client is configured with."""
        return self.config.chain_id

    def state_root(self) -> Hash:
        """Compute the root of the genesis state trie."""
        return trie_root({bytes(address): account.rlp() for address, account in self.alloc.items()})

    def to_block(self) -> Block:
        """
        Derive the genesis block.

        The block is a pure function of the description: header fields that
        are not seeded take the client's defaults, and the fork dependent
        fields are filled according to the forks active at the genesis block
        number and timestamp.
        """
        number, timestamp = int(self.number), int(self.timestamp)
        mix_hash = self.mix_hash if self.mix_hash is not None else Hash(0)

        difficulty = self.difficulty
        if difficulty is None:
            difficulty = HexNumber(GENESIS_DIFFICULTY if mix_hash == Hash(0) else 0)

        fields = {
            "parent_hash": self.parent_hash,
            "fee_recipient": self.coinbase,
            "state_root": self.state_root(),
            "difficulty": difficulty,
            "number": number,
            "gas_limit": self.gas_limit or GENESIS_GAS_LIMIT,
            "gas_used": self.gas_used,
            "timestamp": timestamp,
            "extra_data": self.extra_data,
            "prev_randao": mix_hash,
            "nonce": HeaderNonce(int(self.nonce)),
        }

        withdrawals = None
        if self.config.is_london(0):
            fields["base_fee_per_gas"] = (
                self.base_fee_per_gas if self.base_fee_per_gas is not None else INITIAL_BASE_FEE
            )
        if self.config.is_shanghai(number, timestamp):
            fields["withdrawals_root"] = Hash(EmptyTrieRoot)
            withdrawals = []
        if self.config.is_cancun(number, timestamp):
            fields["blob_gas_used"] = self.blob_gas_used or 0
            fields["excess_blob_gas"] = self.excess_blob_gas or 0
            fields["parent_beacon_block_root"] = Hash(0)
        if self.config.is_prague(number, timestamp):
            fields["requests_hash"] = Hash(EmptyRequestsHash)

        return Block(header=BlockHeader(**fields), withdrawals=withdrawals)


def load_genesis(path: Path | str) -> GenesisSpec:
    """
    Read and validate a genesis description.

    Raises `MalformedGenesisError` when the file is not a JSON object or lacks
    a required field. Errors reading the file propagate as `OSError`.
    """
    path = Path(path)
    content = path.read_bytes()
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedGenesisError(path, f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedGenesisError(path, "expected a JSON object")
    try:
        genesis = GenesisSpec.model_validate(data)
    except ValidationError as e:
        raise MalformedGenesisError(path, str(e)) from e
    logger.debug(f"Loaded genesis {path} (chain id {genesis.network_id}, {len(genesis.alloc)} accounts)")
    return genesis


def write_genesis(genesis: GenesisSpec, path: Path | str) -> None:
    """Write a genesis description in the format read by `load_genesis`."""
    with open(path, "w") as f:
        json.dump(genesis.serialize(), f, indent=4)
