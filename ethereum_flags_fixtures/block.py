"""Block and block header models decoded from a chain file."""

from functools import cached_property
from typing import Any, ClassVar, Dict, List, Sequence

import ethereum_rlp as eth_rlp
from ethereum_rlp.exceptions import DecodingError
from ethereum_types.numeric import Uint
from pydantic import ConfigDict, Field, computed_field, model_validator

from ethereum_flags_base_types import (
    Address,
    Bloom,
    Bytes,
    CamelModel,
    EmptyOmmersRoot,
    EmptyTrieRoot,
    Hash,
    HeaderNonce,
    HexNumber,
)

MANDATORY_HEADER_FIELDS = 15
"""Number of fields every header carries, from `parent_hash` to `nonce`."""


class BlockHeader(CamelModel):
    """
    Ethereum block header.

    The field order is the RLP order. The trailing optional fields are only
    present once the fork that introduced them is active, and they are always
    filled contiguously.
    """

    model_config = ConfigDict(frozen=True)

    parent_hash: Hash = Hash(0)
    ommers_hash: Hash = Field(Hash(EmptyOmmersRoot), alias="sha3Uncles")
    fee_recipient: Address = Field(Address(0), alias="miner")
    state_root: Hash
    transactions_trie: Hash = Field(Hash(EmptyTrieRoot), alias="transactionsRoot")
    receipts_root: Hash = Field(Hash(EmptyTrieRoot), alias="receiptsRoot")
    logs_bloom: Bloom = Bloom(0)
    difficulty: HexNumber = HexNumber(0)
    number: HexNumber
    gas_limit: HexNumber
    gas_used: HexNumber = HexNumber(0)
    timestamp: HexNumber = HexNumber(0)
    extra_data: Bytes = Bytes(b"")
    prev_randao: Hash = Field(Hash(0), alias="mixHash")
    nonce: HeaderNonce = HeaderNonce(0)
    base_fee_per_gas: HexNumber | None = None
    withdrawals_root: Hash | None = None
    blob_gas_used: HexNumber | None = None
    excess_blob_gas: HexNumber | None = None
    parent_beacon_block_root: Hash | None = None
    requests_hash: Hash | None = None

    byte_fields: ClassVar[Dict[str, int]] = {
        "parent_hash": 32,
        "ommers_hash": 32,
        "fee_recipient": 20,
        "state_root": 32,
        "transactions_trie": 32,
        "receipts_root": 32,
        "logs_bloom": 256,
        "extra_data": 0,
        "prev_randao": 32,
        "nonce": 8,
        "withdrawals_root": 32,
        "parent_beacon_block_root": 32,
        "requests_hash": 32,
    }
    """Fields encoded as byte strings, with their fixed length (zero if variable)."""

    @model_validator(mode="after")
    def check_optional_fields_contiguous(self) -> "BlockHeader":
        """Check that no optional field is set after an unset one."""
        optional = list(type(self).model_fields)[MANDATORY_HEADER_FIELDS:]
        missing = None
        for field in optional:
            if getattr(self, field) is None:
                missing = missing or field
            elif missing is not None:
                raise ValueError(f"header field {field} set while {missing} is missing")
        return self

    @cached_property
    def rlp_encode_list(self) -> List:
        """Return the header as a list of RLP encodable items."""
        header_list = []
        for field in type(self).model_fields:
            value = getattr(self, field)
            if value is not None:
                header_list.append(value if isinstance(value, bytes) else Uint(value))
        return header_list

    @cached_property
    def rlp(self) -> Bytes:
        """Compute the RLP of the header."""
        return Bytes(eth_rlp.encode(self.rlp_encode_list))

    @computed_field(alias="hash")  # type: ignore[misc]
    @cached_property
    def block_hash(self) -> Hash:
        """Compute the hash of the header."""
        return self.rlp.keccak256()

    @classmethod
    def from_rlp_list(cls, items: Sequence[Any]) -> "BlockHeader":
        """Build a header from its decoded RLP item list."""
        fields = list(cls.model_fields)
        if isinstance(items, bytes) or not (MANDATORY_HEADER_FIELDS <= len(items) <= len(fields)):
            raise DecodingError(f"invalid header: expected a list of 15 to {len(fields)} items")

        values: Dict[str, Any] = {}
        for field, item in zip(fields, items):
            if not isinstance(item, bytes):
                raise DecodingError(f"invalid header field {field}: expected bytes")
            if field in cls.byte_fields:
                size = cls.byte_fields[field]
                if size and len(item) != size:
                    raise DecodingError(
                        f"invalid header field {field}: expected {size} bytes, got {len(item)}"
                    )
                values[field] = item
            else:
                if len(item) > 0 and item[0] == 0:
                    raise DecodingError(f"invalid header field {field}: non-canonical integer")
                values[field] = int.from_bytes(item, "big")
        return cls(**values)


class Block(CamelModel):
    """
    Ethereum block as found in a chain file.

    Only the header is decoded into a model; transactions and withdrawals are
    kept as decoded RLP items since the harness never interprets them.
    """

    model_config = ConfigDict(frozen=True)

    header: BlockHeader
    transactions: List[Any] = Field(default_factory=list)
    ommers: List[BlockHeader] = Field(default_factory=list, alias="uncles")
    withdrawals: List[Any] | None = None

    @property
    def number(self) -> int:
        """Return the number of the block."""
        return int(self.header.number)

    @property
    def hash(self) -> Hash:
        """Return the hash of the block, which is the hash of its header."""
        return self.header.block_hash

    @cached_property
    def rlp_encode_list(self) -> List:
        """Return the block as a list of RLP encodable items."""
        block: List[Any] = [
            self.header.rlp_encode_list,
            list(self.transactions),
            [ommer.rlp_encode_list for ommer in self.ommers],
        ]
        if self.withdrawals is not None:
            block.append(list(self.withdrawals))
        return block

    @cached_property
    def rlp(self) -> Bytes:
        """Compute the RLP of the block."""
        return Bytes(eth_rlp.encode(self.rlp_encode_list))

    @classmethod
    def from_rlp(cls, data: bytes) -> "Block":
        """Decode a block from its RLP encoding."""
        decoded = eth_rlp.decode(data)
        if isinstance(decoded, bytes) or len(decoded) not in (3, 4):
            raise DecodingError("invalid block: expected a list of 3 or 4 items")
        for item in decoded[1:]:
            if isinstance(item, bytes):
                raise DecodingError("invalid block: expected a list of items")
        withdrawals = list(decoded[3]) if len(decoded) == 4 else None
        try:
            return cls(
                header=BlockHeader.from_rlp_list(decoded[0]),
                transactions=list(decoded[1]),
                ommers=[BlockHeader.from_rlp_list(ommer) for ommer in decoded[2]],
                withdrawals=withdrawals,
            )
        except ValueError as e:
            raise DecodingError(f"invalid block: {e}") from e
