"""
State Trie
^^^^^^^^^^

Root computation of the Merkle Patricia Trie used to derive the genesis state
root. Only the root is ever needed, so the trie is represented as a plain
mapping from keys to already-encoded values.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, MutableMapping, Optional, Sequence, Union

import ethereum_rlp as eth_rlp

from ethereum_flags_base_types import Bytes, Hash

# note: an empty trie (regardless of whether it is secured) has root:
#
#   keccak256(RLP(b''))
#       ==
#   56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421


@dataclass(frozen=True)
class LeafNode:
    """Leaf node in the Merkle Trie."""

    rest_of_key: bytes
    value: bytes


@dataclass(frozen=True)
class ExtensionNode:
    """Extension node in the Merkle Trie."""

    key_segment: bytes
    subnode: Any


@dataclass(frozen=True)
class BranchNode:
    """Branch node in the Merkle Trie."""

    subnodes: List[Any]
    value: bytes


InternalNode = Union[LeafNode, ExtensionNode, BranchNode]


def encode_internal_node(node: Optional[InternalNode]) -> Any:
    """
    Encode a Merkle Trie node into its RLP form. The RLP will then be
    serialized into bytes and hashed unless it is less that 32 bytes
    when serialized.

    This function also accepts `None`, representing the absence of a node,
    which is encoded to `b""`.
    """
    unencoded: Any
    if node is None:
        unencoded = b""
    elif isinstance(node, LeafNode):
        unencoded = (
            bytes(nibble_list_to_compact(node.rest_of_key, True)),
            node.value,
        )
    elif isinstance(node, ExtensionNode):
        unencoded = (
            bytes(nibble_list_to_compact(node.key_segment, False)),
            node.subnode,
        )
    elif isinstance(node, BranchNode):
        unencoded = list(node.subnodes) + [node.value]
    else:
        raise Exception(f"Invalid internal node type {type(node)}!")

    encoded = eth_rlp.encode(unencoded)
    if len(encoded) < 32:
        return unencoded
    return bytes(Bytes(encoded).keccak256())


def common_prefix_length(a: Sequence, b: Sequence) -> int:
    """Find the longest common prefix of two sequences."""
    for i in range(len(a)):
        if i >= len(b) or a[i] != b[i]:
            return i
    return len(a)


def nibble_list_to_compact(x: bytes, is_leaf: bool) -> bytearray:
    """
    Compress a nibble-list into a standard byte array with a flag.

    The lowest bit of the flag nibble encodes the parity of the length of the
    remaining nibbles, `0` when even and `1` when odd. The second lowest bit
    distinguishes leaf and extension nodes.
    """
    compact = bytearray()

    if len(x) % 2 == 0:  # ie even length
        compact.append(16 * (2 * is_leaf))
        for i in range(0, len(x), 2):
            compact.append(16 * x[i] + x[i + 1])
    else:
        compact.append(16 * ((2 * is_leaf) + 1) + x[0])
        for i in range(1, len(x), 2):
            compact.append(16 * x[i] + x[i + 1])

    return compact


def bytes_to_nibble_list(bytes_: bytes) -> bytes:
    """Convert bytes into to a sequence of nibbles (bytes with value < 16)."""
    nibble_list = bytearray(2 * len(bytes_))
    for byte_index, byte in enumerate(bytes_):
        nibble_list[byte_index * 2] = (byte & 0xF0) >> 4
        nibble_list[byte_index * 2 + 1] = byte & 0x0F
    return bytes(nibble_list)


def patricialize(obj: Mapping[bytes, bytes], level: int) -> Optional[InternalNode]:
    """
    Structural composition function.

    Used to recursively patricialize and merkleize a dictionary whose keys are
    in nibble-list format.
    """
    if len(obj) == 0:
        return None

    arbitrary_key = next(iter(obj))

    # if leaf node
    if len(obj) == 1:
        return LeafNode(arbitrary_key[level:], obj[arbitrary_key])

    # prepare for extension node check by finding max j such that all keys in
    # obj have the same key[i:j]
    substring = arbitrary_key[level:]
    prefix_length = len(substring)
    for key in obj:
        prefix_length = min(prefix_length, common_prefix_length(substring, key[level:]))

        # finished searching, found another key at the current level
        if prefix_length == 0:
            break

    # if extension node
    if prefix_length > 0:
        prefix = arbitrary_key[level : level + prefix_length]
        return ExtensionNode(
            prefix,
            encode_internal_node(patricialize(obj, level + prefix_length)),
        )

    branches: List[MutableMapping[bytes, bytes]] = []
    for _ in range(16):
        branches.append({})
    value = b""
    for key in obj:
        if len(key) == level:
            value = obj[key]
        else:
            branches[key[level]][key] = obj[key]

    return BranchNode(
        [encode_internal_node(patricialize(branches[k], level + 1)) for k in range(16)],
        value,
    )


def trie_root(data: Mapping[bytes, bytes], *, secured: bool = True) -> Hash:
    """
    Compute the root of a modified merkle patricia trie (MPT).

    `data` maps raw keys to their encoded values; empty values must be omitted
    by the caller. Keys are hashed once before insertion when `secured` is set.
    """
    mapped: MutableMapping[bytes, bytes] = {}
    for preimage, value in data.items():
        assert value != b"", "empty values are represented by their absence"
        key = bytes(Bytes(preimage).keccak256()) if secured else bytes(preimage)
        mapped[bytes_to_nibble_list(key)] = bytes(value)

    root_node = encode_internal_node(patricialize(mapped, 0))
    if len(eth_rlp.encode(root_node)) < 32:
        return Bytes(eth_rlp.encode(root_node)).keccak256()
    assert isinstance(root_node, bytes)
    return Hash(root_node)
