"""
Common definitions and types.
"""

from .base_types import (
    Address,
    Bloom,
    Bytes,
    FixedSizeBytes,
    Hash,
    HashInt,
    HeaderNonce,
    HexNumber,
    Number,
)
from .constants import (
    EmptyBloom,
    EmptyCodeHash,
    EmptyHash,
    EmptyNonce,
    EmptyOmmersRoot,
    EmptyRequestsHash,
    EmptyTrieRoot,
)
from .conversions import to_bytes, to_number
from .pydantic import CamelModel, FlagsBaseModel

__all__ = (
    "Address",
    "Bloom",
    "Bytes",
    "CamelModel",
    "EmptyBloom",
    "EmptyCodeHash",
    "EmptyHash",
    "EmptyNonce",
    "EmptyOmmersRoot",
    "EmptyRequestsHash",
    "EmptyTrieRoot",
    "FixedSizeBytes",
    "FlagsBaseModel",
    "Hash",
    "HashInt",
    "HeaderNonce",
    "HexNumber",
    "Number",
    "to_bytes",
    "to_number",
)
