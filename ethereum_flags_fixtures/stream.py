"""Reading of self-delimiting RLP item streams from chain files."""

import gzip
from pathlib import Path
from typing import BinaryIO, Iterator

from ethereum_rlp.exceptions import DecodingError
from ethereum_rlp.rlp import decode_item_length

COMPRESSED_SUFFIXES = (".gz",)
"""File name suffixes for which chain files are transparently decompressed."""

MAX_ITEM_SIZE = 64 * 1024 * 1024
"""Largest encoded item accepted from a chain file, header included."""

READ_CHUNK_SIZE = 64 * 1024


def is_compressed(path: Path | str) -> bool:
    """Return whether the chain file at `path` is read through a decompressor."""
    return Path(path).suffix in COMPRESSED_SUFFIXES


def open_chain_file(path: Path | str, mode: str = "rb") -> BinaryIO:
    """
    Open a chain file in binary mode, wrapping it in a gzip stream when its
    name carries a compression suffix.
    """
    if is_compressed(path):
        return gzip.open(path, mode)  # type: ignore[return-value]
    return open(path, mode)  # type: ignore[return-value]


class RLPStreamReader:
    """
    Iterate over the top-level RLP items of a binary stream.

    Each item is read in two steps: its header first, which carries the length
    of the payload, then exactly the remaining bytes of the item. A stream that
    ends between two items ends the iteration, while one that ends inside an
    item raises `DecodingError`.
    """

    def __init__(self, stream: BinaryIO):
        """Initialize the reader over an open binary stream."""
        self.stream = stream
        self.offset = 0

    def __iter__(self) -> Iterator[bytes]:
        """Iterate over the raw encoded items."""
        return self

    def _read_exact(self, size: int) -> bytes:
        chunks = []
        remaining = size
        while remaining > 0:
            chunk = self.stream.read(min(remaining, READ_CHUNK_SIZE))
            if not chunk:
                raise DecodingError(
                    f"unexpected end of stream at offset {self.offset}: "
                    f"wanted {size} bytes, got {size - remaining}"
                )
            chunks.append(chunk)
            remaining -= len(chunk)
        self.offset += size
        return b"".join(chunks)

    def __next__(self) -> bytes:
        """Read the next complete item, header included."""
        first = self.stream.read(1)
        if not first:
            raise StopIteration
        self.offset += 1

        prefix = first[0]
        header = first
        if 0xB8 <= prefix <= 0xBF:
            header += self._read_exact(prefix - 0xB7)
        elif prefix >= 0xF8:
            header += self._read_exact(prefix - 0xF7)

        size = decode_item_length(header)
        if size > MAX_ITEM_SIZE:
            raise DecodingError(
                f"item at offset {self.offset - len(header)} declares {size} bytes, "
                f"more than the limit of {MAX_ITEM_SIZE}"
            )
        return header + self._read_exact(size - len(header))
