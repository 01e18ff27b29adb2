"""
Conversion of fixture and JSON-RPC values into bytes and integers.

Every conversion failure is a `ValueError`, so that the pydantic types built
on top of these functions report invalid input as a `ValidationError`.
"""

from re import sub
from typing import List, SupportsBytes, TypeAlias

BytesConvertible: TypeAlias = str | bytes | SupportsBytes | List[int]
FixedSizeBytesConvertible: TypeAlias = str | bytes | SupportsBytes | List[int] | int
NumberConvertible: TypeAlias = str | bytes | SupportsBytes | int


def to_bytes(input_bytes: BytesConvertible) -> bytes:
    """Convert a hex string, a byte string or a list of byte values into bytes."""
    if isinstance(input_bytes, (bytes, SupportsBytes)):
        return bytes(input_bytes)
    if isinstance(input_bytes, list):
        try:
            return bytes(input_bytes)
        except TypeError as e:
            raise ValueError(f"invalid byte values: {e}") from e
    if isinstance(input_bytes, str):
        # Hex strings may contain whitespace for readability
        hex_str = sub(r"\s+", "", input_bytes).removeprefix("0x")
        if len(hex_str) % 2 == 1:
            hex_str = "0" + hex_str
        return bytes.fromhex(hex_str)
    raise ValueError(f"cannot convert {type(input_bytes).__name__} to bytes")


def to_fixed_size_bytes(
    input_bytes: FixedSizeBytesConvertible,
    size: int,
    *,
    left_padding: bool = False,
) -> bytes:
    """
    Convert the input into exactly `size` bytes.

    Integers are always left-padded; other inputs only when `left_padding` is
    set.
    """
    if isinstance(input_bytes, int):
        try:
            return input_bytes.to_bytes(size, "big")
        except OverflowError as e:
            raise ValueError(f"{input_bytes} does not fit in {size} bytes") from e
    data = to_bytes(input_bytes)
    if len(data) > size:
        raise ValueError(f"input is too large for fixed size bytes: {len(data)} > {size}")
    if len(data) < size:
        if not left_padding:
            raise ValueError(f"input is too small for fixed size bytes: {len(data)} < {size}")
        data = data.rjust(size, b"\x00")
    return data


def to_number(input_number: NumberConvertible) -> int:
    """Convert a decimal or `0x` hex string, or big-endian bytes, into an integer."""
    if isinstance(input_number, int):
        return input_number
    if isinstance(input_number, str):
        value = input_number.strip()
        if value.startswith(("0x", "0X")):
            return int(value, 16)
        return int(value, 10)
    if isinstance(input_number, (bytes, SupportsBytes)):
        return int.from_bytes(bytes(input_number), "big")
    raise ValueError(f"cannot convert {type(input_number).__name__} to a number")
