"""
Variable-length encoding of signed 64-bit integers.

Each integer is zigzag-folded into an unsigned magnitude and written as
little-endian base-128 groups. Every byte except the last has its high bit
set; the last one (the terminal byte, value < 128) marks the end of the
integer inside a shared buffer.
"""

from typing import Iterator, Optional

import numpy as np

from .errors import BrokenEncodingError

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# A 64-bit magnitude never needs more than ten 7-bit groups
MAX_VARINT_LEN = 10

_CONTINUE = 0x80
_PAYLOAD = 0x7F


def zigzag_fold(value: int) -> int:
    """
    Map a signed integer onto an unsigned one.

    Non-negative values map to even numbers (2 * V), negative values to odd
    numbers (-2 * V - 1), so small magnitudes stay small.
    """
    if value >= 0:
        return 2 * value
    return -2 * value - 1


def zigzag_unfold(magnitude: int) -> int:
    """Inverse of `zigzag_fold`."""
    if magnitude % 2 == 0:
        return magnitude // 2
    return -(magnitude + 1) // 2


def encode_int(value: int, output: Optional[bytearray] = None) -> bytearray:
    """
    Append the varint encoding of `value` to `output`.

    Zero is written as the single byte 0x01. That byte is the general
    encoding of -1, so `decode_int(encode_int(0))` is -1, not 0. Existing
    encodings depend on this, and the quantization step compensates for it:
    both -1 and 0 dequantize to 0.0 (see `Precision.dequantize`).

    Args:
        value: A signed integer in the 64-bit range.
        output: Buffer to append to. A new bytearray is created if omitted.

    Returns:
        The buffer the bytes were appended to.

    Raises:
        ValueError: If `value` does not fit in a signed 64-bit integer.
    """
    if output is None:
        output = bytearray()
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"Value {value} does not fit in a signed 64-bit integer")

    if value == 0:
        output.append(1)
        return output

    magnitude = zigzag_fold(value)
    while True:
        piece = magnitude & _PAYLOAD
        magnitude >>= 7
        if magnitude:
            output.append(piece | _CONTINUE)
        else:
            output.append(piece)
            break
    return output


def decode_int(data: bytes) -> int:
    """
    Decode the bytes of exactly one varint, terminal byte included.

    Raises:
        BrokenEncodingError: If the run is empty, too long, or decodes to a
            value outside the signed 64-bit range.
    """
    if not data:
        raise BrokenEncodingError("Cannot decode an empty varint")
    if len(data) > MAX_VARINT_LEN:
        raise BrokenEncodingError(
            f"Varint of {len(data)} bytes exceeds the {MAX_VARINT_LEN}-byte limit"
        )

    magnitude = 0
    for shift, byte in enumerate(data):
        magnitude |= (byte & _PAYLOAD) << (7 * shift)

    value = zigzag_unfold(magnitude)
    if not INT64_MIN <= value <= INT64_MAX:
        raise BrokenEncodingError(f"Varint value {value} overflows a signed 64-bit integer")
    return value


def iter_varints(buffer: bytes) -> Iterator[bytes]:
    """
    Split a buffer into the byte runs of its varints.

    Scans forward keeping the start index of the pending run; every terminal
    byte closes one run. Continuation bytes after the last terminal byte do
    not form a complete varint and are not yielded.
    """
    view = memoryview(buffer)
    start = 0
    for end, byte in enumerate(view):
        if byte < _CONTINUE:
            yield bytes(view[start:end + 1])
            start = end + 1


def count_terminal(buffer: bytes) -> int:
    """Count terminal bytes (value < 128) in a buffer."""
    if not buffer:
        return 0
    return int(np.count_nonzero(np.frombuffer(buffer, dtype=np.uint8) < _CONTINUE))
