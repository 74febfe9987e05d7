"""
Delta encoding of line strings into compact byte buffers.

A line string is stored as one flat buffer: for every point, the x delta and
the y delta from the previous point are quantized and written as two
varints. Points are delimited only by the varints' terminal bytes, so a valid
buffer always holds an even number of them.
"""

from typing import Any, List, Tuple

import numpy as np

from .errors import BrokenEncodingError, BrokenLineStringError, EmptyLineStringError
from .linestring import as_points
from .precision import Precision
from .varint import count_terminal, decode_int, encode_int, iter_varints


class CompLs:
    """
    Compact, immutable encoding of a line string.

    Instances are created by `try_encode` or from raw bytes by `try_new`.
    The buffer does not record its precision; pass the same `Precision` to
    `linestring` that was used to encode.
    """

    __slots__ = ("_coords",)

    def __init__(self, coords: bytes):
        """
        Wrap raw bytes after checking their consistency.

        Raises:
            BrokenEncodingError: If the number of terminal bytes is odd.
        """
        coords = bytes(coords)
        if count_terminal(coords) % 2 != 0:
            raise BrokenEncodingError("number of coordinates in encoding is odd, must be even")
        self._coords = coords

    @classmethod
    def _from_trusted(cls, coords: bytes) -> "CompLs":
        # Only for buffers built by try_encode, which are even by construction
        obj = cls.__new__(cls)
        obj._coords = bytes(coords)
        return obj

    @classmethod
    def try_new(cls, coords: bytes) -> "CompLs":
        """
        Create a CompLs from raw bytes and check their consistency.

        Raises:
            BrokenEncodingError: If the number of terminal bytes is odd.
        """
        return cls(coords)

    @classmethod
    def try_encode(cls, linestring: Any, precision: Precision, allow_empty: bool = True) -> "CompLs":
        """
        Encode a line string.

        Args:
            linestring: Points as accepted by `as_points`.
            precision: Number of digits the coordinates are rounded to.
            allow_empty: If False, a line string without points is rejected.
                An empty line string otherwise encodes to an empty buffer.

        Returns:
            The compact encoding.

        Raises:
            EmptyLineStringError: If there are no points and `allow_empty` is False.
            BrokenLineStringError: If a coordinate delta is NaN or infinite,
                or too large for the precision. No partial buffer is returned.
        """
        points = as_points(linestring)
        if not allow_empty and len(points) == 0:
            raise EmptyLineStringError("line string has no points")

        # deltas[i] = points[i] - points[i - 1], starting from (0, 0)
        with np.errstate(invalid="ignore"):
            deltas = np.diff(points, axis=0, prepend=np.zeros((1, 2)))
        finite = np.isfinite(deltas).all(axis=1)
        if not finite.all():
            index = int(np.argmin(finite))
            raise BrokenLineStringError(f"x or y coord is NaN or infinite at point {index}")

        quantized = precision.quantize_array(deltas)

        coords = bytearray()
        for x, y in quantized.tolist():
            encode_int(x, coords)
            encode_int(y, coords)
        return cls._from_trusted(coords)

    @classmethod
    def try_encode2(cls, linestring: Any) -> "CompLs":
        return cls.try_encode(linestring, Precision.TWO)

    @classmethod
    def try_encode7(cls, linestring: Any) -> "CompLs":
        return cls.try_encode(linestring, Precision.SEVEN)

    @property
    def coords(self) -> bytes:
        """The encoded buffer."""
        return self._coords

    @property
    def nbytes(self) -> int:
        return len(self._coords)

    def size(self) -> int:
        """Number of points, counted without decoding."""
        return count_terminal(self._coords) // 2

    def linestring(self, precision: Precision) -> np.ndarray:
        """
        Decode the buffer into an array of shape (N, 2).

        Raises:
            BrokenEncodingError: If a varint is malformed.
        """
        values = [decode_int(run) for run in iter_varints(self._coords)]
        # An unpaired trailing x delta has no point to belong to
        del values[len(values) - len(values) % 2:]
        quantized = np.array(values, dtype=np.int64).reshape(-1, 2)
        deltas = precision.dequantize_array(quantized)
        return np.cumsum(deltas, axis=0)

    def to_sequence(self, precision: Precision) -> List[Tuple[float, float]]:
        """Decode the buffer into a list of (x, y) tuples."""
        return [(x, y) for x, y in self.linestring(precision).tolist()]

    def __bytes__(self) -> bytes:
        return self._coords

    def __eq__(self, other):
        if not isinstance(other, CompLs):
            return NotImplemented
        return self._coords == other._coords

    def __hash__(self):
        return hash(self._coords)

    def __repr__(self):
        return f"CompLs(size={self.size()}, coords={self._coords.hex()})"

    def __reduce__(self):
        # Unpickling goes through validation
        return (_restore, (self._coords,))


def _restore(coords: bytes) -> CompLs:
    return CompLs.try_new(coords)


def try_compact(linestring: Any, precision: Precision) -> CompLs:
    """Encode a line string, e.g. `try_compact(points, Precision.SEVEN)`."""
    return CompLs.try_encode(linestring, precision)


def try_compact2(linestring: Any) -> CompLs:
    return CompLs.try_encode(linestring, Precision.TWO)


def try_compact7(linestring: Any) -> CompLs:
    return CompLs.try_encode(linestring, Precision.SEVEN)
