"""
Fixed-point quantization of coordinate deltas.
"""

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from .errors import BrokenLineStringError
from .varint import INT64_MAX, INT64_MIN

MAX_DIGITS = 255


@dataclass(frozen=True)
class Precision:
    """
    Number of decimal digits coordinates are rounded to.

    `Precision.TWO` suits metric coordinate systems such as Pseudo-Mercator
    (EPSG:3857), `Precision.SEVEN` is needed for longitude/latitude degrees
    (WGS-84, EPSG:4326), and `Precision.arbitrary(d)` sets any other number
    of digits.

    The precision is not stored in encoded buffers; the same value must be
    used to encode and to decode.

    Attributes:
        digits: Number of decimal digits, 0 to 255.
    """
    digits: int

    TWO: ClassVar["Precision"]
    SEVEN: ClassVar["Precision"]

    def __post_init__(self):
        if isinstance(self.digits, bool) or not isinstance(self.digits, (int, np.integer)):
            raise ValueError(f"Precision digits must be an integer, got {self.digits!r}")
        if not 0 <= self.digits <= MAX_DIGITS:
            raise ValueError(f"Precision digits must be in 0..{MAX_DIGITS}, got {self.digits}")
        object.__setattr__(self, "digits", int(self.digits))

    @classmethod
    def arbitrary(cls, digits: int) -> "Precision":
        """Create a precision with any number of digits."""
        return cls(digits)

    @property
    def name(self) -> str:
        if self.digits == 2:
            return "TwoDigits"
        if self.digits == 7:
            return "SevenDigits"
        return f"ArbitraryDigits({self.digits})"

    def scale(self) -> float:
        """The multiplicative scale factor, 10 ** digits."""
        return 10.0 ** self.digits

    def quantize_array(self, deltas: np.ndarray) -> np.ndarray:
        """
        Quantize real deltas to integers.

        Applies the formula:
            quantized = round((x - (1 / m if x < 0 else 0)) * m)

        Negative deltas are lowered by one step before rounding. Decoding
        maps negative integers -1, -2, ... back one step up, so without the
        shift any tiny negative delta in (-1/m, 0) would come back as -1/m.
        Rounding is half away from zero.

        Args:
            deltas: Array of real deltas, any shape.

        Returns:
            Array of the same shape, dtype int64.

        Raises:
            BrokenLineStringError: If a delta is NaN or infinite, or its
                quantized value does not fit in a signed 64-bit integer.
        """
        deltas = np.asarray(deltas, dtype=np.float64)
        if not np.all(np.isfinite(deltas)):
            raise BrokenLineStringError("x or y coordinate delta is NaN or infinite")

        m = self.scale()
        scaled = np.where(deltas < 0, deltas - 1.0 / m, deltas) * m

        magnitude = np.abs(scaled)
        rounded = np.floor(magnitude)
        rounded += (magnitude - rounded) >= 0.5
        rounded = np.copysign(rounded, scaled)

        # float(2 ** 63) is the first value past INT64_MAX
        if np.any(rounded >= float(INT64_MAX)) or np.any(rounded < float(INT64_MIN)):
            raise BrokenLineStringError(
                f"coordinate delta does not fit in a 64-bit integer at {self.name} precision"
            )
        return rounded.astype(np.int64)

    def dequantize_array(self, values: np.ndarray) -> np.ndarray:
        """
        Map quantized integers back to real deltas.

        Applies the formula:
            x = v / m, then x += 1 / m if x < 0

        Args:
            values: Array of quantized integers, any shape.

        Returns:
            Array of the same shape, dtype float64.
        """
        m = self.scale()
        decoded = np.asarray(values, dtype=np.int64) / m
        return np.where(decoded < 0, decoded + 1.0 / m, decoded)

    def quantize(self, delta: float) -> int:
        """Quantize a single real delta. See `quantize_array`."""
        return int(self.quantize_array(np.array([delta], dtype=np.float64))[0])

    def dequantize(self, value: int) -> float:
        """Dequantize a single integer. See `dequantize_array`."""
        return float(self.dequantize_array(np.array([value], dtype=np.int64))[0])


Precision.TWO = Precision(2)
Precision.SEVEN = Precision(7)
