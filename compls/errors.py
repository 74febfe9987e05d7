"""
Error types raised by the compact line string codec.
"""


class CompLsError(ValueError):
    """Base class for all codec errors."""
    pass


class EmptyLineStringError(CompLsError):
    """Raised when a line string without points is rejected."""
    pass


class BrokenLineStringError(CompLsError):
    """Raised when a coordinate delta cannot be quantized (NaN, infinite or too large)."""
    pass


class BrokenEncodingError(CompLsError):
    """Raised when a byte buffer is not a well-formed compact encoding."""
    pass
