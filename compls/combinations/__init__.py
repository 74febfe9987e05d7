"""
Combination modules for composing the codec with a serializer.
"""

from .registry import (
    CODECS,
    CodecEntry,
    register_codec,
)

# Import to trigger registration
from . import compls_zstd

from .compls_zstd import (
    ComplsZstdEncoderConfig,
    ComplsZstdDecoderConfig,
    FixedPrecisionEncoderConfig,
    FixedPrecisionDecoderConfig,
    ComplsZstdEncoder,
    ComplsZstdDecoder,
    build_compls_encoder,
    build_compls_decoder,
)

__all__ = [
    "CODECS",
    "CodecEntry",
    "register_codec",
    "ComplsZstdEncoderConfig",
    "ComplsZstdDecoderConfig",
    "FixedPrecisionEncoderConfig",
    "FixedPrecisionDecoderConfig",
    "ComplsZstdEncoder",
    "ComplsZstdDecoder",
    "build_compls_encoder",
    "build_compls_decoder",
]
