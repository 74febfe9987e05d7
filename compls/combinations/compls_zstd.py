"""
Compact line string + Zstd compression encoder/decoder combinations.

Each line string is delta-encoded into a CompLs buffer at a fixed precision,
then framed and compressed by the Zstd serializer. Three combinations are
registered:
- compls2: two-digit precision (metric coordinate systems)
- compls7: seven-digit precision (longitude/latitude degrees)
- compls: precision taken from the `digits` option
"""

from dataclasses import dataclass

from ..compress.zstd import ZstdSerializer, ZstdDeserializer
from ..decoder import LineStringDecoder
from ..encoder import LineStringEncoder
from ..precision import Precision
from .registry import CodecEntry, register_codec


def ComplsZstdEncoder(precision: Precision, zstd_level: int = 7) -> LineStringEncoder:
    """
    Create an encoder combining compact line strings + Zstd compression.

    Args:
        precision: Number of digits coordinates are rounded to.
        zstd_level: Zstd compression level (1-22). Default is 7.

    Returns:
        A LineStringEncoder instance.
    """
    return LineStringEncoder(
        serializer=ZstdSerializer(level=zstd_level),
        precision=precision,
    )


def ComplsZstdDecoder(precision: Precision) -> LineStringDecoder:
    """
    Create a decoder for compact line strings + Zstd compressed data.

    Args:
        precision: Precision the data was encoded with.

    Returns:
        A LineStringDecoder instance.
    """
    return LineStringDecoder(
        deserializer=ZstdDeserializer(),
        precision=precision,
    )


@dataclass
class ComplsZstdEncoderConfig:
    """Configuration for the compls encoder with selectable precision."""
    digits: int = 7
    zstd_level: int = 7


@dataclass
class ComplsZstdDecoderConfig:
    """Configuration for the compls decoder with selectable precision."""
    digits: int = 7


@dataclass
class FixedPrecisionEncoderConfig:
    """Configuration for the fixed precision encoders."""
    zstd_level: int = 7


@dataclass
class FixedPrecisionDecoderConfig:
    """Configuration for the fixed precision decoders (nothing to set)."""
    pass


def build_compls_encoder(config: ComplsZstdEncoderConfig) -> LineStringEncoder:
    """Build encoder from configuration."""
    return ComplsZstdEncoder(
        precision=Precision.arbitrary(config.digits),
        zstd_level=config.zstd_level,
    )


def build_compls_decoder(config: ComplsZstdDecoderConfig) -> LineStringDecoder:
    """Build decoder from configuration."""
    return ComplsZstdDecoder(precision=Precision.arbitrary(config.digits))


def build_compls2_encoder(config: FixedPrecisionEncoderConfig) -> LineStringEncoder:
    return ComplsZstdEncoder(precision=Precision.TWO, zstd_level=config.zstd_level)


def build_compls2_decoder(config: FixedPrecisionDecoderConfig) -> LineStringDecoder:
    return ComplsZstdDecoder(precision=Precision.TWO)


def build_compls7_encoder(config: FixedPrecisionEncoderConfig) -> LineStringEncoder:
    return ComplsZstdEncoder(precision=Precision.SEVEN, zstd_level=config.zstd_level)


def build_compls7_decoder(config: FixedPrecisionDecoderConfig) -> LineStringDecoder:
    return ComplsZstdDecoder(precision=Precision.SEVEN)


register_codec(CodecEntry(
    name="compls",
    encoder_factory=build_compls_encoder,
    decoder_factory=build_compls_decoder,
    encoder_config_class=ComplsZstdEncoderConfig,
    decoder_config_class=ComplsZstdDecoderConfig,
    description="Compact line strings (digits from codec.digits) + Zstd",
))

register_codec(CodecEntry(
    name="compls2",
    encoder_factory=build_compls2_encoder,
    decoder_factory=build_compls2_decoder,
    encoder_config_class=FixedPrecisionEncoderConfig,
    decoder_config_class=FixedPrecisionDecoderConfig,
    precision=Precision.TWO,
    description="Compact line strings for metric coordinates + Zstd",
))

register_codec(CodecEntry(
    name="compls7",
    encoder_factory=build_compls7_encoder,
    decoder_factory=build_compls7_decoder,
    encoder_config_class=FixedPrecisionEncoderConfig,
    decoder_config_class=FixedPrecisionDecoderConfig,
    precision=Precision.SEVEN,
    description="Compact line strings for longitude/latitude degrees + Zstd",
))
