from dataclasses import dataclass
from typing import Optional

from omegaconf import MISSING
from .bytes import BytesReader, BytesWriter
from .wkt import WktReader, WktWriter


@dataclass
class WktReaderConfig:
    """Configuration for reading a WKT line string file."""
    path: str = MISSING


@dataclass
class WktWriterConfig:
    """Configuration for writing a WKT line string file."""
    path: str = MISSING
    digits: Optional[int] = None


def build_wkt_reader(config: WktReaderConfig) -> WktReader:
    """Build a WktReader from configuration."""
    return WktReader(path=config.path)


def build_wkt_writer(config: WktWriterConfig) -> WktWriter:
    """Build a WktWriter from configuration."""
    return WktWriter(
        path=config.path,
        digits=config.digits,
    )


@dataclass
class BytesReaderConfig:
    """Configuration for reading an encoded stream from a file."""
    path: str = MISSING
    chunk_size: int = BytesReader.DEFAULT_CHUNK_SIZE


@dataclass
class BytesWriterConfig:
    """Configuration for writing an encoded stream to a file."""
    path: str = MISSING


def build_bytes_reader(config: BytesReaderConfig) -> BytesReader:
    """Build a BytesReader from configuration."""
    return BytesReader(
        path=config.path,
        chunk_size=config.chunk_size,
    )


def build_bytes_writer(config: BytesWriterConfig) -> BytesWriter:
    """Build a BytesWriter from configuration."""
    return BytesWriter(
        path=config.path,
    )
