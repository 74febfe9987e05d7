"""
IO module for reading and writing WKT line strings and encoded streams.
"""

from .wkt import WktReader, WktWriter, parse_wkt, format_wkt
from .bytes import BytesReader, BytesWriter
from .config import (
    WktReaderConfig,
    WktWriterConfig,
    BytesReaderConfig,
    BytesWriterConfig,
    build_wkt_reader,
    build_wkt_writer,
    build_bytes_reader,
    build_bytes_writer,
)

__all__ = [
    "WktReader",
    "WktWriter",
    "parse_wkt",
    "format_wkt",
    "WktReaderConfig",
    "WktWriterConfig",
    "build_wkt_reader",
    "build_wkt_writer",
    "BytesReader",
    "BytesWriter",
    "BytesReaderConfig",
    "BytesWriterConfig",
    "build_bytes_reader",
    "build_bytes_writer",
]
