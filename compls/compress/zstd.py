"""
Zstandard-based streaming serialization and deserialization.

Uses cloudpickle + length-prefix framing + zstd compression for streaming
records. Dataclass instances with fields declared by `compls_field` are
reduced to their compact line string state wherever they occur in a record,
including inside lists, dicts and other dataclasses, and are rebuilt through
`decode_record` on load. Everything else is left to cloudpickle.

WARNING: cloudpickle uses pickle under the hood. Do NOT use with untrusted
data sources. Only use with trusted data (local files, same-process, etc.).
"""

import io
import struct
from typing import Any, Iterator

import cloudpickle as pickle
import zstandard as zstd

from ..deserializer import AbstractDeserializer
from ..serde import decode_record, encode_record, field_codecs
from ..serializer import AbstractSerializer

# 4-byte big-endian length prefix (max 4GB per record)
_LEN = struct.Struct(">I")


class _RecordPickler(pickle.CloudPickler):
    """CloudPickler that sends line string fields through their codecs."""

    def reducer_override(self, obj):
        if not isinstance(obj, type) and field_codecs(type(obj)):
            return (decode_record, (type(obj), encode_record(obj)))
        return super().reducer_override(obj)


def _dumps_record(record: Any) -> bytes:
    with io.BytesIO() as buffer:
        _RecordPickler(buffer, protocol=pickle.DEFAULT_PROTOCOL).dump(record)
        return buffer.getvalue()


class ZstdSerializer(AbstractSerializer):
    """
    Streaming serializer using cloudpickle + length-prefix framing + zstd.

    Each record is pickled, prefixed with its length, then compressed
    incrementally using zstd streaming compression.
    """

    def __init__(self, level: int = 7):
        """
        Initialize the serializer.

        Args:
            level: Zstd compression level (1-22). Default is 7.
        """
        self._compressor = zstd.ZstdCompressor(level=level).compressobj()

    def serialize_frame(self, record: Any) -> Iterator[bytes]:
        """
        Serialize and compress a record.

        Args:
            record: A Payload, a dataclass instance or any picklable object.

        Yields:
            Compressed byte chunks (may yield zero chunks if buffered).

        Raises:
            BrokenLineStringError: If a line string field cannot be encoded.
        """
        pickled = _dumps_record(record)
        framed = _LEN.pack(len(pickled)) + pickled
        out = self._compressor.compress(framed)
        if out:
            yield out

    def flush(self) -> Iterator[bytes]:
        """
        Flush remaining compressed data.

        Yields:
            Final compressed byte chunks.
        """
        tail = self._compressor.flush()
        if tail:
            yield tail


class ZstdDeserializer(AbstractDeserializer):
    """
    Streaming deserializer using zstd + length-prefix framing + cloudpickle.

    Decompresses incoming bytes incrementally, buffers until a complete
    length-prefixed frame is available, then unpickles and yields records.
    """

    def __init__(self):
        """Initialize the deserializer."""
        self._decompressor = zstd.ZstdDecompressor().decompressobj()
        self._buffer = bytearray()

    def deserialize_frame(self, data: bytes) -> Iterator[Any]:
        """
        Decompress and deserialize bytes to records.

        Args:
            data: Compressed bytes to deserialize.

        Yields:
            Complete records as they become available.

        Raises:
            BrokenEncodingError: If a line string field is not a valid encoding.
        """
        decompressed = self._decompressor.decompress(data)
        if decompressed:
            self._buffer.extend(decompressed)

        yield from self._extract_records()

    def flush(self) -> Iterator[Any]:
        """
        Flush any remaining buffered data.

        Yields:
            Any remaining records in the buffer.

        Raises:
            ValueError: If incomplete data is left over.
        """
        yield from self._extract_records()

        if self._buffer:
            raise ValueError(
                f"Incomplete data in buffer: {len(self._buffer)} bytes remaining"
            )

    def _extract_records(self) -> Iterator[Any]:
        while len(self._buffer) >= _LEN.size:
            (length,) = _LEN.unpack(self._buffer[: _LEN.size])
            if len(self._buffer) < _LEN.size + length:
                break

            pickled = bytes(self._buffer[_LEN.size: _LEN.size + length])
            del self._buffer[: _LEN.size + length]

            yield pickle.loads(pickled)


def dumps(records: Iterator[Any], level: int = 7) -> bytes:
    """Serialize a whole sequence of records into one compressed buffer."""
    serializer = ZstdSerializer(level=level)
    chunks = []
    for record in records:
        chunks.extend(serializer.serialize_frame(record))
    chunks.extend(serializer.flush())
    return b"".join(chunks)


def loads(data: bytes) -> list:
    """Deserialize a buffer produced by `dumps`."""
    deserializer = ZstdDeserializer()
    records = list(deserializer.deserialize_frame(data))
    records.extend(deserializer.flush())
    return records
