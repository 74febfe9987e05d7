from typing import Any, Iterator

from .codec import CompLs
from .payload import LineStringPayload
from .precision import Precision
from .serializer import AbstractSerializer


class LineStringEncoder:
    """
    Encoder for streams of line strings.

    This encoder uses a two-stage process:
    1. Pack each line string into a LineStringPayload (via `pack`)
    2. Serialize Payloads to bytes (via the serializer)
    """

    def __init__(self, serializer: AbstractSerializer, precision: Precision):
        """
        Initialize the encoder.

        Args:
            serializer: The serializer to use for converting Payload to bytes.
            precision: Number of digits coordinates are rounded to. The
                decoder must be given the same precision.
        """
        self._serializer = serializer
        self._precision = precision

    @property
    def precision(self) -> Precision:
        return self._precision

    def pack(self, linestring: Any) -> LineStringPayload:
        """
        Pack a single line string into a payload.

        Raises:
            BrokenLineStringError: If a coordinate delta is NaN or infinite.
        """
        return LineStringPayload(coords=CompLs.try_encode(linestring, self._precision))

    def encode_frame(self, linestring: Any) -> Iterator[bytes]:
        """
        Encode a single line string.

        Yields:
            Encoded byte chunks. May yield zero chunks while the serializer
            buffers.
        """
        yield from self._serializer.serialize_frame(self.pack(linestring))

    def flush(self) -> Iterator[bytes]:
        """Flush any remaining buffered data from the serializer."""
        yield from self._serializer.flush()

    def encode_stream(self, stream: Iterator[Any]) -> Iterator[bytes]:
        """
        Encode a stream of line strings.

        Args:
            stream: An iterator that yields line strings to encode.

        Yields:
            Encoded bytes for each line string or flush operation.
        """
        for linestring in stream:
            yield from self.encode_frame(linestring)

        yield from self.flush()
