from typing import Iterator

import numpy as np

from .deserializer import AbstractDeserializer
from .payload import LineStringPayload
from .precision import Precision


class LineStringDecoder:
    """
    Decoder for streams of line strings.

    This decoder uses a two-stage process:
    1. Deserialize bytes to Payload objects (via the deserializer)
    2. Unpack Payloads to point arrays (via `unpack`)
    """

    def __init__(self, deserializer: AbstractDeserializer, precision: Precision):
        """
        Initialize the decoder.

        Args:
            deserializer: The deserializer to use for converting bytes to Payload.
            precision: Precision the stream was encoded with.
        """
        self._deserializer = deserializer
        self._precision = precision

    @property
    def precision(self) -> Precision:
        return self._precision

    def unpack(self, payload: LineStringPayload) -> np.ndarray:
        """
        Unpack a payload into an array of shape (N, 2).

        Raises:
            TypeError: If the stream holds something other than line strings.
        """
        if not isinstance(payload, LineStringPayload):
            raise TypeError(f"Expected LineStringPayload, got {type(payload).__name__}")
        return payload.coords.linestring(self._precision)

    def decode_frame(self, data: bytes) -> Iterator[np.ndarray]:
        """
        Decode a chunk of encoded data.

        Yields:
            Line strings completed by this chunk.
        """
        for payload in self._deserializer.deserialize_frame(data):
            yield self.unpack(payload)

    def flush(self) -> Iterator[np.ndarray]:
        """Flush any remaining buffered data from the deserializer."""
        for payload in self._deserializer.flush():
            yield self.unpack(payload)

    def decode_stream(self, stream: Iterator[bytes]) -> Iterator[np.ndarray]:
        """
        Decode a stream of encoded byte chunks.

        Args:
            stream: An iterator that yields bytes objects to decode.

        Yields:
            Decoded line strings.
        """
        for data in stream:
            yield from self.decode_frame(data)

        yield from self.flush()
