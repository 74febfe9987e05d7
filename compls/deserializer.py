from abc import ABC, abstractmethod
from typing import Any, Iterator


class AbstractDeserializer(ABC):
    """
    Abstract base class for deserializing bytes to records.

    Subclasses must implement `deserialize_frame` and `flush`.
    """

    @abstractmethod
    def deserialize_frame(self, data: bytes) -> Iterator[Any]:
        """
        Deserialize a chunk of bytes.

        Args:
            data: A chunk of serialized data. Chunks need not be aligned
                with record boundaries.

        Yields:
            Records completed by this chunk. May yield zero, one, or many.
        """
        pass

    @abstractmethod
    def flush(self) -> Iterator[Any]:
        """
        Flush any remaining buffered data.

        This method should be called after all chunks have been fed.

        Yields:
            Remaining buffered records.
        """
        pass
