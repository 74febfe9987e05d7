from abc import ABC, abstractmethod
from typing import Any, Iterator


class AbstractSerializer(ABC):
    """
    Abstract base class for serializing records to bytes.

    Records are Payload objects or any dataclass instances; dataclass fields
    declared with `compls_field` are written as compact line strings.
    Subclasses must implement `serialize_frame` and `flush`.
    """

    @abstractmethod
    def serialize_frame(self, record: Any) -> Iterator[bytes]:
        """
        Serialize a single record to bytes.

        Args:
            record: The record to serialize.

        Yields:
            Serialized byte chunks. May yield zero, one, or multiple chunks.
        """
        pass

    @abstractmethod
    def flush(self) -> Iterator[bytes]:
        """
        Flush any remaining buffered data.

        This method should be called after all records have been serialized.

        Yields:
            Remaining buffered byte chunks.
        """
        pass
