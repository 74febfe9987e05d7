from abc import ABC
from dataclasses import dataclass

from .codec import CompLs


@dataclass
class Payload(ABC):
    """
    Abstract base class for stream payload data.

    This represents the intermediate data structure after packing a line
    string, before serialization. Subclasses define the fields they carry.
    """
    pass


@dataclass
class LineStringPayload(Payload):
    """
    Payload carrying one encoded line string.

    Attributes:
        coords: The compact encoding. Its precision is known to the decoder,
            not stored in the stream.
    """
    coords: CompLs
