"""
Hooks for carrying line strings inside structured records.

A generic serialization framework walks the record and writes the outer
format; the functions here only turn one line string field into compact
bytes and back.

Example:
    @dataclass
    class Trip:
        name: str
        route: np.ndarray = compls_field(compls_p7)

    state = encode_record(trip)         # {"name": ..., "route": b"..."}
    trip = decode_record(Trip, state)
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Type, TypeVar

import numpy as np

from .codec import CompLs
from .precision import Precision

# Key of the field metadata entry holding a FieldCodec
METADATA_KEY = "compls"

T = TypeVar("T")


@dataclass(frozen=True)
class FieldCodec:
    """
    Serialize/deserialize pair for a line string field at a fixed precision.

    Attributes:
        precision: Precision used in both directions.
    """
    precision: Precision

    def serialize(self, linestring: Any) -> bytes:
        """
        Encode a line string to compact bytes.

        Raises:
            BrokenLineStringError: If a coordinate delta is NaN or infinite.
        """
        return CompLs.try_encode(linestring, self.precision).coords

    def deserialize(self, data: bytes) -> np.ndarray:
        """
        Decode compact bytes into an array of shape (N, 2).

        Raises:
            BrokenEncodingError: If the bytes hold an odd number of coordinates.
        """
        return CompLs.try_new(data).linestring(self.precision)


compls_p2 = FieldCodec(Precision.TWO)
compls_p7 = FieldCodec(Precision.SEVEN)


def compls_field(codec: FieldCodec, **kwargs) -> Any:
    """Declare a dataclass field that is serialized through `codec`."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[METADATA_KEY] = codec
    return dataclasses.field(metadata=metadata, **kwargs)


def field_codecs(cls: type) -> Dict[str, FieldCodec]:
    """Map field names to codecs for every line string field of a dataclass."""
    if not dataclasses.is_dataclass(cls):
        return {}
    return {
        f.name: f.metadata[METADATA_KEY]
        for f in dataclasses.fields(cls)
        if METADATA_KEY in f.metadata
    }


def encode_record(record: Any) -> Any:
    """
    Turn a dataclass record into a plain dict with line string fields encoded.

    Records that are not dataclass instances are returned unchanged.
    """
    if not dataclasses.is_dataclass(record) or isinstance(record, type):
        return record
    codecs = field_codecs(type(record))
    state = {}
    for f in dataclasses.fields(record):
        value = getattr(record, f.name)
        state[f.name] = codecs[f.name].serialize(value) if f.name in codecs else value
    return state


def decode_record(cls: Type[T], state: Dict[str, Any]) -> T:
    """Rebuild a dataclass record from the state produced by `encode_record`."""
    codecs = field_codecs(cls)
    init_values = {}
    late_values = {}
    for f in dataclasses.fields(cls):
        if f.name not in state:
            continue
        value = state[f.name]
        if f.name in codecs:
            value = codecs[f.name].deserialize(value)
        if f.init:
            init_values[f.name] = value
        else:
            late_values[f.name] = value
    record = cls(**init_values)
    for name, value in late_values.items():
        object.__setattr__(record, name, value)
    return record
