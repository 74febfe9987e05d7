"""Unit tests for the record field hooks."""
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
import pytest

from compls import (
    BrokenEncodingError,
    BrokenLineStringError,
    CompLs,
    FieldCodec,
    Precision,
    compls_field,
    compls_p2,
    compls_p7,
    decode_record,
    encode_record,
)
from compls.serde import METADATA_KEY, field_codecs


@dataclass
class Trip:
    name: str
    route: np.ndarray = compls_field(compls_p7)
    note: Optional[str] = None


@dataclass
class Parcel:
    outline: list = compls_field(compls_p2, default_factory=list)
    checksum: int = field(default=0, init=False)


def test_fixed_precision_codecs():
    assert compls_p2.precision == Precision.TWO
    assert compls_p7.precision == Precision.SEVEN


def test_field_codec_round_trip():
    points = [(76.8936157, 43.2443809), (76.8936309, 43.2442245)]
    data = compls_p7.serialize(points)
    assert data == CompLs.try_encode7(points).coords
    np.testing.assert_allclose(compls_p7.deserialize(data), points, atol=1e-7)


def test_field_codec_arbitrary_precision():
    codec = FieldCodec(Precision.arbitrary(3))
    np.testing.assert_allclose(codec.deserialize(codec.serialize([(1.234, -5.678)])), [[1.234, -5.678]], atol=1e-9)


def test_deserialize_validates_buffer():
    with pytest.raises(BrokenEncodingError):
        compls_p7.deserialize(b"\x02")


def test_serialize_rejects_broken_linestring():
    with pytest.raises(BrokenLineStringError):
        compls_p2.serialize([(0.0, float("nan"))])


def test_compls_field_keeps_other_metadata():
    @dataclass
    class Tagged:
        route: list = compls_field(compls_p2, metadata={"unit": "m"})

    (f,) = Tagged.__dataclass_fields__.values()
    assert f.metadata["unit"] == "m"
    assert f.metadata[METADATA_KEY] is compls_p2


def test_field_codecs():
    assert field_codecs(Trip) == {"route": compls_p7}
    assert field_codecs(dict) == {}


def test_encode_record_replaces_linestring_fields():
    trip = Trip(name="home", route=np.array([[76.9017028, 43.1802978]]))
    state = encode_record(trip)
    assert state["name"] == "home"
    assert state["note"] is None
    assert state["route"] == CompLs.try_encode7(trip.route).coords


def test_decode_record_restores_linestrings():
    trip = Trip(name="home", route=np.array([[76.9017028, 43.1802978], [76.9, 43.2]]), note="x")
    restored = decode_record(Trip, encode_record(trip))
    assert restored.name == "home"
    assert restored.note == "x"
    np.testing.assert_allclose(restored.route, trip.route, atol=1e-7)


def test_decode_record_sets_non_init_fields():
    parcel = Parcel(outline=[(1.0, 1.0), (2.0, 1.0)])
    parcel.checksum = 42
    restored = decode_record(Parcel, encode_record(parcel))
    assert restored.checksum == 42
    np.testing.assert_allclose(restored.outline, [(1.0, 1.0), (2.0, 1.0)], atol=1e-9)


def test_non_dataclass_records_pass_through():
    record = {"route": [(1.0, 2.0)]}
    assert encode_record(record) is record
    assert encode_record(Trip) is Trip
