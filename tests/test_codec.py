"""Unit tests for the delta line string codec."""
import pickle

import numpy as np
import pytest

from compls import (
    BrokenEncodingError,
    BrokenLineStringError,
    CompLs,
    CompLsError,
    EmptyLineStringError,
    Precision,
    try_compact,
    try_compact2,
    try_compact7,
)
from compls.linestring import points_close
from compls.varint import count_terminal

# Routes with seven-digit lon/lat coordinates
LINESTRINGS = [
    [(76.9017028, 43.1802978)],
    [(76.8936157, 43.2443809), (76.8936309, 43.2442245)],
    [(76.8397903, 43.2167510), (76.8398132, 43.2167587), (76.8408584, 43.2169990)],
    [(76.9756393, 43.2715377), (76.9760818, 43.2720947), (76.9766235, 43.2728042)],
    [
        (76.9615707, 43.2746200), (76.9616699, 43.2747688), (76.9620742, 43.2753715),
        (76.9627532, 43.2764091), (76.9629516, 43.2765502), (76.9630584, 43.2765998),
    ],
    [
        (76.9759140, 43.2704200), (76.9757766, 43.2705001), (76.9756774, 43.2705917),
        (76.9755706, 43.2707099), (76.9754562, 43.2708740), (76.9753875, 43.2710494),
        (76.9754028, 43.2711601), (76.9754638, 43.2713012), (76.9756011, 43.2714843),
        (76.9756393, 43.2715377),
    ],
]


def test_single_point_seven_digits():
    points = [(76.9017028, 43.1802978)]
    encoded = CompLs.try_encode(points, Precision.SEVEN)
    decoded = encoded.linestring(Precision.SEVEN)
    assert decoded.shape == (1, 2)
    np.testing.assert_allclose(decoded, points, rtol=0, atol=1e-7)


def test_two_points_seven_digits():
    points = [(76.8936157, 43.2443809), (76.8936309, 43.2442245)]
    encoded = CompLs.try_encode(points, Precision.SEVEN)
    assert encoded.size() == 2
    decoded = encoded.linestring(Precision.SEVEN)
    assert decoded.shape == (2, 2)
    np.testing.assert_allclose(decoded, points, rtol=0, atol=1e-7)


@pytest.mark.parametrize("points", LINESTRINGS)
def test_size_matches_point_count(points):
    encoded = CompLs.try_encode7(points)
    assert encoded.size() == len(points)
    assert len(encoded.linestring(Precision.SEVEN)) == len(points)
    assert points_close(encoded.linestring(Precision.SEVEN), points, 1e-7)


@pytest.mark.parametrize("points", LINESTRINGS)
def test_terminal_byte_count_is_even(points):
    encoded = CompLs.try_encode7(points)
    assert count_terminal(encoded.coords) == 2 * len(points)


def test_empty_linestring_encodes_to_empty_buffer():
    encoded = CompLs.try_encode([], Precision.TWO)
    assert encoded.coords == b""
    assert encoded.nbytes == 0
    assert encoded.size() == 0
    assert encoded.linestring(Precision.TWO).shape == (0, 2)
    assert encoded.to_sequence(Precision.TWO) == []


def test_empty_linestring_can_be_rejected():
    with pytest.raises(EmptyLineStringError):
        CompLs.try_encode(np.empty((0, 2)), Precision.TWO, allow_empty=False)
    assert issubclass(EmptyLineStringError, CompLsError)


def test_known_bytes():
    encoded = CompLs.try_encode([(0.01, -0.01)], Precision.TWO)
    # x: 1 -> 0x02, y: (-0.01 - 0.01) * 100 = -2 -> 0x03
    assert encoded.coords == b"\x02\x03"
    np.testing.assert_allclose(encoded.linestring(Precision.TWO), [[0.01, -0.01]], atol=1e-12)


def test_repeated_point_decodes_exactly():
    """A zero delta is written as 0x01 and still comes back as zero."""
    points = [(1.5, 2.5), (1.5, 2.5)]
    encoded = CompLs.try_encode2(points)
    assert encoded.coords == bytes([0xAC, 0x02, 0xF4, 0x03, 0x01, 0x01])
    np.testing.assert_allclose(encoded.linestring(Precision.TWO), points, atol=1e-12)


def test_negative_deltas():
    points = [(10.0, 10.0), (9.99, 9.5), (-3.25, 0.0)]
    decoded = CompLs.try_encode2(points).linestring(Precision.TWO)
    np.testing.assert_allclose(decoded, points, atol=1e-9)


@pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
def test_non_finite_coordinate_is_rejected(bad):
    with pytest.raises(BrokenLineStringError, match="point 1"):
        CompLs.try_encode([(0.0, 0.0), (1.0, bad), (2.0, 2.0)], Precision.SEVEN)


def test_coordinate_too_large_for_precision():
    with pytest.raises(BrokenLineStringError):
        CompLs.try_encode([(1e15, 0.0)], Precision.SEVEN)


def test_points_must_be_two_dimensional():
    with pytest.raises(ValueError):
        CompLs.try_encode([(1.0, 2.0, 3.0)], Precision.TWO)


def test_accepts_objects_with_coords():
    class Geometry:
        coords = [(1.0, 2.0), (3.0, 4.0)]

    assert CompLs.try_encode(Geometry(), Precision.TWO) == CompLs.try_encode(Geometry.coords, Precision.TWO)


def test_try_new_accepts_even_terminal_count():
    encoded = CompLs.try_new(bytearray(b"\x80\x01\x02"))
    assert encoded.size() == 1
    assert isinstance(encoded.coords, bytes)
    assert CompLs.try_new(b"").size() == 0


def test_try_new_rejects_odd_terminal_count():
    with pytest.raises(BrokenEncodingError):
        CompLs.try_new(b"\x02")
    with pytest.raises(BrokenEncodingError):
        CompLs.try_new(b"\x02\x03\x80\x04")


def test_try_new_round_trip_of_encoded_bytes():
    encoded = CompLs.try_encode7(LINESTRINGS[4])
    assert CompLs.try_new(bytes(encoded)) == encoded


def test_trailing_continuation_bytes_are_ignored():
    encoded = CompLs.try_new(b"\x02\x03\x80")
    assert encoded.size() == 1
    assert encoded.linestring(Precision.TWO).shape == (1, 2)


def test_overlong_varint_fails_on_decode():
    encoded = CompLs.try_new(b"\xff" * 11 + b"\x02\x02")
    with pytest.raises(BrokenEncodingError):
        encoded.linestring(Precision.TWO)


def test_to_sequence():
    sequence = CompLs.try_encode2([(1.25, -2.5)]).to_sequence(Precision.TWO)
    assert sequence == [pytest.approx((1.25, -2.5))]
    assert isinstance(sequence[0], tuple)


def test_equality_and_hash():
    a = CompLs.try_encode2([(1.0, 2.0)])
    b = CompLs.try_new(a.coords)
    assert a == b
    assert hash(a) == hash(b)
    assert a != CompLs.try_encode2([(1.0, 2.5)])
    assert a != a.coords
    assert "size=1" in repr(a)


def test_pickle_round_trip():
    encoded = CompLs.try_encode7(LINESTRINGS[5])
    assert pickle.loads(pickle.dumps(encoded)) == encoded


def test_unpickling_validates():
    data = pickle.dumps(CompLs(b"\x7e\x7c"))
    # Turn the first varint into a continuation byte, leaving one coordinate
    tampered = data.replace(b"\x7e\x7c", b"\xfe\x7c")
    assert tampered != data
    with pytest.raises(BrokenEncodingError):
        pickle.loads(tampered)


@pytest.mark.parametrize("coords", [b"\x02", b"\x02\x04\x06", b"\x80\x01"])
def test_constructor_rejects_odd_coordinate_count(coords):
    with pytest.raises(BrokenEncodingError):
        CompLs(coords)


def test_constructor_accepts_even_coordinate_count():
    assert CompLs(b"\x02\x04").size() == 1


def test_compact_helpers():
    points = LINESTRINGS[2]
    assert try_compact(points, Precision.SEVEN) == CompLs.try_encode(points, Precision.SEVEN)
    assert try_compact7(points) == CompLs.try_encode7(points)
    assert try_compact2(points) == CompLs.try_encode(points, Precision.TWO)


def test_precision_mismatch_changes_result():
    encoded = CompLs.try_encode7([(76.9017028, 43.1802978)])
    assert not points_close(encoded.linestring(Precision.TWO), [(76.9017028, 43.1802978)], 1e-3)


@pytest.mark.parametrize("precision", [Precision.TWO, Precision.SEVEN, Precision.arbitrary(4)])
def test_round_trip_of_grid_points(precision):
    rng = np.random.default_rng(7)
    m = precision.scale()
    limit = int(180 * m)
    points = rng.integers(-limit, limit, size=(100, 2)) / m
    decoded = CompLs.try_encode(points, precision).linestring(precision)
    assert decoded.shape == points.shape
    assert np.all(np.abs(decoded - points) < 1.0 / m)


def test_round_trip_error_of_two_arbitrary_points():
    rng = np.random.default_rng(3)
    for _ in range(100):
        points = rng.uniform(-1000, 1000, size=(2, 2))
        decoded = CompLs.try_encode2(points).linestring(Precision.TWO)
        assert np.all(np.abs(decoded - points) <= 1.0 / 100 + 1e-9)
