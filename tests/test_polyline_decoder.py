"""Tests for the encoded polyline decoder."""

from __future__ import annotations

import random

import polyline
import pytest

from ev_route_planner.errors import PolylineDecodeError
from ev_route_planner.geometry import decode_polyline
from ev_route_planner.models import Coordinate

# Reference example from the encoded polyline format documentation.
_REFERENCE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
_REFERENCE_POINTS = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]


def _flatten(points):
    return [value for point in points for value in point]


def _as_flat(points):
    return _flatten(point.as_tuple() for point in points)


def test_decodes_reference_polyline() -> None:
    decoded = decode_polyline(_REFERENCE)
    assert all(isinstance(point, Coordinate) for point in decoded)
    assert _as_flat(decoded) == pytest.approx(_flatten(_REFERENCE_POINTS), abs=1e-9)


def test_empty_input_decodes_to_empty_list() -> None:
    assert decode_polyline("") == []


def test_round_trip_matches_within_precision() -> None:
    rng = random.Random(20240501)
    points = [
        (rng.uniform(-85.0, 85.0), rng.uniform(-179.9, 179.9)) for _ in range(250)
    ]
    decoded = decode_polyline(polyline.encode(points, 5))
    assert len(decoded) == len(points)
    for original, point in zip(points, decoded):
        assert abs(point.lat - original[0]) <= 1e-5
        assert abs(point.lon - original[1]) <= 1e-5


def test_decodes_precision_six_geometry() -> None:
    # A wiggly road: small deltas in both directions, including sign changes.
    points = [(12.9716 + 0.003 * i, 77.5946 + (-1) ** i * 0.0021 * i) for i in range(400)]
    decoded = decode_polyline(polyline.encode(points, 6), precision=6)
    assert _as_flat(decoded) == pytest.approx(_flatten(points), abs=1e-6)


def test_decoding_is_deterministic() -> None:
    assert decode_polyline(_REFERENCE) == decode_polyline(_REFERENCE)


def test_truncated_value_is_a_decode_error() -> None:
    # Dropping the final character leaves a continuation byte dangling.
    with pytest.raises(PolylineDecodeError, match="Truncated"):
        decode_polyline(_REFERENCE[:-1])


def test_latitude_without_longitude_is_a_decode_error() -> None:
    with pytest.raises(PolylineDecodeError, match="no longitude"):
        decode_polyline("_p~iF")


def test_character_outside_alphabet_is_a_decode_error() -> None:
    with pytest.raises(PolylineDecodeError, match="Invalid polyline character"):
        decode_polyline("_p~iF ps|U")


def test_decode_error_reports_structured_kind() -> None:
    with pytest.raises(PolylineDecodeError) as excinfo:
        decode_polyline("_p~iF")
    assert excinfo.value.to_dict()["kind"] == "decode_error"
