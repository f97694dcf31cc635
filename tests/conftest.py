"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable route / station builders so
that the coverage, service and API tests share the same geometry.
"""
from __future__ import annotations

import json
import math
import os
import sys
from typing import Any, Dict, List, Optional, Sequence

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from ev_route_planner.geometry.distance import EARTH_RADIUS_KM
from ev_route_planner.models import AnalysisConfig, CandidatePoint, Coordinate

# Kilometres per degree of latitude along a meridian.
KM_PER_DEG = EARTH_RADIUS_KM * math.pi / 180.0


# --- Factory helpers -------------------------------------------------
def meridian_route(*marks_km: float) -> List[Coordinate]:
    """Route heading due north along longitude 0, one point per km mark."""
    return [Coordinate(mark / KM_PER_DEG, 0.0) for mark in marks_km]


def station(
    station_id: str,
    lat: float,
    lon: float,
    **tags: Any,
) -> CandidatePoint:
    attributes: Dict[str, Any] = {"name": f"Station {station_id}"}
    attributes.update(tags)
    return CandidatePoint(id=station_id, coordinate=Coordinate(lat, lon), attributes=attributes)


class FakeResp:
    """Minimal fake response matching needed parts of requests.Response."""

    def __init__(self, status_code: int = 200, data: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._data = data
        self._text = text

    def json(self) -> Any:
        if self._data is None:
            raise ValueError("No JSON body")
        return self._data

    @property
    def text(self) -> str:
        if self._text is not None:
            return self._text
        return json.dumps(self._data) if self._data is not None else ""


class FakeSession:
    """Records requests and replays queued responses (or raises queued errors)."""

    def __init__(self, responses: Sequence[Any] = ()):
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def request(self, method, url, params=None, data=None, timeout=None):
        self.calls.append(
            {"method": method, "url": url, "params": params, "data": data, "timeout": timeout}
        )
        if not self.responses:
            raise AssertionError(f"Unexpected request to {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def range_config() -> AnalysisConfig:
    """R=180, B=40 (threshold 140 km), critical above 200 km, 2 km/min charging."""
    return AnalysisConfig(
        safe_range_km=180.0,
        buffer_km=40.0,
        match_tolerance_km=15.0,
        critical_gap_km=200.0,
        bounding_box_padding_deg=0.1,
        charging_rate_km_per_min=2.0,
        max_route_samples=500,
    )


@pytest.fixture
def straight_300km_route() -> List[Coordinate]:
    return meridian_route(0.0, 150.0, 300.0)
