"""Tests for the Flask HTTP surface."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from ev_route_planner.api import create_app
from ev_route_planner.coverage import analyze_coverage
from ev_route_planner.errors import (
    GeocodingServiceError,
    LocationNotFoundError,
    PoiServiceError,
    RouteServiceError,
)
from ev_route_planner.models import AnalysisConfig
from ev_route_planner.services import TripService, TripServiceConfig

from conftest import meridian_route


class StubService(TripService):
    """TripService whose ``plan`` returns a canned result or raises."""

    def __init__(self, error: Optional[Exception] = None):
        super().__init__(
            TripServiceConfig(
                geocoder=lambda query, country: None,
                route_fetcher=lambda origin, destination: None,
                poi_fetcher=lambda route, analysis: [],
            )
        )
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def plan(self, start, end, *, country=None, analysis=None):
        self.calls.append(
            {"start": start, "end": end, "country": country, "analysis": analysis}
        )
        if self.error is not None:
            raise self.error
        return analyze_coverage(
            meridian_route(0.0, 300.0),
            [],
            analysis or self.config.analysis,
            origin_label=start,
            destination_label=end,
        )


@pytest.fixture
def stub() -> StubService:
    return StubService()


@pytest.fixture
def client(stub: StubService):
    app = create_app(stub)
    app.config.update(TESTING=True)
    return app.test_client()


def test_health_endpoint(client) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert b"running" in response.data


def test_route_success_returns_documented_keys(client, stub: StubService) -> None:
    response = client.get("/api/route?start=Bangalore&end=Mumbai&country=in")

    assert response.status_code == 200
    body = response.get_json()
    assert set(body) == {
        "start",
        "end",
        "totalStations",
        "stations",
        "routeCoords",
        "warnings",
    }
    assert body["totalStations"] == 0
    assert body["warnings"][0]["from"] == "Bangalore"
    assert body["warnings"][0]["to"] == "Mumbai"
    assert stub.calls[0]["country"] == "in"
    assert response.headers["Access-Control-Allow-Origin"] == "*"


@pytest.mark.parametrize(
    "query", ["/api/route", "/api/route?start=Bangalore", "/api/route?start=%20&end=Mumbai"]
)
def test_missing_endpoints_are_rejected_without_planning(client, stub, query) -> None:
    response = client.get(query)

    assert response.status_code == 400
    assert response.get_json()["kind"] == "input_error"
    assert stub.calls == []


def test_analysis_overrides_are_applied(client, stub: StubService) -> None:
    response = client.get(
        "/api/route?start=A&end=B&safeRangeKm=500&bufferKm=50&chargingRateAssumption=3"
    )

    assert response.status_code == 200
    analysis = stub.calls[0]["analysis"]
    assert isinstance(analysis, AnalysisConfig)
    assert analysis.safe_range_km == 500.0
    assert analysis.charging_rate_km_per_min == 3.0
    assert response.get_json()["warnings"] == []


def test_invalid_analysis_override_is_an_input_error(client, stub: StubService) -> None:
    response = client.get("/api/route?start=A&end=B&safeRangeKm=far")

    assert response.status_code == 400
    assert response.get_json()["kind"] == "input_error"
    assert stub.calls == []


@pytest.mark.parametrize(
    "error,status,kind",
    [
        (LocationNotFoundError("Atlantis"), 404, "location_not_found"),
        (RouteServiceError("router down"), 502, "upstream_unavailable"),
        (GeocodingServiceError("slow", timed_out=True), 504, "upstream_unavailable"),
        (PoiServiceError("slow", timed_out=True), 504, "upstream_unavailable"),
    ],
)
def test_errors_map_to_status_codes(error, status, kind) -> None:
    app = create_app(StubService(error=error))
    response = app.test_client().get("/api/route?start=A&end=Atlantis")

    assert response.status_code == status
    body = response.get_json()
    assert body["kind"] == kind
    assert body["error"] == str(error)


@pytest.mark.parametrize(
    "override", ["chargingRateAssumption=nan", "bufferKm=nan", "criticalGapKm=inf"]
)
def test_non_finite_analysis_override_is_an_input_error(client, stub, override) -> None:
    response = client.get(f"/api/route?start=A&end=B&{override}")

    assert response.status_code == 400
    body = response.get_json()
    assert body["kind"] == "input_error"
    assert "finite" in body["error"]
    assert stub.calls == []
