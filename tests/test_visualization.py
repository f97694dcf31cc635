"""Tests for the folium trip map."""

from __future__ import annotations

import folium

from ev_route_planner.coverage import analyze_coverage
from ev_route_planner.visualization import create_trip_map

from conftest import meridian_route, station


def _polylines(folium_map: folium.Map):
    return [
        child
        for child in folium_map._children.values()
        if isinstance(child, folium.PolyLine)
    ]


def _markers(folium_map: folium.Map):
    return [
        child
        for child in folium_map._children.values()
        if isinstance(child, folium.Marker)
    ]


def test_map_draws_route_gaps_and_markers(range_config) -> None:
    route = meridian_route(0.0, 100.0, 350.0)
    result = analyze_coverage(
        route, [station("node/5", route[1].lat, 0.0, operator="Tata Power")], range_config
    )

    folium_map = create_trip_map(result)

    lines = _polylines(folium_map)
    # Route line plus one critical 250 km gap.
    assert len(lines) == 2
    html = folium_map.get_root().render()
    assert "#ef4444" in html
    assert "#f97316" not in html
    assert len(_markers(folium_map)) == 3


def test_map_is_written_to_html(tmp_path, range_config) -> None:
    result = analyze_coverage(meridian_route(0.0, 50.0), [], range_config)
    output = tmp_path / "maps" / "trip.html"

    create_trip_map(result, output_html_path=output)

    assert output.exists()
    assert "leaflet" in output.read_text(encoding="utf-8").lower()
