"""Render a trip's coverage analysis on an interactive map."""

from __future__ import annotations

from html import escape
from pathlib import Path
from typing import List, Optional, Union

import folium  # Using folium to build an interactive Leaflet map.

from .coverage import CoverageResult, SEVERITY_CRITICAL
from .geometry import build_bounding_box
from .models import GapWarning, LatLon, MatchedPoint
from .utils import format_duration

PathLike = Union[str, Path]

_ROUTE_COLOR = "#4f46e5"
_ADVISORY_COLOR = "#f97316"
_CRITICAL_COLOR = "#ef4444"


def _station_popup(point: MatchedPoint) -> str:
    tags = point.candidate.attributes
    lines = [f"<strong>{escape(point.name)}</strong>"]
    operator = tags.get("operator")
    if operator:
        lines.append(f"Operator: {escape(str(operator))}")
    type2 = tags.get("socket:type2")
    if type2:
        lines.append(f"Type 2: {escape(str(type2))} port(s)")
    fee = tags.get("fee")
    if fee:
        lines.append(f"Fee: {escape(str(fee))}")
    return "<br>".join(lines)


def _gap_points(result: CoverageResult, warning: GapWarning) -> List[LatLon]:
    start = warning.from_point.progress_index
    end = warning.to_point.progress_index
    return [c.as_tuple() for c in result.route[start : end + 1]]


def _gap_tooltip(warning: GapWarning) -> str:
    return (
        f"{warning.distance_km:.0f} km gap between {warning.from_point.name} and "
        f"{warning.to_point.name}; suggested charge "
        f"{format_duration(warning.suggested_duration)}"
    )


def create_trip_map(
    result: CoverageResult,
    *,
    output_html_path: Optional[PathLike] = None,
) -> folium.Map:
    """Create a map showing the route, stations and range gaps.

    Gap stretches are drawn over the route in orange (advisory) or red
    (critical). The synthetic start and end points get their own markers.

    Args:
        result: Output of :func:`~ev_route_planner.coverage.analyze_coverage`.
        output_html_path: Optional path to persist the map as an HTML file.

    Returns:
        A :class:`folium.Map` instance fitted to the route.
    """

    route_points = [c.as_tuple() for c in result.route]
    folium_map = folium.Map(location=route_points[0], zoom_start=6, control_scale=True)
    folium.PolyLine(
        route_points,
        color=_ROUTE_COLOR,
        weight=5,
        opacity=0.8,
        tooltip="Driving route",
    ).add_to(folium_map)

    for warning in result.warnings:
        segment = _gap_points(result, warning)
        if len(segment) < 2:
            continue
        color = (
            _CRITICAL_COLOR if warning.severity == SEVERITY_CRITICAL else _ADVISORY_COLOR
        )
        folium.PolyLine(
            segment,
            color=color,
            weight=7,
            opacity=0.9,
            tooltip=_gap_tooltip(warning),
        ).add_to(folium_map)

    for point in result.points:
        if point.synthetic:
            is_origin = point.progress_index == 0
            folium.Marker(
                location=point.coordinate.as_tuple(),
                tooltip=("Start: " if is_origin else "Destination: ") + point.name,
                icon=folium.Icon(color="green" if is_origin else "red"),
            ).add_to(folium_map)
            continue
        folium.Marker(
            location=point.coordinate.as_tuple(),
            popup=folium.Popup(html=_station_popup(point), max_width=300),
            tooltip=point.name,
            icon=folium.Icon(color="blue", icon="flash"),
        ).add_to(folium_map)

    box = build_bounding_box(result.route, 0.0)
    folium_map.fit_bounds([[box.south, box.west], [box.north, box.east]])

    if output_html_path is not None:
        output_path = Path(output_html_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        folium_map.save(str(output_path))

    return folium_map


__all__ = ["create_trip_map"]
