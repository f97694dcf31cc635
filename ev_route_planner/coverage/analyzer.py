"""Charging coverage analysis for a single route."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..errors import RouteTooShortError
from ..models import (
    AnalysisConfig,
    CandidatePoint,
    Coordinate,
    GapWarning,
    MatchedPoint,
)
from .accumulator import RouteProfile
from .matcher import match_candidates
from .policy import MitigationPolicy, classify_severity, proportional_charge_time

LOGGER = logging.getLogger(__name__)

ORIGIN_ID = "start"
DESTINATION_ID = "end"


@dataclass(slots=True)
class CoverageResult:
    """Ordered on-route points plus the gap warnings derived from them."""

    route: List[Coordinate]
    points: List[MatchedPoint]
    warnings: List[GapWarning]
    threshold_km: float
    total_km: float
    config: AnalysisConfig = field(default_factory=AnalysisConfig)

    @property
    def origin(self) -> Coordinate:
        return self.route[0]

    @property
    def destination(self) -> Coordinate:
        return self.route[-1]

    @property
    def stations(self) -> List[MatchedPoint]:
        """Real charging stations, excluding the synthetic trip endpoints."""

        return [point for point in self.points if not point.synthetic]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.origin.to_dict(),
            "end": self.destination.to_dict(),
            "totalStations": len(self.stations),
            "stations": [point.to_dict() for point in self.points],
            "routeCoords": [[c.lat, c.lon] for c in self.route],
            "warnings": [warning.to_dict() for warning in self.warnings],
        }


def _endpoint(
    point_id: str, label: str, coordinate: Coordinate, index: int
) -> MatchedPoint:
    candidate = CandidatePoint(
        id=point_id, coordinate=coordinate, attributes={"name": label}
    )
    return MatchedPoint(candidate=candidate, progress_index=index, synthetic=True)


def analyze_coverage(
    route: Sequence[Coordinate],
    candidates: Iterable[CandidatePoint],
    config: Optional[AnalysisConfig] = None,
    *,
    origin_label: str = "Start",
    destination_label: str = "Destination",
    mitigation_policy: Optional[MitigationPolicy] = None,
) -> CoverageResult:
    """Order on-route stations and flag stretches longer than the safe range.

    Args:
        route: Decoded route, origin first. Must hold at least two coordinates.
        candidates: Stations near the route, in any order.
        config: Range model and matching thresholds. Defaults come from
            :mod:`ev_route_planner.config`.
        origin_label: Name shown for the synthetic start point.
        destination_label: Name shown for the synthetic end point.
        mitigation_policy: Computes the suggested charge for a gap. Defaults to
            :func:`proportional_charge_time`.

    Returns:
        A :class:`CoverageResult` whose points are sorted by progress index and
        bracketed by the synthetic origin and destination.

    Raises:
        RouteTooShortError: If ``route`` has fewer than two coordinates.
    """

    if len(route) < 2:
        raise RouteTooShortError(
            f"Route needs at least 2 coordinates for coverage analysis, got {len(route)}"
        )
    config = config or AnalysisConfig()
    policy = mitigation_policy or proportional_charge_time
    route = list(route)
    last_index = len(route) - 1

    matched = match_candidates(
        route,
        candidates,
        config.match_tolerance_km,
        max_samples=config.max_route_samples,
    )
    points = [_endpoint(ORIGIN_ID, origin_label, route[0], 0)]
    points.extend(matched)
    points.append(_endpoint(DESTINATION_ID, destination_label, route[-1], last_index))
    # sorted() is stable, so equal progress keeps discovery order.
    points = sorted(points, key=lambda point: point.progress_index)

    profile = RouteProfile(route)
    threshold = config.effective_threshold_km
    warnings: List[GapWarning] = []
    for current, following in zip(points, points[1:]):
        distance = profile.distance_km(current.progress_index, following.progress_index)
        if distance <= threshold:
            continue
        warnings.append(
            GapWarning(
                from_point=current,
                to_point=following,
                distance_km=distance,
                severity=classify_severity(distance, config),
                suggested_duration=policy(distance, config),
            )
        )

    LOGGER.info(
        "Coverage analysis: %d stations on a %.1f km route, %d gap warnings "
        "(threshold %.1f km)",
        len(matched),
        profile.total_km,
        len(warnings),
        threshold,
    )
    return CoverageResult(
        route=route,
        points=points,
        warnings=warnings,
        threshold_km=threshold,
        total_km=profile.total_km,
        config=config,
    )


__all__ = ["CoverageResult", "DESTINATION_ID", "ORIGIN_ID", "analyze_coverage"]
