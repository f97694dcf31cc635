"""Dataclasses describing trips, charging candidates and coverage results."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import timedelta
import math
from typing import Any, Dict, List, Mapping, Tuple

from . import config
from .utils import format_duration

LatLon = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A WGS84 latitude/longitude pair in degrees."""

    lat: float
    lon: float

    def as_tuple(self) -> LatLon:
        return (self.lat, self.lon)

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lon": self.lon}


Route = List[Coordinate]


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned region in degrees, ordered as Overpass expects it."""

    south: float
    west: float
    north: float
    east: float

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.south, self.west, self.north, self.east)


@dataclass(slots=True)
class CandidatePoint:
    """External point of interest. ``attributes`` is passed through untouched."""

    id: str
    coordinate: Coordinate
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return str(self.attributes.get("name") or "EV Charging Station")


@dataclass(slots=True)
class MatchedPoint:
    """Candidate annotated with its progress along the route."""

    candidate: CandidatePoint
    progress_index: int
    offset_km: float = 0.0
    synthetic: bool = False

    @property
    def id(self) -> str:
        return self.candidate.id

    @property
    def coordinate(self) -> Coordinate:
        return self.candidate.coordinate

    @property
    def name(self) -> str:
        return self.candidate.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.candidate.id,
            "lat": self.coordinate.lat,
            "lon": self.coordinate.lon,
            "tags": dict(self.candidate.attributes),
            "progressIndex": self.progress_index,
            "synthetic": self.synthetic,
        }


@dataclass(slots=True)
class GapWarning:
    """Stretch between consecutive on-route points that exceeds the safe range."""

    from_point: MatchedPoint
    to_point: MatchedPoint
    distance_km: float
    severity: str
    suggested_duration: timedelta

    def to_dict(self) -> Dict[str, Any]:
        minutes = self.suggested_duration.total_seconds() / 60.0
        return {
            "from": self.from_point.name,
            "to": self.to_point.name,
            "fromIndex": self.from_point.progress_index,
            "toIndex": self.to_point.progress_index,
            "distanceKm": round(self.distance_km, 1),
            "severity": self.severity,
            "suggestedChargeMinutes": round(minutes, 1),
            "suggestedChargeTime": format_duration(self.suggested_duration),
        }


# Maps the documented option names onto AnalysisConfig fields.
_OPTION_ALIASES = {
    "safeRangeKm": "safe_range_km",
    "bufferKm": "buffer_km",
    "matchToleranceKm": "match_tolerance_km",
    "criticalGapKm": "critical_gap_km",
    "boundingBoxPaddingDeg": "bounding_box_padding_deg",
    "chargingRateAssumption": "charging_rate_km_per_min",
    "maxRouteSamples": "max_route_samples",
}


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Range model and matching thresholds for one coverage analysis.

    Attributes:
        safe_range_km: Assumed safe operating range ``R`` of the vehicle.
        buffer_km: Reserve ``B`` subtracted from the range. Gaps longer than
            ``R - B`` produce a warning.
        match_tolerance_km: Maximum distance between a station and its nearest
            route sample for the station to count as on the route. Raising it
            admits stations that need longer detours.
        critical_gap_km: Warnings for gaps longer than this are ``critical``
            rather than ``advisory``. Independent of ``R - B``.
        bounding_box_padding_deg: Margin added around the route before the
            station query. Too small misses stations near the trip ends, too
            large inflates the query.
        charging_rate_km_per_min: Range regained per minute of charging, used
            by the default suggested-charge policy.
        max_route_samples: Upper bound on route samples compared against each
            candidate. Long routes are subsampled to stay within it.
    """

    safe_range_km: float = config.SAFE_RANGE_KM
    buffer_km: float = config.BUFFER_KM
    match_tolerance_km: float = config.MATCH_TOLERANCE_KM
    critical_gap_km: float = config.CRITICAL_GAP_KM
    bounding_box_padding_deg: float = config.BOUNDING_BOX_PADDING_DEG
    charging_rate_km_per_min: float = config.CHARGING_RATE_KM_PER_MIN
    max_route_samples: int = config.MAX_ROUTE_SAMPLES

    def __post_init__(self) -> None:
        for item in fields(self):
            if not math.isfinite(getattr(self, item.name)):
                raise ValueError(f"{item.name} must be a finite number")
        if self.effective_threshold_km <= 0:
            raise ValueError("safe_range_km must be greater than buffer_km")
        if self.match_tolerance_km < 0:
            raise ValueError("match_tolerance_km must not be negative")
        if self.bounding_box_padding_deg < 0:
            raise ValueError("bounding_box_padding_deg must not be negative")
        if self.charging_rate_km_per_min <= 0:
            raise ValueError("charging_rate_km_per_min must be greater than zero")
        if self.max_route_samples < 1:
            raise ValueError("max_route_samples must be at least 1")

    @property
    def effective_threshold_km(self) -> float:
        return self.safe_range_km - self.buffer_km

    def with_options(self, options: Mapping[str, Any]) -> "AnalysisConfig":
        """Return a copy overridden by ``options``.

        Keys may use either the field names or the camelCase option names
        (``safeRangeKm``, ``chargingRateAssumption`` ...). Unknown keys raise
        ``ValueError``.
        """

        known = {f.name: f for f in fields(self)}
        overrides: Dict[str, Any] = {}
        for key, raw in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown analysis option: {key}")
            caster = int if name == "max_route_samples" else float
            try:
                overrides[name] = caster(raw)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Invalid value for {key}: {raw!r}") from exc
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        reverse = {v: k for k, v in _OPTION_ALIASES.items()}
        return {reverse[f.name]: getattr(self, f.name) for f in fields(self)}


__all__ = [
    "AnalysisConfig",
    "BoundingBox",
    "CandidatePoint",
    "Coordinate",
    "GapWarning",
    "LatLon",
    "MatchedPoint",
    "Route",
]
