"""Charging station lookup against the Overpass API.

Two query strategies are available. ``BoundingBoxStrategy`` sends a single
query covering the padded route extent and is the default.
``CheckpointRadiusStrategy`` sends one radius query per evenly spaced route
checkpoint; it suits servers that handle small circular queries better than
large boxes, at the cost of overlapping results (removed by identity) and
possible misses between checkpoints.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import (
    Any,
    ClassVar,
    Dict,
    Iterable,
    List,
    Optional,
    Protocol,
    Sequence,
)

import numpy as np
import requests

from ..config import (
    BOUNDING_BOX_PADDING_DEG,
    OVERPASS_URL,
    POI_CHECKPOINT_COUNT,
    POI_CHECKPOINT_RADIUS_KM,
    POI_TIMEOUT,
)
from ..errors import PoiServiceError
from ..geometry.bbox import build_bounding_box
from ..models import CandidatePoint, Coordinate
from .http import request_json
from .session import get_default_session

LOGGER = logging.getLogger(__name__)

_STATION_FILTER = '["amenity"="charging_station"]'


class PoiQueryStrategy(Protocol):
    """Turns a route into the Overpass area filters to query."""

    name: ClassVar[str]

    def area_filters(self, route: Sequence[Coordinate]) -> List[str]:
        ...


@dataclass(frozen=True, slots=True)
class BoundingBoxStrategy:
    """One query over the route's bounding box grown by ``padding_deg``."""

    name: ClassVar[str] = "bbox"
    padding_deg: float = BOUNDING_BOX_PADDING_DEG

    def area_filters(self, route: Sequence[Coordinate]) -> List[str]:
        box = build_bounding_box(route, self.padding_deg)
        south, west, north, east = box.as_tuple()
        return [f"({south:.6f},{west:.6f},{north:.6f},{east:.6f})"]


@dataclass(frozen=True, slots=True)
class CheckpointRadiusStrategy:
    """Radius queries around ``checkpoints`` evenly spaced route coordinates."""

    name: ClassVar[str] = "checkpoints"
    checkpoints: int = POI_CHECKPOINT_COUNT
    radius_km: float = POI_CHECKPOINT_RADIUS_KM

    def checkpoint_coordinates(self, route: Sequence[Coordinate]) -> List[Coordinate]:
        if not route:
            raise ValueError("Cannot place checkpoints on an empty route")
        count = max(1, min(self.checkpoints, len(route)))
        positions = np.linspace(0, len(route) - 1, num=count)
        indices = sorted({int(round(float(pos))) for pos in positions})
        return [route[index] for index in indices]

    def area_filters(self, route: Sequence[Coordinate]) -> List[str]:
        radius_m = int(round(self.radius_km * 1000))
        return [
            f"(around:{radius_m},{point.lat:.6f},{point.lon:.6f})"
            for point in self.checkpoint_coordinates(route)
        ]


def build_overpass_query(area_filter: str, timeout_s: int) -> str:
    """Return Overpass QL selecting charging stations inside ``area_filter``."""

    return (
        f"[out:json][timeout:{timeout_s}];"
        f"(node{_STATION_FILTER}{area_filter};"
        f"way{_STATION_FILTER}{area_filter};);"
        "out center tags;"
    )


def strategy_from_name(
    name: str, *, padding_deg: float = BOUNDING_BOX_PADDING_DEG
) -> PoiQueryStrategy:
    """Build a query strategy from its configured name (``bbox``/``checkpoints``)."""

    normalized = name.strip().lower()
    if normalized == BoundingBoxStrategy.name:
        return BoundingBoxStrategy(padding_deg=padding_deg)
    if normalized == CheckpointRadiusStrategy.name:
        return CheckpointRadiusStrategy()
    raise ValueError(f"Unknown POI query strategy: {name!r}")


def dedupe_candidates(candidates: Iterable[CandidatePoint]) -> List[CandidatePoint]:
    """Drop repeated identities, keeping the first occurrence."""

    seen: set[str] = set()
    unique: List[CandidatePoint] = []
    for candidate in candidates:
        if candidate.id in seen:
            continue
        seen.add(candidate.id)
        unique.append(candidate)
    return unique


class OverpassPoiClient:
    """Fetch charging stations near a route."""

    def __init__(
        self,
        *,
        base_url: str = OVERPASS_URL,
        session: Optional[requests.Session] = None,
        timeout: float = POI_TIMEOUT,
    ) -> None:
        self.base_url = base_url
        self.session = session or get_default_session()
        self.timeout = timeout

    def fetch(
        self, route: Sequence[Coordinate], strategy: PoiQueryStrategy
    ) -> List[CandidatePoint]:
        """Return de-duplicated charging stations found by ``strategy``.

        Raises:
            PoiServiceError: If any query times out or fails.
        """

        filters = strategy.area_filters(route)
        collected: List[CandidatePoint] = []
        for area_filter in filters:
            query = build_overpass_query(area_filter, int(self.timeout))
            payload = request_json(
                self.session,
                "POST",
                self.base_url,
                data={"data": query},
                timeout=self.timeout,
                context="Overpass",
                error_cls=PoiServiceError,
            )
            collected.extend(parse_elements(payload))
        unique = dedupe_candidates(collected)
        LOGGER.info(
            "Fetched %d charging stations with %s strategy (%d queries, %d duplicates)",
            len(unique),
            strategy.name,
            len(filters),
            len(collected) - len(unique),
        )
        return unique


def parse_elements(payload: Any) -> List[CandidatePoint]:
    """Convert an Overpass JSON payload into candidate points.

    Elements without a usable position are skipped.
    """

    if not isinstance(payload, dict):
        raise PoiServiceError("Overpass returned an unexpected payload")
    elements = payload.get("elements") or []
    if not isinstance(elements, list):
        raise PoiServiceError("Overpass returned elements that are not a list")
    candidates: List[CandidatePoint] = []
    for element in elements:
        if not isinstance(element, dict):
            continue
        coordinate = _element_coordinate(element)
        if coordinate is None:
            LOGGER.debug("Skipping Overpass element without position: %s", element)
            continue
        raw_tags = element.get("tags") or {}
        if not isinstance(raw_tags, dict):
            LOGGER.debug("Skipping Overpass element with malformed tags: %s", element)
            continue
        element_type = element.get("type", "node")
        tags: Dict[str, Any] = dict(raw_tags)
        candidates.append(
            CandidatePoint(
                id=f"{element_type}/{element.get('id')}",
                coordinate=coordinate,
                attributes=tags,
            )
        )
    return candidates


def _element_coordinate(element: Dict[str, Any]) -> Optional[Coordinate]:
    source = element if "lat" in element else element.get("center")
    if not isinstance(source, dict):
        return None
    try:
        return Coordinate(float(source["lat"]), float(source["lon"]))
    except (KeyError, TypeError, ValueError):
        return None


__all__ = [
    "BoundingBoxStrategy",
    "CheckpointRadiusStrategy",
    "OverpassPoiClient",
    "PoiQueryStrategy",
    "build_overpass_query",
    "dedupe_candidates",
    "parse_elements",
    "strategy_from_name",
]
