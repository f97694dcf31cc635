"""Trip planning service.

Resolves both trip endpoints, fetches the driving route and nearby charging
stations, then hands everything to the pure coverage analysis. The external
collaborators are injected through :class:`TripServiceConfig` so the
orchestration can be exercised without network access.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
import logging
import time
from typing import Callable, List, Optional, Sequence

from ..clients import (
    NominatimGeocoder,
    OsrmRouter,
    OverpassPoiClient,
    strategy_from_name,
)
from ..config import DEFAULT_COUNTRY_CODE, POI_QUERY_STRATEGY
from ..coverage import CoverageResult, analyze_coverage
from ..errors import (
    InvalidRequestError,
    LocationNotFoundError,
    UpstreamServiceError,
)
from ..geometry import decode_polyline
from ..models import AnalysisConfig, CandidatePoint, Coordinate

Geocoder = Callable[[str, Optional[str]], Optional[Coordinate]]
RouteFetcher = Callable[[Coordinate, Coordinate], Optional[str]]
PoiFetcher = Callable[[Sequence[Coordinate], AnalysisConfig], List[CandidatePoint]]


def _default_geocoder() -> Geocoder:
    return NominatimGeocoder().geocode


def _default_route_fetcher() -> RouteFetcher:
    return OsrmRouter().route_geometry


def _default_poi_fetcher() -> PoiFetcher:
    client = OverpassPoiClient()

    def fetch(
        route: Sequence[Coordinate], analysis: AnalysisConfig
    ) -> List[CandidatePoint]:
        strategy = strategy_from_name(
            POI_QUERY_STRATEGY, padding_deg=analysis.bounding_box_padding_deg
        )
        return client.fetch(route, strategy)

    return fetch


@dataclass(slots=True)
class TripServiceConfig:
    geocoder: Geocoder = field(default_factory=_default_geocoder)
    route_fetcher: RouteFetcher = field(default_factory=_default_route_fetcher)
    poi_fetcher: PoiFetcher = field(default_factory=_default_poi_fetcher)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    country: Optional[str] = DEFAULT_COUNTRY_CODE or None
    logger: logging.Logger | None = None


class TripService:
    def __init__(self, config: TripServiceConfig | None = None):
        self.config = config or TripServiceConfig()
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)

    def plan(
        self,
        start: Optional[str],
        end: Optional[str],
        *,
        country: Optional[str] = None,
        analysis: Optional[AnalysisConfig] = None,
    ) -> CoverageResult:
        """Plan a trip between two place names and analyse charging coverage.

        Raises:
            InvalidRequestError: If ``start`` or ``end`` is blank. No external
                call is made in that case.
            LocationNotFoundError: If either endpoint has no geocoding match.
            UpstreamServiceError: If geocoding or routing fails. Station lookup
                failures are logged and treated as "no stations".
            PolylineDecodeError: If the router returns malformed geometry.
        """

        start_text = (start or "").strip()
        end_text = (end or "").strip()
        if not start_text or not end_text:
            raise InvalidRequestError("Both start and end locations are required")
        analysis = analysis or self.config.analysis
        country = country or self.config.country
        began = time.perf_counter()

        origin, destination = self._resolve_endpoints(start_text, end_text, country)
        route = self._fetch_route(origin, destination)
        candidates = self._fetch_candidates(route, analysis)
        result = analyze_coverage(
            route,
            candidates,
            analysis,
            origin_label=start_text,
            destination_label=end_text,
        )
        self._log.info(
            "Planned %s -> %s: %d route points, %d stations, %d warnings in %.2fs",
            start_text,
            end_text,
            len(route),
            len(result.stations),
            len(result.warnings),
            time.perf_counter() - began,
        )
        return result

    def _resolve_endpoints(
        self, start: str, end: str, country: Optional[str]
    ) -> tuple[Coordinate, Coordinate]:
        """Geocode both endpoints concurrently; either failure fails the trip."""

        with ThreadPoolExecutor(max_workers=2) as executor:
            futures = [
                executor.submit(self.config.geocoder, query, country)
                for query in (start, end)
            ]
        coordinates: List[Coordinate] = []
        for query, future in zip((start, end), futures):
            coordinate = future.result()
            if coordinate is None:
                raise LocationNotFoundError(query)
            coordinates.append(coordinate)
        self._log.debug("Resolved %s=%s, %s=%s", start, coordinates[0], end, coordinates[1])
        return coordinates[0], coordinates[1]

    def _fetch_route(self, origin: Coordinate, destination: Coordinate) -> List[Coordinate]:
        geometry = self.config.route_fetcher(origin, destination)
        route = decode_polyline(geometry) if geometry else []
        if len(route) < 2:
            self._log.warning(
                "Route geometry degenerated to %d points; using straight origin/destination route",
                len(route),
            )
            return [origin, destination]
        return route

    def _fetch_candidates(
        self, route: Sequence[Coordinate], analysis: AnalysisConfig
    ) -> List[CandidatePoint]:
        try:
            return list(self.config.poi_fetcher(route, analysis))
        except UpstreamServiceError as exc:
            self._log.warning(
                "Charging station lookup failed; continuing without stations: %s", exc
            )
            return []


__all__ = ["TripService", "TripServiceConfig"]
