"""Clients for the external geocoding, routing and station services."""

from .geocoding import NominatimGeocoder
from .poi import (
    BoundingBoxStrategy,
    CheckpointRadiusStrategy,
    OverpassPoiClient,
    PoiQueryStrategy,
    strategy_from_name,
)
from .routing import OsrmRouter

__all__ = [
    "BoundingBoxStrategy",
    "CheckpointRadiusStrategy",
    "NominatimGeocoder",
    "OsrmRouter",
    "OverpassPoiClient",
    "PoiQueryStrategy",
    "strategy_from_name",
]
