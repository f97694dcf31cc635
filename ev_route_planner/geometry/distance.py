"""Great-circle distance between coordinates."""

from __future__ import annotations

import math

from ..models import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(first: Coordinate, second: Coordinate) -> float:
    """Return the haversine distance in kilometres between two coordinates.

    Inputs are not range-checked; out-of-range values give a defined but
    meaningless result.
    """

    sin = math.sin
    cos = math.cos
    radians = math.radians
    lat1_rad = radians(first.lat)
    lat2_rad = radians(second.lat)
    delta_lat = lat2_rad - lat1_rad
    delta_lon = radians(second.lon - first.lon)
    sin_half_lat = sin(delta_lat / 2.0)
    sin_half_lon = sin(delta_lon / 2.0)
    a = sin_half_lat**2 + cos(lat1_rad) * cos(lat2_rad) * sin_half_lon**2
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_KM * c


__all__ = ["EARTH_RADIUS_KM", "haversine_km"]
