"""Geometry primitives: distances, polyline decoding and bounding boxes."""

from .bbox import build_bounding_box
from .distance import EARTH_RADIUS_KM, haversine_km
from .polyline import decode_polyline

__all__ = [
    "EARTH_RADIUS_KM",
    "build_bounding_box",
    "decode_polyline",
    "haversine_km",
]
