"""Central error types used across the application.

Every fatal condition surfaces as a :class:`RoutePlannerError` carrying a
machine-readable ``kind`` plus a human-readable message.
"""

from __future__ import annotations

from typing import Dict


class RoutePlannerError(RuntimeError):
    """Base error for route planning failures."""

    kind = "internal_error"

    def to_dict(self) -> Dict[str, str]:
        return {"error": str(self), "kind": self.kind}


class InvalidRequestError(RoutePlannerError):
    """Raised when the caller omits or malforms a required parameter."""

    kind = "input_error"


class LocationNotFoundError(RoutePlannerError):
    """Raised when geocoding yields no match for a trip endpoint."""

    kind = "location_not_found"

    def __init__(self, query: str) -> None:
        super().__init__(f"Location not found: {query}")
        self.query = query


class UpstreamServiceError(RoutePlannerError):
    """Base error for external services that time out or fail."""

    kind = "upstream_unavailable"

    def __init__(self, message: str, *, timed_out: bool = False) -> None:
        super().__init__(message)
        self.timed_out = timed_out


class GeocodingServiceError(UpstreamServiceError):
    """Raised when the geocoding service cannot be reached or errors."""


class RouteServiceError(UpstreamServiceError):
    """Raised when the route-geometry service cannot be reached or errors."""


class PoiServiceError(UpstreamServiceError):
    """Raised when the points-of-interest service cannot be reached or errors."""


class PolylineDecodeError(RoutePlannerError, ValueError):
    """Raised when an encoded route geometry is malformed."""

    kind = "decode_error"


class RouteTooShortError(RoutePlannerError, ValueError):
    """Raised when a route has fewer than two coordinates."""

    kind = "invalid_route"


__all__ = [
    "RoutePlannerError",
    "InvalidRequestError",
    "LocationNotFoundError",
    "UpstreamServiceError",
    "GeocodingServiceError",
    "RouteServiceError",
    "PoiServiceError",
    "PolylineDecodeError",
    "RouteTooShortError",
]
