"""Driving route geometry from an OSRM-compatible router."""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..config import ROUTE_TIMEOUT, ROUTER_URL
from ..errors import RouteServiceError
from ..models import Coordinate
from .http import request_json
from .session import get_default_session

LOGGER = logging.getLogger(__name__)

# OSRM codes meaning "no route between these points" rather than a failure.
_NO_ROUTE_CODES = {"NoRoute", "NoSegment"}


class OsrmRouter:
    """Fetch the encoded overview geometry of the fastest driving route."""

    def __init__(
        self,
        *,
        base_url: str = ROUTER_URL,
        session: Optional[requests.Session] = None,
        timeout: float = ROUTE_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or get_default_session()
        self.timeout = timeout

    def build_url(self, origin: Coordinate, destination: Coordinate) -> str:
        # OSRM takes lon,lat pairs.
        return (
            f"{self.base_url}/{origin.lon},{origin.lat};"
            f"{destination.lon},{destination.lat}"
        )

    def route_geometry(
        self, origin: Coordinate, destination: Coordinate
    ) -> Optional[str]:
        """Return the encoded polyline (precision 5) or ``None`` if no route exists.

        Raises:
            RouteServiceError: If the router times out, errors, or reports a
                failure other than "no route".
        """

        payload = request_json(
            self.session,
            "GET",
            self.build_url(origin, destination),
            params={"overview": "full", "geometries": "polyline"},
            timeout=self.timeout,
            context="Routing",
            error_cls=RouteServiceError,
            allow_status=(400,),
        )
        return _extract_geometry(payload)


def _extract_geometry(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        raise RouteServiceError("Routing returned an unexpected payload")
    code = payload.get("code", "Ok")
    if code in _NO_ROUTE_CODES:
        LOGGER.info("Router reported %s; no geometry available", code)
        return None
    if code != "Ok":
        message = payload.get("message") or code
        raise RouteServiceError(f"Routing failed: {message}")
    routes = payload.get("routes") or []
    if not routes:
        return None
    geometry = routes[0].get("geometry") if isinstance(routes[0], dict) else None
    if not geometry:
        return None
    if not isinstance(geometry, str):
        raise RouteServiceError("Routing geometry is not an encoded polyline")
    return geometry


__all__ = ["OsrmRouter"]
