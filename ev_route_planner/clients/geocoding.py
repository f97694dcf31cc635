"""Place-name lookup against a Nominatim-compatible geocoder."""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Optional, Tuple

import requests
from cachetools import TTLCache

from ..config import (
    GEOCODE_CACHE_SIZE,
    GEOCODE_CACHE_TTL_SECONDS,
    GEOCODE_TIMEOUT,
    GEOCODER_URL,
)
from ..errors import GeocodingServiceError
from ..models import Coordinate
from .http import request_json
from .session import get_default_session

LOGGER = logging.getLogger(__name__)

_CacheKey = Tuple[str, str]


class NominatimGeocoder:
    """Resolve free text to the single best-matching coordinate.

    Successful lookups are kept in a TTL cache; misses are not cached so a
    corrected spelling or a new map entry is picked up on the next request.
    """

    def __init__(
        self,
        *,
        base_url: str = GEOCODER_URL,
        session: Optional[requests.Session] = None,
        timeout: float = GEOCODE_TIMEOUT,
        cache_size: int = GEOCODE_CACHE_SIZE,
        cache_ttl: float = GEOCODE_CACHE_TTL_SECONDS,
    ) -> None:
        self.base_url = base_url
        self.session = session or get_default_session()
        self.timeout = timeout
        self._cache: Optional[TTLCache[_CacheKey, Coordinate]] = None
        if cache_size > 0:
            self._cache = TTLCache(maxsize=cache_size, ttl=cache_ttl)
        self._cache_lock = RLock()

    def geocode(self, query: str, country: Optional[str] = None) -> Optional[Coordinate]:
        """Return the best match for ``query`` or ``None`` when nothing matches.

        Raises:
            GeocodingServiceError: If the service times out or errors.
        """

        text = query.strip()
        if not text:
            return None
        key: _CacheKey = (text.lower(), (country or "").lower())
        cached = self._cache_get(key)
        if cached is not None:
            LOGGER.debug("Geocode cache hit for %r", text)
            return cached

        params: dict[str, Any] = {"q": text, "format": "json", "limit": 1}
        if country:
            params["countrycodes"] = country
        payload = request_json(
            self.session,
            "GET",
            self.base_url,
            params=params,
            timeout=self.timeout,
            context="Geocoding",
            error_cls=GeocodingServiceError,
        )
        coordinate = _parse_first_match(payload)
        if coordinate is None:
            LOGGER.info("No geocoding match for %r (country=%s)", text, country or "-")
            return None
        self._cache_set(key, coordinate)
        return coordinate

    def _cache_get(self, key: _CacheKey) -> Optional[Coordinate]:
        if self._cache is None:
            return None
        with self._cache_lock:
            return self._cache.get(key)

    def _cache_set(self, key: _CacheKey, value: Coordinate) -> None:
        if self._cache is None:
            return
        with self._cache_lock:
            self._cache[key] = value


def _parse_first_match(payload: Any) -> Optional[Coordinate]:
    if not isinstance(payload, list) or not payload:
        return None
    first = payload[0]
    if not isinstance(first, dict):
        return None
    try:
        return Coordinate(float(first["lat"]), float(first["lon"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise GeocodingServiceError(
            "Geocoding returned a match without usable coordinates"
        ) from exc


__all__ = ["NominatimGeocoder"]
