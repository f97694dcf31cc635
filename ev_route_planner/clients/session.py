"""HTTP session shared by the geocoding, routing and Overpass clients.

The three clients default to one session so that a trip reuses pooled
connections and every public map service sees the same User-Agent, which
Nominatim and Overpass require. Tests inject their own session instead.
"""

from __future__ import annotations

import requests
from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import (
    HTTP_BACKOFF_FACTOR,
    HTTP_MAX_RETRIES,
    HTTP_POOL_CONNECTIONS,
    HTTP_POOL_MAXSIZE,
    HTTP_RETRY_POST,
    USER_AGENT,
)

__all__ = ["create_default_session", "get_default_session"]


def _build_retry() -> Retry:
    methods = ["GET", "POST"] if HTTP_RETRY_POST else ["GET"]
    return Retry(
        total=HTTP_MAX_RETRIES,
        backoff_factor=HTTP_BACKOFF_FACTOR,
        status_forcelist=[500, 502, 503, 504],
        allowed_methods=methods,
        raise_on_status=False,
    )


def create_default_session() -> Session:
    session = requests.Session()
    adapter = HTTPAdapter(
        pool_connections=HTTP_POOL_CONNECTIONS,
        pool_maxsize=HTTP_POOL_MAXSIZE,
        max_retries=_build_retry(),
    )
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(
        {
            "Accept-Encoding": "gzip, deflate",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
    )
    return session


_DEFAULT_SESSION = create_default_session()


def get_default_session() -> Session:
    """Return the process-wide session used when a client is built without one."""

    return _DEFAULT_SESSION
