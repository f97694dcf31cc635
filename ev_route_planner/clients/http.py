"""Shared JSON request helper for the external map services.

Provides a single ``request_json`` used by every client so that timeouts,
logging and error mapping are consistent.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Type

import requests

from ..errors import UpstreamServiceError

LOGGER = logging.getLogger(__name__)


def request_json(
    session: requests.Session,
    method: str,
    url: str,
    *,
    timeout: float,
    context: str,
    error_cls: Type[UpstreamServiceError] = UpstreamServiceError,
    params: Optional[Dict[str, Any]] = None,
    data: Optional[Dict[str, Any]] = None,
    allow_status: Iterable[int] = (),
) -> Any:
    """Perform a request and return the decoded JSON body.

    Args:
        session: Session used for the call.
        method: HTTP verb.
        url: Full endpoint URL.
        timeout: Seconds before the call is abandoned.
        context: Short label used in log lines and error messages.
        error_cls: Error raised for any failure.
        params: Optional query parameters.
        data: Optional form body.
        allow_status: Error statuses whose JSON body is returned instead of
            raising (for services that explain failures in the body).

    Raises:
        UpstreamServiceError: (or ``error_cls``) on timeouts, connection
            failures, non-2xx statuses and undecodable bodies.
    """

    LOGGER.debug("%s %s %s params=%s", context, method, url, params)
    try:
        response = session.request(
            method, url, params=params, data=data, timeout=timeout
        )
    except requests.exceptions.Timeout as exc:
        raise error_cls(
            f"{context} timed out after {timeout:.0f}s", timed_out=True
        ) from exc
    except requests.exceptions.RequestException as exc:
        raise error_cls(f"{context} request failed: {exc}") from exc

    status = response.status_code
    if status >= 400 and status not in set(allow_status):
        detail = extract_error(response)
        message = f"{context} request failed (status {status})"
        if detail:
            message = f"{message} | {detail}"
        LOGGER.warning(message)
        raise error_cls(message)

    try:
        return response.json()
    except ValueError as exc:
        raise error_cls(f"{context} returned a non-JSON body") from exc


def extract_error(resp: Optional[requests.Response]) -> Optional[str]:
    """Best-effort error text (JSON ``message``/``error`` or trimmed body)."""

    if resp is None:
        return None
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in ("message", "error", "remark"):
            value = data.get(key)
            if value:
                return str(value)
    text = getattr(resp, "text", "")
    if not isinstance(text, str):
        return None
    trimmed = text.strip()
    if not trimmed:
        return None
    return (trimmed[:297] + "...") if len(trimmed) > 300 else trimmed


__all__ = ["extract_error", "request_json"]
