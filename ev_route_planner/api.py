"""Flask HTTP surface for trip planning."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, request
from flask.typing import ResponseReturnValue

from .config import CORS_ALLOW_ORIGIN
from .errors import InvalidRequestError, RoutePlannerError, UpstreamServiceError
from .models import AnalysisConfig
from .services import TripService

LOGGER = logging.getLogger(__name__)

# Query parameters that override the analysis defaults for one request.
_ANALYSIS_PARAMS = (
    "safeRangeKm",
    "bufferKm",
    "matchToleranceKm",
    "criticalGapKm",
    "boundingBoxPaddingDeg",
    "chargingRateAssumption",
)

_STATUS_BY_KIND = {
    "input_error": 400,
    "location_not_found": 404,
    "invalid_route": 422,
    "upstream_unavailable": 502,
    "decode_error": 502,
}


def _status_for(exc: RoutePlannerError) -> int:
    if isinstance(exc, UpstreamServiceError) and exc.timed_out:
        return 504
    return _STATUS_BY_KIND.get(exc.kind, 500)


def _analysis_overrides(service: TripService) -> Optional[AnalysisConfig]:
    options: Dict[str, Any] = {
        key: request.args[key] for key in _ANALYSIS_PARAMS if key in request.args
    }
    if not options:
        return None
    try:
        return service.config.analysis.with_options(options)
    except ValueError as exc:
        raise InvalidRequestError(str(exc)) from exc


def create_app(service: Optional[TripService] = None) -> Flask:
    """Build the Flask app. ``service`` defaults to a live :class:`TripService`."""

    app = Flask(__name__)
    trip_service = service or TripService()

    @app.route("/")
    def index() -> ResponseReturnValue:
        return "EV route planner API is running"

    @app.route("/api/route")
    def plan_route() -> ResponseReturnValue:
        start = request.args.get("start", "")
        end = request.args.get("end", "")
        if not start.strip() or not end.strip():
            raise InvalidRequestError("Please provide both start and end locations")
        analysis = _analysis_overrides(trip_service)
        result = trip_service.plan(
            start,
            end,
            country=request.args.get("country") or None,
            analysis=analysis,
        )
        return jsonify(result.to_dict())

    @app.errorhandler(RoutePlannerError)
    def handle_planner_error(exc: RoutePlannerError) -> ResponseReturnValue:
        status = _status_for(exc)
        if status >= 500:
            LOGGER.error("Route request failed (%s): %s", exc.kind, exc)
        else:
            LOGGER.info("Route request rejected (%s): %s", exc.kind, exc)
        return jsonify(exc.to_dict()), status

    @app.after_request
    def add_cors_header(response: Response) -> Response:
        if CORS_ALLOW_ORIGIN:
            response.headers["Access-Control-Allow-Origin"] = CORS_ALLOW_ORIGIN
        return response

    return app


__all__ = ["create_app"]
