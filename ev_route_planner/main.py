"""Command line entry point: plan a trip or serve the HTTP API."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from werkzeug.serving import make_server

from .config import API_HOST, API_PORT, LOG_LEVEL
from .errors import RoutePlannerError
from .models import AnalysisConfig
from .services import TripService

# CLI flag -> analysis option name
_ANALYSIS_FLAGS = {
    "safe_range_km": "safeRangeKm",
    "buffer_km": "bufferKm",
    "match_tolerance_km": "matchToleranceKm",
    "critical_gap_km": "criticalGapKm",
    "padding_deg": "boundingBoxPaddingDeg",
    "charging_rate": "chargingRateAssumption",
}


def _setup_logging() -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=getattr(logging, LOG_LEVEL, logging.INFO),
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find charging stations and range gaps along a driving route"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    plan = sub.add_parser("plan", help="Analyse a single trip and print JSON")
    plan.add_argument("start", help="Start location, e.g. 'Bangalore'")
    plan.add_argument("end", help="End location, e.g. 'Mumbai'")
    plan.add_argument("--country", default=None, help="ISO country code scope")
    plan.add_argument("--map", dest="map_path", default=None, help="Write an HTML map here")
    plan.add_argument("--safe-range-km", type=float, default=None)
    plan.add_argument("--buffer-km", type=float, default=None)
    plan.add_argument("--match-tolerance-km", type=float, default=None)
    plan.add_argument("--critical-gap-km", type=float, default=None)
    plan.add_argument("--padding-deg", type=float, default=None)
    plan.add_argument(
        "--charging-rate",
        type=float,
        default=None,
        help="Range regained per minute of charging (km/min)",
    )

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=API_HOST)
    serve.add_argument("--port", type=int, default=API_PORT)
    return parser


def _analysis_from_args(args: argparse.Namespace) -> AnalysisConfig:
    options: Dict[str, Any] = {
        option: getattr(args, flag)
        for flag, option in _ANALYSIS_FLAGS.items()
        if getattr(args, flag) is not None
    }
    return AnalysisConfig().with_options(options)


def _run_plan(args: argparse.Namespace) -> int:
    try:
        analysis = _analysis_from_args(args)
    except ValueError as exc:
        logging.error("Invalid analysis option: %s", exc)
        return 2
    try:
        result = TripService().plan(
            args.start, args.end, country=args.country, analysis=analysis
        )
    except RoutePlannerError as exc:
        logging.error("Trip planning failed (%s): %s", exc.kind, exc)
        return 1
    print(json.dumps(result.to_dict(), indent=2))
    if args.map_path:
        from .visualization import create_trip_map  # local import: folium is heavy

        create_trip_map(result, output_html_path=args.map_path)
        logging.info("Map written to %s", args.map_path)
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    from .api import create_app

    server = make_server(args.host, args.port, create_app())
    logging.info("Serving EV route planner API on http://%s:%s", args.host, args.port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logging.info("Shutting down API server.")
    finally:
        server.server_close()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    _setup_logging()
    args = _build_parser().parse_args(argv)
    if args.command == "plan":
        return _run_plan(args)
    return _run_serve(args)


if __name__ == "__main__":  # pragma: no cover - CLI helper
    sys.exit(main())
