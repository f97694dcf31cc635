"""Service layer package.

Exports high-level services consumed by the HTTP API and the CLI.
"""

from .trip_service import TripService, TripServiceConfig

__all__ = ["TripService", "TripServiceConfig"]
