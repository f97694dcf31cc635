"""Public entry points for route coverage analysis."""

from .accumulator import RouteProfile, along_route_distance_km
from .analyzer import CoverageResult, analyze_coverage
from .matcher import match_candidates
from .policy import (
    SEVERITY_ADVISORY,
    SEVERITY_CRITICAL,
    MitigationPolicy,
    classify_severity,
    proportional_charge_time,
)

__all__ = [
    "CoverageResult",
    "MitigationPolicy",
    "RouteProfile",
    "SEVERITY_ADVISORY",
    "SEVERITY_CRITICAL",
    "along_route_distance_km",
    "analyze_coverage",
    "classify_severity",
    "match_candidates",
    "proportional_charge_time",
]
