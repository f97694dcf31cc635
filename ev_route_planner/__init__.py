"""EV route planner: charging coverage and range gaps along a driving route."""

from .coverage import CoverageResult, analyze_coverage
from .errors import RoutePlannerError
from .main import main
from .models import AnalysisConfig, CandidatePoint, Coordinate, GapWarning, MatchedPoint

__all__ = [
    "main",
    "AnalysisConfig",
    "CandidatePoint",
    "Coordinate",
    "CoverageResult",
    "GapWarning",
    "MatchedPoint",
    "RoutePlannerError",
    "analyze_coverage",
]
