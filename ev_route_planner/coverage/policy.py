"""Severity and suggested-charge policies applied to range gaps."""

from __future__ import annotations

from datetime import timedelta
from typing import Callable

from ..models import AnalysisConfig

SEVERITY_ADVISORY = "advisory"
SEVERITY_CRITICAL = "critical"

# (gap distance km, analysis config) -> suggested charging duration
MitigationPolicy = Callable[[float, AnalysisConfig], timedelta]


def proportional_charge_time(distance_km: float, config: AnalysisConfig) -> timedelta:
    """Charge long enough to recover the distance beyond the effective threshold.

    Heuristic only: the excess over ``safe_range_km - buffer_km`` divided by
    ``charging_rate_km_per_min``.
    """

    excess_km = max(0.0, distance_km - config.effective_threshold_km)
    return timedelta(minutes=excess_km / config.charging_rate_km_per_min)


def classify_severity(distance_km: float, config: AnalysisConfig) -> str:
    if distance_km > config.critical_gap_km:
        return SEVERITY_CRITICAL
    return SEVERITY_ADVISORY


__all__ = [
    "MitigationPolicy",
    "SEVERITY_ADVISORY",
    "SEVERITY_CRITICAL",
    "classify_severity",
    "proportional_charge_time",
]
