"""Assign candidate stations a progress position along a route."""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from ..geometry.distance import haversine_km
from ..models import CandidatePoint, Coordinate, MatchedPoint

LOGGER = logging.getLogger(__name__)


def sample_indices(route_length: int, max_samples: int) -> List[int]:
    """Return the route indices compared against each candidate.

    The route is walked with a fixed stride so that at most ``max_samples``
    indices are produced, plus the final index when the stride skips it.
    """

    if route_length <= 0:
        return []
    stride = max(1, math.ceil(route_length / max(1, max_samples)))
    indices = list(range(0, route_length, stride))
    if indices[-1] != route_length - 1:
        indices.append(route_length - 1)
    return indices


def nearest_route_sample(
    point: Coordinate,
    route: Sequence[Coordinate],
    indices: Iterable[int],
    tolerance_km: float,
) -> Optional[Tuple[int, float]]:
    """Return ``(index, distance_km)`` of the closest sample within tolerance.

    Ties keep the earliest index. Returns ``None`` when no sample lies within
    ``tolerance_km`` (the boundary itself counts as within).
    """

    best: Optional[Tuple[int, float]] = None
    for index in indices:
        distance = haversine_km(point, route[index])
        if distance > tolerance_km:
            continue
        if best is None or distance < best[1]:
            best = (index, distance)
    return best


def match_candidates(
    route: Sequence[Coordinate],
    candidates: Iterable[CandidatePoint],
    tolerance_km: float,
    *,
    max_samples: int = 500,
) -> List[MatchedPoint]:
    """Return the candidates lying within ``tolerance_km`` of the route.

    Each match carries the index of its nearest (subsampled) route coordinate.
    Unmatched candidates are dropped. Matches keep the input order.
    """

    indices = sample_indices(len(route), max_samples)
    matched: List[MatchedPoint] = []
    dropped = 0
    for candidate in candidates:
        nearest = nearest_route_sample(
            candidate.coordinate, route, indices, tolerance_km
        )
        if nearest is None:
            dropped += 1
            continue
        index, distance = nearest
        matched.append(
            MatchedPoint(candidate=candidate, progress_index=index, offset_km=distance)
        )
    LOGGER.debug(
        "Matched %d candidates against %d route samples (dropped %d beyond %.1f km)",
        len(matched),
        len(indices),
        dropped,
        tolerance_km,
    )
    return matched


__all__ = ["match_candidates", "nearest_route_sample", "sample_indices"]
