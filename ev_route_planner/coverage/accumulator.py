"""Along-route distance between progress indices."""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from ..geometry.distance import haversine_km
from ..models import Coordinate


class RouteProfile:
    """Cumulative haversine distance along a route.

    ``cumulative_km[i]`` is the distance travelled from the origin to route
    index ``i``. Building the profile is O(n); each query afterwards is O(1).
    """

    def __init__(self, route: Sequence[Coordinate]) -> None:
        self._size = len(route)
        legs = [haversine_km(route[i - 1], route[i]) for i in range(1, self._size)]
        self.cumulative_km: NDArray[np.float64] = np.concatenate(
            ([0.0], np.cumsum(np.asarray(legs, dtype=float)))
        )

    def __len__(self) -> int:
        return self._size

    @property
    def total_km(self) -> float:
        return float(self.cumulative_km[-1])

    def clamp(self, start: int, end: int) -> Tuple[int, int]:
        """Clamp both indices into the route and order them."""

        last = max(self._size - 1, 0)
        lo = min(max(int(start), 0), last)
        hi = min(max(int(end), 0), last)
        if hi < lo:
            lo, hi = hi, lo
        return lo, hi

    def distance_km(self, start: int, end: int) -> float:
        """Return the along-route distance between two progress indices.

        Out-of-range indices are clamped to the nearest route end rather than
        rejected.
        """

        if self._size < 2:
            return 0.0
        lo, hi = self.clamp(start, end)
        return float(self.cumulative_km[hi] - self.cumulative_km[lo])


def along_route_distance_km(route: Sequence[Coordinate], start: int, end: int) -> float:
    """Sum the haversine legs of ``route`` between ``start`` and ``end``."""

    return RouteProfile(route).distance_km(start, end)


__all__ = ["RouteProfile", "along_route_distance_km"]
