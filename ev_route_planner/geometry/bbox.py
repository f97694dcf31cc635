"""Bounding boxes around route geometry."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..models import BoundingBox, Coordinate


def build_bounding_box(points: Sequence[Coordinate], padding_deg: float) -> BoundingBox:
    """Return the smallest box containing ``points``, grown by ``padding_deg``.

    Raises:
        ValueError: If ``points`` is empty.
    """

    if not points:
        raise ValueError("Cannot build a bounding box around an empty route")
    array = np.asarray([point.as_tuple() for point in points], dtype=float)
    south, west = array.min(axis=0)
    north, east = array.max(axis=0)
    return BoundingBox(
        south=float(south) - padding_deg,
        west=float(west) - padding_deg,
        north=float(north) + padding_deg,
        east=float(east) + padding_deg,
    )


__all__ = ["build_bounding_box"]
