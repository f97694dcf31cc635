"""General utility helpers shared across modules."""

from __future__ import annotations

import math
from datetime import timedelta


def format_duration(duration: timedelta) -> str:
    """Format a duration as ``Xh Ym`` (or ``Y min`` below one hour).

    Partial minutes are rounded up so a suggested charge never reads shorter
    than the estimate.
    """

    total_minutes = max(0, math.ceil(duration.total_seconds() / 60.0))
    hours, minutes = divmod(total_minutes, 60)
    if hours == 0:
        return f"{minutes} min"
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}m"
