"""Encoded polyline support (Google / OSRM format).

Each coordinate is stored as a latitude delta followed by a longitude delta
relative to the previous point. A delta is zig-zag signed, split into 5-bit
chunks (least significant first), each chunk OR-ed with ``0x20`` while more
chunks follow, and offset by 63 into printable ASCII.

The ``polyline`` package does the arithmetic. It does not report malformed
input in a useful way (dangling chunks surface as ``IndexError``, characters
outside the alphabet decode to garbage), so the string is validated first.
"""

from __future__ import annotations

from typing import List

from polyline import decode as polyline_decode

from ..errors import PolylineDecodeError
from ..models import Coordinate

_CHAR_OFFSET = 63
_CONTINUATION = 0x20
_MAX_CHUNK = 0x3F


def decode_polyline(encoded: str, precision: int = 5) -> List[Coordinate]:
    """Decode an encoded polyline string into a list of coordinates.

    Args:
        encoded: The encoded geometry. An empty string yields an empty list.
        precision: Number of decimal places encoded (5 for Google/OSRM).

    Returns:
        Coordinates in encoded order.

    Raises:
        PolylineDecodeError: If the input is truncated, has a latitude with no
            longitude, or contains characters outside the encoding alphabet.
    """

    if not encoded:
        return []
    _validate(encoded)
    return [
        Coordinate(float(lat), float(lon))
        for lat, lon in polyline_decode(encoded, precision)
    ]


def _validate(encoded: str) -> None:
    """Check the chunk structure without decoding values."""

    values = 0
    value_start = 0
    for index, char in enumerate(encoded):
        chunk = ord(char) - _CHAR_OFFSET
        if chunk < 0 or chunk > _MAX_CHUNK:
            raise PolylineDecodeError(
                f"Invalid polyline character {char!r} at offset {index}"
            )
        if not chunk & _CONTINUATION:
            values += 1
            value_start = index + 1
    if value_start != len(encoded):
        raise PolylineDecodeError(
            f"Truncated polyline: value starting at offset {value_start} "
            "never clears its continuation bit"
        )
    if values % 2:
        raise PolylineDecodeError(
            f"Polyline ends after a latitude at offset {len(encoded)} "
            f"(point {values // 2} has no longitude)"
        )


__all__ = ["decode_polyline"]
