"""Geographic point helpers used by the fix decoders.

The decoders never bound-check coordinates themselves; every decision about
whether a latitude/longitude pair is usable goes through a validity
predicate. ``is_valid_point`` is the default one and can be replaced per
``FixState``.
"""

from collections.abc import Callable
from typing import NamedTuple

MAX_LATITUDE = 90.0
MAX_LONGITUDE = 180.0

# Points this close to (0, 0) are what receivers report with no fix.
_NULL_ISLAND_EPSILON = 0.0001

PointValidator = Callable[[float, float], bool]


class GeoFix(NamedTuple):
    """A latitude/longitude pair in decimal degrees (negative = S/W)."""

    latitude: float
    longitude: float


def is_valid_point(latitude: float, longitude: float) -> bool:
    """Return True if the pair is a usable, non-degenerate position.

    Rejects latitudes at or beyond +/-90, longitudes at or beyond +/-180, and
    the small square around (0, 0) that receivers emit when they have no fix.

    Example:
        >>> is_valid_point(31.47923, -142.96119)
        True
        >>> is_valid_point(0.0, 0.0)
        False
    """
    lat_abs = abs(latitude)
    lon_abs = abs(longitude)
    if lat_abs >= MAX_LATITUDE or lon_abs >= MAX_LONGITUDE:
        return False
    if lat_abs <= _NULL_ISLAND_EPSILON and lon_abs <= _NULL_ISLAND_EPSILON:
        return False
    return True


def _format_degree_minutes(value: float, degree_digits: int) -> str:
    degrees_abs = abs(value)
    degrees = int(degrees_abs)
    minutes = (degrees_abs - degrees) * 60.0
    # 100 + minutes renders as "1MM.MMMMM"; dropping the "1" zero-pads minutes
    minutes_text = f"{100.0 + minutes:.5f}"[1:]
    return f"{degrees:0{degree_digits}d}{minutes_text}"


def format_latitude(latitude: float) -> str:
    """Format a latitude as NMEA ``DDMM.MMMMM,H``.

    Example:
        >>> format_latitude(31.47923333)
        '3128.75400,N'
    """
    text = _format_degree_minutes(latitude, 2)
    return f"{text},{'N' if latitude >= 0.0 else 'S'}"


def format_longitude(longitude: float) -> str:
    """Format a longitude as NMEA ``DDDMM.MMMMM,H``.

    Example:
        >>> format_longitude(-142.96119)
        '14257.67140,W'
    """
    text = _format_degree_minutes(longitude, 3)
    return f"{text},{'E' if longitude >= 0.0 else 'W'}"
