"""Circular-angle primitives shared by the aspect and house code."""

from __future__ import annotations


def normalize_longitude(x: float) -> float:
    """Reduce any real value to the range [0, 360)."""

    v = float(x) % 360.0
    # -1e-18 % 360 rounds up to exactly 360.0
    return 0.0 if v >= 360.0 else v


def angular_separation(a: float, b: float) -> float:
    """Return the minimal angular distance between two longitudes, in [0, 180]."""

    d = abs(normalize_longitude(a) - normalize_longitude(b))
    return min(d, 360.0 - d)


def is_within_arc(longitude: float, start: float, end: float) -> bool:
    """True when ``longitude`` lies in the half-open arc [start, end).

    The arc runs forward around the circle; when ``start > end`` it wraps
    through 0°.
    """

    lon = normalize_longitude(longitude)
    start = normalize_longitude(start)
    end = normalize_longitude(end)
    if start <= end:
        return start <= lon < end
    return lon >= start or lon < end


def signed_delta(transit_lon: float, natal_lon: float, aspect_angle: float) -> float:
    """Return the signed difference from the exact aspect in degrees.

    The result is in the range [-180, 180). Positive values mean the transit
    body has moved past the exact aspect, negative values that it is still
    approaching. Aspects other than the conjunction and opposition are
    measured on whichever side of the natal point the transit sits.
    """

    raw = (transit_lon - natal_lon + 540.0) % 360.0 - 180.0
    if raw < 0:
        return -(((-raw) - aspect_angle + 540.0) % 360.0 - 180.0)
    return (raw - aspect_angle + 540.0) % 360.0 - 180.0


__all__ = ["angular_separation", "is_within_arc", "normalize_longitude", "signed_delta"]
