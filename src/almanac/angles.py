"""Angle normalisation and sexagesimal conversion helpers."""

import math

TWOPI = 2.0 * math.pi
HALFPI = 0.5 * math.pi

ARCSEC = math.radians(1.0 / 3600.0)


def norm_2pi(angle: float) -> float:
    """Normalise an angle in radians into [0, 2π)."""
    result = math.fmod(angle, TWOPI)
    if result < 0.0:
        result += TWOPI
    # fmod of a tiny negative value can round up to exactly 2π
    if result >= TWOPI:
        result = 0.0
    return result


def norm_pi(angle: float) -> float:
    """Normalise an angle in radians into [-π, π)."""
    return norm_2pi(angle + math.pi) - math.pi


def norm_hours(hours: float) -> float:
    """Normalise a time of day in hours into [0, 24)."""
    result = math.fmod(hours, 24.0)
    if result < 0.0:
        result += 24.0
    if result >= 24.0:
        result = 0.0
    return result


def safe_asin(x: float) -> float:
    return math.asin(max(-1.0, min(1.0, x)))


def safe_acos(x: float) -> float:
    return math.acos(max(-1.0, min(1.0, x)))


def dms_to_degrees(degrees: float, minutes: float = 0.0, seconds: float = 0.0) -> float:
    """Convert degrees, minutes, seconds to decimal degrees.

    Any one component may carry the sign for the whole angle, so that
    -0° 30' 00" can be written as (0, -30, 0).
    """
    sign = -1.0 if (degrees < 0 or minutes < 0 or seconds < 0) else 1.0
    return sign * (abs(degrees) + abs(minutes) / 60.0 + abs(seconds) / 3600.0)


def hms_to_degrees(hours: float, minutes: float = 0.0, seconds: float = 0.0) -> float:
    """Convert a right ascension in h, m, s to decimal degrees."""
    return 15.0 * dms_to_degrees(hours, minutes, seconds)


def _split_sexagesimal(value: float, places: int) -> tuple[str, int, int, float]:
    sign = "-" if value < 0 else ""
    value = abs(value)
    whole = int(value)
    rem = (value - whole) * 60.0
    minutes = int(rem)
    seconds = round((rem - minutes) * 60.0, places)
    if seconds >= 60.0:
        seconds -= 60.0
        minutes += 1
    if minutes >= 60:
        minutes -= 60
        whole += 1
    return sign, whole, minutes, seconds


def format_dms(degrees: float, places: int = 1) -> str:
    """Format decimal degrees as D°MM'SS.s"."""
    sign, d, m, s = _split_sexagesimal(degrees, places)
    width = places + 3 if places > 0 else 2
    return f"{sign}{d}°{m:02d}'{s:0{width}.{places}f}\""


def format_hms(hours: float, places: int = 1) -> str:
    """Format decimal hours as HHhMMmSS.ss."""
    sign, h, m, s = _split_sexagesimal(hours, places)
    width = places + 3 if places > 0 else 2
    return f"{sign}{h:02d}h{m:02d}m{s:0{width}.{places}f}s"
