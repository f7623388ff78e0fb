"""Describe a position relative to notable places."""

import math

from ..angles import HALFPI
from .calculator import Algorithm, GeoConfig
from .position import Position
from .units import Distance

# Mean obliquity of the ecliptic at J2000.0.
EARTH_TILT = math.radians(23.43929111)

# Places further than this are not worth mentioning.
NEARBY = Distance.from_nm(250.0)

# Closer than this counts as being on the line.
ON_THE_LINE = Distance.from_nm(0.01)

POINT_NEMO = Position.from_degrees(-(47.0 + 9.0 / 60.0), -(126.0 + 43.0 / 60.0))

_SPHERE = GeoConfig(algorithm=Algorithm.HAVERSINE)


def notable_latitudes(tilt: float = EARTH_TILT) -> list[tuple[str, float]]:
    """The named parallels for a given axial tilt, north to south."""
    return [
        ("the North Pole", HALFPI),
        ("the Arctic Circle", HALFPI - tilt),
        ("the Tropic of Cancer", tilt),
        ("the Equator", 0.0),
        ("the Tropic of Capricorn", -tilt),
        ("the Antarctic Circle", -HALFPI + tilt),
        ("the South Pole", -HALFPI),
    ]


def describe_position(position: Position, tilt: float = EARTH_TILT) -> str | None:
    """Name the notable place nearest to a position, if one is close.

    Notable places are the poles, the polar circles, the tropics, the
    Equator, the Prime Meridian, the 180° meridian and Point Nemo.
    Distances are measured on the sphere.

    Args:
        position: The position to describe
        tilt: The Earth's axial tilt in radians, which places the
            tropics and polar circles

    Returns:
        A description such as "12 nm N of the Equator", or None if
        nothing notable is within 250 nautical miles
    """
    candidates = []
    for name, lat in notable_latitudes(tilt):
        distance = position.lat_distance(lat, _SPHERE)
        candidates.append((distance, _describe_latitude(name, lat, position, distance)))

    for name, lon in (("the Prime Meridian", 0.0), ("the 180° meridian", -math.pi)):
        # Meridians converge; near the poles the pole itself is the better landmark.
        if abs(position.lat) > math.radians(89.0):
            continue
        on_meridian = Position(position.lat, lon)
        distance = position.distance(on_meridian, _SPHERE)
        if distance < ON_THE_LINE:
            text = f"On {name}"
        else:
            side = "E" if math.sin(position.lon - lon) > 0 else "W"
            text = f"{distance.describe_nautical()} {side} of {name}"
        candidates.append((distance, text))

    nemo = position.distance(POINT_NEMO, _SPHERE)
    if nemo < ON_THE_LINE:
        candidates.append((nemo, "At Point Nemo"))
    else:
        candidates.append((nemo, f"{nemo.describe_nautical()} from Point Nemo"))

    distance, text = min(candidates, key=lambda c: c[0])
    if distance > NEARBY:
        return None
    return text


def _describe_latitude(name: str, lat: float, position: Position, distance: Distance) -> str:
    pole = abs(lat) == HALFPI
    if distance < ON_THE_LINE:
        return f"At {name}" if pole else f"On {name}"
    if pole:
        return f"{distance.describe_nautical()} from {name}"
    side = "N" if position.lat > lat else "S"
    return f"{distance.describe_nautical()} {side} of {name}"
