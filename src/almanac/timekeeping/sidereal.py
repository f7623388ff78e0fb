"""Greenwich sidereal time."""

import math

from ..angles import norm_hours
from ..ephemeris.nutation import equation_of_equinoxes

_J2000 = 2451545.0


def gmst(ut: float) -> float:
    """Greenwich mean sidereal time (Meeus 12.4).

    Args:
        ut: Julian Date in Universal Time

    Returns:
        Sidereal time in hours, within [0, 24)
    """
    d = ut - _J2000
    t = d / 36525.0
    degrees = 280.46061837 + 360.98564736629 * d + 0.000387933 * t * t - t**3 / 38710000.0
    return norm_hours(math.fmod(degrees, 360.0) / 15.0)


def gast(ut: float, t_td: float) -> float:
    """Greenwich apparent sidereal time.

    Args:
        ut: Julian Date in Universal Time
        t_td: Julian centuries of dynamical time since J2000.0, for nutation

    Returns:
        Sidereal time in hours, within [0, 24)
    """
    correction_hours = math.degrees(equation_of_equinoxes(t_td)) / 15.0
    return norm_hours(gmst(ut) + correction_hours)
