"""Coordinate transformations between ecliptic, equatorial and horizontal frames.

All angles are in radians. Formulae follow Meeus, Astronomical Algorithms,
chapters 11, 13, 23, 25 and 40.
"""

import math

from ..angles import ARCSEC, norm_2pi, safe_asin
from ..geodesy.ellipsoid import Ellipsoid

# Constant of aberration.
KAPPA = 20.49552 * ARCSEC

# Equatorial horizontal parallax of a body at 1 AU.
SOLAR_PARALLAX = 8.794 * ARCSEC

AU_KM = 149597870.7


def ecliptic_to_equatorial(lon: float, lat: float, obliquity: float) -> tuple[float, float]:
    """Rotate ecliptic coordinates to right ascension and declination."""
    sin_e, cos_e = math.sin(obliquity), math.cos(obliquity)
    ra = math.atan2(math.sin(lon) * cos_e - math.tan(lat) * sin_e, math.cos(lon))
    dec = safe_asin(math.sin(lat) * cos_e + math.cos(lat) * sin_e * math.sin(lon))
    return norm_2pi(ra), dec


def fk5_correction(lon: float, lat: float, t: float) -> tuple[float, float]:
    """Reduce VSOP87 coordinates to the FK5 system (Meeus 32.3).

    Args:
        lon: Longitude in radians, VSOP87 dynamical equinox
        lat: Latitude in radians
        t: Julian centuries of dynamical time since J2000.0
    """
    lp = lon - math.radians(1.397 * t + 0.00031 * t * t)
    dlon = (-0.09033 + 0.03916 * (math.cos(lp) + math.sin(lp)) * math.tan(lat)) * ARCSEC
    dlat = 0.03916 * ARCSEC * (math.cos(lp) - math.sin(lp))
    return norm_2pi(lon + dlon), lat + dlat


def solar_aberration(radius: float) -> float:
    """Aberration in longitude of the Sun at a distance in AU."""
    return -20.4898 * ARCSEC / radius


def annual_aberration(lon: float, lat: float, sun_lon: float, t: float) -> tuple[float, float]:
    """Annual aberration of a body in ecliptic coordinates (Meeus 23.2).

    Args:
        lon: Geometric ecliptic longitude of the body
        lat: Geometric ecliptic latitude of the body
        sun_lon: True geometric longitude of the Sun
        t: Julian centuries of dynamical time since J2000.0

    Returns:
        Corrections (Δλ, Δβ) in radians
    """
    e = 0.016708634 - 0.000042037 * t - 0.0000001267 * t * t
    pi = math.radians(102.93735 + 1.71946 * t + 0.00046 * t * t)
    dlon = (-KAPPA * math.cos(sun_lon - lon) + e * KAPPA * math.cos(pi - lon)) / math.cos(lat)
    dlat = -KAPPA * math.sin(lat) * (math.sin(sun_lon - lon) - e * math.sin(pi - lon))
    return dlon, dlat


def observer_geocentric(lat: float, altitude: float, ellipsoid: Ellipsoid) -> tuple[float, float]:
    """The observer's ρ sin φ' and ρ cos φ', in units of the equatorial radius.

    Args:
        lat: Geodetic latitude in radians
        altitude: Height above the ellipsoid in metres
        ellipsoid: Earth model
    """
    a = ellipsoid.semi_major_axis
    ba = 1.0 - ellipsoid.flattening
    u = math.atan(ba * math.tan(lat))
    h = altitude / a
    rho_sin = ba * math.sin(u) + h * math.sin(lat)
    rho_cos = math.cos(u) + h * math.cos(lat)
    return rho_sin, rho_cos


def horizontal_parallax(distance_au: float) -> float:
    """Equatorial horizontal parallax of a body at a distance in AU."""
    return safe_asin(math.sin(SOLAR_PARALLAX) / distance_au)


def topocentric(
    ra: float,
    dec: float,
    distance_au: float,
    parallax: float,
    hour_angle: float,
    rho_sin: float,
    rho_cos: float,
) -> tuple[float, float, float]:
    """Shift geocentric equatorial coordinates to the observer (Meeus 40.2, 40.3).

    Returns:
        Tuple of (right ascension, declination, distance in AU)
    """
    sin_pi = math.sin(parallax)
    cos_dec = math.cos(dec)
    denom = cos_dec - rho_cos * sin_pi * math.cos(hour_angle)
    dra = math.atan2(-rho_cos * sin_pi * math.sin(hour_angle), denom)
    dec_topo = math.atan2((math.sin(dec) - rho_sin * sin_pi) * math.cos(dra), denom)

    # Distances in Earth radii.
    d = 1.0 / sin_pi
    x = d * cos_dec * math.cos(hour_angle) - rho_cos
    y = d * cos_dec * math.sin(hour_angle)
    z = d * math.sin(dec) - rho_sin
    distance = math.sqrt(x * x + y * y + z * z) / d * distance_au
    return norm_2pi(ra + dra), dec_topo, distance


def horizontal(hour_angle: float, dec: float, lat: float) -> tuple[float, float]:
    """Local azimuth (from north, clockwise) and altitude (Meeus 13.5, 13.6)."""
    azimuth = math.atan2(
        math.sin(hour_angle),
        math.cos(hour_angle) * math.sin(lat) - math.tan(dec) * math.cos(lat),
    )
    altitude = safe_asin(
        math.sin(lat) * math.sin(dec) + math.cos(lat) * math.cos(dec) * math.cos(hour_angle)
    )
    # Meeus measures azimuth from the south.
    return norm_2pi(azimuth + math.pi), altitude
