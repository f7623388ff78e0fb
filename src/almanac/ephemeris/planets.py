"""Heliocentric planetary positions.

VSOP87 series give the positions over the span each planet's theory was
fitted for; outside it the planets fall back to Keplerian orbits from mean
elements of date.
"""

import logging
import math

from ..angles import norm_2pi, norm_pi, safe_asin
from ..errors import NonconvergenceError
from ..models.bodies import BodyInfo
from ..models.elements import OrbitalElements
from . import vsop87

log = logging.getLogger(__name__)

KEPLER_TOLERANCE = 1e-12
KEPLER_MAX_ITERATIONS = 30


def solve_kepler(mean_anomaly: float, eccentricity: float, strict: bool = False) -> float:
    """Solve Kepler's equation E − e sin E = M by Newton's method.

    Args:
        mean_anomaly: M in radians
        eccentricity: Orbital eccentricity, below 1
        strict: Raise rather than return the last iterate on non-convergence

    Returns:
        The eccentric anomaly E in radians
    """
    M = norm_pi(mean_anomaly)
    E = M if eccentricity < 0.8 else math.pi
    for _ in range(KEPLER_MAX_ITERATIONS):
        delta = (E - eccentricity * math.sin(E) - M) / (1.0 - eccentricity * math.cos(E))
        E -= delta
        if abs(delta) < KEPLER_TOLERANCE:
            return E
    if strict:
        raise NonconvergenceError("Kepler's equation", KEPLER_MAX_ITERATIONS, E)
    log.warning("Kepler's equation did not converge for M=%.9f e=%.6f", M, eccentricity)
    return E


def planet_heliocentric(body: BodyInfo, t: float) -> tuple[float, float, float]:
    """Heliocentric ecliptic position of a planet, mean equinox of date.

    Args:
        body: The planet
        t: Julian centuries of dynamical time since J2000.0

    Returns:
        Tuple of (longitude rad in [0, 2π), latitude rad, radius AU)
    """
    if vsop87.in_range(body.key, t):
        return vsop87.heliocentric(body.key, t)
    log.debug("%s at T=%.3f is outside its VSOP87 span; using mean elements", body.name, t)
    return kepler_heliocentric(body.elements, t)


def kepler_heliocentric(elements: OrbitalElements, t: float) -> tuple[float, float, float]:
    """Keplerian heliocentric position from mean elements, equinox of date.

    Args:
        elements: The planet's mean elements
        t: Julian centuries of dynamical time since J2000.0

    Returns:
        Tuple of (longitude rad in [0, 2π), latitude rad, radius AU)
    """
    el = elements.at(t)
    e = el.eccentricity
    node = math.radians(el.ascending_node)
    incl = math.radians(el.inclination)
    peri = math.radians(el.perihelion)

    E = solve_kepler(math.radians(el.mean_longitude) - peri, e)
    nu = 2.0 * math.atan2(math.sqrt(1.0 + e) * math.sin(E / 2.0), math.sqrt(1.0 - e) * math.cos(E / 2.0))
    r = el.semi_major_axis * (1.0 - e * math.cos(E))

    # Argument of latitude.
    u = nu + peri - node
    lon = node + math.atan2(math.cos(incl) * math.sin(u), math.cos(u))
    lat = safe_asin(math.sin(incl) * math.sin(u))
    return norm_2pi(lon), lat, r


def spherical_to_rectangular(lon: float, lat: float, r: float) -> tuple[float, float, float]:
    return (
        r * math.cos(lat) * math.cos(lon),
        r * math.cos(lat) * math.sin(lon),
        r * math.sin(lat),
    )


def rectangular_to_spherical(x: float, y: float, z: float) -> tuple[float, float, float]:
    r = math.sqrt(x * x + y * y + z * z)
    return norm_2pi(math.atan2(y, x)), math.atan2(z, math.hypot(x, y)), r
