"""Phase, bright limb, apparent size and brightness."""

import math

from ..angles import ARCSEC, norm_2pi, safe_acos

# Semidiameter constant of the Moon, arcseconds times km.
MOON_SEMIDIAMETER_KM = 358473400.0


def planet_phase_angle(r: float, delta: float, earth_r: float) -> float:
    """Sun-planet-Earth angle from the three sides of the triangle (Meeus 41.2)."""
    return safe_acos((r * r + delta * delta - earth_r * earth_r) / (2.0 * r * delta))


def moon_phase_angle(
    moon_lon: float, moon_lat: float, moon_dist: float, sun_lon: float, sun_dist: float
) -> float:
    """Phase angle of the Moon (Meeus 48.2, 48.3); distances in the same unit."""
    cos_psi = math.cos(moon_lat) * math.cos(moon_lon - sun_lon)
    psi = safe_acos(cos_psi)
    return math.atan2(sun_dist * math.sin(psi), moon_dist - sun_dist * cos_psi)


def illuminated_fraction(phase_angle: float) -> float:
    return (1.0 + math.cos(phase_angle)) / 2.0


def bright_limb(ra: float, dec: float, sun_ra: float, sun_dec: float) -> float:
    """Position angle of the midpoint of the bright limb, from north through east (Meeus 48.5)."""
    chi = math.atan2(
        math.cos(sun_dec) * math.sin(sun_ra - ra),
        math.sin(sun_dec) * math.cos(dec) - math.cos(sun_dec) * math.sin(dec) * math.cos(sun_ra - ra),
    )
    return norm_2pi(chi)


def apparent_diameter(semidiameter_arcsec: float, distance_au: float) -> float:
    """Angular diameter in radians of a body given its semidiameter at 1 AU."""
    return 2.0 * semidiameter_arcsec * ARCSEC / distance_au


def moon_diameter(distance_km: float) -> float:
    """Angular diameter of the Moon in radians, geocentric."""
    return 2.0 * MOON_SEMIDIAMETER_KM / distance_km * ARCSEC


def planet_magnitude(coefficients: tuple, r: float, delta: float, phase_angle: float) -> float:
    """Visual magnitude from V0 + 5 log10(rΔ) + c1·i + c2·i² + c3·i³, i in degrees."""
    i = math.degrees(phase_angle)
    magnitude = coefficients[0] + 5.0 * math.log10(r * delta)
    for power, c in enumerate(coefficients[1:], start=1):
        magnitude += c * i**power
    return magnitude


def sun_magnitude(v0: float, distance_au: float) -> float:
    return v0 + 5.0 * math.log10(distance_au)


def moon_magnitude(v0: float, phase_angle: float) -> float:
    """Allen's phase law for the Moon."""
    i = abs(math.degrees(phase_angle))
    return v0 + 0.026 * i + 4e-9 * i**4
