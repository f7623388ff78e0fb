"""Nutation and the obliquity of the ecliptic (IAU 1980 theory)."""

import math

import numpy as np

from ..angles import ARCSEC

# Multiples of the fundamental arguments D, M, M', F, Ω followed by the
# Δψ coefficients (A + B·T) and Δε coefficients (C + D·T), in 0.0001".
_NUTATION_TERMS = np.array(
    [
        [0, 0, 0, 0, 1, -171996, -174.2, 92025, 8.9],
        [-2, 0, 0, 2, 2, -13187, -1.6, 5736, -3.1],
        [0, 0, 0, 2, 2, -2274, -0.2, 977, -0.5],
        [0, 0, 0, 0, 2, 2062, 0.2, -895, 0.5],
        [0, 1, 0, 0, 0, 1426, -3.4, 54, -0.1],
        [0, 0, 1, 0, 0, 712, 0.1, -7, 0],
        [-2, 1, 0, 2, 2, -517, 1.2, 224, -0.6],
        [0, 0, 0, 2, 1, -386, -0.4, 200, 0],
        [0, 0, 1, 2, 2, -301, 0, 129, -0.1],
        [-2, -1, 0, 2, 2, 217, -0.5, -95, 0.3],
        [-2, 0, 1, 0, 0, -158, 0, 0, 0],
        [-2, 0, 0, 2, 1, 129, 0.1, -70, 0],
        [0, 0, -1, 2, 2, 123, 0, -53, 0],
        [2, 0, 0, 0, 0, 63, 0, 0, 0],
        [0, 0, 1, 0, 1, 63, 0.1, -33, 0],
        [2, 0, -1, 2, 2, -59, 0, 26, 0],
        [0, 0, -1, 0, 1, -58, -0.1, 32, 0],
        [0, 0, 1, 2, 1, -51, 0, 27, 0],
        [-2, 0, 2, 0, 0, 48, 0, 0, 0],
        [0, 0, -2, 2, 1, 46, 0, -24, 0],
        [2, 0, 0, 2, 2, -38, 0, 16, 0],
        [0, 0, 2, 2, 2, -31, 0, 13, 0],
        [0, 0, 2, 0, 0, 29, 0, 0, 0],
        [-2, 0, 1, 2, 2, 29, 0, -12, 0],
        [0, 0, 0, 2, 0, 26, 0, 0, 0],
        [-2, 0, 0, 2, 0, -22, 0, 0, 0],
        [0, 0, -1, 2, 1, 21, 0, -10, 0],
        [0, 2, 0, 0, 0, 17, -0.1, 0, 0],
        [2, 0, -1, 0, 1, 16, 0, -8, 0],
        [-2, 2, 0, 2, 2, -16, 0.1, 7, 0],
        [0, 1, 0, 0, 1, -15, 0, 9, 0],
        [-2, 0, 1, 0, 1, -13, 0, 7, 0],
        [0, -1, 0, 0, 1, -12, 0, 6, 0],
        [0, 0, 2, -2, 0, 11, 0, 0, 0],
        [2, 0, -1, 2, 1, -10, 0, 5, 0],
        [2, 0, 1, 2, 2, -8, 0, 3, 0],
        [0, 1, 0, 2, 2, 7, 0, -3, 0],
        [-2, 1, 1, 0, 0, -7, 0, 0, 0],
        [0, -1, 0, 2, 2, -7, 0, 3, 0],
        [2, 0, 0, 2, 1, -7, 0, 3, 0],
        [2, 0, 1, 0, 0, 6, 0, 0, 0],
        [-2, 0, 2, 2, 2, 6, 0, -3, 0],
        [-2, 0, 1, 2, 1, 6, 0, -3, 0],
        [2, 0, -2, 0, 1, -6, 0, 3, 0],
        [2, 0, 0, 0, 1, -6, 0, 3, 0],
        [0, -1, 1, 0, 0, 5, 0, 0, 0],
        [-2, -1, 0, 2, 1, -5, 0, 3, 0],
        [-2, 0, 0, 0, 1, -5, 0, 3, 0],
        [0, 0, 2, 2, 1, -5, 0, 3, 0],
        [-2, 0, 2, 0, 1, 4, 0, 0, 0],
        [-2, 1, 0, 2, 1, 4, 0, 0, 0],
        [0, 0, 1, -2, 0, 4, 0, 0, 0],
        [-1, 0, 1, 0, 0, -4, 0, 0, 0],
        [-2, 1, 0, 0, 0, -4, 0, 0, 0],
        [1, 0, 0, 0, 0, -4, 0, 0, 0],
        [0, 0, 1, 2, 0, 3, 0, 0, 0],
        [0, 0, -2, 2, 2, -3, 0, 0, 0],
        [-1, -1, 1, 0, 0, -3, 0, 0, 0],
        [0, 1, 1, 0, 0, -3, 0, 0, 0],
        [0, -1, 1, 2, 2, -3, 0, 0, 0],
        [2, -1, -1, 2, 2, -3, 0, 0, 0],
        [0, 0, 3, 2, 2, -3, 0, 0, 0],
        [2, -1, 0, 2, 2, -3, 0, 0, 0],
    ]
)

_MULTIPLES = _NUTATION_TERMS[:, :5]
_PSI_COEFFS = _NUTATION_TERMS[:, 5:7]
_EPS_COEFFS = _NUTATION_TERMS[:, 7:9]


def _fundamental_arguments(t: float) -> np.ndarray:
    """Mean elongation, anomalies, argument of latitude and node, in radians."""
    t2 = t * t
    t3 = t2 * t
    d = 297.85036 + 445267.111480 * t - 0.0019142 * t2 + t3 / 189474.0
    m = 357.52772 + 35999.050340 * t - 0.0001603 * t2 - t3 / 300000.0
    mp = 134.96298 + 477198.867398 * t + 0.0086972 * t2 + t3 / 56250.0
    f = 93.27191 + 483202.017538 * t - 0.0036825 * t2 + t3 / 327270.0
    omega = 125.04452 - 1934.136261 * t + 0.0020708 * t2 + t3 / 450000.0
    return np.radians(np.array([d, m, mp, f, omega]) % 360.0)


def nutation(t: float) -> tuple[float, float]:
    """Compute the nutation in longitude and in obliquity.

    Args:
        t: Julian centuries of dynamical time since J2000.0

    Returns:
        Tuple of (Δψ, Δε) in radians
    """
    args = _MULTIPLES @ _fundamental_arguments(t)
    dpsi = np.sum((_PSI_COEFFS[:, 0] + _PSI_COEFFS[:, 1] * t) * np.sin(args))
    deps = np.sum((_EPS_COEFFS[:, 0] + _EPS_COEFFS[:, 1] * t) * np.cos(args))
    return float(dpsi) * 1e-4 * ARCSEC, float(deps) * 1e-4 * ARCSEC


def mean_obliquity(t: float) -> float:
    """Mean obliquity of the ecliptic (IAU 1980), in radians.

    Args:
        t: Julian centuries of dynamical time since J2000.0
    """
    seconds = 84381.448 - 46.8150 * t - 0.00059 * t * t + 0.001813 * t**3
    return seconds * ARCSEC


def true_obliquity(t: float) -> float:
    """Mean obliquity plus the nutation in obliquity, in radians."""
    return mean_obliquity(t) + nutation(t)[1]


def equation_of_equinoxes(t: float) -> float:
    """Δψ·cos ε, the difference between apparent and mean sidereal time, in radians."""
    dpsi, deps = nutation(t)
    return dpsi * math.cos(mean_obliquity(t) + deps)
