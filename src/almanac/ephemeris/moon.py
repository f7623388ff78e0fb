"""Geocentric position of the Moon.

Truncated ELP-2000/82 series as given by Meeus, Astronomical Algorithms,
chapter 47: about ten arcseconds in longitude and four in latitude.
"""

import math

import numpy as np

from ..angles import norm_2pi

# Distance from the centre of the Earth to the centre of the Moon, mean value, km.
MEAN_DISTANCE_KM = 385000.56

# Multiples of D, M, M', F followed by Σl (1e-6 degree) and Σr (1e-3 km).
_LR_TERMS = np.array([
    [0, 0, 1, 0, 6288774, -20905355],
    [2, 0, -1, 0, 1274027, -3699111],
    [2, 0, 0, 0, 658314, -2955968],
    [0, 0, 2, 0, 213618, -569925],
    [0, 1, 0, 0, -185116, 48888],
    [0, 0, 0, 2, -114332, -3149],
    [2, 0, -2, 0, 58793, 246158],
    [2, -1, -1, 0, 57066, -152138],
    [2, 0, 1, 0, 53322, -170733],
    [2, -1, 0, 0, 45758, -204586],
    [0, 1, -1, 0, -40923, -129620],
    [1, 0, 0, 0, -34720, 108743],
    [0, 1, 1, 0, -30383, 104755],
    [2, 0, 0, -2, 15327, 10321],
    [0, 0, 1, 2, -12528, 0],
    [0, 0, 1, -2, 10980, 79661],
    [4, 0, -1, 0, 10675, -34782],
    [0, 0, 3, 0, 10034, -23210],
    [4, 0, -2, 0, 8548, -21636],
    [2, 1, -1, 0, -7888, 24208],
    [2, 1, 0, 0, -6766, 30824],
    [1, 0, -1, 0, -5163, -8379],
    [1, 1, 0, 0, 4987, -16675],
    [2, -1, 1, 0, 4036, -12831],
    [2, 0, 2, 0, 3994, -10445],
    [4, 0, 0, 0, 3861, -11650],
    [2, 0, -3, 0, 3665, 14403],
    [0, 1, -2, 0, -2689, -7003],
    [2, 0, -1, 2, -2602, 0],
    [2, -1, -2, 0, 2390, 10056],
    [1, 0, 1, 0, -2348, 6322],
    [2, -2, 0, 0, 2236, -9884],
    [0, 1, 2, 0, -2120, 5751],
    [0, 2, 0, 0, -2069, 0],
    [2, -2, -1, 0, 2048, -4950],
    [2, 0, 1, -2, -1773, 4130],
    [2, 0, 0, 2, -1595, 0],
    [4, -1, -1, 0, 1215, -3958],
    [0, 0, 2, 2, -1110, 0],
    [3, 0, -1, 0, -892, 3258],
    [2, 1, 1, 0, -810, 2616],
    [4, -1, -2, 0, 759, -1897],
    [0, 2, -1, 0, -713, -2117],
    [2, 2, -1, 0, -700, 2354],
    [2, 1, -2, 0, 691, 0],
    [2, -1, 0, -2, 596, 0],
    [4, 0, 1, 0, 549, -1423],
    [0, 0, 4, 0, 537, -1117],
    [4, -1, 0, 0, 520, -1571],
    [1, 0, -2, 0, -487, -1739],
    [2, 1, 0, -2, -399, 0],
    [0, 0, 2, -2, -381, -4421],
    [1, 1, 1, 0, 351, 0],
    [3, 0, -2, 0, -340, 0],
    [4, 0, -3, 0, 330, 0],
    [2, -1, 2, 0, 327, 0],
    [0, 2, 1, 0, -323, 1165],
    [1, 1, -1, 0, 299, 0],
    [2, 0, 3, 0, 294, 0],
    [2, 0, -1, -2, 0, 8752],
], dtype=float)

# Multiples of D, M, M', F followed by Σb (1e-6 degree).
_B_TERMS = np.array([
    [0, 0, 0, 1, 5128122],
    [0, 0, 1, 1, 280602],
    [0, 0, 1, -1, 277693],
    [2, 0, 0, -1, 173237],
    [2, 0, -1, 1, 55413],
    [2, 0, -1, -1, 46271],
    [2, 0, 0, 1, 32573],
    [0, 0, 2, 1, 17198],
    [2, 0, 1, -1, 9266],
    [0, 0, 2, -1, 8822],
    [2, -1, 0, -1, 8216],
    [2, 0, -2, -1, 4324],
    [2, 0, 1, 1, 4200],
    [2, 1, 0, -1, -3359],
    [2, -1, -1, 1, 2463],
    [2, -1, 0, 1, 2211],
    [2, -1, -1, -1, 2065],
    [0, 1, -1, -1, -1870],
    [4, 0, -1, -1, 1828],
    [0, 1, 0, 1, -1794],
    [0, 0, 0, 3, -1749],
    [0, 1, -1, 1, -1565],
    [1, 0, 0, 1, -1491],
    [0, 1, 1, 1, -1475],
    [0, 1, 1, -1, -1410],
    [0, 1, 0, -1, -1344],
    [1, 0, 0, -1, -1335],
    [0, 0, 3, 1, 1107],
    [4, 0, 0, -1, 1021],
    [4, 0, -1, 1, 833],
    [0, 0, 1, -3, 777],
    [4, 0, -2, 1, 671],
    [2, 0, 0, -3, 607],
    [2, 0, 2, -1, 596],
    [2, -1, 1, -1, 491],
    [2, 0, -2, 1, -451],
    [0, 0, 3, -1, 439],
    [2, 0, 2, 1, 422],
    [2, 0, -3, -1, 421],
    [2, 1, -1, 1, -366],
    [2, 1, 0, 1, -351],
    [4, 0, 0, 1, 331],
    [2, -1, 1, 1, 315],
    [2, -2, 0, -1, 302],
    [0, 0, 1, 3, -283],
    [2, 1, 1, -1, -229],
    [1, 1, 0, -1, 223],
    [1, 1, 0, 1, 223],
    [0, 1, -2, -1, -220],
    [2, 1, -1, -1, -220],
    [1, 0, 1, 1, -185],
    [2, -1, -2, -1, 181],
    [0, 1, 2, 1, -177],
    [4, 0, -2, -1, 176],
    [4, -1, -1, -1, 166],
    [1, 0, 1, -1, -164],
    [4, 0, 1, -1, 132],
    [1, 0, -1, -1, -119],
    [4, -1, 0, -1, 115],
    [2, -2, 0, 1, 107],
], dtype=float)


def _poly(t: float, *coefficients: float) -> float:
    return math.radians(float(np.polyval(coefficients[::-1], t)))


def mean_arguments(t: float) -> tuple[float, float, float, float, float]:
    """The Moon's mean longitude L' and the arguments D, M, M', F, in radians."""
    L = _poly(t, 218.3164477, 481267.88123421, -0.0015786, 1.0 / 538841.0, -1.0 / 65194000.0)
    D = _poly(t, 297.8501921, 445267.1114034, -0.0018819, 1.0 / 545868.0, -1.0 / 113065000.0)
    M = _poly(t, 357.5291092, 35999.0502909, -0.0001536, 1.0 / 24490000.0)
    Mp = _poly(t, 134.9633964, 477198.8675055, 0.0087414, 1.0 / 69699.0, -1.0 / 14712000.0)
    F = _poly(t, 93.2720950, 483202.0175233, -0.0036539, -1.0 / 3526000.0, 1.0 / 863310000.0)
    return L, D, M, Mp, F


def _eccentricity_factor(m_multiples: np.ndarray, t: float) -> np.ndarray:
    # Terms in M are scaled by the decreasing eccentricity of the Earth's orbit.
    E = 1.0 - 0.002516 * t - 0.0000074 * t * t
    return np.power(E, np.abs(m_multiples))


def moon_geocentric(t: float) -> tuple[float, float, float]:
    """Geometric geocentric ecliptic coordinates of the Moon, mean equinox of date.

    Args:
        t: Julian centuries of dynamical time since J2000.0

    Returns:
        Tuple of (longitude rad in [0, 2π), latitude rad, distance km)
    """
    L, D, M, Mp, F = mean_arguments(t)
    args = np.array([D, M, Mp, F])

    A1 = math.radians(119.75 + 131.849 * t)
    A2 = math.radians(53.09 + 479264.290 * t)
    A3 = math.radians(313.45 + 481266.484 * t)

    angles = _LR_TERMS[:, :4] @ args
    e = _eccentricity_factor(_LR_TERMS[:, 1], t)
    sigma_l = float(np.sum(e * _LR_TERMS[:, 4] * np.sin(angles)))
    sigma_r = float(np.sum(e * _LR_TERMS[:, 5] * np.cos(angles)))

    angles = _B_TERMS[:, :4] @ args
    e = _eccentricity_factor(_B_TERMS[:, 1], t)
    sigma_b = float(np.sum(e * _B_TERMS[:, 4] * np.sin(angles)))

    # Venus, Jupiter and the flattening of the Earth.
    sigma_l += 3958.0 * math.sin(A1) + 1962.0 * math.sin(L - F) + 318.0 * math.sin(A2)
    sigma_b += (
        -2235.0 * math.sin(L)
        + 382.0 * math.sin(A3)
        + 175.0 * math.sin(A1 - F)
        + 175.0 * math.sin(A1 + F)
        + 127.0 * math.sin(L - Mp)
        - 115.0 * math.sin(L + Mp)
    )

    lon = norm_2pi(L + math.radians(sigma_l / 1e6))
    lat = math.radians(sigma_b / 1e6)
    distance = MEAN_DISTANCE_KM + sigma_r / 1000.0
    return lon, lat, distance
