"""Heliocentric positions of the Earth and planets from truncated VSOP87D series.

Terms are those of Meeus, Astronomical Algorithms, appendix III: each row
is (A, B, C) giving A·cos(B + C·τ) in units of 1e-8, with τ in Julian
millennia of dynamical time from J2000.0. A coordinate is the sum over
powers k of τ^k times the k-th series. Coordinates are referred to the
mean ecliptic and equinox of date. Accuracy is about one arcsecond over
the span each theory was fitted for.
"""

import numpy as np

from ...angles import norm_2pi
from . import earth, jupiter, mars, mercury, neptune, saturn, uranus, venus

SERIES = {
    "mercury": mercury,
    "venus": venus,
    "earth": earth,
    "mars": mars,
    "jupiter": jupiter,
    "saturn": saturn,
    "uranus": uranus,
    "neptune": neptune,
}

# Half-width, in Julian millennia from J2000.0, of the span over which
# VSOP87 holds its one-arcsecond precision for each planet.
VALID_MILLENNIA = {
    "mercury": 2.0,
    "venus": 2.0,
    "earth": 2.0,
    "mars": 2.0,
    "jupiter": 1.0,
    "saturn": 1.0,
    "uranus": 3.0,
    "neptune": 3.0,
}


def evaluate(series: list, tau: float) -> float:
    """Sum a VSOP87 coordinate: Σ τ^k Σ A cos(B + C τ), scaled from 1e-8."""
    total = 0.0
    for power, terms in enumerate(series):
        total += tau**power * float(np.sum(terms[:, 0] * np.cos(terms[:, 1] + terms[:, 2] * tau)))
    return total * 1e-8


def in_range(name: str, t: float) -> bool:
    """Whether an instant lies inside the span the planet's series were fitted for."""
    return abs(t / 10.0) <= VALID_MILLENNIA[name]


def heliocentric(name: str, t: float) -> tuple[float, float, float]:
    """Heliocentric ecliptic coordinates of a planet.

    Args:
        name: Lower-case planet name, "earth" included
        t: Julian centuries of dynamical time since J2000.0

    Returns:
        Tuple of (longitude rad in [0, 2π), latitude rad, radius AU)

    Raises:
        KeyError: If there is no series for the name
    """
    series = SERIES[name]
    tau = t / 10.0
    return (
        norm_2pi(evaluate(series.L, tau)),
        evaluate(series.B, tau),
        evaluate(series.R, tau),
    )


def earth_heliocentric(t: float) -> tuple[float, float, float]:
    """Heliocentric ecliptic coordinates of the Earth."""
    return heliocentric("earth", t)
