"""Geodetic calculator interface and algorithm selection."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from .ellipsoid import WGS84, Ellipsoid
from .units import Azimuth, Distance, Vector

log = logging.getLogger(__name__)


class Algorithm(Enum):
    """Available geodesic algorithms, cheapest first."""

    HAVERSINE = "haversine"
    ANDOYER = "andoyer"
    VINCENTY = "vincenty"


@dataclass(frozen=True)
class GeoConfig:
    """Selects the geodesic algorithm and Earth model for a calculation.

    Attributes:
        algorithm: Which calculator to use
        ellipsoid: Earth model; Haversine uses its mean radius
        strict: Raise NonconvergenceError instead of falling back
    """

    algorithm: Algorithm = Algorithm.VINCENTY
    ellipsoid: Ellipsoid = WGS84
    strict: bool = False


class GeoCalculator(ABC):
    """Solves the inverse and direct geodesic problems on one ellipsoid."""

    algorithm: Algorithm

    def __init__(self, ellipsoid: Ellipsoid = WGS84, strict: bool = False):
        self.ellipsoid = ellipsoid
        self.strict = strict

    @abstractmethod
    def distance_and_azimuth(self, p1, p2) -> tuple[Distance, Azimuth, Azimuth]:
        """Solve the inverse problem.

        Args:
            p1: Start position
            p2: End position

        Returns:
            Tuple of (distance, forward azimuth at p1, back azimuth at p2).
            The back azimuth points from p2 towards p1.
        """

    @abstractmethod
    def offset(self, p1, vector: Vector):
        """Solve the direct problem: the position reached from p1 along a vector."""

    def distance(self, p1, p2) -> Distance:
        return self.distance_and_azimuth(p1, p2)[0]

    def azimuth(self, p1, p2) -> Azimuth:
        return self.distance_and_azimuth(p1, p2)[1]

    def vector(self, p1, p2) -> Vector:
        distance, forward, _ = self.distance_and_azimuth(p1, p2)
        return Vector(distance, forward)

    def lat_distance(self, p1, lat: float) -> Distance:
        """Meridian distance from p1's latitude to another latitude."""
        arc = self.ellipsoid.meridian_arc(lat) - self.ellipsoid.meridian_arc(p1.lat)
        return Distance(abs(arc))

    def __repr__(self):
        return f"{type(self).__name__}({self.ellipsoid.name}, strict={self.strict})"


def get_calculator(config: GeoConfig | None = None) -> GeoCalculator:
    """Build the calculator a GeoConfig selects; None means the defaults."""
    return _build_calculator(config or GeoConfig())


@lru_cache(maxsize=32)
def _build_calculator(config: GeoConfig) -> GeoCalculator:
    from .andoyer import Andoyer
    from .haversine import Haversine
    from .vincenty import Vincenty

    classes = {
        Algorithm.HAVERSINE: Haversine,
        Algorithm.ANDOYER: Andoyer,
        Algorithm.VINCENTY: Vincenty,
    }
    calculator = classes[config.algorithm](config.ellipsoid, strict=config.strict)
    log.debug("Created geodesic calculator %r", calculator)
    return calculator
