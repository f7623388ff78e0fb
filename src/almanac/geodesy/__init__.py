from .andoyer import Andoyer
from .calculator import Algorithm, GeoCalculator, GeoConfig, get_calculator
from .ellipsoid import (
    AIRY_1830,
    ELLIPSOIDS,
    GRS80,
    IAU_1976,
    INTERNATIONAL_1924,
    NAD27,
    NAD83,
    WGS84,
    Ellipsoid,
)
from .haversine import Haversine
from .poi import describe_position
from .position import Position
from .units import Azimuth, Distance, Vector
from .vincenty import Vincenty

__all__ = [
    "Algorithm",
    "Andoyer",
    "Azimuth",
    "Distance",
    "ELLIPSOIDS",
    "Ellipsoid",
    "GeoCalculator",
    "GeoConfig",
    "Haversine",
    "Position",
    "Vector",
    "Vincenty",
    "describe_position",
    "get_calculator",
    "AIRY_1830",
    "GRS80",
    "IAU_1976",
    "INTERNATIONAL_1924",
    "NAD27",
    "NAD83",
    "WGS84",
]
