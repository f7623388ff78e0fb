"""Geographic positions on the Earth's surface."""

import math
from dataclasses import dataclass

from ..angles import HALFPI, format_dms, norm_pi
from ..errors import InvalidPositionError
from .ellipsoid import WGS84, Ellipsoid
from .units import Distance, Vector

# Coordinates a rounding hair past a pole or the antimeridian are accepted.
_SLOP = 1e-12


@dataclass(frozen=True, order=True)
class Position:
    """A point on the Earth's surface.

    Latitude and longitude are held in radians. Latitude must lie within
    [-π/2, π/2] and longitude within [-π, π]; longitude is then normalised
    into [-π, π).

    The geodesic methods delegate to the calculator selected by a
    GeoConfig; when none is passed, Vincenty on WGS84 is used.
    """

    lat: float
    lon: float

    def __post_init__(self):
        if not (math.isfinite(self.lat) and math.isfinite(self.lon)):
            raise InvalidPositionError("Coordinate", math.degrees(self.lat))
        if abs(self.lat) > HALFPI + _SLOP:
            raise InvalidPositionError("Latitude", math.degrees(self.lat))
        if abs(self.lon) > math.pi + _SLOP:
            raise InvalidPositionError("Longitude", math.degrees(self.lon))
        object.__setattr__(self, "lat", max(-HALFPI, min(HALFPI, self.lat)))
        object.__setattr__(self, "lon", norm_pi(self.lon))

    @classmethod
    def from_degrees(cls, lat: float, lon: float) -> "Position":
        """Create a Position from latitude and longitude in degrees."""
        if abs(lat) > 90.0:
            raise InvalidPositionError("Latitude", lat)
        if abs(lon) > 180.0:
            raise InvalidPositionError("Longitude", lon)
        return cls(math.radians(lat), math.radians(lon))

    @classmethod
    def _normalised(cls, lat: float, lon: float) -> "Position":
        """Create a Position from a computed longitude of any size."""
        return cls(lat, norm_pi(lon))

    @property
    def lat_degrees(self) -> float:
        return math.degrees(self.lat)

    @property
    def lon_degrees(self) -> float:
        return math.degrees(self.lon)

    def geocentric_lat(self, ellipsoid: Ellipsoid = WGS84) -> float:
        """Geocentric latitude of this point on an ellipsoid, in radians."""
        return math.atan2(
            (1.0 - ellipsoid.eccentricity_squared) * math.sin(self.lat),
            math.cos(self.lat),
        )

    # Geodesy, delegated to the configured calculator.

    def distance(self, other: "Position", config=None) -> Distance:
        """Distance to another position."""
        return _calculator(config).distance(self, other)

    def azimuth(self, other: "Position", config=None):
        """Initial bearing towards another position."""
        return _calculator(config).azimuth(self, other)

    def vector(self, other: "Position", config=None) -> Vector:
        """Displacement from this position to another."""
        return _calculator(config).vector(self, other)

    def offset(self, vector: Vector, config=None) -> "Position":
        """The position reached by travelling along a vector from here."""
        return _calculator(config).offset(self, vector)

    def lat_distance(self, lat: float, config=None) -> Distance:
        """Distance along the meridian from here to a latitude, in radians."""
        return _calculator(config).lat_distance(self, lat)

    def format(self) -> str:
        ns = "N" if self.lat >= 0 else "S"
        ew = "E" if self.lon >= 0 else "W"
        return (
            f"{format_dms(abs(self.lat_degrees), places=2)}{ns} "
            f"{format_dms(abs(self.lon_degrees), places=2)}{ew}"
        )

    def __str__(self) -> str:
        return self.format()


def _calculator(config):
    from .calculator import get_calculator

    return get_calculator(config)
