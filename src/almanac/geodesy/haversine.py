"""Spherical geodesy with the haversine formula."""

import math

from ..angles import norm_pi, safe_asin
from .calculator import Algorithm, GeoCalculator
from .units import Azimuth, Distance, Vector


def _bearing(lat1: float, lat2: float, dlon: float) -> float:
    return math.atan2(
        math.sin(dlon) * math.cos(lat2),
        math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon),
    )


class Haversine(GeoCalculator):
    """Great-circle calculations on a sphere of the ellipsoid's mean radius.

    Closed form and cheap; errors reach about 0.5% because the Earth is
    not a sphere.
    """

    algorithm = Algorithm.HAVERSINE

    @property
    def radius(self) -> float:
        return self.ellipsoid.mean_radius

    def distance_and_azimuth(self, p1, p2):
        dlat = p2.lat - p1.lat
        dlon = norm_pi(p2.lon - p1.lon)
        a = math.sin(dlat / 2.0) ** 2 + math.cos(p1.lat) * math.cos(p2.lat) * math.sin(dlon / 2.0) ** 2
        a = min(1.0, a)
        c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))

        forward = _bearing(p1.lat, p2.lat, dlon)
        back = _bearing(p2.lat, p1.lat, -dlon)
        return Distance(self.radius * c), Azimuth(forward), Azimuth(back)

    def offset(self, p1, vector: Vector):
        from .position import Position

        delta = vector.metres / self.radius
        theta = vector.azimuth.radians
        sin_lat1 = math.sin(p1.lat)
        cos_lat1 = math.cos(p1.lat)
        lat2 = safe_asin(sin_lat1 * math.cos(delta) + cos_lat1 * math.sin(delta) * math.cos(theta))
        lon2 = p1.lon + math.atan2(
            math.sin(theta) * math.sin(delta) * cos_lat1,
            math.cos(delta) - sin_lat1 * math.sin(lat2),
        )
        return Position._normalised(lat2, lon2)

    def lat_distance(self, p1, lat: float) -> Distance:
        return Distance(self.radius * abs(lat - p1.lat))
