"""Andoyer-Lambert closed-form ellipsoidal geodesics."""

import math

from ..angles import norm_pi, safe_asin
from .calculator import Algorithm, GeoCalculator
from .units import Azimuth, Distance, Vector

# Passes of the distance rescaling in the direct solution.
_RESCALE_PASSES = 2


class Andoyer(GeoCalculator):
    """Andoyer's first-order flattening correction to the great-circle distance.

    Formula from Meeus, Astronomical Algorithms, chapter 11. Good to about
    fifty metres over intercontinental distances with no iteration.
    Azimuths are spherical, computed on the geodetic latitudes.
    """

    algorithm = Algorithm.ANDOYER

    def _andoyer_distance(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        a = self.ellipsoid.semi_major_axis
        fl = self.ellipsoid.flattening

        F = (lat1 + lat2) / 2.0
        G = (lat1 - lat2) / 2.0
        lam = norm_pi(lon1 - lon2) / 2.0

        sin2G, cos2G = math.sin(G) ** 2, math.cos(G) ** 2
        sin2F, cos2F = math.sin(F) ** 2, math.cos(F) ** 2
        sin2L, cos2L = math.sin(lam) ** 2, math.cos(lam) ** 2

        S = sin2G * cos2L + cos2F * sin2L
        C = cos2G * cos2L + sin2F * sin2L
        if S <= 0.0:
            return 0.0
        if C < 1e-12:
            # Antipodal: any meridian is a geodesic.
            return 2.0 * self.ellipsoid.quarter_meridian

        omega = math.atan(math.sqrt(S / C))
        R = math.sqrt(S * C) / omega
        D = 2.0 * omega * a
        H1 = (3.0 * R - 1.0) / (2.0 * C)
        H2 = (3.0 * R + 1.0) / (2.0 * S)
        return D * (1.0 + fl * H1 * sin2F * cos2G - fl * H2 * cos2F * sin2G)

    def distance_and_azimuth(self, p1, p2):
        s = self._andoyer_distance(p1.lat, p1.lon, p2.lat, p2.lon)
        if s == 0.0:
            return Distance(0.0), Azimuth(0.0), Azimuth(0.0)

        dlon = norm_pi(p2.lon - p1.lon)
        forward = math.atan2(
            math.sin(dlon) * math.cos(p2.lat),
            math.cos(p1.lat) * math.sin(p2.lat) - math.sin(p1.lat) * math.cos(p2.lat) * math.cos(dlon),
        )
        back = math.atan2(
            math.sin(-dlon) * math.cos(p1.lat),
            math.cos(p2.lat) * math.sin(p1.lat) - math.sin(p2.lat) * math.cos(p1.lat) * math.cos(dlon),
        )
        return Distance(s), Azimuth(forward), Azimuth(back)

    def _spherical_offset(self, p1, delta: float, theta: float) -> tuple[float, float]:
        sin_lat1 = math.sin(p1.lat)
        cos_lat1 = math.cos(p1.lat)
        lat2 = safe_asin(sin_lat1 * math.cos(delta) + cos_lat1 * math.sin(delta) * math.cos(theta))
        lon2 = p1.lon + math.atan2(
            math.sin(theta) * math.sin(delta) * cos_lat1,
            math.cos(delta) - sin_lat1 * math.sin(lat2),
        )
        return lat2, lon2

    def offset(self, p1, vector: Vector):
        """Step along the sphere, then rescale the step so Andoyer's distance matches.

        The initial angular step uses the radius of curvature along the
        starting azimuth.
        """
        from .position import Position

        s = vector.metres
        theta = vector.azimuth.radians
        if s == 0.0:
            return p1

        a = self.ellipsoid.semi_major_axis
        e2 = self.ellipsoid.eccentricity_squared
        w = 1.0 - e2 * math.sin(p1.lat) ** 2
        m = a * (1.0 - e2) / w**1.5
        n = a / math.sqrt(w)
        radius = m * n / (m * math.sin(theta) ** 2 + n * math.cos(theta) ** 2)

        delta = s / radius
        lat2, lon2 = self._spherical_offset(p1, delta, theta)
        for _ in range(_RESCALE_PASSES):
            estimate = self._andoyer_distance(p1.lat, p1.lon, lat2, lon2)
            if estimate <= 0.0:
                break
            delta *= s / estimate
            lat2, lon2 = self._spherical_offset(p1, delta, theta)
        return Position._normalised(lat2, lon2)
