"""Vincenty's iterative ellipsoidal geodesics."""

import logging
import math

from ..angles import norm_pi
from ..errors import NonconvergenceError
from .andoyer import Andoyer
from .calculator import Algorithm, GeoCalculator
from .units import Azimuth, Distance, Vector

log = logging.getLogger(__name__)

TOLERANCE = 1e-12
MAX_ITERATIONS = 200


class Vincenty(GeoCalculator):
    """Vincenty's inverse and direct formulae (Survey Review, 1975).

    Accurate to well under a millimetre, but the inverse iteration fails
    to converge for nearly antipodal points. In that case a warning is
    logged and a fallback is returned: the meridional route through the
    nearer pole when the longitudes are opposite, otherwise the Andoyer
    estimate. With ``strict`` set, NonconvergenceError is raised instead.
    """

    algorithm = Algorithm.VINCENTY

    def distance_and_azimuth(self, p1, p2):
        L = norm_pi(p2.lon - p1.lon)
        if p1.lat == p2.lat and L == 0.0:
            return Distance(0.0), Azimuth(0.0), Azimuth(0.0)

        result = self._inverse(p1.lat, p2.lat, L)
        if result is not None:
            return result

        fallback = self._fallback(p1, p2, L)
        if self.strict:
            raise NonconvergenceError("Vincenty inverse", MAX_ITERATIONS, fallback)
        log.warning(
            "Vincenty inverse did not converge between %s and %s; using %s",
            p1,
            p2,
            "meridional route" if _opposite(L) else "Andoyer estimate",
        )
        return fallback

    def _inverse(self, lat1: float, lat2: float, L: float):
        a = self.ellipsoid.semi_major_axis
        b = self.ellipsoid.semi_minor_axis
        f = self.ellipsoid.flattening

        U1 = math.atan((1.0 - f) * math.tan(lat1))
        U2 = math.atan((1.0 - f) * math.tan(lat2))
        sinU1, cosU1 = math.sin(U1), math.cos(U1)
        sinU2, cosU2 = math.sin(U2), math.cos(U2)

        lam = L
        for iteration in range(MAX_ITERATIONS):
            sin_lam, cos_lam = math.sin(lam), math.cos(lam)
            sin_sigma = math.hypot(cosU2 * sin_lam, cosU1 * sinU2 - sinU1 * cosU2 * cos_lam)
            if sin_sigma == 0.0:
                # Coincident points.
                return Distance(0.0), Azimuth(0.0), Azimuth(0.0)
            cos_sigma = sinU1 * sinU2 + cosU1 * cosU2 * cos_lam
            sigma = math.atan2(sin_sigma, cos_sigma)
            sin_alpha = cosU1 * cosU2 * sin_lam / sin_sigma
            cos2_alpha = 1.0 - sin_alpha * sin_alpha
            if cos2_alpha != 0.0:
                cos_2sigma_m = cos_sigma - 2.0 * sinU1 * sinU2 / cos2_alpha
            else:
                # Equatorial line.
                cos_2sigma_m = 0.0
            C = f / 16.0 * cos2_alpha * (4.0 + f * (4.0 - 3.0 * cos2_alpha))
            lam_prev = lam
            lam = L + (1.0 - C) * f * sin_alpha * (
                sigma
                + C * sin_sigma * (cos_2sigma_m + C * cos_sigma * (-1.0 + 2.0 * cos_2sigma_m**2))
            )
            if abs(lam) > math.pi:
                log.debug("Vincenty inverse diverged after %d iterations", iteration + 1)
                return None
            if abs(lam - lam_prev) < TOLERANCE:
                break
        else:
            log.debug("Vincenty inverse hit the iteration limit")
            return None

        u2 = cos2_alpha * (a * a - b * b) / (b * b)
        A = 1.0 + u2 / 16384.0 * (4096.0 + u2 * (-768.0 + u2 * (320.0 - 175.0 * u2)))
        B = u2 / 1024.0 * (256.0 + u2 * (-128.0 + u2 * (74.0 - 47.0 * u2)))
        delta_sigma = (
            B
            * sin_sigma
            * (
                cos_2sigma_m
                + B
                / 4.0
                * (
                    cos_sigma * (-1.0 + 2.0 * cos_2sigma_m**2)
                    - B / 6.0 * cos_2sigma_m * (-3.0 + 4.0 * sin_sigma**2) * (-3.0 + 4.0 * cos_2sigma_m**2)
                )
            )
        )
        s = b * A * (sigma - delta_sigma)

        alpha1 = math.atan2(cosU2 * sin_lam, cosU1 * sinU2 - sinU1 * cosU2 * cos_lam)
        alpha2 = math.atan2(cosU1 * sin_lam, -sinU1 * cosU2 + cosU1 * sinU2 * cos_lam)
        return Distance(s), Azimuth(alpha1), Azimuth(alpha2 + math.pi)

    def _fallback(self, p1, p2, L: float):
        if _opposite(L):
            arc = self.ellipsoid.meridian_arc
            quarter = self.ellipsoid.quarter_meridian
            if p1.lat + p2.lat >= 0.0:
                s = (quarter - arc(p1.lat)) + (quarter - arc(p2.lat))
                return Distance(s), Azimuth(0.0), Azimuth(0.0)
            s = (quarter + arc(p1.lat)) + (quarter + arc(p2.lat))
            return Distance(s), Azimuth(math.pi), Azimuth(math.pi)
        return Andoyer(self.ellipsoid).distance_and_azimuth(p1, p2)

    def offset(self, p1, vector: Vector):
        from .position import Position

        a = self.ellipsoid.semi_major_axis
        b = self.ellipsoid.semi_minor_axis
        f = self.ellipsoid.flattening
        s = vector.metres
        alpha1 = vector.azimuth.radians

        sin_alpha1, cos_alpha1 = math.sin(alpha1), math.cos(alpha1)
        tanU1 = (1.0 - f) * math.tan(p1.lat)
        cosU1 = 1.0 / math.sqrt(1.0 + tanU1 * tanU1)
        sinU1 = tanU1 * cosU1
        sigma1 = math.atan2(tanU1, cos_alpha1)
        sin_alpha = cosU1 * sin_alpha1
        cos2_alpha = 1.0 - sin_alpha * sin_alpha
        u2 = cos2_alpha * (a * a - b * b) / (b * b)
        A = 1.0 + u2 / 16384.0 * (4096.0 + u2 * (-768.0 + u2 * (320.0 - 175.0 * u2)))
        B = u2 / 1024.0 * (256.0 + u2 * (-128.0 + u2 * (74.0 - 47.0 * u2)))

        sigma = s / (b * A)
        for _ in range(MAX_ITERATIONS):
            cos_2sigma_m = math.cos(2.0 * sigma1 + sigma)
            sin_sigma = math.sin(sigma)
            cos_sigma = math.cos(sigma)
            delta_sigma = (
                B
                * sin_sigma
                * (
                    cos_2sigma_m
                    + B
                    / 4.0
                    * (
                        cos_sigma * (-1.0 + 2.0 * cos_2sigma_m**2)
                        - B / 6.0 * cos_2sigma_m * (-3.0 + 4.0 * sin_sigma**2) * (-3.0 + 4.0 * cos_2sigma_m**2)
                    )
                )
            )
            sigma_prev = sigma
            sigma = s / (b * A) + delta_sigma
            if abs(sigma - sigma_prev) < TOLERANCE:
                break
        else:
            if self.strict:
                raise NonconvergenceError("Vincenty direct", MAX_ITERATIONS, sigma)
            log.warning("Vincenty direct did not converge; using the last estimate")

        sin_sigma = math.sin(sigma)
        cos_sigma = math.cos(sigma)
        cos_2sigma_m = math.cos(2.0 * sigma1 + sigma)
        tmp = sinU1 * sin_sigma - cosU1 * cos_sigma * cos_alpha1
        lat2 = math.atan2(
            sinU1 * cos_sigma + cosU1 * sin_sigma * cos_alpha1,
            (1.0 - f) * math.hypot(sin_alpha, tmp),
        )
        lam = math.atan2(sin_sigma * sin_alpha1, cosU1 * cos_sigma - sinU1 * sin_sigma * cos_alpha1)
        C = f / 16.0 * cos2_alpha * (4.0 + f * (4.0 - 3.0 * cos2_alpha))
        L = lam - (1.0 - C) * f * sin_alpha * (
            sigma + C * sin_sigma * (cos_2sigma_m + C * cos_sigma * (-1.0 + 2.0 * cos_2sigma_m**2))
        )
        return Position._normalised(lat2, p1.lon + L)


def _opposite(L: float) -> bool:
    return abs(abs(L) - math.pi) < 1e-9
