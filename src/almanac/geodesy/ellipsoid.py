"""Reference ellipsoids."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Ellipsoid:
    name: str
    semi_major_axis: float
    flattening: float

    @property
    def semi_minor_axis(self) -> float:
        return self.semi_major_axis * (1.0 - self.flattening)

    @property
    def eccentricity_squared(self) -> float:
        return self.flattening * (2.0 - self.flattening)

    @property
    def mean_radius(self) -> float:
        """IUGG mean radius (2a + b) / 3, in metres."""
        return (2.0 * self.semi_major_axis + self.semi_minor_axis) / 3.0

    def meridian_arc(self, lat: float) -> float:
        """Length of the meridian from the equator to a latitude.

        Uses Helmert's series in the third flattening n, good to well
        under a millimetre on terrestrial ellipsoids.

        Args:
            lat: Geodetic latitude in radians

        Returns:
            Signed arc length in metres (negative south of the equator)
        """
        a = self.semi_major_axis
        b = self.semi_minor_axis
        n = (a - b) / (a + b)
        n2 = n * n
        n3 = n2 * n
        n4 = n3 * n
        return (a + b) / 2.0 * (
            (1.0 + n2 / 4.0 + n4 / 64.0) * lat
            - (1.5 * n - 3.0 / 16.0 * n3) * math.sin(2.0 * lat)
            + (15.0 / 16.0 * n2 - 15.0 / 64.0 * n4) * math.sin(4.0 * lat)
            - 35.0 / 48.0 * n3 * math.sin(6.0 * lat)
            + 315.0 / 512.0 * n4 * math.sin(8.0 * lat)
        )

    @property
    def quarter_meridian(self) -> float:
        """Distance from the equator to a pole, in metres."""
        return self.meridian_arc(math.pi / 2.0)


WGS84 = Ellipsoid("WGS84", 6378137.0, 1.0 / 298.257223563)
GRS80 = Ellipsoid("GRS80", 6378137.0, 1.0 / 298.257222101)
NAD83 = Ellipsoid("NAD83", 6378137.0, 1.0 / 298.257222101)
# Clarke 1866, the figure underlying NAD27.
NAD27 = Ellipsoid("NAD27", 6378206.4, 1.0 - 6356583.8 / 6378206.4)
AIRY_1830 = Ellipsoid("AIRY_1830", 6377563.396, 1.0 - 6356256.909 / 6377563.396)
INTERNATIONAL_1924 = Ellipsoid("INTERNATIONAL_1924", 6378388.0, 1.0 / 297.0)
IAU_1976 = Ellipsoid("IAU_1976", 6378140.0, 1.0 / 298.257)

ELLIPSOIDS = {
    e.name: e
    for e in (WGS84, GRS80, NAD83, NAD27, AIRY_1830, INTERNATIONAL_1924, IAU_1976)
}
