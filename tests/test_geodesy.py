import math

import pytest

from almanac import (
    IAU_1976,
    NAD27,
    WGS84,
    Algorithm,
    Azimuth,
    Distance,
    GeoConfig,
    InvalidPositionError,
    NonconvergenceError,
    Position,
    Vector,
    get_calculator,
)
from almanac.angles import dms_to_degrees
from almanac.geodesy import Andoyer, Haversine, Vincenty


def _pos(lat_dms, lon_dms):
    return Position.from_degrees(dms_to_degrees(*lat_dms), dms_to_degrees(*lon_dms))


def _angle_diff(a, b):
    """Smallest difference between two bearings in degrees."""
    return abs((a - b + 180.0) % 360.0 - 180.0)


# Station 1, station 2, forward azimuth, reverse azimuth, distance (metres).
# Sources: NGS INVERSE, Geoscience Australia, Meeus chapter 11.
GEODESICS = {
    "NGS Jones/Smith": (
        WGS84,
        _pos((34, 0, 12.12345), (-111, 0, 12.12345)),
        _pos((33, 22, 11.54321), (-112, 55, 44.33333)),
        dms_to_degrees(249, 3, 16.42370),
        dms_to_degrees(67, 59, 11.16190),
        191872.1190,
    ),
    "NGS Charlie/Sam": (
        NAD27,
        _pos((45, 0, 12.0), (-68, 0, 0.0)),
        _pos((44, 33, 0.0), (-70, 12, 34.789)),
        dms_to_degrees(254, 42, 44.64390),
        dms_to_degrees(73, 9, 21.33150),
        182009.1679,
    ),
    "Geoscience Australia": (
        WGS84,
        _pos((-37, 57, 3.72030), (144, 25, 29.52440)),
        _pos((-37, 39, 10.15610), (143, 55, 35.38390)),
        dms_to_degrees(306, 52, 5.37),
        dms_to_degrees(127, 10, 25.07),
        54972.271,
    ),
    "Paris/Washington": (
        WGS84,
        _pos((48, 50, 11.0), (2, 20, 14.0)),
        _pos((38, 55, 17.0), (-77, 3, 56.0)),
        dms_to_degrees(291, 50, 1.08851),
        dms_to_degrees(51, 47, 36.87089),
        6181631.68521,
    ),
    "Meridional": (
        WGS84,
        _pos((45, 0, 12.0), (-68, 0, 0.0)),
        _pos((4, 33, 0.0), (-68, 0, 0.0)),
        180.0,
        0.0,
        4482191.25533,
    ),
    "Equatorial": (
        WGS84,
        _pos((0, 0, 0.0), (-68, 0, 0.0)),
        _pos((0, 0, 0.0), (23, 0, 0.0)),
        90.0,
        270.0,
        10130073.66219,
    ),
}


@pytest.fixture(params=sorted(GEODESICS))
def geodesic(request):
    return GEODESICS[request.param]


def _config(algorithm, ellipsoid=WGS84, strict=False):
    return GeoConfig(algorithm=algorithm, ellipsoid=ellipsoid, strict=strict)


class TestVincenty:
    """Vincenty against published geodesics."""

    def test_vector(self, geodesic):
        """Test distance and both azimuths."""
        ellipsoid, p1, p2, az12, az21, dist = geodesic
        config = _config(Algorithm.VINCENTY, ellipsoid)

        forward = p1.vector(p2, config)
        reverse = p2.vector(p1, config)

        assert forward.metres == pytest.approx(dist, abs=0.01)
        assert reverse.metres == pytest.approx(dist, abs=0.01)
        assert _angle_diff(forward.azimuth_degrees, az12) < 1e-5
        assert _angle_diff(reverse.azimuth_degrees, az21) < 1e-5

    def test_offset(self, geodesic):
        """Test that the direct solution lands on the other station."""
        ellipsoid, p1, p2, az12, az21, dist = geodesic
        config = _config(Algorithm.VINCENTY, ellipsoid)

        reached = p1.offset(Vector.from_metres_degrees(dist, az12), config)
        assert reached.lat_degrees == pytest.approx(p2.lat_degrees, abs=1e-6)
        assert _angle_diff(reached.lon_degrees, p2.lon_degrees) < 1e-6

        reached = p2.offset(Vector.from_metres_degrees(dist, az21), config)
        assert reached.lat_degrees == pytest.approx(p1.lat_degrees, abs=1e-6)
        assert _angle_diff(reached.lon_degrees, p1.lon_degrees) < 1e-6

    def test_back_azimuth(self, geodesic):
        """Test that the inverse's back azimuth is the reverse forward azimuth."""
        ellipsoid, p1, p2, az12, az21, dist = geodesic
        calculator = get_calculator(_config(Algorithm.VINCENTY, ellipsoid))
        _, _, back = calculator.distance_and_azimuth(p1, p2)
        assert _angle_diff(back.degrees, az21) < 1e-5

    def test_coincident_points(self):
        """Test that the distance from a point to itself is zero."""
        p = Position.from_degrees(51.5, -0.1)
        assert p.distance(p).metres == 0.0

    def test_semi_antipodal(self):
        """Test a geodesic over the North Pole to the far side of the equator."""
        p1 = _pos((0, 25, 0.0), (0, 0, 0.0))
        p2 = Position.from_degrees(0.0, 180.0)
        vector = p1.vector(p2)
        assert vector.metres == pytest.approx(19957858.83538, abs=0.01)
        assert _angle_diff(vector.azimuth_degrees, 0.0) < 1e-5

    def test_antipodal_fallback(self, caplog):
        """Test that exactly antipodal points use the meridional route."""
        p1 = Position.from_degrees(0.0, 0.0)
        p2 = Position.from_degrees(0.0, 180.0)
        with caplog.at_level("WARNING"):
            vector = p1.vector(p2)
        assert vector.metres == pytest.approx(20003931.45846, abs=0.01)
        assert vector.azimuth_degrees == pytest.approx(0.0, abs=1e-12)
        assert "did not converge" in caplog.text

    def test_meridional_over_south_pole(self):
        """Test that a southern pair on opposite meridians routes over the South Pole."""
        p1 = Position.from_degrees(-10.0, 20.0)
        p2 = Position.from_degrees(-10.0, -160.0)
        distance, forward, back = get_calculator().distance_and_azimuth(p1, p2)

        arc = WGS84.meridian_arc(math.radians(-10.0))
        expected = 2.0 * (WGS84.quarter_meridian + arc)
        assert distance.metres == pytest.approx(expected, abs=1e-3)
        assert forward.degrees == pytest.approx(180.0, abs=1e-6)
        assert back.degrees == pytest.approx(180.0, abs=1e-6)

    def test_fallback_routes(self):
        """Test the meridional fallback through each pole."""
        calculator = Vincenty(WGS84)
        quarter = WGS84.quarter_meridian

        south = calculator._fallback(
            Position.from_degrees(-10.0, 20.0), Position.from_degrees(-10.0, -160.0), math.pi
        )
        arc = WGS84.meridian_arc(math.radians(-10.0))
        assert south[0].metres == pytest.approx(2.0 * (quarter + arc), abs=1e-6)
        assert south[1].degrees == pytest.approx(180.0)
        assert south[2].degrees == pytest.approx(180.0)

        north = calculator._fallback(
            Position.from_degrees(0.0, 0.0), Position.from_degrees(0.0, 180.0), math.pi
        )
        assert north[0].metres == pytest.approx(2.0 * quarter, abs=1e-6)
        assert north[1].degrees == 0.0

    def test_nearly_antipodal_uses_andoyer(self):
        """Test the fallback for nearly antipodal points off opposite meridians."""
        p1 = Position.from_degrees(0.0, 0.0)
        p2 = Position.from_degrees(0.5, 179.5)
        estimate = Andoyer(WGS84).distance(p1, p2)
        assert p1.distance(p2).metres == pytest.approx(estimate.metres, rel=1e-3)

    def test_strict_raises(self):
        """Test that strict mode refuses the fallback."""
        p1 = Position.from_degrees(0.0, 0.0)
        p2 = Position.from_degrees(0.0, 180.0)
        with pytest.raises(NonconvergenceError) as info:
            p1.distance(p2, _config(Algorithm.VINCENTY, strict=True))
        distance = info.value.best_estimate[0]
        assert distance.metres == pytest.approx(20003931.45846, abs=0.01)
        assert isinstance(info.value, ArithmeticError)


class TestAndoyer:
    """Andoyer's closed-form approximation."""

    def test_distance(self, geodesic):
        """Test distance against the published value."""
        ellipsoid, p1, p2, az12, az21, dist = geodesic
        config = _config(Algorithm.ANDOYER, ellipsoid)
        assert p1.distance(p2, config).metres == pytest.approx(dist, rel=2e-5)
        assert p2.distance(p1, config).metres == pytest.approx(dist, rel=2e-5)

    def test_antipodal(self):
        """Test that antipodal points give half a meridian."""
        config = _config(Algorithm.ANDOYER)
        p1 = Position.from_degrees(0.0, 0.0)
        p2 = Position.from_degrees(0.0, 180.0)
        assert p1.distance(p2, config).metres == pytest.approx(20003931.45846, abs=0.01)

    def test_offset_inverts_vector(self, geodesic):
        """Test that offsetting along the computed vector reaches the target."""
        ellipsoid, p1, p2, az12, az21, dist = geodesic
        config = _config(Algorithm.ANDOYER, ellipsoid)
        reached = p1.offset(p1.vector(p2, config), config)
        assert reached.lat_degrees == pytest.approx(p2.lat_degrees, abs=1e-4)
        assert _angle_diff(reached.lon_degrees, p2.lon_degrees) < 1e-4

    def test_zero_offset(self):
        """Test that a zero vector stays put."""
        p = Position.from_degrees(10.0, 20.0)
        config = _config(Algorithm.ANDOYER)
        assert p.offset(Vector(Distance.ZERO, Azimuth(0.0)), config) == p


class TestHaversine:
    """Spherical approximation."""

    def test_vector(self, geodesic):
        """Test distance and azimuth within the spherical error."""
        ellipsoid, p1, p2, az12, az21, dist = geodesic
        config = _config(Algorithm.HAVERSINE, ellipsoid)
        forward = p1.vector(p2, config)
        reverse = p2.vector(p1, config)
        assert forward.metres == pytest.approx(dist, rel=0.006)
        assert reverse.metres == pytest.approx(dist, rel=0.006)
        assert _angle_diff(forward.azimuth_degrees, az12) < 2.16
        assert _angle_diff(reverse.azimuth_degrees, az21) < 2.16

    def test_offset_inverts_vector(self, geodesic):
        """Test that on the sphere the direct problem inverts the inverse."""
        ellipsoid, p1, p2, az12, az21, dist = geodesic
        config = _config(Algorithm.HAVERSINE, ellipsoid)
        reached = p1.offset(p1.vector(p2, config), config)
        assert reached.lat_degrees == pytest.approx(p2.lat_degrees, abs=1e-9)
        assert _angle_diff(reached.lon_degrees, p2.lon_degrees) < 1e-9

    def test_lat_distance_is_meridian_distance(self, geodesic):
        """Test the shortcut against a full calculation."""
        ellipsoid, p1, p2, *_ = geodesic
        config = _config(Algorithm.HAVERSINE, ellipsoid)
        reference = p1.distance(Position(p2.lat, p1.lon), config)
        assert p1.lat_distance(p2.lat, config).metres == pytest.approx(reference.metres, rel=1e-9)

    def test_radius_is_mean_radius(self):
        """Test that the sphere has the IUGG mean radius."""
        assert Haversine(WGS84).radius == pytest.approx(6371008.7714, abs=1e-3)


class TestLatDistance:
    """Meridian distances on the ellipsoid."""

    def test_matches_vincenty(self, geodesic):
        """Test the meridian arc against a full Vincenty solution."""
        ellipsoid, p1, p2, *_ = geodesic
        config = _config(Algorithm.VINCENTY, ellipsoid)
        reference = p1.distance(Position(p2.lat, p1.lon), config)
        assert p1.lat_distance(p2.lat, config).metres == pytest.approx(reference.metres, abs=1e-3)

    def test_quarter_meridian(self):
        """Test the equator-to-pole distance on WGS84."""
        assert WGS84.quarter_meridian == pytest.approx(10001965.729, abs=1e-3)


class TestCalculatorSelection:
    """Choosing a calculator through GeoConfig."""

    def test_default_is_vincenty_wgs84(self):
        calculator = get_calculator()
        assert isinstance(calculator, Vincenty)
        assert calculator.ellipsoid == WGS84

    @pytest.mark.parametrize(
        "algorithm,cls",
        [(Algorithm.HAVERSINE, Haversine), (Algorithm.ANDOYER, Andoyer), (Algorithm.VINCENTY, Vincenty)],
    )
    def test_algorithm(self, algorithm, cls):
        calculator = get_calculator(GeoConfig(algorithm=algorithm, ellipsoid=NAD27))
        assert isinstance(calculator, cls)
        assert calculator.ellipsoid == NAD27

    def test_calculators_are_shared(self):
        """Test that equal configurations share one calculator."""
        assert get_calculator(GeoConfig()) is get_calculator(GeoConfig())

    def test_algorithms_agree_roughly(self):
        """Test that all algorithms give similar answers over a long route."""
        p1 = Position.from_degrees(51.4778, -0.0014)
        p2 = Position.from_degrees(40.6892, -74.0445)
        distances = [p1.distance(p2, GeoConfig(algorithm=a)).metres for a in Algorithm]
        assert max(distances) - min(distances) < 0.006 * max(distances)


class TestPosition:
    """The Position value type."""

    def test_antimeridian_normalised(self):
        p = Position.from_degrees(10.0, 180.0)
        assert p.lon_degrees == pytest.approx(-180.0)
        assert p == Position.from_degrees(10.0, -180.0)

    def test_longitude_validated(self):
        with pytest.raises(InvalidPositionError, match="Longitude 190"):
            Position.from_degrees(10.0, 190.0)
        with pytest.raises(InvalidPositionError):
            Position.from_degrees(0.0, -180.5)
        with pytest.raises(InvalidPositionError):
            Position(0.0, 10.0)

    def test_offset_across_antimeridian(self):
        """Test that offsets past 180° come back as in-range positions."""
        start = Position.from_degrees(0.0, 179.5)
        for algorithm in Algorithm:
            reached = start.offset(Vector.from_metres_degrees(111_319.5, 90.0), GeoConfig(algorithm=algorithm))
            assert reached.lon_degrees == pytest.approx(-179.5, abs=0.01)

    def test_latitude_validated(self):
        with pytest.raises(InvalidPositionError):
            Position.from_degrees(91.0, 0.0)
        with pytest.raises(InvalidPositionError):
            Position(2.0, 0.0)

    def test_pole_rounding_clamped(self):
        """Test that a latitude a rounding hair past the pole is accepted."""
        p = Position(math.pi / 2.0 + 1e-15, 0.0)
        assert p.lat == math.pi / 2.0

    def test_non_finite_rejected(self):
        with pytest.raises(InvalidPositionError):
            Position(float("nan"), 0.0)

    def test_geocentric_latitude(self):
        """Test the geocentric latitude; the 45° value is from Meeus chapter 11."""
        for lat in range(0, 91, 5):
            p = Position.from_degrees(float(lat), 0.0)
            delta = lat - math.degrees(p.geocentric_lat(IAU_1976))
            assert 0.0 <= delta <= 0.1925
            if lat == 45:
                assert delta == pytest.approx(0.192425, abs=1e-6)

    def test_format(self):
        p = Position.from_degrees(-33.5, 151.25)
        assert p.format() == "33°30'00.00\"S 151°15'00.00\"E"

    def test_equality_and_hash(self):
        a = Position.from_degrees(10.0, 20.0)
        b = Position.from_degrees(10.0, 20.0)
        assert a == b
        assert hash(a) == hash(b)
