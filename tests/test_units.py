import math

import pytest

from almanac import Azimuth, Distance, Vector
from almanac.angles import (
    dms_to_degrees,
    format_dms,
    format_hms,
    hms_to_degrees,
    norm_2pi,
    norm_hours,
    norm_pi,
)


class TestDistance:
    """Distance conversion and formatting."""

    def test_conversions(self):
        assert Distance.from_nm(1.0).metres == 1852.0
        assert Distance.from_feet(1000.0).metres == pytest.approx(304.8)
        assert Distance.from_km(2.5).metres == 2500.0
        assert Distance(1852.0).nm == 1.0

    def test_format_m(self):
        assert Distance(1234.5).format_m() == "1,234.5 m"
        assert Distance(1000.0).format_m() == "1,000 m"

    def test_format_nm(self):
        assert Distance.from_nm(12.3).format_nm() == "12.3 nm"
        assert str(Distance.from_nm(250.0)) == "250 nm"

    @pytest.mark.parametrize(
        "distance,text",
        [
            (Distance.from_feet(625.0), "625 feet"),
            (Distance.from_nm(4.9), "4.9 nm"),
            (Distance.from_nm(252.0), "252 nm"),
        ],
    )
    def test_describe_nautical(self, distance, text):
        assert distance.describe_nautical() == text

    def test_ordering_and_sum(self):
        assert Distance(1.0) < Distance(2.0)
        assert Distance(1.0) + Distance(2.0) == Distance(3.0)
        assert Distance.ZERO.metres == 0.0


class TestAzimuth:
    """Bearings."""

    def test_normalised(self):
        assert Azimuth(-math.pi / 2.0).degrees == pytest.approx(270.0)
        assert Azimuth(5.0 * math.pi).degrees == pytest.approx(180.0)

    def test_reverse(self):
        assert Azimuth.from_degrees(45.0).reverse().degrees == pytest.approx(225.0)
        assert Azimuth.from_degrees(270.0).reverse().degrees == pytest.approx(90.0)

    def test_format(self):
        assert Azimuth.from_degrees(90.0).format() == "90°00'00.00\""

    def test_vector(self):
        vector = Vector.from_metres_degrees(1000.0, 30.0)
        assert vector.metres == 1000.0
        assert vector.azimuth_degrees == pytest.approx(30.0)


class TestAngles:
    """Angle helpers."""

    def test_norm_2pi(self):
        assert norm_2pi(-0.5) == pytest.approx(2.0 * math.pi - 0.5)
        assert norm_2pi(7.0) == pytest.approx(7.0 - 2.0 * math.pi)
        assert 0.0 <= norm_2pi(-1e-17) < 2.0 * math.pi

    def test_norm_pi(self):
        assert norm_pi(3.0 * math.pi / 2.0) == pytest.approx(-math.pi / 2.0)
        assert norm_pi(0.25) == pytest.approx(0.25)

    def test_norm_hours(self):
        assert norm_hours(25.5) == pytest.approx(1.5)
        assert norm_hours(-1.0) == pytest.approx(23.0)

    def test_sexagesimal_input(self):
        assert dms_to_degrees(0, -30, 0) == -0.5
        assert dms_to_degrees(-10, 30, 0) == -10.5
        assert hms_to_degrees(23, 9, 16.641) == pytest.approx(347.3193375)

    def test_sexagesimal_output(self):
        assert format_dms(-0.5) == "-0°30'00.0\""
        assert format_hms(13.5) == "13h30m00.0s"
        assert format_dms(10.0 - 1e-9) == "10°00'00.0\""
