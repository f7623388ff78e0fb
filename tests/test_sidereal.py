import math

import pytest

from almanac import Instant, Observation, ObsField, Position
from almanac.angles import ARCSEC, norm_hours
from almanac.ephemeris.nutation import mean_obliquity, nutation, true_obliquity


def _hours(h, m, s):
    return h + m / 60.0 + s / 3600.0


def _observation(year, month, day, ut_hours=0.0, position=None):
    return Observation(Instant.from_ymd(year, month, day + ut_hours / 24.0), position)


class TestSiderealTime:
    """Greenwich sidereal time."""

    def test_gmst_at_midnight(self):
        """Test Meeus example 12.a."""
        obs = _observation(1987, 4, 10)
        assert obs.get(ObsField.GMST_INSTANT) == pytest.approx(13.1795463333, abs=1e-6)

    def test_gmst_at_instant(self):
        """Test Meeus example 12.b."""
        obs = _observation(1987, 4, 10, 19.0 + 21.0 / 60.0)
        assert obs.get(ObsField.GMST_INSTANT) == pytest.approx(_hours(8, 34, 57.0896), abs=1e-6)

    def test_gmst_practical_astronomy(self):
        """Test the Duffett-Smith example."""
        obs = _observation(1980, 4, 22, 14.614353)
        assert obs.get(ObsField.GMST_INSTANT) == pytest.approx(4.668119, abs=1e-5)

    def test_gast(self):
        """Test apparent sidereal time, Meeus example 12.a."""
        obs = _observation(1987, 4, 10)
        expected = _hours(13, 10, 46.1351)
        assert obs.get(ObsField.GAST_INSTANT) == pytest.approx(expected, abs=1e-6)
        assert obs.get(ObsField.GAST_MIDNIGHT) == pytest.approx(expected, abs=1e-6)
        assert Instant.from_ymd(1987, 4, 10.0).gast() == pytest.approx(expected, abs=1e-6)

    def test_gast_midnight_ignores_time_of_day(self):
        """Test that the midnight fields use 0h UT of the day."""
        obs = _observation(1988, 3, 20, 15.5)
        assert obs.get(ObsField.GAST_MIDNIGHT) == pytest.approx(177.74208 / 15.0, abs=2e-6)

    def test_gmst_midnight(self):
        """Test mean sidereal time at 0h UT of the observation's day."""
        obs = _observation(1987, 4, 10, 19.0 + 21.0 / 60.0)
        assert obs.get(ObsField.GMST_MIDNIGHT) == pytest.approx(13.1795463333, abs=1e-6)

    def test_local_sidereal_time(self):
        """Test that local time is Greenwich time plus east longitude."""
        position = Position.from_degrees(38.9213889, -77.0655556)
        obs = _observation(1987, 4, 10, 19.0 + 21.0 / 60.0, position)
        gast = obs.get(ObsField.GAST_INSTANT)
        expected = norm_hours(gast - 77.0655556 / 15.0)
        assert obs.get(ObsField.LOCAL_SIDEREAL_TIME) == pytest.approx(expected, abs=1e-12)

    def test_range(self):
        """Test that sidereal times fall within [0, 24)."""
        for day in range(1, 29):
            hours = Instant.from_ymd(2001, 2, float(day)).gmst()
            assert 0.0 <= hours < 24.0


class TestObliquity:
    """Obliquity of the ecliptic and nutation."""

    def test_mean_obliquity(self):
        """Test the mean obliquity at the end of 1979."""
        obs = _observation(1979, 12, 31.0)
        assert math.degrees(obs.get(ObsField.MEAN_OBLIQUITY)) == pytest.approx(23.441893, abs=1e-6)

    def test_true_obliquity(self):
        """Test Meeus example 22.a."""
        obs = _observation(1987, 4, 10.0)
        assert math.degrees(obs.get(ObsField.TRUE_OBLIQUITY)) == pytest.approx(23.4435694, abs=1e-6)

    def test_nutation_series(self):
        """Test Meeus example 22.a against the bare functions."""
        t = -0.127296372348
        dpsi, deps = nutation(t)
        assert dpsi / ARCSEC == pytest.approx(-3.788, abs=0.002)
        assert deps / ARCSEC == pytest.approx(9.443, abs=0.002)
        assert math.degrees(mean_obliquity(t)) == pytest.approx(23.44094639, abs=1e-6)
        assert true_obliquity(t) == pytest.approx(mean_obliquity(t) + deps)

    def test_observation_fields_agree(self):
        """Test that cached observation fields match the functions."""
        obs = _observation(1987, 4, 10.0)
        t = obs.instant.centuries_since_j2000
        dpsi, deps = nutation(t)
        assert obs.get(ObsField.NUTATION_IN_LONGITUDE) == pytest.approx(dpsi)
        assert obs.get(ObsField.NUTATION_IN_OBLIQUITY) == pytest.approx(deps)
