from datetime import datetime, timezone

import pytest

from almanac import InvalidArgumentError, InvalidDateError, Instant
from almanac.timekeeping import (
    J1900,
    JD_UNIX,
    calendar_to_julian,
    days_in_month,
    julian_to_calendar,
)
from almanac.timekeeping.calendar import is_leap_year


@pytest.mark.parametrize(
    "year,month,day,jd",
    [
        (1970, 1, 1.0, JD_UNIX),
        (1985, 2, 17.25, 2446113.75),
        (1989, 12, 31.0, 2447891.5),
        (1979, 12, 31.0, 2444238.5),
        (1899, 12, 31.5, J1900),
        (1957, 10, 4.81, 2436116.31),
        (333, 1, 27.5, 1842713.0),
    ],
)
def test_calendar_round_trip(year, month, day, jd):
    """Test civil date to Julian Date and back."""
    assert calendar_to_julian(year, month, day) == pytest.approx(jd, abs=1e-4)

    y, m, d = julian_to_calendar(jd)
    assert (y, m) == (year, month)
    assert d == pytest.approx(day, abs=1e-6)


def test_gregorian_reform():
    """Test that the day after 1582-10-04 (Julian) is 1582-10-15 (Gregorian)."""
    assert calendar_to_julian(1582, 10, 15.0) - calendar_to_julian(1582, 10, 4.0) == 1.0


def test_leap_years():
    """Test the leap-year rules on both sides of the reform."""
    assert is_leap_year(2000)
    assert is_leap_year(2024)
    assert not is_leap_year(1900)
    assert not is_leap_year(2023)
    # Julian calendar: every fourth year.
    assert is_leap_year(1500)
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28


@pytest.mark.parametrize(
    "year,month,day",
    [
        (2021, 2, 29.0),
        (1900, 2, 29.0),
        (2020, 13, 1.0),
        (2020, 0, 1.0),
        (2020, 1, 0.5),
        (2020, 4, 31.0),
        (1582, 10, 10.0),
    ],
)
def test_invalid_dates_rejected(year, month, day):
    """Test that nonexistent dates raise InvalidDateError."""
    with pytest.raises(InvalidDateError):
        calendar_to_julian(year, month, day)


def test_invalid_date_is_value_error():
    """Test that argument errors can be caught as ValueError."""
    with pytest.raises(ValueError):
        Instant.from_ymd(2021, 2, 30.0)


def test_leap_day_accepted():
    """Test that a real leap day with a time of day is accepted."""
    instant = Instant.from_ymd(2000, 2, 29.5)
    assert instant.ymd()[:2] == (2000, 2)


class TestInstant:
    """Tests for the Instant value type."""

    def test_from_millis(self):
        """Test that the Unix epoch maps to its Julian Date."""
        assert Instant.from_millis(0).ut == JD_UNIX
        assert Instant.from_ymd(1970, 1, 1.0).to_millis() == pytest.approx(0.0, abs=1e-3)

    def test_millis_round_trip(self):
        """Test millisecond conversion in both directions."""
        millis = 1234567890123.0
        assert Instant.from_millis(millis).to_millis() == pytest.approx(millis, abs=1.0)

    def test_from_datetime(self):
        """Test that aware and naive datetimes are read as UTC."""
        aware = datetime(1985, 2, 17, 6, tzinfo=timezone.utc)
        naive = datetime(1985, 2, 17, 6)
        assert Instant.from_datetime(aware).ut == pytest.approx(2446113.75, abs=1e-6)
        assert Instant.from_datetime(naive).ut == pytest.approx(2446113.75, abs=1e-6)

    def test_to_datetime(self):
        """Test conversion to an aware UTC datetime."""
        dt = Instant.from_ymd_hms(2000, 1, 1, 12).to_datetime()
        assert dt.tzinfo is not None
        assert dt.timestamp() == pytest.approx(946728000.0, abs=1e-3)

    def test_from_ymd_hms(self):
        """Test construction from a time of day."""
        instant = Instant.from_ymd_hms(1987, 4, 10, 19, 21, 0)
        assert instant.ut == pytest.approx(calendar_to_julian(1987, 4, 10 + 19.35 / 24.0), abs=1e-9)

    def test_dynamical_time(self):
        """Test that TD leads UT by ΔT."""
        instant = Instant.from_ymd(1990, 1, 1.0)
        assert (instant.td - instant.ut) * 86400.0 == pytest.approx(instant.delta_t, abs=1e-4)
        assert 55.0 < instant.delta_t < 58.0

    def test_from_td(self):
        """Test that an Instant built from TD reports the same TD."""
        instant = Instant.from_td(1992, 10, 13.0)
        assert instant.td == pytest.approx(2448908.5, abs=1e-8)
        assert instant.ut < instant.td

    def test_centuries_since_j2000(self):
        """Test the time argument of the ephemeris series."""
        instant = Instant.from_td(1992, 10, 13.0)
        assert instant.centuries_since_j2000 == pytest.approx(-0.072183436, abs=1e-9)

    def test_midnight(self):
        """Test truncation to 0h UT of the same civil day."""
        instant = Instant.from_ymd(1987, 4, 10.8)
        assert instant.midnight().ut == 2446895.5
        assert Instant.from_ymd(1987, 4, 10.0).midnight().ut == 2446895.5

    def test_plus_days(self):
        """Test day arithmetic."""
        instant = Instant.from_ymd(1987, 4, 10.0)
        assert instant.plus_days(1.5).ut == pytest.approx(2446897.0)

    def test_ordering_and_equality(self):
        """Test that instants compare by time."""
        a = Instant.from_ymd(2000, 1, 1.0)
        b = Instant.from_ymd(2000, 1, 2.0)
        assert a < b
        assert a == Instant(a.ut)
        assert hash(a) == hash(Instant(a.ut))

    def test_immutable(self):
        """Test that attributes cannot be reassigned."""
        instant = Instant.from_ymd(2000, 1, 1.0)
        with pytest.raises(AttributeError):
            instant._ut = 0.0

    def test_rejects_non_finite(self):
        """Test that NaN and infinity are refused."""
        with pytest.raises(InvalidArgumentError):
            Instant(float("nan"))
        with pytest.raises(InvalidArgumentError):
            Instant(float("inf"))

    def test_now_is_recent(self):
        """Test that now() lands after 2020."""
        assert Instant.now() > Instant.from_ymd(2020, 1, 1.0)
