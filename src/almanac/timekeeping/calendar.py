"""Civil calendar <-> Julian Date conversion (Meeus, chapter 7)."""

import math

from ..errors import InvalidDateError

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# First day of the Gregorian calendar, as (year, month, day).
GREGORIAN_START = (1582, 10, 15)

# Julian Date of 1582-10-15 0h, the first Gregorian day.
_GREGORIAN_START_JD = 2299160.5


def is_leap_year(year: int) -> bool:
    """Leap-year rule for the calendar in force in the given year."""
    if year > GREGORIAN_START[0]:
        return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)
    return year % 4 == 0


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def validate_date(year: int, month: int, day: float) -> None:
    """Reject dates that do not exist on the civil calendar.

    Raises:
        InvalidDateError: If the month, day or reform gap is violated
    """
    if int(month) != month or not 1 <= month <= 12:
        raise InvalidDateError(year, month, day, "month must be 1-12")
    if not math.isfinite(day) or day < 1.0:
        raise InvalidDateError(year, month, day, "day must be at least 1")
    if day >= days_in_month(year, month) + 1:
        raise InvalidDateError(
            year, month, day, f"month has only {days_in_month(year, month)} days"
        )
    if year == 1582 and month == 10 and 5 <= int(day) <= 14:
        raise InvalidDateError(year, month, day, "date dropped by the Gregorian reform")


def calendar_to_julian(year: int, month: int, day: float) -> float:
    """Convert a civil date to a Julian Date.

    Gregorian dates are used from 1582-10-15, Julian dates before it.

    Args:
        year: Astronomical year (1 BC = 0)
        month: Month 1-12
        day: Day of month, with the time of day as a fraction

    Returns:
        Julian Date

    Raises:
        InvalidDateError: If the date does not exist
    """
    validate_date(year, month, day)

    gregorian = (year, month, day) >= GREGORIAN_START
    y, m = year, month
    if m <= 2:
        y -= 1
        m += 12

    b = 0
    if gregorian:
        a = math.floor(y / 100)
        b = 2 - a + math.floor(a / 4)

    return math.floor(365.25 * (y + 4716)) + math.floor(30.6001 * (m + 1)) + day + b - 1524.5


def julian_to_calendar(jd: float) -> tuple[int, int, float]:
    """Convert a Julian Date to a civil date.

    Args:
        jd: Julian Date (must not be negative)

    Returns:
        Tuple of (year, month, fractional day)
    """
    jd = jd + 0.5
    z = math.floor(jd)
    f = jd - z

    if z < _GREGORIAN_START_JD + 0.5:
        a = z
    else:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - math.floor(alpha / 4)

    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e) + f
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    return int(year), int(month), day
