"""Absolute time representation."""

import math
import time
from datetime import datetime, timezone
from functools import total_ordering

from ..errors import InvalidArgumentError
from .calendar import calendar_to_julian, julian_to_calendar
from .delta_t import delta_t
from .sidereal import gast, gmst

# Julian Date of the standard epoch J2000.0 (2000-01-01 12h TD).
J2000 = 2451545.0

# Julian Date of the epoch J1900.0 (1899-12-31 12h).
J1900 = 2415020.0

# Julian Date of the Unix epoch, 1970-01-01 0h UT.
JD_UNIX = 2440587.5

SECONDS_PER_DAY = 86400.0
MILLIS_PER_DAY = 86400000.0
DAYS_PER_CENTURY = 36525.0


def decimal_year(jd: float) -> float:
    """Approximate decimal year for a Julian Date, as used by the ΔT model."""
    return 2000.0 + (jd - J2000) / 365.25


@total_ordering
class Instant:
    """A moment in time, held as a Universal Time Julian Date.

    Dynamical time is derived on demand through ΔT. Instances are
    immutable and compare by their UT Julian Date.
    """

    __slots__ = ("_ut", "_delta_t")

    def __init__(self, ut: float):
        """Create an Instant from a UT Julian Date."""
        if not math.isfinite(ut):
            raise InvalidArgumentError(f"Julian Date must be finite, got {ut!r}")
        object.__setattr__(self, "_ut", float(ut))
        object.__setattr__(self, "_delta_t", delta_t(decimal_year(ut)))

    def __setattr__(self, name, value):
        raise AttributeError("Instant is immutable")

    # Construction.

    @classmethod
    def from_ymd(cls, year: int, month: int, day: float) -> "Instant":
        """Create an Instant from a UT calendar date with fractional day.

        Raises:
            InvalidDateError: If the date does not exist
        """
        return cls(calendar_to_julian(year, month, day))

    @classmethod
    def from_ymd_hms(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: float = 0.0,
    ) -> "Instant":
        """Create an Instant from UT calendar date and time of day."""
        fraction = (hour + minute / 60.0 + second / 3600.0) / 24.0
        return cls(calendar_to_julian(year, month, day + fraction))

    @classmethod
    def from_td(cls, year: int, month: int, day: float) -> "Instant":
        """Create an Instant from a calendar date in dynamical time (TD)."""
        return cls.from_td_jd(calendar_to_julian(year, month, day))

    @classmethod
    def from_td_jd(cls, td: float) -> "Instant":
        """Create an Instant from a dynamical-time Julian Date."""
        return cls(td - delta_t(decimal_year(td)) / SECONDS_PER_DAY)

    @classmethod
    def from_millis(cls, millis: float) -> "Instant":
        """Create an Instant from milliseconds since 1970-01-01 0h UT."""
        return cls(JD_UNIX + millis / MILLIS_PER_DAY)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Instant":
        """Create an Instant from a datetime; naive values are taken as UTC."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls.from_millis(dt.timestamp() * 1000.0)

    @classmethod
    def now(cls) -> "Instant":
        return cls.from_millis(time.time() * 1000.0)

    # Accessors.

    @property
    def ut(self) -> float:
        """Julian Date in Universal Time."""
        return self._ut

    @property
    def td(self) -> float:
        """Julian Date in dynamical (terrestrial) time."""
        return self._ut + self._delta_t / SECONDS_PER_DAY

    @property
    def delta_t(self) -> float:
        """TD − UT at this instant, in seconds."""
        return self._delta_t

    @property
    def decimal_year(self) -> float:
        return decimal_year(self._ut)

    @property
    def centuries_since_j2000(self) -> float:
        """Julian centuries of dynamical time since J2000.0."""
        return (self.td - J2000) / DAYS_PER_CENTURY

    def ymd(self) -> tuple[int, int, float]:
        """The UT calendar date as (year, month, fractional day)."""
        return julian_to_calendar(self._ut)

    def to_millis(self) -> float:
        """Milliseconds since the Unix epoch."""
        return (self._ut - JD_UNIX) * MILLIS_PER_DAY

    def to_datetime(self) -> datetime:
        """An aware UTC datetime for this instant."""
        return datetime.fromtimestamp(self.to_millis() / 1000.0, tz=timezone.utc)

    def midnight(self) -> "Instant":
        """0h UT of the civil day containing this instant."""
        return Instant(math.floor(self._ut - 0.5) + 0.5)

    def plus_days(self, days: float) -> "Instant":
        return Instant(self._ut + days)

    # Sidereal time.

    def gmst(self) -> float:
        """Greenwich mean sidereal time, in hours [0, 24)."""
        return gmst(self._ut)

    def gast(self) -> float:
        """Greenwich apparent sidereal time, in hours [0, 24)."""
        return gast(self._ut, self.centuries_since_j2000)

    # Comparison.

    def __eq__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self._ut == other._ut

    def __lt__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self._ut < other._ut

    def __hash__(self):
        return hash(self._ut)

    def __repr__(self):
        y, m, d = self.ymd()
        return f"Instant({y:04d}-{m:02d}-{d:09.6f} UT, jd={self._ut:.6f})"
