"""Distance, azimuth and displacement value types."""

import math
from dataclasses import dataclass

from ..angles import format_dms, norm_2pi

# International foot and nautical mile, in metres.
FOOT = 0.3048
NAUTICAL_MILE = 1852.0


def _format_number(value: float) -> str:
    text = f"{value:,.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return text


@dataclass(frozen=True, order=True)
class Distance:
    """A distance over the Earth's surface, held in metres."""

    metres: float

    @classmethod
    def from_feet(cls, feet: float) -> "Distance":
        return cls(feet * FOOT)

    @classmethod
    def from_nm(cls, nmiles: float) -> "Distance":
        return cls(nmiles * NAUTICAL_MILE)

    @classmethod
    def from_km(cls, km: float) -> "Distance":
        return cls(km * 1000.0)

    @property
    def feet(self) -> float:
        return self.metres / FOOT

    @property
    def nm(self) -> float:
        return self.metres / NAUTICAL_MILE

    @property
    def km(self) -> float:
        return self.metres / 1000.0

    def __add__(self, other: "Distance") -> "Distance":
        if not isinstance(other, Distance):
            return NotImplemented
        return Distance(self.metres + other.metres)

    def format_m(self) -> str:
        """Format for display in metres, e.g. "1,234.5 m"."""
        return _format_number(self.metres) + " m"

    def format_nm(self) -> str:
        """Format for display in nautical miles, e.g. "12.3 nm"."""
        return _format_number(self.nm) + " nm"

    def describe_nautical(self) -> str:
        """Describe in nautical measures: "625 feet", "4.9 nm" or "252 nm"."""
        if self.feet < 1000:
            return f"{round(self.feet)} feet"
        if self.nm < 10:
            return f"{self.nm:.1f} nm"
        return f"{round(self.nm)} nm"

    def __str__(self) -> str:
        return self.format_nm()


Distance.ZERO = Distance(0.0)


@dataclass(frozen=True)
class Azimuth:
    """A bearing from true north, clockwise, in radians within [0, 2π)."""

    radians: float

    def __post_init__(self):
        object.__setattr__(self, "radians", norm_2pi(self.radians))

    @classmethod
    def from_degrees(cls, degrees: float) -> "Azimuth":
        return cls(math.radians(degrees))

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)

    def reverse(self) -> "Azimuth":
        """The opposite bearing."""
        return Azimuth(self.radians + math.pi)

    def format(self) -> str:
        return format_dms(self.degrees, places=2)

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class Vector:
    """A displacement over the Earth's surface: a distance along an initial bearing."""

    distance: Distance
    azimuth: Azimuth

    @classmethod
    def from_metres_degrees(cls, metres: float, azimuth_deg: float) -> "Vector":
        return cls(Distance(metres), Azimuth.from_degrees(azimuth_deg))

    @property
    def metres(self) -> float:
        return self.distance.metres

    @property
    def azimuth_degrees(self) -> float:
        return self.azimuth.degrees
