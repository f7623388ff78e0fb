from .calendar import calendar_to_julian, julian_to_calendar, days_in_month
from .delta_t import delta_t
from .instant import Instant, J2000, J1900, JD_UNIX
from .sidereal import gast, gmst

__all__ = [
    "Instant",
    "J2000",
    "J1900",
    "JD_UNIX",
    "calendar_to_julian",
    "julian_to_calendar",
    "days_in_month",
    "delta_t",
    "gmst",
    "gast",
]
