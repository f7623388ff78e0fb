"""Rise, transit, set and twilight events and their outcomes on a civil day."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .fields import Field


class EventKind(Enum):
    RISE = "rise"
    TRANSIT = "transit"
    SET = "set"
    RISE_TWILIGHT = "morning twilight"
    SET_TWILIGHT = "evening twilight"

    @property
    def field(self) -> Field:
        return _KIND_TO_FIELD[self]

    @classmethod
    def for_field(cls, field: Field) -> "EventKind":
        return _FIELD_TO_KIND[field]

    @property
    def is_twilight(self) -> bool:
        return self in (EventKind.RISE_TWILIGHT, EventKind.SET_TWILIGHT)


class EventState(Enum):
    OCCURS = "occurs"
    # Stays above the threshold altitude all day.
    CIRCUMPOLAR = "circumpolar"
    # Stays below the threshold altitude all day.
    NEVER_RISES = "never rises"
    # Crosses the threshold only just before or after this day, as the Moon
    # does about once a month.
    NO_CROSSING = "no crossing"


@dataclass(frozen=True)
class Event:
    """The outcome of a rise, transit, set or twilight search.

    Attributes:
        kind: Which event was searched for
        state: Whether the event happens on the day
        instant: When it happens, or None
        hours: Hours UT after 0h of the civil day, in [0, 24), or None
    """

    kind: EventKind
    state: EventState
    instant: Optional[object] = None
    hours: Optional[float] = None

    @property
    def occurs(self) -> bool:
        return self.state is EventState.OCCURS


_KIND_TO_FIELD = {
    EventKind.RISE: Field.RISE_TIME,
    EventKind.TRANSIT: Field.TRANSIT_TIME,
    EventKind.SET: Field.SET_TIME,
    EventKind.RISE_TWILIGHT: Field.RISE_TWILIGHT,
    EventKind.SET_TWILIGHT: Field.SET_TWILIGHT,
}
_FIELD_TO_KIND = {f: k for k, f in _KIND_TO_FIELD.items()}
