"""Observation sessions and their field cache."""

import logging

from .config import EngineConfig
from .ephemeris import pipeline
from .errors import InvalidArgumentError, NoObserverError, UndefinedFieldError, UnknownBodyError
from .geodesy.position import Position
from .models.bodies import PLANETS, SOLAR_SYSTEM_BODIES, BodyInfo, BodyKind
from .models.events import Event, EventKind
from .models.fields import (
    FIELD_DEPENDENCIES,
    OBS_FIELD_DEPENDENCIES,
    Field,
    ObsField,
    SunField,
    needs_observer,
)
from .timekeeping import Instant

log = logging.getLogger(__name__)

_SUN = SOLAR_SYSTEM_BODIES["sun"]


class Observation:
    """A time and place from which the sky is observed.

    The Observation owns one cache of computed fields for itself and for
    every body obtained from it. Changing the time, the observer position
    or the altitude discards the whole cache. Values are computed on
    demand, each at most once between changes.

    An Observation is not thread-safe; give each thread its own.
    """

    def __init__(
        self,
        instant: Instant | None = None,
        position: Position | None = None,
        altitude: float = 0.0,
        config: EngineConfig | None = None,
    ):
        """Initialize the observation.

        Args:
            instant: When; defaults to now
            position: Where the observer stands; optional, but required
                for local fields such as altitude and rise times
            altitude: Observer's height above the ellipsoid in metres
            config: Engine settings; defaults to EngineConfig()
        """
        self._instant = instant if instant is not None else Instant.now()
        self._position = position
        self._altitude = float(altitude)
        self.config = config or EngineConfig()
        self._cache: dict = {}
        self._generation = 0

    # State.

    @property
    def instant(self) -> Instant:
        return self._instant

    @property
    def position(self) -> Position | None:
        return self._position

    @property
    def altitude(self) -> float:
        return self._altitude

    @property
    def generation(self) -> int:
        """Incremented on every invalidation of the cache."""
        return self._generation

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def set_date(self, year: int, month: int, day: float) -> None:
        """Move the observation to a UT calendar date with fractional day."""
        self.set_time(Instant.from_ymd(year, month, day))

    def set_time(self, instant: Instant) -> None:
        self._instant = instant
        self.invalidate()

    def set_observer_position(self, position: Position | None) -> None:
        self._position = position
        self.invalidate()

    def set_observer_altitude(self, altitude: float) -> None:
        self._altitude = float(altitude)
        self.invalidate()

    def invalidate(self) -> None:
        """Discard every cached value."""
        log.debug(
            "Invalidating %d cached fields (generation %d)", len(self._cache), self._generation
        )
        self._cache.clear()
        self._generation += 1

    # Bodies.

    def get_sun(self) -> "Body":
        return Body(self, _SUN)

    def get_moon(self) -> "Body":
        return Body(self, SOLAR_SYSTEM_BODIES["moon"])

    def get_planet(self, name: str) -> "Body":
        """Get a planet, Mercury to Neptune, by case-insensitive name."""
        info = SOLAR_SYSTEM_BODIES.get(str(name).lower())
        if info is None or info.kind is not BodyKind.PLANET:
            raise UnknownBodyError(str(name), PLANETS)
        return Body(self, info)

    def get_body(self, name: str) -> "Body":
        """Get any body by case-insensitive name."""
        info = SOLAR_SYSTEM_BODIES.get(str(name).lower())
        if info is None:
            raise UnknownBodyError(str(name), list(SOLAR_SYSTEM_BODIES))
        return Body(self, info)

    def bodies(self) -> list["Body"]:
        return [Body(self, info) for info in SOLAR_SYSTEM_BODIES.values()]

    # Fields.

    def get(self, field: ObsField) -> float:
        """Get an observation-wide field, such as obliquity or sidereal time.

        Raises:
            NoObserverError: If the field needs an observer position and none is set
        """
        field = _coerce(field, ObsField)
        self._check_observer(None, field)
        return self._resolve(None, field)

    def cached(self, field, body: str | None = None):
        """Read a value that dependency resolution has already put in the cache."""
        key = (body, field)
        if key not in self._cache:
            raise AssertionError(f"{field.name} of {body or 'observation'} used before it was computed")
        return self._cache[key]

    def _body_value(self, info: BodyInfo, field: Field):
        field = _coerce(field, Field)
        self._check_observer(info.kind, field)
        return self._resolve(info, field)

    def _check_observer(self, kind, field) -> None:
        if self._position is None and needs_observer(kind, field):
            raise NoObserverError(field.name)

    def _resolve(self, info: BodyInfo | None, field):
        owner = info.key if info is not None else None
        key = (owner, field)
        if key in self._cache:
            return self._cache[key]

        if info is None:
            dependencies = OBS_FIELD_DEPENDENCIES[field]
        else:
            dependencies = FIELD_DEPENDENCIES[info.kind].get(field)
            if dependencies is None:
                raise UndefinedFieldError(field.name, info.name)

        for dep in dependencies:
            if isinstance(dep, ObsField):
                self._resolve(None, dep)
            elif isinstance(dep, SunField):
                self._resolve(_SUN, dep.field)
            else:
                self._resolve(info, dep)

        if info is None:
            values = pipeline.compute_observation_field(self, field)
        else:
            values = pipeline.compute(self, info, field)
        for f, value in values.items():
            self._cache.setdefault((owner, f), value)
        log.debug("Computed %s for %s", ", ".join(f.name for f in values), owner or "observation")
        return self._cache[key]

    def __repr__(self):
        return f"Observation({self._instant!r}, {self._position}, altitude={self._altitude})"


class Body:
    """A solar-system body as seen from one Observation.

    Bodies hold no state of their own: values live in the Observation's
    cache and follow its changes of time and place.
    """

    def __init__(self, observation: Observation, info: BodyInfo):
        self._observation = observation
        self._info = info

    @property
    def name(self) -> str:
        return self._info.name

    @property
    def kind(self) -> BodyKind:
        return self._info.kind

    @property
    def info(self) -> BodyInfo:
        return self._info

    @property
    def observation(self) -> Observation:
        return self._observation

    def get(self, field: Field) -> float | None:
        """Get a field of this body.

        Angles are in radians, distances in AU. Event fields give hours UT
        after midnight of the observation's day, or None when the event
        does not occur on that day.

        Raises:
            UndefinedFieldError: If the field has no meaning for this body
            NoObserverError: If the field needs an observer position
        """
        value = self._observation._body_value(self._info, field)
        if isinstance(value, Event):
            return value.hours
        return value

    def event(self, which: Field | EventKind) -> Event:
        """The full result of a rise, transit, set or twilight search."""
        field = which.field if isinstance(which, EventKind) else _coerce(which, Field)
        if not field.is_event:
            raise InvalidArgumentError(f"{field.name} is not an event field")
        return self._observation._body_value(self._info, field)

    def __eq__(self, other):
        if not isinstance(other, Body):
            return NotImplemented
        return self._observation is other._observation and self._info == other._info

    def __hash__(self):
        return hash((id(self._observation), self._info.key))

    def __repr__(self):
        return f"Body({self.name})"


def _coerce(field, enum_type):
    if isinstance(field, enum_type):
        return field
    if isinstance(field, str):
        try:
            return enum_type[field.upper()]
        except KeyError:
            pass
    raise InvalidArgumentError(
        f"Unknown {enum_type.__name__}: {field!r}",
        [f"Valid names: {', '.join(f.name for f in enum_type)}"],
    )
