from .bodies import PLANETS, SOLAR_SYSTEM_BODIES, BodyInfo, BodyKind
from .elements import PLANET_ELEMENTS, ElementSet, OrbitalElements
from .events import Event, EventKind, EventState
from .fields import (
    FIELD_DEPENDENCIES,
    OBS_FIELD_DEPENDENCIES,
    Field,
    ObsField,
    SunField,
    check_acyclic,
    is_defined,
    needs_observer,
)

__all__ = [
    "BodyInfo",
    "BodyKind",
    "SOLAR_SYSTEM_BODIES",
    "PLANETS",
    "OrbitalElements",
    "ElementSet",
    "PLANET_ELEMENTS",
    "Event",
    "EventKind",
    "EventState",
    "Field",
    "ObsField",
    "SunField",
    "FIELD_DEPENDENCIES",
    "OBS_FIELD_DEPENDENCIES",
    "check_acyclic",
    "is_defined",
    "needs_observer",
]
