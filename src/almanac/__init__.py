"""Positional astronomy and geodesy: where things are in the sky and on the Earth."""

__version__ = "0.1.0"

from .config import EngineConfig, load_config
from .errors import (
    AlmanacError,
    ConfigError,
    InvalidArgumentError,
    InvalidDateError,
    InvalidPositionError,
    NoObserverError,
    NonconvergenceError,
    UndefinedFieldError,
    UnknownBodyError,
)
from .geodesy import (
    AIRY_1830,
    ELLIPSOIDS,
    GRS80,
    IAU_1976,
    INTERNATIONAL_1924,
    NAD27,
    NAD83,
    WGS84,
    Algorithm,
    Azimuth,
    Distance,
    Ellipsoid,
    GeoConfig,
    Position,
    Vector,
    describe_position,
    get_calculator,
)
from .models import BodyKind, Event, EventKind, EventState, Field, ObsField
from .observation import Body, Observation
from .timekeeping import Instant

__all__ = [
    "__version__",
    "Instant",
    "Observation",
    "Body",
    "BodyKind",
    "Field",
    "ObsField",
    "Event",
    "EventKind",
    "EventState",
    "Position",
    "Distance",
    "Azimuth",
    "Vector",
    "Ellipsoid",
    "ELLIPSOIDS",
    "WGS84",
    "GRS80",
    "NAD27",
    "NAD83",
    "AIRY_1830",
    "INTERNATIONAL_1924",
    "IAU_1976",
    "GeoConfig",
    "Algorithm",
    "get_calculator",
    "describe_position",
    "EngineConfig",
    "load_config",
    "AlmanacError",
    "InvalidArgumentError",
    "InvalidDateError",
    "InvalidPositionError",
    "UnknownBodyError",
    "UndefinedFieldError",
    "NoObserverError",
    "ConfigError",
    "NonconvergenceError",
]
