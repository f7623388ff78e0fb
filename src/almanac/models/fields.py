"""Derivable quantities and the static table of their dependencies.

Body fields are computed per body; observation fields are shared by every
body in an Observation. Each field lists the fields that must be in the
cache before its formula runs. The table differs by body kind: a field
missing from a kind's table is undefined for that kind.
"""

from enum import Enum
from graphlib import TopologicalSorter
from typing import NamedTuple, Union

from .bodies import BodyKind


class Field(Enum):
    """Quantities computed for a body. Angles in radians unless noted."""

    HE_LONGITUDE = "heliocentric longitude"
    HE_LATITUDE = "heliocentric latitude"
    HE_RADIUS = "heliocentric radius (AU)"
    EC_LONGITUDE = "geocentric ecliptic longitude"
    EC_LATITUDE = "geocentric ecliptic latitude"
    EARTH_DISTANCE = "distance from Earth (AU)"
    RIGHT_ASCENSION_AS = "astrometric right ascension"
    DECLINATION_AS = "astrometric declination"
    EC_LONGITUDE_AP = "apparent ecliptic longitude"
    EC_LATITUDE_AP = "apparent ecliptic latitude"
    RIGHT_ASCENSION_AP = "apparent right ascension"
    DECLINATION_AP = "apparent declination"
    HORIZONTAL_PARALLAX = "equatorial horizontal parallax"
    RIGHT_ASCENSION_TOPO = "topocentric right ascension"
    DECLINATION_TOPO = "topocentric declination"
    TOPO_DISTANCE = "distance from observer (AU)"
    LOCAL_HOUR_ANGLE = "local hour angle"
    LOCAL_AZIMUTH = "azimuth"
    LOCAL_ALTITUDE = "altitude"
    PHASE_ANGLE = "phase angle"
    PHASE = "illuminated fraction"
    ABS_BRIGHT_LIMB = "position angle of the bright limb"
    APPARENT_DIAMETER = "apparent diameter"
    MAGNITUDE = "visual magnitude"
    RISE_TIME = "rise time (hours UT)"
    TRANSIT_TIME = "transit time (hours UT)"
    SET_TIME = "set time (hours UT)"
    RISE_TWILIGHT = "start of morning twilight (hours UT)"
    SET_TWILIGHT = "end of evening twilight (hours UT)"

    @property
    def is_event(self) -> bool:
        return self in EVENT_FIELDS


class ObsField(Enum):
    """Quantities shared by all bodies of one observation."""

    NUTATION_IN_LONGITUDE = "nutation in longitude"
    NUTATION_IN_OBLIQUITY = "nutation in obliquity"
    MEAN_OBLIQUITY = "mean obliquity of the ecliptic"
    TRUE_OBLIQUITY = "true obliquity of the ecliptic"
    GMST_INSTANT = "Greenwich mean sidereal time (hours)"
    GAST_INSTANT = "Greenwich apparent sidereal time (hours)"
    GMST_MIDNIGHT = "Greenwich mean sidereal time at 0h UT (hours)"
    GAST_MIDNIGHT = "Greenwich apparent sidereal time at 0h UT (hours)"
    LOCAL_SIDEREAL_TIME = "local apparent sidereal time (hours)"
    EARTH_HE_LONGITUDE = "heliocentric longitude of the Earth"
    EARTH_HE_LATITUDE = "heliocentric latitude of the Earth"
    EARTH_HE_RADIUS = "heliocentric radius of the Earth (AU)"
    RHO_SIN_PHI = "observer ρ sin φ' (Earth radii)"
    RHO_COS_PHI = "observer ρ cos φ' (Earth radii)"


class SunField(NamedTuple):
    """A dependency on a field of the Sun, from another body."""

    field: Field


Dependency = Union[Field, ObsField, SunField]

EVENT_FIELDS = (
    Field.RISE_TIME,
    Field.TRANSIT_TIME,
    Field.SET_TIME,
    Field.RISE_TWILIGHT,
    Field.SET_TWILIGHT,
)

OBS_FIELD_DEPENDENCIES: dict[ObsField, tuple] = {
    ObsField.NUTATION_IN_LONGITUDE: (),
    ObsField.NUTATION_IN_OBLIQUITY: (),
    ObsField.MEAN_OBLIQUITY: (),
    ObsField.TRUE_OBLIQUITY: (ObsField.MEAN_OBLIQUITY, ObsField.NUTATION_IN_OBLIQUITY),
    ObsField.GMST_INSTANT: (),
    ObsField.GAST_INSTANT: (
        ObsField.GMST_INSTANT,
        ObsField.NUTATION_IN_LONGITUDE,
        ObsField.TRUE_OBLIQUITY,
    ),
    ObsField.GMST_MIDNIGHT: (),
    ObsField.GAST_MIDNIGHT: (),
    ObsField.LOCAL_SIDEREAL_TIME: (ObsField.GAST_INSTANT,),
    ObsField.EARTH_HE_LONGITUDE: (),
    ObsField.EARTH_HE_LATITUDE: (),
    ObsField.EARTH_HE_RADIUS: (),
    ObsField.RHO_SIN_PHI: (),
    ObsField.RHO_COS_PHI: (),
}

_TOPOCENTRIC = (
    Field.RIGHT_ASCENSION_AP,
    Field.DECLINATION_AP,
    Field.EARTH_DISTANCE,
    Field.HORIZONTAL_PARALLAX,
    ObsField.LOCAL_SIDEREAL_TIME,
    ObsField.RHO_SIN_PHI,
    ObsField.RHO_COS_PHI,
)

_COMMON: dict[Field, tuple] = {
    Field.RIGHT_ASCENSION_AS: (Field.EC_LONGITUDE, Field.EC_LATITUDE, ObsField.MEAN_OBLIQUITY),
    Field.DECLINATION_AS: (Field.EC_LONGITUDE, Field.EC_LATITUDE, ObsField.MEAN_OBLIQUITY),
    Field.RIGHT_ASCENSION_AP: (Field.EC_LONGITUDE_AP, Field.EC_LATITUDE_AP, ObsField.TRUE_OBLIQUITY),
    Field.DECLINATION_AP: (Field.EC_LONGITUDE_AP, Field.EC_LATITUDE_AP, ObsField.TRUE_OBLIQUITY),
    Field.HORIZONTAL_PARALLAX: (Field.EARTH_DISTANCE,),
    Field.RIGHT_ASCENSION_TOPO: _TOPOCENTRIC,
    Field.DECLINATION_TOPO: _TOPOCENTRIC,
    Field.TOPO_DISTANCE: _TOPOCENTRIC,
    Field.LOCAL_HOUR_ANGLE: (Field.RIGHT_ASCENSION_TOPO, ObsField.LOCAL_SIDEREAL_TIME),
    Field.LOCAL_AZIMUTH: (Field.LOCAL_HOUR_ANGLE, Field.DECLINATION_TOPO),
    Field.LOCAL_ALTITUDE: (Field.LOCAL_HOUR_ANGLE, Field.DECLINATION_TOPO),
    Field.PHASE: (Field.PHASE_ANGLE,),
    Field.APPARENT_DIAMETER: (Field.EARTH_DISTANCE,),
    Field.RISE_TIME: (),
    Field.TRANSIT_TIME: (),
    Field.SET_TIME: (),
}

_EARTH = (ObsField.EARTH_HE_LONGITUDE, ObsField.EARTH_HE_LATITUDE, ObsField.EARTH_HE_RADIUS)
_SUN_EQUATORIAL = (SunField(Field.RIGHT_ASCENSION_AP), SunField(Field.DECLINATION_AP))

_SUN: dict[Field, tuple] = {
    Field.EC_LONGITUDE: (ObsField.EARTH_HE_LONGITUDE, ObsField.EARTH_HE_LATITUDE),
    Field.EC_LATITUDE: (ObsField.EARTH_HE_LONGITUDE, ObsField.EARTH_HE_LATITUDE),
    Field.EARTH_DISTANCE: (ObsField.EARTH_HE_RADIUS,),
    Field.EC_LONGITUDE_AP: (
        Field.EC_LONGITUDE,
        Field.EC_LATITUDE,
        Field.EARTH_DISTANCE,
        ObsField.NUTATION_IN_LONGITUDE,
    ),
    Field.PHASE_ANGLE: (),
    Field.MAGNITUDE: (Field.EARTH_DISTANCE,),
    Field.RISE_TWILIGHT: (),
    Field.SET_TWILIGHT: (),
}
_SUN[Field.EC_LATITUDE_AP] = _SUN[Field.EC_LONGITUDE_AP]

_MOON: dict[Field, tuple] = {
    Field.EC_LONGITUDE: (),
    Field.EC_LATITUDE: (),
    Field.EARTH_DISTANCE: (),
    Field.EC_LONGITUDE_AP: (Field.EC_LONGITUDE, Field.EC_LATITUDE, ObsField.NUTATION_IN_LONGITUDE),
    Field.PHASE_ANGLE: (
        Field.EC_LONGITUDE_AP,
        Field.EC_LATITUDE_AP,
        Field.EARTH_DISTANCE,
        SunField(Field.EC_LONGITUDE_AP),
        SunField(Field.EARTH_DISTANCE),
    ),
    Field.ABS_BRIGHT_LIMB: (Field.RIGHT_ASCENSION_AP, Field.DECLINATION_AP) + _SUN_EQUATORIAL,
    Field.MAGNITUDE: (Field.PHASE_ANGLE,),
}
_MOON[Field.EC_LATITUDE_AP] = _MOON[Field.EC_LONGITUDE_AP]

_GEOMETRIC = (Field.HE_LONGITUDE, Field.HE_LATITUDE, Field.HE_RADIUS) + _EARTH

_PLANET: dict[Field, tuple] = {
    Field.HE_LONGITUDE: (),
    Field.HE_LATITUDE: (),
    Field.HE_RADIUS: (),
    Field.EC_LONGITUDE: _GEOMETRIC,
    Field.EC_LATITUDE: _GEOMETRIC,
    Field.EARTH_DISTANCE: _GEOMETRIC,
    Field.EC_LONGITUDE_AP: (
        Field.EC_LONGITUDE,
        Field.EC_LATITUDE,
        ObsField.NUTATION_IN_LONGITUDE,
        ObsField.EARTH_HE_LONGITUDE,
    ),
    Field.PHASE_ANGLE: (Field.HE_RADIUS, Field.EARTH_DISTANCE, ObsField.EARTH_HE_RADIUS),
    Field.ABS_BRIGHT_LIMB: (Field.RIGHT_ASCENSION_AP, Field.DECLINATION_AP) + _SUN_EQUATORIAL,
    Field.MAGNITUDE: (Field.HE_RADIUS, Field.EARTH_DISTANCE, Field.PHASE_ANGLE),
}
_PLANET[Field.EC_LATITUDE_AP] = _PLANET[Field.EC_LONGITUDE_AP]

FIELD_DEPENDENCIES: dict[BodyKind, dict[Field, tuple]] = {
    BodyKind.SUN: {**_COMMON, **_SUN},
    BodyKind.MOON: {**_COMMON, **_MOON},
    BodyKind.PLANET: {**_COMMON, **_PLANET},
}


def is_defined(kind: BodyKind, field: Field) -> bool:
    return field in FIELD_DEPENDENCIES[kind]


def dependency_graph() -> dict:
    """The whole dependency table as a graph for graphlib.

    Nodes are (BodyKind, Field) for body fields and (None, ObsField)
    for observation fields.
    """
    graph = {(None, f): {(None, d) for d in deps} for f, deps in OBS_FIELD_DEPENDENCIES.items()}
    for kind, table in FIELD_DEPENDENCIES.items():
        for f, deps in table.items():
            graph[(kind, f)] = {_node(kind, d) for d in deps}
    return graph


def _node(kind: BodyKind, dep):
    if isinstance(dep, ObsField):
        return (None, dep)
    if isinstance(dep, SunField):
        return (BodyKind.SUN, dep.field)
    return (kind, dep)


def check_acyclic() -> list:
    """Return the fields in a valid evaluation order.

    Raises:
        graphlib.CycleError: If the dependency table contains a cycle
    """
    return list(TopologicalSorter(dependency_graph()).static_order())


def _observer_dependent() -> frozenset:
    graph = dependency_graph()
    direct = {
        (None, ObsField.RHO_SIN_PHI),
        (None, ObsField.RHO_COS_PHI),
        (None, ObsField.LOCAL_SIDEREAL_TIME),
    }
    direct |= {(kind, f) for kind in BodyKind for f in EVENT_FIELDS if f in FIELD_DEPENDENCIES[kind]}
    result = set(direct)
    for node in check_acyclic():
        if graph.get(node, set()) & result:
            result.add(node)
    return frozenset(result)


OBSERVER_DEPENDENT = _observer_dependent()


def needs_observer(kind: BodyKind | None, field) -> bool:
    """Whether a field can only be computed with an observer position."""
    return (kind, field) in OBSERVER_DEPENDENT
