"""Field formulas for the observation and for each kind of body.

Every formula receives the Observation and, for body fields, the body's
static description. It reads its declared dependencies from the
Observation's cache and returns a dict of the values it computed: some
formulas produce several fields at once (right ascension together with
declination, for example). The Observation resolves dependencies before
calling a formula, so the formulas never recurse themselves.
"""

import math

from ..angles import norm_2pi, norm_hours
from ..models.bodies import BodyInfo, BodyKind
from ..models.events import EventKind
from ..models.fields import Field, ObsField
from ..timekeeping.sidereal import gast, gmst
from . import illumination, riseset, transforms
from .moon import moon_geocentric
from .nutation import mean_obliquity, nutation
from .planets import (
    planet_heliocentric,
    rectangular_to_spherical,
    spherical_to_rectangular,
)
from .vsop87 import earth_heliocentric

# Light travel time for one AU, in days.
LIGHT_TIME_DAYS = 0.0057755183
LIGHT_TIME_PASSES = 2

_OBS_FORMULAS = {}
_FORMULAS = {}


def _obs_formula(*fields):
    def register(fn):
        for f in fields:
            _OBS_FORMULAS[f] = fn
        return fn

    return register


def _formula(kind, *fields):
    """Register a formula for fields of one body kind, or of every kind when None."""

    def register(fn):
        for f in fields:
            _FORMULAS[(kind, f)] = fn
        return fn

    return register


def has_formula(kind: BodyKind, field: Field) -> bool:
    return field.is_event or (kind, field) in _FORMULAS or (None, field) in _FORMULAS


def compute_observation_field(obs, field: ObsField) -> dict:
    return _OBS_FORMULAS[field](obs)


def compute(obs, body: BodyInfo, field: Field) -> dict:
    if field.is_event:
        return {field: riseset.find_event(obs, body, EventKind.for_field(field))}
    fn = _FORMULAS.get((body.kind, field)) or _FORMULAS[(None, field)]
    return fn(obs, body)


def _t(obs) -> float:
    return obs.instant.centuries_since_j2000


# Observation-wide quantities.


@_obs_formula(ObsField.NUTATION_IN_LONGITUDE, ObsField.NUTATION_IN_OBLIQUITY)
def _nutation(obs):
    dpsi, deps = nutation(_t(obs))
    return {ObsField.NUTATION_IN_LONGITUDE: dpsi, ObsField.NUTATION_IN_OBLIQUITY: deps}


@_obs_formula(ObsField.MEAN_OBLIQUITY)
def _mean_obliquity(obs):
    return {ObsField.MEAN_OBLIQUITY: mean_obliquity(_t(obs))}


@_obs_formula(ObsField.TRUE_OBLIQUITY)
def _true_obliquity(obs):
    eps = obs.cached(ObsField.MEAN_OBLIQUITY) + obs.cached(ObsField.NUTATION_IN_OBLIQUITY)
    return {ObsField.TRUE_OBLIQUITY: eps}


@_obs_formula(ObsField.GMST_INSTANT)
def _gmst_instant(obs):
    return {ObsField.GMST_INSTANT: gmst(obs.instant.ut)}


@_obs_formula(ObsField.GAST_INSTANT)
def _gast_instant(obs):
    dpsi = obs.cached(ObsField.NUTATION_IN_LONGITUDE)
    eps = obs.cached(ObsField.TRUE_OBLIQUITY)
    hours = obs.cached(ObsField.GMST_INSTANT) + math.degrees(dpsi * math.cos(eps)) / 15.0
    return {ObsField.GAST_INSTANT: norm_hours(hours)}


@_obs_formula(ObsField.GMST_MIDNIGHT)
def _gmst_midnight(obs):
    return {ObsField.GMST_MIDNIGHT: gmst(obs.instant.midnight().ut)}


@_obs_formula(ObsField.GAST_MIDNIGHT)
def _gast_midnight(obs):
    midnight = obs.instant.midnight()
    return {ObsField.GAST_MIDNIGHT: gast(midnight.ut, midnight.centuries_since_j2000)}


@_obs_formula(ObsField.LOCAL_SIDEREAL_TIME)
def _local_sidereal_time(obs):
    hours = obs.cached(ObsField.GAST_INSTANT) + obs.position.lon_degrees / 15.0
    return {ObsField.LOCAL_SIDEREAL_TIME: norm_hours(hours)}


@_obs_formula(ObsField.EARTH_HE_LONGITUDE, ObsField.EARTH_HE_LATITUDE, ObsField.EARTH_HE_RADIUS)
def _earth(obs):
    lon, lat, r = earth_heliocentric(_t(obs))
    return {
        ObsField.EARTH_HE_LONGITUDE: lon,
        ObsField.EARTH_HE_LATITUDE: lat,
        ObsField.EARTH_HE_RADIUS: r,
    }


@_obs_formula(ObsField.RHO_SIN_PHI, ObsField.RHO_COS_PHI)
def _observer(obs):
    rho_sin, rho_cos = transforms.observer_geocentric(
        obs.position.lat, obs.altitude, obs.config.geo.ellipsoid
    )
    return {ObsField.RHO_SIN_PHI: rho_sin, ObsField.RHO_COS_PHI: rho_cos}


# Geometric positions.


@_formula(BodyKind.SUN, Field.EC_LONGITUDE, Field.EC_LATITUDE)
def _sun_geometric(obs, body):
    lon = obs.cached(ObsField.EARTH_HE_LONGITUDE) + math.pi
    lat = -obs.cached(ObsField.EARTH_HE_LATITUDE)
    lon, lat = transforms.fk5_correction(lon, lat, _t(obs))
    return {Field.EC_LONGITUDE: lon, Field.EC_LATITUDE: lat}


@_formula(BodyKind.SUN, Field.EARTH_DISTANCE)
def _sun_distance(obs, body):
    return {Field.EARTH_DISTANCE: obs.cached(ObsField.EARTH_HE_RADIUS)}


@_formula(BodyKind.MOON, Field.EC_LONGITUDE, Field.EC_LATITUDE, Field.EARTH_DISTANCE)
def _moon_geometric(obs, body):
    lon, lat, km = moon_geocentric(_t(obs))
    return {
        Field.EC_LONGITUDE: lon,
        Field.EC_LATITUDE: lat,
        Field.EARTH_DISTANCE: km / transforms.AU_KM,
    }


@_formula(BodyKind.PLANET, Field.HE_LONGITUDE, Field.HE_LATITUDE, Field.HE_RADIUS)
def _planet_heliocentric(obs, body):
    lon, lat, r = planet_heliocentric(body, _t(obs))
    return {Field.HE_LONGITUDE: lon, Field.HE_LATITUDE: lat, Field.HE_RADIUS: r}


@_formula(BodyKind.PLANET, Field.EC_LONGITUDE, Field.EC_LATITUDE, Field.EARTH_DISTANCE)
def _planet_geocentric(obs, body):
    """Geocentric position, corrected for the light travel time from the planet."""
    earth = spherical_to_rectangular(
        obs.cached(ObsField.EARTH_HE_LONGITUDE),
        obs.cached(ObsField.EARTH_HE_LATITUDE),
        obs.cached(ObsField.EARTH_HE_RADIUS),
    )
    planet = spherical_to_rectangular(
        obs.cached(Field.HE_LONGITUDE, body.key),
        obs.cached(Field.HE_LATITUDE, body.key),
        obs.cached(Field.HE_RADIUS, body.key),
    )
    t = _t(obs)
    for _ in range(LIGHT_TIME_PASSES):
        x, y, z = (p - e for p, e in zip(planet, earth))
        delta = math.sqrt(x * x + y * y + z * z)
        tau = LIGHT_TIME_DAYS * delta / 36525.0
        planet = spherical_to_rectangular(*planet_heliocentric(body, t - tau))

    lon, lat, delta = rectangular_to_spherical(*(p - e for p, e in zip(planet, earth)))
    lon, lat = transforms.fk5_correction(lon, lat, t)
    return {Field.EC_LONGITUDE: lon, Field.EC_LATITUDE: lat, Field.EARTH_DISTANCE: delta}


# Equatorial coordinates.


@_formula(None, Field.RIGHT_ASCENSION_AS, Field.DECLINATION_AS)
def _astrometric(obs, body):
    ra, dec = transforms.ecliptic_to_equatorial(
        obs.cached(Field.EC_LONGITUDE, body.key),
        obs.cached(Field.EC_LATITUDE, body.key),
        obs.cached(ObsField.MEAN_OBLIQUITY),
    )
    return {Field.RIGHT_ASCENSION_AS: ra, Field.DECLINATION_AS: dec}


@_formula(BodyKind.SUN, Field.EC_LONGITUDE_AP, Field.EC_LATITUDE_AP)
def _sun_apparent(obs, body):
    lon = (
        obs.cached(Field.EC_LONGITUDE, body.key)
        + obs.cached(ObsField.NUTATION_IN_LONGITUDE)
        + transforms.solar_aberration(obs.cached(Field.EARTH_DISTANCE, body.key))
    )
    return {
        Field.EC_LONGITUDE_AP: norm_2pi(lon),
        Field.EC_LATITUDE_AP: obs.cached(Field.EC_LATITUDE, body.key),
    }


@_formula(BodyKind.MOON, Field.EC_LONGITUDE_AP, Field.EC_LATITUDE_AP)
def _moon_apparent(obs, body):
    lon = obs.cached(Field.EC_LONGITUDE, body.key) + obs.cached(ObsField.NUTATION_IN_LONGITUDE)
    return {
        Field.EC_LONGITUDE_AP: norm_2pi(lon),
        Field.EC_LATITUDE_AP: obs.cached(Field.EC_LATITUDE, body.key),
    }


@_formula(BodyKind.PLANET, Field.EC_LONGITUDE_AP, Field.EC_LATITUDE_AP)
def _planet_apparent(obs, body):
    lon = obs.cached(Field.EC_LONGITUDE, body.key)
    lat = obs.cached(Field.EC_LATITUDE, body.key)
    sun_lon = obs.cached(ObsField.EARTH_HE_LONGITUDE) + math.pi
    dlon, dlat = transforms.annual_aberration(lon, lat, sun_lon, _t(obs))
    lon += dlon + obs.cached(ObsField.NUTATION_IN_LONGITUDE)
    return {Field.EC_LONGITUDE_AP: norm_2pi(lon), Field.EC_LATITUDE_AP: lat + dlat}


@_formula(None, Field.RIGHT_ASCENSION_AP, Field.DECLINATION_AP)
def _apparent_equatorial(obs, body):
    ra, dec = transforms.ecliptic_to_equatorial(
        obs.cached(Field.EC_LONGITUDE_AP, body.key),
        obs.cached(Field.EC_LATITUDE_AP, body.key),
        obs.cached(ObsField.TRUE_OBLIQUITY),
    )
    return {Field.RIGHT_ASCENSION_AP: ra, Field.DECLINATION_AP: dec}


# The observer's view.


@_formula(None, Field.HORIZONTAL_PARALLAX)
def _parallax(obs, body):
    distance = obs.cached(Field.EARTH_DISTANCE, body.key)
    return {Field.HORIZONTAL_PARALLAX: transforms.horizontal_parallax(distance)}


@_formula(None, Field.RIGHT_ASCENSION_TOPO, Field.DECLINATION_TOPO, Field.TOPO_DISTANCE)
def _topocentric(obs, body):
    ra = obs.cached(Field.RIGHT_ASCENSION_AP, body.key)
    lst = math.radians(obs.cached(ObsField.LOCAL_SIDEREAL_TIME) * 15.0)
    ra_topo, dec_topo, distance = transforms.topocentric(
        ra,
        obs.cached(Field.DECLINATION_AP, body.key),
        obs.cached(Field.EARTH_DISTANCE, body.key),
        obs.cached(Field.HORIZONTAL_PARALLAX, body.key),
        lst - ra,
        obs.cached(ObsField.RHO_SIN_PHI),
        obs.cached(ObsField.RHO_COS_PHI),
    )
    return {
        Field.RIGHT_ASCENSION_TOPO: ra_topo,
        Field.DECLINATION_TOPO: dec_topo,
        Field.TOPO_DISTANCE: distance,
    }


@_formula(None, Field.LOCAL_HOUR_ANGLE)
def _hour_angle(obs, body):
    lst = math.radians(obs.cached(ObsField.LOCAL_SIDEREAL_TIME) * 15.0)
    return {Field.LOCAL_HOUR_ANGLE: norm_2pi(lst - obs.cached(Field.RIGHT_ASCENSION_TOPO, body.key))}


@_formula(None, Field.LOCAL_AZIMUTH, Field.LOCAL_ALTITUDE)
def _horizontal(obs, body):
    azimuth, altitude = transforms.horizontal(
        obs.cached(Field.LOCAL_HOUR_ANGLE, body.key),
        obs.cached(Field.DECLINATION_TOPO, body.key),
        obs.position.lat,
    )
    return {Field.LOCAL_AZIMUTH: azimuth, Field.LOCAL_ALTITUDE: altitude}


# Appearance.


@_formula(BodyKind.SUN, Field.PHASE_ANGLE)
def _sun_phase_angle(obs, body):
    return {Field.PHASE_ANGLE: 0.0}


@_formula(BodyKind.MOON, Field.PHASE_ANGLE)
def _moon_phase_angle(obs, body):
    angle = illumination.moon_phase_angle(
        obs.cached(Field.EC_LONGITUDE_AP, body.key),
        obs.cached(Field.EC_LATITUDE_AP, body.key),
        obs.cached(Field.EARTH_DISTANCE, body.key),
        obs.cached(Field.EC_LONGITUDE_AP, "sun"),
        obs.cached(Field.EARTH_DISTANCE, "sun"),
    )
    return {Field.PHASE_ANGLE: angle}


@_formula(BodyKind.PLANET, Field.PHASE_ANGLE)
def _planet_phase_angle(obs, body):
    angle = illumination.planet_phase_angle(
        obs.cached(Field.HE_RADIUS, body.key),
        obs.cached(Field.EARTH_DISTANCE, body.key),
        obs.cached(ObsField.EARTH_HE_RADIUS),
    )
    return {Field.PHASE_ANGLE: angle}


@_formula(None, Field.PHASE)
def _phase(obs, body):
    return {Field.PHASE: illumination.illuminated_fraction(obs.cached(Field.PHASE_ANGLE, body.key))}


@_formula(None, Field.ABS_BRIGHT_LIMB)
def _bright_limb(obs, body):
    chi = illumination.bright_limb(
        obs.cached(Field.RIGHT_ASCENSION_AP, body.key),
        obs.cached(Field.DECLINATION_AP, body.key),
        obs.cached(Field.RIGHT_ASCENSION_AP, "sun"),
        obs.cached(Field.DECLINATION_AP, "sun"),
    )
    return {Field.ABS_BRIGHT_LIMB: chi}


@_formula(None, Field.APPARENT_DIAMETER)
def _diameter(obs, body):
    distance = obs.cached(Field.EARTH_DISTANCE, body.key)
    return {Field.APPARENT_DIAMETER: illumination.apparent_diameter(body.semidiameter, distance)}


@_formula(BodyKind.MOON, Field.APPARENT_DIAMETER)
def _moon_diameter(obs, body):
    km = obs.cached(Field.EARTH_DISTANCE, body.key) * transforms.AU_KM
    return {Field.APPARENT_DIAMETER: illumination.moon_diameter(km)}


@_formula(BodyKind.SUN, Field.MAGNITUDE)
def _sun_magnitude(obs, body):
    distance = obs.cached(Field.EARTH_DISTANCE, body.key)
    return {Field.MAGNITUDE: illumination.sun_magnitude(body.magnitude[0], distance)}


@_formula(BodyKind.MOON, Field.MAGNITUDE)
def _moon_magnitude(obs, body):
    angle = obs.cached(Field.PHASE_ANGLE, body.key)
    return {Field.MAGNITUDE: illumination.moon_magnitude(body.magnitude[0], angle)}


@_formula(BodyKind.PLANET, Field.MAGNITUDE)
def _planet_magnitude(obs, body):
    magnitude = illumination.planet_magnitude(
        body.magnitude,
        obs.cached(Field.HE_RADIUS, body.key),
        obs.cached(Field.EARTH_DISTANCE, body.key),
        obs.cached(Field.PHASE_ANGLE, body.key),
    )
    return {Field.MAGNITUDE: magnitude}
