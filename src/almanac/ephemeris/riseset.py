"""Rise, transit, set and twilight times.

The method is that of Meeus, Astronomical Algorithms, chapter 15. The
apparent position of the body at 0h TD on the day before, the day itself
and the day after gives a first estimate of each event through
three-point interpolation. Each estimate is then refined by evaluating
the full pipeline at the trial time until the correction falls below
the configured tolerance. A search that leaves the day twice, or ends far
from the event without converging, reports that the body does not cross
the threshold on the day.
"""

import logging
import math

from ..angles import norm_pi, safe_asin
from ..errors import NonconvergenceError
from ..models.bodies import BodyInfo, BodyKind
from ..models.events import Event, EventKind, EventState
from ..models.fields import Field, ObsField

log = logging.getLogger(__name__)

# Standard altitudes of the centre of the body at rise and set, degrees.
PLANET_ALTITUDE = -0.5667
SUN_ALTITUDE = -0.8333

# Sidereal degrees per solar day.
SIDEREAL_RATE = 360.985647

# An unconverged search ending further than this from the event, in degrees
# of altitude or hour angle, found no crossing.
MISS_LIMIT_DEG = 0.1


def standard_altitude(body: BodyInfo, kind: EventKind, parallax: float, twilight_depression: float) -> float:
    """The altitude in degrees the body's centre has at the event.

    Args:
        body: The body
        kind: The event sought
        parallax: The body's horizontal parallax in radians
        twilight_depression: Depression of the Sun below the horizon
            defining twilight, in degrees
    """
    if kind.is_twilight:
        return -twilight_depression
    if body.kind is BodyKind.SUN:
        return SUN_ALTITUDE
    if body.kind is BodyKind.MOON:
        return 0.7275 * math.degrees(parallax) + PLANET_ALTITUDE
    return PLANET_ALTITUDE


def interpolate(y1: float, y2: float, y3: float, n: float) -> float:
    """Three-point interpolation about the central value (Meeus 3.3)."""
    a = y2 - y1
    b = y3 - y2
    c = b - a
    return y2 + n / 2.0 * (a + b + n * c)


def _unwrap(values: list[float]) -> list[float]:
    """Remove 360° jumps from a short run of right ascensions."""
    result = [values[0]]
    for v in values[1:]:
        while v - result[-1] > 180.0:
            v -= 360.0
        while v - result[-1] < -180.0:
            v += 360.0
        result.append(v)
    return result


def _wrap(m: float) -> float:
    """Reduce a day fraction into [0, 1)."""
    m %= 1.0
    # A tiny negative value rounds up to exactly 1.0.
    return 0.0 if m >= 1.0 else m


def _apparent(instant, body: BodyInfo, config):
    """Apparent RA and Dec in degrees, horizontal parallax and GAST hours at an instant."""
    from ..observation import Observation

    scratch = Observation(instant, config=config)
    handle = scratch.get_body(body.key)
    return (
        math.degrees(handle.get(Field.RIGHT_ASCENSION_AP)),
        math.degrees(handle.get(Field.DECLINATION_AP)),
        handle.get(Field.HORIZONTAL_PARALLAX),
        scratch.get(ObsField.GAST_INSTANT),
    )


def _hour_angle(gast_degrees: float, west_lon: float, ra: float) -> float:
    """Local hour angle in degrees, in [-180, 180)."""
    return math.degrees(norm_pi(math.radians(gast_degrees - west_lon - ra)))


def _altitude(hour_angle: float, dec: float, lat: float) -> float:
    phi = math.radians(lat)
    delta = math.radians(dec)
    H = math.radians(hour_angle)
    return math.degrees(safe_asin(math.sin(phi) * math.sin(delta) + math.cos(phi) * math.cos(delta) * math.cos(H)))


def _correction(kind: EventKind, hour_angle: float, dec: float, lat: float, h0: float) -> float:
    """Correction to the day fraction m, from the local hour angle (degrees)."""
    if kind is EventKind.TRANSIT:
        return -hour_angle / 360.0
    h = _altitude(hour_angle, dec, lat)
    denom = 360.0 * math.cos(math.radians(dec)) * math.cos(math.radians(lat)) * math.sin(math.radians(hour_angle))
    if abs(denom) < 1e-12:
        return 0.0
    return (h - h0) / denom


def _miss(kind: EventKind, hour_angle: float, dec: float, lat: float, h0: float) -> float:
    """How far in degrees a position is from the one that defines the event."""
    if kind is EventKind.TRANSIT:
        return abs(hour_angle)
    return abs(_altitude(hour_angle, dec, lat) - h0)


def find_event(observation, body: BodyInfo, kind: EventKind) -> Event:
    """Find a rise, transit, set or twilight on the observation's civil day.

    Args:
        observation: Supplies the day (UT), the observer and the configuration
        body: The body
        kind: Which event to find

    Returns:
        The Event; days with no crossing give CIRCUMPOLAR, NEVER_RISES or
        NO_CROSSING

    Raises:
        NonconvergenceError: In strict mode, if refinement runs out of iterations
    """
    from ..timekeeping import Instant

    config = observation.config
    position = observation.position
    lat = position.lat_degrees
    west_lon = -position.lon_degrees
    midnight = observation.instant.midnight()
    theta0 = midnight.gast() * 15.0

    samples = [_apparent(Instant.from_td_jd(midnight.ut + d), body, config) for d in (-1, 0, 1)]
    ras = _unwrap([s[0] for s in samples])
    decs = [s[1] for s in samples]
    ra2, dec2, parallax = samples[1][0], samples[1][1], samples[1][2]

    h0 = standard_altitude(body, kind, parallax, config.twilight_depression_deg)
    m = (ra2 + west_lon - theta0) / 360.0
    if kind is not EventKind.TRANSIT:
        phi = math.radians(lat)
        delta = math.radians(dec2)
        cos_h0 = (math.sin(math.radians(h0)) - math.sin(phi) * math.sin(delta)) / (math.cos(phi) * math.cos(delta))
        if cos_h0 < -1.0:
            log.debug("%s stays above %.4f° on this day: no %s", body.name, h0, kind.value)
            return Event(kind, EventState.CIRCUMPOLAR)
        if cos_h0 > 1.0:
            log.debug("%s stays below %.4f° on this day: no %s", body.name, h0, kind.value)
            return Event(kind, EventState.NEVER_RISES)
        H0 = math.degrees(math.acos(cos_h0))
        if kind in (EventKind.RISE, EventKind.RISE_TWILIGHT):
            m -= H0 / 360.0
        else:
            m += H0 / 360.0
    m = _wrap(m)

    # First correction from the interpolated positions.
    n = m + midnight.delta_t / 86400.0
    ra = interpolate(*ras, n)
    dec = interpolate(*decs, n)
    H = _hour_angle(theta0 + SIDEREAL_RATE * m, west_lon, ra)
    m += _correction(kind, H, dec, lat, h0)
    wrapped = not 0.0 <= m < 1.0
    m = _wrap(m)

    # Then refine against the full pipeline. The estimate may cross midnight
    # once; leaving the day a second time means the crossing belongs to the
    # day before or after.
    tolerance = config.event_tolerance_days
    for iteration in range(config.event_max_iterations):
        ra, dec, parallax, gast_hours = _apparent(midnight.plus_days(m), body, config)
        if body.kind is BodyKind.MOON:
            h0 = standard_altitude(body, kind, parallax, config.twilight_depression_deg)
        dm = _correction(kind, _hour_angle(gast_hours * 15.0, west_lon, ra), dec, lat, h0)
        m += dm
        if not 0.0 <= m < 1.0:
            if wrapped:
                log.debug("%s %s falls outside this day: no crossing", body.name, kind.value)
                return Event(kind, EventState.NO_CROSSING)
            wrapped = True
            m = _wrap(m)
        if abs(dm) < tolerance:
            log.debug("%s %s converged after %d iterations", body.name, kind.value, iteration + 1)
            break
    else:
        ra, dec, parallax, gast_hours = _apparent(midnight.plus_days(m), body, config)
        miss = _miss(kind, _hour_angle(gast_hours * 15.0, west_lon, ra), dec, lat, h0)
        if miss > MISS_LIMIT_DEG:
            log.debug("%s %s search ended %.3f° from the event: no crossing", body.name, kind.value, miss)
            return Event(kind, EventState.NO_CROSSING)
        if config.strict:
            raise NonconvergenceError(f"{body.name} {kind.value} search", config.event_max_iterations, m * 24.0)
        log.warning(
            "%s %s search did not converge in %d iterations; using the last estimate",
            body.name,
            kind.value,
            config.event_max_iterations,
        )

    return Event(kind, EventState.OCCURS, midnight.plus_days(m), m * 24.0)
