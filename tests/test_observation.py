import math

import pytest

from almanac import (
    Body,
    EngineConfig,
    Field,
    InvalidArgumentError,
    Instant,
    NoObserverError,
    Observation,
    ObsField,
    Position,
    UndefinedFieldError,
    UnknownBodyError,
)
from almanac.ephemeris import pipeline


@pytest.fixture
def observation():
    """An observation at Boston on 1988-07-27 0:30 UT."""
    return Observation(
        Instant.from_ymd_hms(1988, 7, 27, 0, 30),
        Position.from_degrees(42.3333, -71.0833),
    )


@pytest.fixture
def earth_calls(monkeypatch):
    """Count evaluations of the Earth's VSOP87 series."""
    calls = []
    original = pipeline.earth_heliocentric

    def counting(t):
        calls.append(t)
        return original(t)

    monkeypatch.setattr(pipeline, "earth_heliocentric", counting)
    return calls


class TestCache:
    """Lazy evaluation and invalidation."""

    def test_values_computed_once(self, observation, earth_calls):
        """Test that repeated and shared requests reuse cached values."""
        sun = observation.get_sun()
        first = sun.get(Field.RIGHT_ASCENSION_AP)
        second = sun.get(Field.RIGHT_ASCENSION_AP)
        observation.get_planet("venus").get(Field.EARTH_DISTANCE)

        assert first == second
        assert len(earth_calls) == 1

    def test_time_change_invalidates(self, observation, earth_calls):
        """Test that a new time forces recomputation."""
        sun = observation.get_sun()
        before = sun.get(Field.EC_LONGITUDE)
        observation.set_date(1988, 7, 28.0)
        after = sun.get(Field.EC_LONGITUDE)

        assert len(earth_calls) == 2
        # About one degree a day.
        assert math.degrees(after - before) == pytest.approx(0.97, abs=0.1)

    def test_same_result_after_invalidate(self, observation):
        """Test that recomputation is deterministic."""
        moon = observation.get_moon()
        before = moon.get(Field.LOCAL_ALTITUDE)
        observation.invalidate()
        assert observation.cache_size == 0
        assert moon.get(Field.LOCAL_ALTITUDE) == before

    def test_generation(self, observation):
        """Test that every mutation bumps the generation."""
        start = observation.generation
        observation.set_date(2000, 1, 1.0)
        observation.set_time(Instant.from_ymd(2000, 1, 2.0))
        observation.set_observer_position(Position.from_degrees(0.0, 0.0))
        observation.set_observer_altitude(100.0)
        observation.invalidate()
        assert observation.generation == start + 5

    def test_position_change_invalidates_local_fields(self, observation):
        """Test that moving the observer changes local but not geocentric fields."""
        sun = observation.get_sun()
        ra = sun.get(Field.RIGHT_ASCENSION_AP)
        azimuth = sun.get(Field.LOCAL_AZIMUTH)
        observation.set_observer_position(Position.from_degrees(-33.9, 151.2))
        assert sun.get(Field.RIGHT_ASCENSION_AP) == ra
        assert sun.get(Field.LOCAL_AZIMUTH) != azimuth

    def test_altitude_changes_topocentric_distance(self, observation):
        """Test that the observer's height feeds the parallax correction."""
        moon = observation.get_moon()
        low = moon.get(Field.TOPO_DISTANCE)
        observation.set_observer_altitude(10000.0)
        assert moon.get(Field.TOPO_DISTANCE) != low

    def test_cached_requires_prior_computation(self, observation):
        with pytest.raises(AssertionError):
            observation.cached(ObsField.MEAN_OBLIQUITY)

    def test_formula_results_are_shared(self, observation):
        """Test that fields computed together are cached together."""
        sun = observation.get_sun()
        sun.get(Field.RIGHT_ASCENSION_AP)
        assert observation.cached(Field.DECLINATION_AP, "sun") == sun.get(Field.DECLINATION_AP)


class TestBodies:
    """Body lookup."""

    def test_get_body(self, observation):
        assert observation.get_body("Mars").name == "Mars"
        assert observation.get_body("SUN") == observation.get_sun()
        assert observation.get_planet("jupiter").kind.value == "planet"

    def test_bodies(self, observation):
        names = [b.name for b in observation.bodies()]
        assert names[:2] == ["Sun", "Moon"]
        assert len(names) == 9

    def test_unknown_body(self, observation):
        with pytest.raises(UnknownBodyError) as info:
            observation.get_body("pluto")
        assert "Available bodies" in str(info.value)

    def test_get_planet_rejects_non_planets(self, observation):
        with pytest.raises(UnknownBodyError):
            observation.get_planet("moon")

    def test_handles_from_different_observations_differ(self, observation):
        other = Observation(observation.instant, observation.position)
        assert observation.get_sun() != other.get_sun()
        assert len({observation.get_sun(), observation.get_sun()}) == 1

    def test_body_handle(self, observation):
        sun = observation.get_sun()
        assert isinstance(sun, Body)
        assert sun.observation is observation
        assert sun.info.semidiameter == pytest.approx(959.63)


class TestFieldAccess:
    """Errors and argument handling on field access."""

    @pytest.mark.parametrize(
        "name,field",
        [
            ("sun", Field.HE_LONGITUDE),
            ("sun", Field.HE_RADIUS),
            ("sun", Field.ABS_BRIGHT_LIMB),
            ("moon", Field.HE_LONGITUDE),
            ("moon", Field.HE_LATITUDE),
            ("moon", Field.RISE_TWILIGHT),
            ("jupiter", Field.SET_TWILIGHT),
        ],
    )
    def test_undefined_fields(self, observation, name, field):
        with pytest.raises(UndefinedFieldError):
            observation.get_body(name).get(field)

    @pytest.mark.parametrize(
        "field",
        [
            Field.LOCAL_ALTITUDE,
            Field.LOCAL_AZIMUTH,
            Field.RIGHT_ASCENSION_TOPO,
            Field.LOCAL_HOUR_ANGLE,
            Field.RISE_TIME,
            Field.SET_TWILIGHT,
        ],
    )
    def test_local_fields_need_observer(self, field):
        observation = Observation(Instant.from_ymd(2000, 1, 1.0))
        with pytest.raises(NoObserverError):
            observation.get_sun().get(field)

    def test_local_sidereal_time_needs_observer(self):
        observation = Observation(Instant.from_ymd(2000, 1, 1.0))
        with pytest.raises(NoObserverError):
            observation.get(ObsField.LOCAL_SIDEREAL_TIME)

    def test_geocentric_fields_without_observer(self):
        observation = Observation(Instant.from_ymd(2000, 1, 1.0))
        assert 0.0 <= observation.get_moon().get(Field.RIGHT_ASCENSION_AP) < 2.0 * math.pi
        assert observation.get(ObsField.GMST_INSTANT) > 0.0

    def test_field_names_accepted(self, observation):
        sun = observation.get_sun()
        assert sun.get("right_ascension_ap") == sun.get(Field.RIGHT_ASCENSION_AP)
        assert observation.get("mean_obliquity") == observation.get(ObsField.MEAN_OBLIQUITY)

    def test_bad_field_name(self, observation):
        with pytest.raises(InvalidArgumentError):
            observation.get_sun().get("sunniness")

    def test_event_requires_event_field(self, observation):
        with pytest.raises(InvalidArgumentError):
            observation.get_sun().event(Field.RIGHT_ASCENSION_AP)

    def test_every_field_of_every_body(self, observation):
        """Test that each defined field evaluates to a finite number."""
        from almanac.models.fields import EVENT_FIELDS, is_defined

        for body in observation.bodies():
            for field in Field:
                if field in EVENT_FIELDS or not is_defined(body.kind, field):
                    continue
                value = body.get(field)
                assert math.isfinite(value), (body.name, field)

    def test_every_observation_field(self, observation):
        for field in ObsField:
            assert math.isfinite(observation.get(field))


def test_default_config_and_instant():
    """Test that an Observation without arguments uses now and the defaults."""
    observation = Observation()
    assert observation.config == EngineConfig()
    assert observation.position is None
    assert observation.instant > Instant.from_ymd(2020, 1, 1.0)
