import math

import pytest

from almanac import (
    EngineConfig,
    EventKind,
    EventState,
    Field,
    Instant,
    NonconvergenceError,
    Observation,
    Position,
)
from almanac.ephemeris import riseset
from almanac.models.bodies import SOLAR_SYSTEM_BODIES


def altitude_at(event, position, body="sun"):
    obs = Observation(event.instant, position)
    return math.degrees(obs.get_body(body).get(Field.LOCAL_ALTITUDE))


class TestVenus:
    """Meeus example 15.a: Venus from Boston on 1988 March 20."""

    @pytest.fixture
    def venus(self):
        boston = Position.from_degrees(42.3333, -71.0833)
        return Observation(Instant.from_ymd(1988, 3, 20.0), boston).get_planet("venus")

    def test_rise(self, venus):
        assert venus.get(Field.RISE_TIME) == pytest.approx(24.0 * 0.51766, abs=0.01)

    def test_transit(self, venus):
        assert venus.get(Field.TRANSIT_TIME) == pytest.approx(24.0 * 0.81980, abs=0.01)

    def test_set(self, venus):
        assert venus.get(Field.SET_TIME) == pytest.approx(24.0 * 0.12130, abs=0.01)

    def test_event_details(self, venus):
        event = venus.event(EventKind.RISE)
        assert event.occurs
        assert event.kind is EventKind.RISE
        assert event.hours == venus.get(Field.RISE_TIME)
        assert event.instant.midnight() == Instant.from_ymd(1988, 3, 20.0)
        assert venus.event(Field.SET_TIME).kind is EventKind.SET


class TestSun:
    """The Sun at 52°N 0°E on 1979 September 7."""

    position = Position.from_degrees(52.0, 0.0)

    @pytest.fixture
    def sun(self):
        return Observation(Instant.from_ymd(1979, 9, 7.0), self.position).get_sun()

    def test_times(self, sun):
        assert sun.get(Field.RISE_TIME) == pytest.approx(5.338, abs=0.03)
        assert sun.get(Field.TRANSIT_TIME) == pytest.approx(11.9696, abs=0.005)
        assert sun.get(Field.SET_TIME) == pytest.approx(18.583, abs=0.03)

    def test_twilight(self, sun):
        assert sun.get(Field.RISE_TWILIGHT) == pytest.approx(3.283, abs=0.05)
        assert sun.get(Field.SET_TWILIGHT) == pytest.approx(20.616667, abs=0.05)

    @pytest.mark.parametrize("kind", [EventKind.RISE, EventKind.SET])
    def test_altitude_at_rise_and_set(self, sun, kind):
        """Test that the Sun's centre sits at the standard altitude at the found times."""
        assert altitude_at(sun.event(kind), self.position) == pytest.approx(-0.8333, abs=0.01)

    @pytest.mark.parametrize("kind", [EventKind.RISE_TWILIGHT, EventKind.SET_TWILIGHT])
    def test_altitude_at_twilight(self, sun, kind):
        assert altitude_at(sun.event(kind), self.position) == pytest.approx(-18.0, abs=0.01)

    def test_hour_angle_at_transit(self, sun):
        obs = Observation(sun.event(EventKind.TRANSIT).instant, self.position)
        hour_angle = math.degrees(obs.get_sun().get(Field.LOCAL_HOUR_ANGLE))
        assert min(hour_angle, 360.0 - hour_angle) < 0.01

    def test_twilight_depression_configurable(self):
        civil = EngineConfig(twilight_depression_deg=6.0)
        obs = Observation(Instant.from_ymd(1979, 9, 7.0), self.position, config=civil)
        dawn = obs.get_sun().event(EventKind.RISE_TWILIGHT)
        assert altitude_at(dawn, self.position) == pytest.approx(-6.0, abs=0.01)


class TestMoon:
    """The Moon from Greenwich on 1992 April 12."""

    def test_rise_uses_parallax(self):
        greenwich = Position.from_degrees(51.4769, 0.0)
        moon = Observation(Instant.from_ymd(1992, 4, 12.0), greenwich).get_moon()
        event = moon.event(EventKind.RISE)
        assert event.occurs

        at_rise = Observation(event.instant, greenwich).get_moon()
        parallax = math.degrees(at_rise.get(Field.HORIZONTAL_PARALLAX))
        # Topocentric altitude: the standard geocentric altitude less the parallax.
        expected = 0.7275 * parallax - 0.5667 - parallax
        assert math.degrees(at_rise.get(Field.LOCAL_ALTITUDE)) == pytest.approx(expected, abs=0.02)


class TestMoonWithoutCrossing:
    """Greenwich in April 1992: no moonrise on the 21st, no moonset on the 7th."""

    greenwich = Position.from_degrees(51.4769, 0.0)

    def moon(self, day):
        return Observation(Instant.from_ymd(1992, 4, float(day)), self.greenwich).get_moon()

    def test_no_rise(self):
        moon = self.moon(21)
        event = moon.event(EventKind.RISE)
        assert event.state is EventState.NO_CROSSING
        assert event.instant is None
        assert event.hours is None
        assert moon.get(Field.RISE_TIME) is None

    def test_no_set(self):
        moon = self.moon(7)
        assert moon.event(EventKind.SET).state is EventState.NO_CROSSING
        assert moon.get(Field.SET_TIME) is None

    def test_rises_late_the_day_before(self):
        assert self.moon(20).get(Field.RISE_TIME) > 20.0

    def test_rises_early_the_day_after(self):
        assert self.moon(22).get(Field.RISE_TIME) < 4.0

    def test_other_events_unaffected(self):
        moon = self.moon(21)
        assert moon.event(EventKind.SET).occurs
        assert moon.event(EventKind.TRANSIT).occurs

    def test_not_strict_about_days_without_crossing(self):
        config = EngineConfig(strict=True)
        moon = Observation(Instant.from_ymd(1992, 4, 21.0), self.greenwich, config=config).get_moon()
        assert moon.get(Field.RISE_TIME) is None


class TestNoCrossing:
    """Days on which the Sun never crosses the horizon."""

    def test_midnight_sun(self):
        arctic = Position.from_degrees(80.0, 0.0)
        sun = Observation(Instant.from_ymd(1979, 6, 21.0), arctic).get_sun()
        for field in (Field.RISE_TIME, Field.SET_TIME, Field.RISE_TWILIGHT, Field.SET_TWILIGHT):
            assert sun.get(field) is None
            assert sun.event(field).state is EventState.CIRCUMPOLAR
        assert not sun.event(EventKind.RISE).occurs
        assert sun.event(EventKind.RISE).instant is None

    def test_polar_night(self):
        antarctic = Position.from_degrees(-80.0, 0.0)
        sun = Observation(Instant.from_ymd(1979, 6, 21.0), antarctic).get_sun()
        assert sun.get(Field.RISE_TIME) is None
        assert sun.event(EventKind.SET).state is EventState.NEVER_RISES

    def test_transit_still_occurs(self):
        arctic = Position.from_degrees(80.0, 0.0)
        sun = Observation(Instant.from_ymd(1979, 6, 21.0), arctic).get_sun()
        hours = sun.get(Field.TRANSIT_TIME)
        assert hours == pytest.approx(12.0, abs=0.1)


class TestConvergence:
    """Behaviour when refinement runs out of iterations."""

    boston = Position.from_degrees(42.3333, -71.0833)

    def test_strict_raises(self):
        config = EngineConfig(event_tolerance_days=0.0, event_max_iterations=2, strict=True)
        venus = Observation(Instant.from_ymd(1988, 3, 20.0), self.boston, config=config).get_planet("venus")
        with pytest.raises(NonconvergenceError) as info:
            venus.get(Field.RISE_TIME)
        assert info.value.iterations == 2
        assert info.value.best_estimate == pytest.approx(24.0 * 0.51766, abs=0.01)

    def test_lenient_warns(self, caplog):
        config = EngineConfig(event_tolerance_days=0.0, event_max_iterations=2)
        venus = Observation(Instant.from_ymd(1988, 3, 20.0), self.boston, config=config).get_planet("venus")
        hours = venus.get(Field.RISE_TIME)
        assert hours == pytest.approx(24.0 * 0.51766, abs=0.01)
        assert "did not converge" in caplog.text


class TestHelpers:
    def test_interpolate(self):
        assert riseset.interpolate(1.0, 2.0, 3.0, 0.5) == pytest.approx(2.5)
        assert riseset.interpolate(1.0, 0.0, 1.0, 0.5) == pytest.approx(0.25)

    def test_standard_altitude(self):
        sun = SOLAR_SYSTEM_BODIES["sun"]
        moon = SOLAR_SYSTEM_BODIES["moon"]
        venus = SOLAR_SYSTEM_BODIES["venus"]
        parallax = math.radians(0.95)
        assert riseset.standard_altitude(sun, EventKind.RISE, 0.0, 18.0) == -0.8333
        assert riseset.standard_altitude(venus, EventKind.SET, 0.0, 18.0) == -0.5667
        assert riseset.standard_altitude(sun, EventKind.SET_TWILIGHT, 0.0, 12.0) == -12.0
        assert riseset.standard_altitude(moon, EventKind.RISE, parallax, 18.0) == pytest.approx(
            0.7275 * 0.95 - 0.5667
        )
