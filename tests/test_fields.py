import graphlib

import pytest

from almanac.ephemeris import pipeline
from almanac.models import fields
from almanac.models.bodies import BodyKind
from almanac.models.fields import (
    EVENT_FIELDS,
    FIELD_DEPENDENCIES,
    OBS_FIELD_DEPENDENCIES,
    Field,
    ObsField,
    check_acyclic,
    is_defined,
    needs_observer,
)


class TestDependencyTable:
    """The static dependency table."""

    def test_acyclic(self):
        order = check_acyclic()
        assert (None, ObsField.MEAN_OBLIQUITY) in order
        # Dependencies come before the fields that use them.
        assert order.index((None, ObsField.TRUE_OBLIQUITY)) < order.index(
            (BodyKind.SUN, Field.RIGHT_ASCENSION_AP)
        )

    def test_cycle_detected(self, monkeypatch):
        table = dict(FIELD_DEPENDENCIES[BodyKind.SUN])
        table[Field.EC_LONGITUDE] = (Field.RIGHT_ASCENSION_AP,)
        monkeypatch.setitem(fields.FIELD_DEPENDENCIES, BodyKind.SUN, table)
        with pytest.raises(graphlib.CycleError):
            check_acyclic()

    def test_every_obs_field_listed(self):
        assert set(OBS_FIELD_DEPENDENCIES) == set(ObsField)

    @pytest.mark.parametrize("kind", list(BodyKind))
    def test_every_defined_field_has_formula(self, kind):
        for field in FIELD_DEPENDENCIES[kind]:
            assert pipeline.has_formula(kind, field), field

    def test_every_obs_field_has_formula(self):
        for field in ObsField:
            assert field in pipeline._OBS_FORMULAS

    def test_events_defined_for_every_kind(self):
        for kind in BodyKind:
            for field in (Field.RISE_TIME, Field.TRANSIT_TIME, Field.SET_TIME):
                assert is_defined(kind, field)
                assert field.is_event

    def test_twilight_only_for_the_sun(self):
        for field in (Field.RISE_TWILIGHT, Field.SET_TWILIGHT):
            assert field in EVENT_FIELDS
            assert is_defined(BodyKind.SUN, field)
            assert not is_defined(BodyKind.MOON, field)
            assert not is_defined(BodyKind.PLANET, field)
            assert not needs_observer(BodyKind.MOON, field)

    @pytest.mark.parametrize(
        "kind,field,defined",
        [
            (BodyKind.SUN, Field.HE_LONGITUDE, False),
            (BodyKind.SUN, Field.ABS_BRIGHT_LIMB, False),
            (BodyKind.SUN, Field.MAGNITUDE, True),
            (BodyKind.MOON, Field.HE_RADIUS, False),
            (BodyKind.MOON, Field.ABS_BRIGHT_LIMB, True),
            (BodyKind.PLANET, Field.HE_LATITUDE, True),
            (BodyKind.PLANET, Field.PHASE, True),
        ],
    )
    def test_is_defined(self, kind, field, defined):
        assert is_defined(kind, field) is defined


class TestNeedsObserver:
    """Which fields require an observer position."""

    @pytest.mark.parametrize(
        "field",
        [
            Field.RIGHT_ASCENSION_TOPO,
            Field.DECLINATION_TOPO,
            Field.TOPO_DISTANCE,
            Field.LOCAL_HOUR_ANGLE,
            Field.LOCAL_AZIMUTH,
            Field.LOCAL_ALTITUDE,
            Field.RISE_TIME,
            Field.TRANSIT_TIME,
        ],
    )
    def test_local_fields(self, field):
        for kind in BodyKind:
            assert needs_observer(kind, field)

    @pytest.mark.parametrize(
        "field",
        [
            Field.RIGHT_ASCENSION_AP,
            Field.DECLINATION_AS,
            Field.EARTH_DISTANCE,
            Field.HORIZONTAL_PARALLAX,
            Field.PHASE,
            Field.MAGNITUDE,
        ],
    )
    def test_geocentric_fields(self, field):
        for kind in BodyKind:
            assert not needs_observer(kind, field)

    def test_obs_fields(self):
        assert needs_observer(None, ObsField.LOCAL_SIDEREAL_TIME)
        assert needs_observer(None, ObsField.RHO_SIN_PHI)
        assert not needs_observer(None, ObsField.GAST_INSTANT)
        assert not needs_observer(None, ObsField.EARTH_HE_RADIUS)
