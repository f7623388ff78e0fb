import math

import pytest

from almanac import Position, describe_position
from almanac.geodesy.poi import EARTH_TILT, POINT_NEMO, notable_latitudes


def test_at_the_pole():
    """Test that standing on a pole says so."""
    assert describe_position(Position.from_degrees(90.0, 12.0)) == "At the North Pole"
    assert describe_position(Position.from_degrees(-90.0, 12.0)) == "At the South Pole"


def test_near_the_pole():
    """Test distance from a pole; meridians are ignored so close to it."""
    assert describe_position(Position.from_degrees(89.5, 12.0)) == "30 nm from the North Pole"


def test_on_the_equator():
    assert describe_position(Position.from_degrees(0.0, 40.0)) == "On the Equator"


def test_north_of_the_equator():
    assert describe_position(Position.from_degrees(2.0 / 60.0, 40.0)) == "2.0 nm N of the Equator"
    assert describe_position(Position.from_degrees(0.001, 40.0)) == "365 feet N of the Equator"


def test_tropic_of_cancer():
    lat = math.degrees(EARTH_TILT) - 1.0
    assert describe_position(Position.from_degrees(lat, 40.0)) == "60 nm S of the Tropic of Cancer"


def test_meridians():
    """Test the Prime Meridian and the 180° meridian."""
    assert describe_position(Position.from_degrees(10.0, 0.5)) == "30 nm E of the Prime Meridian"
    assert describe_position(Position.from_degrees(-10.0, 179.5)) == "30 nm W of the 180° meridian"


def test_point_nemo():
    assert describe_position(POINT_NEMO) == "At Point Nemo"
    nearby = Position.from_degrees(POINT_NEMO.lat_degrees + 1.0, POINT_NEMO.lon_degrees)
    assert describe_position(nearby) == "60 nm from Point Nemo"


def test_nothing_nearby():
    assert describe_position(Position.from_degrees(45.0, 40.0)) is None


def test_tilt_moves_the_tropics():
    """Test that the notable parallels follow the tilt argument."""
    tilt = math.radians(25.0)
    position = Position.from_degrees(25.0, 40.0)
    assert describe_position(position, tilt=tilt) == "On the Tropic of Cancer"

    names = [name for name, _ in notable_latitudes(tilt)]
    assert names[0] == "the North Pole"
    assert names[-1] == "the South Pole"
    latitudes = [lat for _, lat in notable_latitudes(tilt)]
    assert latitudes == sorted(latitudes, reverse=True)
    assert latitudes[1] == pytest.approx(math.radians(65.0))
