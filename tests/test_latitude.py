import pytest

from oatcore.latitude import Latitude


def test_parse_meade_value():
    assert Latitude.parse_meade("+45*30:00") == Latitude(45, 30, 0)
    assert Latitude.parse_meade("+45*30:00").total_hours() == pytest.approx(45.5)


def test_parse_meade_clamps_high():
    assert Latitude.parse_meade("+95*00:00").total_hours() == 90


def test_parse_meade_clamps_low():
    assert Latitude.parse_meade("-95*00:00").total_hours() == -90


def test_add_hours_clamps():
    lat = Latitude(80, 0, 0)
    lat.add_hours(20)
    assert lat == Latitude(90, 0, 0)


def test_negative_latitude_kept():
    lat = Latitude(-30, 0, 0)
    lat.add_hours(-5)
    assert lat == Latitude(-35, 0, 0)


def test_from_hours():
    assert Latitude.from_hours(-33.5) == Latitude(-33, 30, 0)


def test_default_is_equator():
    assert Latitude().total_seconds() == 0


def test_round_trip_format():
    assert Latitude.parse_meade("-12*34:56").format("{d}*{m}:{s}") == "-12*34:56"


def test_parse_rejects_garbage():
    with pytest.raises(ValueError):
        Latitude.parse_meade("xx")