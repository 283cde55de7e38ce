import random

import pytest

from transit_api.services import angles


def _pairs(n=500, seed=7):
    rng = random.Random(seed)
    return [(rng.uniform(-720.0, 720.0), rng.uniform(-720.0, 720.0)) for _ in range(n)]


@pytest.mark.parametrize("raw,expected", [
    (0.0, 0.0),
    (360.0, 0.0),
    (-30.0, 330.0),
    (725.5, 5.5),
    (-1e-18, 0.0),
])
def test_normalize_longitude(raw, expected):
    assert angles.normalize_longitude(raw) == pytest.approx(expected)


def test_separation_is_bounded_and_symmetric():
    for a, b in _pairs():
        d = angles.angular_separation(a, b)
        assert 0.0 <= d <= 180.0
        assert d == pytest.approx(angles.angular_separation(b, a))


def test_separation_wraps_through_zero():
    assert angles.angular_separation(359.0, 1.0) == pytest.approx(2.0)
    assert angles.angular_separation(182.0, 2.0) == pytest.approx(180.0)
    assert angles.angular_separation(10.0, 10.0) == 0.0


def test_is_within_arc_plain_and_wrapping():
    assert angles.is_within_arc(15.0, 0.0, 30.0)
    assert angles.is_within_arc(0.0, 0.0, 30.0)
    assert not angles.is_within_arc(30.0, 0.0, 30.0)
    # arc from 340 through 0 to 10
    assert angles.is_within_arc(355.0, 340.0, 10.0)
    assert angles.is_within_arc(5.0, 340.0, 10.0)
    assert not angles.is_within_arc(20.0, 340.0, 10.0)


def test_signed_delta_sides():
    # transit 2° past a conjunction, and 2° short of it
    assert angles.signed_delta(102.0, 100.0, 0.0) == pytest.approx(2.0)
    assert angles.signed_delta(98.0, 100.0, 0.0) == pytest.approx(-2.0)
    # square measured on the side where the transit sits
    assert angles.signed_delta(192.0, 100.0, 90.0) == pytest.approx(2.0)
    assert angles.signed_delta(8.0, 100.0, 90.0) == pytest.approx(-2.0)
