import random

import pytest

from transit_api.services import aspects
from transit_api.services.angles import angular_separation
from transit_api.services.catalog import MAJOR_ASPECTS, AspectDefinition


def test_classified_aspect_is_within_its_orb():
    rng = random.Random(11)
    for _ in range(1000):
        a, b = rng.uniform(0, 360), rng.uniform(0, 360)
        match = aspects.classify_aspect(a, b)
        if match is None:
            sep = angular_separation(a, b)
            assert all(abs(sep - asp.angle) > asp.orb for asp in MAJOR_ASPECTS)
            continue
        assert abs(match.separation - match.aspect.angle) <= match.aspect.orb
        assert match.orb == pytest.approx(abs(match.separation - match.aspect.angle))


def test_no_aspect_at_45_degrees():
    assert aspects.classify_aspect(0.0, 45.0) is None


def test_opposition_across_zero():
    match = aspects.classify_aspect(182.0, 2.0)
    assert match.name == "Opposition"
    assert match.orb == pytest.approx(0.0)


def test_orb_boundary_is_inclusive():
    assert aspects.classify_aspect(108.0, 100.0).name == "Conjunction"
    assert aspects.classify_aspect(108.5, 100.0) is None
    assert aspects.classify_aspect(64.0, 0.0).name == "Sextile"


def test_first_matching_aspect_wins():
    wide = (
        AspectDefinition("Square", 90.0, 40.0),
        AspectDefinition("Trine", 120.0, 40.0),
    )
    # 100° fits both windows; the earlier entry is taken
    assert aspects.classify_aspect(0.0, 100.0, wide).name == "Square"
    assert aspects.classify_aspect(0.0, 100.0, tuple(reversed(wide))).name == "Trine"


@pytest.mark.parametrize("t_lon,t_speed,angle,expected", [
    (98.0, 1.0, 0.0, True),     # closing on the natal point
    (102.0, 1.0, 0.0, False),   # moving away
    (102.0, -0.5, 0.0, True),   # retrograde back toward it
    (100.0, 1.0, 0.0, True),    # exact
    (98.0, 0.0, 0.0, False),    # stationary
    (8.0, 1.0, 90.0, True),
    (192.0, 1.0, 90.0, False),
])
def test_is_applying(t_lon, t_speed, angle, expected):
    assert aspects.is_applying(t_lon, t_speed, 100.0, 0.0, angle) is expected


def test_find_aspects_sorted_by_orb():
    positions = {
        "Sun": {"lon": 10.0, "speed": 1.0},
        "Moon": {"lon": 13.0, "speed": 13.0},
        "Mars": {"lon": 190.5, "speed": 0.6},
    }
    found = aspects.find_aspects(positions)
    assert [(a["p1"], a["p2"], a["type"]) for a in found] == [
        ("Sun", "Mars", "Opposition"),
        ("Moon", "Mars", "Opposition"),
        ("Sun", "Moon", "Conjunction"),
    ]
    assert found[0]["orb"] == 0.5
    assert found[2]["applying"] is False
