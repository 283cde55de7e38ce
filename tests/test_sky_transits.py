from datetime import date, timedelta

import pytest

from transit_api.services.catalog import CelestialBody
from transit_api.services.errors import InvalidDateRangeError
from transit_api.services.sky_transits import SkyScanner, moon_phase_name
from tests.fakes import ScriptedProvider

SUN, MOON, MARS, SATURN = (
    CelestialBody.SUN,
    CelestialBody.MOON,
    CelestialBody.MARS,
    CelestialBody.SATURN,
)


@pytest.mark.parametrize("elongation,phase", [
    (0.0, "New Moon"),
    (358.0, "New Moon"),
    (45.0, "Waxing Crescent"),
    (120.0, "Waxing Gibbous"),
    (180.0, "Full Moon"),
    (220.0, "Waning Gibbous"),
    (300.0, "Waning Crescent"),
])
def test_moon_phase_name(elongation, phase):
    assert moon_phase_name(100.0, 100.0 + elongation) == phase


def test_sky_scan_tracks_pair_changes():
    start = date(2024, 6, 1)
    mars = {
        start: 190.0,
        start + timedelta(days=1): 190.0,
        start + timedelta(days=3): 196.0,
    }
    provider = ScriptedProvider(
        longitudes={SUN: 200.0, MOON: 20.0, MARS: mars, SATURN: 100.0},
        speeds={SATURN: -0.05},
    )
    days = SkyScanner(start, start + timedelta(days=3), provider, bodies=(SUN, MOON, MARS, SATURN)).scan()

    # the Sun-Moon opposition holds every day, so no day is dropped
    assert [d.date for d in days] == [start + timedelta(days=i) for i in range(4)]
    first = days[0]
    assert first.moon_phase == "Full Moon"
    assert first.signs["Saturn"] == "Cancer"
    assert first.retrograde == ["Saturn"]

    changes = [[(c.body1, c.body2, c.aspect) for c in d.changes] for d in days]
    assert changes == [
        [("Mars", "Saturn", "Square")],
        [],
        [],
        [("Sun", "Mars", "Conjunction"), ("Moon", "Mars", "Opposition")],
    ]
    square = next(a for a in days[3].aspects if a.aspect == "Square")
    assert square.orb == pytest.approx(6.0)
    assert square.body2_retrograde


def test_sky_scan_rejects_reversed_window():
    with pytest.raises(InvalidDateRangeError):
        SkyScanner(date(2024, 1, 2), date(2024, 1, 1), ScriptedProvider())


def test_sky_scan_omits_quiet_days():
    provider = ScriptedProvider(longitudes={SUN: 0.0, MOON: 45.0})
    assert SkyScanner(date(2024, 1, 1), date(2024, 1, 5), provider, bodies=(SUN, MOON)).scan() == []


def test_sky_scan_needs_a_baseline_day():
    with pytest.raises(InvalidDateRangeError):
        SkyScanner(date.min, date(1, 1, 2), ScriptedProvider())
