from datetime import datetime, timezone

import pytest

from transit_api.services import houses
from tests.fakes import ScriptedProvider

NOON = datetime(2024, 1, 1, 12, tzinfo=timezone.utc)


def test_house_of_equal_cusps():
    cusps = [30.0 * i for i in range(12)]
    assert houses.house_of(0.0, cusps) == 1
    assert houses.house_of(29.99, cusps) == 1
    assert houses.house_of(30.0, cusps) == 2
    assert houses.house_of(359.0, cusps) == 12


def test_house_of_wrapping_cusp():
    cusps = [350.0 + 30.0 * i for i in range(12)]
    cusps = [c % 360.0 for c in cusps]
    assert houses.house_of(355.0, cusps) == 1
    assert houses.house_of(5.0, cusps) == 1
    assert houses.house_of(20.0, cusps) == 2


def test_house_of_needs_twelve_cusps():
    with pytest.raises(ValueError):
        houses.house_of(10.0, [0.0, 180.0])


def test_whole_sign_house_counts_signs_from_ascendant():
    for asc in (0.0, 10.0, 95.0, 359.0):
        asc_sign = int(asc // 30)
        for lon in range(0, 360, 7):
            expected = ((int(lon // 30) - asc_sign) % 12) + 1
            assert houses.whole_sign_house(float(lon), asc) == expected


def test_whole_sign_house_before_ascendant_sign():
    assert houses.whole_sign_house(352.0, 10.0) == 12


def test_whole_sign_cusps_start_at_ascendant_sign():
    assert houses.whole_sign_cusps(95.0)[:3] == (90.0, 120.0, 150.0)
    assert houses.whole_sign_cusps(95.0)[-1] == 60.0


@pytest.mark.parametrize("label,canon", [
    (None, "placidus"),
    ("Placidus", "placidus"),
    ("whole", "whole_sign"),
    ("WholeSign", "whole_sign"),
    ("whole-sign", "whole_sign"),
    ("Koch", "koch"),
])
def test_canonical_house_system(label, canon):
    assert houses.canonical_house_system(label) == canon


def test_unknown_house_system_rejected():
    with pytest.raises(ValueError):
        houses.canonical_house_system("topocentric-ish")


def test_compute_houses_quadrant():
    provider = ScriptedProvider(cusps=[15.0 + 30.0 * i for i in range(12)], ascendant=15.0)
    res = houses.compute_houses(provider, NOON, 51.5, 0.0, "placidus")
    assert res.system == "placidus"
    assert not res.fallback_used
    assert res.house_of(14.0) == 12
    assert provider.house_calls == [(NOON, "P")]


def test_compute_houses_falls_back_to_whole_sign():
    provider = ScriptedProvider(ascendant=100.0, failing_codes={"P"})
    res = houses.compute_houses(provider, NOON, 89.0, 0.0, "placidus")
    assert res.system == "whole_sign"
    assert res.fallback_used
    assert len(res.cusps) == 12
    assert res.cusps[0] == 90.0
    assert res.house_of(95.0) == 1
    assert res.house_of(80.0) == 12
    assert [code for _, code in provider.house_calls] == ["P", "W"]


def test_whole_sign_requested_is_not_a_fallback():
    provider = ScriptedProvider(ascendant=100.0)
    res = houses.compute_houses(provider, NOON, 10.0, 0.0, "whole_sign")
    assert res.system == "whole_sign"
    assert not res.fallback_used
