from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Dict, Iterable, Union

from transit_api.services.catalog import NATAL_BODIES, CelestialBody
from transit_api.services.errors import HouseComputationError
from transit_api.services.models import BirthChart, BodyPosition, HouseCusps, NatalPosition

LonSpec = Union[float, Callable[[date], float], Dict[date, float]]


class ScriptedProvider:
    """Ephemeris provider answering from fixed tables.

    Longitudes may be a constant, a ``{date: lon}`` mapping (missing days fall
    back to ``far``) or a callable of the sample date.
    """

    def __init__(
        self,
        longitudes: Dict[CelestialBody, LonSpec] | None = None,
        speeds: Dict[CelestialBody, float] | None = None,
        ascendant: float = 10.0,
        midheaven: float = 280.0,
        cusps: Iterable[float] | None = None,
        failing_codes: Iterable[str] = (),
        far: float = 250.0,
    ):
        self.longitudes = dict(longitudes or {})
        self.speeds = dict(speeds or {})
        self.ascendant = ascendant
        self.midheaven = midheaven
        self.cusps = tuple(cusps) if cusps is not None else tuple(30.0 * i for i in range(12))
        self.failing_codes = set(failing_codes)
        self.far = far
        self.position_calls = []
        self.house_calls = []

    def _lon(self, body: CelestialBody, day: date) -> float:
        source = self.longitudes.get(body)
        if source is None:
            # spread unspecified bodies around the wheel
            return (7.0 + 31.0 * NATAL_BODIES.index(body)) % 360.0
        if callable(source):
            return source(day)
        if isinstance(source, dict):
            return source.get(day, self.far)
        return float(source)

    def position(self, instant: datetime, body: CelestialBody) -> BodyPosition:
        self.position_calls.append((instant, body))
        return BodyPosition(self._lon(body, instant.date()) % 360.0, self.speeds.get(body, 1.0))

    def houses(self, instant, latitude, longitude, system_code):
        self.house_calls.append((instant, system_code))
        if system_code in self.failing_codes:
            raise HouseComputationError(system_code, latitude, "scripted failure")
        return HouseCusps(self.ascendant, self.midheaven, self.cusps)


def natal(name: str, lon: float, house: int = 1, sign: str = "Aries", retrograde: bool = False) -> NatalPosition:
    return NatalPosition(name=name, longitude=lon, sign=sign, house=house, retrograde=retrograde)


def make_chart(*positions: NatalPosition, latitude: float = 51.5, longitude: float = 0.0) -> BirthChart:
    return BirthChart(
        ascendant=10.0,
        midheaven=280.0,
        houses=tuple(30.0 * i for i in range(12)),
        positions=tuple(positions),
        latitude=latitude,
        longitude=longitude,
    )

