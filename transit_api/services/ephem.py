"""Ephemeris provider contract and the Swiss Ephemeris implementation.

The chart builder and the transit scanner only depend on
:class:`EphemerisProvider`; :class:`SwissEphemerisProvider` is the production
binding and tests substitute scripted fakes.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping, Optional, Protocol

import swisseph as swe

from .catalog import CelestialBody
from .errors import EphemerisError, HouseComputationError
from .models import BodyPosition, HouseCusps

logger = logging.getLogger(__name__)

# Engine version for API responses
try:
    ENGINE_VERSION = f"swisseph-{swe.version}"
except AttributeError:
    ENGINE_VERSION = "swisseph-2.10"

PROVIDER_BODY_IDS: Mapping[CelestialBody, int] = MappingProxyType({
    CelestialBody.SUN: swe.SUN,
    CelestialBody.MOON: swe.MOON,
    CelestialBody.MERCURY: swe.MERCURY,
    CelestialBody.VENUS: swe.VENUS,
    CelestialBody.MARS: swe.MARS,
    CelestialBody.JUPITER: swe.JUPITER,
    CelestialBody.SATURN: swe.SATURN,
    CelestialBody.URANUS: swe.URANUS,
    CelestialBody.NEPTUNE: swe.NEPTUNE,
    CelestialBody.PLUTO: swe.PLUTO,
    CelestialBody.NORTH_NODE: swe.MEAN_NODE,
})

# Systems whose cusps are undefined inside the polar circles.
QUADRANT_CODES = frozenset({"P", "K"})


class EphemerisProvider(Protocol):
    def position(self, instant: datetime, body: CelestialBody) -> BodyPosition:
        ...

    def houses(
        self, instant: datetime, latitude: float, longitude: float, system_code: str
    ) -> HouseCusps:
        ...


def _backend_flag(backend: Optional[str] = None) -> int:
    """Return the Swiss Ephemeris backend flag based on environment configuration."""

    raw_backend = backend if backend is not None else os.getenv("EPHEMERIS_BACKEND")
    name = raw_backend.strip().lower() if raw_backend else "swieph"
    return swe.FLG_MOSEPH if name == "moseph" else swe.FLG_SWIEPH


def backend_name() -> str:
    return "moseph" if _backend_flag() == swe.FLG_MOSEPH else "swieph"


def init_paths(ephe_dir: str | os.PathLike[str] | None) -> None:
    """Set the Swiss Ephemeris file search path when available."""

    if not ephe_dir:
        return

    path = os.fspath(ephe_dir)
    if os.path.isdir(path):
        swe.set_ephe_path(path)
    else:
        logger.warning("ephemeris_dir_missing", extra={"ephe_dir": path})


def julian_day(instant: datetime) -> float:
    """Julian day (UT) for an instant. Naive datetimes are taken as UTC."""

    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    dt_utc = instant.astimezone(timezone.utc)
    hour = (
        dt_utc.hour
        + dt_utc.minute / 60
        + dt_utc.second / 3600
        + dt_utc.microsecond / 3_600_000_000
    )
    return swe.julday(dt_utc.year, dt_utc.month, dt_utc.day, hour, swe.GREG_CAL)


class SwissEphemerisProvider:
    """:class:`EphemerisProvider` backed by pyswisseph."""

    def __init__(self, ephe_dir: str | os.PathLike[str] | None = None, backend: Optional[str] = None):
        init_paths(ephe_dir if ephe_dir is not None else os.getenv("EPHEMERIS_DIR"))
        self._flag = _backend_flag(backend)

    def position(self, instant: datetime, body: CelestialBody) -> BodyPosition:
        code = PROVIDER_BODY_IDS.get(body)
        if code is None:
            raise EphemerisError(f"no ephemeris id for {body!r}")
        jd = julian_day(instant)
        try:
            values, _ = swe.calc_ut(jd, code, self._flag | swe.FLG_SPEED)
        except swe.Error as exc:
            raise EphemerisError(f"Failed to calculate position for {body.value}: {exc}") from exc
        lon, _lat, _dist, lon_speed, _lat_speed, _dist_speed = values
        return BodyPosition(longitude=lon % 360.0, speed=lon_speed)

    def polar_limit(self, instant: datetime) -> float:
        """Latitude beyond which quadrant cusps are undefined (90° - true obliquity)."""

        values, _ = swe.calc_ut(julian_day(instant), swe.ECL_NUT, 0)
        return 90.0 - values[0]

    def houses(
        self, instant: datetime, latitude: float, longitude: float, system_code: str
    ) -> HouseCusps:
        code = system_code.upper()
        # Some library builds quietly swap in Porphyry instead of failing.
        if code in QUADRANT_CODES and abs(latitude) >= self.polar_limit(instant):
            raise HouseComputationError(code, latitude, "inside polar circle")
        try:
            cusps, ascmc = swe.houses(julian_day(instant), latitude, longitude, code.encode())
        except swe.Error as exc:
            raise HouseComputationError(code, latitude, str(exc)) from exc
        return HouseCusps(
            ascendant=ascmc[0] % 360.0,
            midheaven=ascmc[1] % 360.0,
            cusps=tuple(cusps[i] % 360.0 for i in range(12)),
        )


__all__ = [
    "ENGINE_VERSION",
    "EphemerisProvider",
    "PROVIDER_BODY_IDS",
    "QUADRANT_CODES",
    "SwissEphemerisProvider",
    "backend_name",
    "init_paths",
    "julian_day",
]
