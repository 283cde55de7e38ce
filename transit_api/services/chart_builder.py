"""Natal chart construction from validated birth data."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Sequence, Tuple

from .angles import normalize_longitude
from .catalog import NATAL_BODIES, CelestialBody, sign_name_from_lon
from .errors import (
    InvalidDateFormatError,
    InvalidDateValueError,
    InvalidLocationError,
    InvalidTimeError,
    InvalidTimezoneError,
)
from .houses import canonical_house_system, compute_houses
from .models import BirthChart, BirthData, NatalPosition

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{4}-(?:0[1-9]|1[0-2])-(?:0[1-9]|[12]\d|3[01])$")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

# Widest civil UTC offset in use (+14:00, Line Islands).
MAX_UTC_OFFSET_HOURS = 14.0


def parse_date(value: str) -> date:
    """Parse YYYY-MM-DD, separating malformed strings from impossible days."""

    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise InvalidDateFormatError(value)
    year, month, day = (int(x) for x in value.split("-"))
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidDateValueError(value) from exc


def parse_time(value: str) -> Tuple[int, int]:
    m = _TIME_RE.match(value or "")
    if not m:
        raise InvalidTimeError(value)
    hour, minute = int(m.group(1)), int(m.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidTimeError(value)
    return hour, minute


def birth_instant(birth: BirthData) -> datetime:
    """Universal time of birth: local wall time minus the UTC offset."""

    d = parse_date(birth.date)
    hour, minute = parse_time(birth.time)
    if not -MAX_UTC_OFFSET_HOURS <= birth.timezone <= MAX_UTC_OFFSET_HOURS:
        raise InvalidTimezoneError(f"UTC offset out of range: {birth.timezone}")
    local = datetime(d.year, d.month, d.day, hour, minute, tzinfo=timezone.utc)
    try:
        return local - timedelta(hours=birth.timezone)
    except OverflowError as exc:
        # the offset pushes 0001-01-01 or 9999-12-31 off the calendar
        raise InvalidDateValueError(birth.date) from exc


def _validate_location(birth: BirthData) -> None:
    if not -90.0 <= birth.latitude <= 90.0:
        raise InvalidLocationError(f"latitude out of range: {birth.latitude}")
    if not -180.0 <= birth.longitude <= 180.0:
        raise InvalidLocationError(f"longitude out of range: {birth.longitude}")


def calculate_birth_chart(
    birth: BirthData,
    provider,
    house_system: str = "placidus",
    bodies: Optional[Sequence[CelestialBody]] = None,
) -> BirthChart:
    instant = birth_instant(birth)
    _validate_location(birth)
    house_system = canonical_house_system(house_system)

    hs = compute_houses(provider, instant, birth.latitude, birth.longitude, house_system)
    warnings = []
    if hs.fallback_used:
        warnings.append(
            f"{house_system} houses are undefined at latitude {birth.latitude:.2f}; using whole-sign houses."
        )

    positions = []
    for body in bodies or NATAL_BODIES:
        pos = provider.position(instant, body)
        lon = normalize_longitude(pos.longitude)
        positions.append(
            NatalPosition(
                name=body.value,
                longitude=lon,
                sign=sign_name_from_lon(lon),
                house=hs.house_of(lon),
                retrograde=pos.speed < 0,
                speed=pos.speed,
            )
        )

    logger.debug(
        "birth_chart_built",
        extra={"instant": instant.isoformat(), "house_system": hs.system, "fallback": hs.fallback_used},
    )
    return BirthChart(
        ascendant=hs.ascendant,
        midheaven=hs.midheaven,
        houses=hs.cusps,
        positions=tuple(positions),
        latitude=birth.latitude,
        longitude=birth.longitude,
        house_system=hs.system,
        instant=instant,
        warnings=tuple(warnings),
    )


__all__ = ["birth_instant", "calculate_birth_chart", "parse_date", "parse_time"]
