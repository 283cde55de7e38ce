"""Static catalogs: celestial bodies, zodiac signs and the major aspects.

Everything here is built once at import time and exposed read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class CelestialBody(Enum):
    SUN = "Sun"
    MOON = "Moon"
    MERCURY = "Mercury"
    VENUS = "Venus"
    MARS = "Mars"
    JUPITER = "Jupiter"
    SATURN = "Saturn"
    URANUS = "Uranus"
    NEPTUNE = "Neptune"
    PLUTO = "Pluto"
    NORTH_NODE = "North Node"


# The lunar node is only ever a natal point; it never transits.
TRANSIT_BODIES: Tuple[CelestialBody, ...] = (
    CelestialBody.SUN,
    CelestialBody.MOON,
    CelestialBody.MERCURY,
    CelestialBody.VENUS,
    CelestialBody.MARS,
    CelestialBody.JUPITER,
    CelestialBody.SATURN,
    CelestialBody.URANUS,
    CelestialBody.NEPTUNE,
    CelestialBody.PLUTO,
)
NATAL_BODIES: Tuple[CelestialBody, ...] = TRANSIT_BODIES + (CelestialBody.NORTH_NODE,)

_BODY_BY_NAME: Mapping[str, CelestialBody] = MappingProxyType(
    {body.value.lower(): body for body in CelestialBody}
)


def body_for_name(name: str) -> Optional[CelestialBody]:
    """Resolve a display name ("Sun", "north node") to its catalog entry."""

    return _BODY_BY_NAME.get(name.strip().lower())


# ---------------------------------------------------------------------------
# Zodiac
# ---------------------------------------------------------------------------

DEGREES_PER_SIGN = 30.0


@dataclass(frozen=True)
class ZodiacSign:
    index: int
    name: str
    start_degree: float
    element: str
    modality: str
    ruler: CelestialBody
    symbol: str
    dates: str


ZODIAC_SIGNS: Tuple[ZodiacSign, ...] = (
    ZodiacSign(0, "Aries", 0.0, "Fire", "Cardinal", CelestialBody.MARS, "♈", "March 21 - April 19"),
    ZodiacSign(1, "Taurus", 30.0, "Earth", "Fixed", CelestialBody.VENUS, "♉", "April 20 - May 20"),
    ZodiacSign(2, "Gemini", 60.0, "Air", "Mutable", CelestialBody.MERCURY, "♊", "May 21 - June 20"),
    ZodiacSign(3, "Cancer", 90.0, "Water", "Cardinal", CelestialBody.MOON, "♋", "June 21 - July 22"),
    ZodiacSign(4, "Leo", 120.0, "Fire", "Fixed", CelestialBody.SUN, "♌", "July 23 - August 22"),
    ZodiacSign(5, "Virgo", 150.0, "Earth", "Mutable", CelestialBody.MERCURY, "♍", "August 23 - September 22"),
    ZodiacSign(6, "Libra", 180.0, "Air", "Cardinal", CelestialBody.VENUS, "♎", "September 23 - October 22"),
    ZodiacSign(7, "Scorpio", 210.0, "Water", "Fixed", CelestialBody.PLUTO, "♏", "October 23 - November 21"),
    ZodiacSign(8, "Sagittarius", 240.0, "Fire", "Mutable", CelestialBody.JUPITER, "♐", "November 22 - December 21"),
    ZodiacSign(9, "Capricorn", 270.0, "Earth", "Cardinal", CelestialBody.SATURN, "♑", "December 22 - January 19"),
    ZodiacSign(10, "Aquarius", 300.0, "Air", "Fixed", CelestialBody.URANUS, "♒", "January 20 - February 18"),
    ZodiacSign(11, "Pisces", 330.0, "Water", "Mutable", CelestialBody.NEPTUNE, "♓", "February 19 - March 20"),
)

SIGN_NAMES: Tuple[str, ...] = tuple(sign.name for sign in ZODIAC_SIGNS)

SIGN_BY_NAME: Mapping[str, ZodiacSign] = MappingProxyType(
    {sign.name.lower(): sign for sign in ZODIAC_SIGNS}
)


def _group(attr: str) -> Mapping[Any, Tuple[ZodiacSign, ...]]:
    grouped: Dict[Any, Tuple[ZodiacSign, ...]] = {}
    for sign in ZODIAC_SIGNS:
        key = getattr(sign, attr)
        grouped[key] = grouped.get(key, ()) + (sign,)
    return MappingProxyType(grouped)


SIGNS_BY_ELEMENT = _group("element")
SIGNS_BY_MODALITY = _group("modality")
SIGNS_BY_RULER = _group("ruler")


def sign_index_from_lon(lon: float) -> int:
    return int(lon // DEGREES_PER_SIGN) % 12


def sign_from_lon(lon: float) -> ZodiacSign:
    return ZODIAC_SIGNS[sign_index_from_lon(lon)]


def sign_name_from_lon(lon: float) -> str:
    return SIGN_NAMES[sign_index_from_lon(lon)]


def sign_by_name(name: str) -> Optional[ZodiacSign]:
    return SIGN_BY_NAME.get(name.strip().lower())


# ---------------------------------------------------------------------------
# Aspects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AspectDefinition:
    name: str
    angle: float
    orb: float


# Order is priority: the first definition whose window matches wins.
MAJOR_ASPECTS: Tuple[AspectDefinition, ...] = (
    AspectDefinition("Conjunction", 0.0, 8.0),
    AspectDefinition("Opposition", 180.0, 8.0),
    AspectDefinition("Trine", 120.0, 6.0),
    AspectDefinition("Square", 90.0, 6.0),
    AspectDefinition("Sextile", 60.0, 4.0),
)


__all__ = [
    "AspectDefinition",
    "CelestialBody",
    "DEGREES_PER_SIGN",
    "MAJOR_ASPECTS",
    "NATAL_BODIES",
    "SIGNS_BY_ELEMENT",
    "SIGNS_BY_MODALITY",
    "SIGNS_BY_RULER",
    "SIGN_BY_NAME",
    "SIGN_NAMES",
    "TRANSIT_BODIES",
    "ZODIAC_SIGNS",
    "ZodiacSign",
    "body_for_name",
    "sign_by_name",
    "sign_from_lon",
    "sign_index_from_lon",
    "sign_name_from_lon",
]
