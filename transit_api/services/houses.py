"""House division: quadrant cusp lookup, whole-sign houses and the fallback policy.

Quadrant systems (Placidus by default) are tried first. When the ephemeris
provider reports that it cannot build cusps for the location (polar
latitudes), whole-sign houses are used instead and the result says so.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence, Tuple

from .angles import is_within_arc, normalize_longitude
from .catalog import DEGREES_PER_SIGN, sign_index_from_lon
from .errors import HouseComputationError

logger = logging.getLogger(__name__)

HOUSE_CODE_MAP = {
    "placidus": "P",
    "koch": "K",
    "porphyry": "O",
    "regiomontanus": "R",
    "campanus": "C",
    "equal": "E",
    "whole_sign": "W",
}

WHOLE_SIGN = "whole_sign"


def _slug(s: str) -> str:
    return "".join(ch for ch in s.lower() if ch.isalnum())


_CANON_FROM_SLUG = {_slug(name): name for name in HOUSE_CODE_MAP}
_CANON_FROM_SLUG["whole"] = WHOLE_SIGN


def canonical_house_system(system: str | None) -> str:
    """Normalise a house-system label ("Placidus", "WholeSign", "whole") to its
    canonical key in HOUSE_CODE_MAP."""

    if not system:
        return "placidus"
    canon = _CANON_FROM_SLUG.get(_slug(system))
    if canon is None:
        raise ValueError(
            f"Unsupported house system '{system}'. Try one of: {', '.join(sorted(HOUSE_CODE_MAP))}."
        )
    return canon


@dataclass(frozen=True)
class HouseResult:
    ascendant: float
    midheaven: float
    cusps: Tuple[float, ...]
    system: str
    fallback_used: bool = False

    def house_of(self, lon: float) -> int:
        if self.system == WHOLE_SIGN:
            return whole_sign_house(lon, self.ascendant)
        return house_of(lon, self.cusps)


def house_of(lon: float, cusps: Sequence[float]) -> int:
    """House (1..12) whose arc [cusp[i], cusp[i+1]) contains ``lon``."""

    if len(cusps) != 12:
        raise ValueError(f"expected 12 house cusps, got {len(cusps)}")
    for i in range(12):
        if is_within_arc(lon, cusps[i], cusps[(i + 1) % 12]):
            return i + 1
    # Degenerate cusp sets (all equal) contain nothing.
    raise ValueError(f"longitude {lon} not inside any house arc")


def whole_sign_house(lon: float, ascendant: float) -> int:
    return ((sign_index_from_lon(normalize_longitude(lon)) - sign_index_from_lon(normalize_longitude(ascendant)) + 12) % 12) + 1


def whole_sign_cusps(ascendant: float) -> Tuple[float, ...]:
    start = sign_index_from_lon(normalize_longitude(ascendant)) * DEGREES_PER_SIGN
    return tuple(normalize_longitude(start + DEGREES_PER_SIGN * k) for k in range(12))


def compute_houses(
    provider,
    instant: datetime,
    lat: float,
    lon: float,
    system: str = "placidus",
) -> HouseResult:
    system = canonical_house_system(system)
    code = HOUSE_CODE_MAP[system]
    if system != WHOLE_SIGN:
        try:
            hs = provider.houses(instant, lat, lon, code)
            return HouseResult(
                ascendant=normalize_longitude(hs.ascendant),
                midheaven=normalize_longitude(hs.midheaven),
                cusps=tuple(normalize_longitude(c) for c in hs.cusps),
                system=system,
            )
        except HouseComputationError as exc:
            logger.warning(
                "houses_fallback_whole_sign",
                extra={"requested_system": system, "lat": lat, "reason": str(exc)},
            )
            fallback = True
    else:
        fallback = False

    # Whole-sign has no latitude restriction; a failure here is fatal.
    hs = provider.houses(instant, lat, lon, HOUSE_CODE_MAP[WHOLE_SIGN])
    asc = normalize_longitude(hs.ascendant)
    return HouseResult(
        ascendant=asc,
        midheaven=normalize_longitude(hs.midheaven),
        cusps=whole_sign_cusps(asc),
        system=WHOLE_SIGN,
        fallback_used=fallback,
    )


__all__ = [
    "HOUSE_CODE_MAP",
    "HouseResult",
    "WHOLE_SIGN",
    "canonical_house_system",
    "compute_houses",
    "house_of",
    "whole_sign_cusps",
    "whole_sign_house",
]
