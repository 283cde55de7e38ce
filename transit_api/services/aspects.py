from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from .angles import angular_separation, signed_delta
from .catalog import MAJOR_ASPECTS, AspectDefinition


@dataclass(frozen=True)
class AspectMatch:
    aspect: AspectDefinition
    separation: float
    orb: float  # orb in use: |separation - exact angle|

    @property
    def name(self) -> str:
        return self.aspect.name


def classify_aspect(
    lon1: float,
    lon2: float,
    aspects: Sequence[AspectDefinition] = MAJOR_ASPECTS,
) -> Optional[AspectMatch]:
    """Return the first aspect (in priority order) whose orb window contains
    the separation between two longitudes, or None."""

    separation = angular_separation(lon1, lon2)
    for aspect in aspects:
        residual = abs(separation - aspect.angle)
        if residual <= aspect.orb:
            return AspectMatch(aspect=aspect, separation=separation, orb=residual)
    return None


def is_applying(
    transit_lon: float,
    transit_speed: float,
    natal_lon: float,
    natal_speed: float,
    aspect_angle: float,
) -> bool:
    """Determine whether an aspect is applying.

    An aspect is *applying* when the separation is closing toward the exact
    angle and *separating* when it is growing. Natal points are fixed, so
    callers normally pass ``natal_speed=0``.
    """

    delta = signed_delta(transit_lon, natal_lon, aspect_angle)
    # Exact hits count as applying.
    if abs(delta) < 1e-6:
        return True

    rate = transit_speed - natal_speed
    if abs(rate) < 1e-6:
        return False

    return (delta > 0 and rate < 0) or (delta < 0 and rate > 0)


def find_aspects(
    positions: Mapping[str, Mapping[str, float]],
    aspects: Sequence[AspectDefinition] = MAJOR_ASPECTS,
) -> List[Dict[str, object]]:
    """Aspect grid between every pair of positions ({name: {lon, speed}}),
    sorted tightest first."""

    res: List[Dict[str, object]] = []
    names = list(positions.keys())
    for i in range(len(names)):
        for j in range(i + 1, len(names)):
            p1, p2 = names[i], names[j]
            a, b = positions[p1], positions[p2]
            match = classify_aspect(a["lon"], b["lon"], aspects)
            if match is None:
                continue
            res.append({
                "p1": p1,
                "p2": p2,
                "type": match.name,
                "orb": round(match.orb, 2),
                "applying": is_applying(
                    a["lon"], a.get("speed", 0.0), b["lon"], b.get("speed", 0.0), match.aspect.angle
                ),
            })
    return sorted(res, key=lambda x: x["orb"])


__all__ = ["AspectMatch", "classify_aspect", "find_aspects", "is_applying"]
