"""Chart-independent sky transits: aspects between the transiting bodies
themselves, the Moon phase and the retrograde list for each day."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Sequence

from .angles import normalize_longitude
from .aspects import classify_aspect, is_applying
from .catalog import MAJOR_ASPECTS, TRANSIT_BODIES, AspectDefinition, CelestialBody, sign_name_from_lon
from .errors import InvalidDateRangeError
from .models import BodyPosition
from .transits_engine import AspectState, day_before, daterange, sample_instant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkyAspect:
    body1: str
    body2: str
    aspect: str
    orb: float
    applying: bool
    body1_retrograde: bool
    body2_retrograde: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SkyDay:
    date: date
    moon_phase: str
    signs: Dict[str, str]
    retrograde: List[str]
    aspects: List[SkyAspect] = field(default_factory=list)
    changes: List[SkyAspect] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "moon_phase": self.moon_phase,
            "signs": dict(self.signs),
            "retrograde": list(self.retrograde),
            "aspects": [a.to_dict() for a in self.aspects],
            "changes": [c.to_dict() for c in self.changes],
        }


def moon_phase_name(sun_lon: float, moon_lon: float) -> str:
    """Phase from the Moon's elongation east of the Sun, as a share of the cycle."""

    pct = normalize_longitude(moon_lon - sun_lon) / 360.0 * 100.0
    if pct < 1 or pct > 99:
        return "New Moon"
    if pct < 25:
        return "Waxing Crescent"
    if pct < 49:
        return "Waxing Gibbous"
    if pct < 51:
        return "Full Moon"
    if pct < 75:
        return "Waning Gibbous"
    return "Waning Crescent"


class SkyScanner:
    def __init__(
        self,
        start: date,
        end: date,
        provider,
        *,
        bodies: Sequence[CelestialBody] = TRANSIT_BODIES,
        aspects: Sequence[AspectDefinition] = MAJOR_ASPECTS,
    ):
        if start > end:
            raise InvalidDateRangeError(f"start date {start} is after end date {end}")
        day_before(start)  # the window needs a baseline day
        self.start = start
        self.end = end
        self.provider = provider
        self.bodies = tuple(bodies)
        self.aspects = tuple(aspects)
        self.state = AspectState()

    def _positions(self, day: date) -> Dict[CelestialBody, BodyPosition]:
        instant = sample_instant(day)
        return {body: self.provider.position(instant, body) for body in self.bodies}

    def _evaluate(self, day: date, state: AspectState) -> SkyDay:
        pos = self._positions(day)
        if CelestialBody.SUN in pos and CelestialBody.MOON in pos:
            phase = moon_phase_name(pos[CelestialBody.SUN].longitude, pos[CelestialBody.MOON].longitude)
        else:
            phase = "Unknown"
        sky = SkyDay(
            date=day,
            moon_phase=phase,
            signs={b.value: sign_name_from_lon(p.longitude) for b, p in pos.items()},
            retrograde=[b.value for b, p in pos.items() if p.retrograde],
        )
        for i, b1 in enumerate(self.bodies):
            for b2 in self.bodies[i + 1:]:
                p1, p2 = pos[b1], pos[b2]
                match = classify_aspect(p1.longitude, p2.longitude, self.aspects)
                if match is None:
                    continue
                hit = SkyAspect(
                    body1=b1.value,
                    body2=b2.value,
                    aspect=match.name,
                    orb=match.orb,
                    applying=is_applying(p1.longitude, p1.speed, p2.longitude, p2.speed, match.aspect.angle),
                    body1_retrograde=p1.retrograde,
                    body2_retrograde=p2.retrograde,
                )
                sky.aspects.append(hit)
                if state.observe((b1.value, b2.value), match.name):
                    sky.changes.append(hit)
        return sky

    def scan(self) -> List[SkyDay]:
        self.state = AspectState()
        self._evaluate(day_before(self.start), self.state)
        days = []
        for day in daterange(self.start, self.end):
            sky = self._evaluate(day, self.state)
            if sky.aspects or sky.changes:
                days.append(sky)
        logger.info("sky_scan_complete", extra={"start": self.start.isoformat(), "days": len(days)})
        return days


__all__ = ["SkyAspect", "SkyDay", "SkyScanner", "moon_phase_name"]
