"""Day-by-day transit scanning against a natal chart.

The scanner walks a date range one calendar day at a time. For every
(transiting body, natal point) pair it classifies the aspect of the day and
compares it with the last aspect seen for that pair. Those comparisons are
what separate a *newly formed* aspect from one that is merely still active,
so days must be evaluated strictly in order: day N+1 reads the state day N
wrote.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .aspects import classify_aspect, is_applying
from .catalog import MAJOR_ASPECTS, TRANSIT_BODIES, AspectDefinition, CelestialBody, body_for_name, sign_name_from_lon
from .errors import InvalidDateRangeError
from .houses import HouseResult, canonical_house_system, compute_houses
from .models import BirthChart, BodyPosition, DailyTransitReport, NatalPosition, TransitAspect

logger = logging.getLogger(__name__)

# Transits are sampled once per day at this UTC hour.
SAMPLE_HOUR_UTC = 12

PairKey = Tuple[str, str]


def sample_instant(day: date) -> datetime:
    return datetime.combine(day, time(SAMPLE_HOUR_UTC), tzinfo=timezone.utc)


def daterange(start: date, end: date) -> Iterator[date]:
    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)


def day_before(day: date) -> date:
    """Previous calendar day; the first representable day has none."""

    if day == date.min:
        raise InvalidDateRangeError(f"no day before {day}; transits need the previous day as a baseline")
    return day - timedelta(days=1)


class AspectState:
    """Last observed aspect per (transit body, natal point) pair.

    Entries are overwritten when a different aspect forms and are kept when
    an aspect dissolves, so the value is always the most recent aspect seen.
    """

    def __init__(self, entries: Optional[Dict[PairKey, str]] = None):
        self._entries: Dict[PairKey, str] = dict(entries or {})

    def get(self, key: PairKey) -> Optional[str]:
        return self._entries.get(key)

    def observe(self, key: PairKey, aspect: str) -> bool:
        """Record ``aspect`` for ``key``; True when it differs from the stored one."""

        if self._entries.get(key) == aspect:
            return False
        self._entries[key] = aspect
        return True

    def copy(self) -> "AspectState":
        return AspectState(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AspectState):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"AspectState({self._entries!r})"


class TransitScanner:
    """Transits from ``transit_bodies`` to the natal points of ``chart``.

    A scanner owns exactly one :class:`AspectState`; create one scanner per
    logical caller.
    """

    def __init__(
        self,
        chart: BirthChart,
        start: date,
        end: date,
        provider,
        *,
        transit_bodies: Sequence[CelestialBody] = TRANSIT_BODIES,
        aspects: Sequence[AspectDefinition] = MAJOR_ASPECTS,
        house_system: Optional[str] = None,
    ):
        if start > end:
            raise InvalidDateRangeError(f"start date {start} is after end date {end}")
        day_before(start)  # the window needs a baseline day
        self.chart = chart
        self.start = start
        self.end = end
        self.provider = provider
        self.transit_bodies = tuple(transit_bodies)
        self.aspects = tuple(aspects)
        self.house_system = canonical_house_system(house_system or chart.house_system)
        self.state = AspectState()
        self._last_day: Optional[date] = None
        self._natal_points = self._resolve_natal_points()

    def _resolve_natal_points(self) -> Tuple[NatalPosition, ...]:
        points = []
        for pos in self.chart.positions:
            if body_for_name(pos.name) is None:
                logger.debug("natal_point_unmapped", extra={"natal_point": pos.name})
                continue
            points.append(pos)
        return tuple(points)

    @property
    def natal_points(self) -> Tuple[NatalPosition, ...]:
        return self._natal_points

    # -- per-day evaluation ------------------------------------------------

    def _sky(self, day: date) -> Tuple[Dict[CelestialBody, BodyPosition], HouseResult]:
        instant = sample_instant(day)
        positions = {body: self.provider.position(instant, body) for body in self.transit_bodies}
        houses = compute_houses(
            self.provider, instant, self.chart.latitude, self.chart.longitude, self.house_system
        )
        return positions, houses

    def _evaluate(self, day: date, state: AspectState) -> DailyTransitReport:
        positions, houses = self._sky(day)
        report = DailyTransitReport(date=day)
        for natal in self._natal_points:
            for body in self.transit_bodies:
                tpos = positions[body]
                match = classify_aspect(tpos.longitude, natal.longitude, self.aspects)
                if match is None:
                    continue
                hit = TransitAspect(
                    date=day,
                    transit_body=body.value,
                    natal_point=natal.name,
                    aspect=match.name,
                    orb=match.orb,
                    applying=is_applying(tpos.longitude, tpos.speed, natal.longitude, 0.0, match.aspect.angle),
                    transit_retrograde=tpos.retrograde,
                    natal_retrograde=natal.retrograde,
                    transit_sign=sign_name_from_lon(tpos.longitude),
                    natal_sign=natal.sign,
                    transit_house=houses.house_of(tpos.longitude),
                    natal_house=natal.house,
                )
                report.aspects.append(hit)
                if state.observe((body.value, natal.name), match.name):
                    report.changes.append(hit)
        return report

    def _seeded_state(self, day: date) -> AspectState:
        """State as of the day before ``day``."""

        state = AspectState()
        self._evaluate(day_before(day), state)
        return state

    # -- public operations ---------------------------------------------------

    def seed(self) -> None:
        """Reset the state to the aspects holding the day before the window."""

        self.state = self._seeded_state(self.start)
        self._last_day = day_before(self.start)
        logger.debug("transit_state_seeded", extra={"pairs": len(self.state), "start": self.start.isoformat()})

    def advance(self, day: date) -> DailyTransitReport:
        """Evaluate ``day`` against the stored state and commit the result.

        Days must be advanced one at a time, in order.
        """

        if self._last_day is None:
            self.seed()
        if (day - self._last_day).days != 1:
            raise ValueError(f"transit state is at {self._last_day}; the next day evaluated must follow it, not {day}")
        report = self._evaluate(day, self.state)
        self._last_day = day
        return report

    def iter_scan(self) -> Iterator[DailyTransitReport]:
        self.seed()
        for day in daterange(self.start, self.end):
            report = self.advance(day)
            if not report.is_empty():
                yield report

    def scan(self) -> List[DailyTransitReport]:
        reports = list(self.iter_scan())
        logger.info(
            "transit_scan_complete",
            extra={"start": self.start.isoformat(), "end": self.end.isoformat(), "days": len(reports)},
        )
        return reports

    def day_report(self, day: date) -> DailyTransitReport:
        """Single-day report; changes are relative to the previous day.

        The scanner's own state is left untouched.
        """

        return self._evaluate(day, self._seeded_state(day))


__all__ = ["AspectState", "SAMPLE_HOUR_UTC", "TransitScanner", "day_before", "daterange", "sample_instant"]
