"""Helpers shared by the chart, transit and sky routers."""

from __future__ import annotations

import os
from contextlib import contextmanager
from datetime import date
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from fastapi import HTTPException

from ..schemas.charts import BirthDataIn, ChartOut
from ..services.catalog import TRANSIT_BODIES, CelestialBody, body_for_name
from ..services.chart_builder import calculate_birth_chart, parse_date
from ..services.ephem import SwissEphemerisProvider
from ..services.errors import ChartInputError, EphemerisError, InvalidDateRangeError
from ..services.models import BirthChart, BirthData

MAX_RANGE_DAYS = int(os.getenv("TRANSIT_MAX_RANGE_DAYS", "731"))


def default_house_system() -> str:
    return os.getenv("HOUSE_SYSTEM", "placidus")


@lru_cache(maxsize=1)
def get_provider() -> SwissEphemerisProvider:
    return SwissEphemerisProvider()


@contextmanager
def domain_errors():
    """Translate service exceptions into HTTP errors."""

    try:
        yield
    except (ChartInputError, InvalidDateRangeError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except EphemerisError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def to_birth_data(b: BirthDataIn) -> BirthData:
    return BirthData(date=b.date, time=b.time, latitude=b.latitude, longitude=b.longitude, timezone=b.timezone)


def resolve_chart(
    provider,
    birth_data: Optional[BirthDataIn],
    chart: Optional[ChartOut],
    house_system: Optional[str],
) -> BirthChart:
    if chart is not None:
        return BirthChart.from_dict(chart.model_dump())
    return calculate_birth_chart(to_birth_data(birth_data), provider, house_system or default_house_system())


def parse_window(from_date: str, to_date: str) -> Tuple[date, date]:
    start, end = parse_date(from_date), parse_date(to_date)
    if start > end:
        raise InvalidDateRangeError(f"from_date {from_date} is after to_date {to_date}")
    if (end - start).days + 1 > MAX_RANGE_DAYS:
        raise InvalidDateRangeError(f"window longer than {MAX_RANGE_DAYS} days")
    return start, end


def parse_bodies(names: Optional[Sequence[str]]) -> Tuple[CelestialBody, ...]:
    if not names:
        return TRANSIT_BODIES
    out: List[CelestialBody] = []
    for name in names:
        body = body_for_name(name)
        if body is None or body not in TRANSIT_BODIES:
            raise ValueError(f"unknown transiting body '{name}'")
        out.append(body)
    return tuple(out)
