"""Plain-text renderings of transit scans."""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Sequence

from .interpretations import get_transit_interpretation
from .models import DailyTransitReport, TransitAspect
from .sky_transits import SkyAspect, SkyDay


def _short(d: date) -> str:
    return d.strftime("%d/%m/%Y")


def _r(flag: bool) -> str:
    return " (R)" if flag else ""


def _transit_lines(hit: TransitAspect, with_interpretation: bool = False) -> List[str]:
    lines = [
        f"  {hit.transit_body}{_r(hit.transit_retrograde)} {hit.aspect} {hit.natal_point}{_r(hit.natal_retrograde)}",
        f"    Transit: {hit.transit_sign} in House {hit.transit_house}",
        f"    Natal: {hit.natal_sign} in House {hit.natal_house}",
        f"    Orb: {hit.orb:.1f}°",
    ]
    if with_interpretation:
        lines.append("    Interpretation:")
        lines.append(f"    {get_transit_interpretation(hit.aspect, hit.transit_body, hit.natal_point)}")
        lines.append("")
    return lines


def render_transit_report(start: date, end: date, days: Sequence[DailyTransitReport]) -> str:
    out = ["Birth Chart Transit Report", f"Period: {_short(start)} to {_short(end)}", ""]
    if not days:
        out.append("No significant transits or aspect changes found during this period.")
        return "\n".join(out) + "\n"

    for day in days:
        out.append("")
        out.append(f"{_short(day.date)}:")
        if day.changes:
            out.append("")
            out.append("Aspect Changes:")
            for hit in day.changes:
                out.extend(_transit_lines(hit))
        if day.aspects:
            out.append("")
            out.append("Current Transits:")
            for hit in day.aspects:
                out.extend(_transit_lines(hit))
    return "\n".join(out) + "\n"


def render_day_report(day: DailyTransitReport) -> str:
    out = [f"Transit Report for {day.date.strftime('%A, %B %d, %Y')}", ""]
    if day.changes:
        out.append("New Aspects Forming:")
        for hit in day.changes:
            out.extend(_transit_lines(hit, with_interpretation=True))
        out.append("")
    if day.aspects:
        out.append("Active Transits:")
        for hit in day.aspects:
            out.extend(_transit_lines(hit, with_interpretation=True))
    elif not day.changes:
        out.append("No significant transits or aspect changes for this day.")
    return "\n".join(out) + "\n"


def _sky_line(hit: SkyAspect) -> str:
    return (
        f"  {hit.body1}{_r(hit.body1_retrograde)} {hit.aspect} "
        f"{hit.body2}{_r(hit.body2_retrograde)} (orb: {hit.orb:.1f}°)"
    )


def render_sky_report(start: date, end: date, days: Iterable[SkyDay]) -> str:
    days = list(days)
    out = ["Weekly Transit Report", f"Period: {_short(start)} to {_short(end)}", ""]
    if not days:
        out.append("No significant transits or aspect changes found during this period.")
        return "\n".join(out) + "\n"

    for day in days:
        retro = set(day.retrograde)
        out.append("")
        out.append(f"{_short(day.date)}:")
        out.append(f"Moon Phase: {day.moon_phase}")
        out.append("")
        out.append("Planet Positions:")
        for name, sign in day.signs.items():
            out.append(f"  {name}{_r(name in retro)}: {sign}")
        out.append("")
        out.append("Retrograde Planets:")
        out.append("  " + (", ".join(f"{p} (R)" for p in day.retrograde) if day.retrograde else "None"))
        if day.changes:
            out.append("")
            out.append("Aspect Changes:")
            out.extend(_sky_line(hit) for hit in day.changes)
        if day.aspects:
            out.append("")
            out.append("Current Transits:")
            out.extend(_sky_line(hit) for hit in day.aspects)
    return "\n".join(out) + "\n"


__all__ = ["render_day_report", "render_sky_report", "render_transit_report"]
