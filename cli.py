import json
import sys
from datetime import date
from pathlib import Path

from transit_api.services.chart_builder import calculate_birth_chart, parse_date
from transit_api.services.ephem import SwissEphemerisProvider
from transit_api.services.errors import ChartInputError, EphemerisError, InvalidDateRangeError
from transit_api.services.models import BirthData
from transit_api.services.reports import render_day_report, render_sky_report, render_transit_report
from transit_api.services.sky_transits import SkyScanner
from transit_api.services.transits_engine import TransitScanner

USAGE = """Usage:
  python cli.py chart birth.json
  python cli.py transits birth.json FROM TO
  python cli.py day birth.json DATE
  python cli.py sky FROM TO

birth.json: {"date": "YYYY-MM-DD", "time": "HH:MM", "latitude": .., "longitude": .., "timezone": ..}
Dates are YYYY-MM-DD. DATE defaults to today."""


def _birth(path: str) -> BirthData:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return BirthData(
            date=data["date"],
            time=data["time"],
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            timezone=float(data["timezone"]),
        )
    except KeyError as exc:
        raise ChartInputError(f"{path}: missing field {exc}") from exc
    except (OSError, TypeError, ValueError) as exc:
        raise ChartInputError(f"{path}: {exc}") from exc


def main(argv: list[str]) -> int:
    if not argv:
        print(USAGE)
        return 1
    cmd, args = argv[0], argv[1:]
    provider = SwissEphemerisProvider()

    if cmd == "chart" and len(args) == 1:
        chart = calculate_birth_chart(_birth(args[0]), provider)
        print(json.dumps(chart.to_dict(), indent=2, ensure_ascii=False))
    elif cmd == "transits" and len(args) == 3:
        chart = calculate_birth_chart(_birth(args[0]), provider)
        start, end = parse_date(args[1]), parse_date(args[2])
        days = TransitScanner(chart, start, end, provider).scan()
        print(render_transit_report(start, end, days), end="")
    elif cmd == "day" and len(args) in (1, 2):
        chart = calculate_birth_chart(_birth(args[0]), provider)
        day = parse_date(args[1]) if len(args) == 2 else date.today()
        print(render_day_report(TransitScanner(chart, day, day, provider).day_report(day)), end="")
    elif cmd == "sky" and len(args) == 2:
        start, end = parse_date(args[0]), parse_date(args[1])
        print(render_sky_report(start, end, SkyScanner(start, end, provider).scan()), end="")
    else:
        print(USAGE)
        return 1
    return 0


def run(argv: list[str]) -> int:
    try:
        return main(argv)
    except (ChartInputError, InvalidDateRangeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except EphemerisError as exc:
        print(f"ephemeris error: {exc}", file=sys.stderr)
        return 3


if __name__ == "__main__":
    sys.exit(run(sys.argv[1:]))
