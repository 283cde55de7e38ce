from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from ..schemas import TransitsComputeRequest, TransitsComputeResponse, TransitsDayRequest, TransitsDayResponse
from ..services.chart_builder import parse_date
from ..services.interpretations import get_transit_interpretation
from ..services.reports import render_day_report, render_transit_report
from ..services.transits_engine import TransitScanner
from .common import domain_errors, get_provider, parse_bodies, parse_window, resolve_chart

router = APIRouter(prefix="/v1/transits", tags=["transits"])


def _day_out(report, interpret: bool) -> dict:
    out = report.to_dict()
    if interpret:
        for item in out["aspects"] + out["changes"]:
            item["interpretation"] = get_transit_interpretation(
                item["aspect"], item["transit_body"], item["natal_point"]
            )
    return out


@router.post("/compute", response_model=TransitsComputeResponse)
def compute_transits_route(
    req: TransitsComputeRequest,
    format: str = Query("json", pattern="^(json|text)$"),
    interpret: bool = False,
    provider=Depends(get_provider),
):
    with domain_errors():
        start, end = parse_window(req.window.from_date, req.window.to_date)
        bodies = parse_bodies(req.options.transit_bodies)
        chart = resolve_chart(provider, req.birth_data, req.chart, req.options.house_system)
        scanner = TransitScanner(
            chart, start, end, provider,
            transit_bodies=bodies,
            house_system=req.options.house_system,
        )
        days = scanner.scan()

    if format == "text":
        return PlainTextResponse(render_transit_report(start, end, days))
    meta = {
        "from_date": start.isoformat(),
        "to_date": end.isoformat(),
        "house_system": scanner.house_system,
        "natal_points": [p.name for p in scanner.natal_points],
        "warnings": list(chart.warnings),
    }
    return TransitsComputeResponse(meta=meta, days=[_day_out(d, interpret) for d in days])


@router.post("/day", response_model=TransitsDayResponse)
def transits_day_route(
    req: TransitsDayRequest,
    format: str = Query("json", pattern="^(json|text)$"),
    interpret: bool = True,
    provider=Depends(get_provider),
):
    with domain_errors():
        day = parse_date(req.date)
        chart = resolve_chart(provider, req.birth_data, req.chart, req.options.house_system)
        scanner = TransitScanner(
            chart, day, day, provider,
            transit_bodies=parse_bodies(req.options.transit_bodies),
            house_system=req.options.house_system,
        )
        report = scanner.day_report(day)

    if format == "text":
        return PlainTextResponse(render_day_report(report))
    return TransitsDayResponse(
        meta={"date": day.isoformat(), "house_system": scanner.house_system},
        day=_day_out(report, interpret),
    )
