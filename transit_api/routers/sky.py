from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from ..schemas import SkyTransitsRequest, SkyTransitsResponse
from ..services.reports import render_sky_report
from ..services.sky_transits import SkyScanner
from .common import domain_errors, get_provider, parse_bodies, parse_window

router = APIRouter(prefix="/v1/sky", tags=["sky"])


@router.post("/transits", response_model=SkyTransitsResponse)
def sky_transits_route(
    req: SkyTransitsRequest,
    format: str = Query("json", pattern="^(json|text)$"),
    provider=Depends(get_provider),
):
    with domain_errors():
        start, end = parse_window(req.window.from_date, req.window.to_date)
        days = SkyScanner(start, end, provider, bodies=parse_bodies(req.bodies)).scan()

    if format == "text":
        return PlainTextResponse(render_sky_report(start, end, days))
    return SkyTransitsResponse(
        meta={"from_date": start.isoformat(), "to_date": end.isoformat()},
        days=[d.to_dict() for d in days],
    )
