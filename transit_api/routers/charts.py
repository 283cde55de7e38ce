from fastapi import APIRouter, Depends
from hashlib import sha256
from ..schemas import ComputeRequest, ComputeResponse, MetaOut
from ..services import aspects as aspects_svc
from ..services.ephem import ENGINE_VERSION, backend_name
from ..services.houses import canonical_house_system
from .common import default_house_system, domain_errors, get_provider, resolve_chart

router = APIRouter(prefix="/v1/charts", tags=["charts"])


@router.post("/compute", response_model=ComputeResponse)
def compute_chart(req: ComputeRequest, provider=Depends(get_provider)):
    requested = req.options.house_system or default_house_system()
    with domain_errors():
        requested = canonical_house_system(requested)
        chart = resolve_chart(provider, req.birth_data, None, requested)

    asp = aspects_svc.find_aspects(
        {p.name: {"lon": p.longitude, "speed": p.speed} for p in chart.positions}
    )

    b = req.birth_data
    seed = f"{b.date}|{b.time}|{b.latitude:.6f}|{b.longitude:.6f}|{b.timezone}|{requested}"
    chart_id = "cht_" + sha256(seed.encode()).hexdigest()[:24]

    meta = MetaOut(
        engine_version=ENGINE_VERSION,
        house_system=chart.house_system,
        requested_house_system=requested,
        backend=backend_name(),
        warnings=(list(chart.warnings) or None),
    )
    return ComputeResponse(
        chart_id=chart_id,
        meta=meta,
        chart=chart.to_dict(),
        houses=[{"num": i + 1, "cusp_lon": round(c, 4)} for i, c in enumerate(chart.houses)],
        aspects=asp,
    )
