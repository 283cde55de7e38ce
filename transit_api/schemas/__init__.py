from .charts import BirthDataIn, ChartOptions, ComputeRequest, ComputeResponse, BodyOut, ChartOut, HouseOut, MetaOut

from .transits import (
    Window,
    TransitsOptions,
    TransitsComputeRequest,
    TransitsComputeResponse,
    TransitsDayRequest,
    TransitsDayResponse,
    SkyTransitsRequest,
    SkyTransitsResponse,
)
