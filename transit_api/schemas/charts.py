from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any


class BirthDataIn(BaseModel):
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    latitude: float
    longitude: float
    timezone: float = Field(..., description="UTC offset in hours")


class ChartOptions(BaseModel):
    house_system: Optional[str] = None  # None = HOUSE_SYSTEM env, default placidus


class ComputeRequest(BaseModel):
    birth_data: BirthDataIn
    options: ChartOptions = ChartOptions()


class BodyOut(BaseModel):
    name: str
    longitude: float
    sign: str
    house: int
    retrograde: bool
    speed: Optional[float] = None


class HouseOut(BaseModel):
    num: int
    cusp_lon: float


class MetaOut(BaseModel):
    engine: str = "natal-transits"
    engine_version: str
    house_system: str
    requested_house_system: str
    backend: Optional[str] = None
    warnings: Optional[List[str]] = None


class ChartOut(BaseModel):
    ascendant: float
    midheaven: float
    houses: List[float]
    planets: List[BodyOut]
    latitude: float
    longitude: float
    house_system: str = "placidus"
    instant: Optional[str] = None
    warnings: List[str] = []


class ComputeResponse(BaseModel):
    chart_id: str
    meta: MetaOut
    chart: ChartOut
    houses: List[HouseOut]
    aspects: List[Dict[str, Any]]
