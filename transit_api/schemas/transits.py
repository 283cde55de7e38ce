from pydantic import BaseModel, Field, model_validator
from typing import List, Optional, Dict, Any
from .charts import BirthDataIn, ChartOut


class Window(BaseModel):
    from_date: str  # "YYYY-MM-DD"
    to_date: str


class TransitsOptions(BaseModel):
    transit_bodies: Optional[List[str]] = None  # None = all ten planets
    house_system: Optional[str] = None


class TransitsComputeRequest(BaseModel):
    birth_data: Optional[BirthDataIn] = None
    chart: Optional[ChartOut] = None  # a previously computed chart
    window: Window
    options: TransitsOptions = TransitsOptions()

    @model_validator(mode="after")
    def _one_source(self):
        if (self.birth_data is None) == (self.chart is None):
            raise ValueError("provide exactly one of birth_data or chart")
        return self


class TransitsDayRequest(BaseModel):
    birth_data: Optional[BirthDataIn] = None
    chart: Optional[ChartOut] = None
    date: str
    options: TransitsOptions = TransitsOptions()

    @model_validator(mode="after")
    def _one_source(self):
        if (self.birth_data is None) == (self.chart is None):
            raise ValueError("provide exactly one of birth_data or chart")
        return self


class TransitAspectOut(BaseModel):
    date: str
    transit_body: str
    natal_point: str
    aspect: str
    orb: float
    applying: Optional[bool] = None
    transit_retrograde: bool
    natal_retrograde: bool
    transit_sign: str
    natal_sign: str
    transit_house: int
    natal_house: int
    interpretation: Optional[str] = None


class DailyTransitsOut(BaseModel):
    date: str
    aspects: List[TransitAspectOut]
    changes: List[TransitAspectOut]


class TransitsComputeResponse(BaseModel):
    meta: Dict[str, Any]
    days: List[DailyTransitsOut]


class TransitsDayResponse(BaseModel):
    meta: Dict[str, Any]
    day: DailyTransitsOut


class SkyTransitsRequest(BaseModel):
    window: Window
    bodies: Optional[List[str]] = None


class SkyAspectOut(BaseModel):
    body1: str
    body2: str
    aspect: str
    orb: float
    applying: Optional[bool] = None
    body1_retrograde: bool
    body2_retrograde: bool


class SkyDayOut(BaseModel):
    date: str
    moon_phase: str
    signs: Dict[str, str]
    retrograde: List[str] = Field(default_factory=list)
    aspects: List[SkyAspectOut]
    changes: List[SkyAspectOut]


class SkyTransitsResponse(BaseModel):
    meta: Dict[str, Any]
    days: List[SkyDayOut]
