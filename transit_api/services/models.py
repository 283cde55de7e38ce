"""Value types passed between the chart builder, the scanner and the API."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class BirthData:
    date: str  # YYYY-MM-DD
    time: str  # HH:MM, local wall time
    latitude: float
    longitude: float
    timezone: float  # UTC offset in hours


@dataclass(frozen=True)
class BodyPosition:
    longitude: float
    speed: float  # signed degrees/day

    @property
    def retrograde(self) -> bool:
        return self.speed < 0


@dataclass(frozen=True)
class HouseCusps:
    ascendant: float
    midheaven: float
    cusps: Tuple[float, ...]


@dataclass(frozen=True)
class NatalPosition:
    name: str
    longitude: float
    sign: str
    house: int
    retrograde: bool
    speed: float = 0.0


@dataclass(frozen=True)
class BirthChart:
    ascendant: float
    midheaven: float
    houses: Tuple[float, ...]
    positions: Tuple[NatalPosition, ...]
    latitude: float
    longitude: float
    house_system: str = "placidus"
    instant: Optional[datetime] = None
    warnings: Tuple[str, ...] = ()

    def position(self, name: str) -> Optional[NatalPosition]:
        for p in self.positions:
            if p.name == name:
                return p
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ascendant": self.ascendant,
            "midheaven": self.midheaven,
            "houses": list(self.houses),
            "planets": [asdict(p) for p in self.positions],
            "latitude": self.latitude,
            "longitude": self.longitude,
            "house_system": self.house_system,
            "instant": self.instant.isoformat() if self.instant else None,
            "warnings": list(self.warnings),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BirthChart":
        instant = data.get("instant")
        return cls(
            ascendant=float(data["ascendant"]),
            midheaven=float(data["midheaven"]),
            houses=tuple(float(c) for c in data["houses"]),
            positions=tuple(
                NatalPosition(
                    name=p["name"],
                    longitude=float(p["longitude"]),
                    sign=p["sign"],
                    house=int(p["house"]),
                    retrograde=bool(p.get("retrograde", False)),
                    speed=float(p.get("speed") or 0.0),
                )
                for p in data["planets"]
            ),
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            house_system=data.get("house_system") or "placidus",
            instant=datetime.fromisoformat(instant) if isinstance(instant, str) else instant,
            warnings=tuple(data.get("warnings") or ()),
        )


@dataclass(frozen=True)
class TransitAspect:
    date: date
    transit_body: str
    natal_point: str
    aspect: str
    orb: float
    applying: bool
    transit_retrograde: bool
    natal_retrograde: bool
    transit_sign: str
    natal_sign: str
    transit_house: int
    natal_house: int

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["date"] = self.date.isoformat()
        return d


@dataclass
class DailyTransitReport:
    date: date
    aspects: List[TransitAspect] = field(default_factory=list)
    changes: List[TransitAspect] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.aspects and not self.changes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "aspects": [a.to_dict() for a in self.aspects],
            "changes": [c.to_dict() for c in self.changes],
        }


__all__ = [
    "BirthChart",
    "BirthData",
    "BodyPosition",
    "DailyTransitReport",
    "HouseCusps",
    "NatalPosition",
    "TransitAspect",
]
