"""
Shared data containers
"""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class DailyWeather:
    """Daily aggregates for one location and date (°C, mm, km/h)"""
    date: date
    max_temp: Optional[float]
    min_temp: Optional[float]
    precipitation: Optional[float]
    wind_speed: Optional[float]


@dataclass(frozen=True)
class ConditionRecord:
    """Display-ready likelihood for one named weather condition"""
    condition: str
    probability: int
    severity: str
    description: str
    actual_value: Optional[float] = None
    unit: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)
