from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal

ProviderName = Literal["openweathermap"]

MAX_FORECAST_DAYS = 5
DEFAULT_FORECAST_DAYS = 3
# The forecast endpoint returns one entry per 3 hours.
ENTRIES_PER_DAY = 8


@dataclass(frozen=True)
class WeatherSnapshot:
    temperature: float
    conditions: str
    humidity: float
    wind_speed: float
    timestamp: datetime


@dataclass(frozen=True)
class ForecastEntry:
    date: date
    temperature: float
    conditions: str


@dataclass(frozen=True)
class ForecastRequest:
    city: str
    days: int = DEFAULT_FORECAST_DAYS
