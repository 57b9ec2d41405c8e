from __future__ import annotations

from collections.abc import Sequence

from config.api.responses import JSONValue

from .engines.types import ForecastEntry, WeatherSnapshot
from .timeutils import isoformat_with_tz


def serialize_snapshot(snapshot: WeatherSnapshot) -> dict[str, JSONValue]:
    return {
        "temperature": snapshot.temperature,
        "conditions": snapshot.conditions,
        "humidity": snapshot.humidity,
        "wind_speed": snapshot.wind_speed,
        "timestamp": isoformat_with_tz(snapshot.timestamp),
    }


def serialize_forecast_entry(entry: ForecastEntry) -> dict[str, JSONValue]:
    return {
        "date": entry.date.isoformat(),
        "temperature": entry.temperature,
        "conditions": entry.conditions,
    }


def serialize_forecast(entries: Sequence[ForecastEntry]) -> list[JSONValue]:
    return [serialize_forecast_entry(entry) for entry in entries]
