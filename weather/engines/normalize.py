"""Reshape OpenWeatherMap payloads into snapshot and forecast records.

Everything here is pure: callers pass ``now``/``today`` when they need
deterministic output.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

from ..exceptions import MalformedPayloadError
from ..timeutils import parse_forecast_day, utc_now, utc_today
from .types import ENTRIES_PER_DAY, ForecastEntry, WeatherSnapshot


def _block(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if not isinstance(value, Mapping):
        raise MalformedPayloadError(f"missing '{key}' block in response")
    return value


def _number(block: Mapping[str, Any], key: str, label: str) -> float:
    value = block.get(key)
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise MalformedPayloadError(f"missing numeric '{label}' in response")
    return value


def _conditions(raw: Mapping[str, Any]) -> str:
    weather = raw.get("weather")
    if not isinstance(weather, Sequence) or isinstance(weather, str):
        raise MalformedPayloadError("missing 'weather' list in response")
    if not weather:
        raise MalformedPayloadError("empty 'weather' list in response")
    first = weather[0]
    description = (
        first.get("description") if isinstance(first, Mapping) else None
    )
    if not isinstance(description, str):
        raise MalformedPayloadError("missing weather description in response")
    return description


def _ensure_mapping(raw: object) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise MalformedPayloadError("unexpected weather entry shape")
    return raw


def to_snapshot(
    raw: Mapping[str, Any], now: datetime | None = None
) -> WeatherSnapshot:
    raw = _ensure_mapping(raw)
    main = _block(raw, "main")
    wind = _block(raw, "wind")
    return WeatherSnapshot(
        temperature=_number(main, "temp", "main.temp"),
        conditions=_conditions(raw),
        humidity=_number(main, "humidity", "main.humidity"),
        wind_speed=_number(wind, "speed", "wind.speed"),
        timestamp=now or utc_now(),
    )


def forecast_entries(raw: Mapping[str, Any]) -> Sequence[Any]:
    entries = _ensure_mapping(raw).get("list")
    if not isinstance(entries, list):
        raise MalformedPayloadError("missing 'list' in forecast response")
    return entries


def to_forecast_days(
    entries: Sequence[Any], today: date | None = None
) -> list[ForecastEntry]:
    fallback = today or utc_today()
    days: list[ForecastEntry] = []
    for idx in range(0, len(entries), ENTRIES_PER_DAY):
        entry = _ensure_mapping(entries[idx])
        day = parse_forecast_day(entry.get("dt_txt")) or fallback
        main = _block(entry, "main")
        days.append(
            ForecastEntry(
                date=day,
                temperature=_number(main, "temp", "main.temp"),
                conditions=_conditions(entry),
            )
        )
    return days
