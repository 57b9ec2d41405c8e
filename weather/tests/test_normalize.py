from __future__ import annotations

# ruff: noqa: S101
from datetime import UTC, date, datetime

import pytest

from weather.engines.normalize import (
    forecast_entries,
    to_forecast_days,
    to_snapshot,
)
from weather.exceptions import MalformedPayloadError, WeatherProviderError
from weather.tests.fakes import current_payload, forecast_payload


def test_to_snapshot_maps_provider_fields() -> None:
    before = datetime.now(UTC)
    snapshot = to_snapshot(current_payload())
    after = datetime.now(UTC)

    assert snapshot.temperature == pytest.approx(21.5)
    assert snapshot.conditions == "clear sky"
    assert snapshot.humidity == 60
    assert snapshot.wind_speed == pytest.approx(3.1)
    assert before <= snapshot.timestamp <= after


def test_to_snapshot_uses_given_clock() -> None:
    fixed = datetime(2025, 6, 1, 12, 30, tzinfo=UTC)
    snapshot = to_snapshot(current_payload(), now=fixed)
    assert snapshot.timestamp == fixed


def test_to_snapshot_ignores_provider_timestamp() -> None:
    fixed = datetime(2025, 6, 1, 12, 30, tzinfo=UTC)
    payload = {**current_payload(), "dt_txt": "2020-01-01 00:00:00"}
    snapshot = to_snapshot(payload, now=fixed)
    assert snapshot.timestamp == fixed


def test_to_snapshot_rejects_empty_weather_list() -> None:
    payload = {**current_payload(), "weather": []}
    with pytest.raises(MalformedPayloadError, match="empty 'weather'"):
        to_snapshot(payload)


@pytest.mark.parametrize(
    "payload",
    [
        {"weather": [{"description": "x"}], "wind": {"speed": 1.0}},
        {
            "main": {"temp": "warm", "humidity": 10},
            "weather": [{"description": "x"}],
            "wind": {"speed": 1.0},
        },
        {
            "main": {"temp": 1.0, "humidity": 10},
            "weather": [{"description": "x"}],
        },
        {
            "main": {"temp": 1.0, "humidity": 10},
            "weather": [{}],
            "wind": {"speed": 1.0},
        },
        {
            "main": {"temp": True, "humidity": 10},
            "weather": [{"description": "x"}],
            "wind": {"speed": 1.0},
        },
    ],
)
def test_to_snapshot_rejects_malformed_payloads(
    payload: dict[str, object],
) -> None:
    with pytest.raises(WeatherProviderError):
        to_snapshot(payload)


def test_forty_entries_yield_five_days_in_stride_order() -> None:
    entries = forecast_entries(forecast_payload(5))
    assert len(entries) == 40

    days = to_forecast_days(entries)

    assert [d.date for d in days] == [
        date(2025, 1, 1),
        date(2025, 1, 2),
        date(2025, 1, 3),
        date(2025, 1, 4),
        date(2025, 1, 5),
    ]
    assert [d.temperature for d in days] == [10.0, 18.0, 26.0, 34.0, 42.0]
    assert [d.conditions for d in days] == [
        "sky 0",
        "sky 8",
        "sky 16",
        "sky 24",
        "sky 32",
    ]


def test_partial_stride_still_yields_a_day() -> None:
    entries = forecast_entries(forecast_payload(2))[:9]
    days = to_forecast_days(entries)
    assert len(days) == 2
    assert days[1].conditions == "sky 8"


def test_missing_dt_txt_falls_back_to_today() -> None:
    entry = current_payload(temp=5.0, description="fog")
    days = to_forecast_days([entry], today=date(2025, 3, 4))
    assert len(days) == 1
    assert days[0].date == date(2025, 3, 4)
    assert days[0].temperature == pytest.approx(5.0)
    assert days[0].conditions == "fog"


def test_unparseable_dt_txt_falls_back_to_today() -> None:
    entry = {**current_payload(), "dt_txt": "soon"}
    days = to_forecast_days([entry], today=date(2025, 3, 4))
    assert days[0].date == date(2025, 3, 4)


def test_empty_forecast_list_yields_no_days() -> None:
    assert to_forecast_days([]) == []


def test_forecast_entries_requires_list() -> None:
    with pytest.raises(MalformedPayloadError):
        forecast_entries({"cnt": 0})
    with pytest.raises(MalformedPayloadError):
        forecast_entries({"list": {"0": {}}})


def test_forecast_day_with_empty_weather_list_raises() -> None:
    entry = {**current_payload(), "weather": []}
    with pytest.raises(MalformedPayloadError):
        to_forecast_days([entry])
