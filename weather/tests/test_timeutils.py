from __future__ import annotations

# ruff: noqa: S101
from datetime import UTC, date, datetime, timedelta, timezone

from weather.timeutils import (
    ensure_aware,
    isoformat_with_tz,
    parse_forecast_day,
    utc_now,
    utc_today,
)


def test_utc_now_is_aware() -> None:
    now = utc_now()
    assert now.tzinfo is not None
    assert now.utcoffset() == timedelta(0)
    assert utc_today() in {now.date(), now.date() + timedelta(days=1)}


def test_ensure_aware_attaches_or_converts() -> None:
    naive = datetime(2025, 1, 1, 8, 0)
    assert ensure_aware(naive, UTC).tzinfo is UTC

    plus_three = timezone(timedelta(hours=3))
    aware = datetime(2025, 1, 1, 8, 0, tzinfo=plus_three)
    assert ensure_aware(aware, UTC) == datetime(2025, 1, 1, 5, 0, tzinfo=UTC)


def test_isoformat_with_tz_defaults_to_utc() -> None:
    assert (
        isoformat_with_tz(datetime(2025, 1, 1, 8, 0))
        == "2025-01-01T08:00:00+00:00"
    )


def test_parse_forecast_day() -> None:
    assert parse_forecast_day("2025-01-02 21:00:00") == date(2025, 1, 2)
    assert parse_forecast_day("2025-01-02") == date(2025, 1, 2)
    assert parse_forecast_day(None) is None
    assert parse_forecast_day("") is None
    assert parse_forecast_day("tomorrow 12:00") is None
    assert parse_forecast_day(20250102) is None
