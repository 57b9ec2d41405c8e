from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo


def utc_now() -> datetime:
    return datetime.now(timezone.utc)  # noqa: UP017


def utc_today() -> date:
    return utc_now().date()


def ensure_aware(dt: datetime, tz: tzinfo) -> datetime:
    """Attach or convert timezone information to a datetime."""

    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def isoformat_with_tz(dt: datetime, tz: tzinfo | None = None) -> str:
    """Return an ISO8601 string with timezone offset."""

    zone = tz or dt.tzinfo or timezone.utc  # noqa: UP017
    aware = ensure_aware(dt, zone)
    return aware.isoformat()


def parse_forecast_day(raw: object) -> date | None:
    """Return the calendar day from a ``YYYY-MM-DD HH:MM:SS`` stamp."""

    if not isinstance(raw, str) or not raw.strip():
        return None
    day_part = raw.strip().split(" ", 1)[0]
    try:
        return date.fromisoformat(day_part)
    except ValueError:
        return None
