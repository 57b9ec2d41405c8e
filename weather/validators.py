from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, TypeGuard

from .engines.types import (
    DEFAULT_FORECAST_DAYS,
    MAX_FORECAST_DAYS,
    ForecastRequest,
)
from .exceptions import InvalidForecastArguments


def _is_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def is_valid_forecast_args(args: object) -> TypeGuard[Mapping[str, Any]]:
    """Structural check for ``get_forecast`` arguments.

    ``city`` must be a string and ``days``, when given, a real number.
    Nothing is coerced: ``{"days": "3"}`` is rejected.
    """

    if not isinstance(args, Mapping):
        return False
    if not isinstance(args.get("city"), str):
        return False
    days = args.get("days")
    return days is None or _is_number(days)


def clamp_days(days: float | None) -> int:
    if not days:
        return DEFAULT_FORECAST_DAYS
    return max(1, min(int(days), MAX_FORECAST_DAYS))


def parse_forecast_request(args: object) -> ForecastRequest:
    if not is_valid_forecast_args(args):
        raise InvalidForecastArguments("Invalid forecast arguments")
    city = args["city"].strip()
    if not city:
        raise InvalidForecastArguments("Invalid forecast arguments")
    return ForecastRequest(city=city, days=clamp_days(args.get("days")))
