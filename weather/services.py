from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from .engines.base import WeatherProvider
from .engines.types import (
    MAX_FORECAST_DAYS,
    ForecastEntry,
    ForecastRequest,
    WeatherSnapshot,
)
from .exceptions import WeatherProviderError
from .metrics import (
    weather_provider_errors_total,
    weather_provider_latency_seconds,
    weather_provider_requests_total,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _observe(
    provider: WeatherProvider,
    endpoint: str,
    call: Callable[[], Awaitable[T]],
) -> T:
    start_time = time.perf_counter()
    weather_provider_requests_total.labels(
        provider=provider.name, endpoint=endpoint
    ).inc()
    try:
        return await call()
    except Exception as exc:
        weather_provider_errors_total.labels(
            provider=provider.name,
            endpoint=endpoint,
            error_type=exc.__class__.__name__,
        ).inc()
        if isinstance(exc, WeatherProviderError):
            logger.warning(
                "weather.provider.failed provider=%s endpoint=%s "
                "status=%s err=%s",
                provider.name,
                endpoint,
                exc.status_code,
                exc.message,
            )
        raise
    finally:
        duration = time.perf_counter() - start_time
        weather_provider_latency_seconds.labels(
            provider=provider.name, endpoint=endpoint
        ).observe(duration)


async def get_current_weather(
    provider: WeatherProvider, city: str
) -> WeatherSnapshot:
    return await _observe(
        provider, "current", lambda: provider.current(city)
    )


async def get_forecast(
    provider: WeatherProvider, request: ForecastRequest
) -> Sequence[ForecastEntry]:
    days = min(request.days, MAX_FORECAST_DAYS)
    return await _observe(
        provider, "forecast", lambda: provider.forecast(request.city, days)
    )
