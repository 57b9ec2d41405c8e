from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from config.settings import WeatherSettings

from ..exceptions import MalformedPayloadError, provider_error_from
from .base import WeatherProvider
from .normalize import forecast_entries, to_forecast_days, to_snapshot
from .types import (
    ENTRIES_PER_DAY,
    ForecastEntry,
    ProviderName,
    WeatherSnapshot,
)

logger = logging.getLogger(__name__)


class OpenWeatherMapProvider(WeatherProvider):
    """OpenWeatherMap 2.5 implementation.

    Uses ``/weather`` for current conditions and the 3-hour ``/forecast``
    feed for daily samples. Every request carries ``units=metric`` so
    temperatures arrive in Celsius.
    """

    name: ProviderName = "openweathermap"
    CURRENT_ENDPOINT = "weather"
    FORECAST_ENDPOINT = "forecast"

    def __init__(self, settings: WeatherSettings) -> None:
        self.api_key = settings.api_key
        self.base_url = settings.base_url
        self.units = settings.units
        self.timeout = settings.timeout

    async def current(self, city: str) -> WeatherSnapshot:
        payload = await self._request(self.CURRENT_ENDPOINT, {"q": city})
        return to_snapshot(payload)

    async def forecast(self, city: str, days: int) -> Sequence[ForecastEntry]:
        payload = await self._request(
            self.FORECAST_ENDPOINT,
            {"q": city, "cnt": days * ENTRIES_PER_DAY},
        )
        return to_forecast_days(forecast_entries(payload))

    async def _request(
        self, endpoint: str, params: dict[str, Any]
    ) -> dict[str, Any]:
        query = {**params, "appid": self.api_key, "units": self.units}
        url = f"{self.base_url}/{endpoint}"
        logger.debug(
            "openweathermap.request endpoint=%s q=%s",
            endpoint,
            params.get("q"),
        )
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=query)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise provider_error_from(exc) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedPayloadError(
                "response body is not valid JSON"
            ) from exc
        if not isinstance(data, dict):
            raise MalformedPayloadError("unexpected response shape")
        return data
