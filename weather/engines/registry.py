from __future__ import annotations

from config.settings import WeatherSettings

from .base import WeatherProvider
from .openweather import OpenWeatherMapProvider
from .types import ProviderName

DEFAULT_PROVIDER: ProviderName = "openweathermap"


def build_registry(
    settings: WeatherSettings,
) -> dict[ProviderName, WeatherProvider]:
    """Instantiate supported providers."""

    providers: dict[ProviderName, WeatherProvider] = {
        "openweathermap": OpenWeatherMapProvider(settings),
    }
    return providers


def build_provider(settings: WeatherSettings) -> WeatherProvider:
    return build_registry(settings)[DEFAULT_PROVIDER]
