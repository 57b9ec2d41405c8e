from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from .types import ForecastEntry, ProviderName, WeatherSnapshot


class WeatherProvider(ABC):
    """Abstract base for weather providers."""

    name: ProviderName

    @abstractmethod
    async def current(self, city: str) -> WeatherSnapshot:
        """Return current conditions for a city."""

    @abstractmethod
    async def forecast(self, city: str, days: int) -> Sequence[ForecastEntry]:
        """Return one forecast entry per day, in provider order."""
