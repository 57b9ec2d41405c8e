"""Process settings loader.

Reads the provider key and tuning knobs from the environment once at startup
and freezes them into a ``WeatherSettings`` instance that is passed to the
provider client and request handlers.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_CITY = "San Francisco"
DEFAULT_TIMEOUT_S = 10.0
DEFAULT_LOG_LEVEL = "INFO"
UNITS = "metric"


class ImproperlyConfigured(Exception):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, message: str, *, code: str) -> None:
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class WeatherSettings:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    default_city: str = DEFAULT_CITY
    units: str = UNITS
    timeout: float = DEFAULT_TIMEOUT_S
    log_level: str = DEFAULT_LOG_LEVEL
    metrics_port: int | None = None


def _get(environ: Mapping[str, str], name: str) -> str:
    return environ.get(name, "").strip()


def _parse_timeout(raw: str) -> float:
    if not raw:
        return DEFAULT_TIMEOUT_S
    try:
        value = float(raw)
    except ValueError as exc:
        raise ImproperlyConfigured(
            "WEATHER_HTTP_TIMEOUT must be a number of seconds.",
            code="bad_value",
        ) from exc
    if value <= 0:
        raise ImproperlyConfigured(
            "WEATHER_HTTP_TIMEOUT must be positive.", code="bad_value"
        )
    return value


def _parse_port(raw: str) -> int | None:
    if not raw:
        return None
    try:
        port = int(raw)
    except ValueError as exc:
        raise ImproperlyConfigured(
            "WEATHER_METRICS_PORT must be an integer.", code="bad_value"
        ) from exc
    if not 0 < port < 65536:
        raise ImproperlyConfigured(
            "WEATHER_METRICS_PORT is out of range.", code="bad_value"
        )
    return port


def load_settings(
    environ: Mapping[str, str] | None = None,
) -> WeatherSettings:
    """Return validated settings from ``environ`` (defaults to os.environ)."""

    env = os.environ if environ is None else environ

    api_key = _get(env, "OPENWEATHER_API_KEY")
    if not api_key:
        raise ImproperlyConfigured(
            "OPENWEATHER_API_KEY environment variable is required",
            code="missing_config",
        )

    base_url = _get(env, "OPENWEATHER_BASE_URL") or DEFAULT_BASE_URL
    default_city = _get(env, "WEATHER_DEFAULT_CITY") or DEFAULT_CITY
    log_level = (_get(env, "WEATHER_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()

    return WeatherSettings(
        api_key=api_key,
        base_url=base_url.rstrip("/"),
        default_city=default_city,
        timeout=_parse_timeout(_get(env, "WEATHER_HTTP_TIMEOUT")),
        log_level=log_level,
        metrics_port=_parse_port(_get(env, "WEATHER_METRICS_PORT")),
    )
