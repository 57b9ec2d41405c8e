from __future__ import annotations

import httpx

ERROR_PREFIX = "Weather API error"


class WeatherProviderError(Exception):
    """Upstream weather API or transport failure."""

    def __init__(
        self, message: str, *, status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return f"{ERROR_PREFIX}: {self.message}"


class MalformedPayloadError(WeatherProviderError):
    """Provider answered 2xx with a body we cannot normalize."""


class InvalidForecastArguments(ValueError):
    """Tool arguments do not describe a forecast request."""


def _provider_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def provider_error_from(exc: httpx.HTTPError) -> WeatherProviderError:
    """Map an httpx failure to a provider error.

    Prefers the ``message`` field of a structured error body. Status errors
    without one report only the status code: ``str()`` of an
    ``HTTPStatusError`` embeds the request URL, and with it ``appid``.
    Transport errors fall back to their own message.
    """

    if isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
        message = _provider_message(exc.response)
        return WeatherProviderError(
            message or f"Request failed with status code {status_code}",
            status_code=status_code,
        )
    return WeatherProviderError(str(exc) or exc.__class__.__name__)
