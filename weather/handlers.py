"""MCP request handlers.

Each handler is a plain coroutine taking the ``HandlerContext`` and the
request parameters; ``HANDLERS`` maps MCP request kinds to them. Protocol
failures are raised as ``McpError``; provider failures on the tool path come
back as error-flagged tool results so the orchestrator can tell a broken
request from a tool that reported a problem.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias
from urllib.parse import quote, unquote

import mcp.types as types
from mcp.shared.exceptions import McpError

from config.api.exceptions import (
    internal_error,
    invalid_params,
    invalid_request,
    method_not_found,
)
from config.api.responses import (
    JSON_MIME_TYPE,
    json_resource_result,
    json_tool_result,
    text_tool_result,
)
from config.settings import WeatherSettings

from . import services
from .engines.base import WeatherProvider
from .engines.types import MAX_FORECAST_DAYS
from .exceptions import InvalidForecastArguments, WeatherProviderError
from .metrics import mcp_requests_total
from .serializers import serialize_forecast, serialize_snapshot
from .validators import parse_forecast_request

logger = logging.getLogger(__name__)

FORECAST_TOOL = "get_forecast"

LIST_RESOURCES = "resources/list"
READ_RESOURCE = "resources/read"
LIST_TOOLS = "tools/list"
CALL_TOOL = "tools/call"


@dataclass(frozen=True)
class HandlerContext:
    settings: WeatherSettings
    provider: WeatherProvider


Result: TypeAlias = (
    types.ListResourcesResult
    | types.ReadResourceResult
    | types.ListToolsResult
    | types.CallToolResult
)
Handler: TypeAlias = Callable[
    [HandlerContext, Mapping[str, Any]], Awaitable[Result]
]


def resource_uri(city: str) -> str:
    return f"weather://{quote(city)}/current"


def is_current_resource(uri: str, city: str) -> bool:
    """Match ``uri`` against the advertised URI, ignoring percent-encoding."""

    return unquote(uri) == unquote(resource_uri(city))


def forecast_tool() -> types.Tool:
    return types.Tool(
        name=FORECAST_TOOL,
        description="Get weather forecast for a city",
        inputSchema={
            "type": "object",
            "properties": {
                "city": {
                    "type": "string",
                    "description": "City name",
                },
                "days": {
                    "type": "number",
                    "description": f"Number of days (1-{MAX_FORECAST_DAYS})",
                    "minimum": 1,
                    "maximum": MAX_FORECAST_DAYS,
                },
            },
            "required": ["city"],
        },
    )


async def list_resources(
    ctx: HandlerContext, params: Mapping[str, Any]
) -> types.ListResourcesResult:
    city = ctx.settings.default_city
    return types.ListResourcesResult(
        resources=[
            types.Resource(
                uri=resource_uri(city),
                name=f"Current weather in {city}",
                mimeType=JSON_MIME_TYPE,
                description=(
                    "Real-time weather data including temperature, "
                    "conditions, humidity, and wind speed"
                ),
            )
        ]
    )


async def read_resource(
    ctx: HandlerContext, params: Mapping[str, Any]
) -> types.ReadResourceResult:
    uri = str(params.get("uri", ""))
    city = ctx.settings.default_city
    if not is_current_resource(uri, city):
        raise invalid_request(f"Unknown resource: {uri}")

    try:
        snapshot = await services.get_current_weather(ctx.provider, city)
    except WeatherProviderError as exc:
        raise internal_error(str(exc)) from exc
    return json_resource_result(uri, serialize_snapshot(snapshot))


async def list_tools(
    ctx: HandlerContext, params: Mapping[str, Any]
) -> types.ListToolsResult:
    return types.ListToolsResult(tools=[forecast_tool()])


async def call_tool(
    ctx: HandlerContext, params: Mapping[str, Any]
) -> types.CallToolResult:
    name = params.get("name")
    if name != FORECAST_TOOL:
        raise method_not_found(f"Unknown tool: {name}")

    try:
        request = parse_forecast_request(params.get("arguments"))
    except InvalidForecastArguments as exc:
        raise invalid_params(str(exc)) from exc

    try:
        forecast = await services.get_forecast(ctx.provider, request)
    except WeatherProviderError as exc:
        return text_tool_result(str(exc), is_error=True)
    return json_tool_result(serialize_forecast(forecast))


HANDLERS: dict[str, Handler] = {
    LIST_RESOURCES: list_resources,
    READ_RESOURCE: read_resource,
    LIST_TOOLS: list_tools,
    CALL_TOOL: call_tool,
}


async def dispatch(
    ctx: HandlerContext, kind: str, params: Mapping[str, Any] | None = None
) -> Result:
    handler = HANDLERS.get(kind)
    if handler is None:
        raise method_not_found(f"Method not supported: {kind}")

    try:
        result = await handler(ctx, params or {})
    except McpError as exc:
        mcp_requests_total.labels(kind=kind, outcome="error").inc()
        logger.info(
            "mcp.request.rejected kind=%s code=%s message=%s",
            kind,
            exc.error.code,
            exc.error.message,
        )
        raise
    except Exception:
        mcp_requests_total.labels(kind=kind, outcome="error").inc()
        logger.exception("mcp.request.failed kind=%s", kind)
        raise

    outcome = "ok"
    if isinstance(result, types.CallToolResult) and result.isError:
        outcome = "tool_error"
    mcp_requests_total.labels(kind=kind, outcome=outcome).inc()
    return result
