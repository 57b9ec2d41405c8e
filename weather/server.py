"""Stdio entrypoint binding the weather handlers to an MCP server.

stdout carries protocol frames only; logs are routed to stderr by
``config.logging_config``.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import mcp.types as types
from dotenv import load_dotenv
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from prometheus_client import start_http_server

from config.logging_config import configure_logging
from config.settings import (
    ImproperlyConfigured,
    WeatherSettings,
    load_settings,
)

from .engines.registry import build_provider
from .handlers import (
    CALL_TOOL,
    LIST_RESOURCES,
    LIST_TOOLS,
    READ_RESOURCE,
    HandlerContext,
    dispatch,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "weather-server"
SERVER_VERSION = "0.1.0"

RequestHandler = Callable[[Any], Awaitable[types.ServerResult]]


def build_context(settings: WeatherSettings) -> HandlerContext:
    return HandlerContext(
        settings=settings, provider=build_provider(settings)
    )


def _bind(
    ctx: HandlerContext,
    kind: str,
    params_of: Callable[[Any], Mapping[str, Any]],
) -> RequestHandler:
    async def handler(req: Any) -> types.ServerResult:
        result = await dispatch(ctx, kind, params_of(req))
        return types.ServerResult(result)

    return handler


def build_server(ctx: HandlerContext) -> Server:
    """Return a low-level MCP server wired to the handler table.

    Handlers are registered directly in ``request_handlers`` rather than via
    the decorators so that ``McpError`` raised from a tool call reaches the
    client as a JSON-RPC error instead of an error-flagged tool result.
    """

    server: Server = Server(SERVER_NAME)
    server.request_handlers[types.ListResourcesRequest] = _bind(
        ctx, LIST_RESOURCES, lambda req: {}
    )
    server.request_handlers[types.ReadResourceRequest] = _bind(
        ctx, READ_RESOURCE, lambda req: {"uri": str(req.params.uri)}
    )
    server.request_handlers[types.ListToolsRequest] = _bind(
        ctx, LIST_TOOLS, lambda req: {}
    )
    server.request_handlers[types.CallToolRequest] = _bind(
        ctx,
        CALL_TOOL,
        lambda req: {
            "name": req.params.name,
            "arguments": req.params.arguments,
        },
    )
    return server


def initialization_options(server: Server) -> InitializationOptions:
    return InitializationOptions(
        server_name=SERVER_NAME,
        server_version=SERVER_VERSION,
        capabilities=server.get_capabilities(
            notification_options=NotificationOptions(),
            experimental_capabilities={},
        ),
    )


async def serve(settings: WeatherSettings) -> None:
    server = build_server(build_context(settings))
    options = initialization_options(server)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Weather MCP server running on stdio")
        await server.run(read_stream, write_stream, options)


async def _serve_until_signalled(settings: WeatherSettings) -> None:
    loop = asyncio.get_running_loop()
    task = asyncio.current_task()
    if task is not None:
        for sig in (signal.SIGINT, signal.SIGTERM):
            # add_signal_handler is unavailable on Windows event loops.
            with contextlib.suppress(NotImplementedError):
                loop.add_signal_handler(sig, task.cancel)
    try:
        await serve(settings)
    except asyncio.CancelledError:
        logger.info("weather.server.stopped reason=signal")


def main() -> int:
    load_dotenv()
    configure_logging()
    try:
        settings = load_settings()
    except ImproperlyConfigured as exc:
        logger.error("weather.config.invalid code=%s err=%s", exc.code, exc)
        return 1

    configure_logging(settings.log_level)
    if settings.metrics_port:
        start_http_server(settings.metrics_port)
        logger.info("weather.metrics.listening port=%s", settings.metrics_port)

    asyncio.run(_serve_until_signalled(settings))
    return 0
