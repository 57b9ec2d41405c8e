"""Protocol-level error builders.

Handlers raise these to terminate a single request with a JSON-RPC error.
Provider failures on the tool path are reported as error-flagged tool
results instead (see ``config.api.responses.text_tool_result``).
"""

from __future__ import annotations

import mcp.types as types
from mcp.shared.exceptions import McpError


def protocol_error(code: int, message: str) -> McpError:
    return McpError(types.ErrorData(code=code, message=message))


def invalid_request(message: str) -> McpError:
    return protocol_error(types.INVALID_REQUEST, message)


def method_not_found(message: str) -> McpError:
    return protocol_error(types.METHOD_NOT_FOUND, message)


def invalid_params(message: str) -> McpError:
    return protocol_error(types.INVALID_PARAMS, message)


def internal_error(message: str) -> McpError:
    return protocol_error(types.INTERNAL_ERROR, message)
