from __future__ import annotations

import json
from typing import TypeAlias

import mcp.types as types

JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]

JSON_MIME_TYPE = "application/json"


def dump_json(data: JSONValue) -> str:
    return json.dumps(data, indent=2)


def text_tool_result(
    text: str, *, is_error: bool = False
) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        isError=is_error,
    )


def json_tool_result(data: JSONValue) -> types.CallToolResult:
    return text_tool_result(dump_json(data))


def json_resource_result(
    uri: str, data: JSONValue
) -> types.ReadResourceResult:
    return types.ReadResourceResult(
        contents=[
            types.TextResourceContents(
                uri=uri,
                mimeType=JSON_MIME_TYPE,
                text=dump_json(data),
            )
        ]
    )
