"""Pieces shared by the three MCP servers: result envelopes, argument
decoding, schema generation and handler registration on the low-level
``mcp.server.lowlevel.Server``.
"""

from __future__ import annotations

import json
from typing import Any, Awaitable, Callable, Dict, Optional, Type

from mcp import types
from mcp.server.lowlevel import Server

from ..core.errors import invalid_params
from ..core.schemas import ArgsT, ToolArgs, decode_args

ToolHandler = Callable[[str, Optional[Dict[str, Any]]], Awaitable[types.CallToolResult]]
ResourceHandler = Callable[[str], Awaitable[types.ReadResourceResult]]

JSON_MIME_TYPE = "application/json"


def json_text(body: Any) -> str:
    return json.dumps(body, indent=2, ensure_ascii=False)


def text_result(body: Any) -> types.CallToolResult:
    """Successful tool result carrying ``body`` as pretty JSON."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=json_text(body))],
        isError=False,
    )


def api_error_result(provider: str, message: str) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=f"{provider} API error: {message}")],
        isError=True,
    )


def json_resource(uri: str, body: Any) -> types.ReadResourceResult:
    return types.ReadResourceResult(
        contents=[types.TextResourceContents(uri=uri, mimeType=JSON_MIME_TYPE, text=json_text(body))]
    )


def require_args(model: Type[ArgsT], arguments: Any, label: str) -> ArgsT:
    """Decode tool arguments or raise an INVALID_PARAMS protocol error."""
    args = decode_args(model, arguments)
    if args is None:
        raise invalid_params(f"Invalid {label} arguments")
    return args


def input_schema(model: Type[ToolArgs]) -> Dict[str, Any]:
    """JSON schema advertised in tools/list, derived from the pydantic model."""
    schema = model.model_json_schema(by_alias=True)
    schema.pop("title", None)
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    return schema


def register_call_tool(server: Server, handler: ToolHandler) -> None:
    """Install ``handler`` for tools/call.

    McpError raised by ``handler`` must reach the client as a JSON-RPC error.
    The ``server.call_tool()`` decorator wraps every exception into an error
    result, so the handler goes into ``request_handlers`` directly.
    """

    async def _handle(req: types.CallToolRequest) -> types.ServerResult:
        return types.ServerResult(await handler(req.params.name, req.params.arguments))

    server.request_handlers[types.CallToolRequest] = _handle


def register_read_resource(server: Server, handler: ResourceHandler) -> None:
    """Install ``handler`` for resources/read, keeping the URI as sent."""

    async def _handle(req: types.ReadResourceRequest) -> types.ServerResult:
        return types.ServerResult(await handler(str(req.params.uri)))

    server.request_handlers[types.ReadResourceRequest] = _handle
