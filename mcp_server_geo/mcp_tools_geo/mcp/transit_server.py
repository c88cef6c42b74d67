"""MCP server for Navitime public-transit routing (RapidAPI)."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Dict, List, Optional

import requests
from mcp import types
from mcp.server.lowlevel import Server

from .. import __version__
from ..core.errors import method_not_found, upstream_error_message
from ..core.schemas import TransitArgs
from ..services.transit import PROVIDER, TransitClient
from ..utils.timezone import normalize_route_response
from .protocol import api_error_result, input_schema, register_call_tool, require_args, text_result

logger = logging.getLogger("geo-mcp.transit")

TOOL_NAME = "route_transit"

TOOLS: List[types.Tool] = [
    types.Tool(
        name=TOOL_NAME,
        description="指定した出発地から目的地までの公共交通機関での経路を探索します",
        inputSchema=input_schema(TransitArgs),
    ),
]


async def call_tool(
    client: TransitClient,
    name: str,
    arguments: Optional[Dict[str, Any]],
) -> types.CallToolResult:
    if name != TOOL_NAME:
        raise method_not_found(f"Unknown tool: {name}")
    args = require_args(TransitArgs, arguments, TOOL_NAME)

    try:
        body = await client.route_transit(args)
    except requests.RequestException as e:
        # an empty body message is kept; only a missing one falls back
        message = upstream_error_message(e, "message", skip_empty=False)
        logger.warning("%s call failed: %s", TOOL_NAME, message)
        return api_error_result(PROVIDER, message)
    return text_result(normalize_route_response(body))


async def self_test(client: TransitClient) -> Any:
    # Tokyo Station -> Shin-Osaka
    args = TransitArgs(start="35.681236,139.767125", goal="34.733165,135.500214")
    return normalize_route_response(await client.route_transit(args))


def build_server(client: TransitClient) -> Server:
    server: Server = Server(client.config.name, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return list(TOOLS)

    register_call_tool(server, partial(call_tool, client))
    return server
