"""MCP server for Google Places: text search, details and nearby search."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Type

import requests
from mcp import types
from mcp.server.lowlevel import Server

from .. import __version__
from ..core.errors import method_not_found, upstream_error_message
from ..core.schemas import NearbySearchArgs, PlaceDetailsArgs, PlacesSearchArgs, ToolArgs
from ..services.places import PROVIDER, PlacesClient
from .protocol import api_error_result, input_schema, register_call_tool, require_args, text_result

logger = logging.getLogger("geo-mcp.places")

TOOLS: List[types.Tool] = [
    types.Tool(
        name="search_places",
        description="指定したキーワードで場所を検索します",
        inputSchema=input_schema(PlacesSearchArgs),
    ),
    types.Tool(
        name="get_place_details",
        description="場所の詳細情報を取得します",
        inputSchema=input_schema(PlaceDetailsArgs),
    ),
    types.Tool(
        name="nearby_search",
        description="指定した座標の近くにある場所を検索します",
        inputSchema=input_schema(NearbySearchArgs),
    ),
]


def _routes(client: PlacesClient) -> Dict[str, Tuple[Type[ToolArgs], Callable[[Any], Awaitable[Any]]]]:
    return {
        "search_places": (PlacesSearchArgs, client.search_places),
        "get_place_details": (PlaceDetailsArgs, client.get_place_details),
        "nearby_search": (NearbySearchArgs, client.nearby_search),
    }


async def call_tool(
    client: PlacesClient,
    name: str,
    arguments: Optional[Dict[str, Any]],
) -> types.CallToolResult:
    route = _routes(client).get(name)
    if route is None:
        raise method_not_found(f"Unknown tool: {name}")
    model, fetch = route
    args = require_args(model, arguments, name)

    try:
        body = await fetch(args)
    except requests.RequestException as e:
        message = upstream_error_message(e, "error_message")
        logger.warning("%s call failed: %s", name, message)
        return api_error_result(PROVIDER, message)
    return text_result(body)


async def self_test(client: PlacesClient) -> Any:
    return await client.search_places(PlacesSearchArgs(query="東京タワー"))


def build_server(client: PlacesClient) -> Server:
    server: Server = Server(client.config.name, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return list(TOOLS)

    register_call_tool(server, partial(call_tool, client))
    return server
