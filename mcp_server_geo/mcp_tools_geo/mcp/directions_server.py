"""MCP server for Google Maps Directions.

Besides the ``get_directions`` tool it serves routes as resources under
``directions://{origin}/{destination}``. The two paths differ in error
handling: an upstream failure in the tool becomes an ``isError`` result, the
same failure in a resource read is an INTERNAL_ERROR protocol error.
"""

from __future__ import annotations

import logging
import re
from functools import partial
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import unquote

import requests
from mcp import types
from mcp.server.lowlevel import Server

from .. import __version__
from ..core.errors import internal_error, invalid_request, method_not_found, upstream_error_message
from ..core.schemas import DirectionsArgs
from ..services.directions import PROVIDER, DirectionsClient
from .protocol import (
    JSON_MIME_TYPE,
    api_error_result,
    input_schema,
    json_resource,
    register_call_tool,
    register_read_resource,
    require_args,
    text_result,
)

logger = logging.getLogger("geo-mcp.directions")

TOOL_NAME = "get_directions"
ERROR_FIELD = "error_message"

# Greedy: "directions://a/b/c" reads as origin "a/b", destination "c".
DIRECTIONS_URI = re.compile(r"^directions://(.+)/(.+)$")

TOOLS: List[types.Tool] = [
    types.Tool(
        name=TOOL_NAME,
        description="Get directions using Google Maps Directions API",
        inputSchema=input_schema(DirectionsArgs),
    ),
]

RESOURCES: List[types.Resource] = [
    types.Resource(
        uri="directions://ExampleRoute",
        name="Example route directions",
        mimeType=JSON_MIME_TYPE,
        description="Example directions between two locations",
    ),
]

RESOURCE_TEMPLATES: List[types.ResourceTemplate] = [
    types.ResourceTemplate(
        uriTemplate="directions://{origin}/{destination}",
        name="Directions between two locations",
        mimeType=JSON_MIME_TYPE,
        description="Get directions between origin and destination",
    ),
]


def parse_directions_uri(uri: str) -> Tuple[str, str]:
    """Split a ``directions://`` URI into URL-decoded (origin, destination)."""
    match = DIRECTIONS_URI.match(uri)
    if not match:
        raise invalid_request(f"Invalid URI: {uri}")
    return unquote(match.group(1)), unquote(match.group(2))


async def call_tool(
    client: DirectionsClient,
    name: str,
    arguments: Optional[Dict[str, Any]],
) -> types.CallToolResult:
    if name != TOOL_NAME:
        raise method_not_found(f"Unknown tool: {name}")
    args = require_args(DirectionsArgs, arguments, "directions")

    try:
        body = await client.get_directions(args)
    except requests.RequestException as e:
        message = upstream_error_message(e, ERROR_FIELD)
        logger.warning("%s call failed: %s", TOOL_NAME, message)
        return api_error_result(PROVIDER, message)
    return text_result(body)


async def read_resource(client: DirectionsClient, uri: str) -> types.ReadResourceResult:
    origin, destination = parse_directions_uri(uri)
    try:
        body = await client.get_route(origin, destination)
    except requests.RequestException as e:
        message = upstream_error_message(e, ERROR_FIELD)
        logger.warning("resource read %s failed: %s", uri, message)
        raise internal_error(f"{PROVIDER} API error: {message}") from e
    return json_resource(uri, body)


async def self_test(client: DirectionsClient) -> Any:
    args = DirectionsArgs(origin="Tokyo,JP", destination="Osaka,JP", mode="driving")
    return await client.get_directions(args)


def build_server(client: DirectionsClient) -> Server:
    server: Server = Server(client.config.name, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return list(TOOLS)

    @server.list_resources()
    async def list_resources() -> List[types.Resource]:
        return list(RESOURCES)

    @server.list_resource_templates()
    async def list_resource_templates() -> List[types.ResourceTemplate]:
        return list(RESOURCE_TEMPLATES)

    register_call_tool(server, partial(call_tool, client))
    register_read_resource(server, partial(read_resource, client))
    return server
