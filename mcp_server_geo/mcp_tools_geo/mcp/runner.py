"""Entry point: pick a server, load its config, serve it.

Usage:
  geo-mcp directions
  geo-mcp places --transport streamable-http --port 8765
  geo-mcp transit --self-test

stdio is the default transport; stdout then belongs to the protocol and all
logging goes to stderr. The streamable HTTP transport is served by Uvicorn
under ``/mcp``.
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional

import requests
import uvicorn
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.routing import Mount
from starlette.types import Receive, Scope, Send

from ..core.config import ServerConfig
from ..core.errors import ConfigError
from ..services import directions, places, transit
from . import directions_server, places_server, transit_server

logger = logging.getLogger("geo-mcp")


@dataclass(frozen=True)
class ServerEntry:
    """How to assemble one server from its environment."""
    load_config: Callable[[], ServerConfig]
    build_client: Callable[[ServerConfig], Any]
    build_server: Callable[[Any], Server]
    self_test: Callable[[Any], Awaitable[Any]]


SERVERS: Dict[str, ServerEntry] = {
    "directions": ServerEntry(
        load_config=directions.load_config,
        build_client=directions.DirectionsClient,
        build_server=directions_server.build_server,
        self_test=directions_server.self_test,
    ),
    "transit": ServerEntry(
        load_config=transit.load_config,
        build_client=transit.TransitClient,
        build_server=transit_server.build_server,
        self_test=transit_server.self_test,
    ),
    "places": ServerEntry(
        load_config=places.load_config,
        build_client=places.PlacesClient,
        build_server=places_server.build_server,
        self_test=places_server.self_test,
    ),
}


# ---------------------------------------------------------------------------
# Transports
# ---------------------------------------------------------------------------

async def serve_stdio(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def build_http_app(server: Server) -> Starlette:
    """ASGI app exposing ``server`` over streamable HTTP at ``/mcp``."""
    session_manager = StreamableHTTPSessionManager(app=server)

    async def handle_mcp(scope: Scope, receive: Receive, send: Send) -> None:
        await session_manager.handle_request(scope, receive, send)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            yield

    return Starlette(routes=[Mount("/mcp", app=handle_mcp)], lifespan=lifespan)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="geo-mcp", description="Geo API tools as MCP servers")
    parser.add_argument("server", choices=sorted(SERVERS))
    parser.add_argument("--transport", choices=["stdio", "streamable-http"], default="stdio")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8765)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument(
        "--self-test",
        action="store_true",
        help="Run one live sample query against the upstream API, print it and exit",
    )
    return parser.parse_args(argv)


def run_self_test(entry: ServerEntry, client: Any) -> int:
    try:
        body = asyncio.run(entry.self_test(client))
    except requests.RequestException as e:
        print(f"Test query failed: {e}", file=sys.stderr)
        return 0
    print(json.dumps(body, indent=2, ensure_ascii=False))
    return 0


def shutdown(client: Any) -> None:
    """Release the upstream HTTP session. In-flight calls are abandoned."""
    client.close()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(stream=sys.stderr, level=getattr(logging, args.log_level))

    entry = SERVERS[args.server]
    try:
        config = entry.load_config()
    except ConfigError as e:
        logger.error("%s", e)
        return 1

    client = entry.build_client(config)
    try:
        if args.self_test:
            return run_self_test(entry, client)

        server = entry.build_server(client)
        if args.transport == "stdio":
            logger.info("%s running on stdio", config.name)
            asyncio.run(serve_stdio(server))
        else:
            logger.info(
                "Starting %s (streamable-http) on http://%s:%d/mcp …",
                config.name,
                args.host,
                args.port,
            )
            uvicorn.run(
                build_http_app(server),
                host=args.host,
                port=args.port,
                reload=False,
                loop="asyncio",
            )
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down %s", config.name)
    finally:
        shutdown(client)
    return 0


if __name__ == "__main__":
    sys.exit(main())
