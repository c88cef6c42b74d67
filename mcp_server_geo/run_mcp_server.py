"""Entrypoint for running one of the geo MCP servers.

Usage:
  python run_mcp_server.py directions
  python run_mcp_server.py transit --transport streamable-http

Or via MCP host config (e.g., Claude Desktop) pointing to this script with
the server name as first argument.
"""
import sys

from mcp_tools_geo.mcp.runner import main

if __name__ == "__main__":
    sys.exit(main())
