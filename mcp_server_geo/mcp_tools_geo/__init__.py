"""mcp_tools_geo package

Purpose:
- Wrap third-party geo HTTP APIs (Google Maps Directions, Navitime transit
  routing, Google Places) as MCP tools an LLM can call.
- One server per upstream API, all built the same way.

Structure:
- core/: argument schemas, configuration, error types
- services/: HTTP clients + request translation per upstream API
- utils/: pure helpers (timezone suffixing of transit responses)
- mcp/: low-level MCP servers, tool/resource wiring and the runner
"""

__version__ = "0.1.0"
