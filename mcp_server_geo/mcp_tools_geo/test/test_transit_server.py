from __future__ import annotations

import json

import pytest
import requests
from mcp import types
from mcp.shared.exceptions import McpError

from conftest import make_config, mock_session, run, send
from mcp_tools_geo.mcp.transit_server import build_server, call_tool
from mcp_tools_geo.services.transit import TRANSIT_BASE_URL, TransitClient

ROUTE_BODY = {
    "items": [
        {
            "summary": {"move": {"from_time": "2024-02-11T12:03:00", "to_time": "2024-02-11T14:40:00"}},
            "sections": [
                {"type": "point", "name": "東京"},
                {"type": "move", "from_time": "2024-02-11T12:03:00", "to_time": "2024-02-11T14:40:00"},
            ],
        }
    ]
}


def _client(body=None, status: int = 200):
    session = mock_session(ROUTE_BODY if body is None else body, status)
    return TransitClient(make_config("navitime-transit-server", TRANSIT_BASE_URL), session=session), session


def test_route_transit_normalizes_times() -> None:
    client, session = _client()

    result = run(call_tool(client, "route_transit", {"start": "35.68,139.76", "goal": "34.73,135.50"}))

    assert result.isError is False
    body = json.loads(result.content[0].text)
    move = body["items"][0]["summary"]["move"]
    assert move == {"from_time": "2024-02-11T12:03:00+09:00", "to_time": "2024-02-11T14:40:00+09:00"}
    assert body["items"][0]["sections"][1]["to_time"] == "2024-02-11T14:40:00+09:00"
    assert body["items"][0]["sections"][0] == {"type": "point", "name": "東京"}

    params = session.get.call_args.kwargs["params"]
    assert params["start_time"] == "2024-02-11T12:00:00+09:00"


def test_route_transit_start_time_passthrough() -> None:
    client, session = _client()

    run(call_tool(client, "route_transit", {"start": "a", "goal": "b", "start_time": "2025-03-01T07:00:00+09:00"}))

    assert session.get.call_args.kwargs["params"]["start_time"] == "2025-03-01T07:00:00+09:00"


def test_upstream_error_uses_message_field() -> None:
    client, _ = _client({"message": "You are not subscribed to this API."}, status=403)

    result = run(call_tool(client, "route_transit", {"start": "a", "goal": "b"}))

    assert result.isError is True
    assert result.content[0].text == "Navitime API error: You are not subscribed to this API."


def test_network_error() -> None:
    client, session = _client()
    session.get.side_effect = requests.Timeout("Read timed out.")

    result = run(call_tool(client, "route_transit", {"start": "a", "goal": "b"}))

    assert result.isError is True
    assert result.content[0].text == "Navitime API error: Read timed out."


def test_unknown_tool_and_bad_arguments() -> None:
    client, session = _client()

    with pytest.raises(McpError) as ei:
        run(call_tool(client, "get_directions", {"start": "a", "goal": "b"}))
    assert ei.value.error.code == types.METHOD_NOT_FOUND

    with pytest.raises(McpError) as ei:
        run(call_tool(client, "route_transit", {"start": "a", "goal": "b", "term": 60}))
    assert ei.value.error.code == types.INVALID_PARAMS
    assert ei.value.error.message == "Invalid route_transit arguments"

    with pytest.raises(McpError) as ei:
        run(call_tool(client, "route_transit", {"start": "a", "goal": "b", "start_time": None}))
    assert ei.value.error.code == types.INVALID_PARAMS

    session.get.assert_not_called()


def test_server_lists_one_tool() -> None:
    client, _ = _client()
    server = build_server(client)

    tools = run(send(server, types.ListToolsRequest(method="tools/list"))).tools

    assert [t.name for t in tools] == ["route_transit"]
    assert sorted(tools[0].inputSchema["required"]) == ["goal", "start"]
    assert types.ListResourcesRequest not in server.request_handlers
