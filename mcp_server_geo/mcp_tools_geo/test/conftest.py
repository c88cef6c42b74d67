from __future__ import annotations

import asyncio
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
import requests

from mcp_tools_geo.core.config import ServerConfig


def json_response(body: Any, status: int = 200) -> MagicMock:
    """Mocked requests.Response; raise_for_status raises for status >= 400."""
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = body
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(
            f"Request failed with status code {status}", response=resp
        )
    return resp


def mock_session(body: Any = None, status: int = 200) -> MagicMock:
    session = MagicMock()
    session.get.return_value = json_response(body if body is not None else {}, status)
    return session


def run(coro: Any) -> Any:
    return asyncio.run(coro)


async def send(server: Any, request: Any) -> Any:
    """Feed a request straight to the server's registered handler."""
    result = await server.request_handlers[type(request)](request)
    return result.root


def make_config(name: str, base_url: str, timeout_s: Optional[float] = None) -> ServerConfig:
    return ServerConfig(name=name, base_url=base_url, api_key="test-key", timeout_s=timeout_s)


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("mcp_tools_geo.core.config.load_dotenv", lambda **_: False)
