from __future__ import annotations

import asyncio
from typing import Any, Dict, Mapping, Optional

import requests

USER_AGENT = "geo-mcp/0.1 (local)"


def build_session(
    params: Optional[Mapping[str, str]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> requests.Session:
    """Long-lived session carrying the fixed auth of one upstream API."""
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    if headers:
        session.headers.update(headers)
    if params:
        session.params = dict(params)
    return session


def get_json(
    session: requests.Session,
    url: str,
    params: Dict[str, Any],
    timeout_s: Optional[float] = None,
) -> Any:
    """Exactly one GET. Non-2xx raises ``requests.HTTPError``."""
    r = session.get(url, params=params, timeout=timeout_s)
    r.raise_for_status()
    return r.json()


async def aget_json(
    session: requests.Session,
    url: str,
    params: Dict[str, Any],
    timeout_s: Optional[float] = None,
) -> Any:
    """``get_json`` off the event loop; the only suspension point of a request."""
    return await asyncio.to_thread(get_json, session, url, params, timeout_s)
