"""Navitime route_transit via RapidAPI.

Auth goes in two fixed headers instead of the query string. Times without an
explicit offset are treated as JST.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ..core.config import ServerConfig, load_server_config
from ..core.schemas import TransitArgs
from ..utils.timezone import with_jst_offset
from .http import aget_json, build_session

RAPIDAPI_HOST = "navitime-route-totalnavi.p.rapidapi.com"
TRANSIT_BASE_URL = f"https://{RAPIDAPI_HOST}"
ROUTE_TRANSIT_PATH = "/route_transit"
API_KEY_ENV = "RAPIDAPI_KEY"
PROVIDER = "Navitime"

DEFAULT_START_TIME = "2024-02-11T12:00:00+09:00"
DEFAULT_TERM = "60"
DEFAULT_LIMIT = "3"
DEFAULT_DATUM = "wgs84"
DEFAULT_COORD_UNIT = "degree"

logger = logging.getLogger("geo-mcp.transit")


def load_config() -> ServerConfig:
    return load_server_config("navitime-transit-server", TRANSIT_BASE_URL, API_KEY_ENV)


def normalize_start_time(start_time: Optional[str]) -> str:
    if not start_time:
        return DEFAULT_START_TIME
    return with_jst_offset(start_time)


def build_transit_params(args: TransitArgs) -> Dict[str, Any]:
    return {
        "start": args.start,
        "goal": args.goal,
        "start_time": normalize_start_time(args.start_time),
        "term": args.term or DEFAULT_TERM,
        "limit": args.limit or DEFAULT_LIMIT,
        "datum": args.datum or DEFAULT_DATUM,
        "coord_unit": args.coord_unit or DEFAULT_COORD_UNIT,
    }


def rapidapi_headers(api_key: str) -> Dict[str, str]:
    return {"x-rapidapi-key": api_key, "x-rapidapi-host": RAPIDAPI_HOST}


class TransitClient:
    def __init__(self, config: ServerConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self._session = session or build_session(headers=rapidapi_headers(config.api_key))

    async def route_transit(self, args: TransitArgs) -> Any:
        """Raw upstream body; timezone normalization is the caller's step."""
        params = build_transit_params(args)
        logger.info("route_transit %s -> %s at %s", args.start, args.goal, params["start_time"])
        url = self.config.base_url + ROUTE_TRANSIT_PATH
        return await aget_json(self._session, url, params, self.config.timeout_s)

    def close(self) -> None:
        self._session.close()
