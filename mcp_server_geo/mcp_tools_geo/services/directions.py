from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ..core.config import ServerConfig, load_server_config
from ..core.schemas import DirectionsArgs
from .http import aget_json, build_session

DIRECTIONS_BASE_URL = "https://maps.googleapis.com/maps/api/directions/json"
API_KEY_ENV = "GOOGLE_MAPS_API_KEY"
PROVIDER = "Google Maps"
DEFAULT_MODE = "driving"

logger = logging.getLogger("geo-mcp.directions")


def load_config() -> ServerConfig:
    return load_server_config("googlemaps-directions-server", DIRECTIONS_BASE_URL, API_KEY_ENV)


def build_directions_params(args: DirectionsArgs, api_key: str) -> Dict[str, Any]:
    return {
        "origin": args.origin,
        "destination": args.destination,
        "mode": args.mode or DEFAULT_MODE,
        "key": api_key,
    }


class DirectionsClient:
    """Google Maps Directions API (JSON output)."""

    def __init__(self, config: ServerConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self._session = session or build_session()

    async def get_directions(self, args: DirectionsArgs) -> Any:
        params = build_directions_params(args, self.config.api_key)
        logger.info("directions %s -> %s (%s)", args.origin, args.destination, params["mode"])
        return await aget_json(self._session, self.config.base_url, params, self.config.timeout_s)

    async def get_route(self, origin: str, destination: str) -> Any:
        """Route without a travel mode; the upstream default applies."""
        params = {"origin": origin, "destination": destination, "key": self.config.api_key}
        logger.info("directions resource %s -> %s", origin, destination)
        return await aget_json(self._session, self.config.base_url, params, self.config.timeout_s)

    def close(self) -> None:
        self._session.close()
