from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Optional, Union

import requests

from ..core.config import ServerConfig, load_server_config
from ..core.schemas import NearbySearchArgs, PlaceDetailsArgs, PlacesSearchArgs
from .http import aget_json, build_session

PLACES_BASE_URL = "https://maps.googleapis.com/maps/api/place"
FIND_PLACE_PATH = "/findplacefromtext/json"
DETAILS_PATH = "/details/json"
NEARBY_SEARCH_PATH = "/nearbysearch/json"
API_KEY_ENV = "GOOGLE_PLACES_API_KEY"
PROVIDER = "Google Places"

DEFAULT_LANGUAGE = "ja"
DEFAULT_RADIUS_M = 1000

# Fields requested from the upstream, fixed server-side.
SEARCH_FIELDS = "formatted_address,name,rating,opening_hours,geometry,place_id"
DETAILS_FIELDS = (
    "name,rating,formatted_phone_number,formatted_address,opening_hours,"
    "website,reviews,price_level,photos"
)

logger = logging.getLogger("geo-mcp.places")


def load_config() -> ServerConfig:
    return load_server_config("places-server", PLACES_BASE_URL, API_KEY_ENV)


def build_search_params(args: PlacesSearchArgs) -> Dict[str, Any]:
    return {
        "input": args.query,
        "inputtype": "textquery",
        "language": args.language or DEFAULT_LANGUAGE,
        "fields": SEARCH_FIELDS,
    }


def build_details_params(args: PlaceDetailsArgs) -> Dict[str, Any]:
    return {
        "place_id": args.place_id,
        "language": args.language or DEFAULT_LANGUAGE,
        "fields": DETAILS_FIELDS,
    }


def format_number(value: Union[int, float]) -> str:
    """Render a number the way JavaScript's ``String(n)`` does.

    ``35.0`` becomes ``"35"`` and ``1e-07`` becomes ``"1e-7"``; plain decimal
    notation is used for exponents from -6 to 20.
    """
    if isinstance(value, int):
        return str(value)
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    exp = int(exponent)
    if -7 < exp < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"


def build_nearby_params(args: NearbySearchArgs) -> Dict[str, Any]:
    # type=None is dropped by requests, i.e. no type filter
    return {
        "location": f"{format_number(args.location.lat)},{format_number(args.location.lng)}",
        "radius": format_number(args.radius or DEFAULT_RADIUS_M),
        "type": args.type,
        "language": args.language or DEFAULT_LANGUAGE,
    }


class PlacesClient:
    """Google Places API; the key rides on every request as a session param."""

    def __init__(self, config: ServerConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self._session = session or build_session(params={"key": config.api_key})

    async def search_places(self, args: PlacesSearchArgs) -> Any:
        logger.info("findplacefromtext %r", args.query)
        return await self._get(FIND_PLACE_PATH, build_search_params(args))

    async def get_place_details(self, args: PlaceDetailsArgs) -> Any:
        logger.info("details %s", args.place_id)
        return await self._get(DETAILS_PATH, build_details_params(args))

    async def nearby_search(self, args: NearbySearchArgs) -> Any:
        params = build_nearby_params(args)
        logger.info("nearbysearch %s r=%s type=%s", params["location"], params["radius"], params["type"])
        return await self._get(NEARBY_SEARCH_PATH, params)

    async def _get(self, path: str, params: Dict[str, Any]) -> Any:
        return await aget_json(self._session, self.config.base_url + path, params, self.config.timeout_s)

    def close(self) -> None:
        self._session.close()
