"""
Tests for tool argument validation.
"""

from __future__ import annotations

import pytest

from mcp_tools_geo.core.schemas import (
    DirectionsArgs,
    NearbySearchArgs,
    PlaceDetailsArgs,
    PlacesSearchArgs,
    TransitArgs,
    decode_args,
)


def _accepts(model, value) -> bool:
    return decode_args(model, value) is not None


@pytest.mark.parametrize(
    "value",
    [
        None,
        "Tokyo",
        42,
        ["Tokyo", "Osaka"],
        {},
        {"origin": "Tokyo"},
        {"origin": "Tokyo", "destination": 1},
        {"origin": None, "destination": "Osaka"},
        {"origin": "Tokyo", "destination": "Osaka", "mode": 3},
        {"origin": "Tokyo", "destination": "Osaka", "mode": None},
    ],
)
def test_directions_args_rejected(value) -> None:
    assert decode_args(DirectionsArgs, value) is None


def test_directions_args_accepted() -> None:
    assert _accepts(DirectionsArgs, {"origin": "Tokyo", "destination": "Osaka"})
    assert _accepts(DirectionsArgs, {"origin": "Tokyo", "destination": "Osaka", "mode": "walking"})
    # unknown keys are ignored, even when null
    assert _accepts(DirectionsArgs, {"origin": "", "destination": "", "avoid": None})


def test_transit_args() -> None:
    assert _accepts(TransitArgs, {"start": "35.68,139.76", "goal": "34.70,135.49"})
    assert _accepts(
        TransitArgs,
        {"start": "a", "goal": "b", "start_time": "2024-02-11T12:00:00", "term": "30", "limit": "1"},
    )
    assert not _accepts(TransitArgs, {"start": "a"})
    # numeric options must be sent as strings
    assert not _accepts(TransitArgs, {"start": "a", "goal": "b", "limit": 3})
    assert not _accepts(TransitArgs, None)


@pytest.mark.parametrize("field", ["start_time", "term", "limit", "datum", "coord_unit"])
def test_transit_optional_null_rejected(field: str) -> None:
    assert not _accepts(TransitArgs, {"start": "a", "goal": "b", field: None})


def test_places_search_and_details_args() -> None:
    assert _accepts(PlacesSearchArgs, {"query": "東京タワー"})
    assert not _accepts(PlacesSearchArgs, {"query": 1})
    assert not _accepts(PlacesSearchArgs, {"language": "ja"})
    assert not _accepts(PlacesSearchArgs, {"query": "x", "language": None})

    assert _accepts(PlaceDetailsArgs, {"placeId": "ChIJ123"})
    assert not _accepts(PlaceDetailsArgs, {"place_id": "ChIJ123"})
    assert not _accepts(PlaceDetailsArgs, {"placeId": None})

    args = decode_args(PlaceDetailsArgs, {"placeId": "ChIJ123", "language": "en"})
    assert args is not None
    assert args.place_id == "ChIJ123"
    assert args.language == "en"


@pytest.mark.parametrize(
    "value",
    [
        {},
        {"location": None},
        {"location": "35.6,139.7"},
        {"location": {"lat": 35.6}},
        {"location": {"lat": "35.6", "lng": "139.7"}},
        {"location": {"lat": True, "lng": 139.7}},
        {"location": {"lat": 35.6, "lng": 139.7}, "type": 5},
        {"location": {"lat": 35.6, "lng": 139.7}, "type": None},
        {"location": {"lat": 35.6, "lng": 139.7}, "radius": None},
    ],
)
def test_nearby_args_rejected(value) -> None:
    assert decode_args(NearbySearchArgs, value) is None


def test_nearby_args_accepts_int_and_float() -> None:
    args = decode_args(NearbySearchArgs, {"location": {"lat": 35, "lng": 139.7}, "radius": 500})
    assert args is not None
    assert args.location.lat == 35
    assert args.radius == 500
    assert args.type is None
