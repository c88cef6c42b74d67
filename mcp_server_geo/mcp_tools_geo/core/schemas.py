from __future__ import annotations

from typing import Any, Optional, Type, TypeVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    model_validator,
)

# bool is rejected by both strict types
Number = Union[StrictInt, StrictFloat]

ArgsT = TypeVar("ArgsT", bound="ToolArgs")


class ToolArgs(BaseModel):
    """Base for tool arguments.

    Strict types so that e.g. ``{"origin": 1}`` is rejected instead of coerced.
    Optional fields are either absent or of their type; an explicit ``null``
    is rejected. Unknown keys are ignored.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _reject_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            for name, info in cls.model_fields.items():
                key = info.alias or name
                if key in data and data[key] is None:
                    raise ValueError(f"{key} must not be null")
        return data


class DirectionsArgs(ToolArgs):
    """Arguments of ``get_directions``."""
    origin: StrictStr = Field(..., description="出発地")
    destination: StrictStr = Field(..., description="目的地")
    mode: Optional[StrictStr] = Field(
        None,
        description="移動手段 (例: driving, walking, bicycling, transit)",
        json_schema_extra={"default": "driving"},
    )


class TransitArgs(ToolArgs):
    """Arguments of ``route_transit``.

    Every optional value is a string, including the numeric ones (term, limit),
    because the upstream API takes them as query strings.
    """
    start: StrictStr = Field(..., description="出発地の座標（緯度,経度）")
    goal: StrictStr = Field(..., description="目的地の座標（緯度,経度）")
    start_time: Optional[StrictStr] = Field(None, description="出発時刻（ISO 8601形式）")
    term: Optional[StrictStr] = Field(None, description="探索対象時間（分）")
    limit: Optional[StrictStr] = Field(None, description="取得する経路数")
    datum: Optional[StrictStr] = Field(None, description="測地系（wgs84/tokyo）")
    coord_unit: Optional[StrictStr] = Field(None, description="座標の単位（degree/minute）")


class PlacesSearchArgs(ToolArgs):
    query: StrictStr = Field(..., description="検索キーワード")
    language: Optional[StrictStr] = Field(
        None, description="結果の言語（例：ja）", json_schema_extra={"default": "ja"}
    )


class PlaceDetailsArgs(ToolArgs):
    place_id: StrictStr = Field(..., alias="placeId", description="場所のID")
    language: Optional[StrictStr] = Field(
        None, description="結果の言語（例：ja）", json_schema_extra={"default": "ja"}
    )


class Location(BaseModel):
    """Center point of a nearby search (WGS84)."""
    model_config = ConfigDict(frozen=True)

    lat: Number
    lng: Number


class NearbySearchArgs(ToolArgs):
    location: Location = Field(..., description="中心となる座標")
    radius: Optional[Number] = Field(
        None, description="検索範囲（メートル）", json_schema_extra={"default": 1000}
    )
    type: Optional[StrictStr] = Field(None, description="場所のタイプ（restaurant, cafe など）")
    language: Optional[StrictStr] = Field(
        None, description="結果の言語（例：ja）", json_schema_extra={"default": "ja"}
    )


def decode_args(model: Type[ArgsT], value: Any) -> Optional[ArgsT]:
    """Decode untyped tool arguments into ``model``; ``None`` if they don't fit.

    This is the argument check of every tool: it never raises.
    """
    try:
        return model.model_validate(value)
    except ValidationError:
        return None
