from __future__ import annotations

import copy
from typing import Any, Dict

JST_OFFSET = "+09:00"


def with_jst_offset(value: str) -> str:
    """Append ``+09:00`` unless the string already contains a ``+``.

    Textual heuristic, not a timezone parser: a ``+`` anywhere counts as
    "already zoned". Applying it twice is a no-op.
    """
    return value if "+" in value else value + JST_OFFSET


def normalize_route_response(body: Any) -> Any:
    """Add the JST offset to move times in a route_transit response.

    Touches ``items[].summary.move`` and ``items[].sections[]`` with
    ``type == "move"`` only. Returns a copy; every other field passes through
    and absent fields stay absent.
    """
    data = copy.deepcopy(body)
    if not isinstance(data, dict):
        return data

    items = data.get("items")
    if not isinstance(items, list):
        return data

    for item in items:
        if not isinstance(item, dict):
            continue

        summary = item.get("summary")
        if isinstance(summary, dict) and isinstance(summary.get("move"), dict):
            _suffix_times(summary["move"])

        sections = item.get("sections")
        if isinstance(sections, list):
            for section in sections:
                if isinstance(section, dict) and section.get("type") == "move":
                    _suffix_times(section)

    return data


def _suffix_times(obj: Dict[str, Any]) -> None:
    for key in ("from_time", "to_time"):
        value = obj.get(key)
        if isinstance(value, str) and value:
            obj[key] = with_jst_offset(value)
