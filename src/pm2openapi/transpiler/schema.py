"""JSON Schema inference from example payloads."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict


def generate_schema(value: Any) -> Dict[str, Any]:
    """Infer an OpenAPI schema object from a decoded JSON value."""

    if isinstance(value, dict):
        return {
            "type": "object",
            "properties": {key: generate_schema(val) for key, val in value.items()},
        }
    if isinstance(value, list):
        schema: Dict[str, Any] = {"type": "array"}
        if value:
            items = generate_schema(value[0])
            for entry in value[1:]:
                items = merge_schemas(items, generate_schema(entry))
            schema["items"] = items
        return schema
    # bool before number: bool is an int subclass
    if isinstance(value, bool):
        return {"type": "boolean", "example": value}
    if isinstance(value, (int, float)):
        return {"type": "number", "example": value}
    if isinstance(value, str):
        return {"type": "string", "example": value}
    return {"nullable": True, "example": None}


def merge_schemas(original: Dict[str, Any], new: Dict[str, Any]) -> Dict[str, Any]:
    """Fold ``new`` into a copy of ``original``.

    Missing ``nullable``/``type`` are filled from ``new``; conflicting
    nullability widens to ``True``. Object properties already known to
    ``original`` are merged recursively; properties only ``new`` has are not
    added, so the first element of an array shapes the item schema.
    """

    merged = deepcopy(original)
    if "nullable" not in merged and "nullable" in new:
        merged["nullable"] = new["nullable"]
    elif "nullable" in merged and "nullable" in new and merged["nullable"] != new["nullable"]:
        merged["nullable"] = True
    if "type" not in merged and "type" in new:
        merged = {"type": new["type"], **merged}
    if merged.get("type") == "object":
        properties = merged.get("properties")
        new_properties = new.get("properties")
        if isinstance(properties, dict) and isinstance(new_properties, dict):
            for key, val in properties.items():
                if key in new_properties:
                    properties[key] = merge_schemas(val, new_properties[key])
    return merged
