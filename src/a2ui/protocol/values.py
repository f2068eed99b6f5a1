"""JSON value model for surface data.

Data-model values are plain Python JSON values, closed over six kinds.
``bool`` is a subclass of ``int`` in Python, so every accessor here checks
for it explicitly; a boolean is never treated as a number.
"""

from enum import Enum
from typing import Any, TypeAlias

from ..core.errors import MalformedJSONValue

JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]
JSONArray: TypeAlias = list[JSONValue]


class JSONKind(str, Enum):
    """The six JSON value kinds."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any) -> JSONKind:
    """Classify a value, raising MalformedJSONValue for non-JSON types."""
    if value is None:
        return JSONKind.NULL
    if isinstance(value, bool):
        return JSONKind.BOOL
    if isinstance(value, (int, float)):
        return JSONKind.NUMBER
    if isinstance(value, str):
        return JSONKind.STRING
    if isinstance(value, list):
        return JSONKind.ARRAY
    if isinstance(value, dict):
        return JSONKind.OBJECT
    raise MalformedJSONValue(value)


def decode_json_value(raw: Any) -> JSONValue:
    """
    Validate and normalize an already-parsed value into a JSONValue.

    Tuples become lists; object keys must be strings. Any syntactically
    valid JSON document passes unchanged.

    Raises:
        MalformedJSONValue: If the value holds a non-JSON type
    """
    kind = kind_of(raw) if not isinstance(raw, tuple) else JSONKind.ARRAY
    if kind is JSONKind.ARRAY:
        return [decode_json_value(item) for item in raw]
    if kind is JSONKind.OBJECT:
        result: JSONObject = {}
        for key, item in raw.items():
            if not isinstance(key, str):
                raise MalformedJSONValue(raw, f"object key {key!r} is not a string")
            result[key] = decode_json_value(item)
        return result
    if kind is JSONKind.NUMBER and raw != raw:
        raise MalformedJSONValue(raw, "NaN is not a JSON number")
    return raw


# ============================================================================
# Accessors (None when the kind does not match)
# ============================================================================


def as_bool(value: JSONValue | None) -> bool | None:
    return value if isinstance(value, bool) else None


def as_number(value: JSONValue | None) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def as_string(value: JSONValue | None) -> str | None:
    return value if isinstance(value, str) else None


def as_array(value: JSONValue | None) -> JSONArray | None:
    return value if isinstance(value, list) else None


def as_object(value: JSONValue | None) -> JSONObject | None:
    return value if isinstance(value, dict) else None


def as_string_list(value: JSONValue | None) -> list[str] | None:
    """Array whose every element is a string."""
    items = as_array(value)
    if items is None or not all(isinstance(item, str) for item in items):
        return None
    return list(items)
