"""JSON-shaped tree values consumed by decoders.

A tree is whatever `json.loads` produces. `int` and `float` share a single
Number tag; `bool` is excluded from it even though it subclasses `int`.
"""

from __future__ import annotations

import json
import math
from typing import TypeAlias, TypeGuard


JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]
JSONArray: TypeAlias = list[JSONValue]


def is_null(value: object) -> TypeGuard[None]:
    return value is None


def is_bool(value: object) -> TypeGuard[bool]:
    return isinstance(value, bool)


def is_number(value: object) -> TypeGuard[int | float]:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite_number(value: object) -> TypeGuard[int | float]:
    if not is_number(value):
        return False
    # Numbers are doubles: an int literal beyond float range is not finite.
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def is_integral(value: object) -> TypeGuard[int | float]:
    if not is_finite_number(value):
        return False
    return isinstance(value, int) or float(value).is_integer()


def is_string(value: object) -> TypeGuard[str]:
    return isinstance(value, str)


def is_array(value: object) -> TypeGuard[JSONArray]:
    return isinstance(value, list)


def is_object(value: object) -> TypeGuard[JSONObject]:
    return isinstance(value, dict)


def render(value: object) -> str:
    """Compact JSON text for a tree value, as used in failure messages."""
    try:
        return json.dumps(
            _collapse_numbers(value),
            separators=(",", ":"),
            ensure_ascii=False,
        )
    except (TypeError, ValueError, RecursionError):
        return repr(value)


def _collapse_numbers(value: object) -> object:
    # 1.0 and 1 are the same Number.
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    if isinstance(value, list):
        return [_collapse_numbers(item) for item in value]
    if isinstance(value, dict):
        return {key: _collapse_numbers(item) for key, item in value.items()}
    return value
