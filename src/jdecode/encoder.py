"""Typed values back to tree values.

The mirror image of `jdecode.decoder`: every function is total and assumes
its input is already valid. Decoders never import this module.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Callable, Iterable, Mapping, TypeVar

from jdecode.result import Err, Result
from jdecode.tree import JSONObject, JSONValue

T = TypeVar("T")

Encoder = Callable[[T], JSONValue]


def string(value: str) -> JSONValue:
    return value


def int_(value: int) -> JSONValue:
    return int(value)


def float_(value: float) -> JSONValue:
    return float(value)


def bool_(value: bool) -> JSONValue:
    return bool(value)


def null(_value: object = None) -> JSONValue:
    return None


def object_(pairs: Iterable[tuple[str, JSONValue]]) -> JSONObject:
    return {key: value for key, value in pairs}


def array(encode: Encoder[T], values: Iterable[T]) -> JSONValue:
    return [encode(value) for value in values]


def list_(encode: Encoder[T], values: Iterable[T]) -> JSONValue:
    return array(encode, values)


def dict_(encode: Encoder[T], mapping: Mapping[str, T]) -> JSONValue:
    return {str(key): encode(value) for key, value in mapping.items()}


def optional(encode: Encoder[T], value: T | None) -> JSONValue:
    if value is None:
        return None
    return encode(value)


def result(encode: Encoder[T], res: Result[T, object]) -> JSONValue:
    """Encode the success value; a failure encodes as null."""
    if isinstance(res, Err):
        return None
    return encode(res.value)


def date(value: datetime) -> JSONValue:
    # Millisecond precision, UTC, trailing Z.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_json(value: JSONValue) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
