"""Entry points that run a decoder against text, files or host values.

Every entry point returns ``Ok(value)`` or ``Err(ParseError | DecodeTypeError)``
and never raises for bad input.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeAlias, TypeVar

from jdecode.config import DecodeSettings, current_settings
from jdecode.decoder import Decoder
from jdecode.result import Err, Ok, Result
from jdecode.tree import JSONValue

_log = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ParseError:
    """The input was not JSON text at all."""

    detail: str = field(default="", compare=False)


@dataclass(frozen=True)
class DecodeTypeError:
    """The input parsed, but the tree did not satisfy the decoder."""

    message: str


DecodeError: TypeAlias = ParseError | DecodeTypeError


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-standard JSON constant {name}")


def parse_json(text: str | bytes, *, settings: DecodeSettings | None = None) -> Result[JSONValue, ParseError]:
    active = settings if settings is not None else current_settings()
    try:
        if active.allow_nan:
            tree = json.loads(text)
        else:
            tree = json.loads(text, parse_constant=_reject_constant)
    except Exception as exc:
        _log.debug("JSON parse failed: %s", exc)
        return Err(ParseError(detail=str(exc)))
    return Ok(tree)


def decode_value(value: JSONValue, decoder: Decoder[T]) -> Result[T, DecodeError]:
    result = decoder(value)
    if isinstance(result, Err):
        return Err(DecodeTypeError(result.error))
    return result


def decode_string(
    text: str | bytes,
    decoder: Decoder[T],
    *,
    settings: DecodeSettings | None = None,
) -> Result[T, DecodeError]:
    parsed = parse_json(text, settings=settings)
    if isinstance(parsed, Err):
        return parsed
    return decode_value(parsed.value, decoder)


def decode_path(
    path: Path,
    decoder: Decoder[T],
    *,
    encoding: str = "utf-8",
    settings: DecodeSettings | None = None,
) -> Result[T, DecodeError]:
    try:
        text = Path(path).read_text(encoding=encoding)
    except (OSError, UnicodeError) as exc:
        _log.debug("could not read %s: %s", path, exc)
        return Err(ParseError(detail=str(exc)))
    return decode_string(text, decoder, settings=settings)


def decode_unsafe(
    value: object,
    decoder: Decoder[T],
    *,
    settings: DecodeSettings | None = None,
) -> Result[T, DecodeError]:
    """Decode an arbitrary host value by round-tripping it through JSON text.

    Best effort only: values `json` cannot serialize (sets, custom objects,
    cyclic containers) come back as `ParseError`, and tuples, non-string
    keys and similar host shapes are coerced the way `json.dumps` coerces
    them.
    """
    active = settings if settings is not None else current_settings()
    try:
        text = json.dumps(value, allow_nan=active.allow_nan)
    except Exception as exc:
        _log.debug("could not serialize %s for decoding: %s", type(value).__name__, exc)
        return Err(ParseError(detail=str(exc)))
    return decode_string(text, decoder, settings=active)
