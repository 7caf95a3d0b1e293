"""Refinement steps layered on top of the core decoders.

Every validator here is a decoder-to-decoder step, so they chain with
`Decoder.pipe`::

    age = int_.pipe(int_min(0), int_max(150))

Each one is ``decoder.flat_map(value -> pure(value) or fail(message))``; the
default message can be replaced with ``message=``.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Callable, TypeVar

from jdecode.decoder import Decoder, apply, fail, field, flat_map, maybe, pure, string

T = TypeVar("T")

Step = Callable[[Decoder[Any]], Decoder[Any]]

NOT_A_DATE_MESSAGE = "Not a valid ISO date"

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _or_default(message: str | None, default: str) -> str:
    # An explicit override wins, even an empty one.
    return default if message is None else message


def validate(
    predicate: Callable[[Any], bool],
    message: str | Callable[[Any], str],
) -> Step:
    """Build a step that keeps values satisfying ``predicate``."""

    def check(value: Any) -> Decoder[Any]:
        if predicate(value):
            return pure(value)
        return fail(message(value) if callable(message) else message)

    def step(decoder: Decoder[Any]) -> Decoder[Any]:
        return flat_map(decoder, check)

    return step


# --- numbers -----------------------------------------------------------------


def _at_least(bound: float, message: str | None) -> Step:
    return validate(
        lambda value: value >= bound,
        _or_default(message, f"Must be greater than or equal to {bound}"),
    )


def _at_most(bound: float, message: str | None) -> Step:
    return validate(
        lambda value: value <= bound,
        _or_default(message, f"Must be less than or equal to {bound}"),
    )


def _positive(message: str | None) -> Step:
    return validate(lambda value: value > 0, _or_default(message, "Must be positive"))


def _negative(message: str | None) -> Step:
    return validate(lambda value: value < 0, _or_default(message, "Must be negative"))


def int_min(bound: int, *, message: str | None = None) -> Step:
    return _at_least(bound, message)


def int_max(bound: int, *, message: str | None = None) -> Step:
    return _at_most(bound, message)


def int_positive(*, message: str | None = None) -> Step:
    return _positive(message)


def int_negative(*, message: str | None = None) -> Step:
    return _negative(message)


def float_min(bound: float, *, message: str | None = None) -> Step:
    return _at_least(bound, message)


def float_max(bound: float, *, message: str | None = None) -> Step:
    return _at_most(bound, message)


def float_positive(*, message: str | None = None) -> Step:
    return _positive(message)


def float_negative(*, message: str | None = None) -> Step:
    return _negative(message)


# --- strings -----------------------------------------------------------------


def str_required(*, message: str | None = None) -> Step:
    return validate(lambda value: bool(value.strip()), _or_default(message, "Required"))


def str_length(size: int, *, message: str | None = None) -> Step:
    return validate(
        lambda value: len(value) == size,
        _or_default(message, f"Must be exactly {size} characters"),
    )


def str_min(size: int, *, message: str | None = None) -> Step:
    return validate(
        lambda value: len(value) >= size,
        _or_default(message, f"Must be at least {size} characters"),
    )


def str_max(size: int, *, message: str | None = None) -> Step:
    return validate(
        lambda value: len(value) <= size,
        _or_default(message, f"Must be at most {size} characters"),
    )


def str_matches(pattern: str | re.Pattern[str], *, message: str | None = None) -> Step:
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    return validate(
        lambda value: compiled.search(value) is not None,
        _or_default(message, f"Must match {compiled.pattern}"),
    )


def str_email(*, message: str | None = None) -> Step:
    return str_matches(_EMAIL_RE, message=_or_default(message, "Must be a valid email"))


# --- sized sequences (array / list_) -----------------------------------------


def not_empty(*, message: str | None = None) -> Step:
    return validate(lambda value: len(value) > 0, _or_default(message, "Must not be empty"))


def length(size: int, *, message: str | None = None) -> Step:
    return validate(
        lambda value: len(value) == size,
        _or_default(message, f"Must contain exactly {size} items"),
    )


def min_length(size: int, *, message: str | None = None) -> Step:
    return validate(
        lambda value: len(value) >= size,
        _or_default(message, f"Must contain at least {size} items"),
    )


def max_length(size: int, *, message: str | None = None) -> Step:
    return validate(
        lambda value: len(value) <= size,
        _or_default(message, f"Must contain at most {size} items"),
    )


# --- dates -------------------------------------------------------------------


def parse_iso_date(text: str) -> datetime | None:
    """Parse ISO-8601 text into an aware UTC datetime, or None.

    Naive timestamps are read as UTC. Any error raised by the parser counts
    as "not a date".
    """
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        parsed = parsed.astimezone(timezone.utc)
    except Exception:
        return None
    return parsed


def _date_from_text(text: str) -> Decoder[datetime]:
    parsed = parse_iso_date(text)
    if parsed is None:
        return fail(NOT_A_DATE_MESSAGE)
    return pure(parsed)


iso_date: Decoder[datetime] = flat_map(string, _date_from_text)


# --- object fields -----------------------------------------------------------


def required(key: str, decoder: Decoder[T]) -> Step:
    """Feed ``field(key, decoder)`` into a partially applied constructor."""

    def step(constructor: Decoder[Any]) -> Decoder[Any]:
        return apply(constructor, field(key, decoder))

    return step


def optional(key: str, decoder: Decoder[T]) -> Step:
    """Like `required`, but a missing or malformed field feeds None."""

    def step(constructor: Decoder[Any]) -> Decoder[Any]:
        return apply(constructor, maybe(field(key, decoder)))

    return step
