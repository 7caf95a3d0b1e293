from __future__ import annotations

import pytest

from jdecode import decoder as d
from jdecode.result import Err, Ok
from jdecode.tree import render


def test_bool_accepts_only_booleans() -> None:
    assert d.bool_(True) == Ok(True)
    assert d.bool_(False) == Ok(False)
    assert d.bool_(1) == Err("Boolean expected, got 1")
    assert d.bool_("true") == Err('Boolean expected, got "true"')


def test_int_accepts_integral_numbers() -> None:
    assert d.int_(1) == Ok(1)
    assert d.int_(1.0) == Ok(1)
    assert isinstance(d.int_(1.0).unwrap(), int)
    assert d.int_(-42) == Ok(-42)


@pytest.mark.parametrize(
    ("value", "rendered"),
    [
        (1.1, "1.1"),
        ("1", '"1"'),
        (True, "true"),
        (None, "null"),
        (float("inf"), "Infinity"),
        (float("nan"), "NaN"),
    ],
)
def test_int_rejects_non_integers(value: object, rendered: str) -> None:
    assert d.int_(value) == Err(f"Integer expected, got {rendered}")


def test_float_accepts_any_finite_number() -> None:
    assert d.float_(1) == Ok(1.0)
    assert isinstance(d.float_(1).unwrap(), float)
    assert d.float_(1.5) == Ok(1.5)
    assert d.float_(float("inf")) == Err("Float expected, got Infinity")
    assert d.float_(False) == Err("Float expected, got false")


def test_string_accepts_strings() -> None:
    assert d.string("foo") == Ok("foo")
    assert d.string("") == Ok("")
    assert d.string(["foo"]) == Err('String expected, got ["foo"]')


def test_null_yields_supplied_value() -> None:
    sentinel = object()
    assert d.null(sentinel)(None) == Ok(sentinel)
    assert d.null(0)(0) == Err("null value expected got 0")


def test_pure_and_fail_ignore_input() -> None:
    for value in (None, 1, "x", [1], {"a": 1}):
        assert d.pure("fixed")(value) == Ok("fixed")
        assert d.fail("nope")(value) == Err("nope")


def test_render_is_compact_json() -> None:
    assert render({"a": [1, 2.0, "b"]}) == '{"a":[1,2,"b"]}'
    assert render("é") == '"é"'
    assert render(object()).startswith("<object object")


def test_integer_literal_beyond_double_range_is_not_a_number() -> None:
    huge = int("1" + "0" * 400)
    assert d.float_(huge) == Err(f"Float expected, got {huge}")
    assert d.int_(huge) == Err(f"Integer expected, got {huge}")
    assert d.int_(2**53) == Ok(2**53)


def test_tree_module_is_documented() -> None:
    import jdecode.tree

    assert jdecode.tree.__doc__ is not None
    assert jdecode.tree.__doc__.startswith("JSON-shaped tree values")
