from __future__ import annotations

import pytest

from jdecode import decoder as d
from jdecode.config import DecodeSettings, settings_scope
from jdecode.result import Err, Ok

_SAMPLES = [None, True, 0, 1.5, "s", [1, "x"], {"k": 2}]


def _exploding(*_args: object) -> object:
    raise AssertionError("should not be called")


@pytest.mark.parametrize("value", _SAMPLES)
def test_map_identity_law(value: object) -> None:
    for decoder in (d.int_, d.string, d.array(d.int_), d.field("k", d.int_)):
        assert d.map_(decoder, lambda x: x)(value) == decoder(value)


@pytest.mark.parametrize("value", _SAMPLES)
def test_flat_map_left_identity_law(value: object) -> None:
    def continuation(x: int) -> d.Decoder[object]:
        return d.field("k", d.int_).map(lambda k: k + x)

    assert d.flat_map(d.pure(40), continuation)(value) == continuation(40)(value)


def test_map_applies_function_on_success() -> None:
    assert d.int_.map(lambda n: n * 2)(21) == Ok(42)


def test_failures_short_circuit_without_calling_continuations() -> None:
    failing = d.fail("first")
    assert d.map_(failing, _exploding)(1) == Err("first")
    assert d.flat_map(failing, _exploding)(1) == Err("first")
    assert d.apply(failing, d.pure(1).map(_exploding))(1) == Err("first")


def test_flat_map_reruns_against_original_tree() -> None:
    seen: list[object] = []

    def continuation(kind: str) -> d.Decoder[object]:
        def run(value: object):
            seen.append(value)
            return Ok((kind, value))

        return d.Decoder(run)

    tree = {"kind": "circle", "r": 2}
    result = d.field("kind", d.string).flat_map(continuation)(tree)
    assert result == Ok(("circle", tree))
    assert seen == [tree]


def test_apply_is_left_biased() -> None:
    assert d.apply(d.fail("left"), d.fail("right"))(None) == Err("left")
    assert d.apply(d.pure(str), d.fail("right"))(None) == Err("right")
    assert d.apply(d.pure(str), d.pure(5))(None) == Ok("5")


def test_apply_reads_same_object_for_each_field() -> None:
    adder = d.pure(lambda a: lambda b: a + b)
    decoder = adder.apply(d.field("a", d.int_)).apply(d.field("b", d.int_))
    assert decoder({"a": 1, "b": 2}) == Ok(3)
    assert decoder({"b": 2}) == Err("Object has no attribute a")
    assert decoder({"a": 1}) == Err("Object has no attribute b")


def test_one_of_prefers_earlier_branch() -> None:
    decoder = d.one_of([d.int_.map(lambda n: ("int", n)), d.float_.map(lambda n: ("float", n))])
    assert decoder(3) == Ok(("int", 3))
    assert decoder(3.5) == Ok(("float", 3.5))


def test_one_of_generic_failure_discards_branch_messages() -> None:
    decoder = d.one_of([d.int_, d.bool_])
    assert decoder("x") == Err(d.NO_MATCH_MESSAGE)
    assert d.one_of([])(1) == Err("oneOf found no matching decoder")


def test_one_of_branch_diagnostics_opt_in() -> None:
    decoder = d.one_of([d.int_, d.bool_], diagnostics=True)
    assert decoder("x") == Err(
        'oneOf found no matching decoder: Integer expected, got "x"; '
        'Boolean expected, got "x"'
    )


def test_one_of_reads_diagnostics_from_settings_at_construction() -> None:
    with settings_scope(DecodeSettings(branch_diagnostics=True)):
        verbose = d.one_of([d.int_])
    quiet = d.one_of([d.int_])
    assert verbose("x") == Err('oneOf found no matching decoder: Integer expected, got "x"')
    assert quiet("x") == Err(d.NO_MATCH_MESSAGE)


def test_nullable_tolerates_only_explicit_null() -> None:
    decoder = d.nullable(d.int_)
    assert decoder(None) == Ok(None)
    assert decoder(7) == Ok(7)
    assert decoder("foo") == Err("oneOf found no matching decoder")


def test_maybe_never_fails() -> None:
    decoder = d.maybe(d.int_)
    assert decoder(7) == Ok(7)
    assert decoder("foo") == Ok(None)
    assert decoder(None) == Ok(None)


def test_decoders_are_reusable_and_referentially_transparent() -> None:
    decoder = d.array(d.nullable(d.string))
    tree = ["a", None, "b"]
    assert decoder(tree) == decoder(tree) == Ok(["a", None, "b"])
    assert tree == ["a", None, "b"]
