from __future__ import annotations

import inspect
import threading
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Sequence, TypeVar

from jdecode import tree
from jdecode.config import current_settings
from jdecode.exceptions import LazyCycleError
from jdecode.result import Err, Ok, Result
from jdecode.tree import JSONValue

T = TypeVar("T")
U = TypeVar("U")

NO_MATCH_MESSAGE = "oneOf found no matching decoder"


@dataclass(frozen=True)
class Decoder(Generic[T]):
    """A pure function from a tree value to `Ok(value)` or `Err(message)`.

    Decoders hold no state. Combining them builds a bigger decoder without
    running anything; the work happens when the result is called with a tree.
    """

    run: Callable[[JSONValue], Result[T, str]]

    def __call__(self, value: JSONValue) -> Result[T, str]:
        return self.run(value)

    def map(self, f: Callable[[T], U]) -> Decoder[U]:
        return map_(self, f)

    def flat_map(self, f: Callable[[T], Decoder[U]]) -> Decoder[U]:
        return flat_map(self, f)

    def apply(self, arg: Decoder[Any]) -> Decoder[Any]:
        return apply(self, arg)

    def pipe(self, *steps: Callable[[Decoder[Any]], Decoder[Any]]) -> Decoder[Any]:
        """Thread this decoder through decoder-to-decoder steps, left to right."""
        decoder: Decoder[Any] = self
        for step in steps:
            decoder = step(decoder)
        return decoder


# --- primitives --------------------------------------------------------------


def _decode_bool(value: JSONValue) -> Result[bool, str]:
    if tree.is_bool(value):
        return Ok(value)
    return Err(f"Boolean expected, got {tree.render(value)}")


def _decode_int(value: JSONValue) -> Result[int, str]:
    # One numeric kind: 1.0 is an integer, 1.1 is not.
    if tree.is_integral(value):
        return Ok(int(value))
    return Err(f"Integer expected, got {tree.render(value)}")


def _decode_float(value: JSONValue) -> Result[float, str]:
    if tree.is_finite_number(value):
        return Ok(float(value))
    return Err(f"Float expected, got {tree.render(value)}")


def _decode_string(value: JSONValue) -> Result[str, str]:
    if tree.is_string(value):
        return Ok(value)
    return Err(f"String expected, got {tree.render(value)}")


bool_: Decoder[bool] = Decoder(_decode_bool)
int_: Decoder[int] = Decoder(_decode_int)
float_: Decoder[float] = Decoder(_decode_float)
string: Decoder[str] = Decoder(_decode_string)


def null(default: T) -> Decoder[T]:
    def run(value: JSONValue) -> Result[T, str]:
        if tree.is_null(value):
            return Ok(default)
        return Err(f"null value expected got {tree.render(value)}")

    return Decoder(run)


def pure(value: T) -> Decoder[T]:
    result: Result[T, str] = Ok(value)
    return Decoder(lambda _tree: result)


def fail(message: str) -> Decoder[Any]:
    result: Result[Any, str] = Err(message)
    return Decoder(lambda _tree: result)


# --- algebra -----------------------------------------------------------------


def map_(decoder: Decoder[T], f: Callable[[T], U]) -> Decoder[U]:
    def run(value: JSONValue) -> Result[U, str]:
        result = decoder(value)
        if isinstance(result, Err):
            return result
        return Ok(f(result.value))

    return Decoder(run)


def flat_map(decoder: Decoder[T], f: Callable[[T], Decoder[U]]) -> Decoder[U]:
    """Choose the next decoder from a decoded value.

    The chosen decoder runs against the same tree the first one saw, not
    against the extracted value.
    """

    def run(value: JSONValue) -> Result[U, str]:
        result = decoder(value)
        if isinstance(result, Err):
            return result
        return f(result.value)(value)

    return Decoder(run)


def apply(decoder_fn: Decoder[Callable[[T], U]], decoder_arg: Decoder[T]) -> Decoder[U]:
    """Decode a function and its argument from the same tree and combine them.

    Left-biased: when the function decoder fails its message wins and the
    argument decoder is not consulted.
    """

    def run(value: JSONValue) -> Result[U, str]:
        fn_result = decoder_fn(value)
        if isinstance(fn_result, Err):
            return fn_result
        arg_result = decoder_arg(value)
        if isinstance(arg_result, Err):
            return arg_result
        return Ok(fn_result.value(arg_result.value))

    return Decoder(run)


def one_of(
    decoders: Iterable[Decoder[T]],
    *,
    diagnostics: bool | None = None,
) -> Decoder[T]:
    """First successful decoder wins, in list order.

    When every branch fails the result is the generic no-match message. With
    ``diagnostics`` (default: the active settings' ``branch_diagnostics``) the
    branch messages are appended to it.
    """
    branches = tuple(decoders)
    if diagnostics is None:
        diagnostics = current_settings().branch_diagnostics

    def run(value: JSONValue) -> Result[T, str]:
        failures: list[str] = []
        for branch in branches:
            result = branch(value)
            if isinstance(result, Ok):
                return result
            failures.append(result.error)
        if diagnostics and failures:
            return Err(f"{NO_MATCH_MESSAGE}: {'; '.join(failures)}")
        return Err(NO_MATCH_MESSAGE)

    return Decoder(run)


def nullable(decoder: Decoder[T], *, diagnostics: bool | None = None) -> Decoder[T | None]:
    return one_of([null(None), decoder], diagnostics=diagnostics)


def maybe(decoder: Decoder[T]) -> Decoder[T | None]:
    """Like `nullable`, but any failure of ``decoder`` degrades to None."""
    return one_of([decoder, pure(None)])


# --- recursion ---------------------------------------------------------------


class Lazy(Generic[T]):
    """Deferred, memoized construction of a decoder."""

    __slots__ = ("_factory", "_decoder", "_lock", "_builder")

    def __init__(self, factory: Callable[[], Decoder[T]]):
        self._factory = factory
        self._decoder: Decoder[T] | None = None
        self._lock = threading.RLock()
        # Thread ident currently running the factory.
        self._builder: int | None = None

    @property
    def forced(self) -> bool:
        return self._decoder is not None

    def force(self) -> Decoder[T]:
        decoder = self._decoder
        if decoder is not None:
            return decoder
        if self._builder == threading.get_ident():
            raise LazyCycleError("lazy decoder forced during its own construction")
        with self._lock:
            if self._decoder is not None:
                return self._decoder
            self._builder = threading.get_ident()
            try:
                decoder = self._factory()
            finally:
                self._builder = None
            if not isinstance(decoder, Decoder):
                raise TypeError(
                    f"lazy factory must return a Decoder, got {type(decoder).__name__}"
                )
            self._decoder = decoder
        return decoder


def lazy(handle: Lazy[T] | Callable[[], Decoder[T]]) -> Decoder[T]:
    """Delegate to a decoder that is only built when a tree arrives.

    Needed for self-referential and mutually recursive decoders::

        node = lazy(lambda: map_(field("children", array(node)), Node))
    """
    cell = handle if isinstance(handle, Lazy) else Lazy(handle)

    def run(value: JSONValue) -> Result[T, str]:
        return cell.force()(value)

    return Decoder(run)


# --- structure ---------------------------------------------------------------


def field(key: str, decoder: Decoder[T]) -> Decoder[T]:
    def run(value: JSONValue) -> Result[T, str]:
        if not tree.is_object(value):
            return Err(f"Object expected, got {tree.render(value)}")
        if key not in value:
            return Err(f"Object has no attribute {key}")
        return decoder(value[key])

    return Decoder(run)


def index(position: int, decoder: Decoder[T]) -> Decoder[T]:
    def run(value: JSONValue) -> Result[T, str]:
        if not tree.is_array(value):
            return Err(f"Array expected, got {tree.render(value)}")
        if position < 0 or position >= len(value):
            return Err(f"Index {position} out of bound")
        return decoder(value[position])

    return Decoder(run)


def at(path: Sequence[str | int], decoder: Decoder[T]) -> Decoder[T]:
    """Nested navigation: string steps are fields, integer steps are indexes."""
    nested: Decoder[Any] = decoder
    for step in reversed(path):
        if isinstance(step, int) and not isinstance(step, bool):
            nested = index(step, nested)
        else:
            nested = field(str(step), nested)
    return nested


def _decode_elements(decoder: Decoder[T], items: Iterable[JSONValue]) -> Result[list[T], str]:
    decoded: list[T] = []
    for item in items:
        result = decoder(item)
        if isinstance(result, Err):
            return result
        decoded.append(result.value)
    return Ok(decoded)


def array(decoder: Decoder[T]) -> Decoder[list[T]]:
    def run(value: JSONValue) -> Result[list[T], str]:
        if not tree.is_array(value):
            return Err(f"Array expected got {tree.render(value)}")
        return _decode_elements(decoder, value)

    return Decoder(run)


def list_(decoder: Decoder[T]) -> Decoder[tuple[T, ...]]:
    """Immutable-sequence variant of `array`.

    Decodes through `array` and copies the result into a tuple, so it costs an
    extra pass; prefer `array` for large inputs.
    """
    elements = array(decoder)

    def run(value: JSONValue) -> Result[tuple[T, ...], str]:
        if not tree.is_array(value):
            return Err(f"List expected got {tree.render(value)}")
        return elements(value).map(tuple)

    return Decoder(run)


def dict_(decoder: Decoder[T]) -> Decoder[dict[str, T]]:
    def run(value: JSONValue) -> Result[dict[str, T], str]:
        if not tree.is_object(value):
            return Err(f"Object expected, got {tree.render(value)}")
        decoded: dict[str, T] = {}
        for key, item in value.items():
            result = decoder(item)
            if isinstance(result, Err):
                return result
            decoded[key] = result.value
        return Ok(decoded)

    return Decoder(run)


# --- records -----------------------------------------------------------------


def _positional_arity(fn: Callable[..., Any]) -> int:
    params = inspect.signature(fn).parameters.values()
    if any(param.kind is inspect.Parameter.VAR_POSITIONAL for param in params):
        raise ValueError("cannot infer arity of a variadic callable; pass arity=")
    return sum(
        1
        for param in params
        if param.kind
        in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    )


def curry(fn: Callable[..., U], arity: int | None = None) -> Callable[[Any], Any]:
    """Turn an N-ary callable into N nested one-argument callables.

    Lets a record constructor be threaded through `apply`::

        pure(curry(Point)).pipe(required("x", int_), required("y", int_))
    """
    if arity is None:
        arity = _positional_arity(fn)
    if arity < 1:
        raise ValueError(f"curry needs at least one positional parameter, got {arity}")

    def collect(args: tuple[Any, ...]) -> Any:
        if len(args) == arity:
            return fn(*args)
        return lambda arg: collect((*args, arg))

    return collect(())
