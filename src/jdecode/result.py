from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Literal, NoReturn, TypeAlias, TypeVar, Union

from jdecode.exceptions import UnwrapError

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> Literal[True]:
        return True

    def is_err(self) -> Literal[False]:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: object) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))

    def map_err(self, f: Callable[[object], object]) -> Ok[T]:
        return self


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> Literal[False]:
        return False

    def is_err(self) -> Literal[True]:
        return True

    def unwrap(self) -> NoReturn:
        raise UnwrapError(self.error)

    def unwrap_or(self, default: U) -> U:
        return default

    def map(self, f: Callable[[object], object]) -> Err[E]:
        return self

    def map_err(self, f: Callable[[E], U]) -> Err[U]:
        return Err(f(self.error))


Result: TypeAlias = Union[Ok[T], Err[E]]
