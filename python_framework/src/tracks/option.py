"""
Option monad — presence or absence of a value, without None checks.

An Option[T] is either Some(value: T) or Nothing. Some never wraps None:
use Option.of(x) at the boundary with code that returns None, and the
absence becomes an explicit Nothing that map/flat_map skip over.

    Option.of(lookup(employee_id))       # Some(employee) or Nothing
        .map(lambda e: e.name)            # skipped for Nothing
        .to_result(FailureDescription(ErrorCode.NOT_FOUND, "employee not found"))

Options are immutable; every transformation returns a new instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterator, Optional, TypeVar

if TYPE_CHECKING:
    from tracks.async_result import AsyncResult
    from tracks.result import Result

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
R = TypeVar("R")


class Option(Generic[T]):
    """
    Option monad.

    Two possible states:
      - Some(value: T) — a value is present
      - Nothing        — no value

    No operation ever looks at a value when the Option is Nothing, and
    mapper functions are never invoked for Nothing.

        >>> Option.of(21).map(lambda x: x * 2)
        Some(42)
        >>> Option.of(None).map(lambda x: x * 2)
        Nothing
    """

    # ──────────────────────── Introspection ────────────────────────

    def is_some(self) -> bool:
        """Check if a value is present."""
        return isinstance(self, Some)

    def is_none(self) -> bool:
        """Check if the Option is Nothing."""
        return isinstance(self, NothingType)

    def value(self) -> T:
        """
        Extract the value. Raises ValueError on Nothing.

        Prefer .match() or match/case for safe access.
        """
        match self:
            case Some(v):
                return v
        raise ValueError("Cannot get value from Nothing")

    # ──────────────────────── Transformations ────────────────────────

    def match(self, on_some: Callable[[T], R], on_none: Callable[[], R]) -> R:
        """
        Apply one of two functions depending on the state.

            Option.of(text).match(
                on_some=lambda t: t.upper(),
                on_none=lambda: "",
            )
        """
        match self:
            case Some(v):
                return on_some(v)
        return on_none()

    def map(self, mapper: Callable[[T], U]) -> Option[U]:
        """
        Transform the value if present.

        A mapper returning None yields Nothing, keeping Some free of None.
        """
        match self:
            case Some(v):
                return Option.of(mapper(v))
        return Nothing

    def flat_map(self, mapper: Callable[[T], Option[U]]) -> Option[U]:
        """Chain an Option-returning function, flattening the nested Option."""
        match self:
            case Some(v):
                return mapper(v)
        return Nothing

    bind = flat_map

    def filter(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Keep the value only if it satisfies the predicate."""
        match self:
            case Some(v) if predicate(v):
                return self
        return Nothing

    def peek(self, action: Callable[[T], Any]) -> Option[T]:
        """Execute a side effect on the value, if present, without altering the Option."""
        match self:
            case Some(v):
                action(v)
        return self

    def or_else(self, fallback: Callable[[], Option[T]]) -> Option[T]:
        """Return self if Some, otherwise the Option produced by fallback."""
        if self.is_some():
            return self
        return fallback()

    def get_or_else(self, default: T) -> T:
        """Extract the value or return a default."""
        match self:
            case Some(v):
                return v
        return default

    def get_or_else_get(self, fallback: Callable[[], T]) -> T:
        """Extract the value or compute a default."""
        return self.match(lambda v: v, fallback)

    # ──────────────────────── Conversions ────────────────────────

    def to_result(self, error_if_none: E) -> Result[T, E]:
        """
        Success(value) if present, otherwise Failure(error_if_none).

            Option.of(content).to_result(
                FailureDescription(ErrorCode.EMPTY_CONTENT, "empty file content")
            )
        """
        from tracks.result import Failure, Success

        match self:
            case Some(v):
                return Success(v)
        return Failure(error_if_none)

    def to_async_result(self, error_if_none: E) -> AsyncResult[T, E]:
        """Lift into an AsyncResult, failing with error_if_none when Nothing."""
        from tracks.async_result import AsyncResult

        return AsyncResult.from_result(self.to_result(error_if_none))

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def of(value: Optional[T]) -> Option[T]:
        """Some(value) unless value is None, in which case Nothing."""
        if value is None:
            return Nothing
        return Some(value)

    @staticmethod
    def some(value: T) -> Option[T]:
        """Create a Some. Raises TypeError for None."""
        return Some(value)

    @staticmethod
    def nothing() -> Option[T]:
        """The Nothing singleton."""
        return Nothing

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        return self.is_some()

    def __iter__(self) -> Iterator[T]:
        match self:
            case Some(v):
                yield v


@dataclass(frozen=True, slots=True)
class Some(Option[T]):
    """A present value."""

    _value: T

    def __init__(self, value: T) -> None:
        if value is None:
            raise TypeError("Some value must not be None")
        object.__setattr__(self, "_value", value)

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Some):
            return self._value == other._value
        if isinstance(other, Option):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Some", self._value))


# Enable structural pattern matching: case Some(value)
Some.__match_args__ = ("_value",)


@dataclass(frozen=True, slots=True)
class NothingType(Option[Any]):
    """The absent value. Use the module-level Nothing singleton."""

    def __repr__(self) -> str:
        return "Nothing"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Option):
            return isinstance(other, NothingType)
        return NotImplemented

    def __hash__(self) -> int:
        return hash("Nothing")


Nothing: NothingType = NothingType()
