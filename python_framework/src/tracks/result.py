"""
Result monad — the two-track core of the railway.

A Result[T, E] is either Success(value: T) or Failure(error: E).
The error type defaults to FailureDescription. Every operation returns a new
Result, never throws. Errors propagate automatically through the failure track
via .flat_map() short-circuiting.

    ┌───────────┐   flat_map    ┌───────────┐   flat_map    ┌──────────┐
    │   open    │──Success──────│   read    │──Success──────│  decode  │──→ Result[T, E]
    │           │               │           │               │          │
    └─────┬─────┘               └─────┬─────┘               └─────┬────┘
          │ Failure                   │ Failure                   │ Failure
          └───────────────────────────┴───────────────────────────┴──→ Result[T, E]

Python-specific design choices:
  - @dataclass variants instead of a sealed hierarchy
  - match/case for destructuring: case Success(v) / case Failure(err)
  - Generic with TypeVar, the error parameter defaulting to FailureDescription
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Generic,
    List,
    Optional,
    TypeVar,
)

from tracks.failure import ErrorCode, FailureDescription

if TYPE_CHECKING:
    from tracks.async_result import AsyncResult
    from tracks.option import Option

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", default=FailureDescription)
F = TypeVar("F")
A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
R = TypeVar("R")


class Result(Generic[T, E]):
    """
    Railway-Oriented Programming Result monad.

    Two possible states:
      - Success(value: T)  — the happy path
      - Failure(error: E)  — the error track

    All transformations short-circuit on failure, so you only write
    the success path and errors propagate automatically.

    Usage:
        >>> result = Result.success(42).map(lambda x: x * 2)
        >>> result.value()
        84

        >>> result = Result.failure(ErrorCode.EMPTY_CONTENT, "empty file content")
        >>> result.map(lambda x: x * 2).is_failure()
        True
    """

    # ──────────────────────── Introspection ────────────────────────

    def is_success(self) -> bool:
        """Check if this Result is a Success."""
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        """Check if this Result is a Failure."""
        return isinstance(self, Failure)

    def value(self) -> T:
        """
        Extract the success value. Raises ValueError if called on a Failure.

        Prefer .either() or match/case for safe access.
        """
        match self:
            case Success(v):
                return v
            case Failure(err):
                raise ValueError(f"Cannot get value from a Failure: {_error_text(err)}")
        raise TypeError("unreachable")  # pragma: no cover

    def error(self) -> E:
        """
        Extract the failure. Raises ValueError if called on a Success.

        Prefer .either() or match/case for safe access.
        """
        match self:
            case Failure(err):
                return err
            case Success(v):
                raise ValueError(f"Cannot get error from a Success: {v!r}")
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Core Transformations ────────────────────────

    def either(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[E], R],
    ) -> R:
        """
        Apply one of two functions depending on the state.

        This is the fundamental destructor; match() is an alias.

            result.either(
                on_success=lambda employee: f"Hello {employee.name}",
                on_failure=lambda err: f"Error: {err.message}",
            )
        """
        match self:
            case Success(v):
                return on_success(v)
            case Failure(err):
                return on_failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    match = either

    def map(self, mapper: Callable[[T], U]) -> Result[U, E]:
        """
        Transform the success value. Short-circuits on failure.

            Result.success(5).map(lambda x: x * 2)  # → Success(10)
            Result.failure(...).map(lambda x: x * 2)  # → same Failure
        """
        match self:
            case Success(v):
                return Success(mapper(v))
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def map_failure(self, mapper: Callable[[E], F]) -> Result[T, F]:
        """
        Transform the failure. Passes through success unchanged.

        The mapper may re-type the error, which is how stages with different
        error representations are bridged before binding across them.

            result.map_failure(lambda err: err.with_message(f"Wrapped: {err.message}"))
        """
        match self:
            case Success(_):
                return self  # type: ignore[return-value]
            case Failure(err):
                return Failure(mapper(err))
        raise TypeError("unreachable")  # pragma: no cover

    def flat_map(self, mapper: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """
        Chain a Result-returning function. Short-circuits on failure.

        This is the KEY operator — it connects railway segments. In
        `a.flat_map(b).flat_map(c)`, b and c run only if every step before
        them succeeded.

            def validate(x: int) -> Result[int]:
                if x > 0: return Result.success(x)
                return Result.failure(ErrorCode.TYPE_MISMATCH, "Must be positive")

            Result.success(5).flat_map(validate)   # → Success(5)
            Result.success(-1).flat_map(validate)  # → Failure(...)
        """
        match self:
            case Success(v):
                return mapper(v)
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    bind = flat_map

    def flat_map_failure(self, mapper: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """
        Chain a Result-returning function on the failure track — the recovery path.

        The mapper may turn the failure into a success or into a different failure.

            result.flat_map_failure(
                lambda err: Result.success(default) if err.code is ErrorCode.NOT_FOUND
                else Result.failure_from(err)
            )
        """
        match self:
            case Success(_):
                return self  # type: ignore[return-value]
            case Failure(err):
                return mapper(err)
        raise TypeError("unreachable")  # pragma: no cover

    bind_failure = flat_map_failure

    def bimap(
        self,
        on_success: Callable[[T], U],
        on_failure: Callable[[E], F],
    ) -> Result[U, F]:
        """
        Transform both tracks at once. Exactly one of the functions runs.

        Used to normalize heterogeneous errors from different stages into one
        error type while leaving the value shape under the caller's control.
        """
        match self:
            case Success(v):
                return Success(on_success(v))
            case Failure(err):
                return Failure(on_failure(err))
        raise TypeError("unreachable")  # pragma: no cover

    def ensure(
        self,
        predicate: Callable[[T], bool],
        error: FailureDescription | ErrorCode,
        message: str = "",
    ) -> Result[T, E]:
        """
        Validate the success value against a condition.
        Short-circuits on existing failure.

        Can accept either a FailureDescription or an ErrorCode + message.

            Result.success(text).ensure(
                lambda t: bool(t.strip()),
                ErrorCode.EMPTY_CONTENT, "empty file content"
            )
        """
        if isinstance(error, ErrorCode):
            error = FailureDescription(code=error, message=message)

        return self.flat_map(
            lambda v: Result.success(v) if predicate(v) else Result.failure_from(error)
        )

    # ──────────────────────── Folds ────────────────────────

    def fold(self, seed: R, combine: Callable[[R, Result[T, E]], R]) -> R:
        """
        Single-step reduction: combine(seed, self).

        The combiner inspects which track is populated, e.g. with match/case.

            result.fold("start", lambda state, r: f"{state} and {r.either(str, str)}")
        """
        return combine(seed, self)

    def bifold(
        self,
        seed: R,
        on_success: Callable[[R, T], R],
        on_failure: Callable[[R, E], R],
    ) -> R:
        """Reduce with a seed, using the function for whichever track is populated."""
        match self:
            case Success(v):
                return on_success(seed, v)
            case Failure(err):
                return on_failure(seed, err)
        raise TypeError("unreachable")  # pragma: no cover

    def bi_exists(
        self,
        on_success: Callable[[T], bool],
        on_failure: Callable[[E], bool],
    ) -> bool:
        """Test the populated track with the matching predicate."""
        return self.either(on_success, on_failure)

    # ──────────────────────── Side Effects ────────────────────────

    def peek(self, action: Callable[[T], Any]) -> Result[T, E]:
        """
        Execute a side effect on success value without altering the Result.

        Useful for logging, metrics, debugging.

            result.peek(lambda employee: log.info("employee.loaded", id=employee.id))
        """
        match self:
            case Success(v):
                action(v)
        return self

    def peek_failure(self, action: Callable[[E], Any]) -> Result[T, E]:
        """Execute a side effect on failure without altering the Result."""
        match self:
            case Failure(err):
                action(err)
        return self

    def bi_iter(
        self,
        on_success: Callable[[T], Any],
        on_failure: Callable[[E], Any],
    ) -> None:
        """Observe whichever track is populated; exactly one callback runs."""
        match self:
            case Success(v):
                on_success(v)
            case Failure(err):
                on_failure(err)

    # ──────────────────────── Recovery ────────────────────────

    def recover(self, recovery_fn: Callable[[E], T]) -> Result[T, E]:
        """
        Recover from failure by producing a success value.

            result.recover(lambda err: default_employee)
        """
        match self:
            case Success(_):
                return self
            case Failure(err):
                return Success(recovery_fn(err))
        raise TypeError("unreachable")  # pragma: no cover

    def get_or_else(self, default: T) -> T:
        """Extract value or return a default on failure."""
        match self:
            case Success(v):
                return v
            case _:
                return default

    def get_or_else_get(self, fallback: Callable[[E], T]) -> T:
        """Extract value or compute a default from the failure."""
        return self.either(lambda v: v, fallback)

    # ──────────────────────── Conversions ────────────────────────

    def to_option(self) -> Option[T]:
        """Some(value) on success, Nothing on failure (the error is dropped)."""
        from tracks.option import Nothing, Option

        match self:
            case Success(v):
                return Option.of(v)
            case _:
                return Nothing

    def to_async_result(self) -> AsyncResult[T, E]:
        """Lift this already-known Result into an AsyncResult description."""
        from tracks.async_result import AsyncResult

        return AsyncResult.from_result(self)

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def success(value: T) -> Result[T, E]:
        """Create a successful Result wrapping the given value."""
        return Success(value)

    @staticmethod
    def failure_from(error: E) -> Result[T, E]:
        """Create a failed Result from an error value (usually a FailureDescription)."""
        return Failure(error)

    @staticmethod
    def failure(
        code: ErrorCode,
        message: str,
        exception: Optional[BaseException] = None,
    ) -> Result[T, FailureDescription]:
        """
        Create a failed Result with error code, message, and optional exception.

            Result.failure(ErrorCode.EMPTY_CONTENT, "empty file content")
            Result.failure(ErrorCode.DECODE_FAULT, "Invalid JSON", ex)
        """
        return Failure(FailureDescription(code=code, message=message, exception=exception))

    # ──────────────────────── Utility Static Factories ────────────────────────

    @staticmethod
    def from_computation(
        computation: Callable[[], T],
        error_code: Optional[ErrorCode] = None,
        error_message: Optional[str] = None,
    ) -> Result[T, FailureDescription]:
        """
        Create a Result from a computation that may raise.

        Wraps exceptions into Result.failure — eliminates try/except boilerplate.
        Without an explicit code the exception type is classified
        (FileNotFoundError → NOT_FOUND, PermissionError → ACCESS_DENIED, ...).

            return Result.from_computation(
                lambda: path.read_text(),
                ErrorCode.IO_FAULT,
                "Failed to read file",
            )
        """
        try:
            return Success(computation())
        except Exception as e:
            return Failure(FailureDescription.from_exception(e, error_message, error_code))

    @staticmethod
    def from_optional(
        value: Optional[T],
        error_message: str,
        error_code: ErrorCode = ErrorCode.TYPE_MISMATCH,
    ) -> Result[T, FailureDescription]:
        """
        Create a Result from an Optional/None value.

            Result.from_optional(employee, "cannot deserialize into required type")
            Result.from_optional(text, "empty file content", ErrorCode.EMPTY_CONTENT)
        """
        if value is not None:
            return Result.success(value)
        return Result.failure(error_code, error_message)

    @staticmethod
    def combine(
        ra: Result[A, E],
        rb: Result[B, E],
        combiner: Callable[[A, B], R],
    ) -> Result[R, E]:
        """
        Combine two Results. Both must succeed for the combination to succeed.

            record = Result.combine(
                read_id(doc),
                read_name(doc),
                lambda id_, name: Employee(id=id_, name=name),
            )
        """
        return ra.flat_map(lambda a: rb.map(lambda b: combiner(a, b)))

    @staticmethod
    def combine3(
        ra: Result[A, E],
        rb: Result[B, E],
        rc: Result[C, E],
        combiner: Callable[[A, B, C], R],
    ) -> Result[R, E]:
        """Combine three Results. All must succeed."""
        return ra.flat_map(lambda a: rb.flat_map(lambda b: rc.map(lambda c: combiner(a, b, c))))

    @staticmethod
    def all_of(results: List[Result[T, E]]) -> Result[List[T], E]:
        """
        Collect a list of Results into a Result of list.
        Returns the first failure encountered, or Success with all values.

            results = [decode(text) for text in documents]
            all_valid = Result.all_of(results)  # Result[list[Employee]]
        """
        values: list[T] = []
        for r in results:
            match r:
                case Success(v):
                    values.append(v)
                case Failure(err):
                    return Failure(err)
        return Success(values)

    # ──────────────────────── Async Support ────────────────────────

    async def map_async(self, mapper: Callable[[T], Awaitable[U]]) -> Result[U, E]:
        """
        Async map — apply an async function to the success value.

        An exception raised by the mapper is captured and classified.

            result = await Result.success(path).map_async(read_file)
        """
        match self:
            case Success(v):
                try:
                    mapped = await mapper(v)
                    return Success(mapped)
                except Exception as e:
                    return Failure(FailureDescription.from_exception(e))  # type: ignore[arg-type]
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    async def flat_map_async(self, mapper: Callable[[T], Awaitable[Result[U, E]]]) -> Result[U, E]:
        """
        Async flat_map — chain an async Result-returning function.

            result = await Result.success(text).flat_map_async(decode_async)
        """
        match self:
            case Success(v):
                try:
                    return await mapper(v)
                except Exception as e:
                    return Failure(FailureDescription.from_exception(e))  # type: ignore[arg-type]
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        """Allow truthiness check: `if result: ...` succeeds only on Success."""
        return self.is_success()

    def __repr__(self) -> str:
        match self:
            case Success(v):
                return f"Success({v!r})"
            case Failure(err):
                return f"Failure({_error_text(err)!r})"
        raise TypeError("unreachable")  # pragma: no cover

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        match (self, other):
            case (Success(a), Success(b)):
                return a == b
            case (Failure(a), Failure(b)):
                return _errors_equal(a, b)
            case _:
                return False


@dataclass(frozen=True, slots=True)
class Success(Result[T, E]):
    """The success track — wraps a value of type T."""

    _value: T

    def __init__(self, value: T) -> None:
        object.__setattr__(self, "_value", value)

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Success):
            return self._value == other._value
        if isinstance(other, Result):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Success", self._value))


# Enable structural pattern matching: case Success(value)
Success.__match_args__ = ("_value",)


@dataclass(frozen=True, slots=True)
class Failure(Result[T, E]):
    """The failure track — wraps an error, usually a FailureDescription."""

    _error: E

    def __init__(self, error: E) -> None:
        if error is None:
            raise TypeError("Failure error must not be None")
        object.__setattr__(self, "_error", error)

    def __repr__(self) -> str:
        if isinstance(self._error, FailureDescription):
            return f"Failure({self._error.code.value}: {self._error.message!r})"
        return f"Failure({self._error!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Failure):
            return _errors_equal(self._error, other._error)
        if isinstance(other, Result):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        if isinstance(self._error, FailureDescription):
            return hash(("Failure", self._error.code, self._error.message))
        return hash(("Failure", self._error))


# Enable structural pattern matching: case Failure(error)
Failure.__match_args__ = ("_error",)


def _errors_equal(a: object, b: object) -> bool:
    # Timestamps and exception identity do not take part in equality.
    if isinstance(a, FailureDescription) and isinstance(b, FailureDescription):
        return a.code == b.code and a.message == b.message
    return a == b


def _error_text(err: object) -> str:
    if isinstance(err, FailureDescription):
        return err.message
    return repr(err)
