"""
Try — a description of a synchronous computation that may raise.

Constructing a Try does nothing; run() executes the wrapped zero-argument
computation and converts the outcome into a Result:

    Try(lambda: path.read_text()).run()   # Success(text) or Failure(FailureDescription)

Raised exceptions are captured at this boundary and never escape run().
Only Exception subclasses are captured; KeyboardInterrupt, SystemExit and
task cancellation propagate.

A Try is not memoized: every run() re-executes the computation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, Optional, TypeVar

from tracks.failure import ErrorCode, FailureDescription
from tracks.result import Failure, Result, Success

if TYPE_CHECKING:
    from tracks.async_result import AsyncResult
    from tracks.option import Option

T = TypeVar("T")
U = TypeVar("U")

type _Runner[V] = Callable[[], Result[V, FailureDescription]]


class Try(Generic[T]):
    """
    Cold, re-runnable synchronous computation with exception capture.

    error_code / error_message override the classification of a captured
    exception; when omitted the exception type decides the ErrorCode
    (FileNotFoundError → NOT_FOUND, PermissionError → ACCESS_DENIED,
    OSError → IO_FAULT, anything else → FAULT) and its text is the message.
    """

    __slots__ = ("_runner",)

    def __init__(
        self,
        computation: Callable[[], T],
        error_code: Optional[ErrorCode] = None,
        error_message: Optional[str] = None,
    ) -> None:
        def runner() -> Result[T, FailureDescription]:
            try:
                return Success(computation())
            except Exception as e:
                return Failure(FailureDescription.from_exception(e, error_message, error_code))

        self._runner: _Runner[T] = runner

    @classmethod
    def _from_runner(cls, runner: _Runner[T]) -> Try[T]:
        instance = cls.__new__(cls)
        instance._runner = runner
        return instance

    def run(self) -> Result[T, FailureDescription]:
        """Execute the computation, capturing any raised Exception into the failure track."""
        return self._runner()

    # ──────────────────────── Composition ────────────────────────

    def map(self, mapper: Callable[[T], U]) -> Try[U]:
        """Transform the produced value; a raising mapper is captured like the computation."""

        def runner() -> Result[U, FailureDescription]:
            match self.run():
                case Success(v):
                    return Try(lambda: mapper(v)).run()
                case Failure(err):
                    return Failure(err)
            raise TypeError("unreachable")  # pragma: no cover

        return Try._from_runner(runner)

    def flat_map(self, mapper: Callable[[T], Try[U]]) -> Try[U]:
        """
        Compose with a Try-producing function without executing anything.

        Running the composed Try runs this computation first and only on
        success runs the next one; faults from either stage land on the same
        failure track.
        """

        def runner() -> Result[U, FailureDescription]:
            match self.run():
                case Success(v):
                    try:
                        return mapper(v).run()
                    except Exception as e:
                        return Failure(FailureDescription.from_exception(e))
                case Failure(err):
                    return Failure(err)
            raise TypeError("unreachable")  # pragma: no cover

        return Try._from_runner(runner)

    bind = flat_map

    def recover(self, recovery_fn: Callable[[FailureDescription], T]) -> Try[T]:
        """Replace a captured failure with a value computed from it."""

        def runner() -> Result[T, FailureDescription]:
            match self.run():
                case Failure(err):
                    return Try(lambda: recovery_fn(err)).run()
                case success:
                    return success

        return Try._from_runner(runner)

    # ──────────────────────── Conversions ────────────────────────

    def to_option(self) -> Option[T]:
        """Run and keep only the value: Some on success, Nothing on failure."""
        return self.run().to_option()

    def to_async_result(self) -> AsyncResult[T, FailureDescription]:
        """Lift into an AsyncResult that re-runs this Try on every run()."""
        from tracks.async_result import AsyncResult

        return AsyncResult.from_try(self)

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def success(value: T) -> Try[T]:
        """A Try that always succeeds with value."""
        return Try._from_runner(lambda: Success(value))

    @staticmethod
    def failure(error: FailureDescription) -> Try[T]:
        """A Try that always fails with error."""
        return Try._from_runner(lambda: Failure(error))

    def __repr__(self) -> str:
        return f"Try({self._runner!r})"
