"""
AsyncResult — a cold, re-runnable description of asynchronous work that yields a Result.

AsyncResult is the asynchronous counterpart of Try/Result. It wraps a
zero-argument callable producing an awaitable Result; nothing happens until
run() is awaited, and every run() re-executes all of the underlying work:

    load = AsyncResult.from_computation(lambda: source.open(path))
    text = load.flat_map(read_text).map(str.strip)   # still nothing has run

    result = await text.run()                        # Result[str, FailureDescription]
    result = await text                              # same thing

Composition is strictly sequential: in a.flat_map(f), f is only invoked, and
its work only started, after a has produced a Success. A Failure returns
immediately and everything downstream is skipped.

Every run() is a capture boundary: an Exception raised by the wrapped work or
by any mapper/binder becomes a classified FailureDescription on the failure
track. Cancellation (asyncio.CancelledError) is not an Exception and
propagates.
"""

from __future__ import annotations

import inspect
from typing import (
    Any,
    Awaitable,
    Callable,
    Generator,
    Generic,
    Optional,
    TypeVar,
)

from tracks.attempt import Try
from tracks.failure import ErrorCode, FailureDescription
from tracks.result import Failure, Result, Success

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", default=FailureDescription)
F = TypeVar("F")
R = TypeVar("R")


class AsyncResult(Generic[T, E]):
    """
    Deferred asynchronous computation on the railway.

    The primary constructor takes a callable that returns an awaitable
    Result. Use from_computation() for work that returns a plain value and
    signals failure by raising.
    """

    __slots__ = ("_computation",)

    def __init__(self, computation: Callable[[], Awaitable[Result[T, E]]]) -> None:
        self._computation = computation

    # ──────────────────────── Running ────────────────────────

    async def run(self) -> Result[T, E]:
        """
        Execute the description and return its Result.

        Safe to call repeatedly; each call re-executes all underlying work.
        """
        try:
            result = await self._computation()
        except Exception as e:
            return Failure(FailureDescription.from_exception(e))  # type: ignore[arg-type]
        if not isinstance(result, Result):
            return Failure(  # type: ignore[arg-type]
                FailureDescription(
                    ErrorCode.FAULT,
                    f"AsyncResult computation produced {type(result).__name__}, expected Result",
                )
            )
        return result

    def __await__(self) -> Generator[Any, Any, Result[T, E]]:
        return self.run().__await__()

    async def match(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[E], R],
    ) -> R:
        """Run, then apply the function for whichever track is populated."""
        return (await self.run()).either(on_success, on_failure)

    # ──────────────────────── Transformations ────────────────────────

    def map(self, mapper: Callable[[T], U]) -> AsyncResult[U, E]:
        """Transform the success value once the work has run. Short-circuits on failure."""

        async def computation() -> Result[U, E]:
            return (await self.run()).map(mapper)

        return AsyncResult(computation)

    def map_failure(self, mapper: Callable[[E], F]) -> AsyncResult[T, F]:
        """Transform (and possibly re-type) the failure. Success passes through."""

        async def computation() -> Result[T, F]:
            return (await self.run()).map_failure(mapper)

        return AsyncResult(computation)

    def bimap(
        self,
        on_success: Callable[[T], U],
        on_failure: Callable[[E], F],
    ) -> AsyncResult[U, F]:
        """Transform both tracks; exactly one function runs."""

        async def computation() -> Result[U, F]:
            return (await self.run()).bimap(on_success, on_failure)

        return AsyncResult(computation)

    def flat_map(
        self,
        binder: Callable[[T], AsyncResult[U, E] | Result[U, E]],
    ) -> AsyncResult[U, E]:
        """
        Sequentially compose with the next stage.

        Running the composed description:
          (a) runs this description;
          (b) on Failure returns it immediately — binder is never invoked;
          (c) on Success(v) runs binder(v) and returns its Result.

        The binder may return an AsyncResult or an already-known Result.
        """

        async def computation() -> Result[U, E]:
            first = await self.run()
            match first:
                case Success(v):
                    return await _run_next(binder(v))
                case Failure(err):
                    return Failure(err)
            raise TypeError("unreachable")  # pragma: no cover

        return AsyncResult(computation)

    bind = flat_map

    def flat_map_failure(
        self,
        binder: Callable[[E], AsyncResult[T, F] | Result[T, F]],
    ) -> AsyncResult[T, F]:
        """Recovery path: on Failure run binder(error); Success passes through untouched."""

        async def computation() -> Result[T, F]:
            first = await self.run()
            match first:
                case Failure(err):
                    return await _run_next(binder(err))
                case _:
                    return first  # type: ignore[return-value]

        return AsyncResult(computation)

    bind_failure = flat_map_failure

    def ensure(
        self,
        predicate: Callable[[T], bool],
        error: FailureDescription | ErrorCode,
        message: str = "",
    ) -> AsyncResult[T, E]:
        """Fail with error when the success value does not satisfy predicate."""

        async def computation() -> Result[T, E]:
            return (await self.run()).ensure(predicate, error, message)

        return AsyncResult(computation)

    def recover(self, recovery_fn: Callable[[E], T]) -> AsyncResult[T, E]:
        """Turn a failure into a success value."""

        async def computation() -> Result[T, E]:
            return (await self.run()).recover(recovery_fn)

        return AsyncResult(computation)

    # ──────────────────────── Side Effects ────────────────────────

    def peek(self, action: Callable[[T], Any]) -> AsyncResult[T, E]:
        """Observe the success value without altering the outcome."""

        async def computation() -> Result[T, E]:
            return (await self.run()).peek(action)

        return AsyncResult(computation)

    def peek_failure(self, action: Callable[[E], Any]) -> AsyncResult[T, E]:
        """Observe the failure without altering the outcome."""

        async def computation() -> Result[T, E]:
            return (await self.run()).peek_failure(action)

        return AsyncResult(computation)

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def from_computation(
        computation: Callable[[], Awaitable[T] | T],
        error_code: Optional[ErrorCode] = None,
        error_message: Optional[str] = None,
    ) -> AsyncResult[T, FailureDescription]:
        """
        Wrap work that returns a plain value (or an awaitable of one) and may raise.

        A raise becomes Failure; error_code / error_message override the
        classification of the captured exception.

            AsyncResult.from_computation(
                lambda: source.open(path),
            )
            AsyncResult.from_computation(
                lambda: decoder.decode(text, Employee),
                ErrorCode.DECODE_FAULT,
            )
        """

        async def wrapped() -> Result[T, FailureDescription]:
            try:
                value = computation()
                if inspect.isawaitable(value):
                    value = await value
                return Success(value)
            except Exception as e:
                return Failure(FailureDescription.from_exception(e, error_message, error_code))

        return AsyncResult(wrapped)

    @staticmethod
    def success(value: T) -> AsyncResult[T, E]:
        """A description that always yields Success(value)."""
        return AsyncResult.from_result(Success(value))

    @staticmethod
    def failure(
        code: ErrorCode,
        message: str,
        exception: Optional[BaseException] = None,
    ) -> AsyncResult[T, FailureDescription]:
        """A description that always yields Failure with the given code and message."""
        return AsyncResult.from_result(Result.failure(code, message, exception))

    @staticmethod
    def failure_from(error: E) -> AsyncResult[T, E]:
        """A description that always yields Failure(error)."""
        return AsyncResult.from_result(Failure(error))

    @staticmethod
    def from_result(result: Result[T, E]) -> AsyncResult[T, E]:
        """Lift an already-known Result."""

        async def computation() -> Result[T, E]:
            return result

        return AsyncResult(computation)

    @staticmethod
    def from_try(attempt: Try[T]) -> AsyncResult[T, FailureDescription]:
        """Lift a Try; it is re-run on every run()."""

        async def computation() -> Result[T, FailureDescription]:
            return attempt.run()

        return AsyncResult(computation)

    def __repr__(self) -> str:
        return f"AsyncResult({self._computation!r})"


async def _run_next(step: AsyncResult[U, F] | Result[U, F]) -> Result[U, F]:
    if isinstance(step, Result):
        return step
    return await step.run()
