"""
Scoped resources — acquire, use, release exactly once.

    with_resource(
        acquire=lambda: source.open(path),
        release=source.release,
        body=lambda handle: AsyncResult.from_computation(lambda: source.read_all(handle)),
    )

The returned AsyncResult is cold like any other. Each run():

    acquire ──raises──→ Failure (release NOT called)
       │
       ▼
     body(resource).run() ──→ outcome (Success | Failure | raise | cancel)
       │
       ▼
    release(resource)        exactly once, before the outcome is returned
       │
       ├─ release ok                       → outcome
       ├─ release raises, outcome Failure  → outcome (release fault is logged)
       └─ release raises, outcome Success  → Failure(IO_FAULT, release fault)

Cancellation of the run still releases the resource and then propagates.
acquire and release may be plain callables or coroutine functions. acquire may
also hand back a Result or an AsyncResult; a Failure from it is returned
as-is, without calling release.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

import structlog

from tracks.async_result import AsyncResult
from tracks.failure import ErrorCode, FailureDescription
from tracks.result import Failure, Result, Success

log = structlog.get_logger()

R = TypeVar("R")
T = TypeVar("T")
E = TypeVar("E", default=FailureDescription)

type Acquire[V] = Callable[[], Awaitable[V] | V]
type Release[V] = Callable[[V], Awaitable[None] | None]
type Body[V, U, Err] = Callable[[V], AsyncResult[U, Err] | Result[U, Err]]


def with_resource(
    acquire: Acquire[R],
    release: Release[R],
    body: Body[R, T, E],
) -> AsyncResult[T, E]:
    """Run body inside a scope that releases the acquired resource exactly once."""

    async def computation() -> Result[T, E]:
        try:
            acquired = await _acquire(acquire)
        except Exception as e:
            return Failure(FailureDescription.from_exception(e))  # type: ignore[arg-type]
        if acquired.is_failure():
            return Failure(acquired.error())
        resource = acquired.value()

        try:
            outcome = await _run_body(body, resource)
        except Exception as e:
            outcome = Failure(FailureDescription.from_exception(e))  # type: ignore[arg-type]
        except BaseException:
            await _release_after_abort(release, resource)
            raise

        try:
            await _call(release, resource)
        except Exception as e:
            if outcome.is_failure():
                log.warning(
                    "resource.release_failed",
                    resource=type(resource).__name__,
                    error=str(e),
                    masked_by=str(outcome.error()),
                )
                return outcome
            return Failure(  # type: ignore[arg-type]
                FailureDescription.from_exception(e, code=ErrorCode.IO_FAULT)
            )
        return outcome

    return AsyncResult(computation)


bracket = with_resource


@dataclass(frozen=True, slots=True)
class ScopedResource(Generic[R]):
    """
    An (acquire, release) pair that can open any number of independent scopes.

        scoped = ScopedResource(lambda: source.open(path), source.release)
        text = await scoped.use(read_text)
    """

    acquire: Acquire[R]
    release: Release[R]

    def use(self, body: Body[R, T, E]) -> AsyncResult[T, E]:
        return with_resource(self.acquire, self.release, body)


# ──────────────────────── Internals ────────────────────────


async def _call(fn: Callable[..., Any], *args: Any) -> Any:
    value = fn(*args)
    if inspect.isawaitable(value):
        value = await value
    return value


async def _acquire(acquire: Acquire[R]) -> Result[R, Any]:
    value = await _call(acquire)
    if isinstance(value, AsyncResult):
        return await value.run()
    if isinstance(value, Result):
        return value
    return Success(value)


async def _run_body(body: Body[R, T, E], resource: R) -> Result[T, E]:
    step = body(resource)
    if isinstance(step, Result):
        return step
    return await step.run()


async def _release_after_abort(release: Release[R], resource: R) -> None:
    try:
        await _call(release, resource)
    except Exception as e:
        log.warning(
            "resource.release_failed",
            resource=type(resource).__name__,
            error=str(e),
            masked_by="cancelled",
        )
