"""
tracks — two-track composition of fallible, possibly asynchronous steps.

Option for absence, Result for success-or-error, Try for synchronous work that
may raise, AsyncResult for cold asynchronous work, plus a scoped-resource
helper and a handful of combinators.

    from tracks import AsyncResult, ErrorCode, with_resource

    text = with_resource(
        acquire=lambda: open(path, encoding="utf-8"),
        release=lambda handle: handle.close(),
        body=lambda handle: AsyncResult.from_computation(handle.read),
    ).ensure(lambda t: bool(t.strip()), ErrorCode.EMPTY_CONTENT, "empty file content")

    result = await text     # Success(str) | Failure(FailureDescription)
"""

from tracks.result import Result, Success, Failure
from tracks.failure import ErrorCode, FailureDescription, classify_exception
from tracks.option import Option, Some, Nothing, NothingType
from tracks.attempt import Try
from tracks.async_result import AsyncResult
from tracks.resource import ScopedResource, bracket, with_resource
from tracks.combinators import (
    Bindable,
    BiMappable,
    Mappable,
    bi_iter,
    bimap,
    bind,
    compose,
    compose_m,
    fmap,
    fold,
    identity,
    pipe,
)
from tracks.memoize import Memoized, memoize
from tracks.result_failures import ResultFailures
from tracks.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "classify_exception",
    "Option",
    "Some",
    "Nothing",
    "NothingType",
    "Try",
    "AsyncResult",
    "ScopedResource",
    "bracket",
    "with_resource",
    "Mappable",
    "Bindable",
    "BiMappable",
    "fmap",
    "bind",
    "bimap",
    "bi_iter",
    "fold",
    "compose",
    "compose_m",
    "identity",
    "pipe",
    "Memoized",
    "memoize",
    "ResultFailures",
    "ResultAssertions",
]

__version__ = "1.0.0"
