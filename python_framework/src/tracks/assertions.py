"""
Test assertions for Result, Option and AsyncResult values.

    from tracks import ResultAssertions

    def test_reads_employee():
        result = parse(text)
        employee = ResultAssertions.assert_success(result)
        assert employee.name == "Ada"

    async def test_missing_file():
        result = await pipeline.deserialize(missing, Employee).run()
        ResultAssertions.assert_failure(result, ErrorCode.NOT_FOUND)
"""

from __future__ import annotations

from typing import Any, TypeVar

from tracks.async_result import AsyncResult
from tracks.failure import ErrorCode, FailureDescription
from tracks.option import Option
from tracks.result import Result

T = TypeVar("T")


def _describe_failure(error: object) -> str:
    if isinstance(error, FailureDescription):
        return f"{error.code.value}: {error.message!r}"
    return repr(error)


class ResultAssertions:
    """Expressive test assertions with readable failure messages."""

    @staticmethod
    def assert_success(result: Result[T, Any], message: str = "") -> T:
        """
        Assert the Result is a Success and return the value.

            value = ResultAssertions.assert_success(result)
        """
        context = f" — {message}" if message else ""
        assert result.is_success(), (
            f"Expected Success but got Failure({_describe_failure(result.error())}){context}"
        )
        return result.value()

    @staticmethod
    def assert_failure(
        result: Result[Any, Any],
        expected_code: ErrorCode | None = None,
        message: str = "",
    ) -> FailureDescription:
        """
        Assert the Result is a Failure, optionally checking the error code.

            error = ResultAssertions.assert_failure(result, ErrorCode.EMPTY_CONTENT)
        """
        context = f" — {message}" if message else ""
        assert result.is_failure(), f"Expected Failure but got Success({result.value()!r}){context}"
        error = result.error()
        if expected_code is not None:
            assert error.code == expected_code, (
                f"Expected error code {expected_code.value} "
                f"but got {_describe_failure(error)}{context}"
            )
        return error

    @staticmethod
    def assert_failure_message_contains(result: Result[Any, Any], substring: str) -> None:
        """Case-insensitive check on the failure message."""
        error = ResultAssertions.assert_failure(result)
        assert substring.lower() in error.message.lower(), (
            f"Expected failure message to contain {substring!r} but message was: {error.message!r}"
        )

    @staticmethod
    def assert_failure_message_equals(result: Result[Any, Any], expected_message: str) -> None:
        error = ResultAssertions.assert_failure(result)
        assert error.message == expected_message, (
            f"Expected failure message {expected_message!r} but got {error.message!r}"
        )

    @staticmethod
    def assert_success_value(result: Result[T, Any], expected_value: Any) -> None:
        value = ResultAssertions.assert_success(result)
        assert value == expected_value, f"Expected success value {expected_value!r} but got {value!r}"

    # ──────────────────────── Option ────────────────────────

    @staticmethod
    def assert_some(option: Option[T]) -> T:
        """Assert the Option holds a value and return it."""
        assert option.is_some(), "Expected Some but got Nothing"
        return option.value()

    @staticmethod
    def assert_nothing(option: Option[Any]) -> None:
        assert option.is_none(), f"Expected Nothing but got {option!r}"

    # ──────────────────────── AsyncResult ────────────────────────

    @staticmethod
    async def assert_runs_to_success(description: AsyncResult[T, Any]) -> T:
        """Run the description and assert it succeeded."""
        return ResultAssertions.assert_success(await description.run())

    @staticmethod
    async def assert_runs_to_failure(
        description: AsyncResult[Any, Any],
        expected_code: ErrorCode | None = None,
    ) -> FailureDescription:
        """Run the description and assert it failed, optionally with expected_code."""
        return ResultAssertions.assert_failure(await description.run(), expected_code)
