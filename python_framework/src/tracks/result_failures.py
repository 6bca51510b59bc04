"""
Shorthand constructors for the failures the data pipeline produces.

    from tracks.result_failures import ResultFailures

    ResultFailures.empty_content("empty file content")
    # instead of
    Result.failure(ErrorCode.EMPTY_CONTENT, "empty file content")
"""

from __future__ import annotations

from typing import Optional

from tracks.failure import ErrorCode, FailureDescription, classify_exception
from tracks.result import Result


class ResultFailures:
    """One factory per ErrorCode, plus exception classification."""

    @staticmethod
    def not_found(resource: str, exception: Optional[BaseException] = None) -> Result:
        """Underlying resource does not exist."""
        return Result.failure(ErrorCode.NOT_FOUND, f"resource not found: {resource}", exception)

    @staticmethod
    def access_denied(resource: str, exception: Optional[BaseException] = None) -> Result:
        """Resource exists but may not be read."""
        return Result.failure(ErrorCode.ACCESS_DENIED, f"access denied: {resource}", exception)

    @staticmethod
    def io_fault(message: str, exception: Optional[BaseException] = None) -> Result:
        return Result.failure(ErrorCode.IO_FAULT, message, exception)

    @staticmethod
    def empty_content(message: str = "empty file content") -> Result:
        return Result.failure(ErrorCode.EMPTY_CONTENT, message)

    @staticmethod
    def decode_fault(exception: BaseException, message: Optional[str] = None) -> Result:
        """Wrap a decoder exception unchanged."""
        return Result.failure_from(
            FailureDescription.from_exception(exception, message, ErrorCode.DECODE_FAULT)
        )

    @staticmethod
    def type_mismatch(message: str = "cannot deserialize into required type") -> Result:
        return Result.failure(ErrorCode.TYPE_MISMATCH, message)

    @staticmethod
    def fault(message: str, exception: Optional[BaseException] = None) -> Result:
        return Result.failure(ErrorCode.FAULT, message, exception)

    @staticmethod
    def from_exception(message: str, exception: BaseException) -> Result:
        """
        Classify a Python exception into an ErrorCode, with an explicit message.

        Mapping:
          - FileNotFoundError → NOT_FOUND
          - PermissionError → ACCESS_DENIED
          - other OSError → IO_FAULT
          - everything else → FAULT
        """
        return Result.failure(classify_exception(exception), message, exception)

    @staticmethod
    def from_exception_auto(exception: BaseException) -> Result:
        """Classify an exception and use its own text as the message."""
        return Result.failure_from(FailureDescription.from_exception(exception))
