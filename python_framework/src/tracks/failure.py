"""
Failure description — structured error information for the failure track.

An error on the failure track is never a bare string: it carries an ErrorCode
naming the kind of failure, a human-readable message, and (when the failure
came from a raised exception) the original exception, untouched.

Enum + frozen dataclass gives us __eq__, __hash__ and __repr__ for free, and
Enum members are singleton-comparable with `is`.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Optional


@unique
class ErrorCode(Enum):
    """
    Error taxonomy for the failure track.

    Organized by where the failure originates:
    - Resource access: NOT_FOUND, ACCESS_DENIED, IO_FAULT
    - Content: EMPTY_CONTENT, DECODE_FAULT, TYPE_MISMATCH
    - Catch-all: FAULT
    """

    # --- Resource access ---
    NOT_FOUND = "NOT_FOUND"
    """Underlying resource does not exist."""

    ACCESS_DENIED = "ACCESS_DENIED"
    """Resource exists but cannot be opened for read."""

    IO_FAULT = "IO_FAULT"
    """Failure during read/release after a successful open."""

    # --- Content ---
    EMPTY_CONTENT = "EMPTY_CONTENT"
    """Read succeeded but yielded no usable data."""

    DECODE_FAULT = "DECODE_FAULT"
    """Structured decoding rejected the input (malformed syntax)."""

    TYPE_MISMATCH = "TYPE_MISMATCH"
    """Decoding succeeded syntactically but produced no value of the required shape."""

    # --- Catch-all ---
    FAULT = "FAULT"
    """Uncategorized exception captured by Try/AsyncResult."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor carrying error code, message, optional exception, and timestamp.

    >>> desc = FailureDescription(ErrorCode.EMPTY_CONTENT, "empty file content")
    >>> desc.code
    <ErrorCode.EMPTY_CONTENT: 'EMPTY_CONTENT'>
    >>> desc.message
    'empty file content'
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @staticmethod
    def create(
        code: ErrorCode,
        message: str,
        exception: Optional[BaseException] = None,
    ) -> FailureDescription:
        """Factory method with keyword-friendly arguments."""
        return FailureDescription(code=code, message=message, exception=exception)

    @staticmethod
    def from_exception(
        exception: BaseException,
        message: Optional[str] = None,
        code: Optional[ErrorCode] = None,
    ) -> FailureDescription:
        """
        Wrap a raised exception, unchanged, into a FailureDescription.

        The code is classified from the exception type unless given explicitly;
        the message defaults to the exception's own text.
        """
        return FailureDescription(
            code=code if code is not None else classify_exception(exception),
            message=message if message is not None else _describe(exception),
            exception=exception,
        )

    def with_message(self, message: str) -> FailureDescription:
        """Copy of this description with a new message; code and exception are kept."""
        return FailureDescription(code=self.code, message=message, exception=self.exception)

    def to_exception(self) -> BaseException:
        """
        The wrapped exception, or a RuntimeError carrying the message when there is none.

        Useful at the edge of the system where a caller insists on raising.
        """
        if self.exception is not None:
            return self.exception
        return RuntimeError(self.message)

    def full_stack_trace(self) -> str:
        """Full stack trace string including the message and exception chain."""
        if self.exception is None:
            return self.message
        tb = "".join(traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__))
        return f"{self.message}\n{tb}"

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


def classify_exception(exception: BaseException) -> ErrorCode:
    """
    Map a Python exception type to the most appropriate ErrorCode.

    Mapping:
      - FileNotFoundError → NOT_FOUND
      - PermissionError → ACCESS_DENIED
      - any other OSError → IO_FAULT
      - everything else → FAULT
    """
    match exception:
        case FileNotFoundError():
            return ErrorCode.NOT_FOUND
        case PermissionError():
            return ErrorCode.ACCESS_DENIED
        case OSError():
            return ErrorCode.IO_FAULT
        case _:
            return ErrorCode.FAULT


def _describe(exception: BaseException) -> str:
    text = str(exception)
    return text if text else type(exception).__name__
