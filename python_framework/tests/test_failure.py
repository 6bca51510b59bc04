"""Tests for FailureDescription, ErrorCode and exception classification."""

from datetime import UTC, datetime

import pytest

from tracks import ErrorCode, FailureDescription, classify_exception


class TestErrorCode:
    def test_all_7_error_codes_exist(self):
        assert {code.name for code in ErrorCode} == {
            "NOT_FOUND",
            "ACCESS_DENIED",
            "IO_FAULT",
            "EMPTY_CONTENT",
            "DECODE_FAULT",
            "TYPE_MISMATCH",
            "FAULT",
        }

    def test_error_code_values_are_their_names(self):
        for code in ErrorCode:
            assert code.value == code.name


class TestFailureDescription:
    def test_creation_with_code_and_message(self):
        desc = FailureDescription(ErrorCode.EMPTY_CONTENT, "empty file content")
        assert desc.code == ErrorCode.EMPTY_CONTENT
        assert desc.message == "empty file content"
        assert desc.exception is None

    def test_timestamp_is_utc(self):
        before = datetime.now(UTC)
        desc = FailureDescription.create(ErrorCode.FAULT, "x")
        assert desc.timestamp.tzinfo is UTC
        assert desc.timestamp >= before

    def test_is_immutable(self):
        desc = FailureDescription(ErrorCode.FAULT, "x")
        with pytest.raises(AttributeError):
            desc.message = "y"  # type: ignore[misc]

    def test_from_exception_keeps_exception_and_text(self):
        ex = FileNotFoundError("blah.json")
        desc = FailureDescription.from_exception(ex)
        assert desc.exception is ex
        assert desc.code == ErrorCode.NOT_FOUND
        assert desc.message == "blah.json"

    def test_from_exception_overrides(self):
        desc = FailureDescription.from_exception(ValueError("x"), "decoder rejected input", ErrorCode.DECODE_FAULT)
        assert desc.code == ErrorCode.DECODE_FAULT
        assert desc.message == "decoder rejected input"

    def test_with_message_keeps_code_and_exception(self):
        ex = OSError("disk")
        desc = FailureDescription(ErrorCode.IO_FAULT, "a", ex).with_message("b")
        assert (desc.code, desc.message, desc.exception) == (ErrorCode.IO_FAULT, "b", ex)

    def test_to_exception(self):
        ex = PermissionError("denied")
        assert FailureDescription.from_exception(ex).to_exception() is ex
        synthesized = FailureDescription(ErrorCode.EMPTY_CONTENT, "empty file content").to_exception()
        assert isinstance(synthesized, RuntimeError)
        assert str(synthesized) == "empty file content"

    def test_full_stack_trace(self):
        try:
            raise ValueError("deep")
        except ValueError as e:
            desc = FailureDescription.from_exception(e, "wrapped")
        trace = desc.full_stack_trace()
        assert trace.startswith("wrapped")
        assert "ValueError: deep" in trace
        assert FailureDescription(ErrorCode.FAULT, "plain").full_stack_trace() == "plain"

    def test_str(self):
        assert str(FailureDescription(ErrorCode.TYPE_MISMATCH, "no value")) == "TYPE_MISMATCH: no value"


class TestClassifyException:
    @pytest.mark.parametrize(
        ("exception", "expected"),
        [
            (FileNotFoundError(), ErrorCode.NOT_FOUND),
            (PermissionError(), ErrorCode.ACCESS_DENIED),
            (IsADirectoryError(), ErrorCode.IO_FAULT),
            (OSError(), ErrorCode.IO_FAULT),
            (KeyError("k"), ErrorCode.FAULT),
            (ValueError(), ErrorCode.FAULT),
        ],
    )
    def test_mapping(self, exception, expected):
        assert classify_exception(exception) == expected
