"""Tests for ResultFailures factory methods."""

from tracks import ErrorCode, ResultFailures


class TestFactories:
    def test_not_found(self):
        ex = FileNotFoundError("blah.json")
        result = ResultFailures.not_found("blah.json", ex)
        assert result.error().code == ErrorCode.NOT_FOUND
        assert "blah.json" in result.error().message
        assert result.error().exception is ex

    def test_access_denied(self):
        assert ResultFailures.access_denied("secret.json").error().code == ErrorCode.ACCESS_DENIED

    def test_io_fault(self):
        assert ResultFailures.io_fault("read failed").error().code == ErrorCode.IO_FAULT

    def test_empty_content_default_message(self):
        error = ResultFailures.empty_content().error()
        assert (error.code, error.message) == (ErrorCode.EMPTY_CONTENT, "empty file content")

    def test_decode_fault_wraps_exception_unchanged(self):
        ex = ValueError("Expecting value: line 1 column 1")
        error = ResultFailures.decode_fault(ex).error()
        assert error.code == ErrorCode.DECODE_FAULT
        assert error.exception is ex
        assert error.message == "Expecting value: line 1 column 1"

    def test_type_mismatch_default_message(self):
        error = ResultFailures.type_mismatch().error()
        assert (error.code, error.message) == (ErrorCode.TYPE_MISMATCH, "cannot deserialize into required type")

    def test_fault(self):
        assert ResultFailures.fault("unexpected").error().code == ErrorCode.FAULT


class TestFromException:
    def test_classifies_with_explicit_message(self):
        result = ResultFailures.from_exception("could not open", PermissionError("denied"))
        assert result.error().code == ErrorCode.ACCESS_DENIED
        assert result.error().message == "could not open"

    def test_auto_uses_exception_text(self):
        result = ResultFailures.from_exception_auto(FileNotFoundError("gone"))
        assert result.error().code == ErrorCode.NOT_FOUND
        assert result.error().message == "gone"

    def test_unknown_exception_is_fault(self):
        assert ResultFailures.from_exception_auto(RuntimeError("?")).error().code == ErrorCode.FAULT
