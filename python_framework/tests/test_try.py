"""
Tests for Try — deferred synchronous computations with exception capture.
"""

from __future__ import annotations

import pytest

from tracks import ErrorCode, FailureDescription, Nothing, Result, Some, Try


class Counter:
    def __init__(self, value=1):
        self.calls = 0
        self.value = value

    def __call__(self):
        self.calls += 1
        return self.value


def _raise(exc):
    def computation():
        raise exc

    return computation


class TestRun:
    def test_construction_does_not_execute(self):
        counter = Counter()
        Try(counter)
        assert counter.calls == 0

    def test_run_returns_success(self):
        assert Try(lambda: 21 * 2).run() == Result.success(42)

    def test_run_captures_exception(self):
        ex = ValueError("bad")
        result = Try(_raise(ex)).run()
        assert result.error().code == ErrorCode.FAULT
        assert result.error().exception is ex
        assert result.error().message == "bad"

    def test_classifies_os_errors(self):
        assert Try(_raise(FileNotFoundError("x"))).run().error().code == ErrorCode.NOT_FOUND
        assert Try(_raise(PermissionError("x"))).run().error().code == ErrorCode.ACCESS_DENIED
        assert Try(_raise(IsADirectoryError("x"))).run().error().code == ErrorCode.IO_FAULT

    def test_explicit_code_and_message(self):
        result = Try(_raise(KeyError("id")), ErrorCode.DECODE_FAULT, "missing key").run()
        assert result.error().code == ErrorCode.DECODE_FAULT
        assert result.error().message == "missing key"

    def test_run_is_not_memoized(self):
        counter = Counter()
        attempt = Try(counter)
        attempt.run()
        attempt.run()
        assert counter.calls == 2

    def test_base_exceptions_propagate(self):
        with pytest.raises(KeyboardInterrupt):
            Try(_raise(KeyboardInterrupt())).run()


class TestComposition:
    def test_flat_map_composes_without_executing(self):
        first = Counter(2)
        second = Counter(3)
        composed = Try(first).flat_map(lambda v: Try(lambda: v * second()))
        assert (first.calls, second.calls) == (0, 0)
        assert composed.run().value() == 6
        assert (first.calls, second.calls) == (1, 1)

    def test_flat_map_skips_next_stage_after_fault(self):
        second = Counter()
        result = Try(_raise(OSError("disk"))).flat_map(lambda v: Try(second)).run()
        assert result.error().code == ErrorCode.IO_FAULT
        assert second.calls == 0

    def test_fault_in_second_stage_lands_on_same_track(self):
        result = Try(lambda: 1).bind(lambda v: Try(_raise(RuntimeError("late")))).run()
        assert result.error().message == "late"

    def test_binder_raising_is_captured(self):
        def binder(v):
            raise LookupError("no binder")

        assert Try(lambda: 1).flat_map(binder).run().error().code == ErrorCode.FAULT

    def test_map_captures_mapper_fault_and_keeps_original_error(self):
        assert Try(lambda: "x").map(int).run().error().code == ErrorCode.FAULT
        original = Try(_raise(PermissionError("no"))).map(int).run()
        assert original.error().code == ErrorCode.ACCESS_DENIED

    def test_recover(self):
        assert Try(_raise(ValueError("x"))).recover(lambda err: err.message).run().value() == "x"


class TestConversions:
    def test_to_option(self):
        assert Try(lambda: 5).to_option() == Some(5)
        assert Try(_raise(ValueError())).to_option() is Nothing

    def test_static_factories(self):
        assert Try.success(1).run() == Result.success(1)
        desc = FailureDescription(ErrorCode.FAULT, "f")
        assert Try.failure(desc).run().error() is desc

    @pytest.mark.asyncio
    async def test_to_async_result_reruns_try(self):
        counter = Counter()
        lifted = Try(counter).to_async_result()
        await lifted.run()
        await lifted.run()
        assert counter.calls == 2

    def test_empty_exception_message_uses_type_name(self):
        assert Try(_raise(ValueError())).run().error().message == "ValueError"
