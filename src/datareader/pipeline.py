"""
Pipeline — text file to typed record, as one cold AsyncResult.

All I/O is injected via ports (Protocol interfaces). The stages are connected
with flat_map, forming a railway; building the chain does no work, running it
drives the stages in order:

  open(path)                 ─┐ scoped: the handle is released
    → read(handle)           ─┘ before anything below runs
      → guard_non_empty(text)
        → parse(text, target_type)
          → guard_non_null(value)

The first failing stage short-circuits the rest. Inside the chain each error
travels as a StageFailure so the diagnostics sink learns which stage failed;
the caller only ever sees the plain FailureDescription.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, TypeVar

import structlog

from tracks.async_result import AsyncResult
from tracks.failure import ErrorCode, FailureDescription
from tracks.option import Option
from tracks.resource import with_resource
from tracks.result import Result

from datareader.adapters.diagnostics import NullDiagnostics
from datareader.domain.ports import Decoder, DiagnosticsSink, TextSource

log = structlog.get_logger()

T = TypeVar("T")

OPEN = "open"
READ = "read"
RELEASE = "release"
GUARD_NON_EMPTY = "guard_non_empty"
PARSE = "parse"
GUARD_NON_NULL = "guard_non_null"
# a fault raised outside any tagged stage, e.g. a guard given a non-str
UNTAGGED = "untagged"


@dataclass(frozen=True, slots=True)
class AbsencePolicy:
    """How a guard reports a missing value: one code, one message."""

    code: ErrorCode
    message: str

    def failure(self) -> FailureDescription:
        return FailureDescription(self.code, self.message)


EMPTY_CONTENT = AbsencePolicy(ErrorCode.EMPTY_CONTENT, "empty file content")
TYPE_MISMATCH = AbsencePolicy(ErrorCode.TYPE_MISMATCH, "cannot deserialize into required type")


@dataclass(frozen=True, slots=True)
class StageFailure:
    """A failure tagged with the pipeline stage that produced it."""

    stage: str
    error: FailureDescription


def _tag(stage: str) -> Callable[[Any], StageFailure]:
    def tag(error: Any) -> StageFailure:
        if isinstance(error, StageFailure):
            return error
        return StageFailure(stage, error)

    return tag


class DataPipeline:
    """
    Reads typed records through a TextSource and a Decoder.

        pipeline = DataPipeline(FileTextSource(), PydanticJsonDecoder())
        result = await pipeline.deserialize(Path("employee.json"), Employee)

    The description returned by deserialize() is re-runnable; every run
    re-opens and re-reads the file.
    """

    def __init__(
        self,
        source: TextSource,
        decoder: Decoder,
        diagnostics: DiagnosticsSink | None = None,
        empty_content: AbsencePolicy = EMPTY_CONTENT,
        absent_value: AbsencePolicy = TYPE_MISMATCH,
    ) -> None:
        self._source = source
        self._decoder = decoder
        self._diagnostics = diagnostics if diagnostics is not None else NullDiagnostics()
        self._empty_content = empty_content
        self._absent_value = absent_value

    def deserialize(self, path: Path, target_type: type[T]) -> AsyncResult[T, FailureDescription]:
        """
        Describe reading path into a target_type value.

        Failure codes:
          NOT_FOUND / ACCESS_DENIED / IO_FAULT — open or read failed
          EMPTY_CONTENT — the file is empty or whitespace only
          DECODE_FAULT — the decoder raised; its exception is kept unchanged
          TYPE_MISMATCH — the decoder produced no value
        """
        return (
            self._read_text(path)
            .flat_map(self._guard_non_empty)
            .flat_map(lambda text: self._parse(text, target_type))
            .flat_map(self._guard_non_null)
            .map_failure(_tag(UNTAGGED))
            .peek_failure(self._record)
            .map_failure(lambda failure: failure.error)
            .peek_failure(lambda error: self._log_failure(error, path, target_type))
        )

    async def read_many(
        self, paths: Iterable[Path], target_type: type[T]
    ) -> list[Result[T, FailureDescription]]:
        """Run one independent chain per path, in order; a failure does not stop the rest."""
        return [await self.deserialize(path, target_type) for path in paths]

    # ──────────────────────── Stages ────────────────────────

    def _read_text(self, path: Path) -> AsyncResult[str, StageFailure]:
        opened = AsyncResult.from_computation(lambda: self._source.open(path))
        return with_resource(
            acquire=lambda: opened.map_failure(_tag(OPEN)),
            release=self._source.release,
            body=lambda handle: AsyncResult.from_computation(
                lambda: self._source.read_all(handle), ErrorCode.IO_FAULT
            ).map_failure(_tag(READ)),
        ).map_failure(_tag(RELEASE))

    def _guard_non_empty(self, text: str) -> Result[str, StageFailure]:
        return (
            Option.of(text)
            .filter(lambda t: bool(t.strip()))
            .to_result(StageFailure(GUARD_NON_EMPTY, self._empty_content.failure()))
        )

    def _parse(self, text: str, target_type: type[T]) -> AsyncResult[T | None, StageFailure]:
        return AsyncResult.from_computation(
            lambda: self._decoder.decode(text, target_type), ErrorCode.DECODE_FAULT
        ).map_failure(_tag(PARSE))

    def _guard_non_null(self, value: T | None) -> Result[T, StageFailure]:
        return Option.of(value).to_result(
            StageFailure(GUARD_NON_NULL, self._absent_value.failure())
        )

    # ──────────────────────── Reporting ────────────────────────

    def _record(self, failure: StageFailure) -> None:
        try:
            self._diagnostics.record(failure.stage, failure.error)
        except Exception as e:
            log.warning("diagnostics.record_failed", stage=failure.stage, error=str(e))

    @staticmethod
    def _log_failure(error: FailureDescription, path: Path, target_type: type[Any]) -> None:
        log.error(
            "pipeline.deserialize_failed",
            data_type=getattr(target_type, "__name__", repr(target_type)),
            path=str(path),
            code=error.code.value,
            message=error.message,
        )
