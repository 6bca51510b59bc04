"""
Diagnostics sinks — implementations of the DiagnosticsSink port.

StructlogDiagnostics writes one structured warning per failed stage;
NullDiagnostics discards everything and is the pipeline default.
"""

from __future__ import annotations

import structlog

from tracks.failure import FailureDescription

log = structlog.get_logger()


class StructlogDiagnostics:
    """Log each stage failure as a `pipeline.stage_failed` event."""

    def record(self, stage: str, error: FailureDescription) -> None:
        log.warning(
            "pipeline.stage_failed",
            stage=stage,
            code=error.code.value,
            message=error.message,
            exception=type(error.exception).__name__ if error.exception else None,
        )


class NullDiagnostics:
    def record(self, stage: str, error: FailureDescription) -> None:
        return None
