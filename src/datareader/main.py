"""
Application entry point — wires the adapters into the pipeline and reads a file.

Composition root: the only place where concrete adapters are instantiated.
Everything else depends on the Protocol ports.

    datareader path/to/employee.json
    DATAREADER_INPUT_PATH=path/to/employee.json datareader

Exit status is 0 when the record was read, 1 on any failure (including
invalid configuration).
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

import structlog

from tracks.failure import ErrorCode, FailureDescription
from tracks.result import Result

from datareader import __version__
from datareader.adapters.diagnostics import StructlogDiagnostics
from datareader.adapters.file_source import FileTextSource
from datareader.adapters.json_decoder import PydanticJsonDecoder
from datareader.config import AppSettings
from datareader.domain.models import Employee
from datareader.pipeline import AbsencePolicy, DataPipeline


def configure_structlog(log_level: str = "INFO") -> None:
    """Configure structlog for human-readable console output filtered at log_level."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_pipeline(settings: AppSettings) -> DataPipeline:
    """Instantiate the concrete adapters and inject them into a DataPipeline."""
    return DataPipeline(
        source=FileTextSource(
            encoding=settings.source.encoding,
            errors=settings.source.errors,
        ),
        decoder=PydanticJsonDecoder(strict=settings.pipeline.strict_decoding),
        diagnostics=StructlogDiagnostics(),
        empty_content=AbsencePolicy(
            ErrorCode.EMPTY_CONTENT, settings.pipeline.empty_content_message
        ),
        absent_value=AbsencePolicy(
            ErrorCode.TYPE_MISMATCH, settings.pipeline.type_mismatch_message
        ),
    )


async def read_employee(pipeline: DataPipeline, path: Path) -> Result[Employee, FailureDescription]:
    return await pipeline.deserialize(path, Employee)


def main(argv: Sequence[str] | None = None) -> None:
    """Read one employee record and log it; exit 1 on failure."""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        settings = AppSettings()
    except Exception as e:
        print(f"FATAL: Configuration error: {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    configure_structlog(settings.log_level)
    log = structlog.get_logger()

    path = Path(args[0]) if args else settings.input_path
    if path is None:
        log.error("app.no_input", hint="pass a path or set DATAREADER_INPUT_PATH")
        sys.exit(1)

    log.info("app.starting", version=__version__, path=str(path), log_level=settings.log_level)

    result = asyncio.run(read_employee(build_pipeline(settings), path))

    result.bi_iter(
        lambda employee: log.info("app.record_loaded", id=employee.id, name=employee.name),
        lambda error: log.error("app.failed", code=error.code.value, message=error.message),
    )
    if result.is_failure():
        sys.exit(1)


if __name__ == "__main__":
    main()
