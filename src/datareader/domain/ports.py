"""
Ports — Protocol-based interfaces for the pipeline's collaborators.

The pipeline depends only on these contracts; adapters satisfy them
structurally, without inheriting from anything:

  DataPipeline ← Ports (protocols) ← Adapters (file source, JSON decoder, sinks)

Adapters are allowed to raise. The pipeline captures those raises at its
AsyncResult boundaries and classifies them, so no port returns a Result.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, TypeVar, runtime_checkable

from tracks.failure import FailureDescription

T = TypeVar("T")


@runtime_checkable
class TextSource(Protocol):
    """
    Port: open a named resource for shared read, read it to the end, release it.

    open raises FileNotFoundError for a missing resource and PermissionError
    when it may not be read. read_all raises OSError on a read fault.
    release must be safe to call on an already-released handle.
    """

    async def open(self, path: Path) -> Any: ...

    async def read_all(self, handle: Any) -> str: ...

    async def release(self, handle: Any) -> None: ...


@runtime_checkable
class Decoder(Protocol):
    """
    Port: decode text into an instance of target_type.

    Raises on malformed input. Returns None when the input is well formed but
    does not describe a target_type value (a null document, a wrong shape).
    """

    def decode(self, text: str, target_type: type[T]) -> T | None: ...


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Port: observe a pipeline failure together with the stage it came from."""

    def record(self, stage: str, error: FailureDescription) -> None: ...
