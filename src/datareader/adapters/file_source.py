"""
Filesystem adapter — implements the TextSource port on local files.

Blocking file calls run in worker threads via asyncio.to_thread, so the event
loop only suspends at these leaf operations. Errors are raised as-is
(FileNotFoundError, PermissionError, OSError, UnicodeDecodeError) for the
pipeline to capture and classify.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TextIO

import structlog

log = structlog.get_logger()


class FileTextSource:
    """
    Read text files from the local filesystem.

    Implements the TextSource port. Files are opened read-only; on POSIX that
    never blocks other readers or writers of the same file.
    """

    def __init__(self, encoding: str = "utf-8", errors: str = "strict") -> None:
        self._encoding = encoding
        self._errors = errors

    async def open(self, path: Path) -> TextIO:
        handle = await asyncio.to_thread(
            open, path, "r", encoding=self._encoding, errors=self._errors
        )
        log.debug("source.opened", path=str(path), encoding=self._encoding)
        return handle

    async def read_all(self, handle: TextIO) -> str:
        text = await asyncio.to_thread(handle.read)
        log.debug("source.read", path=handle.name, chars=len(text))
        return text

    async def release(self, handle: TextIO) -> None:
        """Close the handle. A second call is a no-op."""
        if handle.closed:
            return
        await asyncio.to_thread(handle.close)
        log.debug("source.released", path=handle.name)
