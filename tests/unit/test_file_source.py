"""
Unit tests for the filesystem TextSource adapter.

Uses pytest's tmp_path for real, isolated files.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from datareader.adapters.file_source import FileTextSource
from datareader.domain.ports import TextSource


class TestFileTextSource:
    """Verify open / read_all / release against real files."""

    def test_satisfies_text_source_port(self) -> None:
        assert isinstance(FileTextSource(), TextSource)

    @pytest.mark.asyncio
    async def test_reads_whole_file(self, tmp_path: Path) -> None:
        """
        GIVEN a UTF-8 file
        WHEN it is opened and read
        THEN the full text is returned.
        """
        path = tmp_path / "employee.json"
        path.write_text('{"name": "Zoë"}', encoding="utf-8")
        source = FileTextSource()

        handle = await source.open(path)
        try:
            assert await source.read_all(handle) == '{"name": "Zoë"}'
        finally:
            await source.release(handle)

    @pytest.mark.asyncio
    async def test_missing_file_raises_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            await FileTextSource().open(tmp_path / "blah.json")

    @pytest.mark.asyncio
    @pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
    async def test_unreadable_file_raises_permission_error(self, tmp_path: Path) -> None:
        path = tmp_path / "secret.json"
        path.write_text("{}")
        path.chmod(0o000)

        with pytest.raises(PermissionError):
            await FileTextSource().open(path)

    @pytest.mark.asyncio
    async def test_release_is_idempotent(self, tmp_path: Path) -> None:
        """
        GIVEN an opened handle
        WHEN release is called twice
        THEN the handle is closed and the second call does nothing.
        """
        path = tmp_path / "a.txt"
        path.write_text("x")
        source = FileTextSource()
        handle = await source.open(path)

        await source.release(handle)
        await source.release(handle)

        assert handle.closed

    @pytest.mark.asyncio
    async def test_encoding_errors_setting(self, tmp_path: Path) -> None:
        """
        GIVEN a file with bytes that are invalid UTF-8
        WHEN read with errors="strict" and with errors="replace"
        THEN strict raises UnicodeDecodeError and replace substitutes U+FFFD.
        """
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"caf\xe9")

        strict = FileTextSource()
        handle = await strict.open(path)
        with pytest.raises(UnicodeDecodeError):
            await strict.read_all(handle)
        await strict.release(handle)

        lenient = FileTextSource(errors="replace")
        handle = await lenient.open(path)
        assert await lenient.read_all(handle) == "caf\ufffd"
        await lenient.release(handle)
