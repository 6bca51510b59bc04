"""
Unit tests for application settings.

Settings are read from DATAREADER_-prefixed environment variables; the .env
file is disabled with _env_file=None so the tests only see monkeypatched values.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from datareader.config import AppSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DATAREADER_INPUT_PATH",
        "DATAREADER_LOG_LEVEL",
        "DATAREADER_SOURCE__ENCODING",
        "DATAREADER_SOURCE__ERRORS",
        "DATAREADER_PIPELINE__EMPTY_CONTENT_MESSAGE",
        "DATAREADER_PIPELINE__TYPE_MISMATCH_MESSAGE",
        "DATAREADER_PIPELINE__STRICT_DECODING",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_defaults(self) -> None:
        """
        GIVEN no environment variables
        WHEN AppSettings is created
        THEN every value has its default.
        """
        settings = AppSettings(_env_file=None)

        assert settings.input_path is None
        assert settings.log_level == "INFO"
        assert settings.source.encoding == "utf-8"
        assert settings.source.errors == "strict"
        assert settings.pipeline.empty_content_message == "empty file content"
        assert settings.pipeline.type_mismatch_message == "cannot deserialize into required type"
        assert settings.pipeline.strict_decoding is False


class TestEnvironment:
    def test_nested_values_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """
        GIVEN DATAREADER_ variables using the __ delimiter
        WHEN AppSettings is created
        THEN nested settings are populated.
        """
        monkeypatch.setenv("DATAREADER_INPUT_PATH", "data/ada.json")
        monkeypatch.setenv("DATAREADER_SOURCE__ENCODING", "latin-1")
        monkeypatch.setenv("DATAREADER_PIPELINE__EMPTY_CONTENT_MESSAGE", "nothing here")
        monkeypatch.setenv("DATAREADER_PIPELINE__STRICT_DECODING", "true")

        settings = AppSettings(_env_file=None)

        assert settings.input_path == Path("data/ada.json")
        assert settings.source.encoding == "latin-1"
        assert settings.pipeline.empty_content_message == "nothing here"
        assert settings.pipeline.strict_decoding is True

    def test_log_level_is_normalized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATAREADER_LOG_LEVEL", "debug")
        assert AppSettings(_env_file=None).log_level == "DEBUG"


class TestValidation:
    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("DATAREADER_LOG_LEVEL", "LOUD"),
            ("DATAREADER_SOURCE__ENCODING", "no-such-codec"),
            ("DATAREADER_SOURCE__ERRORS", "explode"),
            ("DATAREADER_PIPELINE__TYPE_MISMATCH_MESSAGE", ""),
        ],
    )
    def test_invalid_values_are_rejected(self, monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
        """
        GIVEN an invalid setting
        WHEN AppSettings is created
        THEN a ValidationError is raised at construction time.
        """
        monkeypatch.setenv(name, value)

        with pytest.raises(ValidationError):
            AppSettings(_env_file=None)
