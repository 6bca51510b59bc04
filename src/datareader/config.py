"""
Configuration — typed, validated settings loaded from environment/.env.

Only AppSettings is a BaseSettings instance. Sub-settings are plain BaseModel
classes populated through env_nested_delimiter="__", so
DATAREADER_SOURCE__ENCODING maps to source.encoding and
DATAREADER_PIPELINE__EMPTY_CONTENT_MESSAGE to pipeline.empty_content_message.

Invalid values fail at construction time, before anything is read.
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolved against the project root so the working directory does not matter.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class SourceSettings(BaseModel):
    """How files are opened and decoded into text."""

    encoding: str = Field(default="utf-8", description="Text encoding of input files")
    errors: Literal["strict", "replace", "ignore"] = Field(
        default="strict",
        description="Handling of bytes that are invalid in the chosen encoding",
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, value: str) -> str:
        """Reject codec names Python does not know."""
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown text encoding: {value!r}") from e
        return value


class PipelineSettings(BaseModel):
    """
    Absence policy of the pipeline guards.

    Both guards report absence the same way, with a code and a message;
    only the messages are configurable.
    """

    empty_content_message: str = Field(default="empty file content", min_length=1)
    type_mismatch_message: str = Field(
        default="cannot deserialize into required type", min_length=1
    )
    strict_decoding: bool = Field(
        default=False,
        description="Refuse lax type coercions while decoding",
    )


class AppSettings(BaseSettings):
    """
    Root application settings.

    Load order (highest priority first):
      1. Environment variables (DATAREADER_ prefix)
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="DATAREADER_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    source: SourceSettings = Field(default_factory=SourceSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)

    input_path: Path | None = Field(default=None, description="File read when no path is given")
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level
