"""
JSON decoder adapter — implements the Decoder port with pydantic.

One TypeAdapter(target_type | None) is built per target type (memoized) and
validates the raw JSON text directly:

  malformed JSON          → raises pydantic.ValidationError (json_invalid)
  null document           → None
  well-formed, wrong shape → None

Anything pydantic can validate works as a target type: dataclasses,
BaseModel subclasses, TypedDicts, builtins and unions such as int | str.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

import structlog
from pydantic import TypeAdapter, ValidationError

from tracks.memoize import memoize

log = structlog.get_logger()

T = TypeVar("T")


@memoize
def adapter_for(target_type: type[Any]) -> TypeAdapter[Any]:
    """The (cached) validator for an optional target_type."""
    return TypeAdapter(Optional[target_type])


class PydanticJsonDecoder:
    """
    Decode JSON text into typed records.

    Implements the Decoder port. With strict=True pydantic refuses lax
    coercions such as "42" → 42, so those documents decode to None.
    """

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def decode(self, text: str, target_type: type[T]) -> T | None:
        adapter = adapter_for(target_type)
        try:
            return adapter.validate_json(text, strict=self._strict)
        except ValidationError as e:
            if _is_syntax_error(e):
                raise
            log.debug(
                "decoder.shape_mismatch",
                target_type=getattr(target_type, "__name__", repr(target_type)),
                errors=e.error_count(),
            )
            return None


def _is_syntax_error(error: ValidationError) -> bool:
    return any(detail["type"] == "json_invalid" for detail in error.errors())
