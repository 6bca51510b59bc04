"""
Domain models — the typed records the pipeline decodes into.

Frozen dataclasses; the JSON decoder validates them through pydantic, so the
field annotations double as the document schema.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Employee:
    """
    An employee record.

        {"id": "E-001", "name": "Ada Lovelace", "age": 36}

    `age` may be omitted from the document.
    """

    id: str
    name: str
    age: int | None = None
