# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Options for the interactive `Loop`.

- `end_of_line_comment_character`: Everything from this character to the end of
  the line is ignored (e.g. `#`). None disables comment stripping.
- `resolve` / `release`: Factory for verb instances and its cleanup hook. Without
  a factory each invocation builds a fresh instance from the parsed values, so
  verb dataclasses may declare required fields.
- `prompt`: Prompt shown by `Loop.run`.
"""
from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, field_validator


class LoopOptions(BaseModel):
    """Options for an interactive loop."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    end_of_line_comment_character: str | None = None
    resolve: Callable[[type], Any] | None = None
    release: Callable[[Any], None] | None = None
    prompt: str = "> "

    @field_validator("end_of_line_comment_character")
    @classmethod
    def validate_comment_character(cls, value: str | None) -> str | None:
        if value is not None and (len(value) != 1 or value.isspace() or value == '"'):
            raise ValueError("Comment character must be a single non-space, non-quote character.")
        return value
