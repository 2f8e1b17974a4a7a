# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Option models for parsing and usage rendering.

`ParserOptions` is a pydantic model so options coming from configuration are
validated the same way as options built in code:

    options = ParserOptions(context=app, named_argument_prefixes=("--", "-"))

- `context`: Any host object; handed to converters and completers.
- `reporter`: Called once per input error with the formatted message. When
  None the entry points fall back to `settings.default_reporter`.
- `named_argument_prefixes`: Prefixes introducing named arguments. The longest
  matching prefix wins while parsing; the first one is used when formatting.
"""
from __future__ import annotations

from enum import IntFlag
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, field_validator


class ParserOptions(BaseModel):
    """Options for a parse, format or completion call."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    context: Any = None
    reporter: Callable[[Any], None] | None = None
    named_argument_prefixes: tuple[str, ...] = ("/", "--", "-")

    @field_validator("named_argument_prefixes")
    @classmethod
    def validate_prefixes(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("At least one named argument prefix is required.")
        for prefix in value:
            if not prefix or any(char.isspace() for char in prefix):
                raise ValueError(f"Invalid named argument prefix: {prefix!r}")
        return value

    @property
    def preferred_prefix(self) -> str:
        return self.named_argument_prefixes[0]


class UsageOptions(IntFlag):
    """Sections and styling of generated usage text."""

    NONE = 0
    INCLUDE_DESCRIPTION = 1
    INCLUDE_REQUIRED_PARAMETER_DESCRIPTIONS = 2
    INCLUDE_OPTIONAL_PARAMETER_DESCRIPTIONS = 4
    INCLUDE_DEFAULT_VALUES = 8
    INCLUDE_REMARKS = 16
    INCLUDE_EXAMPLES = 32
    USE_COLOR = 64
    ABRIDGED = 128
    DEFAULT = (
        INCLUDE_DESCRIPTION
        | INCLUDE_REQUIRED_PARAMETER_DESCRIPTIONS
        | INCLUDE_OPTIONAL_PARAMETER_DESCRIPTIONS
        | INCLUDE_DEFAULT_VALUES
        | INCLUDE_REMARKS
        | INCLUDE_EXAMPLES
    )
