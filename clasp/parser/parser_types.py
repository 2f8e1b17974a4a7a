# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
State and result models for the matching engine.

Contents:
- `ParseState`: The engine's explicit states for one parse call.
- `ParseErrorKind` / `ParseError`: Structured input errors.
- `ArgumentState`: Tracks how often an argument has been seen and the elements
  collected for it during one parse call.
- `ParseResult`: The populated destination, or the errors that prevented it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from clasp.parser.argument import ArgumentDefinition


class ParseState(Enum):
    """Lifecycle of a single parse call."""

    SCANNING = "scanning"
    RESOLVING_DEFAULTS = "resolving_defaults"
    VALIDATING = "validating"
    DONE = "done"
    FAILED = "failed"


class ParseErrorKind(Enum):
    """Categories of input errors."""

    UNKNOWN_ARGUMENT = "unknown_argument"
    DUPLICATE_ARGUMENT = "duplicate_argument"
    MISSING_REQUIRED_ARGUMENT = "missing_required_argument"
    VALUE_CONVERSION_FAILURE = "value_conversion_failure"
    TOKENIZE_FAILURE = "tokenize_failure"


@dataclass(frozen=True)
class ParseError:
    """One input error, in the order it was found."""

    kind: ParseErrorKind
    message: str
    token: str | None = None
    argument: str | None = None

    def __str__(self) -> str:
        return self.message


@dataclass
class ArgumentState:
    """Tracks an argument and what has been consumed for it."""

    arg: ArgumentDefinition
    count: int = 0
    values: list[Any] = field(default_factory=list)
    consumed_position: int | None = None

    @property
    def consumed(self) -> bool:
        return self.count > 0

    def set_consumed(self, position: int | None = None) -> None:
        """Record one occurrence, optionally noting the token position."""
        self.count += 1
        if self.consumed_position is None:
            self.consumed_position = position


@dataclass
class ParseResult:
    """Outcome of a parse call: a value or a non-empty list of errors."""

    value: Any = None
    errors: list[ParseError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.success
