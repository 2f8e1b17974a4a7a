# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Base converter interface for argument values.

An `ArgumentType` converts between command-line text and one shape of Python
value. Every argument in a schema carries exactly one converter, chosen when the
schema is built (see `clasp.types.registry`). Converters:

- `parse(context, text)` turns text into a value, raising `ValueError` with a
  human-readable reason when the text is not acceptable;
- `format(value)` turns a value back into text such that parsing the text yields
  an equal value;
- `get_completions(context, partial)` suggests full values starting with
  `partial`;
- `parse_missing(context)` is used for a named argument given without a value
  (`/flag`), which most types treat like an empty value.

Hosts add their own value shapes by subclassing `CustomArgumentType` and either
registering an instance with a `ConverterRegistry` or attaching it to a single
argument with `Named(converter=...)` / `Positional(converter=...)`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ParseContext:
    """Information passed to converters while a value is being parsed.

    Attributes:
        context (Any): Host object supplied through `ParserOptions.context`.
        argument (str | None): Display name of the argument being parsed.
    """

    context: Any = None
    argument: str | None = None


@dataclass
class CompletionContext:
    """Information passed to completers.

    Attributes:
        parse_context (ParseContext): Context used for the token being completed.
        tokens (list[str]): All tokens on the line, including the partial one.
        token_index (int): Index of the token being completed.
        instance (Any): Object the preceding tokens were parsed into, if any.
    """

    parse_context: ParseContext = field(default_factory=ParseContext)
    tokens: list[str] = field(default_factory=list)
    token_index: int = 0
    instance: Any = None


def filter_prefix(candidates, partial: str) -> list[str]:
    """Return candidates starting with `partial`, compared case-insensitively."""
    lowered = partial.lower()
    return [candidate for candidate in candidates if candidate.lower().startswith(lowered)]


class ArgumentType(ABC):
    """Converter between command-line text and a Python value."""

    is_collection: bool = False

    def __init__(self, type_hint: Any = None):
        self.type_hint = type_hint

    @property
    def display_name(self) -> str:
        return getattr(self.type_hint, "__name__", None) or str(self.type_hint)

    @property
    def syntax_summary(self) -> str:
        return f"<{self.display_name}>"

    @property
    def default_value(self) -> Any:
        return None

    @property
    def accepts_missing_value(self) -> bool:
        return False

    @abstractmethod
    def parse(self, context: ParseContext, text: str) -> Any:
        """Parse `text`, raising `ValueError` if it is not a valid value."""

    def parse_missing(self, context: ParseContext) -> Any:
        return self.parse(context, "")

    def format(self, value: Any) -> str:
        return str(value)

    def get_completions(self, context: CompletionContext, partial: str) -> list[str]:
        return []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.display_name})"


class CustomArgumentType(ArgumentType):
    """Base class for host-defined converters.

    Subclasses implement `parse` and usually `format`. `value_type`, when set,
    is used for display and to reject values of the wrong type when formatting.
    """

    value_type: type | None = None

    def __init__(self, type_hint: Any = None):
        super().__init__(type_hint if type_hint is not None else self.value_type)

    def format(self, value: Any) -> str:
        if value is None:
            raise ValueError(f"Cannot format None as {self.display_name}")
        if self.value_type is not None and not isinstance(value, self.value_type):
            raise TypeError(
                f"Expected {self.value_type.__name__}, got {type(value).__name__}"
            )
        return str(value)
