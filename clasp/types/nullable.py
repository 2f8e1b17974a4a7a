# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Converter for optional values (`T | None`)."""
from __future__ import annotations

from typing import Any

from clasp.types.base import ArgumentType, CompletionContext, ParseContext


class NullableArgumentType(ArgumentType):
    """Wraps the converter of `T` for a `T | None` declaration.

    An absent argument leaves the value as None. An explicitly empty value
    (`/value=`) is rejected rather than mapped to None; a named argument without
    any value is handled by the inner converter, so `bool | None` still treats
    `/flag` as True.
    """

    def __init__(self, type_hint: Any, inner: ArgumentType):
        super().__init__(type_hint)
        self.inner = inner

    @property
    def display_name(self) -> str:
        return self.inner.display_name

    @property
    def syntax_summary(self) -> str:
        return self.inner.syntax_summary

    @property
    def accepts_missing_value(self) -> bool:
        return self.inner.accepts_missing_value

    def parse(self, context: ParseContext, text: str) -> Any:
        if text == "":
            raise ValueError(f"an explicit empty value is not a valid {self.display_name}")
        return self.inner.parse(context, text)

    def parse_missing(self, context: ParseContext) -> Any:
        return self.inner.parse_missing(context)

    def format(self, value: Any) -> str:
        return self.inner.format(value)

    def get_completions(self, context: CompletionContext, partial: str) -> list[str]:
        return self.inner.get_completions(context, partial)
