# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Converters for fixed-shape composite values: tuples and key/value pairs.

A tuple argument is written as comma-separated components and must supply
exactly one component per element type (`3,hello,5` for `tuple[int, str, int]`).
A key/value pair is split on its first `=` (`a=b`, `=` is `("", "")`, `==` is
`("", "=")`). As a named argument the name separator comes first, so `/pair==`
gives `("", "")`. Components may themselves be composite, so `3,1=1,5` is
valid for `tuple[int, KeyValuePair[int, int], int]`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from clasp.types.base import ArgumentType, CompletionContext, ParseContext

K = TypeVar("K")
V = TypeVar("V")

TUPLE_SEPARATOR = ","
PAIR_SEPARATOR = "="


@dataclass(frozen=True)
class KeyValuePair(Generic[K, V]):
    """An immutable key/value pair parsed from `key=value`."""

    key: K
    value: V

    def __iter__(self):
        yield self.key
        yield self.value


class TupleArgumentType(ArgumentType):
    """Converter for `tuple[T1, ..., Tn]`.

    Components are split on every `,` with no escape, so a string component
    that itself contains a comma formats to text that no longer parses back
    (`("a,b", 1)` becomes `a,b,1`, which has three components).
    """

    def __init__(self, type_hint: Any, element_types: list[ArgumentType]):
        super().__init__(type_hint)
        self.element_types = element_types

    @property
    def display_name(self) -> str:
        return TUPLE_SEPARATOR.join(element.display_name for element in self.element_types)

    @property
    def syntax_summary(self) -> str:
        return TUPLE_SEPARATOR.join(
            element.syntax_summary for element in self.element_types
        )

    def parse(self, context: ParseContext, text: str) -> tuple:
        parts = text.split(TUPLE_SEPARATOR)
        if len(parts) != len(self.element_types):
            raise ValueError(
                f"expected {len(self.element_types)} comma-separated value(s), "
                f"got {len(parts)}"
            )
        return tuple(
            element.parse(context, part) for element, part in zip(self.element_types, parts)
        )

    def format(self, value: Any) -> str:
        return TUPLE_SEPARATOR.join(
            element.format(item) for element, item in zip(self.element_types, value)
        )

    def get_completions(self, context: CompletionContext, partial: str) -> list[str]:
        parts = partial.split(TUPLE_SEPARATOR)
        index = len(parts) - 1
        if index >= len(self.element_types):
            return []
        head = "".join(f"{part}{TUPLE_SEPARATOR}" for part in parts[:-1])
        return [
            f"{head}{candidate}"
            for candidate in self.element_types[index].get_completions(context, parts[-1])
        ]


class KeyValuePairArgumentType(ArgumentType):
    """Converter for `KeyValuePair[K, V]`."""

    def __init__(self, type_hint: Any, key_type: ArgumentType, value_type: ArgumentType):
        super().__init__(type_hint)
        self.key_type = key_type
        self.value_type = value_type

    @property
    def display_name(self) -> str:
        return f"{self.key_type.display_name}={self.value_type.display_name}"

    @property
    def syntax_summary(self) -> str:
        return f"{self.key_type.syntax_summary}={self.value_type.syntax_summary}"

    def parse(self, context: ParseContext, text: str) -> KeyValuePair:
        if PAIR_SEPARATOR not in text:
            raise ValueError(f"'{text}' is not a key=value pair")
        key, _, value = text.partition(PAIR_SEPARATOR)
        return KeyValuePair(
            self.key_type.parse(context, key), self.value_type.parse(context, value)
        )

    def format(self, value: Any) -> str:
        key, item = value
        return f"{self.key_type.format(key)}{PAIR_SEPARATOR}{self.value_type.format(item)}"

    def get_completions(self, context: CompletionContext, partial: str) -> list[str]:
        if PAIR_SEPARATOR not in partial:
            return self.key_type.get_completions(context, partial)
        key, _, value = partial.partition(PAIR_SEPARATOR)
        return [
            f"{key}{PAIR_SEPARATOR}{candidate}"
            for candidate in self.value_type.get_completions(context, value)
        ]
