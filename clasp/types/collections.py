# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Converters for collection-typed arguments.

A collection argument accepts one element per occurrence (`/value:10 /value:5`)
or, when positional, one element per remaining positional token. Elements are
accumulated while scanning and the container is built once at the end, so a
`SortedSet`/`SortedDict` comes out sorted and a `set` silently drops duplicates.
Dictionaries take `KeyValuePair` elements; a repeated key is a parse error.

Supported containers: `list`, `tuple[T, ...]`, `set`, `frozenset`, `SortedSet`,
`dict` and `SortedDict`.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Generic, Iterable, TypeVar

from clasp.types.base import ArgumentType, CompletionContext, ParseContext
from clasp.types.composite import KeyValuePair

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


def sort_key(value: Any) -> Any:
    """Ordering key for sorted containers.

    Enum members order by their underlying value; pairs and tuples order
    component by component.
    """
    if isinstance(value, Enum):
        return sort_key(value.value)
    if isinstance(value, (KeyValuePair, tuple)):
        return tuple(sort_key(item) for item in value)
    return value


class SortedSet(list, Generic[T]):
    """A list of unique values kept in ascending order."""

    def __init__(self, values: Iterable[T] = ()):
        super().__init__(sorted(set(values), key=sort_key))


class SortedDict(dict, Generic[K, V]):
    """A dict whose keys iterate in ascending order."""

    def __init__(self, items: Any = (), **kwargs: V):
        merged = dict(items, **kwargs)
        super().__init__(sorted(merged.items(), key=lambda item: sort_key(item[0])))


class CollectionKind(Enum):
    """Container shapes built from accumulated elements."""

    LIST = "list"
    TUPLE = "tuple"
    SET = "set"
    FROZENSET = "frozenset"
    SORTED_SET = "sorted_set"
    DICT = "dict"
    SORTED_DICT = "sorted_dict"

    @property
    def is_mapping(self) -> bool:
        return self in (CollectionKind.DICT, CollectionKind.SORTED_DICT)


class CollectionArgumentType(ArgumentType):
    """Converter for a container of elements sharing one element converter."""

    is_collection = True

    def __init__(self, type_hint: Any, kind: CollectionKind, element_type: ArgumentType):
        super().__init__(type_hint)
        self.kind = kind
        self.element_type = element_type

    @property
    def display_name(self) -> str:
        return f"{self.kind.value} of {self.element_type.display_name}"

    @property
    def syntax_summary(self) -> str:
        return self.element_type.syntax_summary

    @property
    def accepts_missing_value(self) -> bool:
        return self.element_type.accepts_missing_value

    @property
    def default_value(self) -> Any:
        return self.create([])

    def parse(self, context: ParseContext, text: str) -> Any:
        """Parse a single element."""
        return self.element_type.parse(context, text)

    def parse_missing(self, context: ParseContext) -> Any:
        return self.element_type.parse_missing(context)

    def conflicts(self, elements: list[Any], element: Any) -> bool:
        """Return True if `element` repeats a dictionary key already collected."""
        if not self.kind.is_mapping:
            return False
        return any(existing.key == element.key for existing in elements)

    def create(self, elements: list[Any]) -> Any:
        """Build the container from the elements collected while scanning."""
        if self.kind is CollectionKind.LIST:
            return list(elements)
        if self.kind is CollectionKind.TUPLE:
            return tuple(elements)
        if self.kind is CollectionKind.SET:
            return set(elements)
        if self.kind is CollectionKind.FROZENSET:
            return frozenset(elements)
        if self.kind is CollectionKind.SORTED_SET:
            return SortedSet(elements)
        pairs = {element.key: element.value for element in elements}
        if self.kind is CollectionKind.SORTED_DICT:
            return SortedDict(pairs)
        return pairs

    def elements(self, value: Any) -> list[Any]:
        if value is None:
            return []
        if self.kind.is_mapping:
            return [KeyValuePair(key, item) for key, item in value.items()]
        if self.kind in (CollectionKind.SET, CollectionKind.FROZENSET):
            return sorted(value, key=repr)
        return list(value)

    def format_elements(self, value: Any) -> list[str]:
        return [self.element_type.format(element) for element in self.elements(value)]

    def format(self, value: Any) -> str:
        return ", ".join(self.format_elements(value))

    def get_completions(self, context: CompletionContext, partial: str) -> list[str]:
        return self.element_type.get_completions(context, partial)
