# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Maps declared Python types to argument converters.

`ConverterRegistry.resolve(type_hint)` picks exactly one `ArgumentType` for a
declared type, trying in order:

1. an explicit `Converter(...)` marker in `Annotated` metadata, or a converter
   registered for the exact type;
2. `T | None` / `Optional[T]`, wrapping the converter for `T`;
3. collection shapes (`list[T]`, `tuple[T, ...]`, `set[T]`, `frozenset[T]`,
   `SortedSet[T]`, `dict[K, V]`, `SortedDict[K, V]`);
4. `tuple[T1, ..., Tn]` and `KeyValuePair[K, V]`;
5. `Enum` subclasses;
6. primitives (`int` with optional width, `float`, `Decimal`, `bool`, `str` or
   `Char`, `UUID`, `AnyUrl`, `Path`, `datetime`);
7. classes that name their own converter through `__argument_type__`.

Anything else (`object`, `Any`, bare `list`, `Sequence[T]`, `deque`, unions of
several types, ...) raises `UnsupportedTypeError`, so unsupported declarations
are caught when a schema is built rather than when input is parsed.
"""
from __future__ import annotations

import types
import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import AnyUrl

from clasp.exceptions import UnsupportedTypeError
from clasp.types.base import ArgumentType
from clasp.types.collections import (
    CollectionArgumentType,
    CollectionKind,
    SortedDict,
    SortedSet,
)
from clasp.types.composite import KeyValuePair, KeyValuePairArgumentType, TupleArgumentType
from clasp.types.enums import EnumArgumentType
from clasp.types.markers import CharMarker, Converter, IntegerWidth
from clasp.types.nullable import NullableArgumentType
from clasp.types.numeric import DecimalArgumentType, FloatArgumentType, IntegerArgumentType
from clasp.types.scalars import (
    BoolArgumentType,
    CharArgumentType,
    DateTimeArgumentType,
    PathArgumentType,
    StringArgumentType,
    UriArgumentType,
    UuidArgumentType,
)

ARGUMENT_TYPE_ATTRIBUTE = "__argument_type__"

_SEQUENCE_KINDS = {
    list: CollectionKind.LIST,
    set: CollectionKind.SET,
    frozenset: CollectionKind.FROZENSET,
    SortedSet: CollectionKind.SORTED_SET,
}
_MAPPING_KINDS = {
    dict: CollectionKind.DICT,
    SortedDict: CollectionKind.SORTED_DICT,
}
_PRIMITIVES = {
    bool: BoolArgumentType,
    float: FloatArgumentType,
    Decimal: DecimalArgumentType,
    uuid.UUID: UuidArgumentType,
    AnyUrl: UriArgumentType,
    datetime: DateTimeArgumentType,
}


def is_union(type_hint: Any) -> bool:
    return get_origin(type_hint) in (Union, types.UnionType)


def split_annotated(type_hint: Any) -> tuple[Any, list[Any]]:
    """Return the underlying type and the metadata of an `Annotated` hint."""
    if get_origin(type_hint) is Annotated:
        base, *metadata = get_args(type_hint)
        return base, metadata
    return type_hint, []


class ConverterRegistry:
    """Resolves declared types to converters, with host registrations first."""

    def __init__(self):
        self._converters: dict[Any, ArgumentType] = {}

    def register(self, type_key: Any, converter: ArgumentType) -> None:
        """Use `converter` for every declaration of exactly `type_key`."""
        if not isinstance(converter, ArgumentType):
            raise TypeError(f"{converter!r} is not an ArgumentType")
        self._converters[type_key] = converter

    def unregister(self, type_key: Any) -> None:
        self._converters.pop(type_key, None)

    def copy(self) -> ConverterRegistry:
        registry = ConverterRegistry()
        registry._converters.update(self._converters)
        return registry

    def _registered(self, type_key: Any) -> ArgumentType | None:
        try:
            return self._converters.get(type_key)
        except TypeError:
            return None

    def resolve(self, type_hint: Any) -> ArgumentType:
        """Return the converter for `type_hint`.

        Raises:
            UnsupportedTypeError: If no converter applies.
        """
        base, metadata = split_annotated(type_hint)
        for marker in metadata:
            if isinstance(marker, Converter):
                return marker.argument_type

        registered = self._registered(base)
        if registered is not None:
            return registered

        if is_union(base):
            return self._resolve_optional(type_hint, base)

        origin = get_origin(base)
        args = get_args(base)

        if origin in _SEQUENCE_KINDS:
            return CollectionArgumentType(
                type_hint, _SEQUENCE_KINDS[origin], self.resolve(self._single_arg(base, args))
            )
        if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
            return CollectionArgumentType(type_hint, CollectionKind.TUPLE, self.resolve(args[0]))
        if origin in _MAPPING_KINDS:
            if len(args) != 2:
                raise UnsupportedTypeError(base, "dictionaries need key and value types")
            element_type = KeyValuePairArgumentType(
                KeyValuePair[args[0], args[1]], self.resolve(args[0]), self.resolve(args[1])
            )
            return CollectionArgumentType(type_hint, _MAPPING_KINDS[origin], element_type)

        if origin is tuple:
            if not args or args == ((),):
                raise UnsupportedTypeError(base, "empty tuples carry no value")
            return TupleArgumentType(type_hint, [self.resolve(arg) for arg in args])
        if origin is KeyValuePair:
            if len(args) != 2:
                raise UnsupportedTypeError(base, "key/value pairs need key and value types")
            return KeyValuePairArgumentType(
                type_hint, self.resolve(args[0]), self.resolve(args[1])
            )
        if origin is not None:
            raise UnsupportedTypeError(base, "unsupported generic container")

        return self._resolve_simple(type_hint, base, metadata)

    def _resolve_optional(self, type_hint: Any, base: Any) -> ArgumentType:
        args = get_args(base)
        members = [arg for arg in args if arg is not type(None)]
        if len(args) != 2 or len(members) != 1:
            raise UnsupportedTypeError(base, "only optional unions of one type are supported")
        return NullableArgumentType(type_hint, self.resolve(members[0]))

    def _single_arg(self, base: Any, args: tuple[Any, ...]) -> Any:
        if len(args) != 1:
            raise UnsupportedTypeError(base, "collections need an element type")
        return args[0]

    def _resolve_simple(self, type_hint: Any, base: Any, metadata: list[Any]) -> ArgumentType:
        if not isinstance(base, type):
            raise UnsupportedTypeError(base)

        if issubclass(base, Enum):
            return EnumArgumentType(base)
        if base in _PRIMITIVES:
            return _PRIMITIVES[base](type_hint)
        if base is int:
            width = next((m for m in metadata if isinstance(m, IntegerWidth)), None)
            return IntegerArgumentType(type_hint, width)
        if base is str:
            if any(isinstance(m, CharMarker) for m in metadata):
                return CharArgumentType(type_hint)
            return StringArgumentType(type_hint)
        if issubclass(base, PurePath):
            return PathArgumentType(base)
        if base in (list, tuple, set, frozenset, dict, SortedSet, SortedDict):
            raise UnsupportedTypeError(base, "collections need an element type")

        own_converter = getattr(base, ARGUMENT_TYPE_ATTRIBUTE, None)
        if own_converter is not None:
            return self._instantiate(base, own_converter)

        raise UnsupportedTypeError(base)

    def _instantiate(self, base: type, own_converter: Any) -> ArgumentType:
        if isinstance(own_converter, ArgumentType):
            return own_converter
        if isinstance(own_converter, type) and issubclass(own_converter, ArgumentType):
            try:
                return own_converter(base)
            except Exception as error:
                raise UnsupportedTypeError(
                    base, f"could not create converter {own_converter.__name__}: {error}"
                ) from error
        raise UnsupportedTypeError(base, f"{own_converter!r} is not an ArgumentType")


default_registry = ConverterRegistry()
