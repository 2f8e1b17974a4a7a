"""
Clasp Argument Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .base import (
    ArgumentType,
    CompletionContext,
    CustomArgumentType,
    ParseContext,
    filter_prefix,
)
from .collections import CollectionArgumentType, CollectionKind, SortedDict, SortedSet
from .composite import KeyValuePair, KeyValuePairArgumentType, TupleArgumentType
from .enums import ArgumentValue, EnumArgumentType, argument_values
from .markers import (
    Char,
    Converter,
    Int8,
    Int16,
    Int32,
    Int64,
    IntegerWidth,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)
from .nullable import NullableArgumentType
from .numeric import (
    DecimalArgumentType,
    FloatArgumentType,
    IntegerArgumentType,
    parse_integer,
)
from .registry import ConverterRegistry, default_registry
from .scalars import (
    BoolArgumentType,
    CharArgumentType,
    DateTimeArgumentType,
    PathArgumentType,
    StringArgumentType,
    UriArgumentType,
    UuidArgumentType,
)

__all__ = [
    "ArgumentType",
    "ArgumentValue",
    "BoolArgumentType",
    "Char",
    "CharArgumentType",
    "CollectionArgumentType",
    "CollectionKind",
    "CompletionContext",
    "Converter",
    "ConverterRegistry",
    "CustomArgumentType",
    "DateTimeArgumentType",
    "DecimalArgumentType",
    "EnumArgumentType",
    "FloatArgumentType",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "IntegerArgumentType",
    "IntegerWidth",
    "KeyValuePair",
    "KeyValuePairArgumentType",
    "NullableArgumentType",
    "ParseContext",
    "PathArgumentType",
    "SortedDict",
    "SortedSet",
    "StringArgumentType",
    "TupleArgumentType",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "UriArgumentType",
    "UuidArgumentType",
    "argument_values",
    "default_registry",
    "filter_prefix",
    "parse_integer",
]
