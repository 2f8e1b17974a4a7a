"""
Clasp Argument Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .exceptions import ClaspError, SchemaError, TokenizeError, UnsupportedTypeError
from .parser import (
    HelpArguments,
    Multiplicity,
    Named,
    ParseErrorKind,
    ParseResult,
    ParserOptions,
    Positional,
    SchemaBuilder,
    TokenizerOptions,
    UsageOptions,
    arguments,
    build_schema,
    format_args,
    format_line,
    get_completions,
    get_usage,
    parse,
    parse_line,
    parse_new,
    parse_result,
    parse_with_usage,
    tokenize,
)
from .repl import Loop, LoopOptions, VerbDescriptor, resolve_verbs, verb
from .settings import settings
from .types import (
    ArgumentValue,
    Char,
    Converter,
    CustomArgumentType,
    Int8,
    Int16,
    Int32,
    Int64,
    KeyValuePair,
    SortedDict,
    SortedSet,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    argument_values,
)
from .version import __version__

logger = logging.getLogger("clasp")


__all__ = [
    "ArgumentValue",
    "Char",
    "ClaspError",
    "Converter",
    "CustomArgumentType",
    "HelpArguments",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "KeyValuePair",
    "Loop",
    "LoopOptions",
    "Multiplicity",
    "Named",
    "ParseErrorKind",
    "ParseResult",
    "ParserOptions",
    "Positional",
    "SchemaBuilder",
    "SchemaError",
    "SortedDict",
    "SortedSet",
    "TokenizeError",
    "TokenizerOptions",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "UnsupportedTypeError",
    "UsageOptions",
    "VerbDescriptor",
    "__version__",
    "argument_values",
    "arguments",
    "build_schema",
    "format_args",
    "format_line",
    "get_completions",
    "get_usage",
    "parse",
    "parse_line",
    "parse_new",
    "parse_result",
    "parse_with_usage",
    "resolve_verbs",
    "settings",
    "tokenize",
    "verb",
]
