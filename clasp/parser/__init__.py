"""
Clasp Argument Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .api import (
    format_args,
    format_line,
    get_completions,
    get_engine,
    get_usage,
    parse,
    parse_line,
    parse_new,
    parse_result,
    parse_with_usage,
)
from .argument import ArgumentDefinition
from .argument_flags import ArgumentKind, Multiplicity
from .engine import Engine
from .metadata import HelpArguments, Named, Positional, arguments
from .options import ParserOptions, UsageOptions
from .parser_types import ParseError, ParseErrorKind, ParseResult, ParseState
from .schema import Schema, SchemaBuilder, build_schema
from .tokenizer import Token, TokenizerOptions, join_tokens, tokenize
from .usage import render_usage

__all__ = [
    "ArgumentDefinition",
    "ArgumentKind",
    "Engine",
    "HelpArguments",
    "Multiplicity",
    "Named",
    "ParseError",
    "ParseErrorKind",
    "ParseResult",
    "ParseState",
    "ParserOptions",
    "Positional",
    "Schema",
    "SchemaBuilder",
    "Token",
    "TokenizerOptions",
    "UsageOptions",
    "arguments",
    "build_schema",
    "format_args",
    "format_line",
    "get_completions",
    "get_engine",
    "get_usage",
    "join_tokens",
    "parse",
    "parse_line",
    "parse_new",
    "parse_result",
    "parse_with_usage",
    "render_usage",
    "tokenize",
]
