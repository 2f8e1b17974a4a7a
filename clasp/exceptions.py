# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by Clasp.

Problems with the *declaration* of an argument set (a bad schema, a value type
with no converter) are raised as exceptions when the schema is built. Problems
with the *input* (unknown names, bad values, missing required arguments) are
never raised by the parse entry points: they are collected as `ParseError`
records and reported. The only input-side exception is `TokenizeError`, raised
when a raw line cannot be split into tokens.

Exception Hierarchy:
- ClaspError
    ├── TokenizeError
    ├── SchemaError
    │   └── UnsupportedTypeError
    └── VerbError
"""
from __future__ import annotations

from typing import Any


class ClaspError(Exception):
    """Base exception for Clasp."""


class TokenizeError(ClaspError):
    """Exception raised when an input line cannot be split into tokens."""

    def __init__(self, message: str, line: str = "", position: int | None = None):
        super().__init__(message)
        self.line = line
        self.position = position


class SchemaError(ClaspError):
    """Exception raised when an argument set declaration is invalid."""


class UnsupportedTypeError(SchemaError):
    """Exception raised when no converter exists for a declared value type."""

    def __init__(self, type_hint: Any, reason: str = ""):
        name = getattr(type_hint, "__name__", None) or repr(type_hint)
        message = f"Unsupported argument type: {name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.type_hint = type_hint


class VerbError(ClaspError):
    """Exception raised when a verb cannot be declared, loaded or instantiated."""
