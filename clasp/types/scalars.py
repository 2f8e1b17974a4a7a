# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Converters for scalar values: booleans, strings, characters, UUIDs, URIs,
filesystem paths and datetimes.
"""
from __future__ import annotations

import os
import re
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

from dateutil import parser as date_parser
from pydantic import AnyUrl, TypeAdapter, ValidationError

from clasp.logger import logger
from clasp.types.base import ArgumentType, CompletionContext, ParseContext, filter_prefix

_TRUE_LITERALS = ("true", "+")
_FALSE_LITERALS = ("false", "-")

_HEX = "[0-9a-fA-F]"
_DASHED_UUID = rf"{_HEX}{{8}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{12}}"
_UUID_FORMS = re.compile(rf"{_DASHED_UUID}|\{{{_DASHED_UUID}\}}|{_HEX}{{32}}")


class BoolArgumentType(ArgumentType):
    """Boolean converter.

    A named argument given without a value means True. Otherwise the value must
    be `true`/`false` (any case) or `+`/`-`, which also covers the `/flag+` and
    `/flag-` suffix forms.
    """

    def __init__(self, type_hint: Any = bool):
        super().__init__(type_hint)

    @property
    def syntax_summary(self) -> str:
        return "[+|-]"

    @property
    def default_value(self) -> bool:
        return False

    @property
    def accepts_missing_value(self) -> bool:
        return True

    def parse(self, context: ParseContext, text: str) -> bool:
        literal = text.strip().lower()
        if literal in _TRUE_LITERALS:
            return True
        if literal in _FALSE_LITERALS:
            return False
        raise ValueError(f"'{text}' is not a valid boolean; use true, false, + or -")

    def parse_missing(self, context: ParseContext) -> bool:
        return True

    def format(self, value: Any) -> str:
        return "True" if value else "False"

    def get_completions(self, context: CompletionContext, partial: str) -> list[str]:
        return filter_prefix(["False", "True"], partial)


class StringArgumentType(ArgumentType):
    """String converter. Any text is accepted verbatim, including empty text."""

    def __init__(self, type_hint: Any = str):
        super().__init__(type_hint)

    @property
    def display_name(self) -> str:
        return "string"

    def parse(self, context: ParseContext, text: str) -> str:
        return text


class CharArgumentType(ArgumentType):
    """Single character converter. Whitespace is significant."""

    def __init__(self, type_hint: Any = str):
        super().__init__(type_hint)

    @property
    def display_name(self) -> str:
        return "char"

    @property
    def default_value(self) -> str:
        return "\0"

    def parse(self, context: ParseContext, text: str) -> str:
        if len(text) != 1:
            raise ValueError(f"'{text}' is not a single character")
        return text


class UuidArgumentType(ArgumentType):
    """UUID converter accepting dashed, braced-dashed and 32-digit hex forms."""

    def __init__(self, type_hint: Any = uuid.UUID):
        super().__init__(type_hint)

    @property
    def display_name(self) -> str:
        return "uuid"

    @property
    def default_value(self) -> uuid.UUID:
        return uuid.UUID(int=0)

    def parse(self, context: ParseContext, text: str) -> uuid.UUID:
        literal = text.strip()
        if not _UUID_FORMS.fullmatch(literal):
            raise ValueError(f"'{text}' is not a valid UUID")
        return uuid.UUID(literal.strip("{}"))

    def format(self, value: Any) -> str:
        return str(value)


class UriArgumentType(ArgumentType):
    """Absolute URI converter backed by pydantic's `AnyUrl`."""

    _adapter = TypeAdapter(AnyUrl)

    def __init__(self, type_hint: Any = AnyUrl):
        super().__init__(type_hint)

    @property
    def display_name(self) -> str:
        return "uri"

    def parse(self, context: ParseContext, text: str) -> AnyUrl:
        if not text.strip():
            raise ValueError("a URI is required")
        try:
            return self._adapter.validate_python(text)
        except ValidationError as error:
            reason = error.errors()[0]["msg"] if error.errors() else str(error)
            raise ValueError(f"'{text}' is not a valid absolute URI: {reason}") from error

    def format(self, value: Any) -> str:
        return str(value)


class PathArgumentType(ArgumentType):
    """Filesystem path converter with filesystem completion."""

    def __init__(self, type_hint: Any = Path):
        super().__init__(type_hint)

    @property
    def display_name(self) -> str:
        return "path"

    def parse(self, context: ParseContext, text: str) -> Any:
        if not text:
            raise ValueError("a path is required")
        return self.type_hint(text)

    def format(self, value: Any) -> str:
        return str(value)

    def get_completions(self, context: CompletionContext, partial: str) -> list[str]:
        """Complete `partial` against the entries of its parent directory.

        Directories are suggested with a trailing `/`. Dotfiles are only
        suggested once the partial name starts with a dot.
        """
        directory, prefix = os.path.split(partial)
        search_directory = os.path.expanduser(directory) if directory else "."
        try:
            with os.scandir(search_directory) as entries:
                names = sorted(
                    (entry.name, entry.is_dir())
                    for entry in entries
                    if entry.name.startswith(prefix)
                    and (prefix.startswith(".") or not entry.name.startswith("."))
                )
        except OSError as error:
            logger.debug("Path completion failed for '%s': %s", partial, error)
            return []
        completions = []
        for name, is_directory in names:
            candidate = os.path.join(directory, name) if directory else name
            completions.append(f"{candidate}/" if is_directory else candidate)
        return completions


class DateTimeArgumentType(ArgumentType):
    """Datetime converter using `dateutil` for flexible input."""

    def __init__(self, type_hint: Any = datetime):
        super().__init__(type_hint)

    def parse(self, context: ParseContext, text: str) -> datetime:
        if not text.strip():
            raise ValueError("a date/time value is required")
        try:
            return date_parser.parse(text)
        except (ValueError, OverflowError) as error:
            raise ValueError(f"'{text}' is not a valid date/time: {error}") from error

    def format(self, value: Any) -> str:
        return value.isoformat()
