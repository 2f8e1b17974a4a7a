# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Process-wide settings for Clasp.

`settings` is the single mutable configuration object of the library. Hosts set
it once at start-up; everything else (schemas, converters, parse calls) reads it
and never writes it.

Fields:
- `default_columns`: width used for usage text when the console cannot be probed.
- `console_width_probe`: callable returning the current console width. Defaults
  to the width reported by the global rich console.
- `default_reporter`: callable receiving each parse error message when the caller
  did not supply one. Defaults to printing on the error console.

Both callables are treated as fallible: a probe that raises falls back to
`default_columns`, and a reporter that raises is logged and skipped.
"""
from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field
from rich.text import Text

from clasp.console import console, error_console
from clasp.logger import logger
from clasp.themes import OneColors


class ClaspSettings(BaseModel):
    """Process-wide configuration for usage rendering and error reporting."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    default_columns: int = Field(default=80, ge=1)
    console_width_probe: Callable[[], int] | None = None
    default_reporter: Callable[[Any], None] | None = None


settings = ClaspSettings()


def _probe_console_width() -> int:
    return console.width


def get_console_width() -> int:
    """Return the console width, or `settings.default_columns` if probing fails."""
    probe = settings.console_width_probe or _probe_console_width
    try:
        width = probe()
    except Exception as error:
        logger.debug("Console width probe failed: %s", error)
        return settings.default_columns
    if not isinstance(width, int) or width <= 0:
        return settings.default_columns
    return width


def print_error(message: Any) -> None:
    """Default reporter: print a parse error on the error console."""
    if isinstance(message, str):
        if not message:
            error_console.print()
            return
        error_console.print(Text(f"❌ {message}", style=OneColors.DARK_RED))
    else:
        error_console.print(message)


def get_default_reporter() -> Callable[[Any], None]:
    return settings.default_reporter or print_error


def safe_report(reporter: Callable[[Any], None] | None, message: Any) -> None:
    """Send `message` to `reporter`, logging (not raising) reporter failures."""
    if reporter is None:
        return
    try:
        reporter(message)
    except Exception as error:
        logger.warning("Error reporter failed: %s", error, exc_info=True)
