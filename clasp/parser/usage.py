# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Renders usage text for a schema as a `rich.text.Text`.

Layout, each section controlled by a `UsageOptions` flag:

    Usage: copy [/force[+|-]] <source> <target>

    Copies files.

    Required parameters:
      <source>            File to copy.
      <target>            Destination.

    Optional parameters:
      /force (/f)         Overwrite existing files. [Default: False]

    Examples:
      copy a.txt b.txt
          Copy a.txt to b.txt.

    Remarks:
      ...

Text is wrapped to the requested number of columns; when no width is given the
console width is probed (falling back to `settings.default_columns`). Styling
is only applied when `UsageOptions.USE_COLOR` is set, so plain output can be
compared or written anywhere.
"""
from __future__ import annotations

import textwrap
from typing import Any

from rich.text import Text

from clasp.parser.argument import ArgumentDefinition
from clasp.parser.options import UsageOptions
from clasp.parser.schema import Schema
from clasp.settings import get_console_width
from clasp.themes import OneColors
from clasp.types.base import ArgumentType
from clasp.types.collections import CollectionArgumentType
from clasp.types.enums import EnumArgumentType
from clasp.types.nullable import NullableArgumentType
from clasp.utils import get_program_invocation

INDENT = "  "
MIN_DESCRIPTION_WIDTH = 20


class _Styles:
    def __init__(self, color: bool):
        self.header = OneColors.CYAN_b if color else None
        self.section = OneColors.GREEN_b if color else None
        self.argument = OneColors.LIGHT_YELLOW if color else None
        self.default = OneColors.COMMENT_GREY if color else None
        self.example = OneColors.BLUE if color else None


def _enum_type(value_type: ArgumentType) -> EnumArgumentType | None:
    if isinstance(value_type, NullableArgumentType):
        return _enum_type(value_type.inner)
    if isinstance(value_type, CollectionArgumentType):
        return _enum_type(value_type.element_type)
    if isinstance(value_type, EnumArgumentType):
        return value_type
    return None


def _default_text(argument: ArgumentDefinition, value: Any) -> str | None:
    value_type = argument.value_type
    if value is None or argument.is_required:
        return None
    if isinstance(value, str) and not value:
        return None
    if value_type.is_collection:
        elements = value_type.format_elements(value)
        return ", ".join(elements) if elements else None
    try:
        return value_type.format(value)
    except (ValueError, TypeError, AttributeError):
        return str(value)


def _wrap_usage_line(command: str, items: list[str], columns: int) -> list[str]:
    lead = len("Usage: ")
    indent = " " * (lead + len(command) + 1 if command else lead)
    lines: list[str] = []
    current = command
    for item in items:
        candidate = f"{current} {item}" if current.strip() else f"{current}{item}"
        width = len(candidate) + (0 if lines else lead)
        if width > columns and current.strip():
            lines.append(current)
            current = indent + item
        else:
            current = candidate
    lines.append(current)
    return lines


def _argument_label(argument: ArgumentDefinition, prefix: str) -> str:
    if argument.is_positional:
        return f"<{argument.name}>"
    label = f"{prefix}{argument.name}"
    if argument.short_name:
        label = f"{label} ({prefix}{argument.short_name})"
    return label


def _append_wrapped(text: Text, paragraph: str, columns: int, indent: str, style=None) -> None:
    width = max(columns - len(indent), MIN_DESCRIPTION_WIDTH)
    for block in paragraph.strip().splitlines() or [""]:
        for line in textwrap.wrap(block, width=width) or [""]:
            text.append(indent)
            text.append(line, style=style)
            text.append("\n")


def _describe(
    argument: ArgumentDefinition,
    current_values: Any,
    options: UsageOptions,
) -> list[tuple[str, bool]]:
    """Return description fragments as (text, is_default_note) pairs."""
    fragments: list[tuple[str, bool]] = []
    if argument.help:
        fragments.append((argument.help, False))
    enum_type = _enum_type(argument.value_type)
    if enum_type is not None:
        values = enum_type.visible_values()
        if any(help_text for _, help_text in values):
            for name, help_text in values:
                fragments.append((f"{name}: {help_text}" if help_text else name, False))
    if options & UsageOptions.INCLUDE_DEFAULT_VALUES:
        if current_values is not None:
            value = getattr(current_values, argument.dest, argument.default)
        else:
            value = argument.default
        default = _default_text(argument, value)
        if default is not None:
            fragments.append((f"[Default: {default}]", True))
    return fragments


def _render_parameters(
    text: Text,
    title: str,
    arguments: list[ArgumentDefinition],
    current_values: Any,
    columns: int,
    options: UsageOptions,
    prefix: str,
    styles: _Styles,
) -> None:
    text.append("\n")
    text.append(f"{title}:\n", style=styles.section)
    labels = [_argument_label(argument, prefix) for argument in arguments]
    label_width = min(max(len(label) for label in labels), max(columns // 3, 8)) + 2
    description_indent = " " * (len(INDENT) + label_width)
    description_width = max(columns - len(description_indent), MIN_DESCRIPTION_WIDTH)

    for argument, label in zip(arguments, labels):
        text.append(INDENT)
        text.append(label, style=styles.argument)
        lines: list[tuple[str, bool]] = []
        for fragment, is_default in _describe(argument, current_values, options):
            for line in textwrap.wrap(fragment, width=description_width) or [""]:
                lines.append((line, is_default))
        if not lines:
            text.append("\n")
            continue
        if len(label) + 2 > label_width:
            text.append("\n")
            text.append(description_indent)
        else:
            text.append(" " * (label_width - len(label)))
        for index, (line, is_default) in enumerate(lines):
            if index:
                text.append(description_indent)
            text.append(line, style=styles.default if is_default else None)
            text.append("\n")


def render_usage(
    schema: Schema,
    current_values: Any = None,
    columns: int | None = None,
    command_name: str | None = None,
    options: UsageOptions = UsageOptions.DEFAULT,
    prefix: str = "/",
) -> Text:
    """Render usage text for `schema`.

    Args:
        schema: Argument set to describe.
        current_values: Object whose attribute values are shown as defaults.
        columns: Width to wrap at. Probed from the console when None.
        command_name: Name shown on the usage line. Defaults to the program name.
        options: Sections and styling to include.
        prefix: Prefix shown for named arguments.
    """
    columns = columns or get_console_width()
    styles = _Styles(bool(options & UsageOptions.USE_COLOR))
    abridged = bool(options & UsageOptions.ABRIDGED)
    command = command_name if command_name is not None else get_program_invocation()

    visible_named = [argument for argument in schema.named if not argument.hidden]
    items = [argument.get_syntax_text(prefix) for argument in visible_named if argument.is_required]
    items += [
        argument.get_syntax_text(prefix) for argument in visible_named if not argument.is_required
    ]
    items += [argument.get_syntax_text(prefix) for argument in schema.positional]

    text = Text()
    for index, line in enumerate(_wrap_usage_line(command, items, columns)):
        if index == 0:
            text.append("Usage: ", style=styles.header)
        text.append(line)
        text.append("\n")

    if abridged:
        help_argument = schema.lookup("?")
        if help_argument is not None and not help_argument.hidden:
            text.append("\n")
            text.append(f"Use {prefix}? for detailed help.\n")
        text.rstrip()
        return text

    if options & UsageOptions.INCLUDE_DESCRIPTION and schema.description:
        text.append("\n")
        _append_wrapped(text, schema.description, columns, "")

    documented = [argument for argument in schema.positional] + visible_named
    required = [argument for argument in documented if argument.is_required]
    optional = [argument for argument in documented if not argument.is_required]

    if required and options & UsageOptions.INCLUDE_REQUIRED_PARAMETER_DESCRIPTIONS:
        _render_parameters(
            text, "Required parameters", required, current_values, columns, options, prefix, styles
        )
    if optional and options & UsageOptions.INCLUDE_OPTIONAL_PARAMETER_DESCRIPTIONS:
        _render_parameters(
            text, "Optional parameters", optional, current_values, columns, options, prefix, styles
        )

    if schema.examples and options & UsageOptions.INCLUDE_EXAMPLES:
        text.append("\n")
        text.append("Examples:\n", style=styles.section)
        for command_line, description in schema.examples:
            text.append(INDENT)
            text.append(command_line, style=styles.example)
            text.append("\n")
            if description:
                _append_wrapped(text, description, columns, INDENT * 3)

    if schema.remarks and options & UsageOptions.INCLUDE_REMARKS:
        text.append("\n")
        text.append("Remarks:\n", style=styles.section)
        _append_wrapped(text, schema.remarks, columns, INDENT)

    text.rstrip()
    return text
