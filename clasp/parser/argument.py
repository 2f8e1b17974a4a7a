# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `ArgumentDefinition` dataclass, the resolved form of one declared
argument.

Definitions are produced by the schema builder from `Positional`/`Named`
markers (or `SchemaBuilder.add_positional` / `add_named`) and are immutable
once the schema is built. The matching engine, the usage renderer and the
completer all read them; none of them write them.

Key Attributes:
- `dest`: Attribute set on the destination object
- `name` / `short_name`: Names matched on the command line (named arguments)
- `kind`: `ArgumentKind.POSITIONAL` or `ArgumentKind.NAMED`
- `multiplicity`: How many times the argument may occur
- `value_type`: The `ArgumentType` converter chosen for the declared type
- `default`: Value used when the argument is absent
- `completer`: Optional custom completion provider
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from clasp.parser.argument_flags import ArgumentKind, Multiplicity
from clasp.types.base import ArgumentType, CompletionContext


@dataclass(frozen=True)
class ArgumentDefinition:
    """
    Represents one resolved argument of a schema.

    Attributes:
        dest (str): Attribute name on the destination object.
        name (str): Long name (named) or display name (positional).
        kind (ArgumentKind): Positional or named.
        multiplicity (Multiplicity): Occurrence rule.
        value_type (ArgumentType): Converter for the argument's values.
        type_hint (Any): The declared Python type.
        default (Any): Value applied when the argument is absent.
        has_explicit_default (bool): True if the declaration supplied `default=`.
        short_name (str | None): Alternative name for named arguments.
        help (str): Help text for usage output.
        completer (Any): Custom completion provider, if any.
        position (int | None): Slot index for positional arguments.
        remainder (bool): True if the argument takes all remaining tokens verbatim.
        hidden (bool): True if left out of usage text and completions.
    """

    dest: str
    name: str
    kind: ArgumentKind
    multiplicity: Multiplicity
    value_type: ArgumentType
    type_hint: Any = None
    default: Any = None
    has_explicit_default: bool = False
    short_name: str | None = None
    help: str = ""
    completer: Any = None
    position: int | None = None
    remainder: bool = False
    hidden: bool = False

    @property
    def is_positional(self) -> bool:
        return self.kind is ArgumentKind.POSITIONAL

    @property
    def is_required(self) -> bool:
        return self.multiplicity.is_required

    @property
    def allows_multiple(self) -> bool:
        return self.multiplicity.allows_multiple

    @property
    def names(self) -> tuple[str, ...]:
        if self.is_positional:
            return ()
        return (self.name, self.short_name) if self.short_name else (self.name,)

    def display_name(self, prefix: str = "/") -> str:
        """Name as shown in messages: `<name>` or `/name`."""
        if self.is_positional:
            return f"<{self.name}>"
        return f"{prefix}{self.name}"

    def get_syntax_text(self, prefix: str = "/") -> str:
        """Get the usage syntax for the argument, e.g. `[/count=<int>]`."""
        if self.is_positional:
            text = f"<{self.name}>"
        elif self.value_type.accepts_missing_value:
            text = f"{prefix}{self.name}{self.value_type.syntax_summary}"
        else:
            text = f"{prefix}{self.name}={self.value_type.syntax_summary}"

        if self.remainder:
            return f"[{text} ...]"
        if self.multiplicity is Multiplicity.AT_MOST_ONCE:
            return f"[{text}]"
        if self.multiplicity is Multiplicity.ZERO_OR_MORE:
            return f"[{text} ...]"
        if self.multiplicity is Multiplicity.ONE_OR_MORE:
            return f"{text} [{text} ...]"
        return text

    def get_completions(self, context: CompletionContext, partial: str) -> list[str]:
        """Suggest values through the custom completer or the converter."""
        if self.completer is None:
            return self.value_type.get_completions(context, partial)
        completer = self.completer() if isinstance(self.completer, type) else self.completer
        if hasattr(completer, "get_completions"):
            return list(completer.get_completions(context, partial))
        return list(completer(context, partial))
