# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Enum converter and per-member annotations.

Members are matched by name, case-insensitively and ignoring surrounding
whitespace. An annotated `long_name` is accepted as an alternative name and is
preferred when formatting. If no name matches, a decimal integer literal is
matched against member values (hex is not accepted here), and for enums whose
values are not integers the string form of each value is tried.

Members can be annotated with `ArgumentValue` through the `argument_values`
class decorator:

    @argument_values(
        LEGACY=ArgumentValue(disallowed=True),
        DEBUG=ArgumentValue(hidden=True, help="Extra diagnostics"),
    )
    class Mode(Enum):
        NORMAL = 0
        LEGACY = 1
        DEBUG = 2

Disallowed members fail to parse but still format. Hidden members parse but are
left out of completions and usage text.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag
from typing import Any, Callable

from clasp.exceptions import SchemaError
from clasp.types.base import ArgumentType, CompletionContext, ParseContext, filter_prefix
from clasp.types.numeric import parse_integer

ARGUMENT_VALUES_ATTRIBUTE = "__argument_values__"


@dataclass(frozen=True)
class ArgumentValue:
    """Command-line annotations for a single enum member."""

    long_name: str | None = None
    help: str = ""
    disallowed: bool = False
    hidden: bool = False


def argument_values(**annotations: ArgumentValue) -> Callable[[type[Enum]], type[Enum]]:
    """Class decorator attaching `ArgumentValue` annotations to enum members."""

    def decorator(enum_type: type[Enum]) -> type[Enum]:
        unknown = [name for name in annotations if name not in enum_type.__members__]
        if unknown:
            raise SchemaError(
                f"{enum_type.__name__} has no member(s) named: {', '.join(unknown)}"
            )
        setattr(enum_type, ARGUMENT_VALUES_ATTRIBUTE, dict(annotations))
        return enum_type

    return decorator


class EnumArgumentType(ArgumentType):
    """Converter for `enum.Enum` subclasses."""

    def __init__(self, type_hint: type[Enum]):
        super().__init__(type_hint)
        self.enum_type = type_hint
        annotations = getattr(type_hint, ARGUMENT_VALUES_ATTRIBUTE, {})
        self.members: list[tuple[Enum, ArgumentValue]] = [
            (member, annotations.get(name, ArgumentValue()))
            for name, member in type_hint.__members__.items()
            if member.name == name
        ]
        self.integer_valued = all(
            isinstance(member.value, int) and not isinstance(member.value, bool)
            for member, _ in self.members
        )

    @property
    def default_value(self) -> Any:
        return self.members[0][0] if self.members else None

    @property
    def syntax_summary(self) -> str:
        return "{" + "|".join(name for name, _ in self.visible_values()) + "}"

    def annotation_for(self, member: Enum) -> ArgumentValue:
        for candidate, annotation in self.members:
            if candidate is member:
                return annotation
        return ArgumentValue()

    def member_name(self, member: Enum) -> str:
        return self.annotation_for(member).long_name or member.name

    def visible_values(self) -> list[tuple[str, str]]:
        """Return (name, help) pairs for members shown in completions and usage."""
        return [
            (annotation.long_name or member.name, annotation.help)
            for member, annotation in self.members
            if not annotation.hidden and not annotation.disallowed
        ]

    def parse(self, context: ParseContext, text: str) -> Enum:
        literal = text.strip()
        if not literal:
            raise ValueError(f"a {self.display_name} value is required")
        member = self._lookup(literal)
        if member is None:
            raise ValueError(
                f"'{text}' is not a valid {self.display_name}; expected one of: "
                + ", ".join(name for name, _ in self.visible_values())
            )
        if self.annotation_for(member).disallowed:
            raise ValueError(f"'{text}' is not an allowed {self.display_name} value")
        return member

    def _lookup(self, literal: str) -> Enum | None:
        lowered = literal.lower()
        for member, annotation in self.members:
            names = [member.name]
            if annotation.long_name:
                names.append(annotation.long_name)
            if any(name.lower() == lowered for name in names):
                return member

        if self.integer_valued:
            try:
                number = parse_integer(literal, signed=True, allow_hex=False)
            except ValueError:
                return None
            try:
                return self.enum_type(number)
            except ValueError:
                return None

        for member, _ in self.members:
            if str(member.value) == literal:
                return member
        return None

    def format(self, value: Any) -> str:
        name = getattr(value, "name", None)
        if issubclass(self.enum_type, Flag) and (name is None or "|" in name):
            return str(value.value)
        if name is None:
            return str(value.value)
        return self.member_name(value)

    def get_completions(self, context: CompletionContext, partial: str) -> list[str]:
        return filter_prefix(sorted(name for name, _ in self.visible_values()), partial)
