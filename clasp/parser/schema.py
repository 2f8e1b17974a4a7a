# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Builds and holds the immutable `Schema` describing an argument set.

Two ways to declare a schema:

- Reflection: `build_schema(MyArgs)` reads `Annotated[T, Positional(...)]` /
  `Annotated[T, Named(...)]` attributes (inherited ones first) and resolves a
  converter for each declared type. Results are cached per (type, registry).
- Explicit: `SchemaBuilder().add_positional(...)` / `.add_named(...)` followed by
  `.build()`, for argument sets that are not tied to a class.

Both paths go through the same validation, raising `SchemaError` when:
- a name (long or short, compared case-insensitively) is used twice;
- a repeatable multiplicity is declared on a non-collection type;
- positional slots have gaps, repeat an index, or put a required slot after an
  optional one;
- more than one positional claims all remaining tokens, or one that does is
  not the last positional;
and `UnsupportedTypeError` when a declared type has no converter.
"""
from __future__ import annotations

import copy
import dataclasses
import functools
from dataclasses import MISSING
from typing import Any, Annotated, Iterable, get_args, get_origin, get_type_hints

from clasp.exceptions import SchemaError
from clasp.logger import logger
from clasp.parser.argument import ArgumentDefinition
from clasp.parser.argument_flags import ArgumentKind, Multiplicity
from clasp.parser.metadata import Named, Positional, get_argument_set_info
from clasp.types.base import ArgumentType
from clasp.types.registry import ConverterRegistry, default_registry
from clasp.utils import CaseInsensitiveDict

_RESERVED_NAME_CHARS = frozenset("=:\"")


@dataclasses.dataclass(frozen=True)
class Schema:
    """An ordered, immutable set of argument definitions plus set-level metadata."""

    arguments: tuple[ArgumentDefinition, ...]
    description: str = ""
    remarks: str = ""
    examples: tuple[tuple[str, str], ...] = ()
    _names: CaseInsensitiveDict = dataclasses.field(
        default_factory=CaseInsensitiveDict, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        names = CaseInsensitiveDict()
        for argument in self.named:
            for name in argument.names:
                names[name] = argument
        object.__setattr__(self, "_names", names)

    @functools.cached_property
    def positional(self) -> tuple[ArgumentDefinition, ...]:
        return tuple(
            sorted(
                (argument for argument in self.arguments if argument.is_positional),
                key=lambda argument: argument.position or 0,
            )
        )

    @functools.cached_property
    def named(self) -> tuple[ArgumentDefinition, ...]:
        return tuple(argument for argument in self.arguments if not argument.is_positional)

    def lookup(self, name: str) -> ArgumentDefinition | None:
        """Find a named argument by long or short name, ignoring case."""
        return self._names.get(name)

    def get_argument(self, dest: str) -> ArgumentDefinition | None:
        return next((argument for argument in self.arguments if argument.dest == dest), None)

    def suggest(self, name: str) -> list[str]:
        """Return visible long names starting with `name`, ignoring case."""
        lowered = name.lower()
        return [
            argument.name
            for argument in self.named
            if not argument.hidden and argument.name.lower().startswith(lowered)
        ]


def _is_explicit(default: Any, explicit_default: bool | None) -> bool:
    if explicit_default is None:
        return default is not MISSING
    return explicit_default and default is not MISSING


class SchemaBuilder:
    """Collects argument declarations and validates them into a `Schema`."""

    def __init__(
        self,
        registry: ConverterRegistry | None = None,
        description: str = "",
        remarks: str = "",
        examples: Iterable[tuple[str, str]] | None = None,
    ):
        self.registry = registry or default_registry
        self.description = description
        self.remarks = remarks
        self.examples = tuple(examples or ())
        self._arguments: list[ArgumentDefinition] = []
        self._names = CaseInsensitiveDict()
        self._dests: set[str] = set()

    def add_positional(
        self,
        dest: str,
        type_hint: Any = str,
        *,
        multiplicity: Multiplicity | str | None = None,
        position: int | None = None,
        name: str | None = None,
        help: str = "",
        default: Any = MISSING,
        completer: Any = None,
        converter: ArgumentType | None = None,
        remainder: bool = False,
        explicit_default: bool | None = None,
    ) -> ArgumentDefinition:
        """Declare a positional argument.

        `explicit_default` marks whether `default` is re-applied on every parse
        that leaves the argument unset. It defaults to whether `default` was given.
        """
        value_type = self._resolve_type(dest, type_hint, converter)
        if remainder and not value_type.is_collection:
            raise SchemaError(
                f"Remainder argument '{dest}' must be a collection, e.g. list[str]"
            )
        resolved_multiplicity = self._determine_multiplicity(
            dest, multiplicity, value_type, default
        )
        argument = ArgumentDefinition(
            dest=dest,
            name=name or dest,
            kind=ArgumentKind.POSITIONAL,
            multiplicity=resolved_multiplicity,
            value_type=value_type,
            type_hint=type_hint,
            default=self._resolve_default(default, value_type),
            has_explicit_default=_is_explicit(default, explicit_default),
            help=help,
            completer=completer,
            position=position,
            remainder=remainder,
        )
        self._register_argument(argument)
        return argument

    def add_named(
        self,
        dest: str,
        type_hint: Any = str,
        *,
        multiplicity: Multiplicity | str | None = None,
        long_name: str | None = None,
        short_name: str | None = None,
        help: str = "",
        default: Any = MISSING,
        completer: Any = None,
        converter: ArgumentType | None = None,
        hidden: bool = False,
        explicit_default: bool | None = None,
    ) -> ArgumentDefinition:
        """Declare a named argument."""
        name = long_name or dest
        self._validate_name(name)
        if short_name is not None:
            self._validate_name(short_name)
        value_type = self._resolve_type(dest, type_hint, converter)
        argument = ArgumentDefinition(
            dest=dest,
            name=name,
            kind=ArgumentKind.NAMED,
            multiplicity=self._determine_multiplicity(dest, multiplicity, value_type, default),
            value_type=value_type,
            type_hint=type_hint,
            default=self._resolve_default(default, value_type),
            has_explicit_default=_is_explicit(default, explicit_default),
            short_name=short_name,
            help=help,
            completer=completer,
            hidden=hidden,
        )
        self._register_argument(argument)
        return argument

    def _validate_name(self, name: str) -> None:
        if not isinstance(name, str) or not name:
            raise SchemaError("Argument names must be non-empty strings")
        if any(char.isspace() or char in _RESERVED_NAME_CHARS for char in name):
            raise SchemaError(
                f"Argument name '{name}' must not contain whitespace, quotes, '=' or ':'"
            )

    def _resolve_type(
        self, dest: str, type_hint: Any, converter: ArgumentType | None
    ) -> ArgumentType:
        if converter is not None:
            if not isinstance(converter, ArgumentType):
                raise SchemaError(f"Converter for '{dest}' must be an ArgumentType")
            return converter
        return self.registry.resolve(type_hint)

    def _determine_multiplicity(
        self,
        dest: str,
        multiplicity: Multiplicity | str | None,
        value_type: ArgumentType,
        default: Any,
    ) -> Multiplicity:
        if multiplicity is None:
            if value_type.is_collection:
                return Multiplicity.ZERO_OR_MORE
            return Multiplicity.AT_MOST_ONCE if default is not MISSING else Multiplicity.REQUIRED_ONCE
        try:
            resolved = Multiplicity(multiplicity)
        except ValueError as error:
            raise SchemaError(f"Argument '{dest}': {error}") from error
        if resolved.allows_multiple and not value_type.is_collection:
            raise SchemaError(
                f"Argument '{dest}' is declared {resolved} but its type "
                f"{value_type.display_name} is not a collection"
            )
        return resolved

    def _resolve_default(self, default: Any, value_type: ArgumentType) -> Any:
        if default is MISSING:
            return value_type.default_value
        return default

    def _register_argument(self, argument: ArgumentDefinition) -> None:
        if argument.dest in self._dests:
            raise SchemaError(f"Argument '{argument.dest}' is declared more than once")
        for name in argument.names:
            if name in self._names:
                existing = self._names[name]
                raise SchemaError(
                    f"Name '{name}' is already used by argument '{existing.dest}'"
                )
        for name in argument.names:
            self._names[name] = argument
        self._dests.add(argument.dest)
        self._arguments.append(argument)

    def _order_positionals(self) -> list[ArgumentDefinition]:
        positionals = [argument for argument in self._arguments if argument.is_positional]
        explicit = [argument.position for argument in positionals if argument.position is not None]
        if explicit:
            if len(explicit) != len(positionals):
                raise SchemaError(
                    "Either every positional argument declares a position or none does"
                )
            if sorted(explicit) != list(range(len(positionals))):
                raise SchemaError(
                    f"Positional positions must be 0..{len(positionals) - 1} without gaps, "
                    f"got {sorted(explicit)}"
                )
            return sorted(positionals, key=lambda argument: argument.position)
        return positionals

    def _validate_positionals(self, ordered: list[ArgumentDefinition]) -> None:
        seen_optional: ArgumentDefinition | None = None
        for index, argument in enumerate(ordered):
            is_last = index == len(ordered) - 1
            if argument.allows_multiple and not is_last:
                raise SchemaError(
                    f"Positional argument '{argument.name}' takes all remaining tokens "
                    "and must be the last positional argument"
                )
            if argument.is_required and seen_optional is not None:
                raise SchemaError(
                    f"Required positional argument '{argument.name}' cannot follow "
                    f"optional positional argument '{seen_optional.name}'"
                )
            if not argument.is_required:
                seen_optional = argument

    def build(self) -> Schema:
        """Validate the declarations and return an immutable `Schema`."""
        ordered = self._order_positionals()
        self._validate_positionals(ordered)
        positions = {argument.dest: index for index, argument in enumerate(ordered)}
        arguments = tuple(
            dataclasses.replace(argument, position=positions[argument.dest])
            if argument.is_positional
            else argument
            for argument in self._arguments
        )
        return Schema(arguments, self.description, self.remarks, self.examples)


def _class_defaults(target_type: type) -> dict[str, Any]:
    defaults: dict[str, Any] = {}
    if dataclasses.is_dataclass(target_type):
        for field in dataclasses.fields(target_type):
            if field.default is not MISSING:
                defaults[field.name] = field.default
            elif field.default_factory is not MISSING:
                defaults[field.name] = field.default_factory()
    return defaults


def _declared_default(
    target_type: type, dest: str, marker: Positional | Named, defaults: Any, class_defaults
) -> Any:
    if marker.default is not MISSING:
        return copy.deepcopy(marker.default)
    if defaults is not None and hasattr(defaults, dest):
        return copy.deepcopy(getattr(defaults, dest))
    if dest in class_defaults:
        return class_defaults[dest]
    value = getattr(target_type, dest, MISSING)
    if value is MISSING or callable(value) or isinstance(value, (property, classmethod, staticmethod)):
        return MISSING
    return value


def _build_schema(
    target_type: type, registry: ConverterRegistry, defaults: Any = None
) -> Schema:
    info = get_argument_set_info(target_type)
    builder = SchemaBuilder(registry, info.description, info.remarks, info.examples)
    class_defaults = _class_defaults(target_type)

    for dest, hint in get_type_hints(target_type, include_extras=True).items():
        if get_origin(hint) is not Annotated:
            continue
        base, *metadata = get_args(hint)
        marker = next((item for item in metadata if isinstance(item, (Positional, Named))), None)
        if marker is None:
            continue
        remaining = [item for item in metadata if item is not marker]
        type_hint = Annotated[(base, *remaining)] if remaining else base
        default = _declared_default(target_type, dest, marker, defaults, class_defaults)

        if isinstance(marker, Positional):
            builder.add_positional(
                dest,
                type_hint,
                multiplicity=marker.multiplicity,
                position=marker.position,
                name=marker.name,
                help=marker.help,
                default=default,
                completer=marker.completer,
                converter=marker.converter,
                remainder=marker.remainder,
                explicit_default=marker.default is not MISSING,
            )
        else:
            builder.add_named(
                dest,
                type_hint,
                multiplicity=marker.multiplicity,
                long_name=marker.long_name,
                short_name=marker.short_name,
                help=marker.help,
                default=default,
                completer=marker.completer,
                converter=marker.converter,
                hidden=marker.hidden,
                explicit_default=marker.default is not MISSING,
            )

    schema = builder.build()
    logger.debug(
        "Built schema for %s with %d argument(s).", target_type.__name__, len(schema.arguments)
    )
    return schema


@functools.lru_cache(maxsize=256)
def _cached_schema(target_type: type, registry: ConverterRegistry) -> Schema:
    return _build_schema(target_type, registry)


def build_schema(
    target_type: type, registry: ConverterRegistry | None = None, defaults: Any = None
) -> Schema:
    """Build (or fetch from cache) the schema of an argument set class.

    Args:
        target_type: Class whose annotated attributes declare the arguments.
        registry: Converter registry to resolve value types with.
        defaults: Object whose attribute values seed argument defaults. Schemas
            built with `defaults` are not cached.

    Raises:
        SchemaError: If the declaration is invalid.
        UnsupportedTypeError: If a declared type has no converter.
    """
    registry = registry or default_registry
    if defaults is not None:
        return _build_schema(target_type, registry, defaults)
    return _cached_schema(target_type, registry)
