# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Declaration markers for argument sets.

An argument set is any class (a dataclass or a plain class) whose annotated
attributes carry a `Positional` or `Named` marker in `Annotated` metadata:

    @arguments(description="Copies files.", examples=[("copy a b", "Copy a to b")])
    @dataclass
    class CopyArgs:
        source: Annotated[Path, Positional(help="File to copy")]
        target: Annotated[Path, Positional(help="Destination")]
        force: Annotated[bool, Named(short_name="f", help="Overwrite")] = False

Attributes without a marker are ignored. Markers only describe *how* an
attribute is matched; the value type comes from the annotation itself.
"""
from __future__ import annotations

from dataclasses import MISSING, dataclass, field
from typing import Annotated, Any, Callable, Iterable

from clasp.parser.argument_flags import Multiplicity
from clasp.types.base import ArgumentType

ARGUMENT_SET_ATTRIBUTE = "__argument_set__"


@dataclass(frozen=True)
class Positional:
    """Marks an attribute as a positional argument.

    Args:
        multiplicity: Required/optional/repeatable. Defaults to required when the
            attribute has no default, optional otherwise, and zero-or-more for
            collections.
        position: Explicit slot index. Defaults to declaration order.
        name: Display name in usage text. Defaults to the attribute name.
        help: Description shown in usage text.
        default: Value applied when the argument is absent.
        completer: Callable `(CompletionContext, partial) -> Iterable[str]` or an
            object with such a `get_completions` method.
        converter: Explicit `ArgumentType` for this argument only.
        remainder: Consume every remaining token verbatim.
    """

    multiplicity: Multiplicity | str | None = None
    position: int | None = None
    name: str | None = None
    help: str = ""
    default: Any = field(default_factory=lambda: MISSING)
    completer: Any = None
    converter: ArgumentType | None = None
    remainder: bool = False


@dataclass(frozen=True)
class Named:
    """Marks an attribute as a named argument (`/name=value`).

    Args:
        multiplicity: See `Positional`.
        long_name: Name used on the command line. Defaults to the attribute name.
        short_name: Optional alternative name, usually one character.
        help: Description shown in usage text.
        default: Value applied when the argument is absent.
        completer: See `Positional`.
        converter: Explicit `ArgumentType` for this argument only.
        hidden: Leave the argument out of usage text and completions.
    """

    multiplicity: Multiplicity | str | None = None
    long_name: str | None = None
    short_name: str | None = None
    help: str = ""
    default: Any = field(default_factory=lambda: MISSING)
    completer: Any = None
    converter: ArgumentType | None = None
    hidden: bool = False


@dataclass(frozen=True)
class ArgumentSetInfo:
    """Set-level metadata shown in usage text."""

    description: str = ""
    remarks: str = ""
    examples: tuple[tuple[str, str], ...] = ()


def arguments(
    description: str = "",
    remarks: str = "",
    examples: Iterable[tuple[str, str]] | None = None,
) -> Callable[[type], type]:
    """Class decorator attaching description, remarks and examples to an argument set."""

    def decorator(cls: type) -> type:
        setattr(
            cls,
            ARGUMENT_SET_ATTRIBUTE,
            ArgumentSetInfo(description, remarks, tuple(examples or ())),
        )
        return cls

    return decorator


def get_argument_set_info(cls: type) -> ArgumentSetInfo:
    info = getattr(cls, ARGUMENT_SET_ATTRIBUTE, None)
    if isinstance(info, ArgumentSetInfo):
        return info
    return ArgumentSetInfo(description=(cls.__doc__ or "").strip() if _is_user_doc(cls) else "")


def _is_user_doc(cls: type) -> bool:
    # dataclasses generate a signature docstring when none is written
    doc = cls.__doc__ or ""
    return bool(doc) and not doc.startswith(f"{cls.__name__}(")


@dataclass(kw_only=True)
class HelpArguments:
    """Base for argument sets that accept `/?` (or `/help`) to request usage."""

    help: Annotated[
        bool, Named(short_name="?", help="Display this help message.", default=False)
    ] = False
