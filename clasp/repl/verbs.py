# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Verbs: the commands an interactive `Loop` understands.

A verb is a class whose annotated attributes declare its arguments (exactly like
any argument set) and which implements `execute(loop, context)`, sync or async:

    @verb("greet", help_text="Say hello.")
    @dataclass
    class Greet:
        name: Annotated[str, Positional(help="Who to greet")]
        loud: Annotated[bool, Named(short_name="l")] = False

        def execute(self, loop, context):
            message = f"Hello, {self.name}!"
            loop.console.print(message.upper() if self.loud else message)

`resolve_verbs(module, ...)` collects decorated classes from modules and adds
the built-in `help` and `exit` verbs.
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass
from types import ModuleType
from typing import TYPE_CHECKING, Annotated, Any, Callable

from rich import box
from rich.table import Table

from clasp.exceptions import VerbError
from clasp.parser.api import get_usage
from clasp.parser.metadata import Positional
from clasp.parser.options import UsageOptions
from clasp.themes import OneColors

if TYPE_CHECKING:
    from clasp.repl.loop import Loop

VERB_ATTRIBUTE = "__verb__"


@dataclass(frozen=True)
class VerbInfo:
    """Name and help text attached to a class by `@verb`."""

    name: str
    help_text: str = ""


@dataclass
class VerbDescriptor:
    """
    Describes one verb known to a loop.

    Attributes:
        name (str): Name typed at the prompt; matched case-insensitively.
        implementing_type (type | None): Argument set class implementing `execute`.
        help_text (str): One-line description shown by `help`.
        instance (Any): Shared instance to reuse instead of creating one per call.
    """

    name: str
    implementing_type: type | None = None
    help_text: str = ""
    instance: Any = None

    def __post_init__(self):
        if not self.name or any(char.isspace() for char in self.name):
            raise VerbError(f"Invalid verb name: {self.name!r}")

    @property
    def key(self) -> str:
        return self.name.lower()

    @classmethod
    def from_type(cls, implementing_type: type) -> VerbDescriptor:
        info = getattr(implementing_type, VERB_ATTRIBUTE, None)
        if not isinstance(info, VerbInfo):
            raise VerbError(f"{implementing_type.__name__} is not decorated with @verb")
        return cls(info.name, implementing_type, info.help_text)


def verb(name: str | None = None, help_text: str = "") -> Callable[[type], type]:
    """Class decorator declaring a verb."""

    def decorator(cls: type) -> type:
        if not callable(getattr(cls, "execute", None)):
            raise VerbError(f"Verb class {cls.__name__} must define execute(loop, context)")
        setattr(cls, VERB_ATTRIBUTE, VerbInfo(name or cls.__name__.lower(), help_text))
        return cls

    return decorator


@dataclass
class HelpVerb:
    """Displays the verb list, or the usage of one verb."""

    verb: Annotated[
        str | None,
        Positional(help="Verb to get detailed help information for.", default=None),
    ] = None

    def execute(self, loop: Loop, context: Any) -> None:
        if self.verb:
            self._show_verb_usage(loop, self.verb)
            return

        table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2, 0, 0))
        table.add_column("Verb", style=OneColors.CYAN_b, no_wrap=True)
        table.add_column("Description")
        for descriptor in sorted(loop.verbs, key=lambda item: item.key):
            table.add_row(descriptor.name, descriptor.help_text)
        loop.console.print("[bold]Verbs:[/bold]")
        loop.console.print(table)

    def _show_verb_usage(self, loop: Loop, name: str) -> None:
        descriptor = loop.get_verb(name)
        if descriptor is None:
            loop.console.print(f"No verb found for '{name}'.", style="bold", markup=False)
            return
        if descriptor.implementing_type is None:
            loop.console.print(
                f"No detailed help available for '{descriptor.name}'.", style="bold"
            )
            return
        loop.console.print(
            get_usage(
                descriptor.implementing_type,
                command_name=descriptor.name,
                options=UsageOptions.DEFAULT | UsageOptions.USE_COLOR,
            )
        )


class ExitVerb:
    """Ends the loop."""

    def execute(self, loop: Loop, context: Any) -> None:
        loop.exit = True


def help_verb() -> VerbDescriptor:
    return VerbDescriptor("help", HelpVerb, "Displays verb help.", instance=HelpVerb())


def exit_verb() -> VerbDescriptor:
    return VerbDescriptor("exit", ExitVerb, "Exits the loop.", instance=ExitVerb())


def resolve_verbs(*modules: ModuleType, include_builtins: bool = True) -> list[VerbDescriptor]:
    """Collect `@verb` classes defined in `modules`, plus the built-in verbs."""
    descriptors = []
    for module in modules:
        for _, member in inspect.getmembers(module, inspect.isclass):
            if member.__module__ == module.__name__ and isinstance(
                getattr(member, VERB_ATTRIBUTE, None), VerbInfo
            ):
                descriptors.append(VerbDescriptor.from_type(member))
    if include_builtins:
        descriptors.extend([help_verb(), exit_verb()])
    return descriptors
