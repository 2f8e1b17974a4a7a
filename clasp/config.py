# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Configuration loader for loop verbs.

Verbs can be declared in a YAML or TOML file instead of code. Each entry names
the verb and points at the class implementing it by dotted import path:

    # verbs.yaml
    prompt: "app> "
    comment_character: "#"
    verbs:
      - name: greet
        help: Say hello.
        target: my_app.verbs.Greet

The target class is imported, its arguments are declared on the class as usual,
and the built-in `help` and `exit` verbs are added unless `builtins: false`.
"""
from __future__ import annotations

import importlib
import sys
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, field_validator

from clasp.console import console
from clasp.repl.loop_options import LoopOptions
from clasp.repl.verbs import VerbDescriptor, exit_verb, help_verb
from clasp.themes import OneColors


def import_target(dotted_path: str) -> Any:
    """Dynamically imports a class or object from a dotted path."""
    if not isinstance(dotted_path, str) or "." not in dotted_path:
        console.print(f"[{OneColors.DARK_RED}]❌ Invalid verb target path:[/] {dotted_path!r}")
        sys.exit(1)
    module_path, _, attribute = dotted_path.rpartition(".")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        console.print(
            f"[{OneColors.DARK_RED}]❌ Could not import '{dotted_path}': {error}[/]\n"
            f"[{OneColors.COMMENT_GREY}]Ensure the module is installed and discoverable "
            "via PYTHONPATH."
        )
        sys.exit(1)
    try:
        target = getattr(module, attribute)
    except AttributeError as error:
        console.print(
            f"[{OneColors.DARK_RED}]❌ Module '{module_path}' has no attribute "
            f"'{attribute}': {error}[/]"
        )
        sys.exit(1)
    if not isinstance(target, type) or not callable(getattr(target, "execute", None)):
        console.print(
            f"[{OneColors.DARK_RED}]❌ '{dotted_path}' is not a verb class "
            "with an execute(loop, context) method.[/]"
        )
        sys.exit(1)
    return target


class RawVerb(BaseModel):
    """Raw verb entry loaded from a config file."""

    name: str
    target: str
    help: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value or any(char.isspace() for char in value):
            raise ValueError("Verb names must be non-empty and contain no whitespace.")
        return value


class LoopConfig(BaseModel):
    """Loop configuration loaded from a config file."""

    prompt: str = "> "
    comment_character: str | None = None
    builtins: bool = True
    verbs: list[RawVerb] = Field(default_factory=list)

    def to_options(self) -> LoopOptions:
        return LoopOptions(
            prompt=self.prompt, end_of_line_comment_character=self.comment_character
        )

    def to_descriptors(self) -> list[VerbDescriptor]:
        descriptors = convert_verbs(self.verbs)
        if self.builtins:
            descriptors.extend([help_verb(), exit_verb()])
        return descriptors


def convert_verbs(raw_verbs: list[RawVerb] | list[dict[str, Any]]) -> list[VerbDescriptor]:
    descriptors = []
    for entry in raw_verbs:
        raw_verb = entry if isinstance(entry, RawVerb) else RawVerb(**entry)
        descriptors.append(
            VerbDescriptor(raw_verb.name, import_target(raw_verb.target), raw_verb.help)
        )
    return descriptors


def read_config(file_path: Path | str) -> LoopConfig:
    """
    Read a loop configuration from a YAML or TOML file.

    Args:
        file_path (str | Path): Path to the config file (YAML or TOML).

    Returns:
        LoopConfig: The validated configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file format is unsupported or its content is not a mapping.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict):
        raise ValueError(
            "Configuration file must contain a dictionary with a list of verbs.\n"
            "Example:\n"
            "verbs:\n"
            "  - name: 'greet'\n"
            "    help: 'Say hello'\n"
            "    target: 'my_module.Greet'"
        )
    return LoopConfig(**raw_config)


def loader(file_path: Path | str) -> list[VerbDescriptor]:
    """Load verb descriptors (plus built-ins) from a YAML or TOML config file."""
    return read_config(file_path).to_descriptors()
