import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Annotated

from clasp import (
    ArgumentValue,
    HelpArguments,
    KeyValuePair,
    Named,
    Positional,
    UInt16,
    argument_values,
    arguments,
    format_line,
    parse_with_usage,
)
from clasp.console import console


@argument_values(
    FAST=ArgumentValue(help="Skip verification."),
    LEGACY=ArgumentValue(disallowed=True),
)
class Mode(Enum):
    SAFE = 0
    FAST = 1
    LEGACY = 2


@arguments(
    description="Copies a file, optionally tagging the copy.",
    examples=[
        ("basic_parse.py a.txt b.txt /mode=fast", "Copy without verification."),
        ("basic_parse.py a.txt b.txt /tag=owner=me /tag=env=dev", "Copy and tag."),
    ],
)
@dataclass(kw_only=True)
class CopyArgs(HelpArguments):
    source: Annotated[Path, Positional(help="File to copy.")]
    target: Annotated[Path, Positional(help="Destination.")]
    force: Annotated[bool, Named(short_name="f", help="Overwrite existing files.")] = False
    retries: Annotated[UInt16, Named(help="Attempts before giving up.")] = 3
    mode: Annotated[Mode, Named(help="Copy mode.")] = Mode.SAFE
    tag: Annotated[
        dict[str, str], Named(short_name="t", help="Tags as key=value.")
    ] = field(default_factory=dict)


def main() -> int:
    args = CopyArgs(source=Path(), target=Path())
    if not parse_with_usage(sys.argv[1:], args, command_name="basic_parse.py"):
        return 1
    console.print(args)
    console.print(f"Equivalent command line: {format_line(args)}")
    console.print(KeyValuePair("retries", args.retries))
    return 0


if __name__ == "__main__":
    sys.exit(main())
