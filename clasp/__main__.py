"""
Clasp Argument Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import asyncio
import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

from clasp.config import read_config
from clasp.parser import HelpArguments, Named, arguments, parse_with_usage
from clasp.repl import Loop, LoopOptions, help_verb, exit_verb
from clasp.utils import setup_logging


class LogMode(Enum):
    CLI = "cli"
    JSON = "json"


@arguments(
    description="Runs an interactive loop over the verbs declared in a config file.",
    examples=[
        ("python -m clasp", "Start a loop with only the built-in verbs."),
        ("python -m clasp /config=verbs.yaml /verbose", "Load verbs and log debug output."),
    ],
)
@dataclass(kw_only=True)
class MainArguments(HelpArguments):
    config: Annotated[
        Path | None,
        Named(short_name="c", help="YAML or TOML file declaring the loop's verbs."),
    ] = None
    verbose: Annotated[
        bool, Named(short_name="v", help="Log debug output to the console.")
    ] = False
    log_mode: Annotated[
        LogMode | None,
        Named(long_name="logmode", help="Console log format."),
    ] = None


def find_clasp_config() -> Path | None:
    candidates = [
        Path.cwd() / "clasp.yaml",
        Path.cwd() / "clasp.toml",
        Path.cwd() / ".clasp.yaml",
        Path.cwd() / ".clasp.toml",
        Path(os.environ.get("CLASP_CONFIG", "clasp.yaml")),
        Path.home() / ".config" / "clasp" / "clasp.yaml",
        Path.home() / ".config" / "clasp" / "clasp.toml",
    ]
    return next((p for p in candidates if p.is_file()), None)


def bootstrap(config_path: Path | None) -> Path | None:
    """Locate the config file and make its directory importable for verb targets."""
    config_path = config_path or find_clasp_config()
    if config_path and str(config_path.parent.resolve()) not in sys.path:
        sys.path.insert(0, str(config_path.parent.resolve()))
    return config_path


def build_loop(config_path: Path | None) -> Loop:
    if config_path is None:
        return Loop([help_verb(), exit_verb()])
    config = read_config(config_path)
    return Loop(config.to_descriptors(), config.to_options())


def main(argv: list[str] | None = None) -> Any:
    args = MainArguments()
    if not parse_with_usage(
        sys.argv[1:] if argv is None else argv, args, command_name="clasp"
    ):
        return 0 if args.help else 1

    setup_logging(
        args.log_mode.value if args.log_mode else None,
        console_log_level=logging.DEBUG if args.verbose else logging.WARNING,
    )
    loop = build_loop(bootstrap(args.config))
    return asyncio.run(loop.run())


if __name__ == "__main__":
    sys.exit(main())
