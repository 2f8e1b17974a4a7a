"""
Clasp Argument Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .completer import LoopCompleter
from .loop import Loop
from .loop_options import LoopOptions
from .verbs import (
    ExitVerb,
    HelpVerb,
    VerbDescriptor,
    exit_verb,
    help_verb,
    resolve_verbs,
    verb,
)

__all__ = [
    "ExitVerb",
    "HelpVerb",
    "Loop",
    "LoopCompleter",
    "LoopOptions",
    "VerbDescriptor",
    "exit_verb",
    "help_verb",
    "resolve_verbs",
    "verb",
]
