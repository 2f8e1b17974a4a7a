# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The interactive command loop.

`Loop` reads a line, splits it into tokens, looks up the verb named by the first
token (case-insensitively), parses the remaining tokens into a verb instance and
runs `instance.execute(loop, context)`. Verbs end the session by setting
`loop.exit` (the built-in `exit` verb does exactly that).

Errors never end the session: unknown verbs, tokenize errors and argument errors
are printed, and exceptions raised by a verb are logged and printed before the
next prompt. Ctrl-C and Ctrl-D end the session.

Example:
    loop = Loop(resolve_verbs(my_verbs), LoopOptions(prompt="app> "))
    asyncio.run(loop.run())
"""
from __future__ import annotations

import difflib
from functools import cached_property
from typing import Any, Iterable

from prompt_toolkit import PromptSession
from prompt_toolkit.patch_stdout import patch_stdout
from prompt_toolkit.shortcuts import CompleteStyle
from rich.console import Console
from rich.text import Text

from clasp.console import console as default_console
from clasp.exceptions import TokenizeError
from clasp.logger import logger
from clasp.parser.api import get_completions, parse, parse_new
from clasp.parser.options import ParserOptions
from clasp.parser.tokenizer import tokenize
from clasp.repl.completer import LoopCompleter
from clasp.repl.loop_options import LoopOptions
from clasp.repl.verbs import VerbDescriptor
from clasp.signals import CancelSignal, QuitSignal
from clasp.themes import OneColors
from clasp.utils import CaseInsensitiveDict, ensure_async


class Loop:
    """
    Interactive read-parse-execute loop over a set of verbs.

    Args:
        verbs (Iterable[VerbDescriptor]): Verbs available at the prompt.
        options (LoopOptions | None): Comment character, instance factory, prompt.
        context (Any): Host object passed to every verb and converter.
        console (Console | None): Console for output. Defaults to the global console.
        prompt_session (PromptSession | None): Session to read lines from.
    """

    def __init__(
        self,
        verbs: Iterable[VerbDescriptor],
        options: LoopOptions | None = None,
        context: Any = None,
        console: Console | None = None,
        prompt_session: PromptSession | None = None,
    ):
        self.options = options or LoopOptions()
        self.context = context
        self.console = console or default_console
        self.exit = False
        self._prompt_session = prompt_session
        self._verb_map = CaseInsensitiveDict()
        for descriptor in verbs:
            self.add_verb(descriptor)

    def add_verb(self, descriptor: VerbDescriptor) -> None:
        if descriptor.name in self._verb_map:
            logger.warning("Verb '%s' replaces an existing verb.", descriptor.name)
        self._verb_map[descriptor.name] = descriptor

    @property
    def verbs(self) -> list[VerbDescriptor]:
        return list(self._verb_map.values())

    def get_verb(self, name: str) -> VerbDescriptor | None:
        return self._verb_map.get(name)

    @cached_property
    def prompt_session(self) -> PromptSession:
        """Returns the prompt session for the loop."""
        if self._prompt_session is None:
            self._prompt_session = PromptSession(
                message=self.options.prompt,
                multiline=False,
                completer=LoopCompleter(self),
                complete_style=CompleteStyle.COLUMN,
                interrupt_exception=QuitSignal,
                eof_exception=QuitSignal,
            )
        return self._prompt_session

    def report_error(self, message: Any) -> None:
        if isinstance(message, str):
            self.console.print(Text(f"❌ {message}", style=OneColors.DARK_RED))
        else:
            self.console.print(message)

    def resolve(self, implementing_type: type) -> Any:
        """Create a verb instance through `options.resolve`, or None without a factory."""
        if self.options.resolve is not None:
            return self.options.resolve(implementing_type)
        return None

    def release(self, instance: Any) -> None:
        if self.options.release is not None:
            self.options.release(instance)

    def generate_completions(self, tokens: list[str], index: int) -> list[str]:
        """Return completions for `tokens[index]` (index may be one past the end)."""
        partial = tokens[index] if index < len(tokens) else ""
        if index == 0:
            lowered = partial.lower()
            return sorted(
                (descriptor.name for descriptor in self.verbs if descriptor.key.startswith(lowered)),
                key=str.lower,
            )

        descriptor = self.get_verb(tokens[0])
        if descriptor is None or descriptor.implementing_type is None:
            return []

        implementing_type = descriptor.implementing_type
        if descriptor.instance is not None:
            resolve = lambda: descriptor.instance  # noqa: E731
            release = None
        elif self.options.resolve is not None:
            resolve = lambda: self.resolve(implementing_type)  # noqa: E731
            release = self.release
        else:
            resolve = None
            release = None
        return get_completions(
            implementing_type,
            tokens[1:],
            index - 1,
            ParserOptions(context=self.context),
            resolve,
            release,
        )

    def preprocess(self, line: str) -> str:
        """Strip an end-of-line comment, if comments are enabled."""
        comment = self.options.end_of_line_comment_character
        if comment is not None and comment in line:
            line = line[: line.index(comment)]
        return line

    def tokenize_input(self, line: str) -> list[str] | None:
        """Tokenize a raw input line, reporting (and returning None on) errors."""
        try:
            return [token.text for token in tokenize(self.preprocess(line))]
        except TokenizeError as error:
            self.report_error(f"Invalid input: {error}")
            return None

    async def read_input(self) -> list[str] | None:
        """Prompt for a line and return its tokens, or None if it could not be tokenized."""
        with patch_stdout(raw=True):
            line = await self.prompt_session.prompt_async()
        return self.tokenize_input(line)

    async def execute_once(self, args: list[str] | None) -> bool:
        """Run one verb invocation. Returns False once the loop should stop."""
        if not args:
            return not self.exit

        descriptor = self.get_verb(args[0])
        if descriptor is None:
            close = difflib.get_close_matches(
                args[0].lower(), [item.key for item in self.verbs], n=3, cutoff=0.6
            )
            message = f"Unrecognized verb: '{args[0]}'."
            if close:
                message = f"{message} Did you mean: {', '.join(close)}?"
            self.report_error(message)
            logger.info("Unrecognized verb '%s'.", args[0])
            return not self.exit

        if descriptor.implementing_type is None:
            self.report_error(f"Verb '{descriptor.name}' has no implementation.")
            return not self.exit

        await self._execute(descriptor, args[1:])
        return not self.exit

    async def _execute(self, descriptor: VerbDescriptor, args: list[str]) -> None:
        shared = descriptor.instance is not None
        instance = None
        options = ParserOptions(context=self.context, reporter=self.report_error)
        try:
            if shared or self.options.resolve is not None:
                instance = descriptor.instance if shared else self.resolve(descriptor.implementing_type)
                success = parse(args, instance, options)
            else:
                result = parse_new(descriptor.implementing_type, args, options)
                instance = result.value
                success = result.success
            if not success:
                self.report_error("Invalid usage.")
                return
            logger.debug("Executing verb '%s'.", descriptor.name)
            await ensure_async(instance.execute)(self, self.context)
        except Exception as error:
            logger.error(
                "Error executing verb '%s': %s", descriptor.name, error, exc_info=True
            )
            self.report_error(f"An error occurred while executing '{descriptor.name}': {error}")
        finally:
            if instance is not None and not shared:
                self.release(instance)

    async def run(self) -> None:
        """Prompt and execute verbs until a verb sets `exit` or input ends."""
        logger.info("Starting loop with %d verb(s).", len(self._verb_map))
        self.exit = False
        try:
            while True:
                try:
                    args = await self.read_input()
                    if not await self.execute_once(args):
                        break
                except (EOFError, KeyboardInterrupt):
                    logger.info("EOF or KeyboardInterrupt. Exiting loop.")
                    break
                except QuitSignal:
                    logger.info("[QuitSignal]. <- Exiting loop.")
                    break
                except CancelSignal:
                    logger.info("[CancelSignal]. <- Returning to the prompt.")
        finally:
            logger.info("Exiting loop.")
