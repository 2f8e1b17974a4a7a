# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `LoopCompleter`, the prompt_toolkit completer used by `Loop`.

The text before the cursor is tokenized leniently (an open quote is allowed),
the index of the token under the cursor is worked out from the token offsets,
and `Loop.generate_completions` supplies the candidates:

- at the first token, verb names;
- after it, the verb's argument names and values (enum members, booleans,
  filesystem paths, custom completers, ...).

Candidates sharing a longer common prefix than what was typed get that prefix
inserted, and candidates containing whitespace are quoted.
"""
from __future__ import annotations

import os
from typing import TYPE_CHECKING, Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from clasp.exceptions import TokenizeError
from clasp.logger import logger
from clasp.parser.tokenizer import TokenizerOptions, quote_token, tokenize

if TYPE_CHECKING:
    from clasp.repl.loop import Loop


class LoopCompleter(Completer):
    """
    Prompt Toolkit completer for loop input.

    Args:
        loop (Loop): The loop providing verbs and argument completions.
    """

    def __init__(self, loop: Loop):
        self.loop = loop

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        """Yield candidates for the token under the cursor.

        Nothing is offered while the cursor sits inside a comment or after an
        input that cannot be tokenized.
        """
        text = self.loop.preprocess(document.text_before_cursor)
        if len(text) != len(document.text_before_cursor):
            return
        try:
            tokens = tokenize(text, TokenizerOptions.ALLOW_PARTIAL_INPUT)
        except TokenizeError:
            return

        cursor_at_end_of_token = not tokens or tokens[-1].end < len(text)
        if cursor_at_end_of_token:
            index = len(tokens)
            stub = ""
            replace_length = 0
        else:
            index = len(tokens) - 1
            stub = tokens[-1].text
            replace_length = len(text) - tokens[-1].start

        try:
            suggestions = self.loop.generate_completions(
                [token.text for token in tokens], index
            )
        except Exception as error:
            logger.debug("Completion failed for '%s': %s", text, error)
            return
        yield from self._yield_lcp_completions(suggestions, stub, replace_length)

    def _ensure_quote(self, text: str) -> str:
        """Quote a candidate containing whitespace so it stays one token."""
        return quote_token(text) if text else text

    def _yield_lcp_completions(self, suggestions, stub: str, replace_length: int):
        """
        Filter `suggestions` by `stub` (case-insensitive) and yield them.

        A lone match replaces the stub outright. When several matches agree on
        more than the stub, that shared prefix is offered first so a single
        Tab extends the input; the individual matches follow for the menu.

        Args:
            stub (str): The token text typed so far.
            replace_length (int): Characters before the cursor to replace,
                including any quote characters typed.
        """
        lowered = stub.lower()
        matches = [s for s in suggestions if s.lower().startswith(lowered)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)

        if len(matches) == 1:
            yield Completion(
                self._ensure_quote(matches[0]),
                start_position=-replace_length,
                display=matches[0],
            )
        elif len(lcp) > len(stub) and not any(char.isspace() for char in lcp):
            yield Completion(lcp, start_position=-replace_length, display=lcp)
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-replace_length, display=match
                )
        else:
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-replace_length, display=match
                )
