# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
'''
Splits a raw input line into argument tokens.

Tokens are separated by whitespace outside of double quotes. A `"` toggles a
quoted region in which whitespace is kept literally; the quote characters
themselves are removed from the token text, so `say "hello world"` yields the
tokens `say` and `hello world`, and `/name="a b"c` yields `/name=a bc`.
Inside a quoted region a doubled quote stands for one literal quote:
`"say ""hi"""` yields `say "hi"`.

An unterminated quote is an error unless `TokenizerOptions.ALLOW_PARTIAL_INPUT`
is given, in which case the open token simply runs to the end of the line. The
lenient mode is used while completing a line that is still being typed.

Each `Token` keeps its start/end offsets in the source line so completers can
work out which token the cursor sits in.
'''
from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Iterable

from clasp.exceptions import TokenizeError

QUOTE = '"'


class TokenizerOptions(IntFlag):
    """Flags controlling `tokenize`."""

    NONE = 0
    ALLOW_PARTIAL_INPUT = 1


@dataclass(frozen=True)
class Token:
    """A token and its position in the source line.

    Attributes:
        text (str): Token content with quote characters removed.
        start (int): Offset of the token's first character in the line.
        end (int): Offset one past the token's last character.
        quoted (bool): True if any part of the token was quoted.
    """

    text: str
    start: int
    end: int
    quoted: bool = False

    @property
    def length(self) -> int:
        return self.end - self.start

    def to_source(self) -> str:
        """Return the token as it should be written to re-tokenize to `text`."""
        return quote_token(self.text)

    def __str__(self) -> str:
        return self.text


def quote_token(text: str) -> str:
    """Quote `text` if it would not otherwise tokenize back to itself."""
    if not text or QUOTE in text or any(char.isspace() for char in text):
        escaped = text.replace(QUOTE, QUOTE * 2)
        return f"{QUOTE}{escaped}{QUOTE}"
    return text


def tokenize(line: str, options: TokenizerOptions = TokenizerOptions.NONE) -> list[Token]:
    """Split `line` into tokens.

    Raises:
        TokenizeError: If a quote is left open and partial input is not allowed.
    """
    tokens: list[Token] = []
    index = 0
    length = len(line)

    while index < length:
        while index < length and line[index].isspace():
            index += 1
        if index >= length:
            break

        start = index
        chars: list[str] = []
        quoted = False
        open_quote: int | None = None
        while index < length:
            char = line[index]
            if char == QUOTE and open_quote is not None and line[index + 1 : index + 2] == QUOTE:
                chars.append(QUOTE)
                index += 1
            elif char == QUOTE:
                quoted = True
                open_quote = None if open_quote is not None else index
            elif char.isspace() and open_quote is None:
                break
            else:
                chars.append(char)
            index += 1

        if open_quote is not None and not options & TokenizerOptions.ALLOW_PARTIAL_INPUT:
            raise TokenizeError(
                f"Unterminated quote at column {open_quote + 1}", line, open_quote
            )
        tokens.append(Token("".join(chars), start, index, quoted))

    return tokens


def join_tokens(texts: Iterable[str]) -> str:
    """Join token texts into a line that tokenizes back to the same texts."""
    return " ".join(quote_token(text) for text in texts)
