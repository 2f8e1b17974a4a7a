# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The matching engine: binds a token list to a schema and a destination object.

A parse call moves through explicit states:

    SCANNING → RESOLVING_DEFAULTS → VALIDATING → DONE | FAILED

SCANNING
    Each token is either a named token (`<prefix><name>`, optionally followed by
    `=value` / `:value`, or a trailing `+` / `-` for boolean-like arguments) or a
    positional token. Named arguments resolve by long or short name, ignoring
    case. Positional tokens fill slots in declared order; a collection slot takes
    every remaining positional token and a remainder slot takes every remaining
    token verbatim, named-looking or not. A named-looking token that does not
    resolve but reads as a negative number is treated as positional.

    Unknown names, repeated at-most-once arguments, repeated dictionary keys,
    conversion failures and surplus positionals are recorded and scanning
    continues, so a single call reports every problem it can find.

RESOLVING_DEFAULTS
    Collection values are built from the collected elements. Arguments never
    seen receive their declared default when it was given explicitly, or when
    the destination has no such attribute yet.

VALIDATING
    Required arguments that were never seen are reported.

Scalar values are written to the destination as soon as they convert, so a
failed parse can leave the destination partially updated.

The engine also runs the inverse direction (`format`) and completion
(`get_completions`), which re-scans the tokens before the cursor to find out
which slot the cursor is in.
"""
from __future__ import annotations

import copy
import re
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, Callable, Sequence

from clasp.logger import logger
from clasp.parser.argument import ArgumentDefinition
from clasp.parser.options import ParserOptions
from clasp.parser.parser_types import (
    ArgumentState,
    ParseError,
    ParseErrorKind,
    ParseResult,
    ParseState,
)
from clasp.parser.schema import Schema
from clasp.settings import safe_report
from clasp.types.base import CompletionContext, ParseContext

VALUE_SEPARATORS = ("=", ":")

_NEGATIVE_NUMBER = re.compile(
    r"-(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?|-0[xn][0-9a-fA-F]+"
)


@dataclass(frozen=True)
class NamedToken:
    """A token split into prefix, name and optional value."""

    prefix: str
    name: str
    separator: str | None = None
    value: str | None = None


class _ParseSession:
    """Mutable state of one parse call."""

    def __init__(self, schema: Schema, destination: Any):
        self.schema = schema
        self.destination = destination
        self.states = {argument.dest: ArgumentState(argument) for argument in schema.arguments}
        self.positional_index = 0
        self.errors: list[ParseError] = []
        self.state = ParseState.SCANNING

    def current_positional(self) -> ArgumentDefinition | None:
        positionals = self.schema.positional
        if self.positional_index < len(positionals):
            return positionals[self.positional_index]
        return None

    def add_error(
        self,
        kind: ParseErrorKind,
        message: str,
        token: str | None = None,
        argument: str | None = None,
    ) -> None:
        self.errors.append(ParseError(kind, message, token, argument))


class Engine:
    """Parses tokens into objects, formats objects into tokens and completes tokens.

    Args:
        schema: The argument set to match against.
        options: Prefixes, host context and error reporter.
    """

    def __init__(self, schema: Schema, options: ParserOptions | None = None):
        self.schema = schema
        self.options = options or ParserOptions()
        self._prefixes = sorted(self.options.named_argument_prefixes, key=len, reverse=True)

    @property
    def prefix(self) -> str:
        return self.options.preferred_prefix

    def parse(self, tokens: Sequence[Any], destination: Any) -> bool:
        return self.parse_result(tokens, destination).success

    def parse_result(self, tokens: Sequence[Any], destination: Any) -> ParseResult:
        """Parse `tokens` into `destination`, reporting every error found."""
        texts = [str(token) for token in tokens]
        session = self._scan(texts, destination)

        session.state = ParseState.RESOLVING_DEFAULTS
        self._resolve_defaults(session)

        session.state = ParseState.VALIDATING
        self._validate(session)

        if session.errors:
            session.state = ParseState.FAILED
            for error in session.errors:
                safe_report(self.options.reporter, error.message)
            logger.debug(
                "Parse into %s failed with %d error(s).",
                type(destination).__name__,
                len(session.errors),
            )
            return ParseResult(errors=list(session.errors))

        session.state = ParseState.DONE
        logger.debug("Parsed %d token(s) into %s.", len(texts), type(destination).__name__)
        return ParseResult(value=destination)

    def split_named(self, token: str) -> NamedToken | None:
        """Split a named token, or return None for a positional token."""
        for prefix in self._prefixes:
            if token.startswith(prefix) and len(token) > len(prefix):
                body = token[len(prefix) :]
                positions = [body.find(sep) for sep in VALUE_SEPARATORS if sep in body]
                if positions:
                    split = min(positions)
                    return NamedToken(prefix, body[:split], body[split], body[split + 1 :])
                return NamedToken(prefix, body)
        return None

    def _scan(self, tokens: list[str], destination: Any) -> _ParseSession:
        session = _ParseSession(self.schema, destination)
        index = 0
        while index < len(tokens):
            token = tokens[index]
            named = self.split_named(token)
            if named is not None and not self._reads_as_positional(session, named, token):
                self._handle_named(session, named, token, index)
            else:
                slot = session.current_positional()
                if slot is not None and slot.remainder:
                    for position in range(index, len(tokens)):
                        self._apply_value(session, slot, tokens[position], tokens[position], position)
                    break
                self._handle_positional(session, token, index)
            index += 1
        return session

    def _resolve_named(self, named: NamedToken) -> tuple[ArgumentDefinition | None, str | None]:
        argument = self.schema.lookup(named.name)
        if argument is not None:
            return argument, named.value if named.separator is not None else None
        if named.separator is None and named.name[-1:] in ("+", "-"):
            candidate = self.schema.lookup(named.name[:-1])
            if candidate is not None and candidate.value_type.accepts_missing_value:
                return candidate, named.name[-1]
        return None, None

    def _reads_as_positional(self, session: _ParseSession, named: NamedToken, token: str) -> bool:
        if self._resolve_named(named)[0] is not None:
            return False
        return bool(_NEGATIVE_NUMBER.fullmatch(token)) and session.current_positional() is not None

    def _handle_named(
        self, session: _ParseSession, named: NamedToken, token: str, index: int
    ) -> None:
        argument, value = self._resolve_named(named)
        if argument is None:
            suggestions = [f"{named.prefix}{name}" for name in self.schema.suggest(named.name)]
            if suggestions:
                message = (
                    f"Unrecognized argument '{token}'. "
                    f"Did you mean one of: {', '.join(suggestions)}?"
                )
            else:
                message = f"Unrecognized argument '{token}'."
            session.add_error(ParseErrorKind.UNKNOWN_ARGUMENT, message, token)
            return

        state = session.states[argument.dest]
        if state.consumed and not argument.allows_multiple:
            session.add_error(
                ParseErrorKind.DUPLICATE_ARGUMENT,
                f"Argument '{argument.display_name(named.prefix)}' may only be specified once.",
                token,
                argument.dest,
            )
            return
        self._apply_value(session, argument, value, token, index, named.prefix)

    def _handle_positional(self, session: _ParseSession, token: str, index: int) -> None:
        slot = session.current_positional()
        if slot is None:
            session.add_error(
                ParseErrorKind.UNKNOWN_ARGUMENT,
                f"Unexpected positional argument '{token}'.",
                token,
            )
            return
        self._apply_value(session, slot, token, token, index)
        if not slot.allows_multiple:
            session.positional_index += 1

    def _apply_value(
        self,
        session: _ParseSession,
        argument: ArgumentDefinition,
        text: str | None,
        token: str,
        index: int,
        prefix: str | None = None,
    ) -> None:
        display = argument.display_name(prefix or self.prefix)
        context = ParseContext(self.options.context, display)
        state = session.states[argument.dest]
        try:
            if text is None:
                value = argument.value_type.parse_missing(context)
            else:
                value = argument.value_type.parse(context, text)
        except (ValueError, TypeError) as error:
            state.set_consumed(index)
            if text is None:
                message = f"Missing value for argument '{display}': {error}"
            else:
                message = f"Invalid value '{text}' for argument '{display}': {error}"
            session.add_error(
                ParseErrorKind.VALUE_CONVERSION_FAILURE, message, token, argument.dest
            )
            return

        if argument.value_type.is_collection:
            if argument.value_type.conflicts(state.values, value):
                session.add_error(
                    ParseErrorKind.DUPLICATE_ARGUMENT,
                    f"Duplicate key '{value.key}' for argument '{display}'.",
                    token,
                    argument.dest,
                )
                return
            state.values.append(value)
        else:
            setattr(session.destination, argument.dest, value)
        state.set_consumed(index)

    def _resolve_defaults(self, session: _ParseSession) -> None:
        destination = session.destination
        for argument in self.schema.arguments:
            state = session.states[argument.dest]
            if argument.value_type.is_collection and state.values:
                try:
                    collected = argument.value_type.create(state.values)
                except (ValueError, TypeError) as error:
                    session.add_error(
                        ParseErrorKind.VALUE_CONVERSION_FAILURE,
                        f"Invalid values for argument "
                        f"'{argument.display_name(self.prefix)}': {error}",
                        argument=argument.dest,
                    )
                    continue
                setattr(destination, argument.dest, collected)
            elif not state.consumed:
                if argument.has_explicit_default or not hasattr(destination, argument.dest):
                    setattr(destination, argument.dest, copy.deepcopy(argument.default))

    def _validate(self, session: _ParseSession) -> None:
        for argument in self.schema.arguments:
            if argument.is_required and not session.states[argument.dest].consumed:
                session.add_error(
                    ParseErrorKind.MISSING_REQUIRED_ARGUMENT,
                    f"Missing required argument '{argument.display_name(self.prefix)}'.",
                    argument=argument.dest,
                )

    @staticmethod
    def _is_default(argument: ArgumentDefinition, value: Any) -> bool:
        if argument.value_type.is_collection and not argument.value_type.elements(value):
            return True
        return value is argument.default or value == argument.default

    def format(self, value: Any) -> list[str]:
        """Return tokens that parse back into the non-default values of `value`."""
        tokens: list[str] = []

        positionals = [
            (argument, getattr(value, argument.dest, argument.default))
            for argument in self.schema.positional
        ]
        last = -1
        for index, (argument, item) in enumerate(positionals):
            if argument.is_required or not self._is_default(argument, item):
                last = index
        for argument, item in positionals[: last + 1]:
            if item is None:
                break
            if argument.value_type.is_collection:
                tokens.extend(argument.value_type.format_elements(item))
            else:
                tokens.append(argument.value_type.format(item))

        for argument in self.schema.named:
            item = getattr(value, argument.dest, argument.default)
            if item is None:
                continue
            if not argument.is_required and self._is_default(argument, item):
                continue
            stem = f"{self.prefix}{argument.name}="
            if argument.value_type.is_collection:
                tokens.extend(stem + text for text in argument.value_type.format_elements(item))
            else:
                tokens.append(stem + argument.value_type.format(item))
        return tokens

    def get_completions(
        self,
        tokens: Sequence[Any],
        index: int,
        resolve: Callable[[], Any] | None = None,
        release: Callable[[Any], None] | None = None,
    ) -> list[str]:
        """Complete the token at `index` (which may be one past the last token).

        `resolve` provides the object the preceding tokens are parsed into, so
        completers can look at values given earlier on the line; `release` is
        called with it once completion finishes, whether or not it succeeded.
        """
        texts = [str(token) for token in tokens]
        if index < 0 or index > len(texts):
            return []
        partial = texts[index] if index < len(texts) else ""

        instance = None
        resolved = False
        try:
            if resolve is not None:
                instance = resolve()
                resolved = True
            destination = instance if instance is not None else SimpleNamespace()
            session = self._scan(texts[:index], destination)
            context = CompletionContext(
                ParseContext(self.options.context), texts, index, instance
            )
            return self._complete(session, context, partial)
        finally:
            if resolved and release is not None:
                release(instance)

    def _complete(
        self, session: _ParseSession, context: CompletionContext, partial: str
    ) -> list[str]:
        named = self.split_named(partial)
        if named is not None and not self._reads_as_positional(session, named, partial):
            if named.separator is None:
                return self._complete_names(session, named.prefix, named.name)
            argument = self.schema.lookup(named.name)
            if argument is None or argument.hidden:
                return []
            context.parse_context.argument = argument.display_name(named.prefix)
            stem = f"{named.prefix}{named.name}{named.separator}"
            return [
                f"{stem}{candidate}"
                for candidate in argument.get_completions(context, named.value or "")
            ]

        completions: list[str] = []
        slot = session.current_positional()
        if slot is not None:
            context.parse_context.argument = slot.display_name()
            completions.extend(slot.get_completions(context, partial))
        if not partial:
            completions.extend(self._complete_names(session, self.prefix, ""))
        elif partial in self._prefixes:
            completions.extend(self._complete_names(session, partial, ""))
        return completions

    def _complete_names(self, session: _ParseSession, prefix: str, partial: str) -> list[str]:
        lowered = partial.lower()
        names = [
            f"{prefix}{argument.name}"
            for argument in self.schema.named
            if not argument.hidden
            and (argument.allows_multiple or not session.states[argument.dest].consumed)
            and argument.name.lower().startswith(lowered)
        ]
        return sorted(names, key=str.lower)
