# Clasp Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Public entry points for parsing, formatting, usage and completion.

Every function takes the argument set either implicitly (the destination's
class, or `target_type`) or explicitly through `schema=` for argument sets
built with `SchemaBuilder`.

Input errors never raise: they are reported one message at a time through
`ParserOptions.reporter` (or `settings.default_reporter` when no reporter is
given) and returned in `ParseResult.errors`. Declaration errors raise
`SchemaError` / `UnsupportedTypeError` when the schema is first built.

Example:
    @dataclass
    class Options(HelpArguments):
        path: Annotated[Path, Positional(help="File to read")]
        count: Annotated[int, Named(short_name="n")] = 10

    options = Options(path=Path("."))
    if not parse_with_usage(sys.argv[1:], options):
        sys.exit(1)
"""
from __future__ import annotations

import dataclasses
from types import SimpleNamespace
from typing import Any, Callable, Sequence

from rich.text import Text

from clasp.exceptions import TokenizeError
from clasp.parser.engine import Engine
from clasp.parser.metadata import HelpArguments
from clasp.parser.options import ParserOptions, UsageOptions
from clasp.parser.parser_types import ParseError, ParseErrorKind, ParseResult
from clasp.parser.schema import Schema, build_schema
from clasp.parser.tokenizer import join_tokens, tokenize
from clasp.parser.usage import render_usage
from clasp.settings import get_default_reporter, safe_report
from clasp.types.registry import ConverterRegistry


def _with_reporter(options: ParserOptions | None) -> ParserOptions:
    if options is None:
        return ParserOptions(reporter=get_default_reporter())
    if options.reporter is None:
        return options.model_copy(update={"reporter": get_default_reporter()})
    return options


def get_engine(
    target_type: type | None = None,
    options: ParserOptions | None = None,
    *,
    schema: Schema | None = None,
    registry: ConverterRegistry | None = None,
) -> Engine:
    """Return an engine for `target_type` (or an explicit `schema`)."""
    if schema is None:
        if target_type is None:
            raise TypeError("Either target_type or schema is required")
        schema = build_schema(target_type, registry)
    return Engine(schema, options)


def parse_result(
    tokens: Sequence[Any],
    destination: Any,
    options: ParserOptions | None = None,
    *,
    schema: Schema | None = None,
) -> ParseResult:
    """Parse `tokens` into `destination` and return the structured result."""
    engine = get_engine(type(destination), _with_reporter(options), schema=schema)
    return engine.parse_result(tokens, destination)


def parse(
    tokens: Sequence[Any],
    destination: Any,
    options: ParserOptions | None = None,
    *,
    schema: Schema | None = None,
) -> bool:
    """Parse `tokens` into `destination`. Returns True on success."""
    return parse_result(tokens, destination, options, schema=schema).success


def parse_line(
    line: str,
    destination: Any,
    options: ParserOptions | None = None,
    *,
    schema: Schema | None = None,
) -> ParseResult:
    """Tokenize `line` and parse it into `destination`."""
    options = _with_reporter(options)
    try:
        tokens = tokenize(line)
    except TokenizeError as error:
        safe_report(options.reporter, str(error))
        return ParseResult(
            errors=[ParseError(ParseErrorKind.TOKENIZE_FAILURE, str(error), token=line)]
        )
    return parse_result(tokens, destination, options, schema=schema)


def _instantiate(target_type: type, values: dict[str, Any]) -> Any:
    if dataclasses.is_dataclass(target_type):
        init_names = {field.name for field in dataclasses.fields(target_type) if field.init}
        instance = target_type(**{name: value for name, value in values.items() if name in init_names})
        for name, value in values.items():
            if name not in init_names:
                setattr(instance, name, value)
        return instance
    instance = target_type()
    for name, value in values.items():
        setattr(instance, name, value)
    return instance


def parse_new(
    target_type: type,
    tokens: Sequence[Any],
    options: ParserOptions | None = None,
    *,
    schema: Schema | None = None,
) -> ParseResult:
    """Parse `tokens` into a new instance of `target_type`.

    Values are collected first and the instance is built afterwards, so
    dataclasses with required fields can be created directly from the tokens.
    """
    schema = schema or build_schema(target_type)
    namespace = SimpleNamespace()
    result = parse_result(tokens, namespace, options, schema=schema)
    if not result.success:
        return result
    return ParseResult(value=_instantiate(target_type, vars(namespace)))


def get_usage(
    target_type: type | None = None,
    defaults: Any = None,
    columns: int | None = None,
    command_name: str | None = None,
    options: UsageOptions = UsageOptions.DEFAULT,
    *,
    schema: Schema | None = None,
    prefix: str = "/",
) -> Text:
    """Return usage text for an argument set.

    Args:
        target_type: Argument set class.
        defaults: Object whose attribute values are shown as default values.
        columns: Width to wrap at; probed from the console when None.
        command_name: Name shown on the usage line.
        options: Sections and styling to include.
    """
    if schema is None:
        if target_type is None:
            raise TypeError("Either target_type or schema is required")
        schema = build_schema(target_type, defaults=defaults)
    return render_usage(schema, defaults, columns, command_name, options, prefix)


def parse_with_usage(
    tokens: Sequence[Any],
    destination: Any,
    options: ParserOptions | None = None,
    usage_options: UsageOptions = UsageOptions.DEFAULT,
    *,
    command_name: str | None = None,
    schema: Schema | None = None,
) -> bool:
    """Parse, reporting usage on failure or when help was requested.

    On a parse failure a blank line and abridged usage are reported after the
    errors (full usage if the destination asked for help). If the destination
    is a `HelpArguments` with `help` set, full usage is reported and False is
    returned so the caller stops.
    """
    options = _with_reporter(options)
    schema = schema or build_schema(type(destination))
    result = Engine(schema, options).parse_result(tokens, destination)
    help_requested = isinstance(destination, HelpArguments) and bool(destination.help)

    if not result.success:
        selected = usage_options if help_requested else usage_options | UsageOptions.ABRIDGED
        safe_report(options.reporter, "")
        safe_report(
            options.reporter,
            render_usage(schema, None, None, command_name, selected, options.preferred_prefix),
        )
        return False

    if help_requested:
        safe_report(
            options.reporter,
            render_usage(schema, None, None, command_name, usage_options, options.preferred_prefix),
        )
        return False
    return True


def format_args(
    value: Any, options: ParserOptions | None = None, *, schema: Schema | None = None
) -> list[str]:
    """Return the tokens describing the non-default values of `value`."""
    return get_engine(type(value), options, schema=schema).format(value)


def format_line(
    value: Any, options: ParserOptions | None = None, *, schema: Schema | None = None
) -> str:
    """Return `format_args(value)` joined into a line that tokenizes back."""
    return join_tokens(format_args(value, options, schema=schema))


def get_completions(
    target_type: type | None,
    tokens: Sequence[Any],
    index: int,
    options: ParserOptions | None = None,
    resolve: Callable[[], Any] | None = None,
    release: Callable[[Any], None] | None = None,
    *,
    schema: Schema | None = None,
) -> list[str]:
    """Return completions for the token at `index` (possibly one past the end)."""
    return get_engine(target_type, options, schema=schema).get_completions(
        tokens, index, resolve, release
    )
