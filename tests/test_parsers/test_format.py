from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated

import pytest

from clasp.parser import (
    Named,
    ParserOptions,
    Positional,
    format_args,
    format_line,
    parse_line,
)


class Color(Enum):
    RED = 1
    GREEN = 2


@dataclass
class Basic:
    path: Annotated[str, Positional()]
    count: Annotated[int, Named(short_name="c")] = 0
    verbose: Annotated[bool, Named()] = False
    color: Annotated[Color, Named()] = Color.RED


@dataclass
class Collections:
    values: Annotated[list[int], Named(long_name="value")] = field(default_factory=list)
    unique: Annotated[set[str], Named()] = field(default_factory=set)
    pairs: Annotated[dict[str, int], Named(long_name="pair")] = field(default_factory=dict)
    rest: Annotated[list[str], Positional()] = field(default_factory=list)


@dataclass
class Numbers:
    value: Annotated[int, Positional()] = 0
    other: Annotated[float, Positional()] = 0.0
    limit: Annotated[int | None, Named()] = None


@pytest.mark.parametrize(
    "value,expected",
    [
        (Basic(path="file.txt"), ["file.txt"]),
        (
            Basic(path="a b", count=5, verbose=True, color=Color.GREEN),
            ["a b", "/count=5", "/verbose=True", "/color=GREEN"],
        ),
        (
            Collections(values=[1, 2], pairs={"a": 1}, rest=["x", "y"]),
            ["x", "y", "/value=1", "/value=2", "/pair=a=1"],
        ),
        (Collections(unique={"b", "a"}), ["/unique=a", "/unique=b"]),
        (Collections(), []),
        (Numbers(), []),
        (Numbers(other=2.5), ["0", "2.5"]),
        (Numbers(limit=4), ["/limit=4"]),
    ],
)
def test_format_args(value, expected):
    assert format_args(value) == expected


def test_format_line_quotes_tokens():
    value = Basic(path="a b", count=5)
    assert format_line(value) == '"a b" /count=5'


def test_format_uses_preferred_prefix():
    options = ParserOptions(named_argument_prefixes=("--", "-"))
    assert format_args(Basic(path="p", count=2), options) == ["p", "--count=2"]


@pytest.mark.parametrize(
    "value",
    [
        Basic(path="file.txt"),
        Basic(path="with space", count=-7, verbose=True, color=Color.GREEN),
        Basic(path=""),
    ],
)
def test_format_line_parses_back(value):
    parsed = Basic(path="unset")
    assert parse_line(format_line(value), parsed, ParserOptions(reporter=print)).success
    assert parsed == value


def test_collections_parse_back():
    value = Collections(values=[3, 1], unique={"x"}, pairs={"k": 2}, rest=["r"])
    parsed = Collections()
    assert parse_line(format_line(value), parsed, ParserOptions(reporter=print)).success
    assert parsed == value


def test_format_line_keeps_embedded_quotes():
    value = Basic(path='say "hi"', count=1)
    line = format_line(value)
    assert line == '"say ""hi""" /count=1'
    parsed = Basic(path="unset")
    assert parse_line(line, parsed, ParserOptions(reporter=print)).success
    assert parsed.path == 'say "hi"'
