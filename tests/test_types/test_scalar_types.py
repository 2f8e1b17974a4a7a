import uuid
from datetime import datetime
from pathlib import Path

import pytest
from pydantic import AnyUrl

from clasp.types import (
    BoolArgumentType,
    CharArgumentType,
    CompletionContext,
    DateTimeArgumentType,
    ParseContext,
    PathArgumentType,
    StringArgumentType,
    UriArgumentType,
    UuidArgumentType,
)


@pytest.mark.parametrize(
    "text,expected",
    [("true", True), ("TRUE", True), ("+", True), ("false", False), ("False", False), ("-", False)],
)
def test_bool_valid(text, expected):
    assert BoolArgumentType().parse(ParseContext(), text) is expected


@pytest.mark.parametrize("text", ["", "yes", "1", "0", "truee"])
def test_bool_invalid(text):
    with pytest.raises(ValueError):
        BoolArgumentType().parse(ParseContext(), text)


def test_bool_missing_value_means_true():
    converter = BoolArgumentType()
    assert converter.accepts_missing_value
    assert converter.parse_missing(ParseContext()) is True
    assert converter.format(True) == "True"
    assert converter.get_completions(CompletionContext(), "f") == ["False"]


def test_string_accepts_anything():
    converter = StringArgumentType()
    assert converter.parse(ParseContext(), "") == ""
    assert converter.parse(ParseContext(), " a b ") == " a b "
    assert converter.display_name == "string"


@pytest.mark.parametrize("text,valid", [("a", True), (" ", True), ("", False), ("ab", False)])
def test_char(text, valid):
    converter = CharArgumentType()
    if valid:
        assert converter.parse(ParseContext(), text) == text
    else:
        with pytest.raises(ValueError):
            converter.parse(ParseContext(), text)


VALUE = uuid.UUID("12345678-9abc-def0-1234-56789abcdef0")


@pytest.mark.parametrize(
    "text",
    [
        "12345678-9abc-def0-1234-56789abcdef0",
        "12345678-9ABC-DEF0-1234-56789ABCDEF0",
        "{12345678-9abc-def0-1234-56789abcdef0}",
        "123456789abcdef0123456789abcdef0",
    ],
)
def test_uuid_valid(text):
    assert UuidArgumentType().parse(ParseContext(), text) == VALUE


@pytest.mark.parametrize(
    "text",
    ["", "1234", "12345678-9abc-def0-1234-56789abcdef", "{123456789abcdef0123456789abcdef0}", "g" * 32],
)
def test_uuid_invalid(text):
    with pytest.raises(ValueError):
        UuidArgumentType().parse(ParseContext(), text)


def test_uuid_format():
    assert UuidArgumentType().format(VALUE) == "12345678-9abc-def0-1234-56789abcdef0"


@pytest.mark.parametrize("text", ["http://example.com/path", "file:///tmp/x", "ftp://host:21"])
def test_uri_valid(text):
    value = UriArgumentType().parse(ParseContext(), text)
    assert isinstance(value, AnyUrl)
    assert value.scheme == text.split(":")[0]


@pytest.mark.parametrize("text", ["", "not a uri", "relative/path"])
def test_uri_invalid(text):
    with pytest.raises(ValueError):
        UriArgumentType().parse(ParseContext(), text)


def test_datetime_parse_and_format():
    converter = DateTimeArgumentType()
    value = converter.parse(ParseContext(), "2024-03-01 10:30")
    assert value == datetime(2024, 3, 1, 10, 30)
    assert converter.parse(ParseContext(), converter.format(value)) == value


@pytest.mark.parametrize("text", ["", "not a date", "2024-13-45"])
def test_datetime_invalid(text):
    with pytest.raises(ValueError):
        DateTimeArgumentType().parse(ParseContext(), text)


def test_path_parse():
    converter = PathArgumentType()
    assert converter.parse(ParseContext(), "a/b.txt") == Path("a/b.txt")
    with pytest.raises(ValueError):
        converter.parse(ParseContext(), "")


def test_path_completions(tmp_path, monkeypatch):
    (tmp_path / "alpha.txt").write_text("a")
    (tmp_path / "alps").mkdir()
    (tmp_path / ".hidden").write_text("h")
    (tmp_path / "beta.txt").write_text("b")
    monkeypatch.chdir(tmp_path)

    converter = PathArgumentType()
    context = CompletionContext()
    assert converter.get_completions(context, "al") == ["alpha.txt", "alps/"]
    assert converter.get_completions(context, "") == ["alpha.txt", "alps/", "beta.txt"]
    assert converter.get_completions(context, ".h") == [".hidden"]
    assert converter.get_completions(context, "alps/") == []
    assert converter.get_completions(context, "missing/x") == []


def test_path_completions_in_subdirectory(tmp_path):
    (tmp_path / "one.txt").write_text("1")
    converter = PathArgumentType()
    assert converter.get_completions(CompletionContext(), f"{tmp_path}/o") == [
        f"{tmp_path}/one.txt"
    ]
