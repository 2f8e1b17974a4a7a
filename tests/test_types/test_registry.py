from collections import deque
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from pathlib import Path, PurePosixPath
from typing import Annotated, Any, Sequence
import uuid

import pytest
from pydantic import AnyUrl

from clasp.exceptions import UnsupportedTypeError
from clasp.parser import Named, ParserOptions, format_args, parse
from clasp.types import (
    BoolArgumentType,
    Char,
    CharArgumentType,
    Converter,
    ConverterRegistry,
    CustomArgumentType,
    DateTimeArgumentType,
    DecimalArgumentType,
    FloatArgumentType,
    IntegerArgumentType,
    ParseContext,
    PathArgumentType,
    StringArgumentType,
    UriArgumentType,
    UuidArgumentType,
    default_registry,
)


@pytest.mark.parametrize(
    "type_hint,expected",
    [
        (bool, BoolArgumentType),
        (int, IntegerArgumentType),
        (float, FloatArgumentType),
        (Decimal, DecimalArgumentType),
        (str, StringArgumentType),
        (Char, CharArgumentType),
        (uuid.UUID, UuidArgumentType),
        (AnyUrl, UriArgumentType),
        (Path, PathArgumentType),
        (PurePosixPath, PathArgumentType),
        (datetime, DateTimeArgumentType),
    ],
)
def test_resolve_primitives(type_hint, expected):
    assert isinstance(default_registry.resolve(type_hint), expected)


def test_pure_path_subclass_is_preserved():
    converter = default_registry.resolve(PurePosixPath)
    assert converter.parse(ParseContext(), "a/b") == PurePosixPath("a/b")


@pytest.mark.parametrize(
    "type_hint",
    [
        object,
        Any,
        list,
        dict,
        tuple,
        tuple[()],
        Sequence[int],
        deque[int],
        int | str,
        int | str | None,
        dict[str],
        list[object],
    ],
)
def test_unsupported_types(type_hint):
    with pytest.raises(UnsupportedTypeError):
        default_registry.resolve(type_hint)


class Temperature:
    def __init__(self, degrees: float):
        self.degrees = degrees

    def __eq__(self, other):
        return isinstance(other, Temperature) and other.degrees == self.degrees


class TemperatureType(CustomArgumentType):
    value_type = Temperature

    def parse(self, context, text):
        if not text.endswith("C"):
            raise ValueError(f"'{text}' must end with C")
        return Temperature(float(text[:-1]))

    def format(self, value):
        super().format(value)
        return f"{value.degrees:g}C"


def test_registered_converter_takes_priority():
    registry = ConverterRegistry()
    registry.register(Temperature, TemperatureType())
    converter = registry.resolve(Temperature)
    assert converter.parse(ParseContext(), "21.5C") == Temperature(21.5)
    assert isinstance(registry.resolve(list[Temperature]).element_type, TemperatureType)
    registry.unregister(Temperature)
    with pytest.raises(UnsupportedTypeError):
        registry.resolve(Temperature)


def test_registry_copy_is_independent():
    registry = ConverterRegistry()
    registry.register(Temperature, TemperatureType())
    copied = registry.copy()
    registry.unregister(Temperature)
    assert isinstance(copied.resolve(Temperature), TemperatureType)


def test_register_rejects_non_converters():
    with pytest.raises(TypeError):
        ConverterRegistry().register(Temperature, object())


def test_custom_format_checks_type():
    converter = TemperatureType()
    with pytest.raises(ValueError):
        converter.format(None)
    with pytest.raises(TypeError):
        converter.format(3.0)
    assert converter.display_name == "Temperature"


class SelfDescribed:
    def __init__(self, text: str):
        self.text = text


class SelfDescribedType(CustomArgumentType):
    value_type = SelfDescribed

    def parse(self, context, text):
        return SelfDescribed(text.upper())

    def format(self, value):
        return value.text.lower()


SelfDescribed.__argument_type__ = SelfDescribedType


def test_self_described_type():
    converter = default_registry.resolve(SelfDescribed)
    assert isinstance(converter, SelfDescribedType)
    assert converter.parse(ParseContext(), "abc").text == "ABC"


def test_converter_marker_and_context_in_parse():
    class Lookup(CustomArgumentType):
        def parse(self, context, text):
            return context.context[text]

    @dataclass
    class Args:
        target: Annotated[Temperature, Converter(Lookup()), Named()] = None
        other: Annotated[Temperature | None, Named(converter=TemperatureType())] = None

    hosts = {"home": Temperature(20.0)}
    args = Args()
    assert parse(
        ["/target=home", "/other=5C"], args, ParserOptions(context=hosts, reporter=print)
    )
    assert args.target == Temperature(20.0)
    assert args.other == Temperature(5.0)
    assert format_args(Args(other=Temperature(5.0))) == ["/other=5C"]
