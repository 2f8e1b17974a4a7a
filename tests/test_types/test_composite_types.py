from typing import Annotated

import pytest

from clasp.types import (
    CollectionArgumentType,
    CollectionKind,
    CompletionContext,
    KeyValuePair,
    NullableArgumentType,
    ParseContext,
    SortedDict,
    SortedSet,
    UInt8,
    default_registry,
)


def resolve(type_hint):
    return default_registry.resolve(type_hint)


@pytest.mark.parametrize(
    "type_hint,text,expected",
    [
        (KeyValuePair[str, str], "a=b", KeyValuePair("a", "b")),
        (KeyValuePair[str, str], "=", KeyValuePair("", "")),
        (KeyValuePair[str, str], "==", KeyValuePair("", "=")),
        (KeyValuePair[str, int], "x=0x10", KeyValuePair("x", 16)),
        (tuple[int, str, int], "3,hello,5", (3, "hello", 5)),
        (tuple[int, KeyValuePair[int, int], int], "3,1=1,5", (3, KeyValuePair(1, 1), 5)),
        (tuple[UInt8, bool], "255,true", (255, True)),
    ],
)
def test_composite_valid(type_hint, text, expected):
    assert resolve(type_hint).parse(ParseContext(), text) == expected


@pytest.mark.parametrize(
    "type_hint,text",
    [
        (KeyValuePair[str, str], "ab"),
        (KeyValuePair[str, int], "a=b"),
        (tuple[int, str, int], "3,hello"),
        (tuple[int, int], "1,2,3"),
        (tuple[UInt8, bool], "256,true"),
    ],
)
def test_composite_invalid(type_hint, text):
    with pytest.raises(ValueError):
        resolve(type_hint).parse(ParseContext(), text)


def test_composite_format():
    assert resolve(tuple[int, str]).format((1, "a")) == "1,a"
    assert resolve(KeyValuePair[str, int]).format(KeyValuePair("k", 2)) == "k=2"
    assert resolve(KeyValuePair[str, int]).display_name == "string=int"


def test_key_value_pair_unpacks():
    key, value = KeyValuePair("a", 1)
    assert (key, value) == ("a", 1)


def test_tuple_completes_last_component():
    converter = resolve(tuple[int, bool])
    assert converter.get_completions(CompletionContext(), "1,t") == ["1,True"]
    assert converter.get_completions(CompletionContext(), "1,true,x") == []


def test_pair_completes_value():
    converter = resolve(KeyValuePair[str, bool])
    assert converter.get_completions(CompletionContext(), "k=") == ["k=False", "k=True"]


@pytest.mark.parametrize(
    "type_hint,kind",
    [
        (list[int], CollectionKind.LIST),
        (tuple[int, ...], CollectionKind.TUPLE),
        (set[int], CollectionKind.SET),
        (frozenset[int], CollectionKind.FROZENSET),
        (SortedSet[int], CollectionKind.SORTED_SET),
        (dict[str, int], CollectionKind.DICT),
        (SortedDict[str, int], CollectionKind.SORTED_DICT),
    ],
)
def test_collection_kinds(type_hint, kind):
    converter = resolve(type_hint)
    assert isinstance(converter, CollectionArgumentType)
    assert converter.kind is kind
    assert converter.is_collection


def test_collection_create():
    assert resolve(tuple[int, ...]).create([2, 1]) == (2, 1)
    assert resolve(frozenset[int]).create([2, 2]) == frozenset({2})
    assert resolve(SortedSet[int]).create([3, 1, 3]) == [1, 3]
    pairs = [KeyValuePair("b", 1), KeyValuePair("a", 2)]
    assert list(resolve(SortedDict[str, int]).create(pairs)) == ["a", "b"]
    assert resolve(dict[str, int]).create(pairs) == {"b": 1, "a": 2}


def test_collection_conflicts_only_for_mappings():
    mapping = resolve(dict[str, int])
    assert mapping.conflicts([KeyValuePair("a", 1)], KeyValuePair("a", 2))
    assert not mapping.conflicts([KeyValuePair("a", 1)], KeyValuePair("b", 2))
    assert not resolve(list[int]).conflicts([1], 1)


def test_collection_format_elements():
    assert resolve(dict[str, int]).format_elements({"a": 1}) == ["a=1"]
    assert resolve(set[str]).format_elements({"b", "a"}) == ["a", "b"]
    assert resolve(list[int]).format_elements(None) == []


@pytest.mark.parametrize(
    "type_hint,text,expected",
    [(int | None, "4", 4), (Annotated[UInt8, "meta"] | None, "200", 200)],
)
def test_nullable_valid(type_hint, text, expected):
    converter = resolve(type_hint)
    assert isinstance(converter, NullableArgumentType)
    assert converter.parse(ParseContext(), text) == expected


def test_nullable_rejects_explicit_empty():
    with pytest.raises(ValueError):
        resolve(str | None).parse(ParseContext(), "")
    assert resolve(bool | None).parse_missing(ParseContext()) is True
