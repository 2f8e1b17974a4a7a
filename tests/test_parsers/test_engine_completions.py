from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from clasp.parser import Named, Positional, get_completions


class Mode(Enum):
    FAST = 1
    SLOW = 2
    SAFE = 3


def color_completer(context, partial):
    return [color for color in ("red", "green") if color.startswith(partial)]


@dataclass
class Completable:
    mode: Annotated[Mode, Positional()] = Mode.FAST
    verbose: Annotated[bool, Named(short_name="v")] = False
    volume: Annotated[int, Named()] = 0
    level: Annotated[int, Named(hidden=True)] = 0
    color: Annotated[str, Named(completer=color_completer)] = ""


def test_empty_token_offers_positional_values_and_names():
    assert get_completions(Completable, [], 0) == [
        "FAST",
        "SAFE",
        "SLOW",
        "/color",
        "/verbose",
        "/volume",
    ]


def test_positional_values_filtered_case_insensitively():
    assert get_completions(Completable, ["s"], 0) == ["SAFE", "SLOW"]


def test_named_argument_names():
    assert get_completions(Completable, ["/v"], 0) == ["/verbose", "/volume"]
    assert get_completions(Completable, ["--VO"], 0) == ["--volume"]


def test_named_argument_values():
    assert get_completions(Completable, ["/verbose="], 0) == ["/verbose=False", "/verbose=True"]
    assert get_completions(Completable, ["/verbose:t"], 0) == ["/verbose:True"]
    assert get_completions(Completable, ["/color=g"], 0) == ["/color=green"]


def test_hidden_arguments_are_not_completed():
    assert get_completions(Completable, ["/level="], 0) == []
    assert "/level" not in get_completions(Completable, ["/"], 0)


def test_consumed_arguments_are_not_offered_again():
    assert get_completions(Completable, ["/verbose", "/"], 1) == ["/color", "/volume"]


def test_positional_slot_advances():
    assert get_completions(Completable, ["fast", ""], 1) == ["/color", "/verbose", "/volume"]


def test_index_out_of_range():
    assert get_completions(Completable, ["a"], 5) == []
    assert get_completions(Completable, ["a"], -1) == []


def test_resolve_and_release_are_paired():
    calls = []

    def resolve():
        calls.append("resolve")
        return Completable()

    def release(instance):
        calls.append(("release", type(instance).__name__))

    get_completions(Completable, ["/v"], 0, resolve=resolve, release=release)
    assert calls == ["resolve", ("release", "Completable")]


def test_completer_sees_earlier_values():
    def echo_volume(context, partial):
        return [str(context.instance.volume)]

    @dataclass
    class Echo:
        volume: Annotated[int, Named()] = 0
        name: Annotated[str, Named(completer=echo_volume)] = ""

    completions = get_completions(Echo, ["/volume=7", "/name="], 1, resolve=Echo)
    assert completions == ["/name=7"]


def test_completer_object_with_get_completions():
    class Suggest:
        def get_completions(self, context, partial):
            return ["alpha", "beta"]

    @dataclass
    class Args:
        value: Annotated[str, Positional(completer=Suggest)] = ""

    assert get_completions(Args, ["a"], 0) == ["alpha", "beta"]
