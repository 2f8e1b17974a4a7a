import io
from dataclasses import dataclass
from typing import Annotated

import pytest
from rich.console import Console

from clasp.parser import Named, Positional
from clasp.repl import Loop, LoopOptions, VerbDescriptor, exit_verb, help_verb
from clasp.signals import QuitSignal


@dataclass
class Greet:
    name: Annotated[str, Positional(help="Who to greet.")] = "world"
    loud: Annotated[bool, Named(short_name="l")] = False

    def execute(self, loop, context):
        message = f"Hello, {self.name}!"
        loop.console.print(message.upper() if self.loud else message)


@dataclass
class Count:
    values: Annotated[list[int], Positional()]

    async def execute(self, loop, context):
        context.append(sum(self.values))


@dataclass
class Rename:
    source: Annotated[str, Positional()]
    target: Annotated[str, Positional()]
    force: Annotated[bool, Named()] = False

    def execute(self, loop, context):
        context.append((self.source, self.target, self.force))


class Boom:
    def execute(self, loop, context):
        raise RuntimeError("kaboom")


def make_loop(options=None, context=None, prompt_session=None):
    console = Console(file=io.StringIO(), width=100, record=True)
    verbs = [
        VerbDescriptor("greet", Greet, "Say hello."),
        VerbDescriptor("count", Count, "Add numbers."),
        VerbDescriptor("boom", Boom, "Always fails."),
        VerbDescriptor("rename", Rename, "Rename a file."),
        VerbDescriptor("stub"),
        help_verb(),
        exit_verb(),
    ]
    return Loop(verbs, options, context, console, prompt_session)


def output(loop):
    return loop.console.export_text()


@pytest.mark.asyncio
async def test_empty_input_continues():
    loop = make_loop()
    assert await loop.execute_once([]) is True
    assert await loop.execute_once(None) is True


@pytest.mark.asyncio
async def test_sync_verb_executes():
    loop = make_loop()
    assert await loop.execute_once(["GREET", "bob", "/l"]) is True
    assert "HELLO, BOB!" in output(loop)


@pytest.mark.asyncio
async def test_async_verb_receives_context():
    results = []
    loop = make_loop(context=results)
    assert await loop.execute_once(["count", "1", "2", "3"])
    assert results == [6]


@pytest.mark.asyncio
async def test_verb_with_required_fields_is_built_from_arguments():
    results = []
    loop = make_loop(context=results)
    assert await loop.execute_once(["rename", "a.txt", "b.txt", "/force"]) is True
    assert results == [("a.txt", "b.txt", True)]


@pytest.mark.asyncio
async def test_verb_with_missing_required_field_reports_usage():
    results = []
    loop = make_loop(context=results)
    assert await loop.execute_once(["rename", "a.txt"]) is True
    assert results == []
    text = output(loop)
    assert "Missing required argument" in text
    assert "Invalid usage." in text


@pytest.mark.asyncio
async def test_unknown_verb_suggests():
    loop = make_loop()
    assert await loop.execute_once(["gret"]) is True
    assert "Unrecognized verb: 'gret'. Did you mean: greet?" in output(loop)


@pytest.mark.asyncio
async def test_verb_without_implementation():
    loop = make_loop()
    assert await loop.execute_once(["stub"]) is True
    assert "Verb 'stub' has no implementation." in output(loop)


@pytest.mark.asyncio
async def test_invalid_usage_is_reported():
    loop = make_loop()
    assert await loop.execute_once(["greet", "/bogus"]) is True
    text = output(loop)
    assert "Unrecognized argument '/bogus'." in text
    assert "Invalid usage." in text
    assert "Hello" not in text


@pytest.mark.asyncio
async def test_verb_exception_is_reported():
    loop = make_loop()
    assert await loop.execute_once(["boom"]) is True
    assert "An error occurred while executing 'boom': kaboom" in output(loop)


@pytest.mark.asyncio
async def test_exit_verb_stops_loop():
    loop = make_loop()
    assert await loop.execute_once(["exit"]) is False
    assert loop.exit is True


@pytest.mark.asyncio
async def test_help_lists_verbs():
    loop = make_loop()
    await loop.execute_once(["help"])
    text = output(loop)
    assert "Verbs:" in text
    assert "greet" in text
    assert "Say hello." in text
    assert "Exits the loop." in text


@pytest.mark.asyncio
async def test_help_for_one_verb():
    loop = make_loop()
    await loop.execute_once(["help", "greet"])
    text = output(loop)
    assert "Usage: greet" in text
    assert "Who to greet." in text


@pytest.mark.asyncio
async def test_help_for_unknown_verb():
    loop = make_loop()
    await loop.execute_once(["help", "zzz"])
    assert "No verb found for 'zzz'." in output(loop)


@pytest.mark.asyncio
async def test_resolve_and_release_wrap_each_execution():
    events = []

    def resolve(implementing_type):
        events.append(("resolve", implementing_type.__name__))
        return implementing_type()

    def release(instance):
        events.append(("release", type(instance).__name__))

    loop = make_loop(LoopOptions(resolve=resolve, release=release))
    await loop.execute_once(["greet"])
    await loop.execute_once(["boom"])
    await loop.execute_once(["exit"])
    assert events == [
        ("resolve", "Greet"),
        ("release", "Greet"),
        ("resolve", "Boom"),
        ("release", "Boom"),
    ]


def test_tokenize_input_strips_comments():
    loop = make_loop(LoopOptions(end_of_line_comment_character="#"))
    assert loop.tokenize_input("greet bob # trailing") == ["greet", "bob"]
    assert loop.tokenize_input("# only a comment") == []


def test_tokenize_input_reports_errors():
    loop = make_loop()
    assert loop.tokenize_input('greet "bob') is None
    assert "Invalid input: Unterminated quote at column 7" in output(loop)


def test_comment_character_validation():
    with pytest.raises(ValueError):
        LoopOptions(end_of_line_comment_character="##")
    with pytest.raises(ValueError):
        LoopOptions(end_of_line_comment_character='"')


def test_generate_completions():
    loop = make_loop()
    assert loop.generate_completions([""], 0) == [
        "boom", "count", "exit", "greet", "help", "rename", "stub"
    ]
    assert loop.generate_completions(["GR"], 0) == ["greet"]
    assert loop.generate_completions(["greet", "/"], 1) == ["/loud"]
    assert loop.generate_completions(["nothing", ""], 1) == []
    assert loop.generate_completions(["stub", ""], 1) == []


def test_generate_completions_releases_instances():
    released = []
    loop = make_loop(LoopOptions(resolve=lambda verb_type: verb_type(), release=released.append))
    loop.generate_completions(["greet", "/l"], 1)
    assert len(released) == 1
    assert isinstance(released[0], Greet)


def test_generate_completions_without_factory_skips_construction():
    released = []
    loop = make_loop(LoopOptions(release=released.append))
    assert loop.generate_completions(["rename", "old", "/"], 2) == ["/force"]
    assert released == []


def test_add_verb_replaces_existing():
    loop = make_loop()
    loop.add_verb(VerbDescriptor("GREET", Boom, "Replaced."))
    assert loop.get_verb("greet").implementing_type is Boom
    assert len([verb for verb in loop.verbs if verb.key == "greet"]) == 1


class FakeSession:
    def __init__(self, lines):
        self.lines = list(lines)

    async def prompt_async(self):
        if not self.lines:
            raise QuitSignal()
        line = self.lines.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line


@pytest.mark.asyncio
async def test_run_until_exit():
    loop = make_loop(prompt_session=FakeSession(["greet bob", "", "exit", "greet never"]))
    await loop.run()
    text = output(loop)
    assert "Hello, bob!" in text
    assert "never" not in text


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [EOFError(), KeyboardInterrupt(), QuitSignal()])
async def test_run_stops_on_end_of_input(error):
    loop = make_loop(prompt_session=FakeSession(["greet a", error, "greet b"]))
    await loop.run()
    text = output(loop)
    assert "Hello, a!" in text
    assert "Hello, b!" not in text


@pytest.mark.asyncio
async def test_run_continues_after_bad_input():
    loop = make_loop(prompt_session=FakeSession(['greet "open', "greet ok"]))
    await loop.run()
    text = output(loop)
    assert "Invalid input" in text
    assert "Hello, ok!" in text
