import sys
import textwrap

import pytest

SAMPLE_VERBS = textwrap.dedent(
    """
    from dataclasses import dataclass
    from typing import Annotated

    from clasp import Positional, verb


    @verb("hello", help_text="Say hello.")
    @dataclass
    class Hello:
        name: Annotated[str, Positional()] = "world"

        def execute(self, loop, context):
            loop.console.print(f"Hello, {self.name}!")


    @verb()
    class Ping:
        def execute(self, loop, context):
            loop.console.print("pong")


    class NotAVerb:
        pass
    """
)


@pytest.fixture
def sample_verbs_dir(tmp_path, monkeypatch):
    (tmp_path / "sample_verbs.py").write_text(SAMPLE_VERBS, encoding="UTF-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, "sample_verbs", raising=False)
    return tmp_path
