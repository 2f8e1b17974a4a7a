import importlib

import pytest

from clasp.exceptions import VerbError
from clasp.repl import VerbDescriptor, resolve_verbs, verb


def test_verb_decorator_defaults_name():
    @verb(help_text="Does things.")
    class DoThings:
        def execute(self, loop, context):
            pass

    descriptor = VerbDescriptor.from_type(DoThings)
    assert descriptor.name == "dothings"
    assert descriptor.help_text == "Does things."
    assert descriptor.implementing_type is DoThings


def test_verb_requires_execute():
    with pytest.raises(VerbError):

        @verb("broken")
        class Broken:
            pass


def test_from_type_requires_decorator():
    class Plain:
        def execute(self, loop, context):
            pass

    with pytest.raises(VerbError):
        VerbDescriptor.from_type(Plain)


@pytest.mark.parametrize("name", ["", "two words", " padded"])
def test_descriptor_rejects_invalid_names(name):
    with pytest.raises(VerbError):
        VerbDescriptor(name)


def test_descriptor_key_is_lowercase():
    assert VerbDescriptor("MixedCase").key == "mixedcase"


def test_resolve_verbs_scans_module(sample_verbs_dir):
    module = importlib.import_module("sample_verbs")
    names = [descriptor.name for descriptor in resolve_verbs(module)]
    assert names == ["hello", "ping", "help", "exit"]


def test_resolve_verbs_without_builtins(sample_verbs_dir):
    module = importlib.import_module("sample_verbs")
    names = [descriptor.name for descriptor in resolve_verbs(module, include_builtins=False)]
    assert names == ["hello", "ping"]
