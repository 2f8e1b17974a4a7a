import logging

import pytest

import clasp.__main__ as main_module
from clasp.__main__ import LogMode, build_loop, find_clasp_config, main


@pytest.fixture
def no_loop(monkeypatch):
    calls = {}

    async def fake_run(self):
        calls["verbs"] = [descriptor.name for descriptor in self.verbs]
        calls["prompt"] = self.options.prompt

    def fake_setup_logging(mode=None, **kwargs):
        calls["log_mode"] = mode
        calls["console_log_level"] = kwargs.get("console_log_level")

    monkeypatch.setattr(main_module.Loop, "run", fake_run)
    monkeypatch.setattr(main_module, "setup_logging", fake_setup_logging)
    return calls


def test_help_returns_zero(no_loop, capsys):
    assert main(["/?"]) == 0
    assert "Usage: clasp" in capsys.readouterr().err
    assert "verbs" not in no_loop


def test_bad_arguments_return_one(no_loop, capsys):
    assert main(["/bogus"]) == 1
    assert "Unrecognized argument '/bogus'." in capsys.readouterr().err


def test_runs_builtin_loop_without_config(no_loop, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("CLASP_CONFIG", raising=False)
    main(["/logmode=json", "/verbose"])
    assert no_loop["verbs"] == ["help", "exit"]
    assert no_loop["log_mode"] == "json"
    assert no_loop["console_log_level"] == logging.DEBUG


def test_runs_loop_from_config(no_loop, sample_verbs_dir):
    path = sample_verbs_dir / "verbs.yaml"
    path.write_text(
        'prompt: "demo> "\nverbs:\n  - name: hello\n    target: sample_verbs.Hello\n',
        encoding="UTF-8",
    )
    main([f"/config={path}"])
    assert no_loop["verbs"] == ["hello", "help", "exit"]
    assert no_loop["prompt"] == "demo> "
    assert no_loop["log_mode"] is None
    assert no_loop["console_log_level"] == logging.WARNING


def test_find_clasp_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("CLASP_CONFIG", raising=False)
    assert find_clasp_config() is None
    (tmp_path / "clasp.toml").write_text("", encoding="UTF-8")
    assert find_clasp_config() == tmp_path / "clasp.toml"


def test_build_loop_without_config():
    loop = build_loop(None)
    assert [descriptor.name for descriptor in loop.verbs] == ["help", "exit"]


def test_log_mode_values():
    assert [mode.value for mode in LogMode] == ["cli", "json"]
