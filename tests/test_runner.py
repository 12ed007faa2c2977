import io
import logging
import sys

import pytest

from runfile.config import Config
from runfile.environment import Environment
from runfile.exceptions import ParseError, ScriptNotFound
from runfile.pipeline import ExecutionContext
from runfile.runner import ScriptRunner, resolve_script

PY = sys.executable


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


def make_runner(tmp_path, output, **config) -> ScriptRunner:
    return ScriptRunner(Config(**config), context=ExecutionContext(cwd=tmp_path, output=output))


def test_runs_items_in_order(tmp_path, output):
    (tmp_path / "a.txt").write_text("data")
    script = f"""
    // copy things around
    cp a.txt b.txt; cp b.txt c.txt
    "{PY}" -c "print('v' + '$(Version)')" > version.txt
    """
    runner = make_runner(tmp_path, output)
    assert runner.run(script, Environment(named={"Version": "0.3.0"}))
    assert (tmp_path / "c.txt").read_text() == "data"
    assert (tmp_path / "version.txt").read_text().strip() == "v0.3.0"
    lines = output.getvalue().splitlines()
    assert lines[:3] == ["// copy things around", "cp a.txt b.txt", "cp b.txt c.txt"]


def test_dry_run_prints_literals(tmp_path, output):
    (tmp_path / "a.txt").write_text("data")
    script = "// plan\ncp a.txt $(1)\n- rm *.txt | sort > listing.txt"
    runner = make_runner(tmp_path, output, dry_run=True)
    assert runner.run(script, Environment(positional=("b.txt",)))
    assert output.getvalue().splitlines() == [
        "// plan",
        "cp a.txt $(1)",
        "- rm *.txt | sort > listing.txt",
        "  => listing.txt",
    ]
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.txt"]


def test_failure_stops_run(tmp_path, output, caplog):
    (tmp_path / "a.txt").write_text("data")
    runner = make_runner(tmp_path, output)
    assert not runner.run("cp missing.txt x.txt\ncp a.txt b.txt")
    assert not (tmp_path / "b.txt").exists()
    assert "cp missing.txt x.txt" in caplog.text


def test_ignored_failure_continues(tmp_path, output, caplog):
    (tmp_path / "a.txt").write_text("data")
    runner = make_runner(tmp_path, output)
    with caplog.at_level(logging.WARNING):
        assert runner.run("- cp missing.txt x.txt\ncp a.txt b.txt")
    assert (tmp_path / "b.txt").read_text() == "data"
    assert "(ignored)" in caplog.text


def test_parse_error_runs_nothing(tmp_path, output):
    (tmp_path / "a.txt").write_text("data")
    runner = make_runner(tmp_path, output)
    with pytest.raises(ParseError):
        runner.run("cp a.txt b.txt\nrun $(Unknown)")
    assert not (tmp_path / "b.txt").exists()
    assert output.getvalue() == ""


def test_strict_config_reaches_executor(tmp_path, output):
    runner = make_runner(tmp_path, output, strict=True)
    assert not runner.run(f'"{PY}" -c "raise SystemExit(4)"')


def test_resolve_script_adds_suffix(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "build.run").write_text("echo hi\n")
    assert resolve_script("build").name == "build.run"
    assert resolve_script("build.run").name == "build.run"


def test_resolve_script_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ScriptNotFound):
        resolve_script("deploy")
