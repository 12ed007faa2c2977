import pytest

from runfile.environment import Environment
from runfile.exceptions import ArgumentError


def test_environment_parsing():
    text = '-Message "feat: x" -Version 0.3.0 foo bar baz'
    env = Environment.parse(text)
    assert env.positional == ("foo", "bar", "baz")
    assert dict(env.named) == {"Message": "feat: x", "Version": "0.3.0"}


def test_flag_dashes_are_stripped():
    env = Environment.parse("--Name value")
    assert dict(env.named) == {"Name": "value"}


def test_flag_followed_by_flag_is_error():
    with pytest.raises(ArgumentError, match="-Version is missing a value"):
        Environment.parse("-Version -Other x")


def test_trailing_flag_is_dropped():
    env = Environment.parse("one -Verbose")
    assert env.positional == ("one",)
    assert dict(env.named) == {}


def test_from_argv_preserves_whitespace():
    env = Environment.from_argv(["-Message", "hello there world", "first arg"])
    assert dict(env.named) == {"Message": "hello there world"}
    assert env.positional == ("first arg",)


def test_environment_is_read_only():
    env = Environment.parse("-A b")
    with pytest.raises(TypeError):
        env.named["A"] = "c"  # type: ignore[index]


def test_lookup_positional_and_named():
    env = Environment(named={"Bin": "binary", "0": "zero"}, positional=("first", "second"))
    assert env.lookup("1") == "first"
    assert env.lookup("2") == "second"
    assert env.lookup("3") is None
    assert env.lookup("Bin") == "binary"
    assert env.lookup("0") == "zero"
    assert env.lookup("Missing") is None


def test_environments_compare_by_value():
    assert Environment.parse("-A b c") == Environment(named={"A": "b"}, positional=("c",))
