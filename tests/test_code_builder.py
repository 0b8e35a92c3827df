"""Tests for code builders and the builder factory."""

import pytest

from tweakscript.exceptions import InvalidArgumentError, UnsupportedLanguageError
from tweakscript.generation import BatchBuilder, ShellBuilder, create_code_builder
from tweakscript.parser import ScriptingLanguage

HYPHENS = "-" * 58


@pytest.mark.parametrize(
    "language,expected",
    [
        ("shellscript", ShellBuilder),
        (ScriptingLanguage.SHELLSCRIPT, ShellBuilder),
        ("batchfile", BatchBuilder),
        (ScriptingLanguage.BATCHFILE, BatchBuilder),
    ],
)
def test_factory_creates_builder(language, expected):
    assert isinstance(create_code_builder(language), expected)


def test_factory_returns_fresh_builders():
    assert create_code_builder("shellscript") is not create_code_builder("shellscript")


@pytest.mark.parametrize("language", ["powershell", "", None])
def test_factory_rejects_unknown_language(language):
    with pytest.raises(UnsupportedLanguageError):
        create_code_builder(language)


def test_shell_function_section():
    code = ShellBuilder().append_function("test", "echo hi").to_string()
    assert code.split("\n") == [
        f"# {HYPHENS}",
        f"# {'-' * 27}test{'-' * 27}",
        f"# {HYPHENS}",
        "echo '--- test'",
        "echo hi",
        f"# {HYPHENS}",
    ]


def test_batch_function_section():
    code = BatchBuilder().append_function("test", "del a").to_string()
    assert code.split("\r\n") == [
        f":: {HYPHENS}",
        f":: {'-' * 27}test{'-' * 27}",
        f":: {HYPHENS}",
        "echo --- test",
        "del a",
        f":: {HYPHENS}",
    ]


def test_odd_padding_puts_extra_hyphen_after_name():
    builder = ShellBuilder().append_comment_line_with_hyphens_around("abc")
    header = builder.to_string().split("\n")[1]
    assert header == f"# {'-' * 27}abc{'-' * 28}"


def test_long_section_name_is_a_single_comment():
    name = "x" * 60
    builder = ShellBuilder().append_comment_line_with_hyphens_around(name)
    assert builder.to_string() == f"# {name}"


def test_shell_echo_escapes_single_quotes():
    assert ShellBuilder().write_standard_out("--- it's") == "echo '--- it'\\''s'"


def test_batch_echo_escapes_special_characters():
    assert BatchBuilder().write_standard_out("a & b 100%") == "echo a ^& b 100%%"


def test_append_line_splits_lines():
    builder = ShellBuilder().append_line("a\r\nb\n\nc")
    assert builder.current_line == 3
    assert builder.to_string() == "a\nb\nc"


def test_append_empty_line():
    builder = ShellBuilder().append_line("a").append_line().append_line("b")
    assert builder.to_string() == "a\n\nb"


def test_batch_uses_crlf():
    assert str(BatchBuilder().append_line("a").append_line("b")) == "a\r\nb"


def test_empty_comment_has_no_trailing_space():
    assert ShellBuilder().append_comment_line().to_string() == "#"


@pytest.mark.parametrize("name,code", [("", "x"), ("n", "")])
def test_append_function_requires_name_and_code(name, code):
    with pytest.raises(InvalidArgumentError):
        ShellBuilder().append_function(name, code)
