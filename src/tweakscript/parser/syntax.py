"""Per-language syntax knowledge used while validating script code."""

from __future__ import annotations

from dataclasses import dataclass

from tweakscript.exceptions import UnsupportedLanguageError
from tweakscript.parser.spec import ScriptingLanguage


@dataclass(frozen=True)
class LanguageSyntax:
    """Comment delimiters and lines too common to count as duplicates."""

    comment_delimiters: tuple[str, ...]
    common_code_parts: tuple[str, ...] = ()


SHELL_SCRIPT_SYNTAX = LanguageSyntax(
    comment_delimiters=("#",),
    common_code_parts=("(", ")", "else", "fi"),
)

BATCH_FILE_SYNTAX = LanguageSyntax(
    comment_delimiters=("REM", "::"),
    common_code_parts=("(", ")", "else"),
)

_SYNTAXES = {
    ScriptingLanguage.SHELLSCRIPT: SHELL_SCRIPT_SYNTAX,
    ScriptingLanguage.BATCHFILE: BATCH_FILE_SYNTAX,
}


def resolve_language(value: ScriptingLanguage | str | None) -> ScriptingLanguage:
    """Convert a language identifier to a ScriptingLanguage.

    Raises:
        UnsupportedLanguageError: If value is not a known identifier.
    """
    if isinstance(value, ScriptingLanguage):
        return value
    try:
        return ScriptingLanguage(value)
    except ValueError:
        raise UnsupportedLanguageError(value) from None


def get_syntax(language: ScriptingLanguage | str) -> LanguageSyntax:
    """Return the syntax of a scripting language."""
    return _SYNTAXES[resolve_language(language)]
