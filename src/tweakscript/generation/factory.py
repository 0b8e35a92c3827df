"""Code builder factory keyed by scripting language."""

from __future__ import annotations

from typing import Callable

from tweakscript.exceptions import UnsupportedLanguageError
from tweakscript.generation.builder import BatchBuilder, CodeBuilder, ShellBuilder
from tweakscript.parser.spec import ScriptingLanguage

_BUILDERS: dict[ScriptingLanguage, Callable[[], CodeBuilder]] = {
    ScriptingLanguage.SHELLSCRIPT: ShellBuilder,
    ScriptingLanguage.BATCHFILE: BatchBuilder,
}


def create_code_builder(language: ScriptingLanguage | str) -> CodeBuilder:
    """Create a fresh builder for a scripting language.

    Args:
        language: A ScriptingLanguage or its identifier ("shellscript",
            "batchfile").

    Raises:
        UnsupportedLanguageError: If the language has no builder.
    """
    try:
        factory = _BUILDERS[ScriptingLanguage(language)]
    except (ValueError, KeyError):
        raise UnsupportedLanguageError(language) from None
    return factory()
