"""Parse context shared by every script of a collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from tweakscript.compiler.call_compiler import FunctionCallCompiler
from tweakscript.compiler.functions import FunctionRegistry, parse_functions
from tweakscript.definitions import FunctionDefinition
from tweakscript.parser.spec import ScriptingLanguage
from tweakscript.parser.syntax import LanguageSyntax, get_syntax


@dataclass(frozen=True)
class ParseContext:
    """Function registry, language syntax and call compiler for parsing."""

    functions: FunctionRegistry
    syntax: LanguageSyntax
    compiler: FunctionCallCompiler = field(default_factory=FunctionCallCompiler)

    @classmethod
    def create(
        cls,
        language: ScriptingLanguage | str,
        functions: Sequence[FunctionDefinition | Mapping[str, Any]] | None = None,
    ) -> "ParseContext":
        """Build a context from raw function definitions and a language."""
        return cls(functions=parse_functions(functions), syntax=get_syntax(language))
