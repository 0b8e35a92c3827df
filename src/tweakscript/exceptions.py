"""tweakscript exceptions

Every failure raised while parsing or compiling definitions. All of them are
authoring defects: they abort the whole parse/compile call and are never
retried.
"""

from __future__ import annotations

from typing import Sequence


class TweakScriptError(Exception):
    """Base exception for all tweakscript errors."""

    pass


class InvalidArgumentError(TweakScriptError, ValueError):
    """Raised when a required input to a parser or compiler is missing."""

    pass


class FunctionNotFoundError(TweakScriptError):
    """Raised when a call references a function that is not registered."""

    def __init__(self, function_name: str):
        self.function_name = function_name
        super().__init__(f'called function is not defined: "{function_name}"')


class ParameterMismatchError(TweakScriptError):
    """Raised when a call provides arguments the function does not declare."""

    def __init__(
        self,
        function_name: str,
        unexpected: Sequence[str],
        expected: Sequence[str],
    ):
        self.function_name = function_name
        self.unexpected = list(unexpected)
        self.expected = list(expected)
        expected_text = _quote_all(self.expected) if self.expected else "none"
        super().__init__(
            f'Function "{function_name}" has unexpected parameter(s) provided: '
            f"{_quote_all(self.unexpected)}. Expected parameter(s): {expected_text}"
        )


class MissingArgumentError(TweakScriptError):
    """Raised when an expression references an argument that was not given."""

    pass


class InvalidExpressionError(TweakScriptError):
    """Raised when a code template cannot be parsed."""

    pass


class CyclicFunctionDefinitionError(TweakScriptError):
    """Raised when function calls recurse into themselves or nest too deep."""

    def __init__(self, call_path: Sequence[str], reason: str = "cyclic call detected"):
        self.call_path = list(call_path)
        super().__init__(f"{reason}: {' -> '.join(self.call_path)}")


class InvalidFunctionDefinitionError(TweakScriptError):
    """Raised when a shared function definition is malformed."""

    pass


class DuplicateFunctionError(TweakScriptError):
    """Raised when two shared functions have the same name."""

    def __init__(self, function_name: str):
        self.function_name = function_name
        super().__init__(f'duplicate function name: "{function_name}"')


class InvalidScriptDefinitionError(TweakScriptError):
    """Raised when a script definition is malformed."""

    pass


class UndefinedCategoryError(TweakScriptError):
    """Raised when a category definition is missing entirely."""

    def __init__(self) -> None:
        super().__init__("category is null or undefined")


class MissingNameError(TweakScriptError):
    """Raised when a category or script has no name."""

    pass


class EmptyCategoryError(TweakScriptError):
    """Raised when a category has no children."""

    def __init__(self, category_name: str):
        self.category_name = category_name
        super().__init__(f'category has no children: "{category_name}"')


class DuplicateLineError(TweakScriptError):
    """Raised when compiled code repeats an executable line."""

    def __init__(self, duplicate_lines: Sequence[str]):
        self.duplicate_lines = list(duplicate_lines)
        super().__init__(
            "Duplicates detected in script:\n" + "\n".join(self.duplicate_lines)
        )


class UnsupportedLanguageError(TweakScriptError):
    """Raised when no code builder exists for a scripting language."""

    def __init__(self, language: object):
        self.language = language
        super().__init__(f"unsupported scripting language: {language!r}")


class InvalidCollectionError(TweakScriptError):
    """Raised when a collection definition is malformed."""

    pass


class DefinitionLoadError(TweakScriptError):
    """Raised when a definitions file cannot be read or decoded."""

    pass


def _quote_all(names: Sequence[str]) -> str:
    return ", ".join(f'"{name}"' for name in names)
