"""Script parser - builds Script entities from script definitions.

A script defines either literal `code` (optionally with `revertCode`) or a
`call` to shared functions, never both. The resulting code is validated
before the Script is built:

- do code must not be empty
- revert code must differ from do code
- executable lines must not repeat (comment lines, blank lines and lines made
  only of common keywords such as `fi` are ignored)
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from tweakscript.compiler.calls import parse_function_calls
from tweakscript.definitions import ScriptDefinition, coerce_definition
from tweakscript.exceptions import (
    DuplicateLineError,
    InvalidArgumentError,
    InvalidScriptDefinitionError,
    MissingNameError,
)
from tweakscript.parser.context import ParseContext
from tweakscript.parser.docs import parse_doc_urls
from tweakscript.parser.spec import RecommendationLevel, Script, ScriptCode
from tweakscript.parser.syntax import LanguageSyntax

log = logging.getLogger(__name__)


def parse_script(
    definition: ScriptDefinition | Mapping[str, Any] | None,
    context: ParseContext | None,
) -> Script:
    """Parse a script definition into a Script.

    Args:
        definition: Raw script record or ScriptDefinition.
        context: Shared parse context (functions, syntax, compiler).

    Returns:
        The parsed, immutable Script.

    Raises:
        InvalidArgumentError: If definition or context is None.
        MissingNameError: If the script has no name.
        InvalidScriptDefinitionError: If code/call are both or neither set.
        DuplicateLineError: If compiled code repeats an executable line.
    """
    if definition is None:
        raise InvalidArgumentError("undefined script")
    if context is None:
        raise InvalidArgumentError("undefined context")

    definition = coerce_definition(ScriptDefinition, definition)
    if not definition.name:
        raise MissingNameError("script has no name")

    _ensure_either_code_or_call(definition)
    level = _parse_level(definition)
    docs = parse_doc_urls(definition.docs)
    code = _parse_code(definition, context)
    validate_code(definition.name, code, context.syntax)

    log.debug("Parsed script %r", definition.name)
    return Script(
        name=definition.name,
        code=code,
        documentation_urls=docs,
        level=level,
    )


def validate_code(name: str, code: ScriptCode, syntax: LanguageSyntax) -> None:
    """Validate the do and revert code of a script.

    Raises:
        InvalidScriptDefinitionError: If do code is empty or equals revert code.
        DuplicateLineError: If either code repeats an executable line.
    """
    if not code.execute or not code.execute.strip():
        raise InvalidScriptDefinitionError(f'code of script "{name}" is empty')
    if code.revert and code.revert == code.execute:
        raise InvalidScriptDefinitionError(
            f'code itself and its reverting code cannot be the same in "{name}"'
        )

    for text in (code.execute, code.revert):
        if not text:
            continue
        duplicates = find_duplicate_lines(text, syntax)
        if duplicates:
            raise DuplicateLineError(duplicates)


def find_duplicate_lines(code: str, syntax: LanguageSyntax) -> list[str]:
    """Return executable lines that occur more than once, in first-seen order."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for line in code.splitlines():
        if _should_ignore_line(line, syntax):
            continue
        if line in seen and line not in duplicates:
            duplicates.append(line)
        seen.add(line)
    return duplicates


def _should_ignore_line(line: str, syntax: LanguageSyntax) -> bool:
    stripped = line.strip().lower()
    if not stripped:
        return True
    delimiters = (d.lower() for d in syntax.comment_delimiters)
    if any(_starts_with_delimiter(stripped, d) for d in delimiters):
        return True
    return all(part in syntax.common_code_parts for part in stripped.split())


def _starts_with_delimiter(line: str, delimiter: str) -> bool:
    if not line.startswith(delimiter):
        return False
    # word delimiters such as REM must not match "remove-item"
    if delimiter[-1].isalnum() and len(line) > len(delimiter):
        return not line[len(delimiter)].isalnum()
    return True


def _ensure_either_code_or_call(definition: ScriptDefinition) -> None:
    has_code = bool(definition.code)
    has_call = bool(definition.call)
    if has_code and has_call:
        raise InvalidScriptDefinitionError(
            f'cannot define both "call" and "code" in script "{definition.name}"'
        )
    if not has_code and not has_call:
        raise InvalidScriptDefinitionError(
            f'must define either "call" or "code" in script "{definition.name}"'
        )
    if has_call and definition.revert_code:
        raise InvalidScriptDefinitionError(
            f'cannot define "revertCode" if "call" is defined in script '
            f'"{definition.name}"'
        )


def _parse_level(definition: ScriptDefinition) -> RecommendationLevel | None:
    if definition.recommend is None:
        return None
    try:
        return RecommendationLevel(definition.recommend.lower())
    except ValueError:
        allowed = ", ".join(level.value for level in RecommendationLevel)
        raise InvalidScriptDefinitionError(
            f'unknown level "{definition.recommend}" in script "{definition.name}", '
            f"expected one of: {allowed}"
        ) from None


def _parse_code(definition: ScriptDefinition, context: ParseContext) -> ScriptCode:
    if definition.code:
        return ScriptCode(
            execute=definition.code, revert=definition.revert_code or None
        )

    try:
        calls = parse_function_calls(definition.call)
    except InvalidArgumentError as exc:
        raise InvalidScriptDefinitionError(
            f'invalid call in script "{definition.name}": {exc}'
        ) from exc

    compiled = context.compiler.compile_calls(calls, context.functions)
    return ScriptCode(execute=compiled.code, revert=compiled.revert_code or None)
