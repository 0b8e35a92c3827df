"""Shared functions and the registry they are looked up from.

Functions reference each other by name only. Calls inside a composite
function are resolved when a call is compiled, never here.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Sequence, Union

from tweakscript.compiler.calls import FunctionCall, parse_function_calls
from tweakscript.compiler.expressions import RESERVED_NAMES
from tweakscript.compiler.spec import FunctionCode
from tweakscript.definitions import (
    FunctionDefinition,
    ParameterDefinition,
    coerce_definition,
)
from tweakscript.exceptions import (
    DuplicateFunctionError,
    FunctionNotFoundError,
    InvalidArgumentError,
    InvalidFunctionDefinitionError,
)

log = logging.getLogger(__name__)

PARAMETER_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class FunctionParameter:
    """A declared parameter of a shared function."""

    name: str
    is_required: bool = True


FunctionBody = Union[FunctionCode, tuple[FunctionCall, ...]]


@dataclass(frozen=True)
class SharedFunction:
    """A named, parameterized unit of code or of nested calls."""

    name: str
    parameters: tuple[FunctionParameter, ...]
    body: FunctionBody

    @property
    def parameter_names(self) -> list[str]:
        return [p.name for p in self.parameters]

    @property
    def code(self) -> FunctionCode | None:
        """Inline body, or None for functions that only call others."""
        return self.body if isinstance(self.body, FunctionCode) else None

    @property
    def calls(self) -> tuple[FunctionCall, ...]:
        return () if isinstance(self.body, FunctionCode) else self.body


class FunctionRegistry:
    """Immutable name -> SharedFunction lookup."""

    def __init__(self, functions: Sequence[SharedFunction] = ()):
        by_key: dict[str, SharedFunction] = {}
        for func in functions:
            key = func.name.lower()
            if key in by_key:
                raise DuplicateFunctionError(func.name)
            by_key[key] = func
        self._functions = by_key

    def get_function_by_name(self, name: str) -> SharedFunction:
        """Look up a function.

        Raises:
            InvalidArgumentError: If name is empty.
            FunctionNotFoundError: If no function has that name.
        """
        if not name:
            raise InvalidArgumentError("undefined function name")
        func = self._functions.get(name.lower())
        if func is None or func.name != name:
            raise FunctionNotFoundError(name)
        return func

    def __contains__(self, name: object) -> bool:
        return (
            isinstance(name, str)
            and name.lower() in self._functions
            and self._functions[name.lower()].name == name
        )

    def __iter__(self) -> Iterator[SharedFunction]:
        return iter(self._functions.values())

    def __len__(self) -> int:
        return len(self._functions)


def parse_functions(
    definitions: Sequence[FunctionDefinition | Mapping[str, Any]] | None,
) -> FunctionRegistry:
    """Validate function definitions and build the registry.

    Every definition is validated before any SharedFunction is built.

    Raises:
        DuplicateFunctionError: If two functions share a name.
        InvalidFunctionDefinitionError: If a definition is malformed.
    """
    if definitions is None:
        return FunctionRegistry()

    parsed: list[FunctionDefinition] = []
    for definition in definitions:
        if definition is None:
            raise InvalidFunctionDefinitionError("some functions are undefined")
        parsed.append(coerce_definition(FunctionDefinition, definition))

    _ensure_valid_functions(parsed)
    functions = [_parse_function(d) for d in parsed]
    log.debug("Registered %d shared function(s)", len(functions))
    return FunctionRegistry(functions)


def _ensure_valid_functions(definitions: list[FunctionDefinition]) -> None:
    seen_names: set[str] = set()
    for definition in definitions:
        if not definition.name:
            raise InvalidFunctionDefinitionError("function name(s) are missing")
        key = definition.name.lower()
        if key in seen_names:
            raise DuplicateFunctionError(definition.name)
        seen_names.add(key)
        _ensure_either_code_or_call(definition)
        _ensure_valid_parameters(definition.name, definition.parameters)

    _ensure_no_duplicate_code(definitions)


def _ensure_either_code_or_call(definition: FunctionDefinition) -> None:
    has_code = bool(definition.code)
    has_call = bool(definition.call)
    if has_code and has_call:
        raise InvalidFunctionDefinitionError(
            f'both "code" and "call" are defined in "{definition.name}"'
        )
    if not has_code and not has_call:
        raise InvalidFunctionDefinitionError(
            f'neither "code" or "call" is defined in "{definition.name}"'
        )
    if has_call and definition.revert_code:
        raise InvalidFunctionDefinitionError(
            f'"revertCode" cannot be used with "call" in "{definition.name}"'
        )


def _ensure_valid_parameters(
    function_name: str, parameters: Sequence[ParameterDefinition]
) -> None:
    seen: set[str] = set()
    for parameter in parameters:
        if not parameter.name or not PARAMETER_NAME_PATTERN.match(parameter.name):
            raise InvalidFunctionDefinitionError(
                f'invalid parameter name "{parameter.name}" in function '
                f'"{function_name}"; use letters, digits and underscores'
            )
        if parameter.name in RESERVED_NAMES:
            raise InvalidFunctionDefinitionError(
                f'parameter name "{parameter.name}" in function "{function_name}" '
                "is a reserved word"
            )
        if parameter.name in seen:
            raise InvalidFunctionDefinitionError(
                f'duplicate parameter name "{parameter.name}" in function '
                f'"{function_name}"'
            )
        seen.add(parameter.name)


def _ensure_no_duplicate_code(definitions: list[FunctionDefinition]) -> None:
    for attribute in ("code", "revert_code"):
        owners: dict[str, str] = {}
        for definition in definitions:
            code = getattr(definition, attribute)
            if not code:
                continue
            if code in owners:
                raise InvalidFunctionDefinitionError(
                    f'functions "{owners[code]}" and "{definition.name}" '
                    f"have duplicate {attribute.replace('_', ' ')}"
                )
            owners[code] = definition.name or ""


def _parse_function(definition: FunctionDefinition) -> SharedFunction:
    if not definition.name:
        raise InvalidFunctionDefinitionError("function name(s) are missing")
    parameters = tuple(
        FunctionParameter(name=p.name or "", is_required=p.required)
        for p in definition.parameters
    )
    body: FunctionBody
    if definition.code:
        body = FunctionCode(do=definition.code, revert=definition.revert_code or "")
    else:
        try:
            body = parse_function_calls(definition.call)
        except InvalidArgumentError as exc:
            raise InvalidFunctionDefinitionError(
                f'invalid call in function "{definition.name}": {exc}'
            ) from exc
    return SharedFunction(name=definition.name, parameters=parameters, body=body)
