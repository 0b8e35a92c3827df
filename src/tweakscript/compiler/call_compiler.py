"""Function call compiler - expands call sequences into flat do/revert code.

Algorithm:
1. Resolve every call's function by name in the registry
2. Reject arguments the function does not declare
3. Inline functions: render do/revert templates with the call's arguments
4. Composite functions: render each nested call's arguments against the
   outer call's arguments, then expand the nested call (depth-first)
5. Join the fragments' code and revert code independently, skipping empty
   fragments

Arguments are fully rendered before recursing, so no unresolved expression
ever crosses a call boundary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from tweakscript.compiler.calls import FunctionCall, FunctionCallArgumentCollection
from tweakscript.compiler.expressions import ExpressionsCompiler
from tweakscript.compiler.functions import FunctionRegistry, SharedFunction
from tweakscript.compiler.spec import CompiledCode
from tweakscript.exceptions import (
    CyclicFunctionDefinitionError,
    InvalidArgumentError,
    ParameterMismatchError,
)

log = logging.getLogger(__name__)

MAX_CALL_DEPTH = 64


@dataclass
class _CompilationContext:
    functions: FunctionRegistry
    expressions: ExpressionsCompiler
    call_stack: list[str]


class FunctionCallCompiler:
    """Compiles calls to shared functions into CompiledCode."""

    def __init__(self, expressions_compiler: ExpressionsCompiler | None = None):
        self.expressions_compiler = expressions_compiler or ExpressionsCompiler()

    def compile_calls(
        self, calls: Sequence[FunctionCall], functions: FunctionRegistry
    ) -> CompiledCode:
        """Expand a call sequence into do and revert code.

        Args:
            calls: Top-level calls, compiled in order.
            functions: Registry to resolve function names from.

        Returns:
            CompiledCode with newline-joined code and revert code.

        Raises:
            InvalidArgumentError: If functions, calls or a call is None.
            FunctionNotFoundError: If a call names an unknown function.
            ParameterMismatchError: If a call passes undeclared arguments.
            CyclicFunctionDefinitionError: If calls recurse into themselves.
        """
        if functions is None:
            raise InvalidArgumentError("undefined functions")
        if calls is None:
            raise InvalidArgumentError("undefined calls")
        if any(call is None for call in calls):
            raise InvalidArgumentError("undefined function call")

        context = _CompilationContext(
            functions=functions,
            expressions=self.expressions_compiler,
            call_stack=[],
        )

        fragments: list[CompiledCode] = []
        for call in calls:
            fragments.extend(_compile_single_call(call, context))

        log.debug(
            "Compiled %d call(s) into %d fragment(s)", len(calls), len(fragments)
        )
        return CompiledCode(
            code=_merge(f.code for f in fragments),
            revert_code=_merge(f.revert_code for f in fragments),
        )


def _compile_single_call(
    call: FunctionCall, context: _CompilationContext
) -> list[CompiledCode]:
    func = context.functions.get_function_by_name(call.function_name)
    _ensure_arguments_are_declared(func, call.arguments)

    _enter(func.name, context)
    try:
        if func.code is not None:
            return [
                CompiledCode(
                    code=context.expressions.compile_expressions(
                        func.code.do, call.arguments
                    ),
                    revert_code=context.expressions.compile_expressions(
                        func.code.revert, call.arguments
                    ),
                )
            ]

        fragments: list[CompiledCode] = []
        for inner_call in func.calls:
            compiled_args = _compile_arguments(
                inner_call.arguments, call.arguments, context.expressions
            )
            compiled_call = FunctionCall(inner_call.function_name, compiled_args)
            fragments.extend(_compile_single_call(compiled_call, context))
        return fragments
    finally:
        context.call_stack.pop()


def _enter(function_name: str, context: _CompilationContext) -> None:
    stack = context.call_stack
    if function_name in stack:
        raise CyclicFunctionDefinitionError(stack + [function_name])
    if len(stack) >= MAX_CALL_DEPTH:
        raise CyclicFunctionDefinitionError(
            stack + [function_name],
            reason=f"call depth exceeds {MAX_CALL_DEPTH}",
        )
    stack.append(function_name)


def _compile_arguments(
    arguments_to_compile: FunctionCallArgumentCollection,
    outer_arguments: FunctionCallArgumentCollection,
    expressions: ExpressionsCompiler,
) -> FunctionCallArgumentCollection:
    return FunctionCallArgumentCollection(
        {
            name: expressions.compile_expressions(value, outer_arguments)
            for name, value in arguments_to_compile.items()
        }
    )


def _ensure_arguments_are_declared(
    func: SharedFunction, arguments: FunctionCallArgumentCollection
) -> None:
    declared = func.parameter_names
    unexpected = [name for name in arguments.parameter_names if name not in declared]
    if unexpected:
        raise ParameterMismatchError(func.name, unexpected, declared)


def _merge(parts: Iterable[str]) -> str:
    return "\n".join(part.rstrip("\r\n") for part in parts if part and part.strip())
