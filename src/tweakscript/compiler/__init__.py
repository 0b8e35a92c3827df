"""tweakscript compiler - expands shared function calls into script code."""

from tweakscript.compiler.call_compiler import FunctionCallCompiler
from tweakscript.compiler.calls import (
    FunctionCall,
    FunctionCallArgumentCollection,
    parse_function_calls,
)
from tweakscript.compiler.expressions import ExpressionsCompiler
from tweakscript.compiler.functions import (
    FunctionParameter,
    FunctionRegistry,
    SharedFunction,
    parse_functions,
)
from tweakscript.compiler.spec import CompiledCode, FunctionCode

__all__ = [
    "CompiledCode",
    "ExpressionsCompiler",
    "FunctionCall",
    "FunctionCallArgumentCollection",
    "FunctionCallCompiler",
    "FunctionCode",
    "FunctionParameter",
    "FunctionRegistry",
    "SharedFunction",
    "parse_function_calls",
    "parse_functions",
]
