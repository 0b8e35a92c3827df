"""tweakscript - compiles category/script/function definitions into scripts.

Pipeline: definitions -> parse_collection / parse_category -> parse_script ->
FunctionCallCompiler -> ExpressionsCompiler -> CodeBuilder -> script text.
"""

from tweakscript._version import __version__
from tweakscript.compiler import CompiledCode, FunctionCallCompiler, parse_functions
from tweakscript.generation import ScriptGenerator, create_code_builder
from tweakscript.parser import (
    ParseContext,
    ScriptingLanguage,
    parse_category,
    parse_collection,
    parse_script,
)

__all__ = [
    "CompiledCode",
    "FunctionCallCompiler",
    "ParseContext",
    "ScriptGenerator",
    "ScriptingLanguage",
    "__version__",
    "create_code_builder",
    "parse_category",
    "parse_collection",
    "parse_functions",
    "parse_script",
]
