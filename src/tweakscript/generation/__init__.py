"""tweakscript generation - turns compiled code into dialect-specific scripts."""

from tweakscript.generation.builder import BatchBuilder, CodeBuilder, ShellBuilder
from tweakscript.generation.factory import create_code_builder
from tweakscript.generation.generator import (
    CodePosition,
    GeneratedScript,
    ScriptGenerator,
)

__all__ = [
    "BatchBuilder",
    "CodeBuilder",
    "CodePosition",
    "GeneratedScript",
    "ScriptGenerator",
    "ShellBuilder",
    "create_code_builder",
]
