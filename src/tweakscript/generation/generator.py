"""Script generator - builds the final user script from selected scripts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from tweakscript.exceptions import InvalidArgumentError
from tweakscript.generation.builder import CodeBuilder
from tweakscript.generation.factory import create_code_builder
from tweakscript.parser.spec import (
    ScriptingDefinition,
    ScriptingLanguage,
    SelectedScript,
)

log = logging.getLogger(__name__)

BuilderFactory = Callable[[ScriptingLanguage], CodeBuilder]


@dataclass(frozen=True)
class CodePosition:
    """1-based, inclusive line range of a script section in the output."""

    start_line: int
    end_line: int


@dataclass(frozen=True)
class GeneratedScript:
    """Final script text plus where each selected script landed."""

    code: str
    script_positions: dict[str, CodePosition] = field(default_factory=dict)


class ScriptGenerator:
    """Assembles start code, one framed section per selection and end code."""

    def __init__(self, builder_factory: BuilderFactory = create_code_builder):
        self.builder_factory = builder_factory

    def build_script(
        self,
        selected_scripts: Sequence[SelectedScript],
        scripting: ScriptingDefinition,
    ) -> GeneratedScript:
        """Build the script text.

        Args:
            selected_scripts: Scripts in output order, each applied or reverted.
            scripting: Language and start/end code.

        Returns:
            GeneratedScript. Empty code when nothing is selected.

        Raises:
            InvalidArgumentError: If an input is missing, a reverted script
                has no revert code, or a selection repeats.
        """
        if selected_scripts is None:
            raise InvalidArgumentError("undefined scripts")
        if scripting is None:
            raise InvalidArgumentError("undefined definition")
        if not selected_scripts:
            return GeneratedScript(code="")

        builder = self.builder_factory(scripting.language)
        if scripting.start_code:
            builder.append_line(scripting.start_code).append_line()

        positions: dict[str, CodePosition] = {}
        for selection in selected_scripts:
            section = _section_name(selection)
            if section in positions:
                raise InvalidArgumentError(f'"{section}" is selected more than once')
            start = builder.current_line + 1
            _append_selection(selection, builder)
            positions[section] = CodePosition(
                start_line=start, end_line=builder.current_line
            )
            builder.append_line()

        if scripting.end_code:
            builder.append_line().append_line(scripting.end_code)

        log.debug("Generated script with %d section(s)", len(positions))
        return GeneratedScript(code=builder.to_string(), script_positions=positions)


def _section_name(selection: SelectedScript) -> str:
    name = selection.script.name
    return f"{name} (revert)" if selection.revert else name


def _append_selection(selection: SelectedScript, builder: CodeBuilder) -> None:
    if selection.revert:
        code = selection.script.code.revert
        if not code:
            raise InvalidArgumentError(
                f'script "{selection.script.name}" has no revert code'
            )
    else:
        code = selection.script.code.execute
    builder.append_function(_section_name(selection), code)
