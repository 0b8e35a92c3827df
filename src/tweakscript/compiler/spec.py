"""Compiler IR spec - compiled do/revert code."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CompiledCode:
    """Result of compiling a call sequence.

    Either string may be empty, meaning "nothing to do" for that phase.
    """

    code: str = ""
    revert_code: str = ""


@dataclass(frozen=True)
class FunctionCode:
    """Inline body of a shared function (templates, not yet compiled)."""

    do: str
    revert: str = ""
