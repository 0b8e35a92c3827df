"""Expressions compiler - substitutes call arguments into code templates.

Templates are Jinja2 strings evaluated against the arguments of a single
function call:

    code: |
      echo "{{ $message }}"
      {% if path %}
      rm -rf "{{ $path | escape_double_quotes }}"
      {% endif %}

Placeholders are marked with `$`, so other `{{ ... }}` text such as Go
templates (`docker ps --format '{{.Names}}'`) is left as it is. A
placeholder whose argument was not provided is an error. Optional arguments
can still be tested with `{% if name %}` blocks.
"""

from __future__ import annotations

import re
from typing import Mapping

from jinja2 import Environment, StrictUndefined
from jinja2.exceptions import TemplateSyntaxError, UndefinedError

from tweakscript.exceptions import (
    InvalidArgumentError,
    InvalidExpressionError,
    MissingArgumentError,
)

PLACEHOLDER_START = "{{ $"

_PLACEHOLDER_START_PATTERN = re.compile(r"\{\{\s*\$")

# names Jinja2 parses as literals, operators or statements, or injects itself
RESERVED_NAMES = frozenset(
    """
    true false none True False None and or not in is if else elif endif for
    endfor set endset block endblock macro endmacro call endcall filter
    endfilter with endwith raw endraw extends include import from as recursive
    self loop caller varargs kwargs
    """.split()
)


class OptionalArgumentUndefined(StrictUndefined):
    """Undefined that is falsy in tests but fails when printed."""

    __slots__ = ()

    def __bool__(self) -> bool:
        return False


def escape_double_quotes(value: str) -> str:
    """Escape double quotes for a string passed through cmd to PowerShell.

    Args:
        value: Raw argument value.

    Returns:
        Value with every `"` replaced by `"^""`.
    """
    return str(value).replace('"', '"^""')


def inline_powershell(value: str) -> str:
    """Collapse a multi-line PowerShell snippet into a single line.

    Blank lines and `#` comment lines are dropped, the remaining lines are
    joined with `; `.
    """
    lines = [line.strip() for line in str(value).splitlines()]
    statements = [line for line in lines if line and not line.startswith("#")]
    return "; ".join(statements)


def get_expressions_env() -> Environment:
    """Create the Jinja2 Environment used for code templates.

    Placeholders start with `{{ $`. Comments use `{## ... ##}` so that shell
    constructs such as `${#var}` are left alone. Globals are cleared so a
    missing optional argument never resolves to a builtin such as `range`.

    Returns:
        Configured Jinja2 Environment.
    """
    env = Environment(
        undefined=OptionalArgumentUndefined,
        variable_start_string=PLACEHOLDER_START,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        comment_start_string="{##",
        comment_end_string="##}",
        autoescape=False,
    )

    env.filters["escape_double_quotes"] = escape_double_quotes
    env.filters["inline_powershell"] = inline_powershell
    env.globals.clear()

    return env


class ExpressionsCompiler:
    """Renders code templates with the arguments of a function call."""

    def __init__(self, environment: Environment | None = None):
        self.environment = environment or get_expressions_env()

    def compile_expressions(self, template: str, args: Mapping[str, str]) -> str:
        """Substitute arguments into a code template.

        Args:
            template: Code template (may be empty).
            args: Argument values keyed by parameter name.

        Returns:
            The rendered code. Templates without any `{{ $name }}` placeholder
            or `{% %}` block are returned unchanged.

        Raises:
            InvalidArgumentError: If args is None.
            InvalidExpressionError: If the template is malformed.
            MissingArgumentError: If a printed parameter has no argument.
        """
        if args is None:
            raise InvalidArgumentError("undefined args, send empty collection instead")
        if not template:
            return template
        template = _PLACEHOLDER_START_PATTERN.sub(PLACEHOLDER_START, template)
        if PLACEHOLDER_START not in template and "{%" not in template:
            return template

        try:
            tmpl = self.environment.from_string(template)
        except TemplateSyntaxError as exc:
            raise InvalidExpressionError(
                f"invalid expression at line {exc.lineno}: {exc.message}"
            ) from exc

        try:
            return tmpl.render(dict(args))
        except UndefinedError as exc:
            raise MissingArgumentError(
                f"parameter value not provided: {exc.message}"
            ) from exc
