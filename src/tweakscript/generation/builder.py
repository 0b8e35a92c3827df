"""Code builders - assemble compiled code into dialect-specific script text."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

from tweakscript.exceptions import InvalidArgumentError

TOTAL_FUNCTION_SEPARATOR_CHARS = 58

_LINE_PATTERN = re.compile(r"[^\r\n]+")


class CodeBuilder(ABC):
    """Accumulates lines and renders them with a dialect's conventions.

    Subclasses provide the comment delimiter, how text is written to
    standard output, and the newline terminator.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    @property
    def current_line(self) -> int:
        """Number of lines written so far."""
        return len(self._lines)

    def append_line(self, code: str | None = None) -> "CodeBuilder":
        """Append code (split on line breaks), or a blank line if empty."""
        if not code:
            self._lines.append("")
            return self
        self._lines.extend(_LINE_PATTERN.findall(code))
        return self

    def append_comment_line(self, comment_line: str | None = None) -> "CodeBuilder":
        self._lines.append(f"{self.comment_delimiter} {comment_line or ''}".rstrip())
        return self

    def append_trailing_hyphens_comment_line(
        self, total_repeat_hyphens: int = TOTAL_FUNCTION_SEPARATOR_CHARS
    ) -> "CodeBuilder":
        return self.append_comment_line("-" * total_repeat_hyphens)

    def append_comment_line_with_hyphens_around(
        self,
        section_name: str,
        total_repeat_hyphens: int = TOTAL_FUNCTION_SEPARATOR_CHARS,
    ) -> "CodeBuilder":
        """Append a three-line section header centered in hyphens."""
        if not section_name:
            raise InvalidArgumentError("section name cannot be empty")
        if len(section_name) >= total_repeat_hyphens:
            return self.append_comment_line(section_name)
        padding = total_repeat_hyphens - len(section_name)
        first_hyphens = "-" * (padding // 2)
        second_hyphens = "-" * (padding - padding // 2)
        return (
            self.append_trailing_hyphens_comment_line()
            .append_comment_line(first_hyphens + section_name + second_hyphens)
            .append_trailing_hyphens_comment_line()
        )

    def append_function(self, name: str, code: str) -> "CodeBuilder":
        """Append a framed section: header, echo of the name, code, footer."""
        if not name:
            raise InvalidArgumentError("name cannot be empty")
        if not code:
            raise InvalidArgumentError("code cannot be empty")
        return (
            self.append_comment_line_with_hyphens_around(name)
            .append_line(self.write_standard_out(f"--- {name}"))
            .append_line(code)
            .append_trailing_hyphens_comment_line()
        )

    def to_string(self) -> str:
        return self.newline.join(self._lines)

    build = to_string

    def __str__(self) -> str:
        return self.to_string()

    @property
    @abstractmethod
    def comment_delimiter(self) -> str:
        pass

    @property
    @abstractmethod
    def newline(self) -> str:
        pass

    @abstractmethod
    def write_standard_out(self, text: str) -> str:
        """Return a command that prints text."""
        pass


class ShellBuilder(CodeBuilder):
    """POSIX shell / bash."""

    @property
    def comment_delimiter(self) -> str:
        return "#"

    @property
    def newline(self) -> str:
        return "\n"

    def write_standard_out(self, text: str) -> str:
        escaped = text.replace("'", "'\\''")
        return f"echo '{escaped}'"


class BatchBuilder(CodeBuilder):
    """Windows batch files."""

    @property
    def comment_delimiter(self) -> str:
        return "::"

    @property
    def newline(self) -> str:
        return "\r\n"

    def write_standard_out(self, text: str) -> str:
        escaped = text.replace("&", "^&").replace("%", "%%")
        return f"echo {escaped}"
