"""Parsed domain entities. All of them are immutable once built."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class ScriptingLanguage(str, Enum):
    """Target scripting dialects."""

    SHELLSCRIPT = "shellscript"
    BATCHFILE = "batchfile"


class RecommendationLevel(str, Enum):
    """How safe a script is to apply without reading it first."""

    STANDARD = "standard"
    STRICT = "strict"


@dataclass(frozen=True)
class ScriptCode:
    """Compiled code of a script."""

    execute: str
    revert: str | None = None


@dataclass(frozen=True)
class Script:
    """A leaf definition producing do-code and optional revert-code."""

    name: str
    code: ScriptCode
    documentation_urls: tuple[str, ...] = ()
    level: RecommendationLevel | None = None

    @property
    def code_text(self) -> str:
        return self.code.execute

    @property
    def revert_code_text(self) -> str | None:
        return self.code.revert

    @property
    def can_revert(self) -> bool:
        return bool(self.code.revert)


@dataclass(frozen=True)
class Category:
    """A named grouping of scripts and sub-categories."""

    name: str
    documentation_urls: tuple[str, ...] = ()
    scripts: tuple[Script, ...] = ()
    sub_categories: tuple["Category", ...] = ()

    def all_scripts(self) -> Iterator[Script]:
        """Yield own scripts, then sub-category scripts, depth-first."""
        yield from self.scripts
        for category in self.sub_categories:
            yield from category.all_scripts()


@dataclass(frozen=True)
class ScriptingDefinition:
    """Dialect and the code placed around every generated script."""

    language: ScriptingLanguage
    file_extension: str
    start_code: str = ""
    end_code: str = ""


@dataclass(frozen=True)
class ProjectDetails:
    """Values available to start/end code as `{{ $homepage }}` etc."""

    name: str = "tweakscript"
    version: str = "0.0.0"
    homepage: str = ""


@dataclass(frozen=True)
class CategoryCollection:
    """Every category defined for one operating system."""

    os: str
    actions: tuple[Category, ...]
    scripting: ScriptingDefinition
    _scripts: tuple[Script, ...] = field(default=(), init=False, repr=False)

    def __post_init__(self) -> None:
        scripts = tuple(s for category in self.actions for s in category.all_scripts())
        object.__setattr__(self, "_scripts", scripts)

    def all_scripts(self) -> tuple[Script, ...]:
        return self._scripts

    def find_script(self, name: str) -> Script | None:
        return next((s for s in self._scripts if s.name == name), None)

    def get_scripts_by_level(self, level: RecommendationLevel) -> tuple[Script, ...]:
        """Scripts recommended at `level`; strict includes standard ones."""
        accepted = {RecommendationLevel.STANDARD}
        if level == RecommendationLevel.STRICT:
            accepted.add(RecommendationLevel.STRICT)
        return tuple(s for s in self._scripts if s.level in accepted)


@dataclass(frozen=True)
class SelectedScript:
    """A script picked for generation, either applied or reverted."""

    script: Script
    revert: bool = False
