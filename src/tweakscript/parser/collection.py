"""Collection parser - parses a whole collection file into a CategoryCollection.

Steps:
1. Parse the scripting definition (language, extension, start/end code)
2. Build the shared function registry
3. Parse every action (root category) with one shared ParseContext
4. Reject script names used more than once
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Mapping

from tweakscript.compiler.expressions import ExpressionsCompiler
from tweakscript.compiler.functions import parse_functions
from tweakscript.definitions import (
    CollectionDefinition,
    ScriptingDefinitionData,
    coerce_definition,
)
from tweakscript.exceptions import InvalidArgumentError, InvalidCollectionError
from tweakscript.parser.category import parse_category
from tweakscript.parser.context import ParseContext
from tweakscript.parser.spec import (
    Category,
    CategoryCollection,
    ProjectDetails,
    ScriptingDefinition,
    ScriptingLanguage,
)
from tweakscript.parser.syntax import get_syntax, resolve_language

log = logging.getLogger(__name__)

DEFAULT_FILE_EXTENSIONS = {
    ScriptingLanguage.SHELLSCRIPT: "sh",
    ScriptingLanguage.BATCHFILE: "bat",
}


def parse_collection(
    definition: CollectionDefinition | Mapping[str, Any] | None,
    project: ProjectDetails | None = None,
    date: datetime | None = None,
) -> CategoryCollection:
    """Parse a collection definition.

    Args:
        definition: Raw collection record or CollectionDefinition.
        project: Values substituted into start/end code.
        date: Date substituted into start/end code (defaults to now, UTC).

    Returns:
        The parsed CategoryCollection.
    """
    if definition is None:
        raise InvalidArgumentError("undefined collection")

    definition = coerce_definition(CollectionDefinition, definition)
    if not definition.actions:
        raise InvalidCollectionError("collection has no actions")

    scripting = parse_scripting_definition(
        definition.scripting, project or ProjectDetails(), date
    )
    context = ParseContext(
        functions=parse_functions(definition.functions),
        syntax=get_syntax(scripting.language),
    )
    actions = tuple(parse_category(action, context) for action in definition.actions)
    _ensure_unique_script_names(actions)

    collection = CategoryCollection(
        os=definition.os or "",
        actions=actions,
        scripting=scripting,
    )
    log.info(
        "Parsed collection for %r: %d categories, %d scripts",
        collection.os,
        len(actions),
        len(collection.all_scripts()),
    )
    return collection


def parse_scripting_definition(
    data: ScriptingDefinitionData | Mapping[str, Any] | None,
    project: ProjectDetails,
    date: datetime | None = None,
) -> ScriptingDefinition:
    """Parse the scripting section and substitute project details.

    Start and end code may reference `{{ $homepage }}`, `{{ $version }}`,
    `{{ $name }}` and `{{ $date }}`.
    """
    if data is None:
        raise InvalidCollectionError("undefined scripting definition")
    data = coerce_definition(ScriptingDefinitionData, data)

    language = resolve_language(data.language)
    substitutions = {
        "name": project.name,
        "homepage": project.homepage,
        "version": project.version,
        "date": (date or datetime.now(timezone.utc)).strftime("%Y-%m-%d"),
    }
    substitute = ExpressionsCompiler().compile_expressions
    return ScriptingDefinition(
        language=language,
        file_extension=data.file_extension or DEFAULT_FILE_EXTENSIONS[language],
        start_code=substitute(data.start_code or "", substitutions),
        end_code=substitute(data.end_code or "", substitutions),
    )


def _ensure_unique_script_names(actions: tuple[Category, ...]) -> None:
    counts = Counter(
        script.name for category in actions for script in category.all_scripts()
    )
    duplicates = [name for name, count in counts.items() if count > 1]
    if duplicates:
        raise InvalidCollectionError(
            "script names must be unique, duplicates: "
            + ", ".join(f'"{name}"' for name in duplicates)
        )
