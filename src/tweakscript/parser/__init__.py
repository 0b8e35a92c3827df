"""tweakscript parser - turns definitions into immutable category trees."""

from tweakscript.parser.category import parse_category
from tweakscript.parser.collection import parse_collection, parse_scripting_definition
from tweakscript.parser.context import ParseContext
from tweakscript.parser.script import find_duplicate_lines, parse_script
from tweakscript.parser.spec import (
    Category,
    CategoryCollection,
    ProjectDetails,
    RecommendationLevel,
    Script,
    ScriptCode,
    ScriptingDefinition,
    ScriptingLanguage,
    SelectedScript,
)
from tweakscript.parser.syntax import LanguageSyntax, get_syntax, resolve_language

__all__ = [
    "Category",
    "CategoryCollection",
    "LanguageSyntax",
    "ParseContext",
    "ProjectDetails",
    "RecommendationLevel",
    "Script",
    "ScriptCode",
    "ScriptingDefinition",
    "ScriptingLanguage",
    "SelectedScript",
    "find_duplicate_lines",
    "get_syntax",
    "parse_category",
    "parse_collection",
    "parse_script",
    "parse_scripting_definition",
    "resolve_language",
]
