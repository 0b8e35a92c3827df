"""Category parser - recursively builds Category trees."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from tweakscript.definitions import CategoryDefinition, coerce_definition
from tweakscript.exceptions import (
    EmptyCategoryError,
    InvalidArgumentError,
    MissingNameError,
    UndefinedCategoryError,
)
from tweakscript.parser.context import ParseContext
from tweakscript.parser.docs import parse_doc_urls
from tweakscript.parser.script import parse_script
from tweakscript.parser.spec import Category, Script

log = logging.getLogger(__name__)


def parse_category(
    definition: CategoryDefinition | Mapping[str, Any] | None,
    context: ParseContext | None,
) -> Category:
    """Parse a category definition and all of its children.

    Children with a `children` field are categories, everything else is a
    script.

    Raises:
        UndefinedCategoryError: If definition is None.
        InvalidArgumentError: If context is None.
        MissingNameError: If the category has no name.
        EmptyCategoryError: If the category has no children.
    """
    if definition is None:
        raise UndefinedCategoryError()
    if context is None:
        raise InvalidArgumentError("undefined context")

    definition = coerce_definition(CategoryDefinition, definition)
    if not definition.name:
        raise MissingNameError("category has no name")
    if not definition.children:
        raise EmptyCategoryError(definition.name)

    scripts: list[Script] = []
    sub_categories: list[Category] = []
    for child in definition.children:
        if isinstance(child, CategoryDefinition):
            sub_categories.append(parse_category(child, context))
        else:
            scripts.append(parse_script(child, context))

    log.debug(
        "Parsed category %r (%d script(s), %d sub-categories)",
        definition.name,
        len(scripts),
        len(sub_categories),
    )
    return Category(
        name=definition.name,
        documentation_urls=parse_doc_urls(definition.docs),
        scripts=tuple(scripts),
        sub_categories=tuple(sub_categories),
    )
