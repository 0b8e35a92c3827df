"""Tests for the category parser."""

import re

import pytest

from tweakscript.definitions import CategoryDefinition
from tweakscript.exceptions import (
    EmptyCategoryError,
    InvalidArgumentError,
    MissingNameError,
    UndefinedCategoryError,
)
from tweakscript.parser import ParseContext, parse_category


def make_context():
    return ParseContext.create(
        "shellscript",
        [{"name": "Remove", "parameters": [{"name": "path"}], "code": "rm {{ $path }}"}],
    )


def test_undefined_category_raises():
    with pytest.raises(UndefinedCategoryError, match="category is null or undefined"):
        parse_category(None, make_context())


def test_undefined_context_raises():
    definition = {"category": "test", "children": [{"name": "s", "code": "x"}]}
    with pytest.raises(InvalidArgumentError, match="undefined context"):
        parse_category(definition, None)


@pytest.mark.parametrize("children", [None, []])
def test_category_without_children_raises(children):
    expected = 'category has no children: "test"'
    with pytest.raises(EmptyCategoryError, match=re.escape(expected)):
        parse_category({"category": "test", "children": children}, make_context())


@pytest.mark.parametrize("name", [None, ""])
def test_category_without_name_raises(name):
    definition = {"category": name, "children": [{"name": "s", "code": "x"}]}
    with pytest.raises(MissingNameError, match="category has no name"):
        parse_category(definition, make_context())


def test_parse_scripts_and_sub_categories():
    definition = {
        "category": "root",
        "docs": "https://docs.example/root",
        "children": [
            {"name": "first", "code": "echo 1"},
            {
                "category": "nested",
                "children": [
                    {
                        "name": "second",
                        "call": {"function": "Remove", "parameters": {"path": "/tmp"}},
                    },
                    {"name": "third", "code": "echo 3"},
                ],
            },
            {"name": "fourth", "code": "echo 4"},
        ],
    }
    category = parse_category(definition, make_context())

    assert category.name == "root"
    assert category.documentation_urls == ("https://docs.example/root",)
    assert [s.name for s in category.scripts] == ["first", "fourth"]
    assert len(category.sub_categories) == 1

    nested = category.sub_categories[0]
    assert nested.name == "nested"
    assert nested.scripts[0].code_text == "rm /tmp"
    assert [s.name for s in category.all_scripts()] == [
        "first",
        "fourth",
        "second",
        "third",
    ]


def test_accepts_definition_model():
    definition = CategoryDefinition.model_validate(
        {"name": "root", "children": [{"name": "s", "code": "x"}]}
    )
    category = parse_category(definition, make_context())
    assert category.name == "root"
    assert len(category.scripts) == 1


def test_nested_empty_category_raises():
    definition = {
        "category": "root",
        "children": [{"category": "empty", "children": []}],
    }
    with pytest.raises(EmptyCategoryError) as exc_info:
        parse_category(definition, make_context())
    assert exc_info.value.category_name == "empty"


def test_duplicate_comment_lines_use_context_syntax():
    definition = {
        "category": "root",
        "children": [{"name": "s", "code": "# same\necho a\n# same\necho b"}],
    }
    category = parse_category(definition, make_context())
    assert category.scripts[0].name == "s"
