"""Tests for shared function parsing and the function registry."""

import pytest

from tweakscript.compiler import FunctionCode, parse_functions
from tweakscript.definitions import FunctionDefinition
from tweakscript.exceptions import (
    DuplicateFunctionError,
    FunctionNotFoundError,
    InvalidArgumentError,
    InvalidFunctionDefinitionError,
)


def test_parse_inline_function():
    registry = parse_functions(
        [
            {
                "name": "SetSetting",
                "parameters": [{"name": "key"}, {"name": "value", "optional": True}],
                "code": "set {{ $key }} {{ $value }}",
                "revertCode": "reset {{ $key }}",
            }
        ]
    )
    func = registry.get_function_by_name("SetSetting")
    assert func.parameter_names == ["key", "value"]
    assert [p.is_required for p in func.parameters] == [True, False]
    assert func.code == FunctionCode(
        do="set {{ $key }} {{ $value }}", revert="reset {{ $key }}"
    )
    assert func.calls == ()


def test_parse_composite_function():
    registry = parse_functions(
        [
            {"name": "inner", "code": "echo inner"},
            {"name": "outer", "call": [{"function": "inner"}, {"function": "inner"}]},
        ]
    )
    outer = registry.get_function_by_name("outer")
    assert outer.code is None
    assert [c.function_name for c in outer.calls] == ["inner", "inner"]


def test_is_required_alias():
    registry = parse_functions(
        [{"name": "f", "parameters": [{"name": "a", "isRequired": False}], "code": "x"}]
    )
    assert registry.get_function_by_name("f").parameters[0].is_required is False


def test_calls_to_unknown_functions_are_resolved_lazily():
    """Registration does not check that called functions exist."""
    registry = parse_functions([{"name": "outer", "call": {"function": "later"}}])
    assert "outer" in registry
    assert len(registry) == 1


def test_none_definitions_give_empty_registry():
    assert len(parse_functions(None)) == 0


def test_duplicate_names_raise():
    with pytest.raises(DuplicateFunctionError):
        parse_functions([{"name": "f", "code": "a"}, {"name": "F", "code": "b"}])


def test_lookup_is_exact():
    registry = parse_functions([{"name": "Func", "code": "a"}])
    assert "Func" in registry
    assert "func" not in registry
    with pytest.raises(FunctionNotFoundError):
        registry.get_function_by_name("func")


def test_lookup_without_name_raises():
    with pytest.raises(InvalidArgumentError):
        parse_functions([]).get_function_by_name("")


@pytest.mark.parametrize(
    "definition",
    [
        {"name": "f"},
        {"name": "f", "code": "a", "call": {"function": "g"}},
        {"name": "f", "call": {"function": "g"}, "revertCode": "undo"},
        {"code": "a"},
    ],
)
def test_malformed_function_raises(definition):
    with pytest.raises(InvalidFunctionDefinitionError):
        parse_functions([definition])


@pytest.mark.parametrize("name", ["has space", "1st", "dash-ed", ""])
def test_invalid_parameter_name_raises(name):
    with pytest.raises(InvalidFunctionDefinitionError):
        parse_functions([{"name": "f", "parameters": [{"name": name}], "code": "a"}])


@pytest.mark.parametrize("name", ["true", "None", "not", "self", "loop"])
def test_reserved_parameter_name_raises(name):
    """Names the template engine treats as literals or keywords are rejected."""
    definition = {
        "name": "f",
        "parameters": [{"name": name}],
        "code": f"echo {{{{ ${name} }}}}",
    }
    with pytest.raises(InvalidFunctionDefinitionError, match="reserved word"):
        parse_functions([definition])


def test_duplicate_parameter_name_raises():
    with pytest.raises(InvalidFunctionDefinitionError, match="duplicate parameter"):
        parse_functions(
            [{"name": "f", "parameters": [{"name": "a"}, {"name": "a"}], "code": "x"}]
        )


def test_duplicate_code_across_functions_raises():
    with pytest.raises(InvalidFunctionDefinitionError, match="duplicate code"):
        parse_functions([{"name": "f", "code": "same"}, {"name": "g", "code": "same"}])


def test_duplicate_revert_code_across_functions_raises():
    with pytest.raises(InvalidFunctionDefinitionError, match="duplicate revert code"):
        parse_functions(
            [
                {"name": "f", "code": "a", "revertCode": "undo"},
                {"name": "g", "code": "b", "revertCode": "undo"},
            ]
        )


def test_none_definition_raises():
    with pytest.raises(InvalidFunctionDefinitionError):
        parse_functions([None])


def test_definition_model_without_name_raises():
    definition = FunctionDefinition.model_validate({"code": "echo a"})
    with pytest.raises(InvalidFunctionDefinitionError, match="name"):
        parse_functions([definition])
