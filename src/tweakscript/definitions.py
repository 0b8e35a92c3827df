"""Definition schema for tweakscript collections.

A collection file (YAML) looks like:

    os: linux
    scripting:
      language: shellscript
      fileExtension: sh
      startCode: "# {{ $homepage }} {{ $version }}"
      endCode: echo done
    functions:
      - name: SetSetting
        parameters:
          - name: key
          - name: value
            optional: true
        code: gsettings set {{ $key }} {{ $value }}
        revertCode: gsettings reset {{ $key }}
    actions:
      - category: Privacy
        docs: https://example.org/privacy
        children:
          - name: Disable telemetry
            recommend: standard
            call:
              function: SetSetting
              parameters:
                key: org.example.telemetry
                value: "false"

These models only describe the shape of the raw records. Semantic validation
(names, exactly one of code/call, duplicate lines, ...) happens in the parsers
so that the errors are the dedicated tweakscript errors.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, TypeVar, Union

import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    Discriminator,
    Field,
    Tag,
    ValidationError,
)

from tweakscript.exceptions import DefinitionLoadError


class ParameterDefinition(BaseModel):
    """A parameter declared by a shared function."""

    model_config = {"populate_by_name": True}

    name: str | None = None
    optional: bool | None = None
    is_required: bool | None = Field(
        default=None,
        validation_alias=AliasChoices("isRequired", "is_required", "required"),
    )

    @property
    def required(self) -> bool:
        """Parameters are required unless declared optional."""
        if self.is_required is not None:
            return self.is_required
        return not bool(self.optional)


class FunctionCallDefinition(BaseModel):
    """A call to a shared function: `{function: name, parameters: {...}}`."""

    model_config = {"populate_by_name": True}

    function: str | None = Field(
        default=None,
        validation_alias=AliasChoices("function", "functionName", "function_name"),
    )
    parameters: dict[str, Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("parameters", "arguments"),
    )


CallDefinition = Union[FunctionCallDefinition, list[FunctionCallDefinition]]


class FunctionDefinition(BaseModel):
    """A shared function: inline code or a sequence of calls."""

    model_config = {"populate_by_name": True}

    name: str | None = None
    parameters: list[ParameterDefinition] = Field(default_factory=list)
    code: str | None = Field(default=None, validation_alias=AliasChoices("code", "do"))
    revert_code: str | None = Field(
        default=None,
        validation_alias=AliasChoices("revertCode", "revert", "revert_code"),
    )
    call: CallDefinition | None = Field(
        default=None, validation_alias=AliasChoices("call", "calls")
    )


class ScriptDefinition(BaseModel):
    """A script leaf: literal code or a call sequence."""

    model_config = {"populate_by_name": True}

    name: str | None = None
    docs: str | list[str] | None = None
    code: str | None = None
    revert_code: str | None = Field(
        default=None, validation_alias=AliasChoices("revertCode", "revert_code")
    )
    call: CallDefinition | None = None
    recommend: str | None = None


def _child_kind(value: Any) -> str:
    if isinstance(value, CategoryDefinition):
        return "category"
    if isinstance(value, dict) and ("children" in value or "category" in value):
        return "category"
    return "script"


CategoryChild = Annotated[
    Union[
        Annotated["CategoryDefinition", Tag("category")],
        Annotated[ScriptDefinition, Tag("script")],
    ],
    Discriminator(_child_kind),
]


class CategoryDefinition(BaseModel):
    """A named group of scripts and nested categories."""

    model_config = {"populate_by_name": True}

    name: str | None = Field(
        default=None, validation_alias=AliasChoices("category", "name")
    )
    docs: str | list[str] | None = None
    children: list[CategoryChild] | None = None


class ScriptingDefinitionData(BaseModel):
    """Target dialect and the code wrapped around every generated script."""

    model_config = {"populate_by_name": True}

    language: str | None = None
    file_extension: str | None = Field(
        default=None, validation_alias=AliasChoices("fileExtension", "file_extension")
    )
    start_code: str | None = Field(
        default=None, validation_alias=AliasChoices("startCode", "start_code")
    )
    end_code: str | None = Field(
        default=None, validation_alias=AliasChoices("endCode", "end_code")
    )


class CollectionDefinition(BaseModel):
    """Top-level collection file."""

    model_config = {"populate_by_name": True}

    os: str | None = None
    scripting: ScriptingDefinitionData | None = None
    functions: list[FunctionDefinition] = Field(default_factory=list)
    actions: list[CategoryDefinition] = Field(default_factory=list)


CategoryDefinition.model_rebuild()


ModelT = TypeVar("ModelT", bound=BaseModel)


def coerce_definition(model: type[ModelT], value: Any) -> ModelT:
    """Validate a raw mapping into a definition model (models pass through)."""
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        raise DefinitionLoadError(f"Invalid {model.__name__}:\n{exc}") from exc


def load_collection_from_string(content: str) -> CollectionDefinition:
    """Load a collection from a YAML string."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise DefinitionLoadError(f"Failed to parse YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise DefinitionLoadError("Parsed YAML must be a mapping at the top level")

    try:
        return CollectionDefinition.model_validate(data)
    except ValidationError as exc:
        raise DefinitionLoadError(f"Invalid collection definition:\n{exc}") from exc


def load_collection(path: str | Path) -> CollectionDefinition:
    """Load a collection from a YAML file."""
    p = Path(path)
    if not p.exists():
        raise DefinitionLoadError(f"Collection file not found: {p}")
    return load_collection_from_string(p.read_text(encoding="utf-8"))
