"""Function calls and their argument collections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Sequence

from tweakscript.definitions import (
    CallDefinition,
    FunctionCallDefinition,
    coerce_definition,
)
from tweakscript.exceptions import InvalidArgumentError


class FunctionCallArgumentCollection(Mapping[str, str]):
    """Read-only mapping of parameter name to raw argument expression."""

    __slots__ = ("_arguments",)

    def __init__(self, arguments: Mapping[str, Any] | None = None):
        collected: dict[str, str] = {}
        for name, value in (arguments or {}).items():
            if not name or not isinstance(name, str):
                raise InvalidArgumentError("missing parameter name in function call")
            if value is None:
                raise InvalidArgumentError(f'undefined argument value for "{name}"')
            collected[name] = _to_text(value)
        self._arguments = collected

    @property
    def parameter_names(self) -> list[str]:
        """Names of all provided arguments, in declaration order."""
        return list(self._arguments)

    def __getitem__(self, name: str) -> str:
        return self._arguments[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._arguments)

    def __len__(self) -> int:
        return len(self._arguments)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FunctionCallArgumentCollection):
            return self._arguments == other._arguments
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash(tuple(self._arguments.items()))

    def __repr__(self) -> str:
        return f"FunctionCallArgumentCollection({self._arguments!r})"


@dataclass(frozen=True)
class FunctionCall:
    """Invocation of a shared function, resolved by name at compile time."""

    function_name: str
    arguments: FunctionCallArgumentCollection = field(
        default_factory=FunctionCallArgumentCollection
    )

    def __post_init__(self) -> None:
        if not self.function_name:
            raise InvalidArgumentError("function name must be defined")
        if not isinstance(self.arguments, FunctionCallArgumentCollection):
            object.__setattr__(
                self, "arguments", FunctionCallArgumentCollection(self.arguments)
            )


def parse_function_calls(
    call: CallDefinition | Mapping[str, Any] | Sequence[Any] | None,
) -> tuple[FunctionCall, ...]:
    """Parse a call definition (a single call or a list of calls).

    Raises:
        InvalidArgumentError: If the call data or a function name is missing.
    """
    if call is None:
        raise InvalidArgumentError("undefined call data")

    items = list(call) if isinstance(call, (list, tuple)) else [call]
    calls: list[FunctionCall] = []
    for item in items:
        if item is None:
            raise InvalidArgumentError("undefined function call")
        item = coerce_definition(FunctionCallDefinition, item)
        if not item.function:
            raise InvalidArgumentError("function name must be defined in call")
        calls.append(
            FunctionCall(item.function, FunctionCallArgumentCollection(item.parameters))
        )
    return tuple(calls)


def _to_text(value: Any) -> str:
    # YAML turns `false`/`1` into bool/int; arguments are always code text
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
