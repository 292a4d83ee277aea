"""Build command metadata from plain functions.

Completion specs are attached with a decorator and ``typing.Annotated``::

    @completion("@players @range:=1-64")
    def give(issuer: CommandIssuer, player: str, amount: int, item: Annotated[str, Complete("@items")]): ...

    command = command_from_function(give)

``issuer`` does not consume input, ``player`` and ``amount`` take the two
positional tokens, ``item`` uses its own spec.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from .models import CommandIssuer, CommandParameter, ConsoleIssuer, ExceptionReporter, RegisteredCommand

__all__ = [
    "Complete",
    "command_from_function",
    "completion",
]

F = TypeVar("F", bound=Callable[..., Any])

ISSUER_PARAMETER = "issuer"


@dataclass(frozen=True)
class Complete:
    """Completion spec of a single parameter, used inside ``Annotated``."""

    spec: str


def completion(spec: str) -> Callable[[F], F]:
    """Attach a command-level completion spec to a function."""

    def decorator(func: F) -> F:
        func.completion = spec  # type: ignore[attr-defined]
        return func

    return decorator


def _is_issuer_type(annotation: object) -> bool:
    return isinstance(annotation, type) and annotation in (CommandIssuer, ConsoleIssuer)


def _build_parameter(name: str, parameter: inspect.Parameter, hint: object) -> CommandParameter | None:
    """Return the metadata of one function parameter, None for ``self``/``cls``."""
    if name in ("self", "cls") or parameter.kind is inspect.Parameter.VAR_KEYWORD:
        return None

    value_type = hint
    complete: str | None = None
    if typing.get_origin(hint) is typing.Annotated:
        value_type, *extras = typing.get_args(hint)
        for extra in extras:
            if isinstance(extra, Complete):
                complete = extra.spec

    consumes_input = name != ISSUER_PARAMETER and not _is_issuer_type(value_type)
    return CommandParameter(
        name=name,
        complete=complete,
        consumes_input=consumes_input,
        type=value_type if isinstance(value_type, type) else None,
    )


def command_from_function(
    func: Callable[..., Any],
    name: str | None = None,
    complete: str | None = None,
    on_error: ExceptionReporter | None = None,
) -> RegisteredCommand:
    """Extract a RegisteredCommand from a function signature.

    Args:
        func: The command implementation
        name: Command name, defaults to the function name
        complete: Command-level spec, defaults to the one set with ``@completion``
        on_error: Exception reporter for completion failures

    Returns:
        The command metadata
    """
    hints = typing.get_type_hints(func, include_extras=True)
    parameters: list[CommandParameter] = []
    for param_name, parameter in inspect.signature(func).parameters.items():
        built = _build_parameter(param_name, parameter, hints.get(param_name))
        if built is not None:
            parameters.append(built)

    if complete is None:
        complete = getattr(func, "completion", "")

    return RegisteredCommand(
        name=name or func.__name__,
        complete=complete or "",
        parameters=parameters,
        on_error=on_error,
    )
