"""Per-position completion specs of a command.

Merges the command-level spec, a whitespace separated list of positional
tokens, with the specs parameters declare themselves.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import RegisteredCommand

__all__ = ["resolve_positions"]


def resolve_positions(command: RegisteredCommand) -> list[str]:
    """Return the completion spec of each input consuming parameter, in order.

    A parameter with its own spec contributes every whitespace separated piece
    of it and leaves the positional tokens alone. Other parameters take the
    next positional token; the walk stops once those run out.

    Args:
        command: The command to inspect

    Returns:
        The ordered list of completion specs
    """
    positional = deque(command.complete.split())
    specs: list[str] = []

    for parameter in command.parameters:
        if not parameter.consumes_input:
            continue
        if parameter.complete is not None:
            specs.extend(parameter.complete.split())
        elif positional:
            specs.append(positional.popleft())
        else:
            break

    return specs
