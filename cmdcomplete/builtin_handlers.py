"""Handlers every registry starts with."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .constants import INT_MAX, INT_MIN, TIME_UNITS

if TYPE_CHECKING:
    from .models import CompletionContext
    from .registry import CompletionRegistry

__all__ = ["complete_nothing", "complete_range", "complete_timeunits", "parse_int", "register_builtins"]

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_int(text: str, default: int = 0) -> int:
    """Parse `text` as a signed 32-bit integer, returning `default` when malformed.

    Only digits with an optional sign are accepted: no whitespace, no underscores.
    """
    if not _INT_PATTERN.fullmatch(text):
        return default
    value = int(text)
    return value if INT_MIN <= value <= INT_MAX else default


def complete_nothing(_context: CompletionContext) -> list[str]:
    """Offer no candidate at all."""
    return []


def complete_range(context: CompletionContext) -> list[str]:
    """Offer every integer of the configured range.

    Config is "N" for 0..N or "A-B" for A..B, both inclusive.
    """
    if context.config is None:
        return []
    bounds = context.config.split("-")
    while len(bounds) > 1 and not bounds[-1]:
        bounds.pop()
    if len(bounds) == 2:  # noqa: PLR2004
        start, end = parse_int(bounds[0]), parse_int(bounds[1])
    else:
        start, end = 0, parse_int(bounds[0])
    return [str(i) for i in range(start, end + 1)]


def complete_timeunits(_context: CompletionContext) -> list[str]:
    """Offer the time unit names."""
    return list(TIME_UNITS)


def register_builtins(registry: CompletionRegistry) -> None:
    """Register the built-in handlers into `registry`."""
    registry.register_async("nothing", complete_nothing)
    registry.register_async("range", complete_range)
    registry.register_async("timeunits", complete_timeunits)
