"""Macro replacements applied to completion specs.

A spec such as ``"%colors|none"`` is expanded with the value registered for
``colors`` before it is parsed, letting several commands share one spec.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from .constants import MACRO_PREFIX
from .logging_setup import get_logger

__all__ = ["CommandReplacements"]


class CommandReplacements:
    """Case-insensitive ``%key`` macros."""

    def __init__(self) -> None:
        self.log = get_logger("cmdcomplete.replacements")
        self._values: dict[str, str] = {}
        self._pattern: re.Pattern[str] | None = None

    def add(self, key: str, value: str) -> str | None:
        """Register a macro.

        Args:
            key: Macro name, with or without the leading "%"
            value: Replacement text

        Returns:
            The previous value, if any
        """
        name = key.removeprefix(MACRO_PREFIX).lower()
        previous = self._values.get(name)
        self._values[name] = value
        self._pattern = None
        self.log.debug("Replacement %s%s -> %s", MACRO_PREFIX, name, value)
        return previous

    def add_all(self, values: Mapping[str, str]) -> None:
        """Register several macros at once."""
        for key, value in values.items():
            self.add(key, str(value))

    def replace(self, text: str) -> str:
        """Expand every known macro found in `text`, leaving unknown ones untouched."""
        if not self._values:
            return text
        if self._pattern is None:
            names = sorted(self._values, key=len, reverse=True)
            self._pattern = re.compile(re.escape(MACRO_PREFIX) + "(" + "|".join(map(re.escape, names)) + ")", re.IGNORECASE)
        return self._pattern.sub(lambda match: self._values[match.group(1).lower()], text)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.removeprefix(MACRO_PREFIX).lower() in self._values

    def __len__(self) -> int:
        return len(self._values)
