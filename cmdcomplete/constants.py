"""Shared constants for cmdcomplete."""

import os
from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "CONFIG_SEPARATOR",
    "HANDLER_PREFIX",
    "INT_MAX",
    "INT_MIN",
    "MACRO_PREFIX",
    "SEGMENT_SEPARATOR",
    "TIME_UNITS",
]

# Registered handler ids always carry this prefix, literal text never collides with them
HANDLER_PREFIX = "@"

# Completion-spec grammar: segment ('|' segment)*, segment := id [':=' config]
SEGMENT_SEPARATOR = "|"
CONFIG_SEPARATOR = ":="

MACRO_PREFIX = "%"

TIME_UNITS = ("minutes", "hours", "days", "weeks", "months", "years")

# Bounds of the integers accepted in handler configs
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "cmdcomplete" / "config.toml"
