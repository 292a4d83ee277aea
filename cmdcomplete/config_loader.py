"""Configuration file loading utilities.

Configuration is TOML::

    [cmdcomplete]
    include = ["~/.config/cmdcomplete/extra.toml"]

    [completions]
    colors = ["red", "green", "blue"]
    answers = "yes|no"

    [replacements]
    palette = "@colors|none"

``[completions]`` entries become static handlers and ``[replacements]``
entries become ``%key`` macros.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import aiofiles
import aiofiles.os

from .constants import CONFIG_FILE
from .errors import ConfigError

if TYPE_CHECKING:
    import logging

    from .registry import CompletionRegistry
    from .replacements import CommandReplacements

__all__ = ["ConfigLoader", "apply_config", "merge"]


def merge(merged: dict[str, Any], obj2: dict[str, Any], replace: bool = False) -> dict[str, Any]:
    """Merge `obj2` into `merged`, recursing into tables and extending lists.

    Args:
        merged: Destination, modified in place
        obj2: Source
        replace: Replace lists instead of extending them

    Returns:
        `merged`
    """
    for key, value in obj2.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merge(current, value, replace)
        elif isinstance(current, list) and isinstance(value, list) and not replace:
            current.extend(value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Handles loading and merging configuration files.

    Supports a single TOML file, a directory of TOML files merged in name
    order, and ``include`` directives in the ``[cmdcomplete]`` table.
    """

    def __init__(self, log: logging.Logger) -> None:
        """Initialize the config loader.

        Args:
            log: Logger instance for status and error messages
        """
        self.log = log
        self._config: dict[str, Any] = {}

    @property
    def config(self) -> dict[str, Any]:
        """Return the loaded configuration."""
        return self._config

    async def load(self, config_filename: str = "") -> dict[str, Any]:
        """Load configuration from file or directory.

        Args:
            config_filename: Path to a config file or directory, defaults to CONFIG_FILE

        Returns:
            The loaded and merged configuration dictionary.

        Raises:
            ConfigError: If config file not found or has syntax errors.
        """
        config = await self._open_config(config_filename)
        merge(self._config, config, replace=True)
        return self._config

    async def _open_config(self, config_filename: str = "") -> dict[str, Any]:
        fname = Path(os.path.expandvars(config_filename)).expanduser() if config_filename else CONFIG_FILE
        if await aiofiles.os.path.isdir(fname):
            return await self._load_config_directory(fname)

        config = await self._load_config_file(fname)
        for extra_config in list(config.get("cmdcomplete", {}).get("include", [])):
            merge(config, await self._open_config(extra_config))
        return config

    async def _load_config_directory(self, directory: Path) -> dict[str, Any]:
        config: dict[str, Any] = {}
        for toml_file in sorted(await aiofiles.os.listdir(directory)):
            if toml_file.endswith(".toml"):
                merge(config, await self._load_config_file(directory / toml_file))
        return config

    async def _load_config_file(self, fname: Path) -> dict[str, Any]:
        """Load a single TOML file.

        Raises:
            ConfigError: If file not found or has syntax errors
        """
        if not await aiofiles.os.path.exists(fname):
            self.log.critical("Config file not found: %s", fname)
            raise ConfigError(f"Config file not found: {fname}")

        self.log.info("Loading %s", fname)
        async with aiofiles.open(fname, encoding="utf-8") as f:
            content = await f.read()
        try:
            return tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            self.log.critical("Problem reading %s: %s", fname, e)
            raise ConfigError(f"Problem reading {fname}: {e}") from e


def apply_config(config: dict[str, Any], registry: CompletionRegistry, replacements: CommandReplacements) -> None:
    """Register the static completions and macros found in `config`.

    Args:
        config: A loaded configuration
        registry: Receives ``[completions]`` entries
        replacements: Receives ``[replacements]`` entries

    Raises:
        ConfigError: If a completion entry is neither a string nor a list
    """
    for handler_id, values in config.get("completions", {}).items():
        if isinstance(values, str):
            registry.register_static(handler_id, values)
        elif isinstance(values, list):
            registry.register_static(handler_id, [str(v) for v in values])
        else:
            msg = f"completions.{handler_id} must be a string or a list, not {type(values).__name__}"
            registry.log.error(msg)
            raise ConfigError(msg)
    replacements.add_all(config.get("replacements", {}))
