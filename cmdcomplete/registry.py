"""Completion handler registry.

Owns the mapping from completion id to handler, and from a value type to its
default completion id. One registry is built at start-up and shared by every
resolver. Registration after start-up is not synchronised; callers
registering from several threads must serialise it themselves.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from .builtin_handlers import register_builtins
from .constants import HANDLER_PREFIX, SEGMENT_SEPARATOR
from .errors import UnknownHandlerError
from .logging_setup import get_logger
from .models import CompletionHandler, HandlerFunc, HandlerMode

__all__ = ["CompletionRegistry", "normalize_id"]

StaticValues = str | Iterable[str] | Callable[[], Iterable[str]]


def normalize_id(handler_id: str) -> str:
    """Return the registry key for `handler_id`: lowercase, prefixed.

    Args:
        handler_id: An id, with or without the prefix
    """
    key = handler_id.lower()
    return key if key.startswith(HANDLER_PREFIX) else HANDLER_PREFIX + key


class CompletionRegistry:
    """Maps completion ids to handlers.

    Args:
        with_builtins: register the built-in handlers (nothing, range, timeunits)
    """

    def __init__(self, with_builtins: bool = True) -> None:
        self.log = get_logger("cmdcomplete.registry")
        self._handlers: dict[str, CompletionHandler] = {}
        self._defaults: dict[type, str] = {}
        if with_builtins:
            register_builtins(self)

    def register(self, handler_id: str, handler: HandlerFunc, is_async: bool = False) -> CompletionHandler | None:
        """Register a handler, replacing any previous one with the same id.

        Args:
            handler_id: The id used in completion specs (case-insensitive)
            handler: Callable receiving a CompletionContext
            is_async: True if the handler may run off the restricted thread

        Returns:
            The previously registered handler, if any
        """
        key = normalize_id(handler_id)
        mode = HandlerMode.ASYNC if is_async else HandlerMode.SYNC
        previous = self._handlers.get(key)
        self._handlers[key] = CompletionHandler(key, handler, mode)
        if previous is None:
            self.log.debug("Registered completion %s (%s)", key, mode.value)
        else:
            self.log.debug("Replaced completion %s (%s)", key, mode.value)
        return previous

    def register_async(self, handler_id: str, handler: HandlerFunc) -> CompletionHandler | None:
        """Register a handler safe to run on any thread."""
        return self.register(handler_id, handler, is_async=True)

    def register_static(self, handler_id: str, values: StaticValues) -> CompletionHandler | None:
        """Register a fixed list of completions.

        Args:
            handler_id: The id used in completion specs
            values: "a|b|c", an iterable of strings, or a supplier called once, right now

        Returns:
            The previously registered handler, if any
        """
        if isinstance(values, str):
            fixed = values.split(SEGMENT_SEPARATOR)
        elif callable(values):
            fixed = list(values())
        else:
            fixed = list(values)
        return self.register_async(handler_id, lambda _context: list(fixed))

    def unregister(self, handler_id: str) -> CompletionHandler | None:
        """Remove a handler, returning it."""
        return self._handlers.pop(normalize_id(handler_id), None)

    def lookup(self, handler_id: str) -> CompletionHandler | None:
        """Return the handler registered under `handler_id`, if any."""
        return self._handlers.get(normalize_id(handler_id))

    def set_default(self, handler_id: str, *types: type) -> CompletionHandler:
        """Use `handler_id` for parameters of the given types lacking an explicit spec.

        Args:
            handler_id: A registered completion id
            *types: The parameter types

        Returns:
            The handler registered under `handler_id`

        Raises:
            UnknownHandlerError: if `handler_id` is not registered
        """
        key = normalize_id(handler_id)
        handler = self._handlers.get(key)
        if handler is None:
            raise UnknownHandlerError(handler_id)
        for value_type in types:
            self._defaults[value_type] = key
            self.log.debug("Default completion for %s is %s", value_type.__name__, key)
        return handler

    def default_for(self, value_type: type) -> str | None:
        """Return the default completion id for `value_type`, if any."""
        return self._defaults.get(value_type)

    def ids(self) -> list[str]:
        """Return the registered ids, sorted."""
        return sorted(self._handlers)

    def __contains__(self, handler_id: object) -> bool:
        return isinstance(handler_id, str) and normalize_id(handler_id) in self._handlers

    def __iter__(self) -> Iterator[CompletionHandler]:
        return iter(self._handlers.values())

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"CompletionRegistry(ids={self.ids()})"
