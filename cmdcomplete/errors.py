"""Exceptions raised by the completion machinery."""

__all__ = [
    "CompletionError",
    "CompletionLookupAbort",
    "ConfigError",
    "SyncCompletionRequiredError",
    "UnknownHandlerError",
]


class CompletionError(Exception):
    """Base class for cmdcomplete errors."""


class UnknownHandlerError(CompletionError, KeyError):
    """A default completion was requested for an id that was never registered."""

    def __init__(self, handler_id: str) -> None:
        self.handler_id = handler_id
        super().__init__(f"No completion handler registered as {handler_id!r}")


class SyncCompletionRequiredError(CompletionError):
    """An async completion request reached a handler that must run synchronously."""

    def __init__(self, handler_id: str) -> None:
        self.handler_id = handler_id
        super().__init__(f"Completion handler {handler_id!r} must run synchronously")


class CompletionLookupAbort(CompletionError):
    """Raised by a handler with nothing sensible to suggest.

    The whole completion falls back to the raw input token. Never reported to the user.
    """


class ConfigError(CompletionError):
    """Used for configuration errors which already triggered logging."""
