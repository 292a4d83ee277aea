"""Data model shared by the registry and the resolvers."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Protocol, runtime_checkable

from .errors import SyncCompletionRequiredError
from .logging_setup import get_logger

__all__ = [
    "CommandIssuer",
    "CommandParameter",
    "CompletionContext",
    "CompletionHandler",
    "CompletionResult",
    "ConsoleIssuer",
    "ExceptionReporter",
    "HandlerFunc",
    "HandlerMode",
    "Outcome",
    "RegisteredCommand",
]


@runtime_checkable
class CommandIssuer(Protocol):
    """Whoever is asking for completions."""

    name: str


@dataclass(frozen=True)
class ConsoleIssuer:
    """Minimal issuer, used when the host has no session concept."""

    name: str = "console"


ExceptionReporter = Callable[["RegisteredCommand", CommandIssuer, list[str], Exception], None]


@dataclass
class CommandParameter:
    """A parameter of a registered command."""

    name: str
    complete: str | None = None  # overrides the positional token when set
    consumes_input: bool = True
    type: type | None = None


@dataclass
class RegisteredCommand:
    """A command as seen by the completion machinery."""

    name: str
    complete: str = ""
    parameters: list[CommandParameter] = field(default_factory=list)
    on_error: ExceptionReporter | None = None

    def handle_exception(self, issuer: CommandIssuer, args: Sequence[str], exc: Exception) -> None:
        """Report a failure raised while completing this command.

        Args:
            issuer: The issuer of the completion request
            args: The current argument list
            exc: The exception raised by the handler
        """
        if self.on_error is not None:
            self.on_error(self, issuer, list(args), exc)
            return
        get_logger("cmdcomplete.commands").error(
            "Completion failed for %s (issuer %s, args %s)", self.name, issuer.name, list(args), exc_info=exc
        )


@dataclass(frozen=True)
class CompletionContext:
    """Everything a handler gets to know about one invocation."""

    command: RegisteredCommand
    issuer: CommandIssuer
    input: str
    config: str | None
    args: tuple[str, ...]
    is_async: bool

    @cached_property
    def configs(self) -> dict[str, str | None]:
        """Config split as ``key=value,flag`` pairs, keys lowercased."""
        result: dict[str, str | None] = {}
        if not self.config:
            return result
        for item in self.config.split(","):
            key, sep, value = item.partition("=")
            result[key.strip().lower()] = value if sep else None
        return result

    def has_config(self, key: str) -> bool:
        """Tell if the config contains `key`."""
        return key.lower() in self.configs

    def get_config(self, key: str, default: str | None = None) -> str | None:
        """Return the value of `key` in the config, or `default`."""
        value = self.configs.get(key.lower())
        return default if value is None else value


HandlerFunc = Callable[[CompletionContext], Iterable[str] | None]


class HandlerMode(Enum):
    """Execution contexts a handler may run in."""

    SYNC = "sync"  # restricted thread only
    ASYNC = "async"  # any thread


@dataclass(frozen=True)
class CompletionHandler:
    """A registered completion provider."""

    id: str
    func: HandlerFunc
    mode: HandlerMode = HandlerMode.SYNC

    @property
    def is_async(self) -> bool:
        """True when the handler may run off the restricted thread."""
        return self.mode is HandlerMode.ASYNC

    def __call__(self, context: CompletionContext) -> Iterable[str] | None:
        return self.func(context)


class Outcome(Enum):
    """How a resolution ended."""

    OK = "ok"
    ABORT = "abort"  # fell back to the raw input token
    SYNC_VIOLATION = "sync_violation"


@dataclass(frozen=True)
class CompletionResult:
    """Result of a resolution.

    ``candidates`` is ``None`` only for :attr:`Outcome.SYNC_VIOLATION`.
    """

    outcome: Outcome
    candidates: list[str] | None
    error: SyncCompletionRequiredError | None = None

    @classmethod
    def ok(cls, candidates: list[str]) -> CompletionResult:
        """Build a successful result."""
        return cls(Outcome.OK, candidates)

    @classmethod
    def abort(cls, raw_input: str) -> CompletionResult:
        """Build a result falling back to the raw input token."""
        return cls(Outcome.ABORT, [raw_input])

    @classmethod
    def sync_violation(cls, handler_id: str) -> CompletionResult:
        """Build the result of an async request reaching a sync-only handler."""
        return cls(Outcome.SYNC_VIOLATION, None, SyncCompletionRequiredError(handler_id))
