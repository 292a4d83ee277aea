"""Completion resolution for the token being typed.

Resolution picks the spec of the current argument position, expands macros,
then walks its ``|`` separated segments. Registered ids are dispatched to
their handler, anything else is kept as literal text::

    resolver = CompletionResolver(CompletionRegistry())
    resolver.resolve(command, issuer, ["give", "apple", ""])

A handler with nothing to offer (returning None or raising
CompletionLookupAbort) or failing in any other way makes the whole
resolution fall back to the raw input token. An async request reaching a
sync-only handler yields None so the caller can retry synchronously.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .constants import CONFIG_SEPARATOR, SEGMENT_SEPARATOR
from .errors import CompletionLookupAbort
from .logging_setup import get_logger
from .models import CompletionContext, CompletionResult
from .positions import resolve_positions
from .replacements import CommandReplacements

if TYPE_CHECKING:
    from .models import CommandIssuer, RegisteredCommand
    from .registry import CompletionRegistry

__all__ = ["CompletionResolver", "split_segment"]


def split_segment(segment: str) -> tuple[str, str | None]:
    """Split a segment into its id and config (None when there is no config)."""
    handler_id, sep, config = segment.partition(CONFIG_SEPARATOR)
    return handler_id, config if sep else None


class CompletionResolver:
    """Turns a partial command line into completion candidates.

    Holds no per-request state: one instance can serve concurrent requests
    as long as the registry is not modified meanwhile.

    Args:
        registry: The handlers to dispatch to
        replacements: Macros expanded in specs before parsing
    """

    def __init__(self, registry: CompletionRegistry, replacements: CommandReplacements | None = None) -> None:
        self.registry = registry
        self.replacements = replacements if replacements is not None else CommandReplacements()
        self.log = get_logger("cmdcomplete.resolver")

    def resolve(self, command: RegisteredCommand, issuer: CommandIssuer, args: Sequence[str], is_async: bool = False) -> list[str] | None:
        """Return the candidates for the last argument.

        Args:
            command: The command being typed
            issuer: Who asks
            args: The arguments typed so far, the last one being in progress
            is_async: True when running off the restricted thread

        Returns:
            The candidates, or None if a sync-only handler was hit in async mode
        """
        return self.resolve_result(command, issuer, args, is_async).candidates

    def resolve_result(self, command: RegisteredCommand, issuer: CommandIssuer, args: Sequence[str], is_async: bool = False) -> CompletionResult:
        """Same as :meth:`resolve`, returning how the resolution ended."""
        args = list(args) or [""]
        arg_index = len(args) - 1
        specs = resolve_positions(command)

        if arg_index < len(specs):
            spec = specs[arg_index]
        elif specs:
            spec = specs[-1]
        else:
            return CompletionResult.ok([args[arg_index]])

        return self.get_completion_values(command, issuer, spec, args, is_async)

    def get_completion_values(
        self,
        command: RegisteredCommand,
        issuer: CommandIssuer,
        spec: str,
        args: Sequence[str],
        is_async: bool = False,
    ) -> CompletionResult:
        """Expand one completion spec.

        Args:
            command: The command being typed
            issuer: Who asks
            spec: A spec such as "yes|no|@range:=1-3"
            args: The arguments typed so far
            is_async: True when running off the restricted thread

        Returns:
            The outcome, with the concatenated candidates of every segment on success
        """
        spec = self.replacements.replace(spec)
        raw_input = args[-1] if args else ""
        candidates: list[str] = []

        for segment in spec.split(SEGMENT_SEPARATOR):
            handler_id, config = split_segment(segment)
            handler = self.registry.lookup(handler_id)
            if handler is None:
                candidates.append(segment)
                continue

            if is_async and not handler.is_async:
                result = CompletionResult.sync_violation(handler.id)
                self.log.debug("%s: %s", command.name, result.error)
                return result

            context = CompletionContext(
                command=command,
                issuer=issuer,
                input=raw_input,
                config=config,
                args=tuple(args),
                is_async=is_async,
            )
            try:
                values = handler(context)
                if isinstance(values, str):
                    msg = f"Completion handler {handler.id} returned a string, expected a collection of strings"
                    raise TypeError(msg)  # noqa: TRY301
                if values is not None:
                    values = list(values)
            except CompletionLookupAbort:
                values = None
            except Exception as e:  # noqa: BLE001
                command.handle_exception(issuer, args, e)
                return CompletionResult.abort(raw_input)

            if values is None:
                self.log.debug("%s: %s gave up, keeping %r", command.name, handler.id, raw_input)
                return CompletionResult.abort(raw_input)
            candidates.extend(values)

        return CompletionResult.ok(candidates)
