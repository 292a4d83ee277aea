"""Run completion requests from an asyncio application.

The event loop thread plays the restricted thread: handlers registered as
sync-only only ever run there. Requests are first tried in a worker thread
and only come back to the loop when a sync-only handler is involved.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .logging_setup import get_logger
from .models import Outcome

if TYPE_CHECKING:
    from .models import CommandIssuer, RegisteredCommand
    from .resolver import CompletionResolver

__all__ = ["complete"]

log = get_logger("cmdcomplete.scheduling")


async def complete(resolver: CompletionResolver, command: RegisteredCommand, issuer: CommandIssuer, args: Sequence[str]) -> list[str]:
    """Resolve completions without blocking the event loop when possible.

    Args:
        resolver: The resolver to use
        command: The command being typed
        issuer: Who asks
        args: The arguments typed so far

    Returns:
        The candidates
    """
    result = await asyncio.to_thread(resolver.resolve_result, command, issuer, list(args), True)
    if result.outcome is Outcome.SYNC_VIOLATION:
        log.debug("Retrying %s on the event loop: %s", command.name, result.error)
        result = resolver.resolve_result(command, issuer, args, False)
    return result.candidates or []
