"""Command dispatcher – maps one incoming message to at most one command run.

Flow: bot-author check → prefix (re-read every time) → parse → persisted
enablement → registry lookup → execute. Unknown, disabled or uninstalled
commands are dropped without a reply. Handler failures are recorded via the
error sink and never escape :meth:`CommandDispatcher.handle`.
"""

from __future__ import annotations

import logging

from aiogram.types import Message

from dashbot.commands.base import CommandContext
from dashbot.commands.registry import CommandRegistry
from dashbot.services.config_store import ConfigStore, get_prefix
from dashbot.services.error_sink import ErrorSink
from dashbot.services.player import PlaybackSessions
from dashbot.utils.text import parse_invocation

logger = logging.getLogger(__name__)


class CommandDispatcher:
    def __init__(
        self,
        store: ConfigStore,
        registry: CommandRegistry,
        error_sink: ErrorSink,
        player: PlaybackSessions | None = None,
    ) -> None:
        self._store = store
        self._registry = registry
        self._error_sink = error_sink
        self._player = player

    async def handle(self, message: Message) -> bool:
        """Dispatch *message*. Returns True only if a handler ran to completion."""
        if message.from_user is not None and message.from_user.is_bot:
            return False

        prefix = await get_prefix(self._store)
        parsed = parse_invocation(message.text, prefix)
        if parsed is None:
            return False
        name, args = parsed

        record = await self._store.get_command_by_name(name)
        if record is None or not record.enabled:
            return False

        definition = self._registry.lookup(name)
        if definition is None:
            logger.debug("Command %r is persisted but has no handler", name)
            return False

        ctx = CommandContext(
            message=message,
            store=self._store,
            registry=self._registry,
            error_sink=self._error_sink,
            player=self._player,
        )
        try:
            await definition.execute(ctx, args)
        except Exception as exc:
            await self._error_sink.record(f"Command execution failed: {name}", exc)
            return False

        logger.debug("Command %r handled in chat %s", name, message.chat.id)
        return True
