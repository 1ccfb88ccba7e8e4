"""Command definitions and the context handed to every handler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable

from aiogram.types import Message

if TYPE_CHECKING:
    from dashbot.commands.registry import CommandRegistry
    from dashbot.services.config_store import ConfigStore
    from dashbot.services.error_sink import ErrorSink
    from dashbot.services.player import PlaybackSessions


@dataclass
class CommandContext:
    """Everything a handler may touch while serving one message."""

    message: Message
    store: ConfigStore
    registry: CommandRegistry
    error_sink: ErrorSink
    player: PlaybackSessions | None = None


Handler = Callable[[CommandContext, list[str]], Awaitable[None]]


@dataclass(frozen=True)
class CommandDefinition:
    name: str
    description: str
    handler: Handler

    async def execute(self, ctx: CommandContext, args: list[str]) -> None:
        await self.handler(ctx, args)
