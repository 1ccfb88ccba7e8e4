"""Message handler – hands every text message to the command dispatcher."""

from __future__ import annotations

import logging

from aiogram import F, Router
from aiogram.types import Message

from dashbot.services.dispatcher import CommandDispatcher
from dashbot.services.error_sink import ErrorSink

logger = logging.getLogger(__name__)

messages_router = Router(name="messages")


@messages_router.message(F.text)
async def on_message(
    message: Message,
    command_dispatcher: CommandDispatcher,
    error_sink: ErrorSink,
) -> None:
    """Dispatch a text message; store failures are recorded, not raised."""
    try:
        await command_dispatcher.handle(message)
    except Exception as exc:
        await error_sink.record("Message handling failed", exc)
