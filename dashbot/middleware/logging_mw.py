"""Logging middleware – structured logging per update."""

from __future__ import annotations

import logging
import time
from typing import Any, Awaitable, Callable

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject, Update

logger = logging.getLogger("dashbot.updates")


class LoggingMiddleware(BaseMiddleware):
    """Log each update with timing and basic metadata."""

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        start = time.perf_counter()

        update: Update | None = event if isinstance(event, Update) else data.get("event_update")
        update_type = "unknown"
        chat_id = None
        if update and update.message:
            update_type = "message"
            chat_id = update.message.chat.id

        try:
            result = await handler(event, data)
        except Exception as e:
            elapsed = (time.perf_counter() - start) * 1000
            logger.error(
                "update=%s chat=%s elapsed=%.1fms error=%s",
                update_type,
                chat_id,
                elapsed,
                e,
            )
            raise

        elapsed = (time.perf_counter() - start) * 1000
        logger.info("update=%s chat=%s elapsed=%.1fms", update_type, chat_id, elapsed)
        return result
