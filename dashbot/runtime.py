"""Bot runtime – owns the aiogram Bot and the polling task.

The dashboard uses it to report status, push presence text and restart the
bot after the token changes.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.client.session.aiohttp import AiohttpSession
from aiogram.enums import ParseMode

from dashbot.config import settings
from dashbot.services.config_store import ConfigStore
from dashbot.services.error_sink import ErrorSink

logger = logging.getLogger(__name__)

ALLOWED_UPDATES = ["message"]


def create_bot(token: str) -> Bot:
    """Construct the Bot instance (optionally pointing to a local API server)."""
    session = None
    if settings.LOCAL_API_URL:
        from aiogram.client.telegram import TelegramAPIServer

        session = AiohttpSession(
            api=TelegramAPIServer.from_base(settings.LOCAL_API_URL)
        )
    return Bot(
        token=token,
        session=session,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )


class BotRuntime:
    def __init__(
        self,
        dp: Dispatcher,
        store: ConfigStore,
        error_sink: ErrorSink,
        bot_factory: Callable[[str], Bot] = create_bot,
    ) -> None:
        self._dp = dp
        self._store = store
        self._error_sink = error_sink
        self._bot_factory = bot_factory
        self._bot: Bot | None = None
        self._polling: asyncio.Task[None] | None = None
        self.last_restart = datetime.now(timezone.utc)

    @property
    def is_online(self) -> bool:
        return self._polling is not None and not self._polling.done()

    @property
    def bot(self) -> Bot | None:
        return self._bot

    async def start(self) -> bool:
        """Log in and start polling. Returns False when no token is configured."""
        if self.is_online:
            return True

        bot: Bot | None = None
        try:
            config = await self._store.get_config()
            token = settings.BOT_TOKEN or (config.token if config else None)
            if not token:
                logger.warning("No bot token found. Bot will not start.")
                return False

            bot = self._bot_factory(token)
            me = await bot.get_me()
            await bot.delete_webhook(drop_pending_updates=True)
            self._bot = bot
            self._polling = asyncio.create_task(
                self._dp.start_polling(
                    bot, handle_signals=False, allowed_updates=ALLOWED_UPDATES
                )
            )
            self.last_restart = datetime.now(timezone.utc)
            logger.info("Bot @%s (id=%d) started.", me.username, me.id)
        except Exception as exc:
            if bot is not None and self._bot is not bot:
                await bot.session.close()
            await self._error_sink.record("Bot initialization failed", exc)
            raise

        if config:
            await self.apply_status(config.status, config.status_message)
        return True

    async def stop(self) -> None:
        polling, self._polling = self._polling, None
        bot, self._bot = self._bot, None
        try:
            if polling is not None:
                if polling.done():
                    if not polling.cancelled() and polling.exception() is not None:
                        logger.warning("Polling had already stopped: %r", polling.exception())
                else:
                    try:
                        await self._dp.stop_polling()
                    except RuntimeError:
                        # polling task created but not yet running
                        polling.cancel()
                    try:
                        await polling
                    except asyncio.CancelledError:
                        pass
                    except Exception:
                        logger.exception("Polling ended with an error")
        finally:
            if bot is not None:
                await bot.session.close()
        logger.info("Bot stopped.")

    async def restart(self) -> bool:
        try:
            await self.stop()
            return await self.start()
        except Exception as exc:
            await self._error_sink.record("Bot restart failed", exc)
            return False

    async def apply_status(self, status: str, status_message: str) -> bool:
        """Publish the status message as the bot's short description."""
        if self._bot is None:
            return False
        try:
            await self._bot.set_my_short_description(short_description=status_message)
        except Exception as exc:
            await self._error_sink.record("Failed to update bot status", exc)
            return False
        logger.info("Bot status set: %s (%s)", status, status_message)
        return True
