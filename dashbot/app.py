"""Application factory – wires the store, command registry, dispatcher, bot
runtime and dashboard, then runs until interrupted."""

from __future__ import annotations

import asyncio
import logging

import redis.asyncio as aioredis
from aiogram import Dispatcher
from aiohttp import web

from dashbot.commands import register_builtins
from dashbot.commands.registry import CommandRegistry
from dashbot.config import settings
from dashbot.runtime import BotRuntime
from dashbot.services.config_store import ConfigStore, seed_default_commands
from dashbot.services.dispatcher import CommandDispatcher
from dashbot.services.error_sink import ErrorSink
from dashbot.services.player import PlaybackSessions
from dashbot.web.app import create_app

logger = logging.getLogger(__name__)


def _register_routers(dp: Dispatcher) -> None:
    """Import and include all routers."""
    from dashbot.handlers.messages import messages_router

    dp.include_router(messages_router)


def _register_middleware(dp: Dispatcher) -> None:
    """Register all middleware on the dispatcher."""
    from dashbot.middleware.logging_mw import LoggingMiddleware

    dp.update.outer_middleware(LoggingMiddleware())


async def _ensure_schema() -> None:
    """Create tables if needed."""
    from dashbot.db.base import Base
    from dashbot.db.engine import engine

    # Import models so they register on metadata
    from dashbot.models.bot_settings import BotSettings  # noqa: F401
    from dashbot.models.command import Command  # noqa: F401
    from dashbot.models.error_log import ErrorLog  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables ensured.")


def _create_store() -> ConfigStore:
    from dashbot.db.engine import async_session
    from dashbot.services.sql_store import SqlConfigStore

    return SqlConfigStore(async_session)


async def build_dispatcher(
    store: ConfigStore,
    error_sink: ErrorSink,
    player: PlaybackSessions | None = None,
) -> Dispatcher:
    """Build the aiogram Dispatcher with the command dispatcher injected."""
    registry = await register_builtins(CommandRegistry(), error_sink)

    dp = Dispatcher()
    dp["error_sink"] = error_sink
    dp["command_dispatcher"] = CommandDispatcher(store, registry, error_sink, player)

    _register_middleware(dp)
    _register_routers(dp)
    return dp


async def _shutdown(runtime: BotRuntime, runner: web.AppRunner, redis: aioredis.Redis) -> None:
    """Graceful shutdown – stop polling, close the web server and pools."""
    logger.info("Shutting down…")
    await runtime.stop()
    await runner.cleanup()
    await redis.close()

    from dashbot.db.engine import engine

    await engine.dispose()
    logger.info("Shutdown complete.")


async def main() -> None:
    """Entry point."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    await _ensure_schema()
    store = _create_store()
    created = await seed_default_commands(store)
    if created:
        logger.info("Seeded %d default commands.", created)

    error_sink = ErrorSink(store)
    redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    player = PlaybackSessions(redis)

    dp = await build_dispatcher(store, error_sink, player)
    runtime = BotRuntime(dp, store, error_sink)

    app = create_app(store, runtime=runtime, redis=redis)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host=settings.DASHBOARD_HOST, port=settings.DASHBOARD_PORT)
    await site.start()
    logger.info("Dashboard listening on %s", settings.dashboard_url)

    try:
        await runtime.start()
    except Exception:
        logger.exception("Failed to initialize bot; dashboard stays up")

    try:
        # Keep running until interrupted
        await asyncio.Event().wait()
    finally:
        await _shutdown(runtime, runner, redis)
