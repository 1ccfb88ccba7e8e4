"""Shared fixtures for dashbot tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from dashbot.commands import register_builtins
from dashbot.commands.registry import CommandRegistry
from dashbot.services.config_store import MemoryConfigStore, seed_default_commands
from dashbot.services.dispatcher import CommandDispatcher
from dashbot.services.error_sink import ErrorSink
from dashbot.services.player import PlaybackSessions


@pytest_asyncio.fixture
async def store():
    """In-memory store seeded with the default command records and prefix ``!``."""
    s = MemoryConfigStore()
    await seed_default_commands(s)
    await s.upsert_config(prefix="!")
    return s


@pytest.fixture
def error_sink(store):
    return ErrorSink(store)


@pytest_asyncio.fixture
async def registry(error_sink):
    return await register_builtins(CommandRegistry(), error_sink)


@pytest.fixture
def fake_redis():
    """In-memory mock that behaves like redis.asyncio.Redis for the subset we use."""

    store: dict[str, str] = {}

    redis = AsyncMock()

    async def _set(key, value, ex=None, nx=False):
        if nx and key in store:
            return None
        store[key] = value
        return True

    async def _get(key):
        return store.get(key)

    async def _delete(*keys):
        count = 0
        for k in keys:
            if k in store:
                del store[k]
                count += 1
        return count

    redis.set = AsyncMock(side_effect=_set)
    redis.get = AsyncMock(side_effect=_get)
    redis.delete = AsyncMock(side_effect=_delete)
    redis.ping = AsyncMock(return_value=True)

    redis._store = store  # Expose for assertions
    return redis


@pytest.fixture
def player(fake_redis):
    return PlaybackSessions(fake_redis)


@pytest.fixture
def dispatcher(store, registry, error_sink, player):
    return CommandDispatcher(store, registry, error_sink, player)


@pytest.fixture
def make_message():
    """Factory to create a mock aiogram Message with desired attributes.

    ``reply`` returns a mock "sent" message whose ``date`` is
    ``reply_delay_ms`` after the original and whose ``edit_text`` is awaitable.
    """

    def _make(
        text: str | None = None,
        message_id: int = 1,
        chat_id: int = 100,
        from_user_id: int = 999,
        is_bot: bool = False,
        full_name: str = "Alice",
        reply_delay_ms: int = 250,
    ):
        date = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

        sent = MagicMock()
        sent.date = date + timedelta(milliseconds=reply_delay_ms)
        sent.edit_text = AsyncMock()

        msg = MagicMock()
        msg.message_id = message_id
        msg.text = text
        msg.date = date
        msg.chat = MagicMock()
        msg.chat.id = chat_id
        msg.from_user = MagicMock()
        msg.from_user.id = from_user_id
        msg.from_user.is_bot = is_bot
        msg.from_user.full_name = full_name
        msg.reply = AsyncMock(return_value=sent)
        msg.reply_audio = AsyncMock()
        msg.sent = sent  # Expose for assertions
        return msg

    return _make
