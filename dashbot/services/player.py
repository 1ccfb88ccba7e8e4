"""Playback sessions – which track each chat is currently playing.

State lives in Redis under ``player:{chat_id}`` so it survives bot restarts
and is shared between workers.
"""

from __future__ import annotations

import logging

import redis.asyncio as aioredis

logger = logging.getLogger(__name__)

SESSION_TTL = 6 * 3600  # 6 hours


def _key(chat_id: int) -> str:
    return f"player:{chat_id}"


class PlaybackSessions:
    def __init__(self, redis_client: aioredis.Redis) -> None:
        self._redis = redis_client

    async def start(self, chat_id: int, track_url: str) -> None:
        """Mark *track_url* as now playing in *chat_id*, replacing any previous track."""
        await self._redis.set(_key(chat_id), track_url, ex=SESSION_TTL)
        logger.info("Playback started in chat %d: %s", chat_id, track_url)

    async def current(self, chat_id: int) -> str | None:
        value = await self._redis.get(_key(chat_id))
        if value is None:
            return None
        return value if isinstance(value, str) else value.decode()

    async def stop(self, chat_id: int) -> str | None:
        """End the chat's session. Returns the track that was playing, if any."""
        track = await self.current(chat_id)
        if track is not None:
            await self._redis.delete(_key(chat_id))
            logger.info("Playback stopped in chat %d", chat_id)
        return track
