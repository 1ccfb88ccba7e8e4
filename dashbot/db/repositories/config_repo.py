"""Config repository – singleton upsert for the bot_settings table."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from dashbot.models.bot_settings import SINGLETON_ID, BotSettings

_UPDATABLE = ("token", "prefix", "status", "status_message")


class ConfigRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._s = session

    async def get(self) -> BotSettings | None:
        """Return the settings row, or None if none was ever written."""
        result = await self._s.execute(
            select(BotSettings).where(BotSettings.id == SINGLETON_ID)
        )
        return result.scalar_one_or_none()

    async def upsert(self, **values: Any) -> BotSettings:
        """Insert or update the singleton row in a single statement."""
        values = {k: v for k, v in values.items() if k in _UPDATABLE}
        stmt = pg_insert(BotSettings).values(id=SINGLETON_ID, **values)
        if values:
            stmt = stmt.on_conflict_do_update(
                index_elements=["id"],
                set_={**values, "updated_at": func.now()},
            )
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=["id"])
        await self._s.execute(stmt)
        await self._s.commit()

        row = await self.get()
        if row is None:
            raise RuntimeError("bot_settings row missing after upsert")
        return row
