"""Command repository – CRUD for the commands table."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from dashbot.models.command import Command


class CommandRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._s = session

    async def list_all(self) -> list[Command]:
        result = await self._s.execute(select(Command).order_by(Command.id))
        return list(result.scalars().all())

    async def get(self, command_id: int) -> Command | None:
        return await self._s.get(Command, command_id)

    async def get_by_name(self, name: str) -> Command | None:
        result = await self._s.execute(select(Command).where(Command.name == name))
        return result.scalar_one_or_none()

    async def create(self, name: str, description: str, enabled: bool = True) -> Command:
        row = Command(name=name, description=description, enabled=enabled)
        self._s.add(row)
        await self._s.commit()
        return row

    async def update(self, command_id: int, **values: Any) -> Command | None:
        """Apply a partial update; returns None if the row does not exist."""
        row = await self.get(command_id)
        if row is None:
            return None
        for key in ("name", "description", "enabled"):
            if key in values and values[key] is not None:
                setattr(row, key, values[key])
        await self._s.commit()
        return row

    async def delete(self, command_id: int) -> bool:
        result = await self._s.execute(delete(Command).where(Command.id == command_id))
        await self._s.commit()
        return (result.rowcount or 0) > 0
