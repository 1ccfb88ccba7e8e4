"""Error log repository – append, list and bulk clear."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from dashbot.models.error_log import ErrorLog


class ErrorLogRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._s = session

    async def append(self, message: str, stack: str | None = None) -> ErrorLog:
        row = ErrorLog(message=message, stack=stack)
        self._s.add(row)
        await self._s.commit()
        await self._s.refresh(row)
        return row

    async def list_recent(self) -> list[ErrorLog]:
        """All entries, newest first."""
        result = await self._s.execute(
            select(ErrorLog).order_by(ErrorLog.timestamp.desc(), ErrorLog.id.desc())
        )
        return list(result.scalars().all())

    async def clear(self) -> int:
        result = await self._s.execute(delete(ErrorLog))
        await self._s.commit()
        return result.rowcount or 0
