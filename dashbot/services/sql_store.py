"""PostgreSQL-backed config store – one session per operation."""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dashbot.db.repositories.command_repo import CommandRepo
from dashbot.db.repositories.config_repo import ConfigRepo
from dashbot.db.repositories.error_log_repo import ErrorLogRepo
from dashbot.models.bot_settings import BotSettings
from dashbot.models.command import Command
from dashbot.models.error_log import ErrorLog
from dashbot.services.config_store import (
    BotConfig,
    CommandNameConflict,
    CommandRecord,
    ErrorLogEntry,
)


def _to_config(row: BotSettings) -> BotConfig:
    return BotConfig(
        prefix=row.prefix,
        status=row.status,
        status_message=row.status_message,
        token=row.token,
        updated_at=row.updated_at,
    )


def _to_record(row: Command) -> CommandRecord:
    return CommandRecord(
        id=row.id, name=row.name, description=row.description, enabled=row.enabled
    )


def _to_entry(row: ErrorLog) -> ErrorLogEntry:
    return ErrorLogEntry(
        id=row.id, message=row.message, stack=row.stack, timestamp=row.timestamp
    )


class SqlConfigStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_config(self) -> BotConfig | None:
        async with self._session_factory() as session:
            row = await ConfigRepo(session).get()
        return _to_config(row) if row else None

    async def upsert_config(self, **values: Any) -> BotConfig:
        values = {k: v for k, v in values.items() if v is not None}
        async with self._session_factory() as session:
            row = await ConfigRepo(session).upsert(**values)
        return _to_config(row)

    async def list_commands(self) -> list[CommandRecord]:
        async with self._session_factory() as session:
            rows = await CommandRepo(session).list_all()
        return [_to_record(r) for r in rows]

    async def get_command(self, command_id: int) -> CommandRecord | None:
        async with self._session_factory() as session:
            row = await CommandRepo(session).get(command_id)
        return _to_record(row) if row else None

    async def get_command_by_name(self, name: str) -> CommandRecord | None:
        async with self._session_factory() as session:
            row = await CommandRepo(session).get_by_name(name)
        return _to_record(row) if row else None

    async def create_command(
        self, name: str, description: str, enabled: bool = True
    ) -> CommandRecord:
        async with self._session_factory() as session:
            try:
                row = await CommandRepo(session).create(name, description, enabled)
            except IntegrityError as exc:
                await session.rollback()
                raise CommandNameConflict(name) from exc
        return _to_record(row)

    async def update_command(self, command_id: int, **values: Any) -> CommandRecord | None:
        async with self._session_factory() as session:
            try:
                row = await CommandRepo(session).update(command_id, **values)
            except IntegrityError as exc:
                await session.rollback()
                raise CommandNameConflict(values.get("name", "")) from exc
        return _to_record(row) if row else None

    async def delete_command(self, command_id: int) -> bool:
        async with self._session_factory() as session:
            return await CommandRepo(session).delete(command_id)

    async def list_error_logs(self) -> list[ErrorLogEntry]:
        async with self._session_factory() as session:
            rows = await ErrorLogRepo(session).list_recent()
        return [_to_entry(r) for r in rows]

    async def append_error_log(self, message: str, stack: str | None = None) -> ErrorLogEntry:
        async with self._session_factory() as session:
            row = await ErrorLogRepo(session).append(message, stack)
        return _to_entry(row)

    async def clear_error_logs(self) -> None:
        async with self._session_factory() as session:
            await ErrorLogRepo(session).clear()
