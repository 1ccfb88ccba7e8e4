"""Config store – the persisted state the dispatcher reads on every message.

Two interchangeable implementations share the :class:`ConfigStore` contract:
:class:`MemoryConfigStore` (process-local, used in tests and for dry runs)
and :class:`dashbot.services.sql_store.SqlConfigStore` (PostgreSQL).
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Protocol

from dashbot.config import settings

DEFAULT_COMMANDS: tuple[tuple[str, str], ...] = (
    ("ping", "Replies with Pong!"),
    ("hello", "Greets the user"),
    ("help", "Shows available commands"),
)

DEFAULT_STATUS = "online"
DEFAULT_STATUS_MESSAGE = "Serving commands!"


class CommandNameConflict(ValueError):
    """Raised when a command record would duplicate an existing name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Command with name {name!r} already exists")
        self.name = name


@dataclass
class BotConfig:
    prefix: str = "!"
    status: str = DEFAULT_STATUS
    status_message: str = DEFAULT_STATUS_MESSAGE
    token: str | None = None
    updated_at: datetime | None = None


@dataclass
class CommandRecord:
    id: int
    name: str
    description: str
    enabled: bool = True


@dataclass
class ErrorLogEntry:
    id: int
    message: str
    stack: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ConfigStore(Protocol):
    async def get_config(self) -> BotConfig | None: ...

    async def upsert_config(self, **values: Any) -> BotConfig: ...

    async def list_commands(self) -> list[CommandRecord]: ...

    async def get_command(self, command_id: int) -> CommandRecord | None: ...

    async def get_command_by_name(self, name: str) -> CommandRecord | None: ...

    async def create_command(
        self, name: str, description: str, enabled: bool = True
    ) -> CommandRecord: ...

    async def update_command(self, command_id: int, **values: Any) -> CommandRecord | None: ...

    async def delete_command(self, command_id: int) -> bool: ...

    async def list_error_logs(self) -> list[ErrorLogEntry]: ...

    async def append_error_log(self, message: str, stack: str | None = None) -> ErrorLogEntry: ...

    async def clear_error_logs(self) -> None: ...


_CONFIG_FIELDS = ("prefix", "status", "status_message", "token")
_COMMAND_FIELDS = ("name", "description", "enabled")


class MemoryConfigStore:
    """In-process store.

    No method awaits between reading and writing its maps, so every
    operation is atomic with respect to other tasks on the loop.
    """

    def __init__(self) -> None:
        self._config: BotConfig | None = None
        self._commands: dict[int, CommandRecord] = {}
        self._logs: dict[int, ErrorLogEntry] = {}
        self._command_ids = itertools.count(1)
        self._log_ids = itertools.count(1)

    # ── Bot config ────────────────────────────────────────────────────

    async def get_config(self) -> BotConfig | None:
        return replace(self._config) if self._config else None

    async def upsert_config(self, **values: Any) -> BotConfig:
        changes = {
            k: v for k, v in values.items() if k in _CONFIG_FIELDS and v is not None
        }
        base = self._config or BotConfig(prefix=settings.DEFAULT_PREFIX)
        self._config = replace(base, **changes, updated_at=datetime.now(timezone.utc))
        return replace(self._config)

    # ── Commands ──────────────────────────────────────────────────────

    async def list_commands(self) -> list[CommandRecord]:
        return [replace(c) for c in self._commands.values()]

    async def get_command(self, command_id: int) -> CommandRecord | None:
        cmd = self._commands.get(command_id)
        return replace(cmd) if cmd else None

    async def get_command_by_name(self, name: str) -> CommandRecord | None:
        for cmd in self._commands.values():
            if cmd.name == name:
                return replace(cmd)
        return None

    async def create_command(
        self, name: str, description: str, enabled: bool = True
    ) -> CommandRecord:
        if any(c.name == name for c in self._commands.values()):
            raise CommandNameConflict(name)
        cmd = CommandRecord(
            id=next(self._command_ids), name=name, description=description, enabled=enabled
        )
        self._commands[cmd.id] = cmd
        return replace(cmd)

    async def update_command(self, command_id: int, **values: Any) -> CommandRecord | None:
        existing = self._commands.get(command_id)
        if existing is None:
            return None
        changes = {
            k: v for k, v in values.items() if k in _COMMAND_FIELDS and v is not None
        }
        new_name = changes.get("name")
        if new_name and new_name != existing.name:
            if any(c.name == new_name for c in self._commands.values()):
                raise CommandNameConflict(new_name)
        updated = replace(existing, **changes)
        self._commands[command_id] = updated
        return replace(updated)

    async def delete_command(self, command_id: int) -> bool:
        return self._commands.pop(command_id, None) is not None

    # ── Error logs ────────────────────────────────────────────────────

    async def list_error_logs(self) -> list[ErrorLogEntry]:
        return sorted(
            self._logs.values(), key=lambda e: (e.timestamp, e.id), reverse=True
        )

    async def append_error_log(self, message: str, stack: str | None = None) -> ErrorLogEntry:
        entry = ErrorLogEntry(id=next(self._log_ids), message=message, stack=stack)
        self._logs[entry.id] = entry
        return entry

    async def clear_error_logs(self) -> None:
        self._logs.clear()


async def get_prefix(store: ConfigStore) -> str:
    """Current command prefix; always read through, never cached."""
    config = await store.get_config()
    if config is None or not config.prefix:
        return settings.DEFAULT_PREFIX
    return config.prefix


async def seed_default_commands(store: ConfigStore) -> int:
    """Create the default command records that are missing. Returns how many."""
    created = 0
    for name, description in DEFAULT_COMMANDS:
        if await store.get_command_by_name(name) is None:
            try:
                await store.create_command(name, description, enabled=True)
            except CommandNameConflict:
                continue
            created += 1
    return created
