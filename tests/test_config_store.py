"""Tests for the in-memory config store and the seeding/prefix helpers."""

from __future__ import annotations

import pytest

from dashbot.services.config_store import (
    DEFAULT_COMMANDS,
    CommandNameConflict,
    MemoryConfigStore,
    get_prefix,
    seed_default_commands,
)


@pytest.mark.asyncio
async def test_config_absent_initially():
    assert await MemoryConfigStore().get_config() is None


@pytest.mark.asyncio
async def test_upsert_creates_then_updates_single_row():
    s = MemoryConfigStore()
    created = await s.upsert_config(prefix="?", status_message="Hi")
    assert created.prefix == "?"
    assert created.status == "online"

    updated = await s.upsert_config(status="idle")
    assert updated.prefix == "?"
    assert updated.status == "idle"
    assert updated.status_message == "Hi"
    assert updated.updated_at is not None


@pytest.mark.asyncio
async def test_upsert_ignores_none_values():
    s = MemoryConfigStore()
    await s.upsert_config(prefix="$", token="secret")
    config = await s.upsert_config(prefix=None, token=None)
    assert config.prefix == "$"
    assert config.token == "secret"


@pytest.mark.asyncio
async def test_returned_config_is_a_copy():
    s = MemoryConfigStore()
    config = await s.upsert_config(prefix="!")
    config.prefix = "mutated"
    assert (await s.get_config()).prefix == "!"


@pytest.mark.asyncio
async def test_get_prefix_default_and_stored():
    s = MemoryConfigStore()
    assert await get_prefix(s) == "!"
    await s.upsert_config(prefix=">>")
    assert await get_prefix(s) == ">>"


@pytest.mark.asyncio
async def test_seed_defaults_idempotent():
    s = MemoryConfigStore()
    assert await seed_default_commands(s) == len(DEFAULT_COMMANDS)
    assert await seed_default_commands(s) == 0
    names = [c.name for c in await s.list_commands()]
    assert names == ["ping", "hello", "help"]
    assert all(c.enabled for c in await s.list_commands())


@pytest.mark.asyncio
async def test_create_duplicate_name_conflicts():
    s = MemoryConfigStore()
    await s.create_command("ping", "Ping")
    with pytest.raises(CommandNameConflict):
        await s.create_command("ping", "Another")


@pytest.mark.asyncio
async def test_rename_to_existing_name_conflicts():
    s = MemoryConfigStore()
    await s.create_command("ping", "Ping")
    other = await s.create_command("pong", "Pong")
    with pytest.raises(CommandNameConflict):
        await s.update_command(other.id, name="ping")


@pytest.mark.asyncio
async def test_update_and_delete():
    s = MemoryConfigStore()
    cmd = await s.create_command("ping", "Ping")

    updated = await s.update_command(cmd.id, enabled=False, description="Changed")
    assert updated.enabled is False
    assert updated.description == "Changed"
    assert updated.name == "ping"

    assert await s.update_command(999, enabled=True) is None
    assert await s.delete_command(cmd.id) is True
    assert await s.delete_command(cmd.id) is False
    assert await s.get_command_by_name("ping") is None


@pytest.mark.asyncio
async def test_error_logs_newest_first_and_clear():
    s = MemoryConfigStore()
    first = await s.append_error_log("first")
    second = await s.append_error_log("second", "trace")

    logs = await s.list_error_logs()
    assert [e.id for e in logs] == [second.id, first.id]
    assert logs[0].stack == "trace"

    await s.clear_error_logs()
    assert await s.list_error_logs() == []
