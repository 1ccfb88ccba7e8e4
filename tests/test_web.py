"""Tests for the dashboard HTTP API."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from dashbot.web.app import create_app
from dashbot.web.schemas import MASKED_TOKEN


@pytest.fixture
def runtime():
    rt = MagicMock()
    rt.is_online = True
    rt.last_restart.isoformat.return_value = "2026-01-01T00:00:00+00:00"
    rt.apply_status = AsyncMock(return_value=True)
    rt.restart = AsyncMock(return_value=True)
    return rt


@pytest_asyncio.fixture
async def client(store, runtime, fake_redis):
    app = create_app(store, runtime=runtime, redis=fake_redis)
    async with TestClient(TestServer(app)) as c:
        yield c


# ── Bot config ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_get_config_masks_token(client, store):
    await store.upsert_config(token="123:SECRET")
    resp = await client.get("/api/bot")
    assert resp.status == 200
    body = await resp.json()
    assert body["token"] == MASKED_TOKEN
    assert "SECRET" not in await resp.text()
    assert body["prefix"] == "!"


@pytest.mark.asyncio
async def test_update_config_applies_status(client, store, runtime):
    resp = await client.post(
        "/api/bot", json={"prefix": "?", "status": "idle", "statusMessage": "Busy"}
    )
    assert resp.status == 200
    body = await resp.json()
    assert body["prefix"] == "?"
    assert body["statusMessage"] == "Busy"
    assert (await store.get_config()).prefix == "?"
    runtime.apply_status.assert_awaited_once_with("idle", "Busy")


@pytest.mark.asyncio
async def test_update_config_ignores_masked_token(client, store):
    await store.upsert_config(token="real-token")
    await client.post("/api/bot", json={"token": MASKED_TOKEN})
    assert (await store.get_config()).token == "real-token"


@pytest.mark.asyncio
async def test_update_config_rejects_empty_prefix(client):
    resp = await client.post("/api/bot", json={"prefix": ""})
    assert resp.status == 400


@pytest.mark.asyncio
async def test_status_and_restart(client, runtime):
    resp = await client.get("/api/bot/status")
    assert await resp.json() == {"isOnline": True, "lastRestart": "2026-01-01T00:00:00+00:00"}

    resp = await client.post("/api/bot/restart")
    assert resp.status == 200
    runtime.restart.assert_awaited_once()


@pytest.mark.asyncio
async def test_restart_failure(client, runtime):
    runtime.restart = AsyncMock(return_value=False)
    resp = await client.post("/api/bot/restart")
    assert resp.status == 500


# ── Commands ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_list_commands(client):
    resp = await client.get("/api/commands")
    names = [c["name"] for c in await resp.json()]
    assert names == ["ping", "hello", "help"]


@pytest.mark.asyncio
async def test_create_command_and_conflict(client):
    resp = await client.post("/api/commands", json={"name": "play", "description": "Music"})
    assert resp.status == 201
    body = await resp.json()
    assert body["name"] == "play"
    assert body["enabled"] is True

    resp = await client.post("/api/commands", json={"name": "play", "description": "Again"})
    assert resp.status == 409


@pytest.mark.asyncio
async def test_create_command_invalid(client):
    resp = await client.post("/api/commands", json={"description": "no name"})
    assert resp.status == 400


@pytest.mark.asyncio
async def test_patch_command_toggles(client, store):
    record = await store.get_command_by_name("hello")
    resp = await client.patch(f"/api/commands/{record.id}", json={"enabled": False})
    assert resp.status == 200
    assert (await resp.json())["enabled"] is False
    assert (await store.get_command_by_name("hello")).enabled is False


@pytest.mark.asyncio
async def test_patch_rename_conflict(client, store):
    record = await store.get_command_by_name("hello")
    resp = await client.patch(f"/api/commands/{record.id}", json={"name": "ping"})
    assert resp.status == 409


@pytest.mark.asyncio
async def test_command_bad_id_and_missing(client):
    assert (await client.get("/api/commands/abc")).status == 400
    assert (await client.get("/api/commands/999")).status == 404
    assert (await client.patch("/api/commands/999", json={"enabled": True})).status == 404
    assert (await client.delete("/api/commands/999")).status == 404


@pytest.mark.asyncio
async def test_delete_command(client, store):
    record = await store.get_command_by_name("help")
    resp = await client.delete(f"/api/commands/{record.id}")
    assert resp.status == 204
    assert await store.get_command_by_name("help") is None


# ── Logs & health ─────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_logs_lifecycle(client, store):
    resp = await client.post("/api/logs", json={"message": "manual", "stack": "trace"})
    assert resp.status == 201

    resp = await client.get("/api/logs")
    logs = await resp.json()
    assert len(logs) == 1
    assert logs[0]["message"] == "manual"

    resp = await client.delete("/api/logs")
    assert resp.status == 204
    assert await store.list_error_logs() == []


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert await resp.json() == {"status": "ok", "bot": "online", "redis": "ok"}
