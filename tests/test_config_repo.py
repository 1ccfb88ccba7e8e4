"""Tests for the singleton config upsert."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from dashbot.db.repositories.config_repo import ConfigRepo


@pytest.mark.asyncio
async def test_upsert_returns_stored_row():
    session = AsyncMock()
    row = MagicMock(prefix="?")
    repo = ConfigRepo(session)

    with patch.object(ConfigRepo, "get", AsyncMock(return_value=row)):
        result = await repo.upsert(prefix="?", unknown="dropped")

    assert result is row
    session.execute.assert_awaited_once()
    session.commit.assert_awaited_once()
    session.refresh.assert_not_awaited()


@pytest.mark.asyncio
async def test_upsert_missing_row_raises():
    repo = ConfigRepo(AsyncMock())

    with patch.object(ConfigRepo, "get", AsyncMock(return_value=None)):
        with pytest.raises(RuntimeError):
            await repo.upsert(prefix="?")
