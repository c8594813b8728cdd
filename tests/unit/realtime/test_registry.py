from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from helpdesk.realtime import ClientRegistry


def connection() -> MagicMock:
    conn = MagicMock()
    conn.send_json = AsyncMock()
    conn.close = AsyncMock()
    return conn


@pytest.fixture
def registry(mock_logger) -> ClientRegistry:
    return ClientRegistry(logger=mock_logger)


async def test_add_and_remove(registry: ClientRegistry) -> None:
    first, second = connection(), connection()

    assert await registry.add("T1", first) == 1
    assert await registry.add("T1", second) == 2
    assert registry.channels == ["T1"]

    assert await registry.remove("T1", first) == 1
    assert await registry.remove("T1", second) == 0
    assert registry.channels == []
    assert await registry.remove("T1", second) == 0


async def test_broadcast_stays_in_channel(registry: ClientRegistry) -> None:
    here, there = connection(), connection()
    await registry.add("T1", here)
    await registry.add("T2", there)

    delivered = await registry.broadcast("T1", {"content": "hi"})

    assert delivered == 1
    here.send_json.assert_awaited_once_with({"content": "hi"})
    there.send_json.assert_not_awaited()


async def test_broadcast_to_empty_channel(registry: ClientRegistry) -> None:
    assert await registry.broadcast("nobody", {"content": "hi"}) == 0


async def test_failed_send_drops_client(registry: ClientRegistry, mock_logger) -> None:
    good, broken = connection(), connection()
    broken.send_json.side_effect = RuntimeError("socket closed")
    await registry.add("T1", good)
    await registry.add("T1", broken)

    assert await registry.broadcast("T1", {"content": "hi"}) == 1
    assert registry.count("T1") == 1
    mock_logger.warning.assert_called_once()


async def test_close_all(registry: ClientRegistry) -> None:
    first, second = connection(), connection()
    second.close.side_effect = RuntimeError("already closed")
    await registry.add("T1", first)
    await registry.add("T2", second)

    await registry.close_all()

    first.close.assert_awaited_once()
    assert registry.channels == []
