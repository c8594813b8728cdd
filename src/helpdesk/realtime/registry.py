# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
realtime.registry
Chat connections grouped by ticket
"""

from __future__ import annotations

import asyncio
from typing import Any, Protocol

from helpdesk.logging import LoggerProtocol, get_logger


class ChatConnection(Protocol):
    """The part of a websocket the registry uses."""

    async def send_json(self, data: Any) -> None: ...

    async def close(self, code: int = 1000) -> None: ...


class ClientRegistry:
    """Live chat connections per ticket.

    One registry is created per application and handed to the routes that
    need it. Channels with no connections left are dropped.
    """

    def __init__(self, logger: LoggerProtocol | None = None) -> None:
        self._channels: dict[str, set[ChatConnection]] = {}
        self._lock = asyncio.Lock()
        self._logger = logger or get_logger("helpdesk.realtime")

    def count(self, channel: str) -> int:
        return len(self._channels.get(channel, ()))

    @property
    def channels(self) -> list[str]:
        return list(self._channels)

    async def add(self, channel: str, connection: ChatConnection) -> int:
        async with self._lock:
            self._channels.setdefault(channel, set()).add(connection)
            total = len(self._channels[channel])
        self._logger.debug("Chat client added", channel=channel, clients=total)
        return total

    async def remove(self, channel: str, connection: ChatConnection) -> int:
        async with self._lock:
            connections = self._channels.get(channel)
            if connections is None:
                return 0
            connections.discard(connection)
            remaining = len(connections)
            if not remaining:
                del self._channels[channel]
        self._logger.debug("Chat client removed", channel=channel, clients=remaining)
        return remaining

    async def broadcast(self, channel: str, message: dict[str, Any]) -> int:
        """Send ``message`` to every client on ``channel``.

        Returns:
            The number of clients that received it. Clients whose send fails
            are removed.
        """
        async with self._lock:
            connections = list(self._channels.get(channel, ()))

        delivered = 0
        for connection in connections:
            try:
                await connection.send_json(message)
            except Exception as exc:
                self._logger.warning(
                    "Dropping chat client after failed send",
                    channel=channel,
                    error=str(exc),
                )
                await self.remove(channel, connection)
            else:
                delivered += 1
        return delivered

    async def close_all(self) -> None:
        async with self._lock:
            channels, self._channels = self._channels, {}
        for connections in channels.values():
            for connection in connections:
                try:
                    await connection.close()
                except Exception as exc:
                    self._logger.debug("Chat client already closed", error=str(exc))
