# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Base class for event store implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from types import TracebackType

from helpdesk.domain.events import DomainEvent
from helpdesk.errors import HistoryFetchError, PersistError, Result
from helpdesk.event_store.config import EventStoreSettings, default_settings
from helpdesk.event_store.models import StoredEvent
from helpdesk.logging import LoggerProtocol, get_logger


class EventStore(ABC):
    """Abstract base class for event store implementations.

    Provides settings, logging and the async context manager lifecycle.
    Operations report failures as ``Failure`` values and do not raise.
    """

    def __init__(
        self,
        *,
        settings: EventStoreSettings | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        """Initialize the event store with optional dependencies.

        Args:
            settings: Optional settings instance. If not provided, defaults will be used.
            logger: Optional logger instance. If not provided, a default logger will be created.
        """
        self._settings = settings or default_settings
        self._logger = logger or get_logger("helpdesk.event_store")

    @property
    def settings(self) -> EventStoreSettings:
        return self._settings

    @property
    def logger(self) -> LoggerProtocol:
        return self._logger

    @abstractmethod
    async def connect(self) -> None:
        """Connect to the storage backend."""
        raise NotImplementedError

    @abstractmethod
    async def disconnect(self) -> None:
        """Release backend resources."""
        raise NotImplementedError

    async def __aenter__(self) -> EventStore:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.disconnect()

    @abstractmethod
    async def append(
        self,
        event: DomainEvent,
        expected_version: int | None = None,
    ) -> Result[StoredEvent, PersistError]:
        """Append one event to its aggregate's stream.

        Example:
            ```python
            async with InMemoryEventStore() as store:
                result = await store.append(event)
                stored = result.unwrap()
            ```
        """
        raise NotImplementedError

    @abstractmethod
    async def fetch_history(
        self, aggregate_key: str
    ) -> Result[list[DomainEvent], HistoryFetchError]:
        raise NotImplementedError

    @abstractmethod
    async def fetch_events_by_type(
        self, aggregate_key: str, event_types: Iterable[str]
    ) -> Result[list[DomainEvent], HistoryFetchError]:
        """Events of the given types for one aggregate, oldest first."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_ticket_events(
        self, ticket_id: str
    ) -> Result[list[DomainEvent], HistoryFetchError]:
        """Every event that references ``ticket_id``, across aggregates."""
        raise NotImplementedError

    @abstractmethod
    async def get_aggregate_version(
        self, aggregate_key: str
    ) -> Result[int, HistoryFetchError]:
        """Number of events stored for the aggregate."""
        raise NotImplementedError
