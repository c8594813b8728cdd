# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
event_store.protocols
Event store protocol consumed by the command pipeline
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from helpdesk.domain.events import DomainEvent
from helpdesk.errors import HistoryFetchError, PersistError, Result
from helpdesk.event_store.models import StoredEvent


@runtime_checkable
class EventStoreProtocol(Protocol):
    """Append-only event log partitioned by aggregate key (the user email).

    No update or delete operation exists.
    """

    async def append(
        self,
        event: DomainEvent,
        expected_version: int | None = None,
    ) -> Result[StoredEvent, PersistError]:
        """Persist one event atomically.

        Args:
            event: The event to store; ``event.email`` is the aggregate key
            expected_version: Number of events the aggregate must hold before
                this append, or None to skip the check

        Returns:
            Success with the stored record, or Failure with a ``PersistError``
            (``VersionConflictError`` when the expected version is stale)
        """
        ...

    async def fetch_history(
        self, aggregate_key: str
    ) -> Result[list[DomainEvent], HistoryFetchError]:
        """All events of an aggregate, oldest first. Unknown keys yield ``[]``."""
        ...

    async def fetch_events_by_type(
        self, aggregate_key: str, event_types: Iterable[str]
    ) -> Result[list[DomainEvent], HistoryFetchError]: ...

    async def fetch_ticket_events(
        self, ticket_id: str
    ) -> Result[list[DomainEvent], HistoryFetchError]: ...

    async def get_aggregate_version(
        self, aggregate_key: str
    ) -> Result[int, HistoryFetchError]: ...
