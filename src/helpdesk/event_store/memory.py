# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
event_store.memory
In-memory event store for development and tests
"""

from __future__ import annotations

import asyncio
import itertools
import uuid
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from helpdesk.domain.events import DomainEvent, parse_event
from helpdesk.errors import (
    Failure,
    HistoryFetchError,
    PersistError,
    Result,
    Success,
    VersionConflictError,
)
from helpdesk.event_store.base import EventStore
from helpdesk.event_store.config import EventStoreSettings
from helpdesk.event_store.models import StoredEvent
from helpdesk.logging import LoggerProtocol


class InMemoryEventStore(EventStore):
    """Keeps every stored event in a single insertion-ordered list.

    Appends are serialised by an ``asyncio.Lock``, so a fetch issued after an
    append completes always observes it.
    """

    def __init__(
        self,
        *,
        settings: EventStoreSettings | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        super().__init__(settings=settings, logger=logger)
        self._events: list[StoredEvent] = []
        self._lock = asyncio.Lock()
        self._sequence = itertools.count(1)

    async def connect(self) -> None:
        self.logger.debug("In-memory event store ready")

    async def disconnect(self) -> None:
        self.logger.debug(
            "In-memory event store closed", stored_events=len(self._events)
        )

    def _version_of(self, aggregate_key: str) -> int:
        return sum(1 for e in self._events if e.aggregate_key == aggregate_key)

    async def append(
        self,
        event: DomainEvent,
        expected_version: int | None = None,
    ) -> Result[StoredEvent, PersistError]:
        aggregate_key = event.email or ""
        async with self._lock:
            if expected_version is not None:
                current_version = self._version_of(aggregate_key)
                if current_version != expected_version:
                    return Failure(
                        VersionConflictError(
                            f"Version conflict for aggregate {aggregate_key}. "
                            f"Expected {expected_version}, got {current_version}",
                            context={
                                "aggregate_key": aggregate_key,
                                "expected_version": expected_version,
                                "current_version": current_version,
                            },
                        )
                    )
            try:
                stored = StoredEvent(
                    id=str(uuid.uuid4()),
                    sequence=next(self._sequence),
                    aggregate_key=aggregate_key,
                    type=event.type,
                    # stored form; excluded fields such as passwords are dropped
                    payload=parse_event(event.to_payload()),
                    stored_at=datetime.now(UTC),
                )
            except Exception as exc:
                return Failure(
                    PersistError(
                        f"Failed to append event for aggregate {aggregate_key}: {exc}",
                        context={"aggregate_key": aggregate_key, "event_type": event.type},
                    )
                )
            self._events.append(stored)

        self.logger.debug(
            "Event appended",
            aggregate_key=aggregate_key,
            event_type=event.type,
            sequence=stored.sequence,
        )
        return Success(stored)

    def _select(
        self, predicate: Callable[[StoredEvent], bool]
    ) -> Result[list[DomainEvent], HistoryFetchError]:
        # list order is sequence order
        return Success([e.payload for e in self._events if predicate(e)])

    async def fetch_history(
        self, aggregate_key: str
    ) -> Result[list[DomainEvent], HistoryFetchError]:
        return self._select(lambda e: e.aggregate_key == aggregate_key)

    async def fetch_events_by_type(
        self, aggregate_key: str, event_types: Iterable[str]
    ) -> Result[list[DomainEvent], HistoryFetchError]:
        wanted = frozenset(event_types)
        return self._select(
            lambda e: e.aggregate_key == aggregate_key and e.type in wanted
        )

    async def fetch_ticket_events(
        self, ticket_id: str
    ) -> Result[list[DomainEvent], HistoryFetchError]:
        return self._select(
            lambda e: getattr(e.payload, "ticket_id", None) == ticket_id
        )

    async def get_aggregate_version(
        self, aggregate_key: str
    ) -> Result[int, HistoryFetchError]:
        return Success(self._version_of(aggregate_key))
