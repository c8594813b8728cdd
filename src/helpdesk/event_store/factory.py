# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Event store selection from settings."""

from __future__ import annotations

from helpdesk.event_store.base import EventStore
from helpdesk.event_store.config import EventStoreSettings, default_settings
from helpdesk.event_store.memory import InMemoryEventStore
from helpdesk.event_store.postgresql import PostgreSQLEventStore
from helpdesk.logging import LoggerProtocol


def create_event_store(
    settings: EventStoreSettings | None = None,
    logger: LoggerProtocol | None = None,
) -> EventStore:
    """Build the store named by ``settings.backend``. The store is not connected."""
    settings = settings or default_settings
    if settings.backend == "postgresql":
        return PostgreSQLEventStore(settings=settings, logger=logger)
    return InMemoryEventStore(settings=settings, logger=logger)
