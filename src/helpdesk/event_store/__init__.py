# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Append-only event store."""

from helpdesk.event_store.base import EventStore
from helpdesk.event_store.config import EventStoreSettings
from helpdesk.event_store.factory import create_event_store
from helpdesk.event_store.memory import InMemoryEventStore
from helpdesk.event_store.models import StoredEvent
from helpdesk.event_store.postgresql import PostgreSQLEventStore
from helpdesk.event_store.protocols import EventStoreProtocol

__all__ = [
    "EventStore",
    "EventStoreProtocol",
    "EventStoreSettings",
    "InMemoryEventStore",
    "PostgreSQLEventStore",
    "StoredEvent",
    "create_event_store",
]
