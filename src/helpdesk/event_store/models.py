# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Records kept by the event store."""

from __future__ import annotations

from datetime import datetime

from pydantic import SerializeAsAny

from helpdesk.domain.base import HelpdeskModel
from helpdesk.domain.events import DomainEvent


class StoredEvent(HelpdeskModel):
    """An event as persisted: the payload plus store-assigned metadata.

    ``sequence`` is assigned by the store and strictly increases with every
    append; it is the order in which history is returned.
    """

    id: str
    sequence: int
    aggregate_key: str
    type: str
    payload: SerializeAsAny[DomainEvent]
    stored_at: datetime
