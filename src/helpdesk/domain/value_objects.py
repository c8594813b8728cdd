# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
domain.value_objects
Ticket value objects shared by commands, events and state
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from helpdesk.domain.base import HelpdeskModel


class TicketPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TicketStatus(str, Enum):
    OPEN = "Open"
    PENDING = "Pending"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class TicketDetails(HelpdeskModel):
    """Details supplied when a ticket is created."""

    subject: str = Field(min_length=1)
    description: str = ""
    department_id: str | None = None
    priority: TicketPriority = TicketPriority.MEDIUM


class TicketUpdates(HelpdeskModel):
    """Partial update of a ticket; unset fields are left untouched."""

    subject: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: TicketStatus | None = None
    priority: TicketPriority | None = None

    def changes(self) -> dict[str, Any]:
        """Fields that carry a value, keyed by attribute name."""
        return self.model_dump(exclude_none=True)
