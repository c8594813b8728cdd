# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
notifications.protocols
Downstream notification interfaces
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from helpdesk.domain.events import DomainEvent
from helpdesk.errors import NotifyError, Result


@runtime_checkable
class NotifierProtocol(Protocol):
    """Forwards a persisted event to external systems.

    A success may carry an enriched copy of the event. A failure never undoes
    the event, which is already stored.
    """

    async def notify(self, event: DomainEvent) -> Result[DomainEvent, NotifyError]: ...


@runtime_checkable
class TicketingClientProtocol(Protocol):
    """External ticketing system operations."""

    async def create_ticket(
        self, ticket: dict[str, Any]
    ) -> Result[dict[str, Any], NotifyError]: ...

    async def update_ticket(
        self, ticket_id: str, updates: dict[str, Any]
    ) -> Result[dict[str, Any], NotifyError]: ...

    async def add_comment(
        self, ticket_id: str, comment: str
    ) -> Result[dict[str, Any], NotifyError]: ...

    async def escalate_ticket(
        self, ticket_id: str
    ) -> Result[dict[str, Any], NotifyError]: ...
