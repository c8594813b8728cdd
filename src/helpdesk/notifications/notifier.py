# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
notifications.notifier
Routes ticket events to the external ticketing system
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from helpdesk.config.settings import NOTIFIABLE_EVENT_TYPES
from helpdesk.domain.events import (
    CommentAdded,
    DomainEvent,
    TicketCreated,
    TicketEscalated,
    TicketUpdated,
)
from helpdesk.errors import NotifyError, Result, Success
from helpdesk.logging import LoggerProtocol, get_logger
from helpdesk.notifications.protocols import TicketingClientProtocol


class NullNotifier:
    """Accepts every event and forwards nothing."""

    async def notify(self, event: DomainEvent) -> Result[DomainEvent, NotifyError]:
        return Success(event)


class TicketingNotifier:
    """Mirrors ticket events in the external ticketing system.

    Only the configured event types are forwarded; everything else passes
    through untouched. A created ticket comes back enriched with the id the
    external system assigned.
    """

    def __init__(
        self,
        client: TicketingClientProtocol,
        notify_on: Iterable[str] = NOTIFIABLE_EVENT_TYPES,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self._client = client
        self._notify_on = frozenset(notify_on)
        self._logger = logger or get_logger("helpdesk.notifications")
        self._routes: dict[
            type[DomainEvent],
            Callable[[Any], Awaitable[Result[DomainEvent, NotifyError]]],
        ] = {
            TicketCreated: self._ticket_created,
            TicketUpdated: self._ticket_updated,
            CommentAdded: self._comment_added,
            TicketEscalated: self._ticket_escalated,
        }

    async def notify(self, event: DomainEvent) -> Result[DomainEvent, NotifyError]:
        route = self._routes.get(type(event))
        if route is None or event.type not in self._notify_on:
            return Success(event)

        self._logger.debug(
            "Forwarding event to ticketing system",
            event_type=event.type,
            aggregate_key=event.email,
        )
        return await route(event)

    async def _ticket_created(
        self, event: TicketCreated
    ) -> Result[DomainEvent, NotifyError]:
        details = event.details
        result = await self._client.create_ticket(
            {
                "ticketId": event.ticket_id,
                "email": event.email,
                "subject": details.subject,
                "description": details.description,
                "departmentId": details.department_id,
                "priority": details.priority.value,
            }
        )

        def enrich(response: dict[str, Any]) -> DomainEvent:
            external_id = response.get("id")
            if external_id is None:
                return event
            return event.model_copy(update={"external_ticket_id": str(external_id)})

        return result.map(enrich)

    async def _ticket_updated(
        self, event: TicketUpdated
    ) -> Result[DomainEvent, NotifyError]:
        result = await self._client.update_ticket(
            event.ticket_id,
            event.updates.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return result.map(lambda _: event)

    async def _comment_added(
        self, event: CommentAdded
    ) -> Result[DomainEvent, NotifyError]:
        result = await self._client.add_comment(event.ticket_id, event.comment)
        return result.map(lambda _: event)

    async def _ticket_escalated(
        self, event: TicketEscalated
    ) -> Result[DomainEvent, NotifyError]:
        result = await self._client.escalate_ticket(event.ticket_id)
        return result.map(lambda _: event)

    async def aclose(self) -> None:
        close = getattr(self._client, "aclose", None)
        if close is not None:
            await close()
