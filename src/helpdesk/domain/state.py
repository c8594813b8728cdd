# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
domain.state
Reconstructed state of one aggregate. Derived by folding its history; never
stored.
"""

from __future__ import annotations

from pydantic import Field

from helpdesk.domain.base import HelpdeskModel
from helpdesk.domain.value_objects import TicketPriority, TicketStatus

RECENT_TICKETS_LIMIT = 5


class UserView(HelpdeskModel):
    email: str
    user_id: str | None = None
    last_login: int
    access_token: str
    refresh_token: str


class Comment(HelpdeskModel):
    id: str
    text: str
    created_at: int
    created_by: str


class Ticket(HelpdeskModel):
    id: str
    email: str
    subject: str
    description: str = ""
    department_id: str | None = None
    status: TicketStatus = TicketStatus.OPEN
    priority: TicketPriority = TicketPriority.MEDIUM
    comments: tuple[Comment, ...] = ()
    created_at: int
    updated_at: int
    escalated_at: int | None = None


class TicketStats(HelpdeskModel):
    total: int = 0
    open: int = 0
    pending: int = 0
    resolved: int = 0
    closed: int = 0
    high_priority: int = 0


class Dashboard(HelpdeskModel):
    recent_tickets: tuple[Ticket, ...] = ()
    ticket_stats: TicketStats = Field(default_factory=TicketStats)

    @classmethod
    def from_tickets(cls, tickets: tuple[Ticket, ...]) -> Dashboard:
        """Summarise a ticket list: most recently updated tickets and counts."""
        recent = sorted(tickets, key=lambda t: t.updated_at, reverse=True)
        by_status = {status: 0 for status in TicketStatus}
        for ticket in tickets:
            by_status[ticket.status] += 1
        return cls(
            recent_tickets=tuple(recent[:RECENT_TICKETS_LIMIT]),
            ticket_stats=TicketStats(
                total=len(tickets),
                open=by_status[TicketStatus.OPEN],
                pending=by_status[TicketStatus.PENDING],
                resolved=by_status[TicketStatus.RESOLVED],
                closed=by_status[TicketStatus.CLOSED],
                high_priority=sum(
                    1 for t in tickets if t.priority == TicketPriority.HIGH
                ),
            ),
        )


class HelpdeskState(HelpdeskModel):
    user: UserView | None = None
    tickets: tuple[Ticket, ...] = ()
    dashboard: Dashboard = Field(default_factory=Dashboard)

    def find_ticket(self, ticket_id: str) -> Ticket | None:
        return next((t for t in self.tickets if t.id == ticket_id), None)


INITIAL_STATE = HelpdeskState()
