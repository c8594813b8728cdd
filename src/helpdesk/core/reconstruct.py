# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
core.reconstruct
Pure event application and replay.

``apply_event`` never mutates its input. Events that change nothing (reads,
token checks, unknown or future event types, references to tickets that do
not exist) return the very same state object.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import reduce
from typing import Any

from helpdesk.domain.events import (
    CommentAdded,
    DomainEvent,
    LoginSucceeded,
    TicketCreated,
    TicketEscalated,
    TicketUpdated,
    TokenRefreshed,
)
from helpdesk.domain.state import (
    INITIAL_STATE,
    Comment,
    Dashboard,
    HelpdeskState,
    Ticket,
    UserView,
)
from helpdesk.domain.value_objects import TicketPriority, TicketStatus


def _with_tickets(state: HelpdeskState, tickets: tuple[Ticket, ...]) -> HelpdeskState:
    return state.model_copy(
        update={"tickets": tickets, "dashboard": Dashboard.from_tickets(tickets)}
    )


def _update_ticket(
    state: HelpdeskState, ticket_id: str, changes: Callable[[Ticket], dict[str, Any]]
) -> HelpdeskState:
    if state.find_ticket(ticket_id) is None:
        return state
    tickets = tuple(
        ticket.model_copy(update=changes(ticket)) if ticket.id == ticket_id else ticket
        for ticket in state.tickets
    )
    return _with_tickets(state, tickets)


def _login_succeeded(state: HelpdeskState, event: LoginSucceeded) -> HelpdeskState:
    user = UserView(
        email=event.email,
        user_id=event.user_id,
        last_login=event.timestamp,
        access_token=event.access_token,
        refresh_token=event.refresh_token,
    )
    return state.model_copy(update={"user": user})


def _token_refreshed(state: HelpdeskState, event: TokenRefreshed) -> HelpdeskState:
    # a refresh without a prior login has no user to update
    if state.user is None:
        return state
    user = state.user.model_copy(
        update={
            "access_token": event.new_access_token,
            "refresh_token": event.new_refresh_token,
        }
    )
    return state.model_copy(update={"user": user})


def _ticket_created(state: HelpdeskState, event: TicketCreated) -> HelpdeskState:
    if state.find_ticket(event.ticket_id) is not None:
        return state
    details = event.details
    ticket = Ticket(
        id=event.ticket_id,
        email=event.email,
        subject=details.subject,
        description=details.description,
        department_id=details.department_id,
        status=TicketStatus.OPEN,
        priority=details.priority,
        comments=(),
        created_at=event.timestamp,
        updated_at=event.timestamp,
    )
    return _with_tickets(state, (*state.tickets, ticket))


def _ticket_updated(state: HelpdeskState, event: TicketUpdated) -> HelpdeskState:
    return _update_ticket(
        state,
        event.ticket_id,
        lambda _: {**event.updates.changes(), "updated_at": event.timestamp},
    )


def _comment_added(state: HelpdeskState, event: CommentAdded) -> HelpdeskState:
    comment = Comment(
        id=event.comment_id,
        text=event.comment,
        created_at=event.timestamp,
        created_by=event.email,
    )
    return _update_ticket(
        state,
        event.ticket_id,
        lambda ticket: {
            "comments": (*ticket.comments, comment),
            "updated_at": event.timestamp,
        },
    )


def _ticket_escalated(state: HelpdeskState, event: TicketEscalated) -> HelpdeskState:
    return _update_ticket(
        state,
        event.ticket_id,
        lambda _: {
            "priority": TicketPriority.HIGH,
            "escalated_at": event.timestamp,
            "updated_at": event.timestamp,
        },
    )


_APPLIERS: dict[type[DomainEvent], Callable[[HelpdeskState, Any], HelpdeskState]] = {
    LoginSucceeded: _login_succeeded,
    TokenRefreshed: _token_refreshed,
    TicketCreated: _ticket_created,
    TicketUpdated: _ticket_updated,
    CommentAdded: _comment_added,
    TicketEscalated: _ticket_escalated,
}


def apply_event(state: HelpdeskState, event: DomainEvent) -> HelpdeskState:
    """Return the state after ``event``; unknown event types leave it as is."""
    applier = _APPLIERS.get(type(event))
    if applier is None:
        return state
    return applier(state, event)


def reconstruct_state(
    history: Iterable[DomainEvent], initial: HelpdeskState = INITIAL_STATE
) -> HelpdeskState:
    """Fold an aggregate's history, oldest first, from ``initial``."""
    return reduce(apply_event, history, initial)
