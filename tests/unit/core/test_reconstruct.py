from __future__ import annotations

import pytest

from helpdesk.core import apply_event, reconstruct_state, transition
from helpdesk.domain import (
    INITIAL_STATE,
    CommentAdded,
    DashboardRequested,
    InvalidRefreshToken,
    LoginSucceeded,
    RefreshTokenValidated,
    TicketCreated,
    TicketDetails,
    TicketEscalated,
    TicketPriority,
    TicketStatus,
    TicketUpdated,
    TicketUpdates,
    TokenRefreshed,
    UnknownCommand,
)

EMAIL = "a@x.com"


def _created(ticket_id: str = "T1", timestamp: int = 100) -> TicketCreated:
    return TicketCreated(
        email=EMAIL,
        timestamp=timestamp,
        ticket_id=ticket_id,
        details=TicketDetails(subject="S", description="D"),
    )


def test_created_ticket_starts_open_without_comments() -> None:
    command = {
        "type": "CREATE_TICKET",
        "email": EMAIL,
        "ticketDetails": {"subject": "S", "description": "D"},
    }
    event = transition(command, [], 100)
    state = apply_event(INITIAL_STATE, event)

    assert len(state.tickets) == 1
    ticket = state.tickets[0]
    assert ticket.id == event.ticket_id
    assert ticket.status is TicketStatus.OPEN
    assert ticket.comments == ()
    assert ticket.created_at == ticket.updated_at == 100
    assert state.dashboard.ticket_stats.total == 1
    assert state.dashboard.ticket_stats.open == 1


def test_comment_is_appended() -> None:
    comment = transition(
        {"type": "ADD_COMMENT", "email": EMAIL, "ticketId": "T1", "comment": "hi"},
        [_created()],
        200,
    )
    state = reconstruct_state([_created(), comment])
    ticket = state.find_ticket("T1")
    assert ticket is not None
    assert [c.text for c in ticket.comments] == ["hi"]
    assert ticket.comments[0].created_by == EMAIL
    assert ticket.updated_at == 200


@pytest.mark.parametrize(
    "event",
    [
        DashboardRequested(email=EMAIL, timestamp=5),
        RefreshTokenValidated(email=EMAIL, timestamp=5, refresh_token="R"),
        InvalidRefreshToken(email=EMAIL, timestamp=5, refresh_token="R", reason="x"),
        UnknownCommand(email=EMAIL, timestamp=5, original_command="FOO"),
        TicketUpdated(
            email=EMAIL, timestamp=5, ticket_id="missing", updates=TicketUpdates()
        ),
        CommentAdded(
            email=EMAIL, timestamp=5, ticket_id="missing", comment_id="c", comment="x"
        ),
        TicketEscalated(email=EMAIL, timestamp=5, ticket_id="missing"),
        _created(),
    ],
)
def test_no_op_events_return_same_state(event) -> None:
    state = reconstruct_state([_created()])
    assert apply_event(state, event) is state


def test_apply_event_does_not_mutate_input() -> None:
    before = reconstruct_state([_created()])
    snapshot = before.model_copy(deep=True)
    after = apply_event(before, TicketEscalated(email=EMAIL, timestamp=300, ticket_id="T1"))
    assert before == snapshot
    assert after is not before


def test_update_merges_and_stamps() -> None:
    update = TicketUpdated(
        email=EMAIL,
        timestamp=300,
        ticket_id="T1",
        updates=TicketUpdates(status=TicketStatus.RESOLVED),
    )
    ticket = reconstruct_state([_created(), update]).tickets[0]
    assert ticket.status is TicketStatus.RESOLVED
    assert ticket.subject == "S"
    assert ticket.description == "D"
    assert ticket.updated_at == 300


def test_escalation_raises_priority() -> None:
    state = reconstruct_state(
        [_created(), TicketEscalated(email=EMAIL, timestamp=400, ticket_id="T1")]
    )
    ticket = state.tickets[0]
    assert ticket.priority is TicketPriority.HIGH
    assert ticket.escalated_at == 400
    assert state.dashboard.ticket_stats.high_priority == 1


def test_login_then_refresh_updates_user() -> None:
    login = LoginSucceeded(
        email=EMAIL, timestamp=10, user_id="u1", access_token="A1", refresh_token="R1"
    )
    refresh = TokenRefreshed(
        email=EMAIL, timestamp=20, new_access_token="A2", new_refresh_token="R2"
    )
    user = reconstruct_state([login, refresh]).user
    assert user is not None
    assert (user.access_token, user.refresh_token) == ("A2", "R2")
    assert user.last_login == 10
    assert user.user_id == "u1"


def test_refresh_without_user_is_ignored() -> None:
    refresh = TokenRefreshed(
        email=EMAIL, timestamp=20, new_access_token="A2", new_refresh_token="R2"
    )
    assert apply_event(INITIAL_STATE, refresh) is INITIAL_STATE


def test_replay_is_incremental() -> None:
    events = [
        _created("T1", 100),
        _created("T2", 110),
        TicketUpdated(
            email=EMAIL,
            timestamp=120,
            ticket_id="T1",
            updates=TicketUpdates(priority=TicketPriority.LOW),
        ),
        TicketEscalated(email=EMAIL, timestamp=130, ticket_id="T2"),
    ]
    assert apply_event(reconstruct_state(events[:3]), events[3]) == reconstruct_state(
        events
    )


def test_dashboard_orders_by_last_update() -> None:
    state = reconstruct_state(
        [
            _created("T1", 100),
            _created("T2", 110),
            TicketUpdated(
                email=EMAIL,
                timestamp=120,
                ticket_id="T1",
                updates=TicketUpdates(subject="New"),
            ),
        ]
    )
    assert [t.id for t in state.dashboard.recent_tickets] == ["T1", "T2"]
    assert state.dashboard.recent_tickets[0].subject == "New"
