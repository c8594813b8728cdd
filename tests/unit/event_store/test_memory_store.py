from __future__ import annotations

import asyncio

from helpdesk.core import reconstruct_state
from helpdesk.domain import (
    CommentAdded,
    DashboardRequested,
    LoginRequested,
    LoginSucceeded,
    TicketCreated,
    TicketDetails,
)
from helpdesk.errors import VersionConflictError
from helpdesk.event_store import InMemoryEventStore, StoredEvent

A = "a@x.com"
B = "b@x.com"


def _created(email: str, ticket_id: str, timestamp: int = 1) -> TicketCreated:
    return TicketCreated(
        email=email,
        timestamp=timestamp,
        ticket_id=ticket_id,
        details=TicketDetails(subject="S"),
    )


async def test_append_returns_stored_record(memory_store: InMemoryEventStore) -> None:
    event = _created(A, "T1")
    result = await memory_store.append(event)

    stored = result.unwrap()
    assert isinstance(stored, StoredEvent)
    assert stored.aggregate_key == A
    assert stored.type == "TICKET_CREATED"
    assert stored.payload == event
    assert stored.id
    assert stored.to_dict()["payload"]["ticketId"] == "T1"


async def test_empty_aggregate_has_empty_history(
    memory_store: InMemoryEventStore,
) -> None:
    result = await memory_store.fetch_history("nobody@x.com")
    assert result.is_success
    assert result.unwrap() == []


async def test_history_is_scoped_and_in_insertion_order(
    memory_store: InMemoryEventStore,
) -> None:
    # same timestamps; insertion order breaks the tie
    await memory_store.append(_created(A, "T1", timestamp=5))
    await memory_store.append(_created(B, "T9", timestamp=5))
    await memory_store.append(_created(A, "T2", timestamp=5))

    history = (await memory_store.fetch_history(A)).unwrap()
    assert [e.ticket_id for e in history] == ["T1", "T2"]

    state = reconstruct_state(history)
    assert {t.id for t in state.tickets} == {"T1", "T2"}
    assert all(t.email == A for t in state.tickets)


async def test_sequence_strictly_increases(memory_store: InMemoryEventStore) -> None:
    results = await asyncio.gather(
        *(memory_store.append(_created(A, f"T{i}")) for i in range(10))
    )
    sequences = [r.unwrap().sequence for r in results]
    assert sorted(sequences) == list(range(1, 11))
    assert len((await memory_store.fetch_history(A)).unwrap()) == 10


async def test_expected_version_conflict(memory_store: InMemoryEventStore) -> None:
    await memory_store.append(_created(A, "T1"), expected_version=0)
    stale = await memory_store.append(_created(A, "T2"), expected_version=0)

    assert stale.is_failure
    assert isinstance(stale.error, VersionConflictError)
    assert stale.error.context["current_version"] == 1
    assert (await memory_store.get_aggregate_version(A)).unwrap() == 1


async def test_fetch_events_by_type(memory_store: InMemoryEventStore) -> None:
    await memory_store.append(_created(A, "T1"))
    await memory_store.append(DashboardRequested(email=A, timestamp=2))
    await memory_store.append(
        LoginSucceeded(email=A, timestamp=3, access_token="x", refresh_token="y")
    )

    events = (
        await memory_store.fetch_events_by_type(A, ["LOGIN_SUCCEEDED", "TICKET_CREATED"])
    ).unwrap()
    assert [e.type for e in events] == ["TICKET_CREATED", "LOGIN_SUCCEEDED"]


async def test_fetch_ticket_events_spans_aggregates(
    memory_store: InMemoryEventStore,
) -> None:
    await memory_store.append(_created(A, "T1"))
    await memory_store.append(
        CommentAdded(email=B, timestamp=2, ticket_id="T1", comment_id="c1", comment="x")
    )
    await memory_store.append(_created(A, "T2"))

    events = (await memory_store.fetch_ticket_events("T1")).unwrap()
    assert [e.type for e in events] == ["TICKET_CREATED", "COMMENT_ADDED"]


async def test_context_manager_logs_lifecycle(mock_logger) -> None:
    async with InMemoryEventStore(logger=mock_logger) as store:
        await store.append(_created(A, "T1"))
    assert mock_logger.debug.called


async def test_password_is_not_kept(memory_store: InMemoryEventStore) -> None:
    event = LoginRequested(email=A, timestamp=1, password="hunter2")
    await memory_store.append(event)

    (stored,) = (await memory_store.fetch_history(A)).unwrap()
    assert isinstance(stored, LoginRequested)
    assert stored.password is None
    assert event.password.get_secret_value() == "hunter2"
