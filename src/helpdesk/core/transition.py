# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
core.transition
Pure command -> event mapping.

``transition`` encodes every business decision of the helpdesk. It never
performs I/O, never raises for any command, and returns the same event for
the same ``(command, history, timestamp)``: identifiers it mints are
name-based UUIDs derived from those inputs.
"""

from __future__ import annotations

import json
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Final

from helpdesk.domain.commands import (
    COMMAND_MODELS,
    AddComment,
    BaseCommand,
    CreateTicket,
    EscalateTicket,
    FetchDashboard,
    GenericCommand,
    LoginAttempt,
    RefreshToken,
    UpdateTicket,
    coerce_command,
)
from helpdesk.domain.events import (
    AUTH_EVENT_TYPES,
    CommandRejected,
    CommentAdded,
    DashboardRequested,
    DomainEvent,
    InvalidRefreshToken,
    LoginRequested,
    LoginSucceeded,
    RefreshTokenValidated,
    TicketCreated,
    TicketEscalated,
    TicketUpdated,
    TokenRefreshed,
    UnknownCommand,
)

IDENTIFIER_NAMESPACE: Final = uuid.UUID("5b0f3c9e-8d3a-4c62-9a51-3f0b9e6c2d17")

TOKEN_NOT_FOUND: Final = "Token not found"
TOKEN_INVALIDATED: Final = "Token has been invalidated"


@dataclass(frozen=True)
class TokenCheck:
    """Outcome of the history-based refresh token check."""

    valid: bool
    reason: str | None = None


def mint_identifier(
    kind: str,
    command: BaseCommand,
    history: Sequence[DomainEvent],
    timestamp: int,
) -> str:
    """Name-based identifier for a new ticket or comment.

    Two different commands, or the same command against a longer history,
    never yield the same identifier.
    """
    name = json.dumps(
        {
            "kind": kind,
            "command": command.model_dump(mode="json", by_alias=True),
            "position": len(history),
            "timestamp": timestamp,
        },
        sort_keys=True,
    )
    return str(uuid.uuid5(IDENTIFIER_NAMESPACE, name))


def _issued_token(event: DomainEvent) -> str | None:
    if isinstance(event, LoginSucceeded):
        return event.refresh_token
    if isinstance(event, TokenRefreshed):
        return event.new_refresh_token
    return None


def check_refresh_token(
    history: Sequence[DomainEvent], email: str, token: str
) -> TokenCheck:
    """Decide whether ``token`` was issued to ``email`` and never revoked.

    Only provenance is checked here. Signature and expiry belong to the
    identity provider at the boundary.
    """
    if not history:
        return TokenCheck(valid=False, reason=TOKEN_NOT_FOUND)

    auth_events = sorted(
        (e for e in history if e.email == email and e.type in AUTH_EVENT_TYPES),
        key=lambda e: e.timestamp,
        reverse=True,
    )

    # revocation wins over issuance wherever it sits in the log
    if any(
        isinstance(e, InvalidRefreshToken) and e.refresh_token == token
        for e in auth_events
    ):
        return TokenCheck(valid=False, reason=TOKEN_INVALIDATED)

    if any(_issued_token(e) == token for e in auth_events):
        return TokenCheck(valid=True)
    return TokenCheck(valid=False, reason=TOKEN_NOT_FOUND)


def _login_attempt(
    command: LoginAttempt, history: Sequence[DomainEvent], timestamp: int
) -> DomainEvent:
    return LoginRequested(
        email=command.email, timestamp=timestamp, password=command.password
    )


def _refresh_token(
    command: RefreshToken, history: Sequence[DomainEvent], timestamp: int
) -> DomainEvent:
    check = check_refresh_token(history, command.email, command.refresh_token)
    if check.valid:
        return RefreshTokenValidated(
            email=command.email,
            timestamp=timestamp,
            refresh_token=command.refresh_token,
        )
    return InvalidRefreshToken(
        email=command.email,
        timestamp=timestamp,
        refresh_token=command.refresh_token,
        reason=check.reason or TOKEN_NOT_FOUND,
    )


def _create_ticket(
    command: CreateTicket, history: Sequence[DomainEvent], timestamp: int
) -> DomainEvent:
    return TicketCreated(
        email=command.email,
        timestamp=timestamp,
        ticket_id=mint_identifier("ticket", command, history, timestamp),
        details=command.ticket_details,
    )


def _update_ticket(
    command: UpdateTicket, history: Sequence[DomainEvent], timestamp: int
) -> DomainEvent:
    return TicketUpdated(
        email=command.email,
        timestamp=timestamp,
        ticket_id=command.ticket_id,
        updates=command.updates,
    )


def _add_comment(
    command: AddComment, history: Sequence[DomainEvent], timestamp: int
) -> DomainEvent:
    return CommentAdded(
        email=command.email,
        timestamp=timestamp,
        ticket_id=command.ticket_id,
        comment_id=mint_identifier("comment", command, history, timestamp),
        comment=command.comment,
    )


def _escalate_ticket(
    command: EscalateTicket, history: Sequence[DomainEvent], timestamp: int
) -> DomainEvent:
    return TicketEscalated(
        email=command.email, timestamp=timestamp, ticket_id=command.ticket_id
    )


def _fetch_dashboard(
    command: FetchDashboard, history: Sequence[DomainEvent], timestamp: int
) -> DomainEvent:
    return DashboardRequested(email=command.email, timestamp=timestamp)


_HANDLERS: dict[type[BaseCommand], Callable[[Any, Sequence[DomainEvent], int], DomainEvent]] = {
    LoginAttempt: _login_attempt,
    RefreshToken: _refresh_token,
    CreateTicket: _create_ticket,
    UpdateTicket: _update_ticket,
    AddComment: _add_comment,
    EscalateTicket: _escalate_ticket,
    FetchDashboard: _fetch_dashboard,
}


def _reject(command: GenericCommand, timestamp: int) -> DomainEvent:
    if command.type in COMMAND_MODELS:
        return CommandRejected(
            email=command.email,
            timestamp=timestamp,
            original_command=command.type,
            reason="Malformed command payload",
        )
    return UnknownCommand(
        email=command.email, timestamp=timestamp, original_command=command.type
    )


def transition(
    command: BaseCommand | GenericCommand | dict[str, Any],
    history: Sequence[DomainEvent],
    timestamp: int,
) -> DomainEvent:
    """Turn a command into the single event it produces.

    Args:
        command: A validated command model, or any raw mapping
        history: The aggregate's events, oldest first
        timestamp: Event time in epoch milliseconds

    Returns:
        The resulting event. Unrecognised commands yield ``UNKNOWN_COMMAND``.
    """
    parsed = coerce_command(command)
    handler = _HANDLERS.get(type(parsed))
    if handler is None:
        return _reject(parsed, timestamp)  # type: ignore[arg-type]
    return handler(parsed, history, timestamp)
