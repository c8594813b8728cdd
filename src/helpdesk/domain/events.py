# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
domain.events
Immutable facts recorded in the append-only log.

Every event belongs to exactly one aggregate, identified by ``email``. The
``type`` tag determines which fields are present.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import Field, SecretStr, TypeAdapter

from helpdesk.domain.base import HelpdeskModel
from helpdesk.domain.value_objects import TicketDetails, TicketUpdates


class EventType(str, Enum):
    LOGIN_REQUESTED = "LOGIN_REQUESTED"
    LOGIN_SUCCEEDED = "LOGIN_SUCCEEDED"
    LOGIN_FAILED = "LOGIN_FAILED"
    REFRESH_TOKEN_VALIDATED = "REFRESH_TOKEN_VALIDATED"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    INVALID_REFRESH_TOKEN = "INVALID_REFRESH_TOKEN"
    TICKET_CREATED = "TICKET_CREATED"
    TICKET_UPDATED = "TICKET_UPDATED"
    COMMENT_ADDED = "COMMENT_ADDED"
    TICKET_ESCALATED = "TICKET_ESCALATED"
    DASHBOARD_REQUESTED = "DASHBOARD_REQUESTED"
    UNKNOWN_COMMAND = "UNKNOWN_COMMAND"
    COMMAND_REJECTED = "COMMAND_REJECTED"


class DomainEvent(HelpdeskModel):
    """Base class for all events."""

    type: str
    email: str
    timestamp: int

    def to_payload(self) -> dict[str, Any]:
        """The stored form of the event."""
        return self.to_dict()


class LoginRequested(DomainEvent):
    """Intent to log in. The password is kept in memory only and never stored."""

    type: Literal["LOGIN_REQUESTED"] = "LOGIN_REQUESTED"
    password: SecretStr | None = Field(default=None, exclude=True, repr=False)


class LoginSucceeded(DomainEvent):
    type: Literal["LOGIN_SUCCEEDED"] = "LOGIN_SUCCEEDED"
    user_id: str | None = None
    access_token: str
    refresh_token: str


class LoginFailed(DomainEvent):
    type: Literal["LOGIN_FAILED"] = "LOGIN_FAILED"
    reason: str


class RefreshTokenValidated(DomainEvent):
    """The presented token was issued to this aggregate and never revoked."""

    type: Literal["REFRESH_TOKEN_VALIDATED"] = "REFRESH_TOKEN_VALIDATED"
    refresh_token: str


class TokenRefreshed(DomainEvent):
    type: Literal["TOKEN_REFRESHED"] = "TOKEN_REFRESHED"
    new_access_token: str
    new_refresh_token: str
    previous_refresh_token: str | None = None


class InvalidRefreshToken(DomainEvent):
    type: Literal["INVALID_REFRESH_TOKEN"] = "INVALID_REFRESH_TOKEN"
    refresh_token: str
    reason: str


class TicketCreated(DomainEvent):
    type: Literal["TICKET_CREATED"] = "TICKET_CREATED"
    ticket_id: str
    details: TicketDetails
    external_ticket_id: str | None = None


class TicketUpdated(DomainEvent):
    type: Literal["TICKET_UPDATED"] = "TICKET_UPDATED"
    ticket_id: str
    updates: TicketUpdates


class CommentAdded(DomainEvent):
    type: Literal["COMMENT_ADDED"] = "COMMENT_ADDED"
    ticket_id: str
    comment_id: str
    comment: str


class TicketEscalated(DomainEvent):
    type: Literal["TICKET_ESCALATED"] = "TICKET_ESCALATED"
    ticket_id: str


class DashboardRequested(DomainEvent):
    type: Literal["DASHBOARD_REQUESTED"] = "DASHBOARD_REQUESTED"


class UnknownCommand(DomainEvent):
    type: Literal["UNKNOWN_COMMAND"] = "UNKNOWN_COMMAND"
    email: str | None = None
    original_command: str


class CommandRejected(DomainEvent):
    """A known command type whose payload could not be parsed."""

    type: Literal["COMMAND_REJECTED"] = "COMMAND_REJECTED"
    email: str | None = None
    original_command: str
    reason: str


Event = Annotated[
    Union[
        LoginRequested,
        LoginSucceeded,
        LoginFailed,
        RefreshTokenValidated,
        TokenRefreshed,
        InvalidRefreshToken,
        TicketCreated,
        TicketUpdated,
        CommentAdded,
        TicketEscalated,
        DashboardRequested,
        UnknownCommand,
        CommandRejected,
    ],
    Field(discriminator="type"),
]

EVENT_ADAPTER: TypeAdapter[Event] = TypeAdapter(Event)

AUTH_EVENT_TYPES = frozenset(
    {
        EventType.LOGIN_SUCCEEDED.value,
        EventType.TOKEN_REFRESHED.value,
        EventType.INVALID_REFRESH_TOKEN.value,
    }
)


def parse_event(payload: dict[str, Any] | str | bytes) -> DomainEvent:
    """Rebuild a typed event from its stored payload.

    Raises:
        pydantic.ValidationError: If the payload does not match any event type
    """
    if isinstance(payload, (str, bytes)):
        return EVENT_ADAPTER.validate_json(payload)
    return EVENT_ADAPTER.validate_python(payload)
