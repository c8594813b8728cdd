# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
domain.commands
Commands are transient caller intents. They are validated, turned into a
single event by the transition function, and discarded.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar, Literal, Union

from pydantic import ConfigDict, Field, SecretStr, ValidationError, field_validator

from helpdesk.domain.base import HelpdeskModel
from helpdesk.domain.value_objects import TicketDetails, TicketUpdates


class CommandType(str, Enum):
    LOGIN_ATTEMPT = "LOGIN_ATTEMPT"
    REFRESH_TOKEN = "REFRESH_TOKEN"
    CREATE_TICKET = "CREATE_TICKET"
    UPDATE_TICKET = "UPDATE_TICKET"
    ADD_COMMENT = "ADD_COMMENT"
    ESCALATE_TICKET = "ESCALATE_TICKET"
    FETCH_DASHBOARD = "FETCH_DASHBOARD"


class BaseCommand(HelpdeskModel):
    """Fields common to every command. ``email`` is the aggregate key."""

    type: str
    email: str = Field(min_length=1)
    timestamp: int | None = None


class LoginAttempt(BaseCommand):
    type: Literal["LOGIN_ATTEMPT"] = "LOGIN_ATTEMPT"
    password: SecretStr

    @field_validator("password")
    @classmethod
    def password_not_empty(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("Password is required")
        return v


class RefreshToken(BaseCommand):
    type: Literal["REFRESH_TOKEN"] = "REFRESH_TOKEN"
    refresh_token: str = Field(min_length=1)


class CreateTicket(BaseCommand):
    type: Literal["CREATE_TICKET"] = "CREATE_TICKET"
    ticket_details: TicketDetails


class UpdateTicket(BaseCommand):
    type: Literal["UPDATE_TICKET"] = "UPDATE_TICKET"
    ticket_id: str = Field(min_length=1)
    updates: TicketUpdates


class AddComment(BaseCommand):
    type: Literal["ADD_COMMENT"] = "ADD_COMMENT"
    ticket_id: str = Field(min_length=1)
    comment: str = Field(min_length=1)


class EscalateTicket(BaseCommand):
    type: Literal["ESCALATE_TICKET"] = "ESCALATE_TICKET"
    ticket_id: str = Field(min_length=1)


class FetchDashboard(BaseCommand):
    type: Literal["FETCH_DASHBOARD"] = "FETCH_DASHBOARD"


class GenericCommand(HelpdeskModel):
    """A command whose type is not recognised, or whose payload does not parse."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True, populate_by_name=True, extra="allow"
    )

    type: str
    email: str | None = None
    timestamp: int | None = None


Command = Union[
    LoginAttempt,
    RefreshToken,
    CreateTicket,
    UpdateTicket,
    AddComment,
    EscalateTicket,
    FetchDashboard,
]

COMMAND_MODELS: dict[str, type[BaseCommand]] = {
    CommandType.LOGIN_ATTEMPT.value: LoginAttempt,
    CommandType.REFRESH_TOKEN.value: RefreshToken,
    CommandType.CREATE_TICKET.value: CreateTicket,
    CommandType.UPDATE_TICKET.value: UpdateTicket,
    CommandType.ADD_COMMENT.value: AddComment,
    CommandType.ESCALATE_TICKET.value: EscalateTicket,
    CommandType.FETCH_DASHBOARD.value: FetchDashboard,
}


def coerce_command(raw: Any) -> BaseCommand | GenericCommand:
    """Best-effort conversion of a raw object into a command model.

    Never raises: anything that cannot be parsed as a known command becomes a
    ``GenericCommand`` carrying whatever ``type`` and ``email`` it had.
    """
    if isinstance(raw, (BaseCommand, GenericCommand)):
        return raw
    if not isinstance(raw, Mapping):
        return GenericCommand(type="")

    command_type = raw.get("type")
    model = COMMAND_MODELS.get(command_type) if isinstance(command_type, str) else None
    if model is not None:
        try:
            return model.model_validate(raw)
        except ValidationError:
            pass

    email = raw.get("email")
    timestamp = raw.get("timestamp")
    return GenericCommand(
        type=str(command_type) if command_type is not None else "",
        email=email if isinstance(email, str) else None,
        timestamp=timestamp if isinstance(timestamp, int) else None,
    )
