# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Commands, events, value objects and reconstructed state."""

from helpdesk.domain.commands import (
    AddComment,
    BaseCommand,
    Command,
    CommandType,
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
    CommandRejected,
    CommentAdded,
    DashboardRequested,
    DomainEvent,
    Event,
    EventType,
    InvalidRefreshToken,
    LoginFailed,
    LoginRequested,
    LoginSucceeded,
    RefreshTokenValidated,
    TicketCreated,
    TicketEscalated,
    TicketUpdated,
    TokenRefreshed,
    UnknownCommand,
    parse_event,
)
from helpdesk.domain.state import (
    INITIAL_STATE,
    Comment,
    Dashboard,
    HelpdeskState,
    Ticket,
    TicketStats,
    UserView,
)
from helpdesk.domain.value_objects import (
    TicketDetails,
    TicketPriority,
    TicketStatus,
    TicketUpdates,
)

__all__ = [
    "AddComment",
    "BaseCommand",
    "Command",
    "CommandType",
    "CreateTicket",
    "EscalateTicket",
    "FetchDashboard",
    "GenericCommand",
    "LoginAttempt",
    "RefreshToken",
    "UpdateTicket",
    "coerce_command",
    "CommandRejected",
    "CommentAdded",
    "DashboardRequested",
    "DomainEvent",
    "Event",
    "EventType",
    "InvalidRefreshToken",
    "LoginFailed",
    "LoginRequested",
    "LoginSucceeded",
    "RefreshTokenValidated",
    "TicketCreated",
    "TicketEscalated",
    "TicketUpdated",
    "TokenRefreshed",
    "UnknownCommand",
    "parse_event",
    "INITIAL_STATE",
    "Comment",
    "Dashboard",
    "HelpdeskState",
    "Ticket",
    "TicketStats",
    "UserView",
    "TicketDetails",
    "TicketPriority",
    "TicketStatus",
    "TicketUpdates",
]
