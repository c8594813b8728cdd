# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Downstream notification collaborators."""

from helpdesk.notifications.n8n import N8nTicketingClient
from helpdesk.notifications.notifier import NullNotifier, TicketingNotifier
from helpdesk.notifications.protocols import NotifierProtocol, TicketingClientProtocol

__all__ = [
    "N8nTicketingClient",
    "NotifierProtocol",
    "NullNotifier",
    "TicketingClientProtocol",
    "TicketingNotifier",
]
