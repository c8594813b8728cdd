# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Realtime ticket chat."""

from helpdesk.realtime.registry import ChatConnection, ClientRegistry

__all__ = ["ChatConnection", "ClientRegistry"]
