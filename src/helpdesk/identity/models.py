# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Values returned by the identity provider."""

from __future__ import annotations

from helpdesk.domain.base import HelpdeskModel


class Identity(HelpdeskModel):
    """An authenticated user."""

    user_id: str
    email: str


class TokenPair(HelpdeskModel):
    """Opaque access and refresh tokens with their expiry (epoch ms)."""

    access_token: str
    refresh_token: str
    access_expires_at: int
    refresh_expires_at: int
