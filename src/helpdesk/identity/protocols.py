# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
identity.protocols
Identity provider consulted by the pipeline after login and refresh intents
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from helpdesk.errors import IdentityError, Result
from helpdesk.identity.models import Identity, TokenPair


@runtime_checkable
class IdentityProviderProtocol(Protocol):
    """Credential checks and token issuance.

    The refresh token check here covers signature and expiry only. Whether a
    token was ever issued to the aggregate, and never revoked, is decided from
    the event history before the provider is asked.
    """

    async def sign_in(
        self, email: str, password: str
    ) -> Result[Identity, IdentityError]: ...

    async def issue_tokens(
        self, identity: Identity, previous_refresh_token: str | None = None
    ) -> Result[TokenPair, IdentityError]:
        """Mint a new token pair; ``previous_refresh_token`` stops being valid."""
        ...

    async def verify_refresh_token(
        self, email: str, refresh_token: str
    ) -> Result[Identity, IdentityError]: ...
