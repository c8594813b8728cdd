# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
identity.memory
Identity provider backed by configured users, for development and tests
"""

from __future__ import annotations

import secrets
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from pydantic import SecretStr

from helpdesk.config.settings import IdentitySettings
from helpdesk.errors import Failure, IdentityError, Result, Success
from helpdesk.errors.codes import INVALID_TOKEN
from helpdesk.identity.models import Identity, TokenPair
from helpdesk.logging import LoggerProtocol, get_logger
from helpdesk.utils import now_ms

USER_NAMESPACE = uuid.UUID("0e3c7d5a-1f7b-4b2e-8f7e-6a4d1c9b2e55")


@dataclass(frozen=True)
class _IssuedToken:
    email: str
    expires_at: int


class InMemoryIdentityProvider:
    """Checks passwords against a fixed user table and issues opaque tokens.

    Tokens are random strings; nothing about them is signed. Refresh tokens
    are remembered until they expire or are rotated out.
    """

    def __init__(
        self,
        users: Mapping[str, str | SecretStr] | None = None,
        *,
        access_token_ttl_seconds: int = 3600,
        refresh_token_ttl_seconds: int = 7 * 24 * 3600,
        clock: Callable[[], int] = now_ms,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self._users = {
            email.lower(): (
                password if isinstance(password, SecretStr) else SecretStr(password)
            )
            for email, password in (users or {}).items()
        }
        self._access_ttl_ms = access_token_ttl_seconds * 1000
        self._refresh_ttl_ms = refresh_token_ttl_seconds * 1000
        self._clock = clock
        self._refresh_tokens: dict[str, _IssuedToken] = {}
        self._logger = logger or get_logger("helpdesk.identity")

    @classmethod
    def from_settings(
        cls, settings: IdentitySettings, logger: LoggerProtocol | None = None
    ) -> InMemoryIdentityProvider:
        return cls(
            settings.users,
            access_token_ttl_seconds=settings.access_token_ttl_seconds,
            refresh_token_ttl_seconds=settings.refresh_token_ttl_seconds,
            logger=logger,
        )

    @staticmethod
    def user_id_for(email: str) -> str:
        return str(uuid.uuid5(USER_NAMESPACE, email.lower()))

    async def sign_in(self, email: str, password: str) -> Result[Identity, IdentityError]:
        expected = self._users.get(email.lower())
        # compare against something even for unknown users
        candidate = expected.get_secret_value() if expected else secrets.token_hex(16)
        matches = secrets.compare_digest(candidate.encode(), password.encode())
        if expected is None or not matches:
            self._logger.info("Sign in rejected", email=email)
            return Failure(
                IdentityError("Invalid credentials", context={"email": email})
            )
        return Success(Identity(user_id=self.user_id_for(email), email=email))

    async def issue_tokens(
        self, identity: Identity, previous_refresh_token: str | None = None
    ) -> Result[TokenPair, IdentityError]:
        if previous_refresh_token is not None:
            self._refresh_tokens.pop(previous_refresh_token, None)

        now = self._clock()
        pair = TokenPair(
            access_token=secrets.token_urlsafe(32),
            refresh_token=secrets.token_urlsafe(48),
            access_expires_at=now + self._access_ttl_ms,
            refresh_expires_at=now + self._refresh_ttl_ms,
        )
        self._refresh_tokens[pair.refresh_token] = _IssuedToken(
            email=identity.email.lower(), expires_at=pair.refresh_expires_at
        )
        return Success(pair)

    async def verify_refresh_token(
        self, email: str, refresh_token: str
    ) -> Result[Identity, IdentityError]:
        issued = self._refresh_tokens.get(refresh_token)
        if issued is None or not secrets.compare_digest(
            issued.email.encode(), email.lower().encode()
        ):
            return Failure(
                IdentityError(
                    "Refresh token is not recognised",
                    code=INVALID_TOKEN,
                    context={"email": email},
                )
            )
        if issued.expires_at <= self._clock():
            self._refresh_tokens.pop(refresh_token, None)
            return Failure(
                IdentityError(
                    "Refresh token has expired",
                    code=INVALID_TOKEN,
                    context={"email": email},
                )
            )
        return Success(Identity(user_id=self.user_id_for(email), email=email))
