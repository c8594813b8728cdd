# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
pipeline.orchestrator
Sequences one command through validate, fetch history, transition, persist,
notify and shape response.

This is the only place where failures become transport statuses. Once an
event is persisted it stands: later stages can enrich the response or log a
failure, but never undo it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from helpdesk.config.settings import PipelineSettings
from helpdesk.core import reconstruct_state, transition
from helpdesk.domain.events import (
    DomainEvent,
    InvalidRefreshToken,
    LoginFailed,
    LoginRequested,
    LoginSucceeded,
    RefreshTokenValidated,
    TokenRefreshed,
)
from helpdesk.domain.state import HelpdeskState
from helpdesk.errors import (
    CommandValidationError,
    Failure,
    HistoryFetchError,
    NotifyError,
    Result,
    TransitionError,
)
from helpdesk.event_store.protocols import EventStoreProtocol
from helpdesk.identity import IdentityProviderProtocol, InMemoryIdentityProvider
from helpdesk.logging import LoggerProtocol, get_logger
from helpdesk.notifications import NotifierProtocol, NullNotifier
from helpdesk.pipeline.response import PipelineResponse, error_response, shape_response
from helpdesk.utils import now_ms
from helpdesk.validation import validate_command


class CommandPipeline:
    """Turns raw commands into persisted events and responses.

    Example:
        ```python
        pipeline = CommandPipeline(InMemoryEventStore())
        await pipeline.start()
        response = await pipeline.submit_command(
            {"type": "FETCH_DASHBOARD", "email": "a@x.com"}
        )
        ```
    """

    def __init__(
        self,
        event_store: EventStoreProtocol,
        identity: IdentityProviderProtocol | None = None,
        notifier: NotifierProtocol | None = None,
        settings: PipelineSettings | None = None,
        logger: LoggerProtocol | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._event_store = event_store
        self._identity = identity or InMemoryIdentityProvider()
        self._notifier = notifier or NullNotifier()
        self._settings = settings or PipelineSettings()
        self._logger = logger or get_logger("helpdesk.pipeline")
        self._clock = clock

    @property
    def event_store(self) -> EventStoreProtocol:
        return self._event_store

    async def start(self) -> None:
        connect = getattr(self._event_store, "connect", None)
        if connect is not None:
            await connect()
        self._logger.info("Command pipeline started")

    async def stop(self) -> None:
        for resource in (self._notifier, self._event_store):
            for name in ("aclose", "disconnect"):
                close = getattr(resource, name, None)
                if close is not None:
                    await close()
                    break
        self._logger.info("Command pipeline stopped")

    def _expected_version(self, history_length: int) -> int | None:
        return history_length if self._settings.optimistic_concurrency else None

    async def submit_command(self, raw: Any) -> PipelineResponse:
        """Run one command through every stage and shape the outcome."""
        validated = validate_command(raw, clock=self._clock)
        if validated.is_failure:
            error = validated.error
            self._logger.warning(
                "Command rejected by validation",
                code=str(error.code),
                fields=error.fields,
            )
            return error_response(error)

        command = validated.unwrap()
        logger = self._logger.bind(
            command_type=command.type, aggregate_key=command.email
        )
        logger.debug("Command validated")

        fetched = await self._event_store.fetch_history(command.email)
        if fetched.is_failure:
            logger.error("History fetch failed", error=fetched.error.to_dict())
            return error_response(fetched.error)
        history = fetched.unwrap()
        logger.debug("History fetched", events=len(history))

        try:
            event = transition(command, history, command.timestamp or self._clock())
        except Exception as exc:
            error = TransitionError(
                "Failed to generate event",
                context={"command": command.to_dict(), "error": str(exc)},
            )
            logger.critical("Transition failed", exc_info=exc, error=error.to_dict())
            return error_response(error)
        logger.debug("Event generated", event_type=event.type)

        persisted = await self._event_store.append(
            event, expected_version=self._expected_version(len(history))
        )
        if persisted.is_failure:
            logger.error("Event persistence failed", error=persisted.error.to_dict())
            return error_response(persisted.error)
        logger.debug("Event persisted", event_type=event.type)
        version = len(history) + 1

        if isinstance(event, (LoginRequested, RefreshTokenValidated)):
            follow_up = await self._complete_authentication(event, logger)
            persisted = await self._event_store.append(
                follow_up, expected_version=self._expected_version(version)
            )
            if persisted.is_failure:
                logger.error(
                    "Event persistence failed", error=persisted.error.to_dict()
                )
                return error_response(persisted.error)
            logger.debug("Event persisted", event_type=follow_up.type)
            event = follow_up

        event = await self._notify(event, logger)
        return shape_response(event)

    async def _complete_authentication(
        self, event: LoginRequested | RefreshTokenValidated, logger: LoggerProtocol
    ) -> DomainEvent:
        """Ask the identity provider to settle a login or refresh intent."""
        if isinstance(event, LoginRequested):
            password = event.password.get_secret_value() if event.password else ""
            signed_in = await self._identity.sign_in(event.email, password)
            if signed_in.is_failure:
                logger.info("Login failed", reason=signed_in.error.message)
                return LoginFailed(
                    email=event.email,
                    timestamp=event.timestamp,
                    reason=signed_in.error.message,
                )
            identity = signed_in.unwrap()
            issued = await self._identity.issue_tokens(identity)
            if issued.is_failure:
                logger.error("Token issuance failed", error=issued.error.to_dict())
                return LoginFailed(
                    email=event.email,
                    timestamp=event.timestamp,
                    reason=issued.error.message,
                )
            tokens = issued.unwrap()
            return LoginSucceeded(
                email=event.email,
                timestamp=event.timestamp,
                user_id=identity.user_id,
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
            )

        verified = await self._identity.verify_refresh_token(
            event.email, event.refresh_token
        )
        if verified.is_success:
            verified = await self._identity.issue_tokens(
                verified.unwrap(), previous_refresh_token=event.refresh_token
            )
        if verified.is_failure:
            logger.info("Refresh token rejected", reason=verified.error.message)
            return InvalidRefreshToken(
                email=event.email,
                timestamp=event.timestamp,
                refresh_token=event.refresh_token,
                reason=verified.error.message,
            )
        tokens = verified.unwrap()
        return TokenRefreshed(
            email=event.email,
            timestamp=event.timestamp,
            new_access_token=tokens.access_token,
            new_refresh_token=tokens.refresh_token,
            previous_refresh_token=event.refresh_token,
        )

    async def _notify(self, event: DomainEvent, logger: LoggerProtocol) -> DomainEvent:
        if event.type not in self._settings.notify_on:
            return event
        try:
            notified = await self._notifier.notify(event)
        except Exception as exc:
            notified = Failure(
                NotifyError(
                    f"Notifier raised: {exc}", context={"event_type": event.type}
                )
            )
        if notified.is_failure:
            # the event is already stored; the caller still gets it
            logger.warning("Notification failed", error=notified.error.to_dict())
            return event
        logger.debug("Notification delivered", event_type=event.type)
        return notified.unwrap()

    async def reconstruct(
        self, email: str
    ) -> Result[HelpdeskState, HistoryFetchError]:
        """Current state of one aggregate, folded from its full history."""
        fetched = await self._event_store.fetch_history(email)
        return fetched.map(reconstruct_state)

    async def get_state(self, email: str) -> PipelineResponse:
        if not email or not email.strip():
            return error_response(
                CommandValidationError("Email is required", fields=["email"])
            )
        result = await self.reconstruct(email)
        if result.is_failure:
            self._logger.error(
                "State reconstruction failed",
                aggregate_key=email,
                error=result.error.to_dict(),
            )
            return error_response(result.error)
        return PipelineResponse(200, {"state": result.unwrap().to_dict()})
