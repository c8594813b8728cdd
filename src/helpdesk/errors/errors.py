# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
Error taxonomy of the command pipeline.

Validation and transition errors are the caller's to fix; history, persist
and notification errors belong to the infrastructure.
"""

from __future__ import annotations

from typing import Any

from helpdesk.errors.base import ErrorCode, ErrorSeverity, HelpdeskError
from helpdesk.errors.codes import (
    AUTHENTICATION_FAILED,
    COMMAND_VALIDATION_ERROR,
    EVENT_STORE_CONNECT_ERROR,
    HISTORY_FETCH_ERROR,
    NOTIFY_ERROR,
    PERSIST_ERROR,
    TRANSITION_ERROR,
    VERSION_CONFLICT,
)


class CommandValidationError(HelpdeskError):
    """A command is malformed or incomplete. Never persisted."""

    def __init__(
        self,
        message: str,
        fields: list[str] | None = None,
        code: ErrorCode = COMMAND_VALIDATION_ERROR,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message, code=code, severity=severity, context=context, **kwargs
        )
        self.fields = list(fields or [])

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["fields"] = self.fields
        return data


class TransitionError(HelpdeskError):
    """The transition function could not produce an event."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = TRANSITION_ERROR,
        severity: ErrorSeverity = ErrorSeverity.CRITICAL,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message, code=code, severity=severity, context=context, **kwargs
        )


class EventStoreError(HelpdeskError):
    """Base class for persistence errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = PERSIST_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message, code=code, severity=severity, context=context, **kwargs
        )


class HistoryFetchError(EventStoreError):
    """Fetching an aggregate's history failed. Safe to retry."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = HISTORY_FETCH_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message, code=code, severity=severity, context=context, **kwargs
        )


class PersistError(EventStoreError):
    """Appending an event failed; the event did not happen."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = PERSIST_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message, code=code, severity=severity, context=context, **kwargs
        )


class VersionConflictError(PersistError):
    """The aggregate moved past the expected version before the append."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = VERSION_CONFLICT,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message, code=code, severity=severity, context=context, **kwargs
        )


class EventStoreConnectError(EventStoreError):
    """The event store backend could not be reached."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = EVENT_STORE_CONNECT_ERROR,
        severity: ErrorSeverity = ErrorSeverity.CRITICAL,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message, code=code, severity=severity, context=context, **kwargs
        )


class IdentityError(HelpdeskError):
    """The identity provider rejected credentials or a token."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = AUTHENTICATION_FAILED,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message, code=code, severity=severity, context=context, **kwargs
        )


class NotifyError(HelpdeskError):
    """A downstream notification failed after the event was persisted."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = NOTIFY_ERROR,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message, code=code, severity=severity, context=context, **kwargs
        )
