# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
pipeline.response
Transport-neutral responses produced by the command pipeline
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final

from helpdesk.domain.events import (
    DomainEvent,
    InvalidRefreshToken,
    LoginFailed,
    LoginSucceeded,
    TokenRefreshed,
)
from helpdesk.errors import (
    CommandValidationError,
    HelpdeskError,
    IdentityError,
    TransitionError,
    VersionConflictError,
)
from helpdesk.errors.codes import AUTHENTICATION_FAILED, INVALID_TOKEN

GENERIC_SERVER_REASON: Final = "Internal server error"


@dataclass(frozen=True)
class PipelineResponse:
    status: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status < 400


def shape_response(event: DomainEvent) -> PipelineResponse:
    """Response for the event a command produced."""
    if isinstance(event, LoginSucceeded):
        return PipelineResponse(
            200,
            {
                "success": True,
                "email": event.email,
                "userId": event.user_id,
                "accessToken": event.access_token,
                "refreshToken": event.refresh_token,
            },
        )
    if isinstance(event, TokenRefreshed):
        return PipelineResponse(
            200,
            {
                "success": True,
                "email": event.email,
                "accessToken": event.new_access_token,
                "refreshToken": event.new_refresh_token,
            },
        )
    if isinstance(event, LoginFailed):
        return PipelineResponse(
            401,
            {
                "success": False,
                "code": str(AUTHENTICATION_FAILED),
                "reason": event.reason,
            },
        )
    if isinstance(event, InvalidRefreshToken):
        return PipelineResponse(
            401,
            {"success": False, "code": str(INVALID_TOKEN), "reason": event.reason},
        )
    return PipelineResponse(200, {"success": True, "event": event.to_dict()})


def status_for(error: HelpdeskError) -> int:
    if isinstance(error, (CommandValidationError, TransitionError)):
        return 400
    if isinstance(error, IdentityError):
        return 401
    if isinstance(error, VersionConflictError):
        return 409
    return 500


def error_response(error: HelpdeskError) -> PipelineResponse:
    """Response for a failed stage.

    Server-side failures expose only the error code; their message and context
    stay in the logs.
    """
    status = status_for(error)
    body: dict[str, Any] = {"success": False, "code": str(error.code)}
    if status >= 500:
        body["reason"] = GENERIC_SERVER_REASON
        return PipelineResponse(status, body)

    body["reason"] = error.message
    if isinstance(error, CommandValidationError):
        body["fields"] = error.fields
    return PipelineResponse(status, body)
