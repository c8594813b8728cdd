from __future__ import annotations

import pytest

from helpdesk.domain import InvalidRefreshToken, TicketEscalated, TokenRefreshed
from helpdesk.errors import (
    CommandValidationError,
    EventStoreConnectError,
    IdentityError,
    NotifyError,
    TransitionError,
    VersionConflictError,
)
from helpdesk.pipeline import error_response, shape_response
from helpdesk.pipeline.response import GENERIC_SERVER_REASON, status_for


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (CommandValidationError("bad", fields=["email"]), 400),
        (TransitionError("bad"), 400),
        (IdentityError("who?"), 401),
        (VersionConflictError("stale"), 409),
        (EventStoreConnectError("down"), 500),
        (NotifyError("n8n down"), 500),
    ],
)
def test_status_for(error, status) -> None:
    assert status_for(error) == status


def test_server_errors_hide_details() -> None:
    response = error_response(EventStoreConnectError("password=hunter2"))
    assert response.body == {
        "success": False,
        "code": "EVENT_STORE_CONNECT_ERROR",
        "reason": GENERIC_SERVER_REASON,
    }
    assert not response.ok


def test_token_refreshed_shape() -> None:
    response = shape_response(
        TokenRefreshed(
            email="a@x.com",
            timestamp=1,
            new_access_token="acc",
            new_refresh_token="ref",
        )
    )
    assert response.body == {
        "success": True,
        "email": "a@x.com",
        "accessToken": "acc",
        "refreshToken": "ref",
    }


def test_invalid_refresh_token_shape() -> None:
    response = shape_response(
        InvalidRefreshToken(
            email="a@x.com", timestamp=1, refresh_token="r", reason="Token not found"
        )
    )
    assert response.status == 401
    assert response.body["code"] == "INVALID_TOKEN"


def test_plain_event_shape() -> None:
    response = shape_response(TicketEscalated(email="a@x.com", timestamp=1, ticket_id="T"))
    assert response.body == {
        "success": True,
        "event": {
            "type": "TICKET_ESCALATED",
            "email": "a@x.com",
            "timestamp": 1,
            "ticketId": "T",
        },
    }
