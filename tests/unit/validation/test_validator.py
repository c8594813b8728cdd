from __future__ import annotations

import pytest

from helpdesk.domain import AddComment, CreateTicket, LoginAttempt
from helpdesk.errors import CommandValidationError
from helpdesk.validation import validate_command


def fixed_clock() -> int:
    return 1234


def _fields(raw: object) -> list[str]:
    result = validate_command(raw, clock=fixed_clock)
    assert result.is_failure
    assert isinstance(result.error, CommandValidationError)
    return result.error.fields


@pytest.mark.parametrize("raw", [None, "CREATE_TICKET", ["type"], 42])
def test_non_object_commands_fail(raw: object) -> None:
    result = validate_command(raw)
    assert result.error.message == "Invalid command format"
    assert result.error.fields == ["command"]


def test_missing_type() -> None:
    assert _fields({"email": "a@x.com"}) == ["type"]


def test_unknown_type() -> None:
    result = validate_command({"type": "FOO", "email": "a@x.com"})
    assert result.error.message == "Unknown command type"
    assert result.error.fields == ["type"]


def test_type_is_checked_before_email() -> None:
    assert _fields({"type": "FOO"}) == ["type"]


@pytest.mark.parametrize("email", [None, "", "   ", 5])
def test_email_required_on_every_type(email: object) -> None:
    raw = {"type": "LOGIN_ATTEMPT", "password": "pw"}
    if email is not None:
        raw["email"] = email
    assert _fields(raw) == ["email"]


@pytest.mark.parametrize("email", ["not-an-email", "a@", "@x.com", "a b@x.com"])
def test_email_format_is_checked(email: str) -> None:
    result = validate_command({"type": "FETCH_DASHBOARD", "email": email})
    assert result.error.fields == ["email"]
    assert result.error.message == "Invalid email format"


def test_create_ticket_requires_subject() -> None:
    assert _fields({"type": "CREATE_TICKET", "email": "a@x.com"}) == ["ticketDetails"]
    assert _fields(
        {"type": "CREATE_TICKET", "email": "a@x.com", "ticketDetails": {"subject": ""}}
    ) == ["ticketDetails.subject"]


def test_add_comment_requires_ticket_and_comment() -> None:
    assert _fields({"type": "ADD_COMMENT", "email": "a@x.com"}) == [
        "comment",
        "ticketId",
    ]


def test_invalid_priority_is_reported() -> None:
    fields = _fields(
        {
            "type": "CREATE_TICKET",
            "email": "a@x.com",
            "ticketDetails": {"subject": "S", "priority": "Urgent"},
        }
    )
    assert fields == ["ticketDetails.priority"]


def test_empty_password_is_rejected() -> None:
    assert _fields({"type": "LOGIN_ATTEMPT", "email": "a@x.com", "password": ""}) == [
        "password"
    ]


def test_success_fills_in_missing_timestamp() -> None:
    result = validate_command(
        {"type": "CREATE_TICKET", "email": "a@x.com", "ticketDetails": {"subject": "S"}},
        clock=fixed_clock,
    )
    command = result.unwrap()
    assert isinstance(command, CreateTicket)
    assert command.timestamp == 1234


def test_success_keeps_supplied_timestamp() -> None:
    result = validate_command(
        {
            "type": "ADD_COMMENT",
            "email": "a@x.com",
            "ticketId": "T1",
            "comment": "hi",
            "timestamp": 99,
        },
        clock=fixed_clock,
    )
    command = result.unwrap()
    assert isinstance(command, AddComment)
    assert command.timestamp == 99


def test_validation_does_not_expose_password() -> None:
    command = validate_command(
        {"type": "LOGIN_ATTEMPT", "email": "a@x.com", "password": "pw"}
    ).unwrap()
    assert isinstance(command, LoginAttempt)
    assert command.password.get_secret_value() == "pw"
    assert "pw" not in str(command.to_dict())
