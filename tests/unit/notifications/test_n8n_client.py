from __future__ import annotations

import json

import httpx
import pytest

from helpdesk.config.settings import NotificationSettings
from helpdesk.errors import NotifyError
from helpdesk.errors.codes import NOTIFIER_NOT_CONFIGURED, NOTIFY_ERROR
from helpdesk.notifications import N8nTicketingClient

BASE_URL = "http://n8n.test"


class Recorder:
    def __init__(self, status: int = 200, body=None) -> None:
        self.status = status
        self.body = {"data": {"id": "EXT-1"}} if body is None else body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, json=self.body)


def _client(recorder: Recorder, mock_logger, base_url: str | None = BASE_URL):
    settings = NotificationSettings(enabled=True, n8n_base_url=base_url)
    http = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return N8nTicketingClient(settings, client=http, logger=mock_logger)


async def test_create_ticket_returns_data(mock_logger) -> None:
    recorder = Recorder()
    client = _client(recorder, mock_logger)

    result = await client.create_ticket({"ticketId": "T1", "subject": "S"})

    assert result.unwrap() == {"id": "EXT-1"}
    request = recorder.requests[0]
    assert str(request.url) == f"{BASE_URL}/webhook/tickets/create"
    assert request.method == "POST"
    assert json.loads(request.content) == {"ticketId": "T1", "subject": "S"}


@pytest.mark.parametrize(
    ("call", "path", "payload"),
    [
        (
            lambda c: c.update_ticket("T1", {"status": "Resolved"}),
            "/webhook/tickets/update",
            {"ticketId": "T1", "updates": {"status": "Resolved"}},
        ),
        (
            lambda c: c.add_comment("T1", "hello"),
            "/webhook/tickets/comment",
            {"ticketId": "T1", "content": "hello", "isPublic": True},
        ),
        (
            lambda c: c.escalate_ticket("T1"),
            "/webhook/tickets/escalate",
            {"ticketId": "T1", "priority": "High"},
        ),
    ],
)
async def test_webhook_payloads(mock_logger, call, path, payload) -> None:
    recorder = Recorder()
    client = _client(recorder, mock_logger)

    assert (await call(client)).is_success

    request = recorder.requests[0]
    assert request.url.path == path
    assert json.loads(request.content) == payload


async def test_body_without_data_member(mock_logger) -> None:
    client = _client(Recorder(body={"ok": True}), mock_logger)
    assert (await client.escalate_ticket("T1")).unwrap() == {"ok": True}


async def test_not_configured(mock_logger) -> None:
    recorder = Recorder()
    client = _client(recorder, mock_logger, base_url=None)

    result = await client.escalate_ticket("T1")

    assert result.error.code == NOTIFIER_NOT_CONFIGURED
    assert recorder.requests == []


async def test_error_status(mock_logger) -> None:
    client = _client(Recorder(status=502, body={"error": "bad gateway"}), mock_logger)

    result = await client.create_ticket({"ticketId": "T1"})

    assert isinstance(result.error, NotifyError)
    assert result.error.code == NOTIFY_ERROR
    assert result.error.context["status"] == 502
    mock_logger.warning.assert_called_once()


async def test_transport_error(mock_logger) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    settings = NotificationSettings(enabled=True, n8n_base_url=BASE_URL)
    http = httpx.AsyncClient(transport=httpx.MockTransport(refuse))
    client = N8nTicketingClient(settings, client=http, logger=mock_logger)

    result = await client.add_comment("T1", "x")
    assert "connection refused" in result.error.message


async def test_borrowed_client_is_not_closed(mock_logger) -> None:
    client = _client(Recorder(), mock_logger)
    http = client._client

    await client.aclose()
    assert not http.is_closed
    await http.aclose()


async def test_owned_client_is_created_and_closed(mock_logger) -> None:
    settings = NotificationSettings(enabled=True, n8n_base_url=BASE_URL)
    client = N8nTicketingClient(settings, logger=mock_logger)

    http = client._http()
    await client.aclose()
    assert http.is_closed
