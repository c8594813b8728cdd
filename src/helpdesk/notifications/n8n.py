# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
notifications.n8n
Ticketing client that calls workflow-automation webhooks over HTTP
"""

from __future__ import annotations

from typing import Any

import httpx

from helpdesk.config.settings import NotificationSettings
from helpdesk.errors import Failure, NotifyError, Result, Success
from helpdesk.errors.codes import NOTIFIER_NOT_CONFIGURED
from helpdesk.logging import LoggerProtocol, get_logger


class N8nTicketingClient:
    """Posts ticket operations to n8n webhooks.

    Webhooks answer ``{"data": {...}}``; the ``data`` member is returned. A
    caller-supplied ``httpx.AsyncClient`` is used as is and not closed here.
    """

    def __init__(
        self,
        settings: NotificationSettings,
        client: httpx.AsyncClient | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self._settings = settings
        self._client = client
        self._owns_client = client is None
        self._logger = logger or get_logger("helpdesk.notifications.n8n")

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._settings.timeout_seconds)
            )
        return self._client

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _post(
        self, path: str, data: dict[str, Any]
    ) -> Result[dict[str, Any], NotifyError]:
        base_url = self._settings.n8n_base_url
        if not base_url:
            return Failure(
                NotifyError(
                    "n8n service not configured",
                    code=NOTIFIER_NOT_CONFIGURED,
                    context={"path": path},
                )
            )

        url = f"{base_url}{path}"
        try:
            response = await self._http().post(url, json=data)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            self._logger.warning(
                "n8n request failed", url=url, status=exc.response.status_code
            )
            return Failure(
                NotifyError(
                    f"n8n request failed with status {exc.response.status_code}",
                    context={"url": url, "status": exc.response.status_code},
                )
            )
        except (httpx.HTTPError, ValueError) as exc:
            self._logger.warning("n8n request failed", url=url, error=str(exc))
            return Failure(
                NotifyError(f"n8n request failed: {exc}", context={"url": url})
            )

        if isinstance(body, dict) and isinstance(body.get("data"), dict):
            return Success(body["data"])
        return Success(body if isinstance(body, dict) else {})

    async def create_ticket(
        self, ticket: dict[str, Any]
    ) -> Result[dict[str, Any], NotifyError]:
        return await self._post(self._settings.create_ticket_path, ticket)

    async def update_ticket(
        self, ticket_id: str, updates: dict[str, Any]
    ) -> Result[dict[str, Any], NotifyError]:
        return await self._post(
            self._settings.update_ticket_path,
            {"ticketId": ticket_id, "updates": updates},
        )

    async def add_comment(
        self, ticket_id: str, comment: str
    ) -> Result[dict[str, Any], NotifyError]:
        return await self._post(
            self._settings.add_comment_path,
            {"ticketId": ticket_id, "content": comment, "isPublic": True},
        )

    async def escalate_ticket(
        self, ticket_id: str
    ) -> Result[dict[str, Any], NotifyError]:
        return await self._post(
            self._settings.escalate_ticket_path,
            {"ticketId": ticket_id, "priority": "High"},
        )
