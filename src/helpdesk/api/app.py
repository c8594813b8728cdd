# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
api.app
HTTP and websocket shell around the command pipeline.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse

from helpdesk.pipeline import CommandPipeline, PipelineResponse, create_pipeline
from helpdesk.realtime import ClientRegistry


def _json(response: PipelineResponse) -> JSONResponse:
    return JSONResponse(status_code=response.status, content=response.body)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def create_app(
    pipeline: CommandPipeline, registry: ClientRegistry | None = None
) -> FastAPI:
    """Build the application. The pipeline starts and stops with it.

    Example:
        ```python
        app = create_app(CommandPipeline(InMemoryEventStore()))
        with TestClient(app) as client:
            client.post("/commands", json={"type": "FETCH_DASHBOARD", "email": "a@x.com"})
        ```
    """
    registry = registry or ClientRegistry()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await pipeline.start()
        try:
            yield
        finally:
            await registry.close_all()
            await pipeline.stop()

    app = FastAPI(title="Helpdesk", lifespan=lifespan)
    app.state.pipeline = pipeline
    app.state.registry = registry

    @app.post("/commands")
    async def submit_command(request: Request) -> JSONResponse:
        """Submit one command; the body is the raw command object."""
        try:
            raw: Any = await request.json()
        except ValueError:
            raw = None
        return _json(await pipeline.submit_command(raw))

    @app.get("/state/{email}")
    async def get_state(email: str) -> JSONResponse:
        return _json(await pipeline.get_state(email))

    @app.websocket("/ws/chat/{ticket_id}")
    async def ticket_chat(websocket: WebSocket, ticket_id: str) -> None:
        await websocket.accept()
        await registry.add(ticket_id, websocket)
        await websocket.send_json(
            {
                "type": "system",
                "content": "Connected to ticket chat",
                "ticketId": ticket_id,
                "timestamp": _now_iso(),
            }
        )
        try:
            while True:
                text = await websocket.receive_text()
                try:
                    message = json.loads(text)
                except ValueError:
                    message = None
                content = message.get("content") if isinstance(message, dict) else None
                if not isinstance(content, str) or not content:
                    await websocket.send_json(
                        {
                            "type": "error",
                            "content": "Invalid message format",
                            "timestamp": _now_iso(),
                        }
                    )
                    continue
                await registry.broadcast(
                    ticket_id, {**message, "ticketId": ticket_id, "timestamp": _now_iso()}
                )
        except WebSocketDisconnect:
            pass
        finally:
            await registry.remove(ticket_id, websocket)

    return app


def create_default_app() -> FastAPI:
    """Application wired from ``HELPDESK_*`` environment settings."""
    return create_app(create_pipeline())
