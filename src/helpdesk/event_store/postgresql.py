# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
event_store.postgresql
PostgreSQL event store backed by an asyncpg connection pool
"""

from __future__ import annotations

import json
import uuid
from collections.abc import Iterable
from typing import Any

import asyncpg
from pydantic import ValidationError

from helpdesk.config.base import obfuscate_dsn
from helpdesk.domain.events import AUTH_EVENT_TYPES, DomainEvent, parse_event
from helpdesk.errors import (
    EventStoreConnectError,
    Failure,
    HistoryFetchError,
    PersistError,
    Result,
    Success,
    VersionConflictError,
)
from helpdesk.event_store.base import EventStore
from helpdesk.event_store.config import EventStoreSettings
from helpdesk.event_store.models import StoredEvent
from helpdesk.logging import LoggerProtocol, get_logger


class PostgreSQLEventStore(EventStore):
    """PostgreSQL-based event store.

    Events live in a single table ordered by a ``bigserial`` sequence.
    Authentication events are also recorded in the user activity table on a
    best-effort basis: a failed activity insert is logged and the append
    still succeeds.
    """

    def __init__(
        self,
        settings: EventStoreSettings | None = None,
        logger: LoggerProtocol | None = None,
        **pool_kwargs: Any,
    ) -> None:
        super().__init__(
            settings=settings,
            logger=logger or get_logger("helpdesk.event_store.postgresql"),
        )
        self._dsn = self.settings.postgres_dsn
        if not self._dsn:
            raise ValueError("PostgreSQL DSN is required")

        self._events_table = self.settings.events_table
        self._activity_table = self.settings.activity_table
        self._pool: asyncpg.Pool | None = None
        self._pool_kwargs: dict[str, Any] = {
            "min_size": self.settings.postgres_pool_min_size,
            "max_size": self.settings.postgres_pool_max_size,
            "server_settings": {"application_name": self.settings.application_name},
            **pool_kwargs,
        }

    @staticmethod
    def _obfuscate_dsn(dsn: str | None) -> str:
        return obfuscate_dsn(dsn)

    async def connect(self) -> None:
        """Create the pool and the tables if they don't exist."""
        if self._pool is not None:
            return

        self.logger.info(
            "Connecting to PostgreSQL event store",
            dsn=self._obfuscate_dsn(self._dsn),
            pool_min_size=self.settings.postgres_pool_min_size,
            pool_max_size=self.settings.postgres_pool_max_size,
        )
        try:
            self._pool = await asyncpg.create_pool(dsn=self._dsn, **self._pool_kwargs)
            async with self._pool.acquire() as conn:
                await self._create_tables(conn)
        except Exception as exc:
            self._pool = None
            error_msg = f"Failed to connect to PostgreSQL: {exc}"
            self.logger.error(error_msg, exc_info=exc)
            raise EventStoreConnectError(
                error_msg, context={"dsn": self._obfuscate_dsn(self._dsn)}
            ) from exc

        self.logger.info("Connected to PostgreSQL event store")

    async def disconnect(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            self.logger.info("Closed PostgreSQL event store connection")

    async def _create_tables(self, conn: asyncpg.Connection) -> None:
        await conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self._events_table} (
                id UUID PRIMARY KEY,
                sequence BIGSERIAL UNIQUE NOT NULL,
                aggregate_key TEXT NOT NULL,
                type VARCHAR(64) NOT NULL,
                ticket_id TEXT NULL,
                payload JSONB NOT NULL,
                stored_at TIMESTAMPTZ NOT NULL DEFAULT now()
            );
            CREATE INDEX IF NOT EXISTS idx_{self._events_table}_aggregate
                ON {self._events_table} (aggregate_key, sequence);
            CREATE INDEX IF NOT EXISTS idx_{self._events_table}_ticket
                ON {self._events_table} (ticket_id);
            CREATE TABLE IF NOT EXISTS {self._activity_table} (
                id BIGSERIAL PRIMARY KEY,
                aggregate_key TEXT NOT NULL,
                activity_type VARCHAR(64) NOT NULL,
                timestamp BIGINT NOT NULL,
                recorded_at TIMESTAMPTZ NOT NULL DEFAULT now()
            );
            """
        )
        self.logger.debug("Event store tables created or verified")

    def _require_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise EventStoreConnectError("Event store is not connected")
        return self._pool

    async def append(
        self,
        event: DomainEvent,
        expected_version: int | None = None,
    ) -> Result[StoredEvent, PersistError]:
        aggregate_key = event.email or ""
        event_id = uuid.uuid4()
        try:
            pool = self._require_pool()
            async with pool.acquire() as conn:
                async with conn.transaction():
                    if expected_version is not None:
                        # serialise appends to this aggregate until commit
                        await conn.execute(
                            "SELECT pg_advisory_xact_lock(hashtext($1))",
                            aggregate_key,
                        )
                        current_version = await conn.fetchval(
                            f"SELECT COUNT(*) FROM {self._events_table} "
                            "WHERE aggregate_key = $1",
                            aggregate_key,
                        )
                        if current_version != expected_version:
                            return Failure(
                                VersionConflictError(
                                    f"Version conflict: expected {expected_version}, "
                                    f"got {current_version}",
                                    context={
                                        "aggregate_key": aggregate_key,
                                        "expected_version": expected_version,
                                        "current_version": current_version,
                                    },
                                )
                            )
                    row = await conn.fetchrow(
                        f"""
                        INSERT INTO {self._events_table}
                            (id, aggregate_key, type, ticket_id, payload)
                        VALUES ($1, $2, $3, $4, $5::jsonb)
                        RETURNING sequence, stored_at
                        """,
                        event_id,
                        aggregate_key,
                        event.type,
                        getattr(event, "ticket_id", None),
                        json.dumps(event.to_payload()),
                    )
        except Exception as exc:
            error_msg = f"Failed to append event for aggregate {aggregate_key}: {exc}"
            self.logger.error(error_msg, exc_info=exc, event_type=event.type)
            return Failure(
                PersistError(
                    error_msg,
                    context={"aggregate_key": aggregate_key, "event_type": event.type},
                )
            )

        if self.settings.track_user_activity and event.type in AUTH_EVENT_TYPES:
            await self._record_activity(event)

        return Success(
            StoredEvent(
                id=str(event_id),
                sequence=row["sequence"],
                aggregate_key=aggregate_key,
                type=event.type,
                payload=event,
                stored_at=row["stored_at"],
            )
        )

    async def _record_activity(self, event: DomainEvent) -> None:
        try:
            pool = self._require_pool()
            async with pool.acquire() as conn:
                await conn.execute(
                    f"INSERT INTO {self._activity_table} "
                    "(aggregate_key, activity_type, timestamp) VALUES ($1, $2, $3)",
                    event.email,
                    event.type,
                    event.timestamp,
                )
        except Exception as exc:
            self.logger.error(
                "Failed to store user activity",
                exc_info=exc,
                aggregate_key=event.email,
                activity_type=event.type,
            )

    async def _fetch(
        self, query: str, *params: Any
    ) -> Result[list[DomainEvent], HistoryFetchError]:
        try:
            pool = self._require_pool()
            async with pool.acquire() as conn:
                rows = await conn.fetch(query, *params)
            return Success([parse_event(row["payload"]) for row in rows])
        except (ValidationError, ValueError) as exc:
            self.logger.error("Stored event could not be decoded", exc_info=exc)
            return Failure(
                HistoryFetchError(
                    f"Invalid stored event: {exc}", context={"params": list(params)}
                )
            )
        except Exception as exc:
            self.logger.error("Failed to fetch events", exc_info=exc)
            return Failure(
                HistoryFetchError(
                    f"Failed to fetch events: {exc}", context={"params": list(params)}
                )
            )

    async def fetch_history(
        self, aggregate_key: str
    ) -> Result[list[DomainEvent], HistoryFetchError]:
        return await self._fetch(
            f"SELECT payload FROM {self._events_table} "
            "WHERE aggregate_key = $1 ORDER BY sequence ASC",
            aggregate_key,
        )

    async def fetch_events_by_type(
        self, aggregate_key: str, event_types: Iterable[str]
    ) -> Result[list[DomainEvent], HistoryFetchError]:
        return await self._fetch(
            f"SELECT payload FROM {self._events_table} "
            "WHERE aggregate_key = $1 AND type = ANY($2::text[]) "
            "ORDER BY sequence ASC",
            aggregate_key,
            list(event_types),
        )

    async def fetch_ticket_events(
        self, ticket_id: str
    ) -> Result[list[DomainEvent], HistoryFetchError]:
        return await self._fetch(
            f"SELECT payload FROM {self._events_table} "
            "WHERE ticket_id = $1 ORDER BY sequence ASC",
            ticket_id,
        )

    async def get_aggregate_version(
        self, aggregate_key: str
    ) -> Result[int, HistoryFetchError]:
        try:
            pool = self._require_pool()
            async with pool.acquire() as conn:
                count = await conn.fetchval(
                    f"SELECT COUNT(*) FROM {self._events_table} "
                    "WHERE aggregate_key = $1",
                    aggregate_key,
                )
            return Success(int(count or 0))
        except Exception as exc:
            self.logger.error("Failed to read aggregate version", exc_info=exc)
            return Failure(
                HistoryFetchError(
                    f"Failed to read version of {aggregate_key}: {exc}",
                    context={"aggregate_key": aggregate_key},
                )
            )
