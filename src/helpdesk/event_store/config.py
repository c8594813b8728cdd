# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Configuration for the event store."""

from __future__ import annotations

import re
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import SettingsConfigDict

from helpdesk.config.base import Config

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class EventStoreSettings(Config):
    """Configuration settings for the event store.

    Settings can be configured via environment variables with the
    `HELPDESK_EVENT_STORE_` prefix.
    """

    backend: Literal["memory", "postgresql"] = "memory"

    # PostgreSQL settings
    postgres_dsn: str | None = None
    postgres_pool_min_size: int = 1
    postgres_pool_max_size: int = 10
    application_name: str = "helpdesk-event-store"

    events_table: str = "events"
    activity_table: str = "user_activity"
    track_user_activity: bool = True

    @field_validator("events_table", "activity_table")
    @classmethod
    def validate_table_name(cls, v: str) -> str:
        """Table names are interpolated into SQL, so only plain identifiers pass."""
        if not _IDENTIFIER.match(v):
            raise ValueError(f"Invalid table name: {v!r}")
        return v

    @model_validator(mode="after")
    def validate_postgres_settings(self) -> EventStoreSettings:
        """Validate PostgreSQL-related settings."""
        if self.postgres_dsn and not self.postgres_dsn.startswith("postgresql://"):
            if "://" not in self.postgres_dsn:
                self.postgres_dsn = f"postgresql://{self.postgres_dsn}"
            else:
                raise ValueError("PostgreSQL DSN must use the postgresql:// scheme")

        if self.postgres_pool_min_size < 0 or self.postgres_pool_max_size < 1:
            raise ValueError("Pool sizes must be positive integers")

        if self.postgres_pool_min_size > self.postgres_pool_max_size:
            raise ValueError(
                "Minimum pool size cannot be greater than maximum pool size"
            )

        return self

    model_config = SettingsConfigDict(
        env_prefix="HELPDESK_EVENT_STORE_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )


default_settings = EventStoreSettings(backend="memory", postgres_dsn=None)
