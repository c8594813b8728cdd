# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
Settings for the command pipeline and its collaborators.

Each section reads its own ``HELPDESK_<SECTION>_*`` environment variables.
"""

from __future__ import annotations

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import SettingsConfigDict

from helpdesk.config.base import Config
from helpdesk.event_store.config import EventStoreSettings
from helpdesk.logging.config import LoggingSettings

NOTIFIABLE_EVENT_TYPES = (
    "TICKET_CREATED",
    "TICKET_UPDATED",
    "COMMENT_ADDED",
    "TICKET_ESCALATED",
)


class PipelineSettings(Config):
    """Behaviour of the command pipeline orchestrator."""

    model_config = SettingsConfigDict(env_prefix="HELPDESK_PIPELINE_")

    optimistic_concurrency: bool = Field(
        default=False,
        description="Append with the history length as expected version",
    )
    notify_on: list[str] = Field(default_factory=lambda: list(NOTIFIABLE_EVENT_TYPES))


class IdentitySettings(Config):
    """Token lifetimes and development users for the identity provider."""

    model_config = SettingsConfigDict(env_prefix="HELPDESK_IDENTITY_")

    access_token_ttl_seconds: int = 3600
    refresh_token_ttl_seconds: int = 7 * 24 * 3600
    users: dict[str, SecretStr] = Field(default_factory=dict)

    @field_validator("access_token_ttl_seconds", "refresh_token_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Token lifetimes must be positive")
        return v


class NotificationSettings(Config):
    """Workflow-automation webhooks used to mirror tickets in the CRM."""

    model_config = SettingsConfigDict(env_prefix="HELPDESK_NOTIFICATIONS_")

    enabled: bool = False
    n8n_base_url: str | None = None
    create_ticket_path: str = "/webhook/tickets/create"
    update_ticket_path: str = "/webhook/tickets/update"
    add_comment_path: str = "/webhook/tickets/comment"
    escalate_ticket_path: str = "/webhook/tickets/escalate"
    timeout_seconds: float = 15.0

    @field_validator("n8n_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        return v.rstrip("/") if v else v


class ApiSettings(Config):
    """Bind address of the development server."""

    model_config = SettingsConfigDict(env_prefix="HELPDESK_API_")

    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False


class HelpdeskSettings(Config):
    """All settings, grouped by collaborator."""

    event_store: EventStoreSettings = Field(default_factory=EventStoreSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    identity: IdentitySettings = Field(default_factory=IdentitySettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)

    @classmethod
    def load(cls) -> HelpdeskSettings:
        return cls()
