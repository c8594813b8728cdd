# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Wires a command pipeline from settings."""

from __future__ import annotations

from helpdesk.config.settings import HelpdeskSettings
from helpdesk.event_store import create_event_store
from helpdesk.identity import InMemoryIdentityProvider
from helpdesk.logging import configure_logging, get_logger
from helpdesk.notifications import (
    N8nTicketingClient,
    NotifierProtocol,
    NullNotifier,
    TicketingNotifier,
)
from helpdesk.pipeline.orchestrator import CommandPipeline


def create_pipeline(settings: HelpdeskSettings | None = None) -> CommandPipeline:
    """Build an unstarted pipeline; call ``start()`` before submitting commands."""
    settings = settings or HelpdeskSettings.load()
    configure_logging(settings.logging)
    logger = get_logger("helpdesk.pipeline")
    logger.debug("Creating command pipeline", settings=settings.safe_dump())

    notifier: NotifierProtocol
    if settings.notifications.enabled:
        notifier = TicketingNotifier(
            N8nTicketingClient(settings.notifications),
            notify_on=settings.pipeline.notify_on,
        )
    else:
        notifier = NullNotifier()

    return CommandPipeline(
        create_event_store(settings.event_store),
        identity=InMemoryIdentityProvider.from_settings(settings.identity),
        notifier=notifier,
        settings=settings.pipeline,
        logger=logger,
    )
