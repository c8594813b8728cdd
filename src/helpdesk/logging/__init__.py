# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core

"""
Public API for helpdesk logging.
"""

from __future__ import annotations

from helpdesk.logging.config import LoggingSettings
from helpdesk.logging.level import LogLevel
from helpdesk.logging.logger import (
    HelpdeskLogger,
    StructuredFormatter,
    configure_logging,
    get_logger,
)
from helpdesk.logging.protocols import LoggerProtocol

__all__ = [
    "LoggerProtocol",
    "LogLevel",
    "HelpdeskLogger",
    "StructuredFormatter",
    "LoggingSettings",
    "configure_logging",
    "get_logger",
]
