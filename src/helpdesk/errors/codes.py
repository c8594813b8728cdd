# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Error categories and codes used across the command pipeline."""

from __future__ import annotations

from typing import Final

from helpdesk.errors.base import ErrorCategory, ErrorCode

COMMAND = ErrorCategory.get_or_create("COMMAND")
EVENT_STORE = ErrorCategory.get_or_create("EVENT_STORE")
IDENTITY = ErrorCategory.get_or_create("IDENTITY")
NOTIFICATION = ErrorCategory.get_or_create("NOTIFICATION")

COMMAND_VALIDATION_ERROR: Final = ErrorCode.get_or_create(
    "COMMAND_VALIDATION_ERROR", COMMAND
)
TRANSITION_ERROR: Final = ErrorCode.get_or_create("TRANSITION_ERROR", COMMAND)
HISTORY_FETCH_ERROR: Final = ErrorCode.get_or_create(
    "HISTORY_FETCH_ERROR", EVENT_STORE
)
PERSIST_ERROR: Final = ErrorCode.get_or_create("PERSIST_ERROR", EVENT_STORE)
VERSION_CONFLICT: Final = ErrorCode.get_or_create("VERSION_CONFLICT", EVENT_STORE)
EVENT_STORE_CONNECT_ERROR: Final = ErrorCode.get_or_create(
    "EVENT_STORE_CONNECT_ERROR", EVENT_STORE
)
AUTHENTICATION_FAILED: Final = ErrorCode.get_or_create(
    "AUTHENTICATION_FAILED", IDENTITY
)
INVALID_TOKEN: Final = ErrorCode.get_or_create("INVALID_TOKEN", IDENTITY)
NOTIFY_ERROR: Final = ErrorCode.get_or_create("NOTIFY_ERROR", NOTIFICATION)
NOTIFIER_NOT_CONFIGURED: Final = ErrorCode.get_or_create(
    "NOTIFIER_NOT_CONFIGURED", NOTIFICATION
)
