# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core

"""
Error handling for the helpdesk core.
"""

from __future__ import annotations

from helpdesk.errors.base import ErrorCategory, ErrorCode, ErrorSeverity, HelpdeskError
from helpdesk.errors.errors import (
    CommandValidationError,
    EventStoreConnectError,
    EventStoreError,
    HistoryFetchError,
    IdentityError,
    NotifyError,
    PersistError,
    TransitionError,
    VersionConflictError,
)
from helpdesk.errors.result import Failure, Result, Success

__all__ = [
    "ErrorCategory",
    "ErrorCode",
    "ErrorSeverity",
    "HelpdeskError",
    "CommandValidationError",
    "EventStoreConnectError",
    "EventStoreError",
    "HistoryFetchError",
    "IdentityError",
    "NotifyError",
    "PersistError",
    "TransitionError",
    "VersionConflictError",
    "Result",
    "Success",
    "Failure",
]
