# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Pure decision and replay functions."""

from helpdesk.core.reconstruct import apply_event, reconstruct_state
from helpdesk.core.transition import TokenCheck, check_refresh_token, transition

__all__ = [
    "apply_event",
    "reconstruct_state",
    "TokenCheck",
    "check_refresh_token",
    "transition",
]
