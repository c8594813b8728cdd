# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Command validation."""

from helpdesk.validation.validator import validate_command

__all__ = ["validate_command"]
