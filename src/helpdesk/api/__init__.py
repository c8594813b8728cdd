# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""HTTP shell."""

from helpdesk.api.app import create_app, create_default_app

__all__ = ["create_app", "create_default_app"]
