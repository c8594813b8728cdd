# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
Configuration for the helpdesk core.

Section settings live in ``helpdesk.config.settings``; collaborator packages
import only the ``Config`` base from here.
"""

from helpdesk.config.base import Config

__all__ = ["Config"]
