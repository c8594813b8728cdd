# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
Event-sourced helpdesk core.

Commands are validated, turned into a single event by a pure transition
function, appended to an event log, and folded back into state on demand.
"""

__version__ = "0.1.0"
