# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Identity provider collaborator."""

from helpdesk.identity.memory import InMemoryIdentityProvider
from helpdesk.identity.models import Identity, TokenPair
from helpdesk.identity.protocols import IdentityProviderProtocol

__all__ = [
    "Identity",
    "IdentityProviderProtocol",
    "InMemoryIdentityProvider",
    "TokenPair",
]
