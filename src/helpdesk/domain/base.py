# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Base model shared by commands, events and state."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class HelpdeskModel(BaseModel):
    """Immutable model serialised with camelCase field names."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible dictionary using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True)
