# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Process-wide registry of error categories and codes."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from helpdesk.errors.base import ErrorCategory, ErrorCode


class ErrorRegistry:
    """Singleton registry for all error codes and categories."""

    _instance: ErrorRegistry | None = None
    _lock = threading.RLock()

    def __new__(cls) -> ErrorRegistry:
        with cls._lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._categories = {}
                instance._codes = {}
                cls._instance = instance
            return cls._instance

    def get_category(
        self, name: str, parent: ErrorCategory | None = None
    ) -> ErrorCategory:
        """Get a category by name, registering it on first use."""
        with self._lock:
            if name in self._categories:
                return self._categories[name]

            from helpdesk.errors.base import ErrorCategory

            category = ErrorCategory(name, parent)
            self._categories[name] = category
            return category

    def get_code(self, code: str, category_name: str = "INTERNAL") -> ErrorCode:
        """Get an error code, registering it under the category on first use."""
        with self._lock:
            if code in self._codes:
                return self._codes[code]

            from helpdesk.errors.base import ErrorCode

            error_code = ErrorCode(code, self.get_category(category_name))
            self._codes[code] = error_code
            return error_code

    def lookup_code(self, code: str) -> ErrorCode | None:
        """Look up an error code without creating it."""
        return self._codes.get(code)

    def get_all_codes(self) -> list[ErrorCode]:
        return list(self._codes.values())


registry = ErrorRegistry()
