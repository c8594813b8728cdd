# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
Result objects for functional error handling.

Core functions return ``Success`` or ``Failure`` instead of raising, so the
command pipeline is the only place failures become transport responses.
"""

from __future__ import annotations

import sys
import traceback
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from contextlib import suppress
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast

T = TypeVar("T")
E = TypeVar("E", bound=Exception)
U = TypeVar("U")


class Result(Generic[T, E], ABC):
    """Abstract base class for the Result monad."""

    @property
    @abstractmethod
    def is_success(self) -> bool: ...

    @property
    @abstractmethod
    def is_failure(self) -> bool: ...

    @abstractmethod
    def map(self, func: Callable[[T], U]) -> Result[U, E]: ...

    @abstractmethod
    def flat_map(self, func: Callable[[T], Result[U, E]]) -> Result[U, E]: ...

    @abstractmethod
    def unwrap(self) -> T: ...

    @abstractmethod
    def unwrap_or(self, default: T) -> T: ...

    @abstractmethod
    def unwrap_or_else(self, func: Callable[[E], T]) -> T: ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]: ...

    def ensure(self, predicate: Callable[[T], bool], error: E) -> Result[T, E]:
        """Return Failure if predicate is False for a Success value, else self."""
        if self.is_success and not predicate(self.unwrap()):
            return Failure(error)
        return self


@dataclass(frozen=True)
class Success(Result[T, E], Generic[T, E]):
    """A successful result carrying a value."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    @property
    def error(self) -> None:
        return None

    def map(self, func: Callable[[T], U]) -> Result[U, E]:
        """Map the value, capturing any exception raised by ``func``."""
        try:
            return Success(func(self.value))
        except Exception as e:
            return Failure(cast("E", e))

    def flat_map(self, func: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain a function that itself returns a Result."""
        try:
            return func(self.value)
        except Exception as e:
            return Failure(cast("E", e))

    def on_success(self, func: Callable[[T], Any]) -> Success[T, E]:
        with suppress(Exception):
            func(self.value)
        return self

    def on_failure(self, func: Callable[[E], Any]) -> Success[T, E]:
        return self

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_or_else(self, func: Callable[[E], T]) -> T:
        return self.value

    def to_dict(self) -> dict[str, Any]:
        data = self.value
        if hasattr(data, "to_dict"):
            data = data.to_dict()
        return {"status": "success", "data": data}

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass(frozen=True)
class Failure(Result[T, E], Generic[T, E]):
    """A failed result carrying an error.

    Attributes:
        error: The error that caused the failure
        traceback: The formatted traceback when created inside an ``except`` block
    """

    error: E
    traceback: str | None = None

    def __post_init__(self) -> None:
        if self.traceback is None and sys.exc_info()[0] is not None:
            object.__setattr__(self, "traceback", traceback.format_exc())

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    @property
    def value(self) -> None:
        return None

    def map(self, func: Callable[[T], U]) -> Result[U, E]:
        return cast("Failure[U, E]", self)

    def flat_map(self, func: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return cast("Failure[U, E]", self)

    def on_success(self, func: Callable[[T], Any]) -> Failure[T, E]:
        return self

    def on_failure(self, func: Callable[[E], Any]) -> Failure[T, E]:
        with suppress(Exception):
            func(self.error)
        return self

    def unwrap(self) -> T:
        """
        Raises:
            RuntimeError: Always, since this is a failure
        """
        raise RuntimeError(f"Cannot unwrap a Failure: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_else(self, func: Callable[[E], T]) -> T:
        return func(self.error)

    def to_dict(self) -> dict[str, Any]:
        if hasattr(self.error, "to_dict"):
            return {"status": "error", "error": self.error.to_dict()}
        return {"status": "error", "error": {"message": str(self.error)}}

    def __repr__(self) -> str:
        return f"Failure({self.error!r})"


def of(value: T) -> Success[T, Any]:
    """Create a successful result with a value."""
    return Success(value)


def failure(error: E) -> Failure[Any, E]:
    """Create a failed result with an error."""
    return Failure(error)


async def from_awaitable(awaitable: Awaitable[T]) -> Result[T, Exception]:
    """Await ``awaitable`` and capture any exception as a Failure."""
    try:
        return Success(await awaitable)
    except Exception as e:
        return Failure(e)


def combine(results: list[Result[T, E]]) -> Result[list[T], E]:
    """
    Combine multiple Results into a single Result.

    Returns:
        A Success with all values, or the first Failure
    """
    values: list[T] = []
    for result in results:
        if result.is_failure:
            return cast("Failure[list[T], E]", result)
        values.append(result.unwrap())
    return Success(values)
