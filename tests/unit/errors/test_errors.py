from __future__ import annotations

import pytest

from helpdesk.errors import (
    CommandValidationError,
    ErrorSeverity,
    EventStoreError,
    HelpdeskError,
    HistoryFetchError,
    IdentityError,
    NotifyError,
    PersistError,
    TransitionError,
    VersionConflictError,
)
from helpdesk.errors.base import ErrorCategory, ErrorCode
from helpdesk.errors.codes import (
    COMMAND,
    COMMAND_VALIDATION_ERROR,
    HISTORY_FETCH_ERROR,
    INVALID_TOKEN,
    PERSIST_ERROR,
    VERSION_CONFLICT,
)
from helpdesk.errors.registry import registry


def test_base_error_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        HelpdeskError("boom", code=PERSIST_ERROR)


def test_code_must_be_error_code() -> None:
    with pytest.raises(TypeError):
        PersistError("boom", code="PERSIST_ERROR")  # type: ignore[arg-type]


def test_command_validation_error_carries_fields() -> None:
    """Validation errors name the offending fields and are warnings."""
    error = CommandValidationError("Email is required", fields=["email"])
    assert error.code == COMMAND_VALIDATION_ERROR
    assert error.category == COMMAND
    assert error.severity == ErrorSeverity.WARNING
    assert error.fields == ["email"]

    data = error.to_dict()
    assert data["code"] == "COMMAND_VALIDATION_ERROR"
    assert data["message"] == "Email is required"
    assert data["category"] == "COMMAND"
    assert data["fields"] == ["email"]


def test_error_context_merges_keyword_arguments() -> None:
    error = HistoryFetchError("down", context={"a": 1}, b=2)
    assert error.context == {"a": 1, "b": 2}
    assert error.add_context("c", 3) is error
    assert error.context["c"] == 3
    assert str(error) == "HISTORY_FETCH_ERROR: down"


def test_store_error_hierarchy() -> None:
    assert issubclass(HistoryFetchError, EventStoreError)
    assert issubclass(PersistError, EventStoreError)
    assert issubclass(VersionConflictError, PersistError)

    conflict = VersionConflictError("stale")
    assert conflict.code == VERSION_CONFLICT
    assert conflict.severity == ErrorSeverity.WARNING
    assert HistoryFetchError("x").code == HISTORY_FETCH_ERROR


def test_default_severities() -> None:
    assert TransitionError("x").severity == ErrorSeverity.CRITICAL
    assert NotifyError("x").severity == ErrorSeverity.WARNING
    assert IdentityError("x", code=INVALID_TOKEN).code == INVALID_TOKEN


def test_codes_are_registered_once() -> None:
    assert registry.lookup_code("PERSIST_ERROR") is PERSIST_ERROR
    assert ErrorCode.get_or_create("PERSIST_ERROR", COMMAND) is PERSIST_ERROR
    assert ErrorCode.get_by_code("NO_SUCH_CODE") is None
    assert PERSIST_ERROR in registry.get_all_codes()


def test_category_hierarchy() -> None:
    parent = ErrorCategory.get_or_create("TEST_PARENT")
    child = ErrorCategory.get_or_create("TEST_CHILD", parent)
    assert child.is_subcategory_of(parent)
    assert not parent.is_subcategory_of(child)
