# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
validation.validator
Shape checks at the pipeline boundary.

Validation only inspects the command. It never reads history and never
raises; failures come back as ``Failure(CommandValidationError)``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError
from pydantic.networks import validate_email

from helpdesk.domain.commands import COMMAND_MODELS, Command
from helpdesk.errors import CommandValidationError, Failure, Result, Success
from helpdesk.utils import now_ms


def _field_path(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc)


def _from_pydantic(command_type: str, exc: ValidationError) -> CommandValidationError:
    errors = exc.errors(include_url=False)
    fields = sorted({_field_path(err["loc"]) for err in errors})
    first = errors[0]
    location = _field_path(first["loc"])
    message = f"{location}: {first['msg']}" if location else first["msg"]
    return CommandValidationError(
        message,
        fields=fields,
        context={"command_type": command_type},
    )


def validate_command(
    raw: Any, *, clock: Callable[[], int] = now_ms
) -> Result[Command, CommandValidationError]:
    """Check a raw command and return its typed form.

    A command without a ``timestamp`` gets one from ``clock``. Field names in
    the failure use the wire (camelCase) names, dotted for nested fields.
    """
    if not isinstance(raw, Mapping):
        return Failure(
            CommandValidationError("Invalid command format", fields=["command"])
        )

    command_type = raw.get("type")
    if not isinstance(command_type, str) or not command_type:
        return Failure(
            CommandValidationError("Command type is required", fields=["type"])
        )

    model = COMMAND_MODELS.get(command_type)
    if model is None:
        return Failure(
            CommandValidationError(
                "Unknown command type",
                fields=["type"],
                context={"command_type": command_type},
            )
        )

    email = raw.get("email")
    if not isinstance(email, str) or not email.strip():
        return Failure(
            CommandValidationError(
                "Email is required",
                fields=["email"],
                context={"command_type": command_type},
            )
        )

    try:
        validate_email(email)
    except ValueError:
        return Failure(
            CommandValidationError(
                "Invalid email format",
                fields=["email"],
                context={"command_type": command_type},
            )
        )

    data = dict(raw)
    if data.get("timestamp") is None:
        data["timestamp"] = clock()

    try:
        command = model.model_validate(data)
    except ValidationError as exc:
        return Failure(_from_pydantic(command_type, exc))
    return Success(command)  # type: ignore[arg-type]
