# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""
Logger implementation for the helpdesk core.

Built on the standard ``logging`` module, with structured context carried on
each record and rendered either as ``key=value`` pairs or as JSON.
"""

from __future__ import annotations

import datetime
import enum
import json
import logging
import sys
import uuid
from typing import Any

from helpdesk.logging.config import LoggingSettings
from helpdesk.logging.level import LogLevel
from helpdesk.logging.protocols import LoggerProtocol

CONTEXT_ATTR = "helpdesk_context"
_RESERVED_KWARGS = ("exc_info", "stack_info", "stacklevel")


class HelpdeskJsonEncoder(json.JSONEncoder):
    """JSON encoder that falls back to strings for unserializable values."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (datetime.datetime, datetime.date)):
            return obj.isoformat()
        if isinstance(obj, uuid.UUID):
            return str(obj)
        if isinstance(obj, enum.Enum):
            return obj.value
        if hasattr(obj, "model_dump"):
            return obj.model_dump(mode="json", by_alias=True)
        if hasattr(obj, "to_dict"):
            return obj.to_dict()
        return str(obj)


class StructuredFormatter(logging.Formatter):
    """Formatter that renders the structured context attached to a record."""

    def __init__(
        self,
        json_format: bool = False,
        include_timestamp: bool = True,
    ) -> None:
        self.json_format = json_format
        self.include_timestamp = include_timestamp

        fmt = "%(name)s %(message)s [%(levelname)s]"
        if include_timestamp:
            fmt = "%(asctime)s " + fmt
        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        context: dict[str, Any] = getattr(record, CONTEXT_ATTR, None) or {}
        if self.json_format:
            return self._format_json(record, context)
        message = super().format(record)
        if not context:
            return message
        ctx_str = " ".join(f"{k}={self._format_value(v)}" for k, v in context.items())
        return f"{message} {ctx_str}"

    def _format_json(self, record: logging.LogRecord, context: dict[str, Any]) -> str:
        log_data: dict[str, Any] = {
            "message": record.getMessage(),
            "level": record.levelname,
            "name": record.name,
            **context,
        }
        if self.include_timestamp:
            log_data["timestamp"] = self.formatTime(record, self.datefmt)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, cls=HelpdeskJsonEncoder, ensure_ascii=False)

    def _format_value(self, value: Any) -> str:
        if isinstance(value, str):
            return f'"{value}"' if " " in value else value
        if isinstance(value, enum.Enum):
            return str(value.value)
        if isinstance(value, BaseException):
            return f'"{value}"'
        try:
            return json.dumps(value, cls=HelpdeskJsonEncoder)
        except (TypeError, ValueError):
            return str(value)


class HelpdeskLogger(LoggerProtocol):
    """Default logger with bound structured context.

    Example:
        ```python
        logger = get_logger(__name__).bind(aggregate="a@x.com")
        logger.info("Event stored", event_type="TICKET_CREATED")
        ```
    """

    def __init__(
        self,
        name: str,
        settings: LoggingSettings | None = None,
        bound_context: dict[str, Any] | None = None,
    ) -> None:
        self.name = name
        self._settings = settings or LoggingSettings.load()
        self._logger = logging.getLogger(name)
        self._bound_context: dict[str, Any] = dict(bound_context or {})

    def _log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        std_kwargs = {k: kwargs.pop(k) for k in _RESERVED_KWARGS if k in kwargs}
        context = {**self._bound_context, **kwargs}
        self._logger.log(
            level, msg, *args, extra={CONTEXT_ATTR: context}, **std_kwargs
        )

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, *args, **kwargs)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, *args, **kwargs)

    def set_level(self, level: LogLevel) -> None:
        self._logger.setLevel(level.to_stdlib_level())

    def bind(self, **kwargs: Any) -> HelpdeskLogger:
        """Create a new logger with additional bound context values."""
        return HelpdeskLogger(
            self.name,
            settings=self._settings,
            bound_context={**self._bound_context, **kwargs},
        )


_configured = False


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Install the structured handlers on the ``helpdesk`` logger hierarchy."""
    global _configured
    settings = settings or LoggingSettings.load()
    root = logging.getLogger("helpdesk")
    root.setLevel(LogLevel.from_string(settings.level).to_stdlib_level())

    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = StructuredFormatter(
        json_format=settings.json_format,
        include_timestamp=settings.include_timestamp,
    )
    if settings.console_enabled:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        root.addHandler(console)
    if settings.file_path:
        file_handler = logging.FileHandler(settings.file_path)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    _configured = True


def get_logger(name: str, level: LogLevel | None = None) -> HelpdeskLogger:
    """Get a logger for the specified name (typically ``__name__``)."""
    settings = LoggingSettings.load()
    if not _configured:
        configure_logging(settings)
    logger = HelpdeskLogger(name, settings=settings)
    if level is not None:
        logger.set_level(level)
    return logger
