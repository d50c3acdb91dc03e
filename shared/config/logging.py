"""
Structured logging on top of the standard library.

Loggers returned by `get_logger` accept keyword fields on every level method:

    logger = get_logger(__name__)
    logger.info("Store created", store_id=12, branch_id=3)
    logger.error("Commit failed", store_id=12, exc_info=True)

Production writes one JSON object per line; other environments write a
compact console line. Both include the request id set by
CorrelationIdMiddleware when there is one.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from shared.config.settings import settings

_NOISY_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
}


def _fields(record: logging.LogRecord) -> dict[str, Any]:
    return getattr(record, "fields", None) or {}


def _request_id(record: logging.LogRecord) -> str | None:
    request_id = getattr(record, "request_id", None)
    return request_id if request_id and request_id != "-" else None


class JsonFormatter(logging.Formatter):
    """One JSON document per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        doc: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        request_id = _request_id(record)
        if request_id:
            doc["request_id"] = request_id
        fields = _fields(record)
        if fields:
            doc["fields"] = fields
        if record.exc_info:
            doc["exc"] = self.formatException(record.exc_info)
        return json.dumps(doc, default=str)


class ConsoleFormatter(logging.Formatter):
    """`12:00:01 INFO    [1a2b3c4d] rest_api: Store created store_id=12`"""

    def format(self, record: logging.LogRecord) -> str:
        when = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        request_id = _request_id(record)
        prefix = f"[{request_id[:8]}] " if request_id else ""
        line = f"{when} {record.levelname:<7} {prefix}{record.name}: {record.getMessage()}"

        fields = _fields(record)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class StructuredLogger(logging.Logger):
    """Logger whose level methods take keyword fields instead of `extra`."""

    def _log_fields(self, level: int, msg: str, args: tuple, fields: dict[str, Any]) -> None:
        if not self.isEnabledFor(level):
            return
        exc_info = fields.pop("exc_info", None)
        self._log(level, msg, args, exc_info=exc_info, extra={"fields": fields})

    def debug(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log_fields(logging.DEBUG, msg, args, fields)

    def info(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log_fields(logging.INFO, msg, args, fields)

    def warning(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log_fields(logging.WARNING, msg, args, fields)

    def error(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log_fields(logging.ERROR, msg, args, fields)

    def critical(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log_fields(logging.CRITICAL, msg, args, fields)


logging.setLoggerClass(StructuredLogger)


def _level() -> int:
    if settings.log_level:
        return logging.getLevelName(settings.log_level.upper())
    return logging.DEBUG if settings.debug else logging.INFO


def setup_logging() -> None:
    """Install the stdout handler on the root logger. Safe to call again."""
    from shared.infrastructure.correlation import CorrelationIdFilter

    level = _level()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(JsonFormatter() if settings.is_production else ConsoleFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name, noisy_level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)


def get_logger(name: str) -> StructuredLogger:
    """Logger for `name` that accepts keyword fields."""
    return logging.getLogger(name)  # type: ignore


def mask_email(email: str | None) -> str:
    """`tester@indostore.local` -> `te***@indostore.local`."""
    if not email:
        return "<no-email>"
    local, sep, domain = email.partition("@")
    if not sep or not local:
        return "***@invalid"
    return f"{local[:2]}***@{domain}"


rest_api_logger = get_logger("rest_api")
auth_logger = get_logger("rest_api.auth")
audit_logger = get_logger("rest_api.audit")
