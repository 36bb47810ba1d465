"""
Structured logging for Forge.

Provides a pre-configured logger that emits JSON-structured log records
with construction context (service, operation, mode), plus the
:class:`WarningSink` seam the resolver reports unrecognized options to.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Protocol, runtime_checkable


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Attach any extras injected via ForgeLogger.log_operation
        for key in ("request_id", "service", "operation", "mode"):
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


class ForgeLogger:
    """Convenience wrapper around :mod:`logging` for service construction."""

    def __init__(self, name: str = "forge") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def log_operation(
        self,
        level: int,
        message: str,
        *,
        service: str | None = None,
        operation: str | None = None,
        mode: str | None = None,
        request_id: str | None = None,
        exc_info: bool = False,
    ) -> None:
        """Emit a structured log record with construction context.

        Args:
            level: Logging level (e.g. logging.INFO).
            message: Human-readable message.
            service: Service name (e.g. 'storage').
            operation: Operation name (e.g. 'resolve', 'create').
            mode: 'real' or 'mock'.
            request_id: Optional correlation ID; auto-generated if omitted.
            exc_info: Whether to include exception info.
        """
        extra = {
            "service": service,
            "operation": operation,
            "mode": mode,
            "request_id": request_id or uuid.uuid4().hex[:12],
        }
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.DEBUG, message, **kwargs)


@runtime_checkable
class WarningSink(Protocol):
    """Receives advisory messages (e.g. unrecognized options)."""

    def warn(self, message: str) -> None: ...


class LoggerWarningSink:
    """:class:`WarningSink` that forwards to a :class:`ForgeLogger` at WARNING."""

    def __init__(self, logger: ForgeLogger | None = None, service: str | None = None) -> None:
        self.logger = logger or forge_logger
        self.service = service

    def warn(self, message: str) -> None:
        self.logger.warning(message, service=self.service, operation="resolve")


# Module-level singleton
forge_logger = ForgeLogger()
