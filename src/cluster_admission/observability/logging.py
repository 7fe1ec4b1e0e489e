"""Structured logging configuration.

Features:
- JSON and text format support
- Admission request correlation (request UID, operation, resource name)
- Service context injection
"""

import logging
import sys
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from cluster_admission.config import LogFormat, LogLevel, get_settings

# Context variables for admission request tracking
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
operation_var: ContextVar[str | None] = ContextVar("operation", default=None)
resource_name_var: ContextVar[str | None] = ContextVar("resource_name", default=None)


def add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add service context to log events."""
    settings = get_settings()
    event_dict["service"] = settings.app_name
    event_dict["environment"] = settings.environment.value
    return event_dict


def add_request_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add admission request context from context variables."""
    if request_id := request_id_var.get():
        event_dict["request_id"] = request_id
    if operation := operation_var.get():
        event_dict["operation"] = operation
    if resource_name := resource_name_var.get():
        event_dict["resource_name"] = resource_name
    return event_dict


def add_timestamp(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add ISO 8601 timestamp."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def setup_logging(
    service_name: str | None = None,
    log_level: LogLevel | None = None,
    log_format: LogFormat | None = None,
) -> None:
    """Configure structured logging for the application.

    Args:
        service_name: Override service name (defaults to settings.app_name)
        log_level: Override log level (defaults to settings.log_level)
        log_format: Override log format (defaults to settings.log_format)
    """
    settings = get_settings()

    level = log_level or settings.log_level
    fmt = log_format or settings.log_format

    # Convert LogLevel enum to logging constant (handle both enum and string)
    level_str = level.value if hasattr(level, "value") else str(level).upper()
    numeric_level = getattr(logging, level_str)

    logging.basicConfig(
        level=numeric_level,
        stream=sys.stdout,
        format="%(message)s",
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        add_service_context,
        add_request_context,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if service_name:
        structlog.contextvars.bind_contextvars(service_name=service_name)

    fmt_str = fmt.value if hasattr(fmt, "value") else str(fmt).lower()
    if fmt_str == LogFormat.JSON.value:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Suppress noisy loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (defaults to module name)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


class RequestContextManager:
    """Context manager for admission-request-scoped logging context.

    Usage:
        with RequestContextManager(request_id=review.request.uid, operation="UPDATE"):
            logger.info("Reviewing object")  # Includes request_id and operation
    """

    def __init__(
        self,
        request_id: str | None = None,
        operation: str | None = None,
        resource_name: str | None = None,
    ):
        self.request_id = request_id
        self.operation = operation
        self.resource_name = resource_name
        self._tokens: list[tuple[ContextVar[str | None], Token]] = []

    def __enter__(self) -> "RequestContextManager":
        if self.request_id:
            self._tokens.append((request_id_var, request_id_var.set(self.request_id)))
        if self.operation:
            self._tokens.append((operation_var, operation_var.set(self.operation)))
        if self.resource_name:
            self._tokens.append(
                (resource_name_var, resource_name_var.set(self.resource_name))
            )
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        for var, token in reversed(self._tokens):
            var.reset(token)
        self._tokens.clear()

    async def __aenter__(self) -> "RequestContextManager":
        return self.__enter__()

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)


def log_admission_decision(
    logger: structlog.stdlib.BoundLogger,
    kind: str,
    allowed: bool,
    error_count: int = 0,
    duration_ms: float | None = None,
) -> None:
    """Log the outcome of an admission review."""
    log_data: dict[str, Any] = {
        "kind": kind,
        "allowed": allowed,
        "error_count": error_count,
    }
    if duration_ms is not None:
        log_data["duration_ms"] = round(duration_ms, 2)

    if allowed:
        logger.info("Admission allowed", **log_data)
    else:
        logger.warning("Admission denied", **log_data)
