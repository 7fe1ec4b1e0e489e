"""Observability module for structured logging."""

from .logging import (
    RequestContextManager,
    get_logger,
    log_admission_decision,
    operation_var,
    request_id_var,
    resource_name_var,
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    "get_logger",
    # Context
    "RequestContextManager",
    "request_id_var",
    "operation_var",
    "resource_name_var",
    # Logging helpers
    "log_admission_decision",
]
