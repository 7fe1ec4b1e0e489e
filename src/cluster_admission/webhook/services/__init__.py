"""Webhook services."""

from .admission_service import (
    AdmissionDecodeError,
    AdmissionService,
    UnsupportedKindError,
    deny,
)

__all__ = [
    "AdmissionDecodeError",
    "AdmissionService",
    "UnsupportedKindError",
    "deny",
]
