"""Admission review envelope (admission.k8s.io/v1).

Only the fields a validating webhook reads or writes are modelled.
"""

from enum import Enum
from typing import Any

from pydantic import Field

from .base import AdmissionBaseModel


class Operation(str, Enum):
    """Operation being admitted."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    CONNECT = "CONNECT"


class GroupVersionKind(AdmissionBaseModel):
    group: str = ""
    version: str = ""
    kind: str = ""


class AdmissionRequest(AdmissionBaseModel):
    """The object (and, for updates, its previous state) under review."""

    uid: str
    kind: GroupVersionKind
    operation: Operation
    name: str = ""
    namespace: str = ""
    object: dict[str, Any] | None = None
    old_object: dict[str, Any] | None = None
    dry_run: bool | None = None


class StatusCause(AdmissionBaseModel):
    """A single reason the object was rejected."""

    reason: str
    message: str
    field: str = ""


class StatusDetails(AdmissionBaseModel):
    name: str = ""
    kind: str = ""
    causes: list[StatusCause] = Field(default_factory=list)


class AdmissionStatus(AdmissionBaseModel):
    """Failure status returned alongside a denial."""

    status: str = "Failure"
    message: str
    reason: str
    code: int
    details: StatusDetails | None = None


class AdmissionResponse(AdmissionBaseModel):
    uid: str
    allowed: bool
    status: AdmissionStatus | None = None
    warnings: list[str] | None = None


class AdmissionReview(AdmissionBaseModel):
    """Request/response wrapper exchanged with the orchestrator."""

    api_version: str = "admission.k8s.io/v1"
    kind: str = "AdmissionReview"
    request: AdmissionRequest | None = None
    response: AdmissionResponse | None = None
