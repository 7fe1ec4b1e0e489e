"""Admission review handling.

Turns an admission request into an allow/deny response using the cluster
validator. A denial lists every validation error found, both in the
message and as structured causes.
"""

from __future__ import annotations

import time
from typing import Any

from pydantic import ValidationError

from cluster_admission.config import AdmissionSettings
from cluster_admission.models import (
    AdmissionRequest,
    AdmissionResponse,
    AdmissionStatus,
    Cluster,
    Operation,
    StatusCause,
    StatusDetails,
)
from cluster_admission.observability import (
    RequestContextManager,
    get_logger,
    log_admission_decision,
)
from cluster_admission.validation import ClusterValidator, ErrorList, aggregate_message

logger = get_logger(__name__)


class UnsupportedKindError(Exception):
    """Raised when a review is for a kind this webhook does not validate."""

    pass


class AdmissionDecodeError(Exception):
    """Raised when the object under review cannot be decoded."""

    pass


def deny(
    uid: str,
    code: int,
    reason: str,
    message: str,
    details: StatusDetails | None = None,
) -> AdmissionResponse:
    """Build a denial response."""
    return AdmissionResponse(
        uid=uid,
        allowed=False,
        status=AdmissionStatus(message=message, reason=reason, code=code, details=details),
    )


class AdmissionService:
    """Reviews create and update requests for cluster objects."""

    def __init__(
        self,
        settings: AdmissionSettings,
        validator: ClusterValidator | None = None,
    ):
        self.settings = settings
        self.validator = validator or ClusterValidator()

    def review(self, request: AdmissionRequest) -> AdmissionResponse:
        """Review a single admission request.

        Raises:
            UnsupportedKindError: The request is for another kind
            AdmissionDecodeError: The object (or old object) is missing or malformed
        """
        with RequestContextManager(
            request_id=request.uid,
            operation=request.operation,
            resource_name=request.name or None,
        ):
            start = time.perf_counter()

            if request.operation in (Operation.DELETE, Operation.CONNECT):
                log_admission_decision(logger, kind=request.kind.kind, allowed=True)
                return AdmissionResponse(uid=request.uid, allowed=True)

            if request.kind.kind != self.settings.resource_kind:
                raise UnsupportedKindError(
                    f"kind {request.kind.kind!r} is not handled by this webhook, "
                    f"expected {self.settings.resource_kind!r}"
                )

            new = self._decode(request.object, "object")
            if request.operation == Operation.UPDATE:
                old = self._decode(request.old_object, "oldObject")
                errors = self.validator.validate_cluster_update(old, new)
            else:
                errors = self.validator.validate_cluster(new)

            duration_ms = (time.perf_counter() - start) * 1000
            log_admission_decision(
                logger,
                kind=request.kind.kind,
                allowed=not errors,
                error_count=len(errors),
                duration_ms=duration_ms,
            )

            if not errors:
                return AdmissionResponse(uid=request.uid, allowed=True)
            return self._deny_invalid(request, new, errors)

    def _decode(self, raw: dict[str, Any] | None, field: str) -> Cluster:
        if raw is None:
            raise AdmissionDecodeError(f"request.{field} is required")
        try:
            return Cluster.model_validate(raw)
        except ValidationError as e:
            raise AdmissionDecodeError(f"unable to decode request.{field}: {e}") from e

    def _deny_invalid(
        self,
        request: AdmissionRequest,
        cluster: Cluster,
        errors: ErrorList,
    ) -> AdmissionResponse:
        name = cluster.metadata.name or request.name
        message = (
            f'{request.kind.kind} "{name}" is invalid: '
            f"{aggregate_message(errors, limit=self.settings.max_reported_errors)}"
        )
        causes = [
            StatusCause(reason=error.type.value, message=error.error_body, field=error.field)
            for error in errors
        ]
        return deny(
            request.uid,
            code=422,
            reason="Invalid",
            message=message,
            details=StatusDetails(name=name, kind=request.kind.kind, causes=causes),
        )
