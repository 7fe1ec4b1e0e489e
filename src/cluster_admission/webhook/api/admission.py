"""Validating admission endpoint."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status

from cluster_admission.models import AdmissionReview
from cluster_admission.observability import get_logger

from ..services.admission_service import (
    AdmissionDecodeError,
    AdmissionService,
    UnsupportedKindError,
    deny,
)

logger = get_logger(__name__)

router = APIRouter()


def get_admission_service(request: Request) -> AdmissionService:
    """Dependency to get the AdmissionService bound to the app."""
    return request.app.state.admission_service


@router.post(
    "/validate",
    response_model=AdmissionReview,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    summary="Validate a cluster object",
    description="Validating admission webhook for cluster create and update requests.",
)
async def validate(request: Request, review: AdmissionReview):
    """Review a cluster create/update request.

    Validation failures are reported as a denial in the response body, not
    as an HTTP error, so the orchestrator can surface them to the user.
    """
    if review.request is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "MISSING_REQUEST", "message": "AdmissionReview.request is required"},
        )

    service = get_admission_service(request)
    try:
        response = service.review(review.request)
    except (UnsupportedKindError, AdmissionDecodeError) as e:
        logger.warning("Rejecting undecodable admission request", uid=review.request.uid, error=str(e))
        response = deny(
            review.request.uid,
            code=status.HTTP_400_BAD_REQUEST,
            reason="BadRequest",
            message=str(e),
        )

    return AdmissionReview(api_version=review.api_version, response=response)
