"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get(
    "/health",
    summary="Health check",
    description="Basic health check endpoint.",
)
async def health():
    """Basic health check."""
    return {"status": "healthy", "service": "cluster-admission"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check if service is ready to receive admission reviews.",
)
async def ready(request: Request):
    """Readiness check.

    The webhook has no backing stores; it is ready once its admission
    service is bound.
    """
    checks = {
        "admission_service": getattr(request.app.state, "admission_service", None) is not None,
    }
    all_ready = all(checks.values())

    return {
        "status": "ready" if all_ready else "not_ready",
        "checks": checks,
    }
