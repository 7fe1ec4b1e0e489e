"""Cluster Admission webhook FastAPI application.

The webhook provides:
- Create validation of cluster objects
- Update validation, including node pool immutability checks
- Health and readiness endpoints

Run with ``uvicorn cluster_admission.webhook.main:app``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from cluster_admission.config import get_settings
from cluster_admission.observability import get_logger, setup_logging

from .api import admission, health
from .services.admission_service import AdmissionService

settings = get_settings()
setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info(
        "Starting Cluster Admission webhook",
        version=settings.app_version,
        resource_kind=settings.admission.resource_kind,
    )

    yield

    logger.info("Cluster Admission webhook shutdown complete")


app = FastAPI(
    title="Cluster Admission Webhook",
    description="Validating admission webhook for multi-role node clusters",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)
app.state.admission_service = AdmissionService(settings.admission)

app.include_router(admission.router, tags=["Admission"])
app.include_router(health.router, tags=["Health"])


@app.get("/")
async def root():
    """Root endpoint with service info."""
    return {
        "service": "cluster-admission",
        "version": settings.app_version,
        "docs": "/docs",
    }
