"""Test fixtures for the admission webhook."""

import copy
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from cluster_admission.config import AdmissionSettings
from cluster_admission.webhook.services import AdmissionService


@pytest_asyncio.fixture
async def test_client() -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client."""
    from cluster_admission.webhook.main import app

    original_service = app.state.admission_service
    app.state.admission_service = AdmissionService(AdmissionSettings(resource_kind="Cluster"))

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.state.admission_service = original_service


@pytest.fixture
def make_review():
    """Factory for AdmissionReview request bodies."""

    def _make_review(
        operation: str,
        obj: dict[str, Any] | None = None,
        old_obj: dict[str, Any] | None = None,
        kind: str = "Cluster",
    ) -> dict[str, Any]:
        request: dict[str, Any] = {
            "uid": "705ab4f5-6393-11e8-b7cc-42010a800002",
            "kind": {"group": "navigator.jetstack.io", "version": "v1alpha1", "kind": kind},
            "resource": {"group": "navigator.jetstack.io", "version": "v1alpha1", "resource": "clusters"},
            "operation": operation,
            "name": "demo",
            "namespace": "default",
        }
        if obj is not None:
            request["object"] = copy.deepcopy(obj)
        if old_obj is not None:
            request["oldObject"] = copy.deepcopy(old_obj)
        return {"apiVersion": "admission.k8s.io/v1", "kind": "AdmissionReview", "request": request}

    return _make_review
