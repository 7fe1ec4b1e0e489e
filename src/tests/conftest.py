"""Pytest configuration and shared fixtures."""

import os
from typing import Any

import pytest

# Set test environment before importing settings
os.environ["ENV"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"

from cluster_admission.models import (  # noqa: E402
    Cluster,
    ClusterSpec,
    NodePool,
    ObjectMeta,
    PersistenceConfig,
    SemanticVersion,
)


def make_cluster(
    *node_pools: NodePool,
    minimum_masters: int | None = None,
    version: str = "5.6.2",
    name: str = "demo",
    namespace: str = "default",
) -> Cluster:
    """Build a cluster object around the given node pools."""
    return Cluster(
        metadata=ObjectMeta(name=name, namespace=namespace),
        spec=ClusterSpec(
            node_pools=list(node_pools),
            minimum_masters=minimum_masters,
            version=SemanticVersion.parse(version),
        ),
    )


@pytest.fixture
def master_pool() -> NodePool:
    """Three-replica master pool."""
    return NodePool(name="es-master", replicas=3, roles=["master"])


@pytest.fixture
def data_pool() -> NodePool:
    """Persistent data/ingest pool."""
    return NodePool(
        name="es-data",
        replicas=4,
        roles=["data", "ingest"],
        persistence=PersistenceConfig(size="10Gi"),
    )


@pytest.fixture
def valid_cluster(master_pool: NodePool, data_pool: NodePool) -> Cluster:
    """A cluster that passes validation."""
    return make_cluster(master_pool, data_pool)


@pytest.fixture
def cluster_factory():
    """Factory building cluster objects around node pools."""
    return make_cluster


@pytest.fixture
def sample_cluster_data() -> dict[str, Any]:
    """Sample cluster object as sent by the orchestrator."""
    return {
        "apiVersion": "navigator.jetstack.io/v1alpha1",
        "kind": "Cluster",
        "metadata": {"name": "demo", "namespace": "default", "uid": "1b4a6c1e"},
        "spec": {
            "version": "5.6.2",
            "minimumMasters": 2,
            "pilotImage": {"repository": "quay.io/jetstack/navigator-pilot", "tag": "v0.1.0"},
            "image": {"repository": "docker.elastic.co/elasticsearch/elasticsearch", "tag": "5.6.2"},
            "nodePools": [
                {"name": "es-master", "replicas": 3, "roles": ["master"]},
                {
                    "name": "es-data",
                    "replicas": 4,
                    "roles": ["data", "ingest"],
                    "persistence": {"enabled": True, "size": "10Gi"},
                    "resources": {"requests": {"cpu": "500m", "memory": "2Gi"}},
                },
            ],
        },
    }


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "slow: Slow tests")
