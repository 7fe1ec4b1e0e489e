"""Cluster domain models.

Field names are snake_case in Python and camelCase on the wire
(``nodePools``, ``minimumMasters``). Validation error paths use the
wire names.
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from .base import AdmissionBaseModel
from .version import SemanticVersion


class NodePoolRole(str, Enum):
    """Role a node pool's members take in the cluster."""

    DATA = "data"
    INGEST = "ingest"
    MASTER = "master"


# Fixed order used when reporting unsupported roles
SUPPORTED_ROLES: list[str] = [role.value for role in NodePoolRole]


def _quantity_to_str(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


# Resource quantities may arrive as numbers (cpu: 2) or strings ("500m", "10Gi")
Quantity = Annotated[str, BeforeValidator(_quantity_to_str)]


class ImageSpec(AdmissionBaseModel):
    """Container image reference."""

    repository: str = ""
    tag: str = ""
    pull_policy: str = "IfNotPresent"


class SecurityContext(AdmissionBaseModel):
    """Pod security settings shared by every node in the cluster."""

    run_as_user: int | None = None


class PersistenceConfig(AdmissionBaseModel):
    """Persistent volume settings for a node pool."""

    enabled: bool = True
    size: Quantity | None = Field(default=None, description="Volume size, e.g. '10Gi'")
    storage_class: str | None = None


class ResourceRequirements(AdmissionBaseModel):
    """Compute resources for each node in a pool. Not validated here."""

    limits: dict[str, Quantity] = Field(default_factory=dict)
    requests: dict[str, Quantity] = Field(default_factory=dict)


class NodePool(AdmissionBaseModel):
    """A named, homogeneous group of cluster members.

    Roles are kept as plain strings so that unsupported values survive
    decoding and are reported by the validator instead.
    """

    name: str = ""
    replicas: int | None = None
    roles: list[str] = Field(default_factory=list)
    resources: ResourceRequirements | None = None
    node_selector: dict[str, str] = Field(default_factory=dict)
    persistence: PersistenceConfig | None = None
    config: dict[str, str] = Field(default_factory=dict)

    def has_role(self, role: NodePoolRole) -> bool:
        return role.value in self.roles


class ClusterConfig(AdmissionBaseModel):
    """Cluster-wide configuration shared by every node pool."""

    pilot_image: ImageSpec | None = None
    security_context: SecurityContext | None = None


class ClusterSpec(ClusterConfig):
    """Desired state of a cluster."""

    node_pools: list[NodePool] = Field(default_factory=list)
    minimum_masters: int | None = Field(
        default=None,
        description="Masters that must be available to elect a leader; computed when unset",
    )
    version: SemanticVersion = Field(default_factory=SemanticVersion)
    image: ImageSpec | None = None


class ObjectMeta(AdmissionBaseModel):
    """Object metadata as supplied by the orchestrator."""

    name: str = ""
    generate_name: str = ""
    namespace: str = ""
    uid: str | None = None
    resource_version: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class Cluster(AdmissionBaseModel):
    """Top-level cluster object submitted for admission."""

    api_version: str = "navigator.jetstack.io/v1alpha1"
    kind: str = "Cluster"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: ClusterSpec = Field(default_factory=ClusterSpec)
