"""Data models for cluster admission.

All models follow these conventions:
- Field names: lowercase snake_case, serialised as camelCase
- Enums: uppercase SNAKE_CASE members
"""

# Admission envelope
from .admission import (
    AdmissionRequest,
    AdmissionResponse,
    AdmissionReview,
    AdmissionStatus,
    GroupVersionKind,
    Operation,
    StatusCause,
    StatusDetails,
)

# Base
from .base import AdmissionBaseModel

# Cluster domain
from .cluster import (
    SUPPORTED_ROLES,
    Cluster,
    ClusterConfig,
    ClusterSpec,
    ImageSpec,
    NodePool,
    NodePoolRole,
    ObjectMeta,
    PersistenceConfig,
    ResourceRequirements,
    SecurityContext,
)
from .version import SemanticVersion

__all__ = [
    # Base
    "AdmissionBaseModel",
    # Cluster
    "SUPPORTED_ROLES",
    "Cluster",
    "ClusterConfig",
    "ClusterSpec",
    "ImageSpec",
    "NodePool",
    "NodePoolRole",
    "ObjectMeta",
    "PersistenceConfig",
    "ResourceRequirements",
    "SecurityContext",
    "SemanticVersion",
    # Admission
    "AdmissionRequest",
    "AdmissionResponse",
    "AdmissionReview",
    "AdmissionStatus",
    "GroupVersionKind",
    "Operation",
    "StatusCause",
    "StatusDetails",
]
