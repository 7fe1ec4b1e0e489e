"""Cluster specification validation.

Exports:
- FieldPath, FieldError, ErrorType: structured validation errors
- calculate_quorum: master quorum for split brain protection
- ClusterValidator: node pool, specification and update validation
- ExternalValidators: pluggable name/metadata/image/persistence checks
"""

from .cluster import (
    NODE_POOL_IMMUTABLE_FIELDS,
    NODE_POOL_MUTABLE_FIELDS,
    ClusterValidator,
    changed_node_pool_fields,
    count_masters,
    validate_cluster,
    validate_cluster_update,
)
from .field import (
    ErrorList,
    ErrorType,
    FieldError,
    FieldPath,
    aggregate_message,
    duplicate,
    forbidden,
    invalid,
    not_supported,
    required,
)
from .generic import (
    DEFAULT_VALIDATORS,
    ExternalValidators,
    validate_cluster_config,
    validate_dns1123_label,
    validate_dns1123_subdomain,
    validate_image_spec,
    validate_object_meta,
    validate_persistence_config,
)
from .quorum import calculate_quorum

__all__ = [
    # Errors
    "ErrorList",
    "ErrorType",
    "FieldError",
    "FieldPath",
    "aggregate_message",
    "duplicate",
    "forbidden",
    "invalid",
    "not_supported",
    "required",
    # Quorum
    "calculate_quorum",
    # Cluster
    "NODE_POOL_IMMUTABLE_FIELDS",
    "NODE_POOL_MUTABLE_FIELDS",
    "ClusterValidator",
    "changed_node_pool_fields",
    "count_masters",
    "validate_cluster",
    "validate_cluster_update",
    # Collaborators
    "DEFAULT_VALIDATORS",
    "ExternalValidators",
    "validate_cluster_config",
    "validate_dns1123_label",
    "validate_dns1123_subdomain",
    "validate_image_spec",
    "validate_object_meta",
    "validate_persistence_config",
]
