"""Cluster specification and update validation.

Validators never raise for a bad specification: every problem found is
appended to the returned error list so a rejection can report all of them
at once.

Create requests go through :meth:`ClusterValidator.validate_cluster`.
Update requests go through :meth:`ClusterValidator.validate_cluster_update`,
which re-validates the new object in full and then checks that existing
node pools only changed in the fields that may change.
"""

from collections.abc import Iterable

from cluster_admission.models import SUPPORTED_ROLES, Cluster, ClusterSpec, NodePool, NodePoolRole
from cluster_admission.observability import get_logger

from .field import (
    ErrorList,
    FieldPath,
    duplicate,
    forbidden,
    invalid,
    not_supported,
    required,
)
from .generic import DEFAULT_VALIDATORS, ExternalValidators
from .quorum import calculate_quorum

logger = get_logger(__name__)

# Every NodePool field must appear in exactly one of these.
NODE_POOL_MUTABLE_FIELDS: frozenset[str] = frozenset({"replicas", "persistence"})
NODE_POOL_IMMUTABLE_FIELDS: tuple[str, ...] = (
    "name",
    "roles",
    "resources",
    "node_selector",
    "config",
)


def count_masters(pools: Iterable[NodePool]) -> int:
    """Total replicas across pools carrying the master role.

    A master pool without a replica count contributes nothing.
    """
    return sum(
        pool.replicas or 0 for pool in pools if pool.has_role(NodePoolRole.MASTER)
    )


def changed_node_pool_fields(old: NodePool, new: NodePool) -> list[str]:
    """Names of immutable fields that differ between two versions of a pool."""
    return [
        name for name in NODE_POOL_IMMUTABLE_FIELDS if getattr(old, name) != getattr(new, name)
    ]


class ClusterValidator:
    """Validates cluster objects for create and update admission.

    Holds no state besides the collaborator checks, so one instance can be
    shared between concurrent requests.
    """

    def __init__(self, validators: ExternalValidators | None = None):
        self.validators = validators or DEFAULT_VALIDATORS

    def validate_role(self, role: str, path: FieldPath) -> ErrorList:
        """Check a single role is one of the supported node pool roles."""
        try:
            NodePoolRole(role)
        except ValueError:
            return [not_supported(path, role, SUPPORTED_ROLES)]
        return []

    def validate_node_pool(self, pool: NodePool, path: FieldPath) -> ErrorList:
        """Check a node pool's name, persistence, roles and replica count."""
        errors = list(self.validators.name_format(pool.name, path.child("name")))
        if pool.persistence is not None:
            errors.extend(self.validators.persistence(pool.persistence, path.child("persistence")))

        roles_path = path.child("roles")
        if not pool.roles:
            errors.append(required(roles_path, "at least one role must be specified"))
        for i, role in enumerate(pool.roles):
            errors.extend(self.validate_role(role, roles_path.index(i)))

        # Zero replicas is allowed; only negative counts are rejected.
        if pool.replicas is not None and pool.replicas < 0:
            errors.append(invalid(path.child("replicas"), pool.replicas, "must be greater than zero"))
        return errors

    def validate_spec(self, spec: ClusterSpec, path: FieldPath) -> ErrorList:
        """Validate a cluster specification.

        Args:
            spec: Specification to check
            path: Path the specification lives at, conventionally ``spec``

        Returns:
            Every error found, in field order
        """
        errors = list(self.validators.validate_cluster_config(spec, path))
        if spec.image is not None:
            errors.extend(self.validators.image(spec.image, path.child("image")))

        pools_path = path.child("nodePools")
        seen_names: set[str] = set()
        for i, pool in enumerate(spec.node_pools):
            pool_path = pools_path.index(i)
            if pool.name in seen_names:
                errors.append(duplicate(pool_path.child("name"), pool.name))
            else:
                seen_names.add(pool.name)
            errors.extend(self.validate_node_pool(pool, pool_path))

        num_masters = count_masters(spec.node_pools)
        errors.extend(self._validate_minimum_masters(spec.minimum_masters, num_masters, path))

        if spec.version.is_zero():
            errors.append(required(path.child("version"), "must be a semver version"))
        return errors

    def _validate_minimum_masters(
        self,
        minimum_masters: int | None,
        num_masters: int,
        path: FieldPath,
    ) -> ErrorList:
        quorum = calculate_quorum(num_masters)
        minimum_path = path.child("minimumMasters")

        if num_masters == 0:
            return [invalid(path.child("nodePools"), num_masters, "must be at least one master node")]
        if minimum_masters is None:
            # Left to the controller, which derives it from the master count
            return []
        if minimum_masters == 0:
            return [invalid(minimum_path, minimum_masters, "cannot be zero")]
        if minimum_masters < quorum:
            return [
                invalid(
                    minimum_path,
                    minimum_masters,
                    f"must be a minimum of {quorum} to avoid a split brain scenario",
                )
            ]
        if minimum_masters > num_masters:
            return [
                invalid(
                    minimum_path,
                    minimum_masters,
                    "cannot be greater than the total number of master nodes",
                )
            ]
        return []

    def validate_cluster(self, cluster: Cluster) -> ErrorList:
        """Validate a cluster object for creation."""
        errors = list(self.validators.object_meta(cluster.metadata, FieldPath("metadata")))
        errors.extend(self.validate_spec(cluster.spec, FieldPath("spec")))
        return errors

    def validate_node_pool_update(
        self,
        old: NodePool,
        new: NodePool,
        path: FieldPath,
    ) -> ErrorList:
        """Check an existing node pool only changed where changes are allowed.

        Replicas may change freely. Persistence may be added to a pool that
        had none, but never changed or removed once set. Anything else is
        forbidden.
        """
        errors: ErrorList = []
        if new.persistence != old.persistence and old.persistence is not None:
            errors.append(
                forbidden(
                    path.child("persistence"),
                    "cannot modify persistence configuration once enabled",
                )
            )

        changed = changed_node_pool_fields(old, new)
        if changed:
            logger.debug(
                "Node pool update touches immutable fields",
                node_pool=new.name,
                fields=changed,
            )
            errors.append(
                forbidden(
                    FieldPath("spec"),
                    "updates to nodepool for fields other than 'replicas' and "
                    "'persistence' are forbidden.",
                )
            )
        return errors

    def validate_cluster_update(self, old: Cluster, new: Cluster) -> ErrorList:
        """Validate a cluster object replacing ``old``.

        Neither object is modified.
        """
        errors = self.validate_cluster(new)

        pools_path = FieldPath("spec", "nodePools")
        for i, new_pool in enumerate(new.spec.node_pools):
            old_pool = next(
                (pool for pool in old.spec.node_pools if pool.name == new_pool.name),
                None,
            )
            if old_pool is None:
                # Newly added pool
                continue
            errors.extend(self.validate_node_pool_update(old_pool, new_pool, pools_path.index(i)))
        return errors


_default_validator = ClusterValidator()


def validate_cluster(cluster: Cluster) -> ErrorList:
    """Validate a cluster for creation using the default collaborator checks."""
    return _default_validator.validate_cluster(cluster)


def validate_cluster_update(old: Cluster, new: Cluster) -> ErrorList:
    """Validate a cluster update using the default collaborator checks."""
    return _default_validator.validate_cluster_update(old, new)
