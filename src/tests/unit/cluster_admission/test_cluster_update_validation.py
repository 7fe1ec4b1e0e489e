"""Unit tests for cluster update validation."""

import pytest

from cluster_admission.models import (
    Cluster,
    NodePool,
    PersistenceConfig,
    ResourceRequirements,
)
from cluster_admission.validation import (
    NODE_POOL_IMMUTABLE_FIELDS,
    NODE_POOL_MUTABLE_FIELDS,
    ClusterValidator,
    ErrorType,
    FieldPath,
    changed_node_pool_fields,
    validate_cluster_update,
)

GENERIC_FORBIDDEN = (
    "updates to nodepool for fields other than 'replicas' and 'persistence' are forbidden."
)


@pytest.fixture
def validator() -> ClusterValidator:
    return ClusterValidator()


def with_pools(cluster: Cluster, *pools: NodePool) -> Cluster:
    spec = cluster.spec.model_copy(update={"node_pools": list(pools)})
    return cluster.model_copy(update={"spec": spec})


class TestNodePoolFieldClassification:
    """Every node pool field is either mutable or immutable."""

    def test_fields_are_partitioned(self) -> None:
        immutable = set(NODE_POOL_IMMUTABLE_FIELDS)
        assert immutable.isdisjoint(NODE_POOL_MUTABLE_FIELDS)
        assert immutable | NODE_POOL_MUTABLE_FIELDS == set(NodePool.model_fields)

    def test_changed_fields(self) -> None:
        old = NodePool(name="es-data", replicas=1, roles=["data"])
        new = old.model_copy(
            update={"replicas": 5, "roles": ["data", "ingest"], "node_selector": {"disk": "ssd"}}
        )
        assert changed_node_pool_fields(old, new) == ["roles", "node_selector"]


class TestPersistenceUpdates:
    """Persistence can be enabled once and never changed afterwards."""

    def test_removing_persistence_forbidden(self, valid_cluster: Cluster, master_pool, data_pool) -> None:
        new = with_pools(valid_cluster, master_pool, data_pool.model_copy(update={"persistence": None}))

        errors = validate_cluster_update(valid_cluster, new)

        assert len(errors) == 1
        assert errors[0].type == ErrorType.FORBIDDEN
        assert errors[0].field == "spec.nodePools[1].persistence"
        assert errors[0].detail == "cannot modify persistence configuration once enabled"

    def test_changing_persistence_forbidden(self, valid_cluster: Cluster, master_pool, data_pool) -> None:
        resized = data_pool.model_copy(update={"persistence": PersistenceConfig(size="20Gi")})
        new = with_pools(valid_cluster, master_pool, resized)

        errors = validate_cluster_update(valid_cluster, new)

        assert [e.field for e in errors] == ["spec.nodePools[1].persistence"]

    def test_adding_persistence_allowed(self, cluster_factory, master_pool, data_pool) -> None:
        ephemeral = data_pool.model_copy(update={"persistence": None})
        old = cluster_factory(master_pool, ephemeral)
        new = cluster_factory(master_pool, data_pool)

        assert validate_cluster_update(old, new) == []

    def test_equal_persistence_allowed(self, valid_cluster: Cluster, master_pool, data_pool) -> None:
        same = data_pool.model_copy(update={"persistence": PersistenceConfig(size="10Gi")})
        new = with_pools(valid_cluster, master_pool, same)

        assert validate_cluster_update(valid_cluster, new) == []

    def test_error_path_uses_new_position(self, valid_cluster: Cluster, master_pool, data_pool) -> None:
        new = with_pools(valid_cluster, data_pool.model_copy(update={"persistence": None}), master_pool)

        errors = validate_cluster_update(valid_cluster, new)

        assert [e.field for e in errors] == ["spec.nodePools[0].persistence"]


class TestNodePoolUpdates:
    """Only replicas and persistence may change on an existing pool."""

    def test_scaling_allowed(self, cluster_factory) -> None:
        old = cluster_factory(NodePool(name="es-master", replicas=3, roles=["master"]))
        new = cluster_factory(NodePool(name="es-master", replicas=5, roles=["master"]))

        assert validate_cluster_update(old, new) == []

    def test_changing_roles_forbidden(self, cluster_factory) -> None:
        old = cluster_factory(NodePool(name="es-master", replicas=3, roles=["master"]))
        new = cluster_factory(NodePool(name="es-master", replicas=3, roles=["master", "data"]))

        errors = validate_cluster_update(old, new)

        assert len(errors) == 1
        assert errors[0].type == ErrorType.FORBIDDEN
        assert errors[0].field == "spec"
        assert errors[0].detail == GENERIC_FORBIDDEN

    def test_reordering_roles_forbidden(self, cluster_factory) -> None:
        old = cluster_factory(NodePool(name="es-master", replicas=3, roles=["master", "data"]))
        new = cluster_factory(NodePool(name="es-master", replicas=3, roles=["data", "master"]))

        assert [e.field for e in validate_cluster_update(old, new)] == ["spec"]

    @pytest.mark.parametrize(
        "update",
        [
            {"resources": ResourceRequirements(limits={"memory": "4Gi"})},
            {"node_selector": {"disk": "ssd"}},
            {"config": {"elasticsearch.yml": "cluster.routing.allocation.awareness.attributes: zone"}},
        ],
    )
    def test_changing_other_fields_forbidden(self, valid_cluster: Cluster, master_pool, data_pool, update) -> None:
        new = with_pools(valid_cluster, master_pool, data_pool.model_copy(update=update))

        errors = validate_cluster_update(valid_cluster, new)

        assert [(e.field, e.detail) for e in errors] == [("spec", GENERIC_FORBIDDEN)]

    def test_persistence_and_other_field_both_reported(
        self, valid_cluster: Cluster, master_pool, data_pool
    ) -> None:
        changed = data_pool.model_copy(update={"persistence": None, "roles": ["data"]})
        new = with_pools(valid_cluster, master_pool, changed)

        errors = validate_cluster_update(valid_cluster, new)

        assert [e.field for e in errors] == ["spec.nodePools[1].persistence", "spec"]

    def test_generic_error_per_changed_pool(self, cluster_factory) -> None:
        old = cluster_factory(
            NodePool(name="es-master", replicas=3, roles=["master"]),
            NodePool(name="es-data", replicas=3, roles=["data"]),
        )
        new = cluster_factory(
            NodePool(name="es-master", replicas=3, roles=["master", "ingest"]),
            NodePool(name="es-data", replicas=3, roles=["data", "ingest"]),
        )

        errors = validate_cluster_update(old, new)

        assert [e.field for e in errors] == ["spec", "spec"]

    def test_new_pool_unconstrained(self, valid_cluster: Cluster, master_pool, data_pool) -> None:
        ingest = NodePool(name="es-ingest", replicas=2, roles=["ingest"])
        new = with_pools(valid_cluster, master_pool, data_pool, ingest)

        assert validate_cluster_update(valid_cluster, new) == []

    def test_renamed_pool_treated_as_new(self, valid_cluster: Cluster, master_pool, data_pool) -> None:
        renamed = data_pool.model_copy(update={"name": "es-data-v2", "persistence": None})
        new = with_pools(valid_cluster, master_pool, renamed)

        assert validate_cluster_update(valid_cluster, new) == []

    def test_removed_pool_not_checked(self, valid_cluster: Cluster, master_pool) -> None:
        new = with_pools(valid_cluster, master_pool)

        assert validate_cluster_update(valid_cluster, new) == []

    def test_first_matching_old_pool_used(self, cluster_factory, master_pool) -> None:
        old = cluster_factory(
            master_pool,
            NodePool(name="es-data", replicas=1, roles=["data"]),
            NodePool(name="es-data", replicas=1, roles=["ingest"]),
        )
        new = cluster_factory(master_pool, NodePool(name="es-data", replicas=2, roles=["data"]))

        assert validate_cluster_update(old, new) == []


class TestUpdateRevalidation:
    """The new object must be valid on its own."""

    def test_new_object_revalidated(self, valid_cluster: Cluster) -> None:
        spec = valid_cluster.spec.model_copy(update={"minimum_masters": 1})
        new = valid_cluster.model_copy(update={"spec": spec})

        errors = validate_cluster_update(valid_cluster, new)

        assert [e.field for e in errors] == ["spec.minimumMasters"]

    def test_revalidation_and_immutability_errors_combined(self, cluster_factory) -> None:
        old = cluster_factory(NodePool(name="es-master", replicas=3, roles=["master"]))
        new = cluster_factory(
            NodePool(name="es-master", replicas=3, roles=["master", "client"]),
            version="",
        )

        errors = validate_cluster_update(old, new)

        assert [e.field for e in errors] == [
            "spec.nodePools[0].roles[1]",
            "spec.version",
            "spec",
        ]

    def test_inputs_not_modified(self, valid_cluster: Cluster, master_pool, data_pool) -> None:
        new = with_pools(
            valid_cluster,
            master_pool.model_copy(update={"replicas": 5}),
            data_pool.model_copy(update={"persistence": None, "roles": ["data"]}),
        )
        old_before = valid_cluster.model_dump()
        new_before = new.model_dump()

        validate_cluster_update(valid_cluster, new)

        assert valid_cluster.model_dump() == old_before
        assert new.model_dump() == new_before
        assert new.spec.node_pools[0].replicas == 5
        assert new.spec.node_pools[1].persistence is None

    def test_node_pool_update_direct(self, validator: ClusterValidator) -> None:
        old = NodePool(name="es-data", replicas=1, roles=["data"], persistence=PersistenceConfig())
        new = old.model_copy(update={"replicas": 9})

        assert validator.validate_node_pool_update(old, new, FieldPath("spec", "nodePools").index(0)) == []
