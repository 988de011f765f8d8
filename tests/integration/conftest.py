"""Shared fixtures for kubectl-unmount integration tests.

Populates the in-memory cluster with realistic workloads so the full
resolve -> gate -> execute -> report pipeline can run end to end.
"""

from __future__ import annotations

import pytest

from tests.conftest import FakeCluster, owned_by

PVC = "test-pvc"


# ---------------------------------------------------------------------------
# Scenario fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def two_namespaces(cluster: FakeCluster) -> FakeCluster:
    """A bare Pod in ns1 and a one-replica Deployment in ns2, both mounting test-pvc."""
    cluster.add_claim("ns1", PVC)
    cluster.add_claim("ns2", PVC)
    cluster.add_pod("ns1", "test-pod", claims=(PVC,))
    cluster.add_deployment("ns2", "test-deployment", replicas=1, claims=(PVC,))
    return cluster


@pytest.fixture()
def mixed_workloads(cluster: FakeCluster) -> FakeCluster:
    """Several kinds sharing one namespace, plus unrelated Pods that must be left alone."""
    cluster.add_claim("apps", PVC, storage_class="standard")
    cluster.add_claim("apps", "fast-cache", storage_class="ssd")
    cluster.add_deployment("apps", "web", replicas=3, claims=(PVC,))
    cluster.add_statefulset("apps", "pg", replicas=2)
    cluster.add_daemonset("apps", "log-shipper", claims=(PVC,))
    cluster.add_object("ReplicationController", "apps", "legacy", replicas=2)
    cluster.add_pod("apps", "legacy-q8w2z", claims=("fast-cache",), owners=(owned_by("ReplicationController", "legacy"),))
    cluster.add_pod("apps", "unrelated", claims=("other-pvc",))
    cluster.add_pod("apps", "no-volumes", claims=())
    return cluster
