"""Shared fixtures for kubectl-unmount tests.

Provides FakeCluster, an in-memory ClusterAccessor that models Pods, owner
objects and claims, so every component can be exercised without touching a
real Kubernetes cluster.
"""

from __future__ import annotations

import io
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from typing import Any

import pytest

from kubeunmount.app import run_plugin
from kubeunmount.errors import APIError, NotFoundError, UnmountError, UnsupportedKindError
from kubeunmount.k8s.accessor import ClusterAccessor
from kubeunmount.models.config import UnmountConfig
from kubeunmount.models.resources import ClaimSnapshot, ObjectSnapshot, OwnerReference, PodSnapshot
from kubeunmount.models.targets import RunResult

_READABLE_KINDS = {
    "Deployment",
    "ReplicaSet",
    "StatefulSet",
    "ReplicationController",
    "DaemonSet",
    "Job",
    "CronJob",
}

# ---------------------------------------------------------------------------
# In-memory cluster
# ---------------------------------------------------------------------------


def owned_by(kind: str, name: str, controller: bool = True) -> OwnerReference:
    return OwnerReference(kind=kind, name=name, api_version="apps/v1", uid=f"uid-{name}", controller=controller)


class FakeCluster(ClusterAccessor):
    """ClusterAccessor backed by dicts.

    Scaling a controller to zero removes every Pod whose owner chain reaches
    it, the way the real controllers eventually do. Every mutation is
    appended to ``mutations``; ``fail_get`` / ``fail_patch`` / ``fail_delete``
    map a (kind, namespace, name) key to an exception to raise instead, and
    ``fail_list`` is raised by every ``list_pods`` call after the first
    ``fail_list_after`` ones.
    """

    def __init__(self) -> None:
        self.pods: dict[tuple[str, str], PodSnapshot] = {}
        self.objects: dict[tuple[str, str, str], ObjectSnapshot] = {}
        self.claims: list[ClaimSnapshot] = []
        self.mutations: list[tuple[str, str, str, str]] = []
        self.get_calls: list[tuple[str, str, str]] = []
        self.list_calls = 0
        self.fail_get: dict[tuple[str, str, str], Exception] = {}
        self.fail_patch: dict[tuple[str, str, str], Exception] = {}
        self.fail_delete: dict[tuple[str, str, str], Exception] = {}
        self.fail_list: Exception | None = None
        self.fail_list_after = 0
        self.keep_pods_on_scale = False

    # --- builders -----------------------------------------------------

    def add_pod(
        self,
        namespace: str,
        name: str,
        claims: tuple[str, ...] = ("test-pvc",),
        owners: tuple[OwnerReference, ...] = (),
    ) -> PodSnapshot:
        pod = PodSnapshot(
            namespace=namespace,
            name=name,
            claim_names=claims,
            owner_references=owners,
            phase="Running",
        )
        self.pods[(namespace, name)] = pod
        return pod

    def add_object(
        self,
        kind: str,
        namespace: str,
        name: str,
        replicas: int | None = 1,
        owners: tuple[OwnerReference, ...] = (),
    ) -> ObjectSnapshot:
        obj = ObjectSnapshot(kind=kind, namespace=namespace, name=name, owner_references=owners, replicas=replicas)
        self.objects[(kind, namespace, name)] = obj
        return obj

    def add_claim(self, namespace: str, name: str, storage_class: str = "standard") -> ClaimSnapshot:
        claim = ClaimSnapshot(namespace=namespace, name=name, storage_class=storage_class)
        self.claims.append(claim)
        return claim

    def add_deployment(
        self,
        namespace: str,
        name: str,
        replicas: int = 1,
        claims: tuple[str, ...] = ("test-pvc",),
    ) -> list[PodSnapshot]:
        """Create Deployment -> ReplicaSet -> Pods, like the controller manager would."""
        rs_name = f"{name}-7c9d8b5f4"
        self.add_object("Deployment", namespace, name, replicas=replicas)
        self.add_object("ReplicaSet", namespace, rs_name, replicas=replicas, owners=(owned_by("Deployment", name),))
        return [
            self.add_pod(namespace, f"{rs_name}-{i:05x}", claims=claims, owners=(owned_by("ReplicaSet", rs_name),))
            for i in range(replicas)
        ]

    def add_statefulset(self, namespace: str, name: str, replicas: int = 1) -> list[PodSnapshot]:
        self.add_object("StatefulSet", namespace, name, replicas=replicas)
        return [
            self.add_pod(
                namespace,
                f"{name}-{i}",
                claims=(f"data-{name}-{i}",),
                owners=(owned_by("StatefulSet", name),),
            )
            for i in range(replicas)
        ]

    def add_daemonset(self, namespace: str, name: str, claims: tuple[str, ...] = ("test-pvc",)) -> PodSnapshot:
        self.add_object("DaemonSet", namespace, name, replicas=None)
        return self.add_pod(namespace, f"{name}-x7k2p", claims=claims, owners=(owned_by("DaemonSet", name),))

    def replicas_of(self, kind: str, namespace: str, name: str) -> int | None:
        return self.objects[(kind, namespace, name)].replicas

    # --- ClusterAccessor ----------------------------------------------

    async def list_pods(self, namespace: str | None) -> list[PodSnapshot]:
        self.list_calls += 1
        if self.fail_list is not None and self.list_calls > self.fail_list_after:
            raise self.fail_list
        # Insertion order is deliberately not sorted.
        return [pod for (ns, _), pod in reversed(list(self.pods.items())) if namespace is None or ns == namespace]

    async def list_claims(self, namespace: str | None) -> list[ClaimSnapshot]:
        return [c for c in self.claims if namespace is None or c.namespace == namespace]

    async def get_object(self, kind: str, namespace: str, name: str) -> ObjectSnapshot:
        key = (kind, namespace, name)
        self.get_calls.append(key)
        if key in self.fail_get:
            raise self.fail_get[key]
        if kind not in _READABLE_KINDS:
            raise UnsupportedKindError(kind)
        if key not in self.objects:
            raise NotFoundError(kind, namespace, name)
        return self.objects[key]

    async def patch_replicas(self, kind: str, namespace: str, name: str, count: int) -> None:
        key = (kind, namespace, name)
        if key in self.fail_patch:
            raise self.fail_patch[key]
        if key not in self.objects:
            raise NotFoundError(kind, namespace, name)
        self.mutations.append(("scale", kind, namespace, name))
        self.objects[key] = replace(self.objects[key], replicas=count)
        if count == 0 and not self.keep_pods_on_scale:
            for pod_key in [k for k, pod in self.pods.items() if key in self._chain_of(pod)]:
                del self.pods[pod_key]

    async def delete_pod(self, namespace: str, name: str) -> None:
        key = ("Pod", namespace, name)
        if key in self.fail_delete:
            raise self.fail_delete[key]
        if (namespace, name) not in self.pods:
            raise NotFoundError("Pod", namespace, name)
        self.mutations.append(("delete", "Pod", namespace, name))
        del self.pods[(namespace, name)]

    def _chain_of(self, pod: PodSnapshot) -> set[tuple[str, str, str]]:
        chain: set[tuple[str, str, str]] = set()
        refs = pod.owner_references
        while True:
            owner = next((r for r in refs if r.controller), None)
            if owner is None:
                return chain
            key = (owner.kind, pod.namespace, owner.name)
            if key in chain or key not in self.objects:
                chain.add(key)
                return chain
            chain.add(key)
            refs = self.objects[key].owner_references


@pytest.fixture
def cluster() -> FakeCluster:
    return FakeCluster()


# ---------------------------------------------------------------------------
# Plugin runner
# ---------------------------------------------------------------------------


@dataclass
class PluginRun:
    """Captured result of one run_plugin invocation."""

    out: list[str]
    logs: str
    result: RunResult | None = None
    error: UnmountError | None = None
    confirm_calls: list[list[Any]] = field(default_factory=list)


RunFn = Callable[..., Awaitable[PluginRun]]


@pytest.fixture
def run(cluster: FakeCluster) -> RunFn:
    """Return an async helper running the plugin against ``cluster``.

    Defaults mirror a confirmed real run with no waiting; keyword arguments
    override UnmountConfig fields. Errors are captured, not raised.
    """

    async def _run(confirm: Callable[[list[Any]], bool] | None = None, **overrides: Any) -> PluginRun:
        settings: dict[str, Any] = {
            "dry_run": False,
            "confirmed": True,
            "wait": False,
            "poll_interval_seconds": 0.0,
        }
        settings.update(overrides)
        config = UnmountConfig(**settings)
        out, log_stream = io.StringIO(), io.StringIO()
        captured = PluginRun(out=[], logs="")

        recorder = None
        if confirm is not None:

            def recorder(targets: list[Any]) -> bool:
                captured.confirm_calls.append(list(targets))
                return confirm(targets)

        try:
            captured.result = await run_plugin(config, out, log_stream, accessor=cluster, confirm=recorder)
        except UnmountError as exc:
            captured.error = exc
        captured.out = [line.strip() for line in out.getvalue().splitlines()]
        captured.logs = log_stream.getvalue()
        return captured

    return _run


def api_error(status: int = 500, reason: str = "Internal Server Error") -> APIError:
    return APIError(f"{status} {reason}", status=status, reason=reason)


@pytest.fixture
def make_api_error() -> Callable[..., APIError]:
    return api_error
