"""Tests for target identity and RunResult views."""

from __future__ import annotations

from kubeunmount.models.config import UnmountConfig
from kubeunmount.models.resources import PodSnapshot, ResourceRef
from kubeunmount.models.targets import (
    ControllerTarget,
    OutcomeStatus,
    PodTarget,
    RunResult,
    TargetOutcome,
)


class TestTargetIdentity:
    def test_pod_target_identifier(self) -> None:
        target = PodTarget(namespace="ns1", name="test-pod")
        assert target.kind == "Pod"
        assert target.identifier == "Pod/ns1/test-pod"
        assert target.key == ("Pod", "ns1", "test-pod")

    def test_controller_target_identifier(self) -> None:
        target = ControllerTarget(kind="Deployment", namespace="ns1", name="test-deployment", current_replicas=1)
        assert target.identifier == "Deployment/ns1/test-deployment"
        assert target.ref == ResourceRef("Deployment", "ns1", "test-deployment")

    def test_targets_are_hashable_snapshots(self) -> None:
        a = ControllerTarget(kind="StatefulSet", namespace="db", name="pg", current_replicas=3)
        b = ControllerTarget(kind="StatefulSet", namespace="db", name="pg", current_replicas=3)
        assert {a, b} == {a}

    def test_pod_snapshot_ref(self) -> None:
        pod = PodSnapshot(namespace="default", name="web-0")
        assert str(pod.ref) == "Pod/default/web-0"


class TestRunResult:
    def test_empty_result_is_not_all_failed(self) -> None:
        assert RunResult().all_failed is False

    def test_partial_failure(self) -> None:
        pod = PodTarget("ns", "a")
        deploy = ControllerTarget("Deployment", "ns", "b")
        result = RunResult(
            outcomes=[
                TargetOutcome(pod, OutcomeStatus.DELETED),
                TargetOutcome(deploy, OutcomeStatus.FAILED, "boom"),
            ],
            dry_run=False,
        )
        assert result.targets == [pod, deploy]
        assert [o.target for o in result.succeeded] == [pod]
        assert [o.target for o in result.failed] == [deploy]
        assert result.all_failed is False

    def test_all_failed(self) -> None:
        result = RunResult(outcomes=[TargetOutcome(PodTarget("ns", "a"), OutcomeStatus.FAILED, "gone")])
        assert result.all_failed is True


class TestConfigScope:
    def test_explicit_namespace(self) -> None:
        assert UnmountConfig(namespace="ns1").scope == "ns1"

    def test_default_namespace_when_unset(self) -> None:
        assert UnmountConfig().scope == "default"

    def test_all_namespaces_wins(self) -> None:
        assert UnmountConfig(namespace="ns1", all_namespaces=True).scope is None

    def test_safe_defaults(self) -> None:
        config = UnmountConfig()
        assert config.dry_run is True
        assert config.confirmed is False
        assert config.max_owner_depth == 10
