"""Scale-Down Executor.

Processes targets one at a time, in order. A failing target is recorded as
FAILED and the next one is still attempted, whatever the exception; the call
raises only when every target failed.

    PodTarget        -> delete the Pod
    ControllerTarget -> patch replicas to 0 (non-scalable kinds fail with a warning)
"""

from __future__ import annotations

from kubeunmount.errors import ExecutionFailedError, UnmountError
from kubeunmount.k8s.accessor import ClusterAccessor
from kubeunmount.models.targets import (
    ControllerTarget,
    OutcomeStatus,
    PodTarget,
    RunResult,
    Target,
    TargetOutcome,
)
from kubeunmount.observability.reporter import Reporter


class ScaleDownExecutor:
    def __init__(self, accessor: ClusterAccessor, reporter: Reporter) -> None:
        self._accessor = accessor
        self._reporter = reporter

    async def execute(self, targets: list[Target], dry_run: bool) -> RunResult:
        """Report (dry run) or mutate every target.

        The caller is responsible for passing the confirmation gate before a
        real run. Raises ExecutionFailedError if all targets failed.
        """
        result = RunResult(dry_run=dry_run)
        for target in targets:
            try:
                outcome = await self._execute_one(target, dry_run)
            except Exception as exc:  # noqa: BLE001
                self._reporter.log.error(
                    "unexpected error while scaling down",
                    target=target.identifier,
                    error=f"{type(exc).__name__}: {exc}",
                )
                outcome = TargetOutcome(target, OutcomeStatus.FAILED, f"{type(exc).__name__}: {exc}")
            result.outcomes.append(outcome)
            self._reporter.outcome(outcome)

        if result.all_failed:
            raise ExecutionFailedError(result)
        return result

    async def _execute_one(self, target: Target, dry_run: bool) -> TargetOutcome:
        if dry_run:
            return TargetOutcome(target, OutcomeStatus.REPORTED)

        if isinstance(target, PodTarget):
            try:
                await self._accessor.delete_pod(target.namespace, target.name)
            except UnmountError as exc:
                return TargetOutcome(target, OutcomeStatus.FAILED, str(exc))
            return TargetOutcome(target, OutcomeStatus.DELETED)

        return await self._scale_to_zero(target)

    async def _scale_to_zero(self, target: ControllerTarget) -> TargetOutcome:
        if not target.scalable:
            reason = f"{target.kind} cannot be scaled to zero replicas"
            self._reporter.log.warning("skipping controller", target=target.identifier, reason=reason)
            return TargetOutcome(target, OutcomeStatus.FAILED, reason)

        try:
            await self._accessor.patch_replicas(target.kind, target.namespace, target.name, 0)
        except UnmountError as exc:
            return TargetOutcome(target, OutcomeStatus.FAILED, str(exc))
        return TargetOutcome(target, OutcomeStatus.SCALED_DOWN)
