"""Run orchestration for kubectl-unmount.

Wires the components of one invocation in dependency order:
accessor → resolver → walker → target set builder → confirmation gate
         → executor → (termination wait) → reporter

Nothing is cached between runs: every invocation lists Pods and walks owner
chains afresh, and the configuration, accessor and output streams are passed
in explicitly.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TextIO

from kubeunmount.errors import ExecutionFailedError
from kubeunmount.executor.gate import check_confirmation, should_mutate
from kubeunmount.executor.scale_down import ScaleDownExecutor
from kubeunmount.executor.wait import wait_for_termination
from kubeunmount.graph.walker import OwnerChainWalker
from kubeunmount.k8s.accessor import ClusterAccessor, KubernetesAccessor, connect
from kubeunmount.models.config import UnmountConfig
from kubeunmount.models.resources import PodSnapshot
from kubeunmount.models.targets import RunResult, Target
from kubeunmount.observability.logging import build_logger
from kubeunmount.observability.reporter import Reporter
from kubeunmount.planner.builder import TargetSetBuilder
from kubeunmount.resolver.pvc_pods import PodResolver

ConfirmFn = Callable[[list[Target]], bool]


class UnmountApp:
    """One resolution-then-execution pass over the cluster."""

    def __init__(
        self,
        config: UnmountConfig,
        accessor: ClusterAccessor,
        reporter: Reporter,
        confirm: ConfirmFn | None = None,
    ) -> None:
        self.config = config
        self._accessor = accessor
        self._reporter = reporter
        self._confirm = confirm
        log = reporter.log
        self._resolver = PodResolver(accessor, log=log)
        self._builder = TargetSetBuilder(
            OwnerChainWalker(accessor, max_depth=config.max_owner_depth, log=log),
            log=log,
        )
        self._executor = ScaleDownExecutor(accessor, reporter)

    async def run(self) -> RunResult:
        """Resolve targets, pass the gate, execute, and report.

        Raises:
            OwnerChainError            -- an owner chain is cyclic or too deep.
            ConfirmationRequiredError  -- real run without confirmation.
            ExecutionFailedError       -- every target failed.
            APIError                   -- listing Pods failed, or no Pod could be resolved.
        """
        config = self.config
        reporter = self._reporter
        log = reporter.log
        log.debug(
            "resolving",
            namespace=config.scope or "<all>",
            pvc=config.pvc_name or "<any>",
            storage_class=config.storage_class or "<any>",
            dry_run=config.dry_run,
        )

        # --- 1. Pods bound to a matching claim -----------------------------
        pods = await self._resolver.find_bound_pods(config.scope, config.pvc_name, config.storage_class)
        reporter.pods_found(len(pods))
        if not pods:
            reporter.nothing_to_do()
            return RunResult(dry_run=config.dry_run)

        # --- 2. Root controllers, deduplicated ----------------------------
        target_set = await self._builder.build(pods)
        targets = target_set.targets
        reporter.controllers_found(len(targets))
        if not targets:
            # Every Pod failed to resolve; surface the first cause.
            raise target_set.errors[0][1]

        # --- 3. Confirmation gate -----------------------------------------
        confirmed = config.confirmed
        if not config.dry_run and not confirmed and self._confirm is not None:
            reporter.would_affect(targets)
            confirmed = self._confirm(targets)
        check_confirmation(config.dry_run, confirmed)

        # --- 4. Execute ---------------------------------------------------
        try:
            result = await self._executor.execute(targets, config.dry_run)
        except ExecutionFailedError:
            log.error("Scale down failed for every target")
            raise

        # --- 5. Wait for Pods of successful targets to go away ------------
        if should_mutate(config.dry_run, confirmed) and config.wait:
            pods_to_wait: list[PodSnapshot] = []
            for outcome in result.succeeded:
                pods_to_wait.extend(target_set.pods_of(outcome.target))
            await wait_for_termination(
                self._accessor,
                pods_to_wait,
                config.scope,
                log,
                timeout=config.wait_timeout_seconds,
                interval=config.poll_interval_seconds,
            )

        reporter.complete(config.dry_run, failures=len(result.failed))
        return result


async def run_plugin(
    config: UnmountConfig,
    out: TextIO,
    log_stream: TextIO,
    accessor: ClusterAccessor | None = None,
    confirm: ConfirmFn | None = None,
) -> RunResult:
    """Run one invocation, writing identifiers to *out* and progress to *log_stream*.

    When *accessor* is None a KubernetesAccessor is created from in-cluster
    config or kubeconfig and closed afterwards.
    """
    log = build_logger(log_stream, level=config.log.level, fmt=config.log.format)
    reporter = Reporter(out, log)

    if accessor is not None:
        return await UnmountApp(config, accessor, reporter, confirm=confirm).run()

    async with connect(config.kubeconfig, config.context) as api_client:
        app = UnmountApp(config, KubernetesAccessor(api_client), reporter, confirm=confirm)
        return await app.run()

