"""Run reporter.

Writes two independent streams:

* ``out`` -- one ``<Kind>/<Namespace>/<Name>`` line per affected target, in
  target order, with no header or footer. Stable and meant to be piped.
* ``log`` -- human-readable progress lines (counts, phase transitions,
  per-target failures, the completion banner).

Each stream is flushed after every write so neither reorders relative to its
own sequence.
"""

from __future__ import annotations

from typing import TextIO

import structlog

from kubeunmount.models.targets import ControllerTarget, OutcomeStatus, Target, TargetOutcome


class Reporter:
    def __init__(self, out: TextIO, log: structlog.stdlib.BoundLogger) -> None:
        self._out = out
        self.log = log

    def pods_found(self, count: int) -> None:
        self.log.info(f"Found {count} pods to scale down", count=count)

    def controllers_found(self, count: int) -> None:
        self.log.info(f"Found {count} controllers to scale down", count=count)

    def nothing_to_do(self) -> None:
        self.log.info("No pods found, nothing to do")

    def would_affect(self, targets: list[Target]) -> None:
        """Log what a run would do to each target, without touching ``out``."""
        for target in targets:
            if isinstance(target, ControllerTarget):
                self.log.info("would scale down", target=target.identifier, replicas=target.current_replicas)
            else:
                self.log.info("would delete", target=target.identifier)

    def outcome(self, outcome: TargetOutcome) -> None:
        """Record one processed target; only successful targets reach ``out``."""
        target = outcome.target
        if outcome.status == OutcomeStatus.FAILED:
            self.log.error("failed to scale down", target=target.identifier, reason=outcome.reason)
            return
        if outcome.status == OutcomeStatus.REPORTED:
            self.would_affect([target])
        elif outcome.status == OutcomeStatus.SCALED_DOWN:
            self.log.info("scaled down", target=target.identifier)
        else:
            self.log.info("deleted", target=target.identifier)
        self._out.write(f"{target.identifier}\n")
        self._out.flush()

    def complete(self, dry_run: bool, failures: int = 0) -> None:
        if dry_run:
            self.log.info("Dry run complete, no changes made")
        elif failures:
            self.log.warning("Scale down complete with failures", failures=failures)
        else:
            self.log.info("Scale down complete")
