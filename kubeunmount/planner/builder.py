"""Target Set Builder.

Resolves every bound Pod to its root target and deduplicates on the
``(kind, namespace, name)`` triple, keeping first-seen order. Two Pods of the
same Deployment therefore yield one target.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from kubeunmount.errors import APIError
from kubeunmount.graph.walker import OwnerChainWalker
from kubeunmount.models.resources import PodSnapshot
from kubeunmount.models.targets import Target
from kubeunmount.observability.logging import get_logger

_log = get_logger("planner.builder")


def dedupe_targets(targets: Iterable[Target]) -> list[Target]:
    """Drop repeated (kind, namespace, name) entries, preserving first-seen order."""
    seen: set[tuple[str, str, str]] = set()
    unique: list[Target] = []
    for target in targets:
        if target.key in seen:
            continue
        seen.add(target.key)
        unique.append(target)
    return unique


@dataclass
class TargetSet:
    """Deduplicated targets plus the Pods each one stands for."""

    targets: list[Target] = field(default_factory=list)
    members: dict[tuple[str, str, str], list[PodSnapshot]] = field(default_factory=dict)
    errors: list[tuple[PodSnapshot, APIError]] = field(default_factory=list)

    def pods_of(self, target: Target) -> list[PodSnapshot]:
        return self.members.get(target.key, [])


class TargetSetBuilder:
    def __init__(self, walker: OwnerChainWalker, log: structlog.stdlib.BoundLogger | None = None) -> None:
        self._walker = walker
        self._log = log or _log

    async def build(self, pods: list[PodSnapshot]) -> TargetSet:
        """Resolve *pods* into a TargetSet.

        An APIError while resolving one Pod is logged and recorded in
        ``errors``; the remaining Pods are still resolved. OwnerChainError
        propagates.
        """
        result = TargetSet()
        resolved: list[Target] = []
        for pod in pods:
            try:
                target = await self._walker.resolve_root(pod)
            except APIError as exc:
                self._log.error("failed to resolve owner", pod=pod.ref.identifier, error=str(exc))
                result.errors.append((pod, exc))
                continue
            resolved.append(target)
            result.members.setdefault(target.key, []).append(pod)

        result.targets = dedupe_targets(resolved)
        return result

    async def build_targets(self, pods: list[PodSnapshot]) -> list[Target]:
        return (await self.build(pods)).targets
