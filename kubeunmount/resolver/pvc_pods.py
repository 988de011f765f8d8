"""Find every Pod whose volumes reference a PersistentVolumeClaim.

Matching is purely by claim name against Pod volume specs: a PVC name that
does not exist (yet, or any more) is not an error, it simply matches nothing
or whatever Pods still reference it.
"""

from __future__ import annotations

import structlog

from kubeunmount.k8s.accessor import ClusterAccessor
from kubeunmount.models.resources import PodSnapshot, VolumeBinding
from kubeunmount.observability.logging import get_logger

_log = get_logger("resolver.pvc_pods")


def volume_bindings(
    pod: PodSnapshot,
    pvc_name: str = "",
    allowed_claims: set[tuple[str, str]] | None = None,
) -> list[VolumeBinding]:
    """Return the bindings of *pod* that pass the name and claim filters.

    An empty *pvc_name* matches every claim. *allowed_claims*, when given,
    restricts matches to those ``(namespace, name)`` pairs.
    """
    bindings = []
    for claim in pod.claim_names:
        if pvc_name and claim != pvc_name:
            continue
        if allowed_claims is not None and (pod.namespace, claim) not in allowed_claims:
            continue
        bindings.append(VolumeBinding(pod.namespace, pod.name, claim))
    return bindings


class PodResolver:
    """Lists Pods in scope and keeps those bound to a matching claim."""

    def __init__(self, accessor: ClusterAccessor, log: structlog.stdlib.BoundLogger | None = None) -> None:
        self._accessor = accessor
        self._log = log or _log

    async def find_bound_pods(
        self,
        namespace: str | None,
        pvc_name: str = "",
        storage_class: str = "",
    ) -> list[PodSnapshot]:
        """Return bound Pods ordered by (namespace, name).

        A Pod with several matching volumes is returned once. When
        *storage_class* is set, only claims of that StorageClass qualify.
        """
        allowed_claims = await self._claims_of_class(namespace, storage_class) if storage_class else None
        pods = await self._accessor.list_pods(namespace)

        bound: list[PodSnapshot] = []
        for pod in pods:
            bindings = volume_bindings(pod, pvc_name, allowed_claims)
            if not bindings:
                continue
            self._log.debug(
                "pod bound to claim",
                pod=pod.ref.identifier,
                claims=[b.claim_name for b in bindings],
            )
            bound.append(pod)

        bound.sort(key=lambda p: (p.namespace, p.name))
        return bound

    async def _claims_of_class(self, namespace: str | None, storage_class: str) -> set[tuple[str, str]]:
        claims = await self._accessor.list_claims(namespace)
        allowed = {(c.namespace, c.name) for c in claims if c.storage_class == storage_class}
        self._log.debug("claims matching storage class", storage_class=storage_class, count=len(allowed))
        return allowed
