"""Owner Chain Walker.

Walks ``metadata.ownerReferences`` from a Pod up to its top-level controller,
e.g. Pod -> ReplicaSet -> Deployment or Pod -> StatefulSet. Only the
reference flagged ``controller: true`` is followed.

Termination:
    * no controller reference -> root reached (or bare Pod if at hop 0)
    * owner returns 404       -> the missing owner is the terminal target
    * owner kind unsupported  -> the reference itself is the terminal target
    * revisited object or more than ``max_depth`` hops -> OwnerChainError
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from kubeunmount.errors import NotFoundError, OwnerChainError, UnsupportedKindError
from kubeunmount.graph.models import ChainEnd, OwnerChain, OwnerLink
from kubeunmount.k8s.accessor import ClusterAccessor
from kubeunmount.k8s.adapters import is_scalable
from kubeunmount.models.resources import OwnerReference, PodSnapshot, ResourceRef
from kubeunmount.models.targets import ControllerTarget, PodTarget, Target
from kubeunmount.observability.logging import get_logger

_log = get_logger("graph.walker")

DEFAULT_MAX_DEPTH = 10


def controller_reference(refs: Iterable[OwnerReference]) -> OwnerReference | None:
    """Return the managing controller reference, ignoring non-controller owners."""
    for ref in refs:
        if ref.controller:
            return ref
    return None


class OwnerChainWalker:
    def __init__(
        self,
        accessor: ClusterAccessor,
        max_depth: int = DEFAULT_MAX_DEPTH,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._accessor = accessor
        self._max_depth = max_depth
        self._log = log or _log

    async def trace(self, pod: PodSnapshot) -> OwnerChain:
        """Walk *pod*'s controller references to the root.

        Raises OwnerChainError on cycles or excessive depth. APIError from
        the accessor (other than 404) propagates to the caller.
        """
        chain = OwnerChain(pod=pod.ref, end=ChainEnd.UNOWNED)
        visited = {pod.ref.key}
        child = pod.ref
        refs = pod.owner_references

        while True:
            owner = controller_reference(refs)
            if owner is None:
                chain.end = ChainEnd.ROOT if chain.links else ChainEnd.UNOWNED
                return chain

            parent = ResourceRef(owner.kind, pod.namespace, owner.name)
            if parent.key in visited:
                raise OwnerChainError(pod.ref.identifier, chain.depth, f"cycle through {parent.identifier}")
            if chain.depth >= self._max_depth:
                raise OwnerChainError(pod.ref.identifier, chain.depth, f"exceeded max depth {self._max_depth}")

            visited.add(parent.key)
            chain.links.append(OwnerLink(child=child, parent=parent, controller=True))
            self._log.debug("owner hop", child=child.identifier, parent=parent.identifier, depth=chain.depth)

            try:
                obj = await self._accessor.get_object(parent.kind, parent.namespace, parent.name)
            except NotFoundError:
                self._log.warning(
                    "owner not found, using it as the target",
                    pod=pod.ref.identifier,
                    owner=parent.identifier,
                )
                chain.end = ChainEnd.MISSING
                return chain
            except UnsupportedKindError:
                self._log.warning(
                    "owner kind not supported, using it as the target",
                    pod=pod.ref.identifier,
                    owner=parent.identifier,
                )
                chain.end = ChainEnd.UNSUPPORTED
                return chain

            chain.root = obj
            child = parent
            refs = obj.owner_references

    async def resolve_root(self, pod: PodSnapshot) -> Target:
        """Return the target that stops *pod*: its root controller or the Pod itself."""
        chain = await self.trace(pod)
        return target_for(chain)


def target_for(chain: OwnerChain) -> Target:
    if chain.end == ChainEnd.UNOWNED:
        return PodTarget(namespace=chain.pod.namespace, name=chain.pod.name)

    terminal = chain.terminal
    if chain.end == ChainEnd.ROOT and chain.root is not None:
        return ControllerTarget(
            kind=terminal.kind,
            namespace=terminal.namespace,
            name=terminal.name,
            current_replicas=chain.root.replicas,
            scalable=chain.root.replicas is not None,
        )
    return ControllerTarget(
        kind=terminal.kind,
        namespace=terminal.namespace,
        name=terminal.name,
        current_replicas=None,
        scalable=is_scalable(terminal.kind),
    )
