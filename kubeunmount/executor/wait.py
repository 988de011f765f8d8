"""Wait for scaled-down and deleted Pods to disappear."""

from __future__ import annotations

import asyncio

import structlog

from kubeunmount.errors import APIError
from kubeunmount.k8s.accessor import ClusterAccessor
from kubeunmount.models.resources import PodSnapshot


async def wait_for_termination(
    accessor: ClusterAccessor,
    pods: list[PodSnapshot],
    namespace: str | None,
    log: structlog.stdlib.BoundLogger,
    timeout: float = 300.0,
    interval: float = 2.0,
) -> bool:
    """Poll until none of *pods* is listed any more.

    Returns False on timeout or when the Pod list cannot be fetched. Both are
    logged as warnings and neither is an error: the mutations themselves
    already succeeded.
    """
    pending = {pod.ref.key for pod in pods}
    if not pending:
        return True

    log.info(f"Waiting for {len(pending)} pods to terminate", count=len(pending))
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while True:
        try:
            listed = await accessor.list_pods(namespace)
        except APIError as exc:
            log.warning("Could not list pods while waiting for termination", error=str(exc))
            return False
        present = {pod.ref.key for pod in listed}
        pending &= present
        if not pending:
            log.info("All pods terminated")
            return True
        if loop.time() >= deadline:
            log.warning(
                "Timed out waiting for pods to terminate",
                remaining=sorted(f"Pod/{ns}/{name}" for _, ns, name in pending),
            )
            return False
        await asyncio.sleep(interval)
