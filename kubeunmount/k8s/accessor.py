"""Narrow interface between the resolution engine and the Kubernetes API.

ClusterAccessor    -- ABC the resolver, walker and executor call through.
KubernetesAccessor -- kubernetes-asyncio implementation backed by per-kind
                      ResourceAdapters.
connect            -- Async context manager yielding a configured ApiClient.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from kubernetes_asyncio import client as k8s_client
from kubernetes_asyncio import config as k8s_config
from kubernetes_asyncio.client.rest import ApiException

from kubeunmount.errors import APIError
from kubeunmount.k8s.adapters import (
    TRANSPORT_ERRORS,
    adapter_for,
    owner_references,
    translate_api_exception,
    translate_transport_error,
)
from kubeunmount.models.resources import ClaimSnapshot, ObjectSnapshot, PodSnapshot
from kubeunmount.observability.logging import get_logger

_log = get_logger("k8s.accessor")


class ClusterAccessor(ABC):
    """List/get/patch/delete primitives the core depends on.

    A ``namespace`` of None means every namespace. Lookups raise
    NotFoundError for missing objects and APIError for any other failure.
    """

    @abstractmethod
    async def list_pods(self, namespace: str | None) -> list[PodSnapshot]:
        """Return every Pod in scope."""

    @abstractmethod
    async def list_claims(self, namespace: str | None) -> list[ClaimSnapshot]:
        """Return every PersistentVolumeClaim in scope."""

    @abstractmethod
    async def get_object(self, kind: str, namespace: str, name: str) -> ObjectSnapshot:
        """Fetch an owner object of *kind* by name."""

    @abstractmethod
    async def patch_replicas(self, kind: str, namespace: str, name: str, count: int) -> None:
        """Set the replica count of a scalable controller."""

    @abstractmethod
    async def delete_pod(self, namespace: str, name: str) -> None:
        """Delete a Pod."""


def pod_snapshot(pod: Any) -> PodSnapshot:
    """Reduce a V1Pod to the fields the resolver and walker need.

    Generic ephemeral volumes are included under the claim name Kubernetes
    gives them: ``<pod name>-<volume name>``.
    """
    meta = pod.metadata
    claims: list[str] = []
    for volume in (pod.spec.volumes if pod.spec else None) or []:
        if volume.persistent_volume_claim is not None:
            claims.append(volume.persistent_volume_claim.claim_name)
        elif volume.ephemeral is not None:
            claims.append(f"{meta.name}-{volume.name}")
    return PodSnapshot(
        namespace=meta.namespace,
        name=meta.name,
        claim_names=tuple(claims),
        owner_references=owner_references(meta),
        phase=(pod.status.phase if pod.status else None) or "",
        deleting=meta.deletion_timestamp is not None,
    )


def claim_snapshot(pvc: Any) -> ClaimSnapshot:
    return ClaimSnapshot(
        namespace=pvc.metadata.namespace,
        name=pvc.metadata.name,
        storage_class=(pvc.spec.storage_class_name if pvc.spec else None) or "",
    )


class KubernetesAccessor(ClusterAccessor):
    """ClusterAccessor over a kubernetes-asyncio ApiClient."""

    def __init__(self, api_client: k8s_client.ApiClient) -> None:
        self._api_client = api_client
        self._core = k8s_client.CoreV1Api(api_client)

    async def list_pods(self, namespace: str | None) -> list[PodSnapshot]:
        try:
            if namespace is None:
                result = await self._core.list_pod_for_all_namespaces()
            else:
                result = await self._core.list_namespaced_pod(namespace)
        except ApiException as exc:
            raise APIError(f"Listing pods failed: {exc.reason}", status=exc.status, reason=exc.reason or "") from exc
        except TRANSPORT_ERRORS as exc:
            raise translate_transport_error(exc, "Listing pods") from exc
        return [pod_snapshot(pod) for pod in result.items]

    async def list_claims(self, namespace: str | None) -> list[ClaimSnapshot]:
        try:
            if namespace is None:
                result = await self._core.list_persistent_volume_claim_for_all_namespaces()
            else:
                result = await self._core.list_namespaced_persistent_volume_claim(namespace)
        except ApiException as exc:
            raise APIError(
                f"Listing persistent volume claims failed: {exc.reason}",
                status=exc.status,
                reason=exc.reason or "",
            ) from exc
        except TRANSPORT_ERRORS as exc:
            raise translate_transport_error(exc, "Listing persistent volume claims") from exc
        return [claim_snapshot(pvc) for pvc in result.items]

    async def get_object(self, kind: str, namespace: str, name: str) -> ObjectSnapshot:
        return await adapter_for(kind).read(self._api_client, namespace, name)

    async def patch_replicas(self, kind: str, namespace: str, name: str, count: int) -> None:
        _log.debug("patching replicas", kind=kind, namespace=namespace, name=name, replicas=count)
        await adapter_for(kind).scale(self._api_client, namespace, name, count)

    async def delete_pod(self, namespace: str, name: str) -> None:
        _log.debug("deleting pod", namespace=namespace, name=name)
        try:
            await self._core.delete_namespaced_pod(name, namespace)
        except ApiException as exc:
            raise translate_api_exception(exc, "Pod", namespace, name) from exc
        except TRANSPORT_ERRORS as exc:
            raise translate_transport_error(exc, f"Deleting Pod/{namespace}/{name}") from exc


@asynccontextmanager
async def connect(kubeconfig: str = "", context: str = "") -> AsyncIterator[k8s_client.ApiClient]:
    """Yield an ApiClient configured from in-cluster config or kubeconfig.

    An explicit kubeconfig path or context skips the in-cluster attempt.
    The client is closed on exit.
    """
    configuration = k8s_client.Configuration()
    loaded = False
    if not kubeconfig and not context:
        try:
            k8s_config.load_incluster_config(client_configuration=configuration)
            loaded = True
            _log.debug("k8s client configured from in-cluster service account")
        except k8s_config.ConfigException:
            pass
    if not loaded:
        await k8s_config.load_kube_config(
            config_file=kubeconfig or None,
            context=context or None,
            client_configuration=configuration,
        )
        _log.debug("k8s client configured from kubeconfig", context=context or "<current>")

    async with k8s_client.ApiClient(configuration=configuration) as api_client:
        yield api_client
