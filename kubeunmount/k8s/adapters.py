"""Per-kind adapters over the kubernetes-asyncio typed APIs.

Each adapter knows how to read one owner kind by name and, for scalable
kinds, how to patch its ``/scale`` subresource. The walker and executor only
ever see the kind string; the registry below picks the adapter.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import aiohttp
from kubernetes_asyncio import client as k8s_client
from kubernetes_asyncio.client.rest import ApiException

from kubeunmount.errors import APIError, NotFoundError, UnsupportedKindError
from kubeunmount.models.resources import ObjectSnapshot, OwnerReference


def translate_api_exception(exc: ApiException, kind: str, namespace: str, name: str) -> APIError:
    """Map a client ApiException to NotFoundError (404) or APIError."""
    if exc.status == 404:
        return NotFoundError(kind, namespace, name)
    return APIError(
        f"{kind}/{namespace}/{name}: {exc.status} {exc.reason}",
        status=exc.status,
        reason=exc.reason or "",
    )


# Failures raised below the HTTP status layer: refused or reset connections, timeouts.
TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


def translate_transport_error(exc: BaseException, action: str) -> APIError:
    """Wrap a connection or timeout failure as an APIError with no HTTP status."""
    return APIError(f"{action} failed: {type(exc).__name__}: {exc}", reason=type(exc).__name__)


def owner_references(metadata: Any) -> tuple[OwnerReference, ...]:
    refs = getattr(metadata, "owner_references", None) or []
    return tuple(
        OwnerReference(
            kind=ref.kind,
            name=ref.name,
            api_version=ref.api_version or "",
            uid=ref.uid or "",
            controller=bool(ref.controller),
        )
        for ref in refs
    )


@dataclass(frozen=True)
class ResourceAdapter:
    """Read/scale operations for one kind.

    ``resource`` is the snake_case suffix of the generated client methods,
    e.g. ``stateful_set`` for ``read_namespaced_stateful_set`` and
    ``patch_namespaced_stateful_set_scale``.
    """

    kind: str
    api_class: type
    resource: str
    scalable: bool = True

    async def read(self, api_client: k8s_client.ApiClient, namespace: str, name: str) -> ObjectSnapshot:
        api = self.api_class(api_client)
        try:
            obj = await getattr(api, f"read_namespaced_{self.resource}")(name, namespace)
        except ApiException as exc:
            raise translate_api_exception(exc, self.kind, namespace, name) from exc
        except TRANSPORT_ERRORS as exc:
            raise translate_transport_error(exc, f"Reading {self.kind}/{namespace}/{name}") from exc
        replicas = None
        if self.scalable and obj.spec is not None:
            # An unset replicas field defaults to 1 server-side.
            replicas = obj.spec.replicas if obj.spec.replicas is not None else 1
        return ObjectSnapshot(
            kind=self.kind,
            namespace=namespace,
            name=name,
            owner_references=owner_references(obj.metadata),
            replicas=replicas,
        )

    async def scale(self, api_client: k8s_client.ApiClient, namespace: str, name: str, replicas: int) -> None:
        if not self.scalable:
            raise UnsupportedKindError(self.kind, operation="scale")
        api = self.api_class(api_client)
        body = {"spec": {"replicas": replicas}}
        try:
            await getattr(api, f"patch_namespaced_{self.resource}_scale")(name, namespace, body)
        except ApiException as exc:
            raise translate_api_exception(exc, self.kind, namespace, name) from exc
        except TRANSPORT_ERRORS as exc:
            raise translate_transport_error(exc, f"Scaling {self.kind}/{namespace}/{name}") from exc


_ADAPTERS: dict[str, ResourceAdapter] = {
    adapter.kind: adapter
    for adapter in (
        ResourceAdapter("Deployment", k8s_client.AppsV1Api, "deployment"),
        ResourceAdapter("ReplicaSet", k8s_client.AppsV1Api, "replica_set"),
        ResourceAdapter("StatefulSet", k8s_client.AppsV1Api, "stateful_set"),
        ResourceAdapter("ReplicationController", k8s_client.CoreV1Api, "replication_controller"),
        ResourceAdapter("DaemonSet", k8s_client.AppsV1Api, "daemon_set", scalable=False),
        ResourceAdapter("Job", k8s_client.BatchV1Api, "job", scalable=False),
        ResourceAdapter("CronJob", k8s_client.BatchV1Api, "cron_job", scalable=False),
    )
}


def adapter_for(kind: str) -> ResourceAdapter:
    """Return the adapter for *kind*, raising UnsupportedKindError if none exists."""
    try:
        return _ADAPTERS[kind]
    except KeyError:
        raise UnsupportedKindError(kind) from None


def is_scalable(kind: str) -> bool:
    adapter = _ADAPTERS.get(kind)
    return adapter is not None and adapter.scalable


def supported_kinds() -> list[str]:
    return sorted(_ADAPTERS)
