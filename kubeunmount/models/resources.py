"""Read-only snapshots of cluster objects.

The API accessor converts raw client models into these types; nothing past
the accessor ever sees a kubernetes-asyncio model.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceRef:
    """Identity of a namespaced Kubernetes object."""

    kind: str
    namespace: str
    name: str

    @property
    def key(self) -> tuple[str, str, str]:
        """Return the unique key for this object."""
        return (self.kind, self.namespace, self.name)

    @property
    def identifier(self) -> str:
        return f"{self.kind}/{self.namespace}/{self.name}"

    def __str__(self) -> str:
        return self.identifier


@dataclass(frozen=True)
class OwnerReference:
    """One entry of an object's metadata.ownerReferences."""

    kind: str
    name: str
    api_version: str = ""
    uid: str = ""
    controller: bool = False


@dataclass(frozen=True)
class PodSnapshot:
    """A Pod as seen at resolution time."""

    namespace: str
    name: str
    claim_names: tuple[str, ...] = ()
    owner_references: tuple[OwnerReference, ...] = ()
    phase: str = ""
    deleting: bool = False

    @property
    def ref(self) -> ResourceRef:
        return ResourceRef("Pod", self.namespace, self.name)


@dataclass(frozen=True)
class ObjectSnapshot:
    """An owner object (Deployment, ReplicaSet, ...) as seen at resolution time.

    ``replicas`` is None for kinds without a replica count (DaemonSet, Job).
    """

    kind: str
    namespace: str
    name: str
    owner_references: tuple[OwnerReference, ...] = ()
    replicas: int | None = None

    @property
    def ref(self) -> ResourceRef:
        return ResourceRef(self.kind, self.namespace, self.name)


@dataclass(frozen=True)
class ClaimSnapshot:
    """A PersistentVolumeClaim, reduced to what the resolver filters on."""

    namespace: str
    name: str
    storage_class: str = ""


@dataclass(frozen=True)
class VolumeBinding:
    """A Pod volume referencing a PersistentVolumeClaim. Derived, never persisted."""

    pod_namespace: str
    pod_name: str
    claim_name: str
