"""Kubernetes API access for kubectl-unmount."""

from kubeunmount.k8s.accessor import ClusterAccessor, KubernetesAccessor, connect
from kubeunmount.k8s.adapters import ResourceAdapter, adapter_for, is_scalable

__all__ = [
    "ClusterAccessor",
    "KubernetesAccessor",
    "ResourceAdapter",
    "adapter_for",
    "connect",
    "is_scalable",
]
