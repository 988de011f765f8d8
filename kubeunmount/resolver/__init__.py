"""PVC-to-Pod resolution."""

from kubeunmount.resolver.pvc_pods import PodResolver, volume_bindings

__all__ = ["PodResolver", "volume_bindings"]
