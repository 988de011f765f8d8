"""Core data structures for kubectl-unmount."""

from kubeunmount.models.config import LogConfig, UnmountConfig
from kubeunmount.models.resources import (
    ClaimSnapshot,
    ObjectSnapshot,
    OwnerReference,
    PodSnapshot,
    ResourceRef,
    VolumeBinding,
)
from kubeunmount.models.targets import (
    ControllerTarget,
    OutcomeStatus,
    PodTarget,
    RunResult,
    Target,
    TargetOutcome,
)

__all__ = [
    "ClaimSnapshot",
    "ControllerTarget",
    "LogConfig",
    "ObjectSnapshot",
    "OutcomeStatus",
    "OwnerReference",
    "PodSnapshot",
    "PodTarget",
    "ResourceRef",
    "RunResult",
    "Target",
    "TargetOutcome",
    "UnmountConfig",
    "VolumeBinding",
]
