"""Target set construction."""

from kubeunmount.planner.builder import TargetSet, TargetSetBuilder, dedupe_targets

__all__ = ["TargetSet", "TargetSetBuilder", "dedupe_targets"]
