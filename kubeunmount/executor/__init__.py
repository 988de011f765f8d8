"""Confirmation gate, scale-down execution and termination wait."""

from kubeunmount.executor.gate import check_confirmation, should_mutate
from kubeunmount.executor.scale_down import ScaleDownExecutor
from kubeunmount.executor.wait import wait_for_termination

__all__ = ["ScaleDownExecutor", "check_confirmation", "should_mutate", "wait_for_termination"]
