"""Exception hierarchy for kubectl-unmount.

Resolution errors (NotFoundError, UnsupportedKindError, APIError) are raised
by the API accessor and handled per Pod by the resolver and walker.
OwnerChainError and ConfirmationRequiredError abort the whole run before any
mutation. ExecutionFailedError is raised only when every target failed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kubeunmount.models.targets import RunResult


class UnmountError(Exception):
    """Base class for every error surfaced by kubectl-unmount."""


class APIError(UnmountError):
    """Transport, authorization or server failure from the Kubernetes API."""

    def __init__(self, message: str, status: int | None = None, reason: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.reason = reason


class NotFoundError(APIError):
    """The requested object does not exist (HTTP 404)."""

    def __init__(self, kind: str, namespace: str, name: str) -> None:
        super().__init__(f"{kind}/{namespace}/{name} not found", status=404, reason="Not Found")
        self.kind = kind
        self.namespace = namespace
        self.name = name


class UnsupportedKindError(UnmountError):
    """No adapter exists for a kind (for example a custom resource), or the kind
    does not support the requested operation."""

    def __init__(self, kind: str, operation: str = "read") -> None:
        super().__init__(f"Unsupported operation {operation!r} for kind {kind}")
        self.kind = kind
        self.operation = operation


class OwnerChainError(UnmountError):
    """Owner chain is cyclic or longer than the configured bound."""

    def __init__(self, pod: str, hops: int, detail: str) -> None:
        super().__init__(f"Owner chain of {pod} could not be resolved after {hops} hops: {detail}")
        self.pod = pod
        self.hops = hops


class ConfirmationRequiredError(UnmountError):
    """A real run was requested without confirmation."""

    def __init__(self) -> None:
        super().__init__("Refusing to scale down without confirmation; pass --yes or use --dry-run")


class ExecutionFailedError(UnmountError):
    """Every target failed during execution."""

    def __init__(self, result: RunResult) -> None:
        super().__init__(f"All {len(result.outcomes)} targets failed to scale down")
        self.result = result
