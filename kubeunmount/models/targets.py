"""Scale-down targets and run outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from kubeunmount.models.resources import ResourceRef


@dataclass(frozen=True)
class PodTarget:
    """A bare Pod with no controlling owner. Acted on by deletion."""

    namespace: str
    name: str

    kind = "Pod"

    @property
    def ref(self) -> ResourceRef:
        return ResourceRef(self.kind, self.namespace, self.name)

    @property
    def key(self) -> tuple[str, str, str]:
        return self.ref.key

    @property
    def identifier(self) -> str:
        return self.ref.identifier


@dataclass(frozen=True)
class ControllerTarget:
    """The root controller of one or more Pods. Acted on by scaling to zero.

    ``current_replicas`` is None when the owner could not be fetched.
    ``scalable`` is False for kinds that have no replica count to patch.
    """

    kind: str
    namespace: str
    name: str
    current_replicas: int | None = None
    scalable: bool = True

    @property
    def ref(self) -> ResourceRef:
        return ResourceRef(self.kind, self.namespace, self.name)

    @property
    def key(self) -> tuple[str, str, str]:
        return self.ref.key

    @property
    def identifier(self) -> str:
        return self.ref.identifier


Target = PodTarget | ControllerTarget


class OutcomeStatus(StrEnum):
    """What happened to a target during execution."""

    REPORTED = "reported"
    SCALED_DOWN = "scaled_down"
    DELETED = "deleted"
    FAILED = "failed"


@dataclass(frozen=True)
class TargetOutcome:
    target: Target
    status: OutcomeStatus
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status != OutcomeStatus.FAILED


@dataclass
class RunResult:
    """Ordered (target, outcome) pairs for one invocation."""

    outcomes: list[TargetOutcome] = field(default_factory=list)
    dry_run: bool = True

    @property
    def targets(self) -> list[Target]:
        return [o.target for o in self.outcomes]

    @property
    def succeeded(self) -> list[TargetOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[TargetOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def all_failed(self) -> bool:
        """True only when there was at least one target and none succeeded."""
        return bool(self.outcomes) and not self.succeeded
