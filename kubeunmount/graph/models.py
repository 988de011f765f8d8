"""Data structures for owner-chain traversal."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from kubeunmount.models.resources import ObjectSnapshot, ResourceRef


class ChainEnd(StrEnum):
    """Why an owner walk stopped."""

    UNOWNED = "unowned"  # the Pod itself has no controller owner
    ROOT = "root"  # reached an object with no controller owner
    MISSING = "missing"  # the next owner returned 404
    UNSUPPORTED = "unsupported"  # the next owner's kind cannot be fetched


@dataclass(frozen=True)
class OwnerLink:
    """A controller edge from a child object to its owner."""

    child: ResourceRef
    parent: ResourceRef
    controller: bool = True


@dataclass
class OwnerChain:
    """Result of walking one Pod's owner references upward."""

    pod: ResourceRef
    end: ChainEnd
    links: list[OwnerLink] = field(default_factory=list)
    root: ObjectSnapshot | None = None  # None unless end is ROOT

    @property
    def depth(self) -> int:
        return len(self.links)

    @property
    def terminal(self) -> ResourceRef:
        """The last object reached: the Pod itself, or the topmost owner."""
        if not self.links:
            return self.pod
        return self.links[-1].parent
