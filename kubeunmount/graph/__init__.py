"""Owner-reference traversal from Pods to their root controllers.

The graph is never held in memory: each hop is an API lookup, bounded by a
hop counter and a visited set.
"""

from kubeunmount.graph.models import ChainEnd, OwnerChain, OwnerLink
from kubeunmount.graph.walker import OwnerChainWalker, controller_reference

__all__ = [
    "ChainEnd",
    "OwnerChain",
    "OwnerChainWalker",
    "OwnerLink",
    "controller_reference",
]
