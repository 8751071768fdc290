"""Core abstractions for expandstate.

This package contains the host contract and the building blocks every
operation is assembled from: identity resolution, the depth-first walker
and the expansion state queries.
"""

from .node import NodeHandle, HierarchyRoot
from .adapter import HostAdapter
from .identity import IdentityResolver
from .walker import DepthFirstWalker, WalkDirective, WalkResult
from .query import ExpansionQuery, open_view

__all__ = [
    "NodeHandle",
    "HierarchyRoot",
    "HostAdapter",
    "IdentityResolver",
    "DepthFirstWalker",
    "WalkDirective",
    "WalkResult",
    "ExpansionQuery",
    "open_view",
]
