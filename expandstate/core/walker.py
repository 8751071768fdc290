"""Depth-first walker for expandstate.

The walker visits every node reachable from a root through the host's
children enumeration, parent before children, and lets a visitor steer
the walk one node at a time. It works with any HostAdapter.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, List, Optional, Tuple, Union

from ..config import WalkConfig
from ..errors import ExpansionStateError, HostCallFailure, ViewUnavailable
from .adapter import HostAdapter

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


class WalkDirective(Enum):
    """What the walker does after a visitor returns."""
    CONTINUE = "continue"             # Visit this node's children next
    SKIP_CHILDREN = "skip_children"   # Leave the subtree, go on with siblings
    STOP = "stop"                     # End the whole walk now


VisitorResult = Union[WalkDirective, Tuple[WalkDirective, Any]]
Visitor = Callable[[Any, Any], VisitorResult]


@dataclass(frozen=True)
class WalkResult:
    """Outcome of a walk.

    Attributes:
        visited: Number of nodes handed to the visitor
        stopped: True if a visitor ended the walk with STOP
    """

    visited: int
    stopped: bool = False


class DepthFirstWalker:
    """Depth-first pre-order walker driven by a visitor.

    The visitor is called as ``visitor(node, accumulator)`` and returns a
    WalkDirective, or a ``(directive, accumulator)`` tuple to hand a new
    accumulator to the node's descendants. Siblings always receive the
    accumulator their parent passed down.

    The walk is sequential and keeps its own stack, so tree depth is not
    bounded by the interpreter's recursion limit. The host must supply a
    finite, acyclic tree.
    """

    def __init__(self, host: HostAdapter, config: Optional[WalkConfig] = None):
        """Initialize walker.

        Args:
            host: Adapter that enumerates children
            config: Walk configuration (defaults to visible children only)
        """
        self.host = host
        self.config = config or WalkConfig()

    def walk(self, root: Any, visitor: Visitor, accumulator: Any = None) -> WalkResult:
        """Walk the tree under root, root included.

        If the root has no children enumeration (the host signals
        ViewUnavailable) nothing is visited and an empty result is returned.

        Args:
            root: Handle of the node to start from
            visitor: Callback deciding how the walk proceeds
            accumulator: Value passed to the root's visit

        Returns:
            WalkResult describing how many nodes were visited
        """
        # The root is listed up front to tell an unrealized view apart;
        # other listing failures only matter if the walk enters the children
        deferred: Optional[HostCallFailure] = None
        try:
            root_children = self._enumerate(root)
        except ViewUnavailable:
            logger.debug(f"No children enumeration for {root!r}, nothing to walk")
            return WalkResult(visited=0)
        except HostCallFailure as e:
            root_children, deferred = [], e

        directive, child_accumulator = self._visit(visitor, root, accumulator)
        visited = 1
        if directive is WalkDirective.STOP:
            return WalkResult(visited=visited, stopped=True)
        if directive is WalkDirective.SKIP_CHILDREN:
            return WalkResult(visited=visited)
        if deferred is not None:
            raise deferred

        # Each frame holds the remaining children of one node and the
        # accumulator that node handed down to them
        stack: List[Tuple[Iterator[Any], Any]] = [(iter(root_children), child_accumulator)]

        while stack:
            children, inherited = stack[-1]
            node = next(children, _EXHAUSTED)
            if node is _EXHAUSTED:
                stack.pop()
                continue

            directive, child_accumulator = self._visit(visitor, node, inherited)
            visited += 1

            if directive is WalkDirective.STOP:
                return WalkResult(visited=visited, stopped=True)
            if directive is WalkDirective.CONTINUE:
                stack.append((iter(self._children_of(node)), child_accumulator))

        return WalkResult(visited=visited)

    def _enumerate(self, node: Any) -> List[Any]:
        method = "get_visible_children" if self.config.visible_only else "get_children"
        try:
            return list(getattr(self.host, method)(node))
        except ExpansionStateError:
            raise
        except Exception as e:
            raise HostCallFailure(method, node) from e

    def _children_of(self, node: Any) -> List[Any]:
        try:
            return self._enumerate(node)
        except ViewUnavailable:
            return []

    @staticmethod
    def _visit(visitor: Visitor, node: Any, accumulator: Any) -> Tuple[WalkDirective, Any]:
        result = visitor(node, accumulator)
        if isinstance(result, tuple):
            directive, accumulator = result
        else:
            directive = result

        if not isinstance(directive, WalkDirective):
            raise ValueError(f"Visitor returned {directive!r}, expected a WalkDirective")
        return directive, accumulator
