"""In-memory host adapter for expandstate.

This adapter keeps a whole host in plain Python objects: roots with
unique and full names, nodes with expansion state, and a tree view that
can be switched off. It backs the test suite and the examples, and is a
reference for writing adapters over real tree widgets.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Set, Tuple, TypeVar

from ..core.adapter import HostAdapter
from ..core.node import NodeHandle

T = TypeVar("T")


class MemoryNode(NodeHandle):
    """Node of an in-memory tree.

    Nodes are identified by their path from the top of their tree, so two
    trees may both contain a node named "src" without the handles clashing.
    """

    def __init__(self,
                 name: str,
                 children: Optional[Sequence['MemoryNode']] = None,
                 expanded: bool = False,
                 expandable: Optional[bool] = None,
                 visible: bool = True):
        """Initialize a node.

        Args:
            name: Name of the node, unique among its siblings
            children: Child nodes in display order
            expanded: Whether the view currently shows the children
            expandable: Whether the node can be expanded at all
                (defaults to having children)
            visible: Whether the host lists the node among visible children
        """
        self.name = name
        self.children: List['MemoryNode'] = list(children or [])
        self.expanded = expanded
        self.expandable = bool(self.children) if expandable is None else expandable
        self.visible = visible
        self.parent: Optional['MemoryNode'] = None
        for child in self.children:
            child.parent = self

    def identifier(self) -> str:
        """Return the slash-separated path of names from the tree top."""
        parts = []
        node = self
        while node is not None:
            parts.append(node.name)
            node = node.parent
        return "/".join(reversed(parts))

    def iter_subtree(self) -> Iterator['MemoryNode']:
        """Yield this node and every descendant, parent before children."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, name: str) -> 'MemoryNode':
        """Find a node in this subtree by name.

        Raises:
            KeyError: If no node has that name
        """
        for node in self.iter_subtree():
            if node.name == name:
                return node
        raise KeyError(name)


@dataclass
class MemoryRoot:
    """Descriptor of an in-memory top-level tree.

    A None unique_name or full_name makes the corresponding host lookup
    fail, like a host object that does not expose the property.
    """

    node: MemoryNode
    unique_name: Optional[str] = None
    full_name: Optional[str] = None
    kind: Optional[str] = None


@dataclass
class MemoryTreeView:
    """Token standing in for the host's realized tree view."""

    name: str = "tree"
    collapse_calls: List[MemoryNode] = field(default_factory=list)


class InMemoryHost(HostAdapter):
    """HostAdapter over MemoryRoot and MemoryNode objects."""

    def __init__(self,
                 roots: Iterable[MemoryRoot],
                 view_available: bool = True,
                 dispatcher: Optional[Any] = None):
        """Initialize the host.

        Args:
            roots: Top-level trees, in enumeration order
            view_available: False simulates a tree view never realized
            dispatcher: Object with run(work) used for owner-thread marshaling;
                None runs work on the calling thread
        """
        self.roots: List[MemoryRoot] = list(roots)
        self.view_available = view_available
        self.dispatcher = dispatcher
        self.view = MemoryTreeView()
        self.calling_threads: Set[str] = set()

    # Roots and identities

    def get_roots(self) -> List[Tuple[MemoryRoot, MemoryNode]]:
        return [(root, root.node) for root in self.roots]

    def unique_name(self, descriptor: MemoryRoot) -> str:
        if descriptor.unique_name is None:
            raise LookupError(f"{descriptor.node.name} has no unique name")
        return descriptor.unique_name

    def full_name(self, descriptor: MemoryRoot) -> str:
        if descriptor.full_name is None:
            raise LookupError(f"{descriptor.node.name} has no full name")
        return descriptor.full_name

    def descriptor_kind(self, descriptor: MemoryRoot) -> Optional[str]:
        return descriptor.kind

    # Children

    def get_children(self, node: MemoryNode) -> List[MemoryNode]:
        return list(node.children)

    def get_visible_children(self, node: MemoryNode) -> List[MemoryNode]:
        return [child for child in node.children if child.visible]

    # Tree view

    def get_tree_view(self) -> Optional[MemoryTreeView]:
        self.calling_threads.add(threading.current_thread().name)
        return self.view if self.view_available else None

    def is_expandable(self, node: MemoryNode) -> bool:
        return node.expandable

    def is_expanded(self, view: MemoryTreeView, node: MemoryNode) -> bool:
        return node.expanded

    def collapse(self, view: MemoryTreeView, node: MemoryNode) -> None:
        view.collapse_calls.append(node)
        node.expanded = False

    def expand(self, node: MemoryNode) -> None:
        """Expand a node, as a user clicking it would."""
        if node.expandable:
            node.expanded = True

    def run_on_owner_thread(self, work: Callable[[], T]) -> T:
        if self.dispatcher is None:
            return work()
        return self.dispatcher.run(work)

    # Inspection

    def expanded_nodes(self) -> Set[MemoryNode]:
        """Every expanded node across all roots."""
        return {node
                for root in self.roots
                for node in root.node.iter_subtree()
                if node.expandable and node.expanded}
