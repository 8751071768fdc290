"""HostAdapter abstraction for expandstate.

The HostAdapter is the only way the core touches the outside world. It
knows how to enumerate the host's top-level trees, how to name them, how
to list a node's children, and how to read and drive expansion state in
the host's tree view. Everything is injected; nothing is looked up from
ambient state.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Optional, Tuple, TypeVar

T = TypeVar("T")


class HostAdapter(ABC):
    """Abstract adapter for the environment that owns the live tree.

    Hosts with thread affinity override run_on_owner_thread so that every
    public operation runs on the thread that owns the tree view.
    """

    # Root enumeration and identity sources

    @abstractmethod
    def get_roots(self) -> Iterable[Tuple[Any, Any]]:
        """Enumerate the current top-level trees.

        Returns:
            Iterable of (descriptor, root node handle) pairs. The descriptor
            is what unique_name/full_name are asked about.
        """
        pass

    @abstractmethod
    def unique_name(self, descriptor: Any) -> str:
        """Return the host's unique name for a root.

        May raise any exception when the host cannot produce one; the
        identity resolver falls back to full_name in that case.
        """
        pass

    @abstractmethod
    def full_name(self, descriptor: Any) -> str:
        """Return the full path or name of a root. Used as fallback identity."""
        pass

    def descriptor_kind(self, descriptor: Any) -> Optional[str]:
        """Return the kind (project type) of a root descriptor, if known."""
        return None

    # Child enumeration

    @abstractmethod
    def get_children(self, node: Any) -> Iterable[Any]:
        """Get every child handle of a node, in display order.

        Raises:
            ViewUnavailable: If the node has no realized children enumeration
        """
        pass

    def get_visible_children(self, node: Any) -> Iterable[Any]:
        """Get the children the host reports as visible.

        Default implementation assumes every child is visible.
        """
        return self.get_children(node)

    # Tree view state

    @abstractmethod
    def get_tree_view(self) -> Optional[Any]:
        """Return the tree view that holds expansion state.

        Returns None (or raises ViewUnavailable) when the view has never
        been realized, in which case no expansion state exists to read.
        """
        pass

    @abstractmethod
    def is_expandable(self, node: Any) -> bool:
        """Check whether a node can show children at all."""
        pass

    @abstractmethod
    def is_expanded(self, view: Any, node: Any) -> bool:
        """Check whether the view currently shows the node's children."""
        pass

    @abstractmethod
    def collapse(self, view: Any, node: Any) -> None:
        """Collapse a node in the view. Collapsing twice is a no-op."""
        pass

    # Thread affinity

    def run_on_owner_thread(self, work: Callable[[], T]) -> T:
        """Run work synchronously on the thread that owns the tree.

        Default implementation runs on the calling thread.
        """
        return work()
