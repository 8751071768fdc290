"""Test fixtures for expandstate consumers.

These helpers build in-memory hosts from compact descriptions and give
tests a stable way to inspect and perturb expansion state.
"""

from typing import Any, Dict, Iterable, Optional, Set, Tuple, Union

from ..adapters.memory import InMemoryHost, MemoryNode, MemoryRoot

# ("name", [children...]) or ("name", [children...], {"expanded": True, ...})
NodeSpec = Union[str, Tuple[Any, ...]]


def build_node(spec: NodeSpec) -> MemoryNode:
    """Build a MemoryNode tree from a nested description.

    A bare string is a leaf. A tuple holds the name, an optional list of
    child specs and an optional dict of MemoryNode keyword arguments.

    Example:
        >>> root = build_node(("root", ["a", ("b", ["c"], {"expanded": True})]))
    """
    if isinstance(spec, str):
        return MemoryNode(spec)

    name = spec[0]
    children = spec[1] if len(spec) > 1 else []
    options: Dict[str, Any] = spec[2] if len(spec) > 2 else {}
    return MemoryNode(name, [build_node(child) for child in children], **options)


def build_host(roots: Dict[str, NodeSpec], **host_options) -> InMemoryHost:
    """Build a host with one root per entry, keyed by unique name.

    The full name of each root is derived from its unique name.
    """
    return InMemoryHost(
        [MemoryRoot(node=build_node(spec), unique_name=name, full_name=f"/work/{name}")
         for name, spec in roots.items()],
        **host_options,
    )


class ExpansionStateHelper:
    """Inspect and perturb the expansion state of an InMemoryHost.

    Example:
        helper = ExpansionStateHelper(host)
        before = helper.expanded_names()
        helper.expand_everything()
        assert helper.expanded_names() >= before
    """

    def __init__(self, host: InMemoryHost):
        self._host = host

    def root(self, unique_name: str) -> MemoryNode:
        for root in self._host.roots:
            if root.unique_name == unique_name:
                return root.node
        raise KeyError(unique_name)

    def node(self, path: str) -> MemoryNode:
        """Find a node by its slash-separated path."""
        for root in self._host.roots:
            for node in root.node.iter_subtree():
                if node.identifier() == path:
                    return node
        raise KeyError(path)

    def expanded_names(self, root: Optional[str] = None) -> Set[str]:
        """Paths of expanded nodes, across all roots or in one root."""
        nodes = self._host.expanded_nodes()
        if root is not None:
            subtree = set(self.root(root).iter_subtree())
            nodes = {n for n in nodes if n in subtree}
        return {node.identifier() for node in nodes}

    def expand_everything(self, roots: Optional[Iterable[str]] = None) -> None:
        """Expand every expandable node, like a host adding references would."""
        wanted = None if roots is None else set(roots)
        for root in self._host.roots:
            if wanted is not None and root.unique_name not in wanted:
                continue
            for node in root.node.iter_subtree():
                self._host.expand(node)

    def collapse_calls(self) -> list:
        """Paths passed to collapse, in call order."""
        return [node.identifier() for node in self._host.view.collapse_calls]

    def get_summary(self) -> Dict[str, Any]:
        """Returns high-level state for assertions."""
        all_nodes = [n for r in self._host.roots for n in r.node.iter_subtree()]
        return {
            'roots': len(self._host.roots),
            'nodes': len(all_nodes),
            'expandable': sum(1 for n in all_nodes if n.expandable),
            'expanded': len(self._host.expanded_nodes()),
            'collapse_calls': len(self._host.view.collapse_calls),
        }
