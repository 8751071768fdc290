"""Selective collapse of host trees.

The collapser folds every node of a root back up, leaving alone the nodes
in that root's ignore set. Feeding it a snapshot taken earlier restores
the expansion state the snapshot recorded, as far as collapsing can.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from .core.node import HierarchyRoot
from .core.query import open_view
from .core.walker import WalkDirective
from .errors import HostCallFailure
from .operation import RootOperation
from .snapshot import lookup_entry

logger = logging.getLogger(__name__)


class SelectiveCollapser(RootOperation):
    """Collapse every node of a root except an ignore set.

    A root with no entry in the ignore mapping is left untouched: no entry
    means no opinion, not "collapse everything". An empty entry collapses
    the whole root.
    """

    def collapse(self,
                 ignore: Mapping[str, Optional[Iterable[Any]]],
                 roots: Optional[Iterable[Any]] = None) -> Dict[str, int]:
        """Collapse all roots mentioned in ignore, on the owner thread.

        Args:
            ignore: Root identity to handles that must keep their state,
                usually an ExpansionSnapshot
            roots: (descriptor, handle) pairs or HierarchyRoot instances;
                defaults to the host's current roots

        Returns:
            Number of collapse calls issued per processed root
        """
        return self.host.run_on_owner_thread(lambda: self._collapse(ignore, roots))

    def _collapse(self, ignore, roots) -> Dict[str, int]:
        case_sensitive = self.case_sensitive
        collapsed: Dict[str, int] = {}

        for root in self.resolver.resolve_roots(roots):
            entry = lookup_entry(ignore, root.identity, case_sensitive)
            if entry is None:
                logger.debug(f"No ignore entry for {root.identity!r}, leaving it untouched")
                continue

            try:
                collapsed[root.identity] = self.collapse_root(root, entry)
            except HostCallFailure as e:
                self.policy.handle(e.with_root(root.identity), "collapse", root)

        return collapsed

    def collapse_root(self, root: HierarchyRoot, ignored: Iterable[Any]) -> int:
        """Collapse the nodes of one root that are not in ignored.

        The walk still enters the children of every collapsed node so
        deeper descendants are collapsed too. Returns 0 when the tree view
        is unavailable.

        Raises:
            HostCallFailure: If a host call fails during the walk
        """
        query = open_view(self.host)
        if query is None:
            logger.debug(f"Tree view unavailable, skipping {root.identity!r}")
            return 0

        ignored = ignored if isinstance(ignored, (set, frozenset)) else frozenset(ignored)
        count = 0

        def collapse_unless_ignored(node, _):
            nonlocal count
            if node not in ignored and query.is_expandable(node):
                query.collapse(node)
                count += 1
            return WalkDirective.CONTINUE

        self.walker.walk(root.handle, collapse_unless_ignored)
        return count
