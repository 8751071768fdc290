"""Expansion snapshots and the capturer that produces them.

A snapshot maps each root identity to the set of node handles that were
expanded when it was taken. It only makes sense within the process and
tree state it was captured from; persisting it is up to the caller.
"""

import logging
from typing import Any, Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Tuple

from .core.node import HierarchyRoot
from .core.query import open_view
from .core.walker import WalkDirective
from .errors import HostCallFailure
from .operation import RootOperation

logger = logging.getLogger(__name__)


def _normalize(identity: str, case_sensitive: bool) -> str:
    return identity if case_sensitive else identity.casefold()


class ExpansionSnapshot(Mapping[str, FrozenSet[Any]]):
    """Immutable mapping of root identity to expanded node handles.

    Lookups ignore case unless the snapshot was built case-sensitive.
    Iteration yields identities as they were spelled at capture time.
    """

    def __init__(self,
                 entries: Optional[Mapping[str, Iterable[Any]]] = None,
                 case_sensitive: bool = False):
        self._case_sensitive = case_sensitive
        self._entries: Dict[str, Tuple[str, FrozenSet[Any]]] = {}
        for identity, handles in (entries or {}).items():
            self._entries[_normalize(identity, case_sensitive)] = (identity, frozenset(handles))

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    def __getitem__(self, identity: str) -> FrozenSet[Any]:
        if not isinstance(identity, str):
            raise KeyError(identity)
        return self._entries[_normalize(identity, self._case_sensitive)][1]

    def __iter__(self) -> Iterator[str]:
        return (identity for identity, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        body = ", ".join(f"{identity!r}: {len(handles)} expanded"
                         for identity, handles in self._entries.values())
        return f"ExpansionSnapshot({{{body}}})"

    def total_expanded(self) -> int:
        """Count expanded handles across all roots."""
        return sum(len(handles) for _, handles in self._entries.values())


def lookup_entry(entries: Mapping[str, Any], identity: str, case_sensitive: bool = False) -> Any:
    """Find the entry for a root identity in any identity-keyed mapping.

    Snapshots do their own case handling; for plain mappings an exact
    match wins and a case-insensitive match is tried next.

    Returns:
        The entry, or None when the mapping has none for this root
    """
    if isinstance(entries, ExpansionSnapshot):
        return entries.get(identity)

    if identity in entries:
        return entries[identity]
    if not case_sensitive:
        wanted = identity.casefold()
        for key, value in entries.items():
            if isinstance(key, str) and key.casefold() == wanted:
                return value
    return None


class SnapshotCapturer(RootOperation):
    """Record which nodes are expanded under every root.

    Capture never prunes: an expanded node below a collapsed ancestor is
    still recorded, because its own state survives the ancestor's.
    """

    def capture(self, roots: Optional[Iterable[Any]] = None) -> ExpansionSnapshot:
        """Capture the expanded nodes of every root on the owner thread.

        Args:
            roots: (descriptor, handle) pairs or HierarchyRoot instances;
                defaults to the host's current roots

        Returns:
            ExpansionSnapshot without the roots that could not be resolved
            or whose host calls failed
        """
        return self.host.run_on_owner_thread(lambda: self._capture(roots))

    def _capture(self, roots: Optional[Iterable[Any]]) -> ExpansionSnapshot:
        case_sensitive = self.case_sensitive
        results: Dict[str, FrozenSet[Any]] = {}
        seen: Dict[str, str] = {}

        for root in self.resolver.resolve_roots(roots):
            try:
                expanded = self.capture_root(root)
            except HostCallFailure as e:
                self.policy.handle(e.with_root(root.identity), "capture", root)
                continue

            key = _normalize(root.identity, case_sensitive)
            if key in seen:
                logger.warning(f"Duplicate root identity {root.identity!r}, keeping the later root")
                del results[seen[key]]
            seen[key] = root.identity
            results[root.identity] = expanded
            logger.debug(f"Captured {len(expanded)} expanded nodes in {root.identity!r}")

        return ExpansionSnapshot(results, case_sensitive=case_sensitive)

    def capture_root(self, root: HierarchyRoot) -> FrozenSet[Any]:
        """Collect the expanded nodes of a single root.

        Returns an empty set when the host's tree view is unavailable.

        Raises:
            HostCallFailure: If a host call fails during the walk
        """
        query = open_view(self.host)
        if query is None:
            logger.debug(f"Tree view unavailable, nothing expanded in {root.identity!r}")
            return frozenset()

        expanded = []

        def record_expanded(node, _):
            if query.is_expanded(node):
                expanded.append(node)
            return WalkDirective.CONTINUE

        self.walker.walk(root.handle, record_expanded)
        return frozenset(expanded)
