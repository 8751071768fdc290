"""High-level API for expandstate.

This module provides simple, functional interfaces for the common cases.
These functions wrap SnapshotCapturer and SelectiveCollapser so callers
do not have to assemble them.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional

from .collapse import SelectiveCollapser
from .config import CaptureConfig
from .core.adapter import HostAdapter
from .error_policies import RootErrorPolicy
from .snapshot import ExpansionSnapshot, SnapshotCapturer

logger = logging.getLogger(__name__)


def get_all_expanded_nodes(
    host: HostAdapter,
    roots: Optional[Iterable[Any]] = None,
    config: Optional[CaptureConfig] = None,
    policy: Optional[RootErrorPolicy] = None,
) -> ExpansionSnapshot:
    """Capture which nodes are expanded under every root.

    Args:
        host: Adapter for the environment that owns the tree
        roots: Roots to capture (defaults to all of the host's roots)
        config: Capture configuration
        policy: Error policy for failing roots

    Returns:
        ExpansionSnapshot keyed by root identity

    Example:
        >>> snapshot = get_all_expanded_nodes(host)
        >>> for identity, expanded in snapshot.items():
        ...     print(identity, len(expanded))
    """
    return SnapshotCapturer(host, config=config, policy=policy).capture(roots)


def collapse_all_nodes(
    host: HostAdapter,
    ignore_nodes: Mapping[str, Optional[Iterable[Any]]],
    roots: Optional[Iterable[Any]] = None,
    config: Optional[CaptureConfig] = None,
    policy: Optional[RootErrorPolicy] = None,
) -> Dict[str, int]:
    """Collapse every node except those in ignore_nodes.

    Only roots that have an entry in ignore_nodes are touched.

    Args:
        host: Adapter for the environment that owns the tree
        ignore_nodes: Root identity to handles that keep their state
        roots: Roots to process (defaults to all of the host's roots)
        config: Configuration the ignore structure was captured with
        policy: Error policy for failing roots

    Returns:
        Number of collapse calls issued per processed root
    """
    return SelectiveCollapser(host, config=config, policy=policy).collapse(ignore_nodes, roots)


@contextmanager
def preserve_expansion_state(
    host: HostAdapter,
    config: Optional[CaptureConfig] = None,
    policy: Optional[RootErrorPolicy] = None,
) -> Iterator[ExpansionSnapshot]:
    """Fold back whatever gets expanded while the block runs.

    Captures on entry and, on exit, collapses every node that was not
    expanded at entry. Restoring runs even when the block raises; the
    block's exception still propagates.

    Example:
        >>> with preserve_expansion_state(host):
        ...     add_references(project)   # host expands nodes as it works
    """
    snapshot = get_all_expanded_nodes(host, config=config, policy=policy)
    logger.debug(f"Preserving {snapshot.total_expanded()} expanded nodes in {len(snapshot)} roots")
    try:
        yield snapshot
    finally:
        collapse_all_nodes(host, snapshot, config=config, policy=policy)
