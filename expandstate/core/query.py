"""Expansion state queries against a host tree view."""

from typing import Any, Optional

from ..errors import ExpansionStateError, HostCallFailure, ViewUnavailable
from .adapter import HostAdapter


class ExpansionQuery:
    """Read and drive the expansion state of nodes in one tree view.

    Low-level exceptions from the host are wrapped in HostCallFailure so
    callers can isolate them to the root being processed.
    """

    def __init__(self, host: HostAdapter, view: Any):
        self.host = host
        self.view = view

    def is_expandable(self, node: Any) -> bool:
        return bool(self._call("is_expandable", node, self.host.is_expandable, node))

    def is_expanded(self, node: Any) -> bool:
        """Check whether a node is expanded. Leaves are never expanded."""
        if not self.is_expandable(node):
            return False
        return bool(self._call("is_expanded", node, self.host.is_expanded, self.view, node))

    def collapse(self, node: Any) -> None:
        if node is None:
            return
        self._call("collapse", node, self.host.collapse, self.view, node)

    @staticmethod
    def _call(method: str, node: Any, func, *args):
        try:
            return func(*args)
        except ExpansionStateError:
            raise
        except Exception as e:
            raise HostCallFailure(method, node) from e


def open_view(host: HostAdapter) -> Optional[ExpansionQuery]:
    """Look up the host's tree view and bind a query to it.

    Returns:
        ExpansionQuery, or None when the view is unavailable
    """
    try:
        view = host.get_tree_view()
    except ViewUnavailable:
        return None
    except ExpansionStateError:
        raise
    except Exception as e:
        raise HostCallFailure("get_tree_view") from e

    if view is None:
        return None
    return ExpansionQuery(host, view)
