"""Tests for expansion state queries and tree view lookup."""

from unittest.mock import Mock

import pytest

from expandstate import ExpansionQuery, HostAdapter, HostCallFailure, ViewUnavailable
from expandstate.adapters import InMemoryHost, MemoryNode, MemoryRoot
from expandstate.core import open_view


class TestExpansionQuery:
    """Queries delegate to the host and wrap its failures."""

    def test_leaf_never_expanded(self):
        """The host is not asked about the expanded state of leaves."""
        host = Mock(spec=HostAdapter)
        host.is_expandable.return_value = False
        host.is_expanded.return_value = True
        query = ExpansionQuery(host, view="view")

        assert query.is_expanded("leaf") is False
        host.is_expanded.assert_not_called()

    def test_expanded_asks_view(self):
        host = Mock(spec=HostAdapter)
        host.is_expandable.return_value = True
        host.is_expanded.return_value = True
        query = ExpansionQuery(host, view="view")

        assert query.is_expanded("folder") is True
        host.is_expanded.assert_called_once_with("view", "folder")

    def test_collapse_none_is_noop(self):
        host = Mock(spec=HostAdapter)
        ExpansionQuery(host, view="view").collapse(None)

        host.collapse.assert_not_called()

    def test_host_errors_wrapped(self):
        host = Mock(spec=HostAdapter)
        host.is_expandable.return_value = True
        host.is_expanded.side_effect = OSError("invalid item id")
        query = ExpansionQuery(host, view="view")

        with pytest.raises(HostCallFailure) as exc_info:
            query.is_expanded("folder")

        assert exc_info.value.method == "is_expanded"
        assert exc_info.value.node == "folder"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_library_errors_not_rewrapped(self):
        host = Mock(spec=HostAdapter)
        host.collapse.side_effect = ViewUnavailable("gone")
        query = ExpansionQuery(host, view="view")

        with pytest.raises(ViewUnavailable):
            query.collapse("folder")

    def test_collapse_idempotent(self):
        """Collapsing twice leaves the same state as collapsing once."""
        node = MemoryNode("folder", [MemoryNode("file")], expanded=True)
        host = InMemoryHost([MemoryRoot(node=node, unique_name="p")])
        query = ExpansionQuery(host, host.view)

        query.collapse(node)
        after_once = query.is_expanded(node)
        query.collapse(node)

        assert after_once is False
        assert query.is_expanded(node) is False


class TestOpenView:
    """The tree view is looked up once and may be missing."""

    def test_view_none(self):
        host = Mock(spec=HostAdapter)
        host.get_tree_view.return_value = None

        assert open_view(host) is None

    def test_view_unavailable(self):
        host = Mock(spec=HostAdapter)
        host.get_tree_view.side_effect = ViewUnavailable("never realized")

        assert open_view(host) is None

    def test_view_lookup_failure(self):
        host = Mock(spec=HostAdapter)
        host.get_tree_view.side_effect = RuntimeError("service missing")

        with pytest.raises(HostCallFailure) as exc_info:
            open_view(host)
        assert exc_info.value.method == "get_tree_view"

    def test_view_bound(self):
        host = InMemoryHost([])

        query = open_view(host)

        assert query is not None
        assert query.view is host.view
