"""Testing utilities for expandstate consumers."""

from .fixtures import ExpansionStateHelper, build_host, build_node

__all__ = ['ExpansionStateHelper', 'build_host', 'build_node']
