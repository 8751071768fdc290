"""Host adapters for expandstate."""

from .memory import InMemoryHost, MemoryNode, MemoryRoot, MemoryTreeView

__all__ = [
    'InMemoryHost',
    'MemoryNode',
    'MemoryRoot',
    'MemoryTreeView',
]
