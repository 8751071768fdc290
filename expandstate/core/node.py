"""Node and root abstractions for expandstate.

Node handles are owned by the host. The core only needs them to be
hashable with an equality that stays stable for the duration of a walk,
so any hashable object works. NodeHandle is a convenience base class for
hosts whose native objects do not compare by identity.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Hashable


class NodeHandle(ABC):
    """Base class for host node handles compared by identifier.

    Subclasses return a key that is unique within the tree and stable
    across walks; equality and hashing are derived from it.
    """

    @abstractmethod
    def identifier(self) -> Hashable:
        """Return the key that identifies this node within its tree."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.identifier()!r})"

    def __eq__(self, other: object) -> bool:
        """Handles are equal if they have the same identifier."""
        if not isinstance(other, NodeHandle):
            return NotImplemented
        return self.identifier() == other.identifier()

    def __hash__(self) -> int:
        return hash(self.identifier())


@dataclass(frozen=True)
class HierarchyRoot:
    """A top-level tree whose identity has been resolved.

    Attributes:
        identity: Key of the root, unique within one capture/restore pair
        handle: Host handle of the root node
        descriptor: Host-level object the identity was resolved from
    """

    identity: str
    handle: Any
    descriptor: Any = None
