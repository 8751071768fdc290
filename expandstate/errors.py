"""Exception types for expandstate.

Most of these are recovered locally by the capturer and collapser; only
HostCallFailure is routed to an error policy, and IdentityResolutionError
causes the affected root to be skipped.
"""

from typing import Any, Optional


class ExpansionStateError(Exception):
    """Base class for all expandstate errors."""
    pass


class IdentityUnavailable(ExpansionStateError):
    """The preferred identity source cannot produce a key for a root.

    Raised when the host's unique-name lookup throws, returns nothing, or
    the descriptor belongs to a kind that never exposes a unique name.
    """

    def __init__(self, descriptor: Any, reason: str = ""):
        self.descriptor = descriptor
        self.reason = reason
        message = f"Unique name unavailable for {descriptor!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class IdentityResolutionError(ExpansionStateError):
    """Neither the preferred nor the fallback identity could be resolved."""

    def __init__(self, descriptor: Any):
        self.descriptor = descriptor
        super().__init__(f"No identity could be resolved for {descriptor!r}")


class ViewUnavailable(ExpansionStateError):
    """The host has no realized tree view to query or drive."""
    pass


class HostCallFailure(ExpansionStateError):
    """A call into the host raised a low-level error.

    Attributes:
        method: Name of the host method that failed
        node: Node handle the call was made for (None for root-level calls)
        root: Identity of the root being processed, once known
    """

    def __init__(self, method: str, node: Any = None, root: Optional[str] = None):
        self.method = method
        self.node = node
        self.root = root
        super().__init__(self._format())

    def _format(self) -> str:
        where = f" for {self.node!r}" if self.node is not None else ""
        within = f" in root {self.root!r}" if self.root is not None else ""
        return f"Host call {self.method}{where}{within} failed"

    def with_root(self, root: str) -> 'HostCallFailure':
        """Attach the identity of the root the failure happened in."""
        self.root = root
        self.args = (self._format(),)
        return self
