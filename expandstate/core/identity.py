"""Root identity resolution.

A root is keyed by the host's unique name when it has one, and by its
full name otherwise. The same rule runs for capture and restore, so a
root that falls back does so consistently on both sides.
"""

import logging
from typing import Any, Iterable, Iterator, Optional

from ..config import IdentityConfig
from ..errors import IdentityResolutionError, IdentityUnavailable
from .adapter import HostAdapter
from .node import HierarchyRoot

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Derive stable string keys for host roots."""

    def __init__(self, host: HostAdapter, config: Optional[IdentityConfig] = None):
        """Initialize resolver.

        Args:
            host: Adapter supplying unique_name, full_name and descriptor_kind
            config: Identity configuration (defaults to IdentityConfig())
        """
        self.host = host
        self.config = config or IdentityConfig()

    def primary_identity(self, descriptor: Any) -> str:
        """Return the unique name of a root.

        Raises:
            IdentityUnavailable: If the kind never has one, the host call
                fails, or it returns an empty value
        """
        try:
            kind = self.host.descriptor_kind(descriptor)
            if self.config.lacks_unique_name(kind):
                raise IdentityUnavailable(descriptor, f"kind {kind} has no unique name")
            name = self.host.unique_name(descriptor)
        except IdentityUnavailable:
            raise
        except Exception as e:
            raise IdentityUnavailable(descriptor, str(e)) from e

        if not name:
            raise IdentityUnavailable(descriptor, "empty unique name")
        return name

    def fallback_identity(self, descriptor: Any) -> str:
        """Return the full name of a root.

        Raises:
            IdentityResolutionError: If the full name cannot be obtained
        """
        try:
            name = self.host.full_name(descriptor)
        except Exception as e:
            raise IdentityResolutionError(descriptor) from e

        if not name:
            raise IdentityResolutionError(descriptor)
        return name

    def resolve(self, descriptor: Any) -> str:
        """Resolve the identity of a root, falling back to its full name."""
        try:
            return self.primary_identity(descriptor)
        except IdentityUnavailable as e:
            logger.debug(f"Falling back to full name: {e}")
            return self.fallback_identity(descriptor)

    def resolve_roots(self, roots: Optional[Iterable[Any]] = None) -> Iterator[HierarchyRoot]:
        """Resolve the identities of a collection of roots.

        Roots whose identity cannot be resolved at all are skipped with a
        warning; the remaining roots are still yielded.

        Args:
            roots: (descriptor, handle) pairs or HierarchyRoot instances.
                Defaults to the host's current roots.

        Yields:
            HierarchyRoot for every resolvable root, in input order
        """
        if roots is None:
            roots = self.host.get_roots()

        for entry in roots:
            if isinstance(entry, HierarchyRoot):
                yield entry
                continue

            descriptor, handle = entry
            try:
                identity = self.resolve(descriptor)
            except IdentityResolutionError as e:
                logger.warning(f"Skipping root: {e}")
                continue
            yield HierarchyRoot(identity=identity, handle=handle, descriptor=descriptor)
