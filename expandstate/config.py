"""Configuration system for expandstate.

This module defines how callers tune capture and restore: which children
the walker enumerates, how root identities are resolved and compared, and
which settings keys drive the restore consent lookup.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List


# Project type GUID of WiX setup projects, which never expose a unique name
WIX_PROJECT_KIND = "930C7802-8A8C-48F9-8165-68863BCCD9DD"


class ChildEnumeration(Enum):
    """Which children the walker asks the host for."""
    VISIBLE = "visible"     # Only children the host reports as visible
    ALL = "all"             # Every child, visible or not


@dataclass
class WalkConfig:
    """Configuration for the depth-first walker."""

    children: ChildEnumeration = ChildEnumeration.VISIBLE

    @property
    def visible_only(self) -> bool:
        return self.children is ChildEnumeration.VISIBLE


@dataclass
class IdentityConfig:
    """Configuration for resolving and comparing root identities."""

    # Descriptor kinds that never expose a unique name (compared ignoring case)
    kinds_without_unique_name: FrozenSet[str] = frozenset({WIX_PROJECT_KIND})

    # Snapshot lookups ignore case, like the host's own project names
    case_sensitive: bool = False

    def lacks_unique_name(self, kind) -> bool:
        """Check whether descriptors of this kind skip the unique name."""
        if not kind:
            return False
        wanted = str(kind).casefold()
        return any(wanted == k.casefold() for k in self.kinds_without_unique_name)


@dataclass
class CaptureConfig:
    """Complete configuration for capture and selective collapse."""

    walk: WalkConfig = field(default_factory=WalkConfig)
    identity: IdentityConfig = field(default_factory=IdentityConfig)

    @classmethod
    def all_children(cls) -> 'CaptureConfig':
        """Create a config that also walks children the host hides."""
        return cls(walk=WalkConfig(children=ChildEnumeration.ALL))

    @classmethod
    def case_sensitive(cls) -> 'CaptureConfig':
        """Create a config that compares root identities exactly."""
        return cls(identity=IdentityConfig(case_sensitive=True))

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.walk.children, ChildEnumeration):
            errors.append("walk.children must be a ChildEnumeration")

        for kind in self.identity.kinds_without_unique_name:
            if not isinstance(kind, str) or not kind.strip():
                errors.append("kinds_without_unique_name entries must be non-empty strings")
                break

        return errors


@dataclass
class ConsentConfig:
    """Names used to look up the restore consent setting."""

    environment_variable: str = "EnableNuGetPackageRestore"
    section: str = "packageRestore"
    consent_key: str = "enabled"
    automatic_key: str = "automatic"
