"""expandstate - Capture and restore tree expansion state.

expandstate records which nodes of a host's tree view are expanded and
later collapses everything else, so an operation that makes the host
expand nodes can be undone. It works with any host through a HostAdapter.

Typical use:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from expandstate import get_all_expanded_nodes, collapse_all_nodes

    snapshot = get_all_expanded_nodes(host)
    ...                                    # host expands nodes
    collapse_all_nodes(host, snapshot)
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

import logging

__version__ = "0.1.0"

from .config import (
    CaptureConfig,
    ChildEnumeration,
    ConsentConfig,
    IdentityConfig,
    WalkConfig,
)
from .errors import (
    ExpansionStateError,
    HostCallFailure,
    IdentityResolutionError,
    IdentityUnavailable,
    ViewUnavailable,
)
from .core import (
    DepthFirstWalker,
    ExpansionQuery,
    HierarchyRoot,
    HostAdapter,
    IdentityResolver,
    NodeHandle,
    WalkDirective,
    WalkResult,
)
from .error_policies import (
    CollectErrorsPolicy,
    ContinueOnErrorsPolicy,
    FailFastPolicy,
    RootErrorPolicy,
    ThresholdPolicy,
)
from .operation import RootOperation
from .snapshot import ExpansionSnapshot, SnapshotCapturer
from .collapse import SelectiveCollapser
from .dispatch import InlineDispatcher, OwnerThreadDispatcher
from .consent import (
    ConfigurationDefaults,
    EnvironmentReader,
    InMemorySettings,
    RestoreConsent,
    SettingsStore,
)
from .api import collapse_all_nodes, get_all_expanded_nodes, preserve_expansion_state

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Config
    "CaptureConfig",
    "ChildEnumeration",
    "ConsentConfig",
    "IdentityConfig",
    "WalkConfig",
    # Errors
    "ExpansionStateError",
    "HostCallFailure",
    "IdentityResolutionError",
    "IdentityUnavailable",
    "ViewUnavailable",
    "CollectErrorsPolicy",
    "ContinueOnErrorsPolicy",
    "FailFastPolicy",
    "RootErrorPolicy",
    "ThresholdPolicy",
    # Core
    "DepthFirstWalker",
    "ExpansionQuery",
    "HierarchyRoot",
    "HostAdapter",
    "IdentityResolver",
    "NodeHandle",
    "WalkDirective",
    "WalkResult",
    # Operations
    "RootOperation",
    "ExpansionSnapshot",
    "SnapshotCapturer",
    "SelectiveCollapser",
    "InlineDispatcher",
    "OwnerThreadDispatcher",
    # Consent
    "ConfigurationDefaults",
    "EnvironmentReader",
    "InMemorySettings",
    "RestoreConsent",
    "SettingsStore",
    # API
    "collapse_all_nodes",
    "get_all_expanded_nodes",
    "preserve_expansion_state",
]
