"""Shared setup for operations that process every root of a host."""

from typing import Optional

from .config import CaptureConfig
from .core.adapter import HostAdapter
from .core.identity import IdentityResolver
from .core.walker import DepthFirstWalker
from .error_policies import ContinueOnErrorsPolicy, RootErrorPolicy


class RootOperation:
    """Base class for capture and collapse.

    Holds the host, a validated configuration, the error policy and the
    resolver and walker built from that configuration.
    """

    def __init__(self,
                 host: HostAdapter,
                 config: Optional[CaptureConfig] = None,
                 policy: Optional[RootErrorPolicy] = None):
        """Initialize operation.

        Args:
            host: Adapter for the environment that owns the tree
            config: Capture configuration, the same for capture and collapse
            policy: What to do when a root fails (defaults to continuing)

        Raises:
            ValueError: If the configuration is invalid
        """
        self.host = host
        self.config = config or CaptureConfig()
        config_errors = self.config.validate()
        if config_errors:
            raise ValueError(f"Invalid configuration: {'; '.join(config_errors)}")

        self.policy = policy or ContinueOnErrorsPolicy()
        self.resolver = IdentityResolver(host, self.config.identity)
        self.walker = DepthFirstWalker(host, self.config.walk)

    @property
    def case_sensitive(self) -> bool:
        return self.config.identity.case_sensitive
