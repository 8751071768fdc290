"""
Error handling policies for expandstate.

Capture and restore process roots one at a time. When a host call fails
for a root, the failure is handed to a policy that decides whether the
operation carries on with the remaining roots or stops.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .errors import HostCallFailure

logger = logging.getLogger(__name__)


class RootErrorPolicy(ABC):
    """
    Base class for per-root error handling policies.
    """

    @abstractmethod
    def handle(self, error: HostCallFailure, operation: str, root: Any) -> None:
        """
        Handle a host failure that aborted the processing of one root.

        Args:
            error: The failure, already tagged with the root identity
            operation: Name of the operation ('capture' or 'collapse')
            root: The HierarchyRoot being processed

        Returns:
            None to continue with the next root; raising stops the operation.
        """
        pass


class FailFastPolicy(RootErrorPolicy):
    """
    Policy that immediately re-raises, stopping the whole operation.
    """

    def handle(self, error: HostCallFailure, operation: str, root: Any) -> None:
        raise error


class CollectErrorsPolicy(RootErrorPolicy):
    """
    Policy that records every failure silently and continues.

    Useful when the caller wants to report all failures at the end.
    """

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []

    def handle(self, error: HostCallFailure, operation: str, root: Any) -> None:
        self._record(error, operation, root)

    def _record(self, error: HostCallFailure, operation: str, root: Any) -> None:
        cause = error.__cause__
        self.errors.append({
            'root': getattr(root, 'identity', root),
            'operation': operation,
            'method': error.method,
            'error': error,
            'error_type': type(cause).__name__ if cause is not None else type(error).__name__,
            'error_message': str(cause) if cause is not None else str(error),
        })

    @property
    def failed_roots(self) -> List[str]:
        """Identities of the roots that failed, in failure order."""
        return [record['root'] for record in self.errors]


class ContinueOnErrorsPolicy(CollectErrorsPolicy):
    """
    Policy that records failures, logs them and continues.

    This is the default: one bad root never costs the others their result.
    """

    def __init__(self, verbose: bool = True):
        """
        Args:
            verbose: If True, log a warning for each failure
        """
        super().__init__()
        self.verbose = verbose

    def handle(self, error: HostCallFailure, operation: str, root: Any) -> None:
        self._record(error, operation, root)
        if self.verbose:
            logger.warning(f"Skipping root during {operation}: {error} ({error.__cause__})")

    def get_statistics(self) -> dict:
        """
        Get statistics about failures encountered.

        Returns:
            Dictionary with failure counts and details
        """
        return {
            'total_errors': len(self.errors),
            'capture_errors': sum(1 for e in self.errors if e['operation'] == 'capture'),
            'collapse_errors': sum(1 for e in self.errors if e['operation'] == 'collapse'),
            'failed_roots': self.failed_roots,
            'errors': self.errors,
        }


class ThresholdPolicy(RootErrorPolicy):
    """
    Policy that tolerates failures up to a threshold, then fails.

    Useful when a few bad roots are expected but many indicate that the
    host itself is broken.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Args:
            max_errors: Maximum failures to tolerate before raising
            verbose: If True, log a warning for each tolerated failure
        """
        self.max_errors = max_errors
        self.error_count = 0
        self.verbose = verbose
        self.errors: List[HostCallFailure] = []

    def handle(self, error: HostCallFailure, operation: str, root: Any) -> None:
        self.error_count += 1
        self.errors.append(error)

        if self.error_count > self.max_errors:
            raise RuntimeError(f"Error threshold exceeded ({self.max_errors} errors)") from error

        if self.verbose:
            logger.warning(f"[{self.error_count}/{self.max_errors}] {operation} failed: {error}")
