"""Exception hierarchy for zone failover operations.

Only resolution and precondition failures abort work; API failures during
mutation and store writes are reported as ``Status.FAILED`` values instead.
"""

from typing import Any, Optional


class AZFailAwayError(Exception):
    """Base class for all failover errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(AZFailAwayError):
    """Configuration is missing or invalid."""


class InvalidOperationError(AZFailAwayError):
    """Trigger payload carries an unknown operation or is malformed."""


class ResolutionError(AZFailAwayError):
    """A zone id did not resolve to a zone name. Fatal to the whole execution."""


class PreconditionError(AZFailAwayError):
    """A zone mutation cannot be computed for an Auto Scaling Group. Fatal to its branch."""


class RecoveryStoreError(AZFailAwayError):
    """Unexpected recovery store failure outside the conditional-create race."""
