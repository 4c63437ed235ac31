"""Domain layer - failover value types, results and ports."""

from azfailaway.domain.events import (
    AutoScalingGroupDetails,
    Operation,
    OperationEvent,
    SaveAzInfo,
    Status,
    UpdateAutoScalingGroupEvent,
)
from azfailaway.domain.exceptions import (
    AZFailAwayError,
    ConfigurationError,
    InvalidOperationError,
    PreconditionError,
    RecoveryStoreError,
    ResolutionError,
)
from azfailaway.domain.results import BranchResult, BranchState, ExecutionResult

__all__: list[str] = [
    "AZFailAwayError",
    "AutoScalingGroupDetails",
    "BranchResult",
    "BranchState",
    "ConfigurationError",
    "ExecutionResult",
    "InvalidOperationError",
    "Operation",
    "OperationEvent",
    "PreconditionError",
    "RecoveryStoreError",
    "ResolutionError",
    "SaveAzInfo",
    "Status",
    "UpdateAutoScalingGroupEvent",
]
