"""Execution result tree - per-branch terminal states rooted at one operation."""

from typing import Optional

from pydantic import Field, computed_field

from azfailaway.domain.events import (
    BaseEnumModel,
    FailoverModel,
    OperationEvent,
    SaveAzInfo,
    Status,
    UpdateAutoScalingGroupEvent,
)


class BranchState(BaseEnumModel):
    """Terminal state reached by one fanned-out branch."""

    ADD_SUCCEEDED = "Add succeeded"
    ADD_FAILED = "Add failed"
    REMOVAL_FAILED = "AZ removal failed"
    DELETE_SUCCEEDED = "Delete succeeded"
    DELETE_FAILED = "Delete failed"
    RESTORE_FAILED = "Restore failed"
    PRECONDITION_FAILED = "Precondition failed"

    @property
    def succeeded(self) -> bool:
        return self in (BranchState.ADD_SUCCEEDED, BranchState.DELETE_SUCCEEDED)


class BranchResult(FailoverModel):
    """Outcome of mutate-then-store for one Auto Scaling Group."""

    asg_name: str = Field(alias="asgName")
    state: BranchState
    mutation: Optional[UpdateAutoScalingGroupEvent] = None
    save: Optional[SaveAzInfo] = None
    error: Optional[str] = None

    @computed_field
    @property
    def status(self) -> Status:
        return Status.SUCCESS if self.state.succeeded else Status.FAILED


class ExecutionResult(FailoverModel):
    """Aggregated outcome of one Remove or Restore execution."""

    operation_event: OperationEvent = Field(alias="operationEvent")
    branches: tuple[BranchResult, ...] = ()

    @computed_field
    @property
    def status(self) -> Status:
        """Success only if every branch succeeded; vacuously true with no branches."""
        if all(branch.status == Status.SUCCESS for branch in self.branches):
            return Status.SUCCESS
        return Status.FAILED

    @property
    def failed_branches(self) -> list[BranchResult]:
        return [branch for branch in self.branches if branch.status == Status.FAILED]
