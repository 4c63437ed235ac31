"""
Failover orchestration.

resolve -> discover -> bounded fan-out over mutate-then-record (Remove) or
mutate-then-forget (Restore) -> aggregate.

Branches are independent. A failed branch does not cancel its siblings and
nothing already applied is rolled back; the failure only makes the overall
result fail. A crash between a successful mutation and its store write
leaves the group mutated but unrecorded; re-running Remove re-applies the
same zone list and records it.
"""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

from azfailaway.application.services.discovery_service import DiscoveryService
from azfailaway.application.services.zone_mutator import ZoneMutator
from azfailaway.domain.events import (
    AutoScalingGroupDetails,
    Operation,
    OperationEvent,
    SaveAzInfo,
    Status,
    UpdateAutoScalingGroupEvent,
)
from azfailaway.domain.exceptions import InvalidOperationError, PreconditionError
from azfailaway.domain.ports.logging_port import LoggingPort
from azfailaway.domain.ports.recovery_store_port import RecoveryStorePort
from azfailaway.domain.results import BranchResult, BranchState, ExecutionResult

DEFAULT_MAX_CONCURRENCY = 3


class FailoverOrchestrator:
    """Runs one Remove or Restore execution end to end."""

    def __init__(
        self,
        discovery: DiscoveryService,
        mutator: ZoneMutator,
        recovery_store: RecoveryStorePort,
        logger: LoggingPort,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        region: Optional[str] = None,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.discovery = discovery
        self.mutator = mutator
        self.recovery_store = recovery_store
        self._logger = logger
        self.max_concurrency = max_concurrency
        # Region the AWS clients are bound to; events for any other region are refused
        self.region = region

    def run(self, event: OperationEvent) -> ExecutionResult:
        """
        Execute the operation described by ``event``.

        Raises:
            ResolutionError: If the zone id cannot be resolved (Remove)
            InvalidOperationError: If the operation is neither Remove nor Restore,
                or the event targets a region other than the clients' region
        """
        if self.region is not None and event.region != self.region:
            raise InvalidOperationError(
                f"Event targets region {event.region} but AWS clients are bound to {self.region}",
                {"event_region": event.region, "client_region": self.region},
            )

        self._logger.info(
            "Starting %s of zone %s for account %s in %s",
            event.operation,
            event.zone_id,
            event.account_id,
            event.region,
        )

        if event.operation == Operation.REMOVE:
            groups: Iterable[AutoScalingGroupDetails] = self.discovery.find_groups_using_zone(event)
            branch = self.remove_branch
        elif event.operation == Operation.RESTORE:
            groups = self.discovery.find_groups_previously_using_zone(event)
            branch = self.restore_branch
        else:
            raise InvalidOperationError(f"Unsupported operation {event.operation!r}")

        branches = self._fan_out(groups, branch)
        result = ExecutionResult(operation_event=event, branches=branches)

        if result.status == Status.SUCCESS:
            self._logger.info(
                "%s of zone %s succeeded for %d Auto Scaling Groups",
                event.operation,
                event.zone_id,
                len(branches),
            )
        else:
            self._logger.error(
                "%s of zone %s failed for %d of %d Auto Scaling Groups: %s",
                event.operation,
                event.zone_id,
                len(result.failed_branches),
                len(branches),
                ", ".join(f"{b.asg_name} ({b.state})" for b in result.failed_branches),
            )
        return result

    def _fan_out(
        self,
        groups: Iterable[AutoScalingGroupDetails],
        branch: Callable[[AutoScalingGroupDetails], BranchResult],
    ) -> tuple[BranchResult, ...]:
        """Run ``branch`` for every group with at most ``max_concurrency`` in flight."""
        with ThreadPoolExecutor(
            max_workers=self.max_concurrency, thread_name_prefix="azfailaway"
        ) as executor:
            futures = [executor.submit(branch, details) for details in groups]
            return tuple(future.result() for future in futures)

    def remove_branch(self, details: AutoScalingGroupDetails) -> BranchResult:
        return self._run_branch(
            details,
            mutate=self.mutator.remove_zone,
            store=self.recovery_store.record,
            mutation_failed=BranchState.REMOVAL_FAILED,
            store_succeeded=BranchState.ADD_SUCCEEDED,
            store_failed=BranchState.ADD_FAILED,
        )

    def restore_branch(self, details: AutoScalingGroupDetails) -> BranchResult:
        return self._run_branch(
            details,
            mutate=self.mutator.restore_zone,
            store=self.recovery_store.forget,
            mutation_failed=BranchState.RESTORE_FAILED,
            store_succeeded=BranchState.DELETE_SUCCEEDED,
            store_failed=BranchState.DELETE_FAILED,
        )

    def _run_branch(
        self,
        details: AutoScalingGroupDetails,
        mutate: Callable[[AutoScalingGroupDetails], UpdateAutoScalingGroupEvent],
        store: Callable[[UpdateAutoScalingGroupEvent], SaveAzInfo],
        mutation_failed: BranchState,
        store_succeeded: BranchState,
        store_failed: BranchState,
    ) -> BranchResult:
        try:
            mutation = mutate(details)
        except PreconditionError as e:
            self._logger.error("Skipping Auto Scaling Group %s: %s", details.name, e.message)
            return BranchResult(
                asg_name=details.name, state=BranchState.PRECONDITION_FAILED, error=e.message
            )

        if not mutation.succeeded:
            return BranchResult(asg_name=details.name, state=mutation_failed, mutation=mutation)

        # Store write only after a successful mutation
        save = store(mutation)
        state = store_succeeded if save.status == Status.SUCCESS else store_failed
        if state == store_failed:
            self._logger.error(
                "Auto Scaling Group %s was updated but its recovery entry was not written",
                details.name,
            )
        return BranchResult(asg_name=details.name, state=state, mutation=mutation, save=save)
