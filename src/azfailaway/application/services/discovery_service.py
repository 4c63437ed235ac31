"""Discovery of the Auto Scaling Groups affected by a failover operation."""

from collections.abc import Iterator
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from azfailaway.domain.events import AutoScalingGroupDetails, OperationEvent
from azfailaway.domain.ports.logging_port import LoggingPort
from azfailaway.domain.ports.recovery_store_port import RecoveryStorePort
from azfailaway.providers.aws.infrastructure.handlers.asg_handler import ASGHandler
from azfailaway.providers.aws.infrastructure.handlers.zone_resolver import ZoneResolver


class DiscoveryService:
    """Finds groups to fail away from a zone, or groups to restore into it."""

    def __init__(
        self,
        zone_resolver: ZoneResolver,
        asg_handler: ASGHandler,
        recovery_store: RecoveryStorePort,
        logger: LoggingPort,
    ) -> None:
        self.zone_resolver = zone_resolver
        self.asg_handler = asg_handler
        self.recovery_store = recovery_store
        self._logger = logger

    def find_groups_using_zone(self, event: OperationEvent) -> Iterator[AutoScalingGroupDetails]:
        """
        Resolve the zone and return a lazy sequence of groups currently using it.

        The zone is resolved before this method returns, so a ResolutionError
        is raised here rather than on first iteration. Listing errors surface
        while iterating.
        """
        zone_name = self.zone_resolver.resolve(event.zone_id, event.region)
        return self._iter_groups_in_zone(zone_name, event)

    def _iter_groups_in_zone(
        self, zone_name: str, event: OperationEvent
    ) -> Iterator[AutoScalingGroupDetails]:
        count = 0
        for asg_data in self.asg_handler.iter_auto_scaling_groups():
            if zone_name not in (asg_data.get("AvailabilityZones") or []):
                continue
            details = AutoScalingGroupDetails.from_describe_auto_scaling_group(
                asg_data, zone_name, event
            )
            count += 1
            self._logger.info(
                "Found Auto Scaling Group %s using zone %s (zones=%s)",
                details.name,
                zone_name,
                ",".join(details.availability_zones),
            )
            yield details
        self._logger.info("Found %d Auto Scaling Groups using zone %s", count, zone_name)

    def find_groups_previously_using_zone(
        self, event: OperationEvent
    ) -> list[AutoScalingGroupDetails]:
        """
        Rebuild the live configuration of every group recorded as removed from the zone.

        Groups that no longer exist are skipped. A missing recovery record
        means there is nothing to restore.
        """
        entries = self.recovery_store.get(event.recovery_key)
        if entries is None:
            self._logger.warning("No item found for id: %s", event.recovery_key)
            return []

        results = []
        for saved_event in entries.values():
            current = self._refresh(saved_event.details, event)
            if current is not None:
                results.append(current)
        self._logger.info(
            "Found %d of %d recorded Auto Scaling Groups to restore for %s",
            len(results),
            len(entries),
            event.recovery_key,
        )
        return results

    def _refresh(
        self, saved: AutoScalingGroupDetails, event: OperationEvent
    ) -> Optional[AutoScalingGroupDetails]:
        """Re-read a saved group and add back its recorded subnets in the saved zone."""
        try:
            asg_data = self.asg_handler.describe_auto_scaling_group(saved.name)
        except (ClientError, BotoCoreError) as e:
            self._logger.warning("Problem looking up Auto Scaling Group %s: %s", saved.name, e)
            return None
        if asg_data is None:
            self._logger.warning(
                "Could not retrieve current information for Auto Scaling Group %s", saved.name
            )
            return None

        current = AutoScalingGroupDetails.from_describe_auto_scaling_group(
            asg_data, saved.zone_name, event
        )

        # Subnets of the stripped zone are no longer in the live VPC zone identifier
        zone_subnets = self.asg_handler.describe_subnet_ids([saved.zone_name])
        if not zone_subnets:
            self._logger.warning("No subnets found for availability zone %s", saved.zone_name)
        recorded = set(saved.subnet_ids)
        restored = [s for s in zone_subnets if s in recorded]

        subnet_ids = list(current.subnet_ids)
        subnet_ids.extend(s for s in restored if s not in subnet_ids)
        self._logger.debug(
            "Restoring subnets %s to Auto Scaling Group %s", restored, current.name
        )
        return current.model_copy(update={"subnet_ids": tuple(subnet_ids)})
