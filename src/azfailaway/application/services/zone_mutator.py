"""Zone mutation of a single Auto Scaling Group."""

from collections.abc import Sequence
from typing import Callable

from botocore.exceptions import BotoCoreError, ClientError

from azfailaway.domain.events import AutoScalingGroupDetails, Status, UpdateAutoScalingGroupEvent
from azfailaway.domain.exceptions import PreconditionError
from azfailaway.domain.ports.logging_port import LoggingPort
from azfailaway.providers.aws.infrastructure.handlers.asg_handler import ASGHandler

TargetZones = Callable[[Sequence[str]], list[str]]


class ZoneMutator:
    """
    Computes and applies a new zone configuration for one group.

    API failures are returned as failed events and never raised. Only
    ``PreconditionError`` escapes, before any mutating call is made.
    """

    def __init__(self, asg_handler: ASGHandler, logger: LoggingPort) -> None:
        self.asg_handler = asg_handler
        self._logger = logger

    def remove_zone(self, details: AutoScalingGroupDetails) -> UpdateAutoScalingGroupEvent:
        """Drop ``details.zone_name`` from the group, keeping the order of the other zones."""
        if not details.availability_zones:
            raise PreconditionError(
                f"No AZs specified for ASG: {details.name}", {"asg_name": details.name}
            )
        if list(details.availability_zones) == [details.zone_name]:
            raise PreconditionError(
                f"Cannot remove {details.zone_name}, the only AZ of ASG: {details.name}",
                {"asg_name": details.name, "zone_name": details.zone_name},
            )

        return self.mutate(
            details, lambda zones: [zone for zone in zones if zone != details.zone_name]
        )

    def restore_zone(self, details: AutoScalingGroupDetails) -> UpdateAutoScalingGroupEvent:
        """
        Append ``details.zone_name`` to the group's zones.

        A group that already uses the zone was restored by an earlier run whose
        recovery entry was never forgotten. No update is sent and the outcome
        is a success, so the entry is forgotten this time.
        """
        if details.zone_name in details.availability_zones:
            self._logger.warning(
                "ASG %s already uses %s; treating the restore as applied",
                details.name,
                details.zone_name,
            )
            return UpdateAutoScalingGroupEvent(
                availability_zones=details.availability_zones,
                subnet_ids=details.subnet_ids,
                status=Status.SUCCESS,
                details=details,
            )

        return self.mutate(details, lambda zones: [*zones, details.zone_name])

    def mutate(
        self, details: AutoScalingGroupDetails, target_zones: TargetZones
    ) -> UpdateAutoScalingGroupEvent:
        """
        Apply the zone list computed by ``target_zones`` to the group.

        Only subnets already known for the group are ever attached: the new
        subnet list is the known subnets that lie in the target zones.
        """
        availability_zones = target_zones(details.availability_zones)

        def outcome(status: Status, subnet_ids: Sequence[str] = ()) -> UpdateAutoScalingGroupEvent:
            return UpdateAutoScalingGroupEvent(
                availability_zones=availability_zones,
                subnet_ids=subnet_ids,
                status=status,
                details=details,
            )

        try:
            subnet_ids = (
                self.asg_handler.describe_subnet_ids(availability_zones, details.subnet_ids)
                if details.subnet_ids
                else []
            )
        except (ClientError, BotoCoreError) as e:
            self._logger.error("Subnet lookup for ASG %s failed: %s", details.name, e)
            return outcome(Status.FAILED)

        if details.subnet_ids and not subnet_ids:
            # Omitting VPCZoneIdentifier would leave the current subnets attached
            self._logger.error(
                "None of the subnets %s of ASG %s lie in zones %s",
                ",".join(details.subnet_ids),
                details.name,
                ",".join(availability_zones),
            )
            return outcome(Status.FAILED)

        try:
            response = self.asg_handler.update_zones(details.name, availability_zones, subnet_ids)
        except (ClientError, BotoCoreError) as e:
            self._logger.error("ASG %s failed update: %s", details.name, e)
            return outcome(Status.FAILED, subnet_ids)

        status_code = response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if status_code != 200:
            self._logger.error("ASG %s update returned HTTP %s", details.name, status_code)
            return outcome(Status.FAILED, subnet_ids)

        self._logger.info(
            "ASG %s successfully updated: zones=%s subnets=%s",
            details.name,
            ",".join(availability_zones),
            ",".join(subnet_ids),
        )
        return outcome(Status.SUCCESS, subnet_ids)
