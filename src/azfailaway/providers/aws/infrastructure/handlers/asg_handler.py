"""
AWS Auto Scaling Group handler for zone failover.

Thin wrapper over the Auto Scaling and EC2 calls needed to find groups by
zone, re-read a group by name, look up subnets and rewrite a group's zone
configuration. Errors are raised to the caller, which decides whether they
are fatal or a failed branch.
"""

from collections.abc import Iterator, Sequence
from typing import Any, Optional

from azfailaway.domain.ports.logging_port import LoggingPort


class ASGHandler:
    """Handler for the Auto Scaling Group operations used by failover."""

    def __init__(
        self,
        autoscaling_client: Any,
        ec2_client: Any,
        logger: LoggingPort,
        page_size: int = 100,
    ) -> None:
        self.autoscaling_client = autoscaling_client
        self.ec2_client = ec2_client
        self._logger = logger
        self.page_size = page_size

    def iter_auto_scaling_groups(self) -> Iterator[dict[str, Any]]:
        """Yield every Auto Scaling Group in the region, one page at a time."""
        paginator = self.autoscaling_client.get_paginator("describe_auto_scaling_groups")
        for page in paginator.paginate(PaginationConfig={"PageSize": self.page_size}):
            yield from page.get("AutoScalingGroups", [])

    def describe_auto_scaling_group(self, name: str) -> Optional[dict[str, Any]]:
        """Return the live description of one group, or None if it does not exist."""
        response = self.autoscaling_client.describe_auto_scaling_groups(
            AutoScalingGroupNames=[name]
        )
        groups = response.get("AutoScalingGroups", [])
        return groups[0] if groups else None

    def describe_subnet_ids(
        self, availability_zones: Sequence[str], subnet_ids: Optional[Sequence[str]] = None
    ) -> list[str]:
        """
        Return ids of subnets located in the given zones.

        Args:
            availability_zones: Zone names to match
            subnet_ids: When given, only these subnets are considered

        Returns:
            Matching subnet ids in API order
        """
        params: dict[str, Any] = {
            "Filters": [{"Name": "availability-zone", "Values": list(availability_zones)}]
        }
        if subnet_ids:
            params["SubnetIds"] = list(subnet_ids)

        result: list[str] = []
        paginator = self.ec2_client.get_paginator("describe_subnets")
        for page in paginator.paginate(**params):
            result.extend(subnet["SubnetId"] for subnet in page.get("Subnets", []))
        return result

    def update_zones(
        self, name: str, availability_zones: Sequence[str], subnet_ids: Sequence[str]
    ) -> dict[str, Any]:
        """Rewrite a group's availability zones and VPC zone identifier."""
        params: dict[str, Any] = {
            "AutoScalingGroupName": name,
            "AvailabilityZones": list(availability_zones),
        }
        if subnet_ids:
            params["VPCZoneIdentifier"] = ",".join(subnet_ids)

        self._logger.debug("Updating Auto Scaling Group %s with %s", name, params)
        return self.autoscaling_client.update_auto_scaling_group(**params)
