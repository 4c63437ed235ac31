"""Zone id to zone name resolution."""

from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from azfailaway.domain.exceptions import ResolutionError
from azfailaway.domain.ports.logging_port import LoggingPort


class ZoneResolver:
    """Maps an availability zone id (``use2-az1``) to its name (``us-east-2a``)."""

    def __init__(self, ec2_client: Any, logger: LoggingPort) -> None:
        self.ec2_client = ec2_client
        self._logger = logger

    def resolve(self, zone_id: str, region: Optional[str] = None) -> str:
        """
        Resolve a zone id to the zone name visible to this account.

        Args:
            zone_id: Availability zone id
            region: Restrict the lookup to this region when given

        Returns:
            The zone name

        Raises:
            ResolutionError: If the lookup fails or no zone matches
        """
        filters = [{"Name": "zone-id", "Values": [zone_id]}]
        if region is not None:
            filters.append({"Name": "region-name", "Values": [region]})

        try:
            response = self.ec2_client.describe_availability_zones(Filters=filters)
        except (ClientError, BotoCoreError) as e:
            raise ResolutionError(
                f"Could not describe availability zones for zoneId {zone_id}: {e}",
                {"zone_id": zone_id, "region": region},
            ) from e

        for zone in response.get("AvailabilityZones", []):
            zone_name = zone.get("ZoneName")
            if zone_name:
                self._logger.info("Resolved zoneId %s to zone %s", zone_id, zone_name)
                return zone_name

        raise ResolutionError(
            f"Could not get zoneName for zoneId: {zone_id}",
            {"zone_id": zone_id, "region": region},
        )
