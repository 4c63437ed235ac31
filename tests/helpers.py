"""AWS response builders shared by tests."""

from typing import Any

ACCOUNT_ID = "123456789012"
REGION = "us-east-2"
ZONE_ID = "use2-az1"
TABLE_NAME = "az-fail-away"


def asg_description(name: str, zones: list[str], subnets: list[str]) -> dict[str, Any]:
    """Minimal describe_auto_scaling_groups entry."""
    return {
        "AutoScalingGroupName": name,
        "AutoScalingGroupARN": (
            f"arn:aws:autoscaling:{REGION}:{ACCOUNT_ID}:autoScalingGroup:"
            f"x:autoScalingGroupName/{name}"
        ),
        "AvailabilityZones": zones,
        "VPCZoneIdentifier": ",".join(subnets),
    }


def ok_response() -> dict[str, Any]:
    return {"ResponseMetadata": {"HTTPStatusCode": 200}}


def paginated(ec2_or_asg_client: Any, *pages: dict[str, Any]) -> None:
    """Make ``client.get_paginator(...).paginate(...)`` yield ``pages``."""
    ec2_or_asg_client.get_paginator.return_value.paginate.return_value = list(pages)
