"""AWS handlers for zone failover."""

from azfailaway.providers.aws.infrastructure.handlers.asg_handler import ASGHandler
from azfailaway.providers.aws.infrastructure.handlers.zone_resolver import ZoneResolver

__all__: list[str] = ["ASGHandler", "ZoneResolver"]
