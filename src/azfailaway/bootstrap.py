"""Component wiring for a failover execution."""

from dataclasses import dataclass
from typing import Optional

from azfailaway.application.services.discovery_service import DiscoveryService
from azfailaway.application.services.orchestrator import FailoverOrchestrator
from azfailaway.application.services.zone_mutator import ZoneMutator
from azfailaway.config.schemas.app_schema import AppConfig
from azfailaway.infrastructure.adapters.logging_adapter import LoggingAdapter
from azfailaway.providers.aws.infrastructure.aws_client import AWSClient
from azfailaway.providers.aws.infrastructure.handlers.asg_handler import ASGHandler
from azfailaway.providers.aws.infrastructure.handlers.zone_resolver import ZoneResolver
from azfailaway.providers.aws.infrastructure.persistence.dynamodb_recovery_store import (
    DynamoDBRecoveryStore,
)


@dataclass
class Application:
    """Wired components for one process."""

    config: AppConfig
    aws_client: AWSClient
    orchestrator: FailoverOrchestrator


def create_application(config: AppConfig, aws_client: Optional[AWSClient] = None) -> Application:
    """Build the orchestrator and its collaborators from configuration."""
    aws_client = aws_client or AWSClient(config.aws, LoggingAdapter("aws"))

    asg_handler = ASGHandler(
        aws_client.autoscaling_client,
        aws_client.ec2_client,
        LoggingAdapter("asg"),
        page_size=config.orchestrator.page_size,
    )
    recovery_store = DynamoDBRecoveryStore(
        aws_client.dynamodb_resource, config.recovery_store, LoggingAdapter("recovery_store")
    )
    discovery = DiscoveryService(
        ZoneResolver(aws_client.ec2_client, LoggingAdapter("zone_resolver")),
        asg_handler,
        recovery_store,
        LoggingAdapter("discovery"),
    )
    orchestrator = FailoverOrchestrator(
        discovery,
        ZoneMutator(asg_handler, LoggingAdapter("zone_mutator")),
        recovery_store,
        LoggingAdapter("orchestrator"),
        max_concurrency=config.orchestrator.max_concurrency,
        region=aws_client.region_name,
    )
    return Application(config=config, aws_client=aws_client, orchestrator=orchestrator)
