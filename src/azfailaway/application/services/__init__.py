"""Application services."""

from azfailaway.application.services.discovery_service import DiscoveryService
from azfailaway.application.services.orchestrator import FailoverOrchestrator
from azfailaway.application.services.zone_mutator import ZoneMutator

__all__: list[str] = ["DiscoveryService", "FailoverOrchestrator", "ZoneMutator"]
