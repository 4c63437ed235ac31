"""Recovery store port interface."""

from abc import ABC, abstractmethod
from typing import Optional

from azfailaway.domain.events import SaveAzInfo, UpdateAutoScalingGroupEvent


class RecoveryStorePort(ABC):
    """
    Per-(account, zone) record of Auto Scaling Groups changed by a Remove.

    Implementations must be safe under concurrent calls for the same record.
    """

    @abstractmethod
    def record(self, event: UpdateAutoScalingGroupEvent) -> SaveAzInfo:
        """Remember a successful removal for the event's Auto Scaling Group."""

    @abstractmethod
    def forget(self, event: UpdateAutoScalingGroupEvent) -> SaveAzInfo:
        """Drop the entry of the event's Auto Scaling Group after a successful restore."""

    @abstractmethod
    def get(self, recovery_key: str) -> Optional[dict[str, UpdateAutoScalingGroupEvent]]:
        """Return the stored entries by Auto Scaling Group name, or None if no record exists."""
