"""Domain ports."""

from azfailaway.domain.ports.logging_port import LoggingPort
from azfailaway.domain.ports.recovery_store_port import RecoveryStorePort

__all__: list[str] = ["LoggingPort", "RecoveryStorePort"]
