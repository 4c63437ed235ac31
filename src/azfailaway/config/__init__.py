"""Configuration package."""

from azfailaway.config.loader import load_config
from azfailaway.config.schemas import (
    AppConfig,
    AWSConfig,
    LoggingConfig,
    OrchestratorConfig,
    RecoveryStoreConfig,
)

__all__: list[str] = [
    "AWSConfig",
    "AppConfig",
    "LoggingConfig",
    "OrchestratorConfig",
    "RecoveryStoreConfig",
    "load_config",
]
