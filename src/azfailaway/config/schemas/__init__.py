"""Configuration schemas."""

from azfailaway.config.schemas.app_schema import (
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
]
