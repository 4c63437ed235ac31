"""Application configuration schema."""

from typing import Optional

from pydantic import BaseModel, Field


class AWSConfig(BaseModel):
    """AWS session and client configuration."""

    region: Optional[str] = Field(None, description="AWS region; falls back to the session default")
    profile: Optional[str] = Field(None, description="Named AWS profile")
    endpoint_url: Optional[str] = Field(None, description="Override endpoint for all clients")
    max_retries: int = Field(3, ge=0, le=10, description="Maximum botocore retry attempts")
    retry_mode: str = Field("adaptive", description="botocore retry mode")
    connect_timeout: int = Field(5, gt=0, description="Connect timeout in seconds")
    read_timeout: int = Field(10, gt=0, description="Read timeout in seconds")


class RecoveryStoreConfig(BaseModel):
    """DynamoDB recovery store configuration."""

    table_name: Optional[str] = Field(None, description="DynamoDB table holding recovery records")
    partition_key: str = Field("pk", description="Partition key attribute name")
    events_attribute: str = Field("events", description="Map attribute holding per-ASG entries")


class OrchestratorConfig(BaseModel):
    """Fan-out configuration."""

    max_concurrency: int = Field(3, ge=1, description="Maximum in-flight ASG mutations")
    page_size: int = Field(100, ge=1, le=100, description="describe_auto_scaling_groups page size")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field(
        "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
        description="logging format string",
    )
    file_path: Optional[str] = Field(None, description="Also log to this file when set")


class AppConfig(BaseModel):
    """Top-level configuration."""

    aws: AWSConfig = Field(default_factory=AWSConfig)
    recovery_store: RecoveryStoreConfig = Field(default_factory=RecoveryStoreConfig)
    orchestrator: OrchestratorConfig = Field(default_factory=OrchestratorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
