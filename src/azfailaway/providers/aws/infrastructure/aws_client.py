"""AWS client wrapper shared by all failover components."""

import threading
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from azfailaway.config.schemas.app_schema import AWSConfig
from azfailaway.domain.exceptions import ConfigurationError
from azfailaway.domain.ports.logging_port import LoggingPort
from azfailaway.providers.aws.infrastructure.instrumentation.botocore_logging import (
    BotocoreLoggingHandler,
)


class AWSClient:
    """Wrapper for AWS service clients sharing one session, retry and timeout policy."""

    def __init__(
        self,
        config: AWSConfig,
        logger: LoggingPort,
        session: Optional[boto3.Session] = None,
    ) -> None:
        """
        Initialize AWS client wrapper.

        Args:
            config: AWS section of the application configuration
            logger: Logger for logging messages
            session: Pre-built boto3 session, mainly for tests
        """
        self.config = config
        self._logger = logger
        self.session = session or boto3.Session(
            region_name=config.region, profile_name=config.profile
        )
        self.region_name = config.region or self.session.region_name
        if not self.region_name:
            raise ConfigurationError(
                "No AWS region configured; set aws.region, AWS_REGION or a profile region"
            )

        # Every external call is bounded by these timeouts; a timeout surfaces as a BotoCoreError
        self.boto_config = Config(
            region_name=self.region_name,
            retries={"max_attempts": config.max_retries, "mode": config.retry_mode},
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
        )

        self._instrumentation = BotocoreLoggingHandler(logger)
        self._lock = threading.Lock()
        self._ec2_client = None
        self._autoscaling_client = None
        self._sts_client = None
        self._dynamodb_resource = None
        self._account_id: Optional[str] = None

        self._logger.info(
            "AWS client initialized with region: %s, profile: %s, retries: %d (%s), "
            "timeouts: connect=%ds, read=%ds",
            self.region_name,
            config.profile or "default",
            config.max_retries,
            config.retry_mode,
            config.connect_timeout,
            config.read_timeout,
        )

    def _client(self, service_name: str) -> Any:
        client = self.session.client(
            service_name, config=self.boto_config, endpoint_url=self.config.endpoint_url
        )
        return self._instrumentation.register_client_events(client)

    @property
    def ec2_client(self) -> Any:
        with self._lock:
            if self._ec2_client is None:
                self._ec2_client = self._client("ec2")
            return self._ec2_client

    @property
    def autoscaling_client(self) -> Any:
        with self._lock:
            if self._autoscaling_client is None:
                self._autoscaling_client = self._client("autoscaling")
            return self._autoscaling_client

    @property
    def sts_client(self) -> Any:
        with self._lock:
            if self._sts_client is None:
                self._sts_client = self._client("sts")
            return self._sts_client

    @property
    def dynamodb_resource(self) -> Any:
        with self._lock:
            if self._dynamodb_resource is None:
                resource = self.session.resource(
                    "dynamodb", config=self.boto_config, endpoint_url=self.config.endpoint_url
                )
                self._instrumentation.register_client_events(resource.meta.client)
                self._dynamodb_resource = resource
            return self._dynamodb_resource

    @property
    def account_id(self) -> str:
        """Account id of the calling credentials, resolved once through STS."""
        if self._account_id is None:
            try:
                self._account_id = self.sts_client.get_caller_identity()["Account"]
            except (ClientError, BotoCoreError) as e:
                raise ConfigurationError(f"Could not determine AWS account id: {e}") from e
            self._logger.debug("AWS account id determined: %s", self._account_id)
        return self._account_id
