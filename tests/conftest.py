"""Global test configuration and fixtures."""

import sys
from pathlib import Path
from typing import Any, Callable
from unittest.mock import Mock

import boto3
import pytest
from moto import mock_aws

# Add src to path for imports when the package is not installed
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from azfailaway.config.schemas.app_schema import RecoveryStoreConfig  # noqa: E402
from azfailaway.domain.events import (  # noqa: E402
    AutoScalingGroupDetails,
    Operation,
    OperationEvent,
    Status,
    UpdateAutoScalingGroupEvent,
)
from azfailaway.domain.ports.logging_port import LoggingPort  # noqa: E402

from tests.helpers import ACCOUNT_ID, REGION, TABLE_NAME, ZONE_ID  # noqa: E402


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Fake credentials so no test can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    for name in ("AWS_PROFILE", "AWS_REGION", "AZ_FAILAWAY_TABLE_NAME"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def logger():
    """Mock logger."""
    return Mock(spec=LoggingPort)


@pytest.fixture
def remove_event() -> OperationEvent:
    return OperationEvent(
        operation=Operation.REMOVE,
        zone_id=ZONE_ID,
        region=REGION,
        account_id=ACCOUNT_ID,
        timestamp=1650000000000,
    )


@pytest.fixture
def restore_event(remove_event) -> OperationEvent:
    return remove_event.model_copy(update={"operation": Operation.RESTORE})


@pytest.fixture
def make_details(remove_event) -> Callable[..., AutoScalingGroupDetails]:
    """Factory for Auto Scaling Group snapshots with test-asg-01 defaults."""

    def factory(**overrides: Any) -> AutoScalingGroupDetails:
        values = {
            "name": "test-asg-01",
            "arn": (
                "arn:aws:autoscaling:us-east-2:123456789012:autoScalingGroup:"
                "517f7fa1-3fce-4ed9-9b4b-b15e281a529c:autoScalingGroupName/test-asg-01"
            ),
            "zone_name": "us-east-2a",
            "subnet_ids": ["s1", "s2", "s3"],
            "availability_zones": ["us-east-2a", "us-east-2b", "us-east-2c"],
            "operation_event": remove_event,
        }
        values.update(overrides)
        return AutoScalingGroupDetails(**values)

    return factory


@pytest.fixture
def make_update_event(make_details) -> Callable[..., UpdateAutoScalingGroupEvent]:
    """Factory for mutation outcomes of a removal of us-east-2a."""

    def factory(status: Status = Status.SUCCESS, **detail_overrides: Any):
        return UpdateAutoScalingGroupEvent(
            availability_zones=["us-east-2b", "us-east-2c"],
            subnet_ids=["s2", "s3"],
            status=status,
            details=make_details(**detail_overrides),
        )

    return factory


@pytest.fixture
def dynamodb():
    """Moto-backed DynamoDB resource with an empty recovery table."""
    with mock_aws():
        resource = boto3.resource("dynamodb", region_name=REGION)
        resource.create_table(
            TableName=TABLE_NAME,
            KeySchema=[{"AttributeName": "pk", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "pk", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
        yield resource


@pytest.fixture
def store_config() -> RecoveryStoreConfig:
    return RecoveryStoreConfig(table_name=TABLE_NAME)
