"""Recovery store persistence."""

from azfailaway.providers.aws.infrastructure.persistence.dynamodb_recovery_store import (
    DynamoDBRecoveryStore,
)

__all__: list[str] = ["DynamoDBRecoveryStore"]
