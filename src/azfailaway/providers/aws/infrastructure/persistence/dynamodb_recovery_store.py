"""DynamoDB-backed recovery store.

One item per ``accountId::zoneId``. The item's map attribute holds, per Auto
Scaling Group name, the JSON of the last successful removal event. Items are
created lazily with a conditional put and never deleted here; per-group
entries are upserted and removed with ``update_item`` so concurrent writers
for the same zone never overwrite each other.
"""

import json
from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from azfailaway.config.schemas.app_schema import RecoveryStoreConfig
from azfailaway.domain.events import SaveAzInfo, Status, UpdateAutoScalingGroupEvent
from azfailaway.domain.exceptions import ConfigurationError, RecoveryStoreError
from azfailaway.domain.ports.logging_port import LoggingPort
from azfailaway.domain.ports.recovery_store_port import RecoveryStorePort

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


class DynamoDBRecoveryStore(RecoveryStorePort):
    """Recovery store on a DynamoDB table with a string partition key."""

    def __init__(
        self, dynamodb_resource: Any, config: RecoveryStoreConfig, logger: LoggingPort
    ) -> None:
        if not config.table_name:
            raise ConfigurationError("recovery_store.table_name is required")
        self.config = config
        self.table = dynamodb_resource.Table(config.table_name)
        self._logger = logger

    def _key(self, recovery_key: str) -> dict[str, str]:
        return {self.config.partition_key: recovery_key}

    def record(self, event: UpdateAutoScalingGroupEvent) -> SaveAzInfo:
        """
        Upsert the event under its group name in the zone record.

        A failed mutation is never remembered: the store is not touched and a
        failed SaveAzInfo is returned.

        Raises:
            RecoveryStoreError: If creating the zone record fails for any
                reason other than the record already existing
        """
        if not event.succeeded:
            return SaveAzInfo(status=Status.FAILED, event=event)

        recovery_key = event.details.operation_event.recovery_key
        self._logger.info(
            "Add %s - %s = %s",
            recovery_key,
            event.details.operation_event.timestamp,
            event.details.name,
        )
        self._ensure_record(recovery_key)
        return self._update(
            event,
            UpdateExpression="SET #events.#asg = :event",
            ExpressionAttributeValues={":event": event.to_json()},
        )

    def forget(self, event: UpdateAutoScalingGroupEvent) -> SaveAzInfo:
        """Remove the group's entry from the zone record; absent entries are a no-op."""
        if not event.succeeded:
            return SaveAzInfo(status=Status.FAILED, event=event)

        self._logger.info(
            "Delete %s - %s = %s",
            event.details.operation_event.recovery_key,
            event.details.operation_event.timestamp,
            event.details.name,
        )
        return self._update(event, UpdateExpression="REMOVE #events.#asg")

    def get(self, recovery_key: str) -> Optional[dict[str, UpdateAutoScalingGroupEvent]]:
        """Read a zone record with strong consistency."""
        response = self.table.get_item(Key=self._key(recovery_key), ConsistentRead=True)
        item = response.get("Item")
        if item is None:
            return None

        entries = item.get(self.config.events_attribute) or {}
        return {
            asg_name: UpdateAutoScalingGroupEvent.model_validate(json.loads(value))
            for asg_name, value in entries.items()
            if value is not None
        }

    def _ensure_record(self, recovery_key: str) -> None:
        """Create the zone record if it does not exist yet."""
        try:
            self.table.put_item(
                Item={**self._key(recovery_key), self.config.events_attribute: {}},
                ConditionExpression="attribute_not_exists(#events)",
                ExpressionAttributeNames={"#events": self.config.events_attribute},
            )
            self._logger.debug("Created recovery record %s", recovery_key)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == CONDITIONAL_CHECK_FAILED:
                # Record exists already, possibly created by a sibling branch
                return
            raise RecoveryStoreError(
                f"Could not create recovery record {recovery_key}: {e}",
                {"recovery_key": recovery_key},
            ) from e
        except BotoCoreError as e:
            raise RecoveryStoreError(
                f"Could not create recovery record {recovery_key}: {e}",
                {"recovery_key": recovery_key},
            ) from e

    def _update(self, event: UpdateAutoScalingGroupEvent, **update_args: Any) -> SaveAzInfo:
        recovery_key = event.details.operation_event.recovery_key
        try:
            self.table.update_item(
                Key=self._key(recovery_key),
                ExpressionAttributeNames={
                    "#events": self.config.events_attribute,
                    "#asg": event.details.name,
                },
                **update_args,
            )
        except (ClientError, BotoCoreError) as e:
            self._logger.error(
                "Problem saving AZ info for %s in %s: %s", event.details.name, recovery_key, e
            )
            return SaveAzInfo(status=Status.FAILED, event=event)

        return SaveAzInfo(status=Status.SUCCESS, event=event)
