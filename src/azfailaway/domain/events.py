"""Failover events - immutable value types exchanged between pipeline stages.

The JSON shape produced by ``to_dict``/``to_json`` uses camelCase keys. It is
the persisted format of the recovery store, so field aliases must not change.
"""

import time
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from azfailaway.domain.exceptions import InvalidOperationError


class BaseEnumModel(str, Enum):
    """String enum that serializes to its value."""

    @classmethod
    def from_dict(cls, value: Any) -> "BaseEnumModel":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value)
        raise ValueError(f"Cannot create {cls.__name__} from {value}")

    def __str__(self) -> str:
        return self.value


class Operation(BaseEnumModel):
    """Failover action requested by an operator."""

    REMOVE = "Remove"
    RESTORE = "Restore"


class Status(BaseEnumModel):
    SUCCESS = "Success"
    FAILED = "Failed"


def _now_millis() -> int:
    return int(time.time() * 1000)


def _reject_duplicates(values: tuple[str, ...]) -> tuple[str, ...]:
    seen = set()
    for value in values:
        if value in seen:
            raise ValueError(f"duplicate availability zone: {value}")
        seen.add(value)
    return values


class FailoverModel(BaseModel):
    """Base for all failover value types."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class OperationEvent(FailoverModel):
    """A single Remove/Restore request for one zone in one account."""

    operation: Operation
    zone_id: str = Field(alias="zoneId", min_length=1)
    region: str = Field(min_length=1)
    account_id: str = Field(alias="accountId", min_length=1)
    timestamp: int = Field(default_factory=_now_millis, description="Epoch milliseconds")

    @property
    def recovery_key(self) -> str:
        """Partition key of the recovery record for this account and zone."""
        return f"{self.account_id}::{self.zone_id}"

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        default_region: Optional[str] = None,
        default_account_id: Optional[str] = None,
        timestamp: Optional[int] = None,
    ) -> "OperationEvent":
        """
        Build an event from a trigger payload.

        Region and account are taken from the payload when present, otherwise
        from the execution context defaults. Both must be known afterwards
        since they select the API endpoint and the recovery record.

        Raises:
            InvalidOperationError: If the operation is not Remove or Restore,
                or the payload is otherwise malformed
        """
        operation = payload.get("operation")
        try:
            operation = Operation.from_dict(operation)
        except ValueError:
            raise InvalidOperationError(
                f"Unsupported operation {operation!r}; expected one of "
                f"{', '.join(op.value for op in Operation)}"
            ) from None

        region = payload.get("region") or default_region
        account_id = payload.get("accountId") or default_account_id
        missing = [
            name for name, value in (("region", region), ("accountId", account_id)) if not value
        ]
        if missing:
            raise InvalidOperationError(
                f"Cannot resolve {' and '.join(missing)} for zoneId {payload.get('zoneId')}",
                {"missing": missing},
            )

        try:
            return cls(
                operation=operation,
                zone_id=payload.get("zoneId"),
                region=region,
                account_id=account_id,
                timestamp=timestamp if timestamp is not None else _now_millis(),
            )
        except ValidationError as e:
            raise InvalidOperationError(f"Invalid operation payload: {e}") from e


class AutoScalingGroupDetails(FailoverModel):
    """Snapshot of the zone-relevant configuration of one Auto Scaling Group."""

    name: str = Field(alias="autoScalingGroupName")
    arn: Optional[str] = Field(None, alias="autoScalingGroupARN")
    zone_name: str = Field(alias="zoneName")
    subnet_ids: tuple[str, ...] = Field(default=(), alias="subnetIds")
    availability_zones: tuple[str, ...] = Field(default=(), alias="availabilityZones")
    operation_event: OperationEvent = Field(alias="operationEvent")

    @field_validator("availability_zones")
    @classmethod
    def _unique_zones(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return _reject_duplicates(value)

    @field_validator("subnet_ids", "availability_zones", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @classmethod
    def from_describe_auto_scaling_group(
        cls, asg_data: Mapping[str, Any], zone_name: str, operation_event: OperationEvent
    ) -> "AutoScalingGroupDetails":
        """Create details from a describe_auto_scaling_groups API entry."""
        vpc_zone_identifier = asg_data.get("VPCZoneIdentifier") or ""
        return cls(
            name=asg_data["AutoScalingGroupName"],
            arn=asg_data.get("AutoScalingGroupARN"),
            zone_name=zone_name,
            subnet_ids=[s.strip() for s in vpc_zone_identifier.split(",") if s.strip()],
            availability_zones=asg_data.get("AvailabilityZones") or [],
            operation_event=operation_event,
        )


class UpdateAutoScalingGroupEvent(FailoverModel):
    """Outcome of one zone mutation; the unit stored by the recovery store."""

    availability_zones: tuple[str, ...] = Field(alias="availabilityZones")
    subnet_ids: tuple[str, ...] = Field(default=(), alias="subnetIds")
    status: Status
    details: AutoScalingGroupDetails

    @field_validator("subnet_ids", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @property
    def succeeded(self) -> bool:
        return self.status == Status.SUCCESS


class SaveAzInfo(FailoverModel):
    """Outcome of a recovery store write."""

    status: Status
    event: UpdateAutoScalingGroupEvent
