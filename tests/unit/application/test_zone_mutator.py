"""Tests for zone mutation of a single Auto Scaling Group."""

from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from azfailaway.application.services.zone_mutator import ZoneMutator
from azfailaway.domain.events import Status
from azfailaway.domain.exceptions import PreconditionError
from azfailaway.providers.aws.infrastructure.handlers.asg_handler import ASGHandler
from tests.helpers import ok_response


@pytest.mark.unit
class TestZoneMutator:
    @pytest.fixture
    def asg_handler(self):
        handler = Mock(spec=ASGHandler)
        handler.update_zones.return_value = ok_response()
        return handler

    @pytest.fixture
    def mutator(self, asg_handler, logger):
        return ZoneMutator(asg_handler, logger)

    def test_remove_zone(self, mutator, asg_handler, make_details):
        asg_handler.describe_subnet_ids.return_value = ["s2", "s3"]

        event = mutator.remove_zone(make_details())

        assert event.status == Status.SUCCESS
        assert event.availability_zones == ("us-east-2b", "us-east-2c")
        assert event.subnet_ids == ("s2", "s3")
        asg_handler.describe_subnet_ids.assert_called_once_with(
            ["us-east-2b", "us-east-2c"], ("s1", "s2", "s3")
        )
        asg_handler.update_zones.assert_called_once_with(
            "test-asg-01", ["us-east-2b", "us-east-2c"], ["s2", "s3"]
        )

    def test_remove_keeps_zone_order(self, mutator, asg_handler, make_details):
        asg_handler.describe_subnet_ids.return_value = ["s3", "s1"]
        details = make_details(
            zone_name="us-east-2b", availability_zones=["us-east-2c", "us-east-2b", "us-east-2a"]
        )

        event = mutator.remove_zone(details)

        assert event.availability_zones == ("us-east-2c", "us-east-2a")

    def test_remove_only_zone_is_refused(self, mutator, asg_handler, make_details):
        with pytest.raises(PreconditionError, match="only AZ"):
            mutator.remove_zone(make_details(availability_zones=["us-east-2a"]))

        asg_handler.describe_subnet_ids.assert_not_called()
        asg_handler.update_zones.assert_not_called()

    def test_remove_without_zones_is_refused(self, mutator, asg_handler, make_details):
        with pytest.raises(PreconditionError, match="No AZs specified"):
            mutator.remove_zone(make_details(availability_zones=[]))

        asg_handler.update_zones.assert_not_called()

    def test_restore_zone_appends(self, mutator, asg_handler, make_details, restore_event):
        asg_handler.describe_subnet_ids.return_value = ["s2", "s3", "s1"]
        details = make_details(
            availability_zones=["us-east-2b", "us-east-2c"],
            subnet_ids=["s2", "s3", "s1"],
            operation_event=restore_event,
        )

        event = mutator.restore_zone(details)

        assert event.status == Status.SUCCESS
        assert event.availability_zones == ("us-east-2b", "us-east-2c", "us-east-2a")
        assert event.subnet_ids == ("s2", "s3", "s1")
        asg_handler.update_zones.assert_called_once_with(
            "test-asg-01", ["us-east-2b", "us-east-2c", "us-east-2a"], ["s2", "s3", "s1"]
        )

    def test_restore_of_present_zone_is_already_applied(
        self, mutator, asg_handler, logger, make_details, restore_event
    ):
        details = make_details(operation_event=restore_event)

        event = mutator.restore_zone(details)

        assert event.status == Status.SUCCESS
        assert event.availability_zones == ("us-east-2a", "us-east-2b", "us-east-2c")
        assert event.subnet_ids == ("s1", "s2", "s3")
        assert event.details == details
        asg_handler.describe_subnet_ids.assert_not_called()
        asg_handler.update_zones.assert_not_called()
        logger.warning.assert_called_once()

    def test_no_known_subnet_in_target_zones(self, mutator, asg_handler, logger, make_details):
        asg_handler.describe_subnet_ids.return_value = []

        event = mutator.remove_zone(make_details(subnet_ids=["s1"]))

        assert event.status == Status.FAILED
        assert event.subnet_ids == ()
        asg_handler.update_zones.assert_not_called()
        logger.error.assert_called_once()

    def test_no_known_subnets_updates_zones_only(self, mutator, asg_handler, make_details):
        event = mutator.remove_zone(make_details(subnet_ids=[]))

        assert event.status == Status.SUCCESS
        assert event.subnet_ids == ()
        asg_handler.describe_subnet_ids.assert_not_called()
        asg_handler.update_zones.assert_called_once_with(
            "test-asg-01", ["us-east-2b", "us-east-2c"], []
        )

    def test_subnet_lookup_failure(self, mutator, asg_handler, make_details):
        asg_handler.describe_subnet_ids.side_effect = EndpointConnectionError(
            endpoint_url="https://ec2.us-east-2.amazonaws.com"
        )

        event = mutator.remove_zone(make_details())

        assert event.status == Status.FAILED
        assert event.subnet_ids == ()
        assert event.availability_zones == ("us-east-2b", "us-east-2c")
        asg_handler.update_zones.assert_not_called()

    def test_update_failure(self, mutator, asg_handler, logger, make_details):
        asg_handler.describe_subnet_ids.return_value = ["s2", "s3"]
        asg_handler.update_zones.side_effect = ClientError(
            {"Error": {"Code": "ValidationError", "Message": "bad subnet"}},
            "UpdateAutoScalingGroup",
        )

        event = mutator.remove_zone(make_details())

        assert event.status == Status.FAILED
        assert event.subnet_ids == ("s2", "s3")
        logger.error.assert_called_once()

    def test_non_200_response_is_failure(self, mutator, asg_handler, make_details):
        asg_handler.describe_subnet_ids.return_value = ["s2", "s3"]
        asg_handler.update_zones.return_value = {"ResponseMetadata": {"HTTPStatusCode": 500}}

        assert mutator.remove_zone(make_details()).status == Status.FAILED

    def test_event_keeps_input_details(self, mutator, asg_handler, make_details):
        asg_handler.describe_subnet_ids.return_value = ["s2", "s3"]
        details = make_details()

        assert mutator.remove_zone(details).details == details
