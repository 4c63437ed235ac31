"""Command-line entry point: ``azfailaway remove|restore --zone-id ZONE``."""

import argparse
import sys
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from azfailaway import __version__
from azfailaway.bootstrap import create_application
from azfailaway.cli.console import print_error, print_execution, print_json, print_success
from azfailaway.config.loader import load_config
from azfailaway.domain.events import Operation, OperationEvent, Status
from azfailaway.domain.exceptions import AZFailAwayError
from azfailaway.infrastructure.logging.logger import setup_logging

EXIT_SUCCESS = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="azfailaway",
        description="Remove an availability zone from Auto Scaling Groups, or restore it.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to a JSON configuration file")

    subparsers = parser.add_subparsers(dest="operation", required=True)
    for operation, help_text in (
        (Operation.REMOVE, "Remove the zone from every Auto Scaling Group using it"),
        (Operation.RESTORE, "Restore the zone to every Auto Scaling Group it was removed from"),
    ):
        sub = subparsers.add_parser(operation.value.lower(), help=help_text)
        sub.set_defaults(operation_value=operation.value)
        sub.add_argument("--zone-id", required=True, help="Availability zone id, e.g. use2-az1")
        sub.add_argument("--region", help="Region of the zone; defaults to the configured region")
        sub.add_argument("--account-id", help="Account id; defaults to the caller's account")
        sub.add_argument("--json", action="store_true", help="Print the result tree as JSON")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        if args.region:
            # Every client is bound to one region, so target the zone's region directly
            config = config.model_copy(
                update={"aws": config.aws.model_copy(update={"region": args.region})}
            )
        setup_logging(config.logging)
        app = create_application(config)

        event = OperationEvent.from_payload(
            {
                "operation": args.operation_value,
                "zoneId": args.zone_id,
                "region": args.region,
                "accountId": args.account_id,
            },
            default_region=app.aws_client.region_name,
            default_account_id=None if args.account_id else app.aws_client.account_id,
        )
        result = app.orchestrator.run(event)
    except AZFailAwayError as e:
        print_error(e.message)
        return EXIT_ERROR
    except (ClientError, BotoCoreError) as e:
        print_error(f"AWS request failed: {e}")
        return EXIT_ERROR

    if args.json:
        print_json(result.to_dict())
    else:
        print_execution(result)

    if result.status == Status.SUCCESS:
        print_success(f"{event.operation} of {event.zone_id} succeeded")
        return EXIT_SUCCESS
    print_error(f"{event.operation} of {event.zone_id} failed")
    return EXIT_FAILED


def cli_main() -> None:
    """Entry point function for console scripts."""
    sys.exit(main())


if __name__ == "__main__":
    cli_main()
