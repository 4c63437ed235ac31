"""Shared Rich console for CLI output."""

import json
import os
from functools import wraps
from typing import Any

from rich.console import Console
from rich.table import Table

from azfailaway.domain.events import Status
from azfailaway.domain.results import ExecutionResult

_console = Console()
_error_console = Console(stderr=True)


def _should_print() -> bool:
    """Check if console output is enabled."""
    return os.environ.get("LOG_CONSOLE_ENABLED", "true").lower() == "true"


def _console_output(func):
    """Decorator to check if console output is enabled."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        if _should_print():
            return func(*args, **kwargs)

    return wrapper


@_console_output
def print_success(message: str):
    """Print success message."""
    _console.print(f"[green]{message}[/green]")


@_console_output
def print_error(message: str):
    """Print error message to stderr."""
    _error_console.print(f"[red]{message}[/red]")


@_console_output
def print_execution(result: ExecutionResult):
    """Print one row per Auto Scaling Group branch."""
    event = result.operation_event
    table = Table(title=f"{event.operation} {event.zone_id} ({event.account_id}, {event.region})")
    table.add_column("Auto Scaling Group")
    table.add_column("State")
    table.add_column("Zones")
    table.add_column("Subnets")
    table.add_column("Error")

    for branch in result.branches:
        color = "green" if branch.status == Status.SUCCESS else "red"
        mutation = branch.mutation
        table.add_row(
            branch.asg_name,
            f"[{color}]{branch.state}[/{color}]",
            ",".join(mutation.availability_zones) if mutation else "",
            ",".join(mutation.subnet_ids) if mutation else "",
            branch.error or "",
        )

    if result.branches:
        _console.print(table)
    else:
        _console.print("[yellow]No Auto Scaling Groups to update[/yellow]")


def print_json(data: Any):
    """Print JSON data (always outputs, ignores LOG_CONSOLE_ENABLED)."""
    print(json.dumps(data, indent=2))
