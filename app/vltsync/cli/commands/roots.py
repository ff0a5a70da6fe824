"""Roots command implementation.

Lists the directories currently registered as sync roots.
"""

import json
from typing import Annotated

import typer

from vltsync.cli.types import get_registry
from vltsync.core.registry import RegistryError
from vltsync.models.registry import RegisteredSyncRoot
from vltsync.utils.formatting import (
    console,
    create_sync_roots_table,
    format_duration,
    print_error,
    print_info,
)


def _print_table(roots: list[RegisteredSyncRoot]) -> None:
    """Print registered sync roots as a Rich table."""
    table = create_sync_roots_table()
    for root in roots:
        pending = root.expected_duration_ms is not None
        sync_once = "[success]pending[/]" if pending else "[muted]-[/]"
        table.add_row(
            root.path,
            sync_once,
            format_duration(root.expected_duration_ms),
            root.registered_at.strftime("%Y-%m-%d %H:%M:%S"),
        )
    console.print(table)


def _print_json(roots: list[RegisteredSyncRoot]) -> None:
    """Print registered sync roots as JSON."""
    data = [root.model_dump(mode="json") for root in roots]
    console.print_json(json.dumps(data))


def roots(
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """List registered sync roots.

    Examples:
        vltsync roots
        vltsync roots --json
    """
    try:
        registered = get_registry().list_sync_roots()
    except RegistryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if json_output:
        _print_json(registered)
        return

    if not registered:
        print_info("No sync roots registered.")
        return

    _print_table(registered)
