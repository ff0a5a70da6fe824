"""Status command implementation.

Shows the vlt sync state of a directory without changing anything.
"""

import json
from pathlib import Path
from typing import Annotated, Any

import typer

from vltsync.cli.types import expand_local_path, get_registry
from vltsync.core.registry import RegistryError
from vltsync.errors import ArtifactIOError
from vltsync.models.request import SyncOnceMode
from vltsync.provisioning.artifacts import read_sync_once
from vltsync.provisioning.classifier import is_effectively_empty
from vltsync.provisioning.probe import (
    CONFIG_ARTIFACT,
    DEFAULT_FILTER_LOCATIONS,
    FILTER_ARTIFACT,
    probe_artifact_state,
    probe_existing,
)
from vltsync.utils.formatting import console, format_duration, format_mode, print_error


def _collect_status(path: Path) -> dict[str, Any]:
    """Gather the status of a directory into a JSON-friendly dict."""
    state = probe_artifact_state(path)

    sync_once: str | None = None
    if state.config_artifact_exists:
        sync_once = read_sync_once(path / CONFIG_ARTIFACT)

    registered = get_registry().get(path)

    return {
        "path": str(path),
        "exists": path.is_dir(),
        "effectively_empty": is_effectively_empty(path),
        "filter_artifact": state.filter_artifact_exists,
        "default_filter": probe_existing(path, *DEFAULT_FILTER_LOCATIONS),
        "config_artifact": state.config_artifact_exists,
        "sync_once": sync_once,
        "registered": registered is not None,
        "expected_duration_ms": registered.expected_duration_ms if registered else None,
    }


def _yes_no(value: bool) -> str:
    return "[success]yes[/]" if value else "[muted]no[/]"


def _print_status(status: dict[str, Any]) -> None:
    """Print the status as labelled lines."""
    sync_once = status["sync_once"]
    if sync_once is None:
        mode_text = "[muted]-[/]"
    else:
        try:
            mode_text = format_mode(SyncOnceMode.parse(sync_once))
        except ValueError:
            mode_text = format_mode(None)

    default_filter = ", ".join(status["default_filter"]) or "-"

    console.print()
    console.print(f"[bold]{status['path']}[/bold]")
    console.print(f"  Directory exists: {_yes_no(status['exists'])}")
    console.print(f"  Effectively empty: {_yes_no(status['effectively_empty'])}")
    console.print(f"  {FILTER_ARTIFACT}: {_yes_no(status['filter_artifact'])}")
    console.print(f"  Default filter: [muted]{default_filter}[/muted]")
    console.print(f"  {CONFIG_ARTIFACT}: {_yes_no(status['config_artifact'])}")
    console.print(f"  Sync once: {mode_text}")
    console.print(f"  Registered: {_yes_no(status['registered'])}")
    if status["registered"]:
        expected = format_duration(status["expected_duration_ms"])
        console.print(f"  Expected time: [muted]{expected}[/muted]")
    console.print()


def status(
    local_path: Annotated[
        str,
        typer.Argument(help="Directory to inspect."),
    ],
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show the vlt sync artifacts and registration of a directory.

    Examples:
        vltsync status ./jcr_root
        vltsync status ./jcr_root --json
    """
    expanded = expand_local_path(local_path)
    if not expanded:
        print_error("local path cannot be empty")
        raise typer.Exit(code=1)

    try:
        info = _collect_status(Path(expanded))
    except (ArtifactIOError, RegistryError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if json_output:
        console.print_json(json.dumps(info))
        return

    _print_status(info)
