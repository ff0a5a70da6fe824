"""Apply command implementation.

Provisions every registration saved in registrations.toml.
"""

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.table import Table

from vltsync.cli.types import get_registry, is_quiet
from vltsync.core.paths import get_registrations_path
from vltsync.core.registrations import (
    RegistrationsError,
    RegistrationsNotFoundError,
    load_registrations,
)
from vltsync.core.registry import RegistryError
from vltsync.errors import ProvisioningError
from vltsync.models.provisioning import ProvisioningResult
from vltsync.models.request import PROP_LOCAL_PATH
from vltsync.provisioning.orchestrator import SyncRootProvisioner
from vltsync.utils.formatting import (
    console,
    format_duration,
    format_mode,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def _create_results_table(results: list[ProvisioningResult]) -> Table:
    """Create a Rich table summarizing provisioned sync roots."""
    table = Table(
        title="Provisioned Sync Roots",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Local Path", no_wrap=True)
    table.add_column("Filter", width=8, justify="center")
    table.add_column("Config", width=8, justify="center")
    table.add_column("Sync Once", justify="center")
    table.add_column("Expected", style="info", justify="right")

    for result in results:
        table.add_row(
            str(result.local_path),
            "[written]written[/]" if result.filter_written else "[skipped]kept[/]",
            "[written]written[/]" if result.config_written else "[skipped]kept[/]",
            format_mode(result.resolved_mode),
            format_duration(result.expected_duration_ms),
        )

    return table


def _describe(index: int, properties: dict[str, Any]) -> str:
    """Human-readable label of a saved registration."""
    local_path = properties.get(PROP_LOCAL_PATH)
    return f"#{index} ({local_path})" if local_path else f"#{index}"


def _expand(properties: dict[str, Any]) -> dict[str, Any]:
    """Expand ``~`` in the saved local path."""
    local_path = properties.get(PROP_LOCAL_PATH)
    if isinstance(local_path, str) and local_path.strip():
        return {**properties, PROP_LOCAL_PATH: str(Path(local_path.strip()).expanduser())}
    return properties


def apply(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to registrations file.",
        ),
    ] = None,
) -> None:
    """Provision all saved sync root registrations.

    Every registration is processed even if an earlier one fails; the
    command exits with code 1 when at least one failed.

    Examples:
        vltsync apply
        vltsync apply --config ./registrations.toml
    """
    registrations_path = config or get_registrations_path()

    try:
        registrations = load_registrations(registrations_path)
    except RegistrationsNotFoundError as e:
        print_error(f"Registrations not found: {registrations_path}")
        print_info("Use 'vltsync register ... --save' to create one.")
        raise typer.Exit(code=1) from e
    except RegistrationsError as e:
        print_error(f"Failed to load registrations: {e}")
        raise typer.Exit(code=1) from e

    if not registrations:
        print_info("No saved registrations.")
        return

    registry = get_registry()
    results: list[ProvisioningResult] = []
    failures = 0

    for index, properties in enumerate(registrations, start=1):
        provisioner = SyncRootProvisioner(registry)
        try:
            results.append(provisioner.activate(_expand(properties)))
        except (ProvisioningError, RegistryError) as e:
            failures += 1
            print_error(f"Registration {_describe(index, properties)} failed: {e}")

    if results and not is_quiet(ctx):
        console.print(_create_results_table(results))

    if failures:
        print_warning(f"{failures} of {len(registrations)} registration(s) failed.")
        raise typer.Exit(code=1)

    print_success(f"Provisioned {len(results)} sync root(s).")
