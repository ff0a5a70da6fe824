"""Register command implementation.

Provisions a local directory as a vlt sync root and adds it to the
sync root registry.
"""

from typing import Annotated

import typer

from vltsync.cli.types import ModeChoice, expand_local_path, get_registry, is_quiet
from vltsync.core.registrations import RegistrationsError, upsert_registration
from vltsync.core.registry import RegistryError
from vltsync.errors import ProvisioningError
from vltsync.models.provisioning import ProvisioningResult
from vltsync.models.request import (
    DEFAULT_SYNC_ONCE_EXPECTED_TIME,
    PROP_FILTER_ROOTS,
    PROP_LOCAL_PATH,
    PROP_OVERWRITE_CONFIG_FILES,
    PROP_SYNC_ONCE_EXPECTED_TIME,
    PROP_SYNC_ONCE_TYPE,
)
from vltsync.provisioning.orchestrator import SyncRootProvisioner
from vltsync.provisioning.probe import CONFIG_ARTIFACT, FILTER_ARTIFACT
from vltsync.utils.formatting import (
    console,
    format_duration,
    format_mode,
    print_error,
    print_info,
    print_success,
)


def show_result(result: ProvisioningResult) -> None:
    """Display what a provisioning pass wrote and registered.

    Args:
        result: The provisioning result to summarize.
    """
    filter_state = "[written]written[/]" if result.filter_written else "[skipped]kept[/]"
    config_state = "[written]written[/]" if result.config_written else "[skipped]kept[/]"
    will_run = "yes" if result.will_run_initial_sync else "no"

    console.print()
    console.print("[bold]Sync Root[/bold]")
    console.print(f"  Path: [info]{result.local_path}[/info]")
    console.print(f"  {FILTER_ARTIFACT}: {filter_state}")
    console.print(f"  {CONFIG_ARTIFACT}: {config_state}")
    console.print(f"  Sync once: {format_mode(result.resolved_mode)} (will run: {will_run})")
    console.print(f"  Expected time: [muted]{format_duration(result.expected_duration_ms)}[/muted]")
    console.print()


def register(
    ctx: typer.Context,
    local_path: Annotated[
        str,
        typer.Argument(help="Filesystem directory to register as sync root."),
    ],
    roots: Annotated[
        list[str] | None,
        typer.Option(
            "--root",
            "-r",
            help="Repository path to add as filter root (repeatable).",
        ),
    ] = None,
    mode: Annotated[
        ModeChoice,
        typer.Option(
            "--mode",
            "-m",
            help="Sync-once mode to perform after registration.",
            case_sensitive=False,
        ),
    ] = ModeChoice.DISABLED,
    overwrite: Annotated[
        bool,
        typer.Option(
            "--overwrite",
            "-f",
            help="Overwrite existing vlt sync config files.",
        ),
    ] = False,
    expected_time: Annotated[
        int,
        typer.Option(
            "--expected-time",
            "-t",
            help="Expected sync-once duration in milliseconds.",
            min=0,
        ),
    ] = DEFAULT_SYNC_ONCE_EXPECTED_TIME,
    save: Annotated[
        bool,
        typer.Option(
            "--save",
            "-s",
            help="Remember the registration for 'vltsync apply'.",
        ),
    ] = False,
) -> None:
    """Register a local directory as a vlt sync root.

    Creates the directory if needed, generates .vlt-sync-filter.xml and
    .vlt-sync-config.properties, and adds the directory to the registry.
    Existing config files are kept unless --overwrite is given; a default
    META-INF/vault/filter.xml always takes precedence over a generated filter.

    Examples:
        vltsync register ./jcr_root -r /content/my-app
        vltsync register ./jcr_root -r /content/a -r /etc/designs/a --mode auto
        vltsync register ./jcr_root -r /content/my-app --overwrite --save
    """
    properties = {
        PROP_FILTER_ROOTS: roots,
        PROP_LOCAL_PATH: expand_local_path(local_path),
        PROP_SYNC_ONCE_TYPE: mode.to_sync_once_mode().value,
        PROP_OVERWRITE_CONFIG_FILES: overwrite,
        PROP_SYNC_ONCE_EXPECTED_TIME: expected_time,
    }

    provisioner = SyncRootProvisioner(get_registry())
    try:
        result = provisioner.activate(properties)
    except ProvisioningError as e:
        print_error(f"Provisioning failed: {e}")
        raise typer.Exit(code=1) from e
    except RegistryError as e:
        print_error(f"Registration failed: {e}")
        raise typer.Exit(code=1) from e

    if not is_quiet(ctx):
        show_result(result)

    print_success(f"Registered sync root: {result.local_path}")

    if save and provisioner.request is not None:
        try:
            saved_path = upsert_registration(provisioner.request)
        except RegistrationsError as e:
            print_error(f"Failed to save registration: {e}")
            raise typer.Exit(code=1) from e
        print_info(f"Saved registration to {saved_path}")
