"""Unregister command implementation.

Removes a directory from the sync root registry. The vlt sync config
files are left in place.
"""

from pathlib import Path
from typing import Annotated

import typer

from vltsync.cli.types import expand_local_path, get_registry
from vltsync.core.registrations import RegistrationsError, remove_registration
from vltsync.core.registry import RegistryError
from vltsync.provisioning.orchestrator import SyncRootProvisioner
from vltsync.utils.formatting import print_error, print_info, print_success


def unregister(
    local_path: Annotated[
        str,
        typer.Argument(help="Sync root directory to unregister."),
    ],
    forget: Annotated[
        bool,
        typer.Option(
            "--forget",
            help="Also drop the saved registration used by 'vltsync apply'.",
        ),
    ] = False,
) -> None:
    """Remove a directory from the sync root registry.

    Unregistering a directory that is not registered is not an error.

    Examples:
        vltsync unregister ./jcr_root
        vltsync unregister ./jcr_root --forget
    """
    expanded = expand_local_path(local_path)
    if not expanded:
        print_error("local path cannot be empty")
        raise typer.Exit(code=1)
    path = Path(expanded)

    try:
        SyncRootProvisioner(get_registry()).deprovision(path)
    except RegistryError as e:
        print_error(f"Unregistration failed: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Unregistered sync root: {path}")

    if forget:
        try:
            removed = remove_registration(path)
        except RegistrationsError as e:
            print_error(f"Failed to update saved registrations: {e}")
            raise typer.Exit(code=1) from e
        if removed:
            print_info("Dropped saved registration.")
        else:
            print_info("No saved registration for this directory.")
