"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from vltsync.core.registry import JsonSyncRootRegistry
from vltsync.models.request import SyncOnceMode


class ModeChoice(str, Enum):
    """Sync-once modes accepted on the command line."""

    DISABLED = "disabled"
    AUTO = "auto"
    FS2JCR = "fs2jcr"
    JCR2FS = "jcr2fs"

    def to_sync_once_mode(self) -> SyncOnceMode:
        """Map the CLI choice to the persisted sync-once mode."""
        if self == ModeChoice.DISABLED:
            return SyncOnceMode.DISABLED
        return SyncOnceMode(self.value.upper())


def get_registry() -> JsonSyncRootRegistry:
    """Get the registry used by CLI commands."""
    return JsonSyncRootRegistry()


def expand_local_path(value: str) -> str:
    """Trim a local path argument and expand ``~``; blank stays blank."""
    value = value.strip()
    if not value:
        return value
    return str(Path(value).expanduser())


def is_quiet(ctx: typer.Context) -> bool:
    """Check if the global --quiet option is set."""
    return bool(ctx.obj and ctx.obj.get("quiet"))
