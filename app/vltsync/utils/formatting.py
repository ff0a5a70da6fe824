"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.table import Table

from vltsync.core.theme import get_theme
from vltsync.models.request import SyncOnceMode


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_sync_roots_table(title: str = "Registered Sync Roots") -> Table:
    """Create a pre-configured table for displaying registered sync roots.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for sync root display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("Local Path", no_wrap=True, style="text")
    table.add_column("Sync Once", justify="center")
    table.add_column("Expected", style="info", justify="right")
    table.add_column("Registered", style="muted")
    return table


def format_mode(mode: SyncOnceMode | None) -> str:
    """Format a sync-once mode with color markup.

    Args:
        mode: Persisted sync-once mode, or None when unknown.

    Returns:
        Rich markup string for the mode.
    """
    if mode is None:
        return "[warning]unknown[/]"
    if mode == SyncOnceMode.FS2JCR:
        return "[mode.fs2jcr]FS2JCR[/]"
    if mode == SyncOnceMode.JCR2FS:
        return "[mode.jcr2fs]JCR2FS[/]"
    if mode == SyncOnceMode.AUTO:
        return "[info]AUTO[/]"
    return "[mode.disabled]disabled[/]"


def format_duration(duration_ms: int | None) -> str:
    """Format an expected sync duration in milliseconds.

    Returns:
        "-" when no initial sync is expected, otherwise e.g. "3000 ms".
    """
    if duration_ms is None:
        return "-"
    return f"{duration_ms} ms"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
