"""Utility modules for vltsync.

This module exports commonly used utility functions.
"""

from vltsync.utils.formatting import (
    console,
    create_sync_roots_table,
    err_console,
    format_duration,
    format_mode,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_sync_roots_table",
    "err_console",
    "format_duration",
    "format_mode",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
