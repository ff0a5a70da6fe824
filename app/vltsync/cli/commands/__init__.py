"""CLI commands for vltsync.

This package contains all subcommand implementations.
"""

from vltsync.cli.commands import apply, register, roots, status, unregister

__all__ = ["apply", "register", "roots", "status", "unregister"]
