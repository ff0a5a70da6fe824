"""XDG-compliant path management for vltsync.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and state storage.

XDG defaults:
- Config: ~/.config/vltsync/
- State: ~/.local/state/vltsync/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "vltsync"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/vltsync/ (or XDG_CONFIG_HOME/vltsync/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data holds the sync root registry, which must survive
    between runs but is not user configuration.

    Returns:
        Path to ~/.local/state/vltsync/ (or XDG_STATE_HOME/vltsync/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_registrations_path() -> Path:
    """Get the saved registrations file path.

    Returns:
        Path to ~/.config/vltsync/registrations.toml.
    """
    return get_config_dir() / "registrations.toml"


def get_registry_path() -> Path:
    """Get the sync root registry file path.

    Returns:
        Path to ~/.local/state/vltsync/sync-roots.json.
    """
    return get_state_dir() / "sync-roots.json"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/vltsync/theme.toml.
    """
    return get_config_dir() / "theme.toml"
