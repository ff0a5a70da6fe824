"""Saved sync root registrations.

Registrations are activation property bags kept in
~/.config/vltsync/registrations.toml so ``vltsync apply`` can provision
them again, e.g. at login. Each ``[[registration]]`` table uses the
property names as TOML keys, either dotted or quoted::

    [[registration]]
    local.path = "~/projects/my-app/jcr_root"
    filter.roots = ["/content/my-app", "/etc/designs/my-app"]
    sync.once.type = "AUTO"
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w

from vltsync.core.paths import get_registrations_path
from vltsync.models.request import PROP_LOCAL_PATH, PROPERTY_KEYS, ProvisioningRequest

logger = logging.getLogger(__name__)

REGISTRATION_TABLE = "registration"


class RegistrationsError(Exception):
    """Base exception for registrations file errors."""


class RegistrationsNotFoundError(RegistrationsError):
    """Raised when the registrations file is not found."""


class RegistrationsParseError(RegistrationsError):
    """Raised when the registrations file cannot be parsed."""


def _flatten(table: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested TOML tables into dotted property names."""
    flat: dict[str, Any] = {}
    for key, value in table.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{name}."))
        else:
            flat[name] = value
    return flat


def _same_location(left: object, right: Path) -> bool:
    """Check if a saved local.path value points at the given directory."""
    if left is None:
        return False
    saved = Path(str(left).strip()).expanduser().absolute()
    return saved == right.expanduser().absolute()


def load_registrations(path: Path | None = None) -> list[dict[str, Any]]:
    """Load saved registrations as activation property bags.

    Args:
        path: Path to the registrations file. If None, uses the default path.

    Returns:
        Property bags in file order.

    Raises:
        RegistrationsNotFoundError: If the file doesn't exist.
        RegistrationsParseError: If the TOML syntax or layout is invalid.
        RegistrationsError: If the file cannot be read.
    """
    registrations_path = path or get_registrations_path()

    if not registrations_path.exists():
        raise RegistrationsNotFoundError(f"Registrations not found: {registrations_path}")

    try:
        with open(registrations_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise RegistrationsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise RegistrationsError(f"Failed to read registrations: {e}") from e

    tables = data.get(REGISTRATION_TABLE, [])
    if not isinstance(tables, list) or not all(isinstance(t, dict) for t in tables):
        msg = f"'{REGISTRATION_TABLE}' must be an array of tables ([[{REGISTRATION_TABLE}]])"
        raise RegistrationsParseError(msg)

    registrations: list[dict[str, Any]] = []
    for index, table in enumerate(tables, start=1):
        properties = _flatten(table)
        unknown = sorted(set(properties) - set(PROPERTY_KEYS))
        if unknown:
            logger.warning("Ignoring unknown keys in registration %d: %s", index, unknown)
            for key in unknown:
                properties.pop(key)
        registrations.append(properties)

    return registrations


def save_registrations(registrations: list[dict[str, Any]], path: Path | None = None) -> Path:
    """Save registrations to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        registrations: Property bags to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the registrations were saved.

    Raises:
        RegistrationsError: If the file cannot be written.
    """
    registrations_path = path or get_registrations_path()

    data = {
        REGISTRATION_TABLE: [
            {key: value for key, value in properties.items() if value is not None}
            for properties in registrations
        ]
    }

    tmp_path: Path | None = None
    try:
        registrations_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=registrations_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(registrations_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise RegistrationsError(f"Failed to write registrations: {e}") from e

    return registrations_path


def _load_or_empty(path: Path | None) -> list[dict[str, Any]]:
    try:
        return load_registrations(path)
    except RegistrationsNotFoundError:
        return []


def upsert_registration(request: ProvisioningRequest, path: Path | None = None) -> Path:
    """Save a request, replacing any registration for the same directory.

    Returns:
        Path where the registrations were saved.

    Raises:
        RegistrationsError: If the file cannot be read or written.
    """
    registrations = [
        properties
        for properties in _load_or_empty(path)
        if not _same_location(properties.get(PROP_LOCAL_PATH), request.local_path)
    ]
    registrations.append(request.to_properties())
    return save_registrations(registrations, path)


def remove_registration(local_path: Path, path: Path | None = None) -> bool:
    """Drop the saved registration of a directory.

    Returns:
        True if a registration was removed, False if none matched.

    Raises:
        RegistrationsError: If the file cannot be read or written.
    """
    registrations = _load_or_empty(path)
    remaining = [
        properties
        for properties in registrations
        if not _same_location(properties.get(PROP_LOCAL_PATH), local_path)
    ]
    if len(remaining) == len(registrations):
        return False

    save_registrations(remaining, path)
    return True
