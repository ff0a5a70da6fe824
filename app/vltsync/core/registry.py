"""Sync root registry.

This module defines the interface the provisioning engine uses to
announce sync roots, and a JSON file-backed implementation that keeps
the table of registered roots in the state directory.
"""

import json
import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Protocol, runtime_checkable

from pydantic import ValidationError

from vltsync.core.paths import get_registry_path
from vltsync.models.registry import RegisteredSyncRoot, RegistryDocument

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Raised when the registry file cannot be read or written."""


@runtime_checkable
class SyncRootRegistry(Protocol):
    """Tracks which directories are active sync roots.

    Both operations are idempotent. Callers never inspect return values.
    """

    def add_sync_root(self, path: Path, expected_duration_ms: int | None) -> None:
        """Register a sync root, replacing any previous registration."""
        ...

    def remove_sync_root(self, path: Path) -> None:
        """Deregister a sync root; unknown paths are ignored."""
        ...


def _registry_key(path: Path) -> str:
    """Normalize a sync root path into its registry key."""
    return str(path.expanduser().absolute())


class JsonSyncRootRegistry:
    """Sync root registry persisted as a JSON document.

    Storage location: ~/.local/state/vltsync/sync-roots.json

    Every call re-reads the file, so several processes see each other's
    changes; writes are atomic.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the registry.

        Args:
            path: Optional override for the registry file.
                  Default: ~/.local/state/vltsync/sync-roots.json
        """
        self._path = path if path is not None else get_registry_path()

    @property
    def path(self) -> Path:
        """Path to the registry file."""
        return self._path

    def add_sync_root(self, path: Path, expected_duration_ms: int | None) -> None:
        """Register a sync root.

        Raises:
            RegistryError: If the registry file cannot be read or written.
        """
        key = _registry_key(path)
        document = self._load()
        roots = [root for root in document.roots if root.path != key]
        roots.append(
            RegisteredSyncRoot(
                path=key,
                expected_duration_ms=expected_duration_ms,
                registered_at=datetime.now(UTC),
            )
        )
        document.roots = sorted(roots, key=lambda root: root.path)
        self._save(document)
        logger.info("Registered sync root %s (expected time: %s)", key, expected_duration_ms)

    def remove_sync_root(self, path: Path) -> None:
        """Deregister a sync root; a no-op for unknown paths.

        Raises:
            RegistryError: If the registry file cannot be read or written.
        """
        key = _registry_key(path)
        document = self._load()
        remaining = [root for root in document.roots if root.path != key]
        if len(remaining) == len(document.roots):
            logger.debug("Sync root %s is not registered", key)
            return

        document.roots = remaining
        self._save(document)
        logger.info("Removed sync root %s", key)

    def get(self, path: Path) -> RegisteredSyncRoot | None:
        """Find the registration of a path, if any."""
        key = _registry_key(path)
        for root in self._load().roots:
            if root.path == key:
                return root
        return None

    def list_sync_roots(self) -> list[RegisteredSyncRoot]:
        """Return all registered sync roots, sorted by path."""
        return sorted(self._load().roots, key=lambda root: root.path)

    def _load(self) -> RegistryDocument:
        """Read the registry file; a missing file is an empty registry."""
        if not self._path.exists():
            return RegistryDocument()

        try:
            with self._path.open(encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise RegistryError(f"Invalid registry file {self._path}: {e}") from e
        except OSError as e:
            raise RegistryError(f"Failed to read registry {self._path}: {e}") from e

        try:
            return RegistryDocument.model_validate(data)
        except ValidationError as e:
            raise RegistryError(f"Invalid registry content in {self._path}: {e}") from e

    def _save(self, document: RegistryDocument) -> None:
        """Write the registry file atomically."""
        tmp_path: Path | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                f.write(document.model_dump_json(indent=2))
                f.write("\n")
            os.replace(str(tmp_path), str(self._path))
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise RegistryError(f"Failed to write registry {self._path}: {e}") from e
