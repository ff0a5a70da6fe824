"""Sync root provisioning entry point.

The SyncRootProvisioner prepares a local directory as a vlt sync root,
similar to ``vlt sync register``: it makes sure the directory exists,
writes the filter and sync-mode artifacts, and announces the directory
to the sync root registry together with the expected duration of the
first sync.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from vltsync.core.registry import SyncRootRegistry
from vltsync.errors import ArtifactIOError
from vltsync.models.provisioning import ProvisioningResult
from vltsync.models.request import ProvisioningRequest
from vltsync.provisioning.artifacts import ConfigArtifactWriter

logger = logging.getLogger(__name__)


class SyncRootProvisioner:
    """Provisions and deprovisions one sync root.

    The instance owns the state of a single directory between provision()
    and deprovision(): the last request and its result.

    Args:
        registry: Registry notified about added and removed sync roots.
    """

    def __init__(self, registry: SyncRootRegistry) -> None:
        self._registry = registry
        self._request: ProvisioningRequest | None = None
        self._result: ProvisioningResult | None = None

    @property
    def request(self) -> ProvisioningRequest | None:
        """The last provisioned request, or None."""
        return self._request

    @property
    def result(self) -> ProvisioningResult | None:
        """The result of the last provision, or None."""
        return self._result

    @property
    def local_path(self) -> Path | None:
        """The directory currently owned by this provisioner, or None."""
        return self._request.local_path if self._request is not None else None

    def activate(self, properties: Mapping[str, Any]) -> ProvisioningResult:
        """Provision a sync root from an activation property bag.

        Raises:
            MissingParameterError: If filter.roots or local.path is missing.
            InvalidParameterError: If a property value cannot be used.
            ArtifactIOError: If the directory or an artifact cannot be
                created, written or read.
        """
        logger.debug("activate(): properties = %s", dict(properties))
        return self.provision(ProvisioningRequest.from_properties(properties))

    def provision(self, request: ProvisioningRequest) -> ProvisioningResult:
        """Provision a sync root.

        Steps, in order: ensure the directory exists, write the filter
        artifact, write (or recover) the sync-mode artifact, register the
        directory.

        The expected duration is only passed to the registry when this pass
        wrote the sync-mode artifact with an enabled mode. A kept artifact
        may still announce a sync-once, but its duration is not known here.

        Args:
            request: Validated provisioning request.

        Returns:
            ProvisioningResult describing what was written and registered.

        Raises:
            ArtifactIOError: If the directory or an artifact cannot be
                created, written or read. Nothing is registered then.
        """
        local_path = request.local_path
        self._request = request
        self._result = None

        self._ensure_directory(local_path)

        writer = ConfigArtifactWriter(local_path, overwrite=request.overwrite_existing)
        filter_written = writer.write_filter_artifact(request.filter_roots)
        decision = writer.write_config_artifact(request.sync_once_mode)

        expected_duration_ms: int | None = None
        if decision.written and decision.will_run_initial_sync:
            expected_duration_ms = request.expected_sync_duration_ms

        self._registry.add_sync_root(local_path, expected_duration_ms)

        self._result = ProvisioningResult(
            local_path=local_path,
            will_run_initial_sync=decision.will_run_initial_sync,
            expected_duration_ms=expected_duration_ms,
            filter_written=filter_written,
            config_written=decision.written,
            resolved_mode=decision.resolved_mode,
        )
        logger.debug("provision(): %s", self._result)
        return self._result

    def deprovision(self, local_path: Path | None = None) -> None:
        """Deregister a sync root and forget the held state.

        Args:
            local_path: Directory to deregister. Defaults to the directory of
                the last provision; with neither, nothing happens.
        """
        target = local_path if local_path is not None else self.local_path
        if target is not None:
            logger.debug("deprovision(): removing sync root %s", target)
            self._registry.remove_sync_root(target)

        self._request = None
        self._result = None

    def deactivate(self) -> None:
        """Deregister the directory of the last provision, if any."""
        self.deprovision()

    @staticmethod
    def _ensure_directory(local_path: Path) -> None:
        """Create the sync root directory and its parents."""
        try:
            local_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArtifactIOError(f"Cannot create sync root directory {local_path}: {e}") from e
