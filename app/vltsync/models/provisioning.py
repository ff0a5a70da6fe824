"""Provisioning outcome models.

This module defines the immutable data structures produced while
provisioning a sync root: the probed artifact state, the sync-mode
decision and the overall result reported back to callers.
"""

from dataclasses import dataclass
from pathlib import Path

from vltsync.models.request import SyncOnceMode


@dataclass(frozen=True, slots=True)
class ArtifactState:
    """Which vlt sync artifacts already exist for a directory.

    Probed fresh on every provisioning pass; never cached.

    Attributes:
        filter_artifact_exists: .vlt-sync-filter.xml is present.
        default_filter_artifact_exists: META-INF/vault/filter.xml is present
            inside the directory or one level above it.
        config_artifact_exists: .vlt-sync-config.properties is present.
    """

    filter_artifact_exists: bool
    default_filter_artifact_exists: bool
    config_artifact_exists: bool


@dataclass(frozen=True, slots=True)
class SyncModeDecision:
    """Outcome of handling the sync-mode artifact.

    Attributes:
        resolved_mode: Mode persisted by this pass, or recovered from the
            existing artifact. Never AUTO. None when the recovered value is
            not a known mode token.
        will_run_initial_sync: Whether a sync-once pass is expected.
        written: True if this pass wrote the artifact, False if it was kept.
    """

    resolved_mode: SyncOnceMode | None
    will_run_initial_sync: bool
    written: bool

    def __post_init__(self) -> None:
        """Validate decision data after initialization."""
        if self.resolved_mode == SyncOnceMode.AUTO:
            msg = "AUTO must be resolved before it is persisted"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ProvisioningResult:
    """Result of provisioning one sync root.

    Attributes:
        local_path: The provisioned directory.
        will_run_initial_sync: Whether a sync-once pass is expected.
        expected_duration_ms: Duration passed to the registry, or None when
            this pass did not decide an initial sync.
        filter_written: The filter artifact was written by this pass.
        config_written: The sync-mode artifact was written by this pass.
        resolved_mode: Persisted or recovered sync-once mode.
    """

    local_path: Path
    will_run_initial_sync: bool
    expected_duration_ms: int | None
    filter_written: bool
    config_written: bool
    resolved_mode: SyncOnceMode | None
