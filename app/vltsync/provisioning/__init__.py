"""Sync root provisioning engine.

This module provides directory classification, artifact probing,
sync-once mode resolution, artifact generation and the provisioning
entry point.
"""

from vltsync.provisioning.artifacts import ConfigArtifactWriter, read_sync_once
from vltsync.provisioning.classifier import is_control_file, is_effectively_empty
from vltsync.provisioning.orchestrator import SyncRootProvisioner
from vltsync.provisioning.probe import (
    CONFIG_ARTIFACT,
    DEFAULT_FILTER_ARTIFACT,
    FILTER_ARTIFACT,
    probe_artifact_state,
    probe_existing,
)
from vltsync.provisioning.resolver import resolve_sync_mode

__all__ = [
    "CONFIG_ARTIFACT",
    "DEFAULT_FILTER_ARTIFACT",
    "FILTER_ARTIFACT",
    "ConfigArtifactWriter",
    "SyncRootProvisioner",
    "is_control_file",
    "is_effectively_empty",
    "probe_artifact_state",
    "probe_existing",
    "read_sync_once",
    "resolve_sync_mode",
]
