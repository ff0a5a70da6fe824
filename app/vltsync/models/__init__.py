"""Data models for vltsync.

This module exports the core data structures used throughout the application.
"""

from vltsync.models.provisioning import ArtifactState, ProvisioningResult, SyncModeDecision
from vltsync.models.registry import RegisteredSyncRoot, RegistryDocument
from vltsync.models.request import ProvisioningRequest, SyncOnceMode

__all__ = [
    "ArtifactState",
    "ProvisioningRequest",
    "ProvisioningResult",
    "RegisteredSyncRoot",
    "RegistryDocument",
    "SyncModeDecision",
    "SyncOnceMode",
]
