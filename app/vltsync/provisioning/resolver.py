"""Sync-once mode resolution."""

import logging

from vltsync.models.request import SyncOnceMode

logger = logging.getLogger(__name__)


def resolve_sync_mode(requested: SyncOnceMode, directory_is_empty: bool) -> SyncOnceMode:
    """Turn a requested sync-once mode into the mode to persist.

    Explicit directions and DISABLED pass through unchanged. AUTO becomes
    JCR2FS for an empty directory (nothing local to push, so pull from the
    repository) and FS2JCR otherwise (local content is authoritative).

    Args:
        requested: Mode from the provisioning request.
        directory_is_empty: Classifier verdict for the sync root.

    Returns:
        Concrete mode; never AUTO.
    """
    if requested != SyncOnceMode.AUTO:
        return requested

    resolved = SyncOnceMode.JCR2FS if directory_is_empty else SyncOnceMode.FS2JCR
    logger.debug("Resolved AUTO sync-once to %s (empty=%s)", resolved.value, directory_is_empty)
    return resolved
