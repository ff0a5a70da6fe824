"""Directory classification for sync-once direction.

A sync root counts as "empty" when it holds nothing but vlt sync
control files (.vlt-sync-config.properties, .vlt-sync.log, ...).
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Reserved filename prefix of vlt sync control files (case-sensitive).
CONTROL_FILE_PREFIX = ".vlt-sync"


def is_control_file(name: str) -> bool:
    """Check if a directory entry name belongs to the control-file family.

    Names must start with ``.vlt-sync`` and carry at least one more
    character, so a bare ``.vlt-sync`` entry is regular content.

    Args:
        name: Entry basename.

    Returns:
        True if the entry is a reserved control file.
    """
    return name.startswith(CONTROL_FILE_PREFIX) and len(name) > len(CONTROL_FILE_PREFIX)


def list_content_entries(path: Path) -> list[Path]:
    """List the entries of a directory that are not control files.

    Missing or unlistable directories yield an empty list.

    Args:
        path: Directory to list.

    Returns:
        Sorted list of non-control entries.
    """
    try:
        entries = sorted(path.iterdir())
    except FileNotFoundError:
        return []
    except OSError as e:
        logger.warning("Cannot list directory %s, treating it as empty: %s", path, e)
        return []

    return [entry for entry in entries if not is_control_file(entry.name)]


def is_effectively_empty(path: Path) -> bool:
    """Check if a directory holds no content besides control files.

    Listing failures count as empty.

    Args:
        path: Directory to classify.

    Returns:
        True if no non-control entries remain.
    """
    content = list_content_entries(path)
    logger.debug("Directory %s has %d content entries", path, len(content))
    return not content
