"""Existence checks for vlt sync artifacts.

Artifacts are identified by paths relative to the sync root. A logical
artifact may have several accepted locations (the default workspace
filter can live inside the sync root or one level above it), so the
probe reports every candidate that exists and leaves ranking to the
caller.
"""

from pathlib import Path

from vltsync.models.provisioning import ArtifactState

FILTER_ARTIFACT = ".vlt-sync-filter.xml"
CONFIG_ARTIFACT = ".vlt-sync-config.properties"
DEFAULT_FILTER_ARTIFACT = "META-INF/vault/filter.xml"

# Accepted locations of the default filter, in priority order.
DEFAULT_FILTER_LOCATIONS: tuple[str, ...] = (
    DEFAULT_FILTER_ARTIFACT,
    f"../{DEFAULT_FILTER_ARTIFACT}",
)


def probe_existing(base: Path, *relative_paths: str) -> list[str]:
    """Return the candidate relative paths that exist under a base directory.

    Args:
        base: Directory the candidates are relative to.
        *relative_paths: Candidate locations, in priority order.

    Returns:
        Existing candidates, in the order given.
    """
    return [rel for rel in relative_paths if (base / rel).exists()]


def probe_artifact_state(base: Path) -> ArtifactState:
    """Probe all artifact families of a sync root.

    Args:
        base: Sync root directory.

    Returns:
        Freshly probed ArtifactState.
    """
    return ArtifactState(
        filter_artifact_exists=bool(probe_existing(base, FILTER_ARTIFACT)),
        default_filter_artifact_exists=bool(probe_existing(base, *DEFAULT_FILTER_LOCATIONS)),
        config_artifact_exists=bool(probe_existing(base, CONFIG_ARTIFACT)),
    )
