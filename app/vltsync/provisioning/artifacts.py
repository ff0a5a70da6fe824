"""Generation of the vlt sync configuration artifacts.

Two artifacts describe a sync root:

- ``.vlt-sync-filter.xml`` lists the repository paths the directory mirrors.
- ``.vlt-sync-config.properties`` enables sync and sets the sync-once
  direction.

Existing artifacts are user territory: they are only replaced when
overwriting is requested, and a default workspace filter
(``META-INF/vault/filter.xml``) always suppresses the generated filter so
other vlt commands such as checkout and commit keep working.
"""

import logging
import os
import re
import stat
from collections.abc import Iterator, Sequence
from pathlib import Path
from tempfile import NamedTemporaryFile
from xml.sax.saxutils import quoteattr

from vltsync.errors import ArtifactIOError
from vltsync.models.provisioning import SyncModeDecision
from vltsync.models.request import SyncOnceMode
from vltsync.provisioning.classifier import is_effectively_empty
from vltsync.provisioning.probe import (
    CONFIG_ARTIFACT,
    DEFAULT_FILTER_LOCATIONS,
    FILTER_ARTIFACT,
    probe_existing,
)
from vltsync.provisioning.resolver import resolve_sync_mode

logger = logging.getLogger(__name__)

# Keys of the sync-mode artifact
KEY_DISABLED = "disabled"
KEY_SYNC_ONCE = "sync-once"

_COMMENT_PREFIXES = ("#", "!")
_WHITESPACE = " \t\f"
_KEY_TERMINATORS = "=:" + _WHITESPACE
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ESCAPE_PATTERN = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)


def render_filter_artifact(filter_roots: Sequence[str]) -> str:
    """Render the workspace filter XML for a list of repository roots.

    Args:
        filter_roots: Repository paths, emitted in the given order.

    Returns:
        XML document text.
    """
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<workspaceFilter version="1.0">',
    ]
    lines.extend(f"\t<filter root={quoteattr(root)}/>" for root in filter_roots)
    lines.append("</workspaceFilter>")
    return "\n".join(lines) + "\n"


def render_config_artifact(mode: SyncOnceMode) -> str:
    """Render the sync-mode properties for a resolved mode.

    Raises:
        ValueError: If mode is AUTO, which must be resolved first.
    """
    if mode == SyncOnceMode.AUTO:
        msg = "AUTO must be resolved before it is persisted"
        raise ValueError(msg)
    return f"{KEY_DISABLED}=false\n{KEY_SYNC_ONCE}={mode.value}\n"


def _ends_with_continuation(line: str) -> bool:
    """Check if a line ends with an odd number of backslashes."""
    return (len(line) - len(line.rstrip("\\"))) % 2 == 1


def _logical_lines(text: str) -> Iterator[str]:
    """Yield logical lines, joining backslash continuations.

    Comment and blank lines are dropped; leading whitespace of every
    natural line is removed.
    """
    pending: str | None = None
    for raw_line in text.splitlines():
        line = raw_line.lstrip(_WHITESPACE)
        if pending is None and (not line or line.startswith(_COMMENT_PREFIXES)):
            continue
        if _ends_with_continuation(line):
            pending = (pending or "") + line[:-1]
            continue
        yield (pending or "") + line
        pending = None
    if pending is not None:
        yield pending


def _replace_escape(match: re.Match[str]) -> str:
    code = match.group(1)
    if len(code) == 5:
        return chr(int(code[1:], 16))
    return _ESCAPES.get(code, code)


def _unescape(text: str) -> str:
    return _ESCAPE_PATTERN.sub(_replace_escape, text)


def _split_key_value(line: str) -> tuple[str, str]:
    """Split a logical line at the first unescaped ``=``, ``:`` or whitespace."""
    index = 0
    escaped = False
    while index < len(line):
        char = line[index]
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in _KEY_TERMINATORS:
            break
        index += 1

    rest = line[index:].lstrip(_WHITESPACE)
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(_WHITESPACE)
    return _unescape(line[:index]), _unescape(rest)


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java-style properties text.

    Blank lines and lines starting with ``#`` or ``!`` are skipped, and a
    line ending in a backslash continues on the next one. The key ends at
    the first unescaped ``=``, ``:`` or whitespace; a line with only a key
    has an empty value. Later keys override earlier ones.
    """
    return dict(_split_key_value(line) for line in _logical_lines(text))


def read_sync_once(config_path: Path) -> str:
    """Read the persisted sync-once value of an existing sync-mode artifact.

    The file is decoded as ISO-8859-1, like Java properties files, so any
    byte sequence can be read.

    Args:
        config_path: Path to .vlt-sync-config.properties.

    Returns:
        The sync-once value, or "" if the key is absent.

    Raises:
        ArtifactIOError: If the file cannot be read.
    """
    try:
        text = config_path.read_text(encoding="latin-1")
    except OSError as e:
        raise ArtifactIOError(f"Failed to read {config_path}: {e}") from e
    return parse_properties(text).get(KEY_SYNC_ONCE, "")


def recover_sync_mode(config_path: Path) -> SyncModeDecision:
    """Derive the sync-mode decision from an artifact this pass did not write.

    A non-empty persisted sync-once value means an initial sync will run.

    Raises:
        ArtifactIOError: If the artifact cannot be read.
    """
    value = read_sync_once(config_path)
    try:
        mode: SyncOnceMode | None = SyncOnceMode.parse(value)
    except ValueError:
        logger.warning("Unknown sync-once value %r in %s", value, config_path)
        mode = None
    if mode == SyncOnceMode.AUTO:
        mode = None

    return SyncModeDecision(
        resolved_mode=mode,
        will_run_initial_sync=bool(value),
        written=False,
    )


def _artifact_mode(path: Path) -> int:
    """Permission bits for a written artifact.

    A replaced file keeps its mode; a new file gets 0o666 minus the umask.
    """
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_text_atomic(path: Path, content: str) -> None:
    """Write a text file atomically.

    The content goes to a temporary file in the same directory which then
    replaces the target with os.replace(). The temporary file is removed on
    failure, so the target is never left half-written.

    Raises:
        ArtifactIOError: If the file cannot be written.
    """
    tmp_path: Path | None = None
    try:
        mode = _artifact_mode(path)
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f"{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            f.write(content)
        os.chmod(tmp_path, mode)
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ArtifactIOError(f"Failed to write {path}: {e}") from e


class ConfigArtifactWriter:
    """Writes the vlt sync artifacts of one sync root.

    Args:
        local_path: Sync root directory; must already exist.
        overwrite: Replace artifacts that already exist.
    """

    def __init__(self, local_path: Path, *, overwrite: bool = False) -> None:
        self._local_path = local_path
        self._overwrite = overwrite

    @property
    def filter_path(self) -> Path:
        """Path of the generated filter artifact."""
        return self._local_path / FILTER_ARTIFACT

    @property
    def config_path(self) -> Path:
        """Path of the sync-mode artifact."""
        return self._local_path / CONFIG_ARTIFACT

    def write_filter_artifact(self, filter_roots: Sequence[str]) -> bool:
        """Write .vlt-sync-filter.xml unless a default or existing filter wins.

        Args:
            filter_roots: Repository paths to list.

        Returns:
            True if the artifact was written by this call.

        Raises:
            ArtifactIOError: If the artifact cannot be written.
        """
        existing_filter = probe_existing(self._local_path, FILTER_ARTIFACT)
        existing_default = probe_existing(self._local_path, *DEFAULT_FILTER_LOCATIONS)

        if existing_default:
            logger.debug(
                "Skipping %s at %s: default filter present %s",
                FILTER_ARTIFACT,
                self._local_path,
                existing_default,
            )
            return False

        if existing_filter and not self._overwrite:
            logger.debug("Skipping %s at %s: already exists", FILTER_ARTIFACT, self._local_path)
            return False

        logger.debug("Writing %s at %s", FILTER_ARTIFACT, self._local_path)
        write_text_atomic(self.filter_path, render_filter_artifact(filter_roots))
        return True

    def write_config_artifact(self, requested_mode: SyncOnceMode) -> SyncModeDecision:
        """Write .vlt-sync-config.properties, or recover the existing one.

        Existence is checked, and the directory classified, before anything
        is written.

        Args:
            requested_mode: Mode from the request (may be AUTO).

        Returns:
            The sync-mode decision for this pass.

        Raises:
            ArtifactIOError: If the artifact cannot be written, or cannot be
                read back when it is kept.
        """
        existing_config = probe_existing(self._local_path, CONFIG_ARTIFACT)

        if existing_config and not self._overwrite:
            logger.debug(
                "Keeping %s at %s, recovering sync-once value",
                CONFIG_ARTIFACT,
                self._local_path,
            )
            return recover_sync_mode(self.config_path)

        directory_is_empty = is_effectively_empty(self._local_path)
        mode = resolve_sync_mode(requested_mode, directory_is_empty)

        logger.debug(
            "Writing %s at %s (sync-once=%r)", CONFIG_ARTIFACT, self._local_path, mode.value
        )
        write_text_atomic(self.config_path, render_config_artifact(mode))

        return SyncModeDecision(
            resolved_mode=mode,
            will_run_initial_sync=not mode.is_disabled,
            written=True,
        )
