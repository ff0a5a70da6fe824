"""Provisioning request model.

This module defines the Pydantic model describing one sync root
activation, together with the property-bag keys it is built from.
"""

from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from vltsync.errors import InvalidParameterError, MissingParameterError

# Activation property-bag keys
PROP_FILTER_ROOTS = "filter.roots"
PROP_LOCAL_PATH = "local.path"
PROP_SYNC_ONCE_TYPE = "sync.once.type"
PROP_SYNC_ONCE_EXPECTED_TIME = "sync.once.expected.time"
PROP_OVERWRITE_CONFIG_FILES = "overwrite.config.files"

PROPERTY_KEYS: tuple[str, ...] = (
    PROP_FILTER_ROOTS,
    PROP_LOCAL_PATH,
    PROP_SYNC_ONCE_TYPE,
    PROP_SYNC_ONCE_EXPECTED_TIME,
    PROP_OVERWRITE_CONFIG_FILES,
)

DEFAULT_OVERWRITE_CONFIG_FILES = False
DEFAULT_SYNC_ONCE_EXPECTED_TIME = 3000


class SyncOnceMode(str, Enum):
    """Initial sync ("sync-once") direction of a sync root.

    Attributes:
        DISABLED: No initial sync; persisted as an empty value.
        AUTO: Pick a direction from the directory contents. Never persisted.
        FS2JCR: Push the local filesystem content into the repository.
        JCR2FS: Pull the repository content into the local filesystem.
    """

    DISABLED = ""
    AUTO = "AUTO"
    FS2JCR = "FS2JCR"
    JCR2FS = "JCR2FS"

    @classmethod
    def parse(cls, value: object) -> "SyncOnceMode":
        """Parse a property value into a mode.

        None, empty and blank values map to DISABLED. Tokens are
        case-sensitive, matching the values written to the artifact.

        Raises:
            ValueError: If the value is not a known mode token.
        """
        if value is None:
            return cls.DISABLED
        if isinstance(value, cls):
            return value
        token = str(value).strip()
        if not token:
            return cls.DISABLED
        try:
            return cls(token)
        except ValueError:
            valid = ", ".join(repr(m.value) for m in cls)
            msg = f"Unknown sync-once mode {token!r} (expected one of {valid})"
            raise ValueError(msg) from None

    @property
    def is_disabled(self) -> bool:
        """Check if this mode means no initial sync."""
        return self == SyncOnceMode.DISABLED


def _to_string_list(value: object) -> list[str]:
    """Coerce a property value into a list of non-blank, stripped strings."""
    if value is None:
        return []
    if isinstance(value, str):
        items: list[object] = [value]
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        items = [value]
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


class ProvisioningRequest(BaseModel):
    """One request to provision a local directory as a sync root.

    Built once per activation and discarded afterwards; it owns no
    resources.

    Attributes:
        filter_roots: Repository paths mirrored by the directory, in order.
        local_path: Filesystem directory to provision.
        sync_once_mode: Requested initial sync mode (may be AUTO).
        overwrite_existing: Replace artifacts that already exist.
        expected_sync_duration_ms: Expected duration of the initial sync.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    filter_roots: Annotated[
        tuple[str, ...],
        Field(min_length=1, description="Repository paths to add as filter roots"),
    ]
    local_path: Annotated[Path, Field(description="Filesystem path of the sync root")]
    sync_once_mode: Annotated[
        SyncOnceMode,
        Field(description="Requested sync-once mode"),
    ] = SyncOnceMode.DISABLED
    overwrite_existing: Annotated[
        bool,
        Field(description="Overwrite existing vlt sync config files"),
    ] = DEFAULT_OVERWRITE_CONFIG_FILES
    expected_sync_duration_ms: Annotated[
        int,
        Field(ge=0, description="Expected sync-once duration in milliseconds"),
    ] = DEFAULT_SYNC_ONCE_EXPECTED_TIME

    @field_validator("filter_roots", mode="before")
    @classmethod
    def _normalize_filter_roots(cls, v: object) -> tuple[str, ...]:
        return tuple(_to_string_list(v))

    @field_validator("local_path", mode="before")
    @classmethod
    def _trim_local_path(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                msg = "local_path cannot be empty"
                raise ValueError(msg)
        return v

    @field_validator("sync_once_mode", mode="before")
    @classmethod
    def _parse_mode(cls, v: object) -> SyncOnceMode:
        return SyncOnceMode.parse(v)

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any]) -> "ProvisioningRequest":
        """Build a request from an activation property bag.

        Args:
            properties: Mapping keyed by the PROP_* names of this module.

        Returns:
            Validated ProvisioningRequest.

        Raises:
            MissingParameterError: If filter.roots or local.path is absent or
                blank (checked in that order).
            InvalidParameterError: If any other value cannot be coerced.
        """
        filter_roots = _to_string_list(properties.get(PROP_FILTER_ROOTS))
        if not filter_roots:
            raise MissingParameterError(PROP_FILTER_ROOTS)

        raw_path = properties.get(PROP_LOCAL_PATH)
        local_path = str(raw_path).strip() if raw_path is not None else ""
        if not local_path:
            raise MissingParameterError(PROP_LOCAL_PATH)

        data: dict[str, Any] = {
            "filter_roots": filter_roots,
            "local_path": local_path,
            "sync_once_mode": properties.get(PROP_SYNC_ONCE_TYPE),
        }
        overwrite = properties.get(PROP_OVERWRITE_CONFIG_FILES)
        if overwrite is not None:
            data["overwrite_existing"] = overwrite
        expected_time = properties.get(PROP_SYNC_ONCE_EXPECTED_TIME)
        if expected_time is not None:
            data["expected_sync_duration_ms"] = expected_time

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidParameterError(f"Invalid activation properties: {e}") from e

    def to_properties(self) -> dict[str, Any]:
        """Convert the request back into an activation property bag."""
        return {
            PROP_FILTER_ROOTS: list(self.filter_roots),
            PROP_LOCAL_PATH: str(self.local_path),
            PROP_SYNC_ONCE_TYPE: self.sync_once_mode.value,
            PROP_SYNC_ONCE_EXPECTED_TIME: self.expected_sync_duration_ms,
            PROP_OVERWRITE_CONFIG_FILES: self.overwrite_existing,
        }
