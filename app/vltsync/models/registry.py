"""Registry models for tracked sync roots.

This module defines the Pydantic models stored in the sync root
registry file.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

REGISTRY_VERSION = 1


class RegisteredSyncRoot(BaseModel):
    """A directory currently registered as a sync root.

    Attributes:
        path: Absolute filesystem path of the sync root.
        expected_duration_ms: Expected sync-once duration, absent when no
            initial sync is expected.
        registered_at: When the root was (last) registered.
    """

    model_config = ConfigDict(extra="forbid")

    path: Annotated[str, Field(min_length=1, description="Absolute sync root path")]
    expected_duration_ms: Annotated[
        int | None,
        Field(ge=0, description="Expected sync-once duration in milliseconds"),
    ] = None
    registered_at: Annotated[datetime, Field(description="Registration timestamp")]


class RegistryDocument(BaseModel):
    """On-disk layout of the registry file."""

    model_config = ConfigDict(extra="forbid")

    version: Annotated[int, Field(description="Registry schema version")] = REGISTRY_VERSION
    roots: Annotated[
        list[RegisteredSyncRoot],
        Field(default_factory=list, description="Registered sync roots"),
    ]
