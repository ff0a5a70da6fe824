"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from vltsync.core.registry import SyncRootRegistry
from vltsync.models.request import (
    PROP_FILTER_ROOTS,
    PROP_LOCAL_PATH,
    PROP_SYNC_ONCE_TYPE,
)


@pytest.fixture(autouse=True)
def isolated_xdg_dirs(tmp_path: Path) -> Iterator[Path]:
    """Point XDG config/state directories into the test's tmp_path."""
    xdg_root = tmp_path / "xdg"
    with patch.dict(
        os.environ,
        {
            "XDG_CONFIG_HOME": str(xdg_root / "config"),
            "XDG_STATE_HOME": str(xdg_root / "state"),
        },
    ):
        yield xdg_root


@pytest.fixture
def registry() -> MagicMock:
    """Mocked sync root registry."""
    return MagicMock(spec=SyncRootRegistry)


@pytest.fixture
def sync_root(tmp_path: Path) -> Path:
    """A sync root location that does not exist yet."""
    return tmp_path / "project" / "jcr_root"


@pytest.fixture
def properties(sync_root: Path) -> dict[str, Any]:
    """Activation properties requesting AUTO mode for two filter roots."""
    return {
        PROP_SYNC_ONCE_TYPE: "AUTO",
        PROP_LOCAL_PATH: str(sync_root),
        PROP_FILTER_ROOTS: ["/content/my-app", "/etc/designs/my-app"],
    }


@pytest.fixture
def create_files() -> Callable[..., None]:
    """Factory creating empty files (and parent directories) under a base."""

    def _create(base: Path, *relative_paths: str) -> None:
        for relative_path in relative_paths:
            file_path = base / relative_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.touch()

    return _create


@pytest.fixture
def umask_022() -> Iterator[None]:
    """Run the test with a 022 umask."""
    previous = os.umask(0o022)
    try:
        yield
    finally:
        os.umask(previous)
