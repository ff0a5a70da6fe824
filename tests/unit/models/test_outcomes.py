"""Unit tests for provisioning outcome and registry models."""

from dataclasses import FrozenInstanceError
from datetime import UTC, datetime
from pathlib import Path

import pytest
from pydantic import ValidationError
from vltsync.models.provisioning import ArtifactState, ProvisioningResult, SyncModeDecision
from vltsync.models.registry import RegisteredSyncRoot, RegistryDocument
from vltsync.models.request import SyncOnceMode


class TestSyncModeDecision:
    """Tests for SyncModeDecision dataclass."""

    def test_rejects_auto(self) -> None:
        """AUTO cannot be a decided mode."""
        with pytest.raises(ValueError, match="AUTO"):
            SyncModeDecision(
                resolved_mode=SyncOnceMode.AUTO, will_run_initial_sync=True, written=True
            )

    def test_unknown_recovered_mode(self) -> None:
        """A recovered unknown token is represented as None."""
        decision = SyncModeDecision(resolved_mode=None, will_run_initial_sync=True, written=False)

        assert decision.resolved_mode is None

    def test_is_frozen(self) -> None:
        """Decisions are immutable."""
        decision = SyncModeDecision(
            resolved_mode=SyncOnceMode.JCR2FS, will_run_initial_sync=True, written=True
        )

        with pytest.raises(FrozenInstanceError):
            decision.written = False  # type: ignore[misc]


class TestOutcomeDataclasses:
    """Tests for ArtifactState and ProvisioningResult."""

    def test_artifact_state_equality(self) -> None:
        """States with the same flags are equal."""
        assert ArtifactState(True, False, True) == ArtifactState(True, False, True)

    def test_result_fields(self) -> None:
        """ProvisioningResult keeps what it is given."""
        result = ProvisioningResult(
            local_path=Path("/work"),
            will_run_initial_sync=True,
            expected_duration_ms=3000,
            filter_written=True,
            config_written=False,
            resolved_mode=SyncOnceMode.FS2JCR,
        )

        assert result.local_path == Path("/work")
        assert result.expected_duration_ms == 3000


class TestRegistryModels:
    """Tests for the registry file models."""

    def test_document_defaults(self) -> None:
        """An empty document has the current version and no roots."""
        document = RegistryDocument()

        assert document.version == 1
        assert document.roots == []

    def test_negative_duration_rejected(self) -> None:
        """Durations cannot be negative."""
        with pytest.raises(ValidationError):
            RegisteredSyncRoot(
                path="/work", expected_duration_ms=-1, registered_at=datetime.now(UTC)
            )

    def test_json_round_trip(self) -> None:
        """Documents survive a JSON dump and validate."""
        document = RegistryDocument(
            roots=[
                RegisteredSyncRoot(
                    path="/work",
                    expected_duration_ms=None,
                    registered_at=datetime(2024, 1, 1, tzinfo=UTC),
                )
            ]
        )

        assert RegistryDocument.model_validate_json(document.model_dump_json()) == document
