"""Unit tests for status command."""

import json
from pathlib import Path

from vltsync.cli.main import app
from vltsync.provisioning.probe import CONFIG_ARTIFACT
from typer.testing import CliRunner

runner = CliRunner()


class TestStatusCommand:
    """Tests for status command execution."""

    def test_status_json_after_register(self, sync_root: Path) -> None:
        """--json reports artifacts and registration."""
        runner.invoke(app, ["register", str(sync_root), "-r", "/c", "-m", "auto"])

        result = runner.invoke(app, ["status", str(sync_root), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["exists"] is True
        assert data["effectively_empty"] is True
        assert data["filter_artifact"] is True
        assert data["default_filter"] == []
        assert data["config_artifact"] is True
        assert data["sync_once"] == "JCR2FS"
        assert data["registered"] is True
        assert data["expected_duration_ms"] == 3000

    def test_status_json_unknown_directory(self, tmp_path: Path) -> None:
        """A missing directory has no artifacts and is not registered."""
        result = runner.invoke(app, ["status", str(tmp_path / "missing"), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["exists"] is False
        assert data["sync_once"] is None
        assert data["registered"] is False

    def test_status_reports_default_filter(self, sync_root: Path) -> None:
        """A default filter above the root is listed."""
        (sync_root.parent / "META-INF" / "vault").mkdir(parents=True)
        (sync_root.parent / "META-INF" / "vault" / "filter.xml").touch()
        sync_root.mkdir()

        result = runner.invoke(app, ["status", str(sync_root), "--json"])

        assert json.loads(result.stdout)["default_filter"] == ["../META-INF/vault/filter.xml"]

    def test_status_text(self, sync_root: Path) -> None:
        """The text output shows the sync-once mode."""
        sync_root.mkdir(parents=True)
        (sync_root / CONFIG_ARTIFACT).write_text("sync-once=FS2JCR\n", encoding="utf-8")

        result = runner.invoke(app, ["status", str(sync_root)])

        assert result.exit_code == 0, result.output
        assert "FS2JCR" in result.output

    def test_unreadable_config_fails(self, sync_root: Path) -> None:
        """An unreadable config artifact exits with code 1."""
        (sync_root / CONFIG_ARTIFACT).mkdir(parents=True)

        result = runner.invoke(app, ["status", str(sync_root)])

        assert result.exit_code == 1
