"""Tests for workspace module."""

import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from dev_certs.lib.errors import WorkspaceError
from dev_certs.lib.workspace import read_material, scoped_workspace


class TestScopedWorkspace:
    """Tests for scoped_workspace."""

    def test_creates_private_directory_under_parent(self, workspace_root: Path) -> None:
        """Workspace should be a fresh 0700 directory inside parent."""
        with scoped_workspace("test-", workspace_root) as workspace:
            assert workspace.is_dir()
            assert workspace.parent == workspace_root
            assert workspace.name.startswith("test-")
            assert stat.S_IMODE(workspace.stat().st_mode) == 0o700

    def test_removed_after_success(self, workspace_root: Path) -> None:
        """Workspace and nested files should be gone after normal exit."""
        with scoped_workspace("test-", workspace_root) as workspace:
            (workspace / "nested").mkdir()
            (workspace / "nested" / "key.pem").write_text("secret")

        assert not workspace.exists()
        assert list(workspace_root.iterdir()) == []

    def test_removed_after_failure(self, workspace_root: Path) -> None:
        """Workspace should be removed and the exception propagated."""
        with pytest.raises(RuntimeError, match="step failed"):
            with scoped_workspace("test-", workspace_root) as workspace:
                (workspace / "key.pem").write_text("secret")
                raise RuntimeError("step failed")

        assert list(workspace_root.iterdir()) == []

    def test_unique_per_acquisition(self, workspace_root: Path) -> None:
        """Two nested acquisitions should never share a directory."""
        with scoped_workspace("test-", workspace_root) as first:
            with scoped_workspace("test-", workspace_root) as second:
                assert first != second

    def test_creation_failure_raises_workspace_error(self, tmp_path: Path) -> None:
        """Missing parent directory should raise WorkspaceError."""
        with pytest.raises(WorkspaceError, match="failed to create workspace"):
            with scoped_workspace("test-", tmp_path / "does-not-exist"):
                pass

    def test_cleanup_failure_logged_not_raised(
        self, workspace_root: Path, provisioning_logs: pytest.LogCaptureFixture
    ) -> None:
        """A failed removal should be logged as warning without raising."""
        with patch("dev_certs.lib.workspace.shutil.rmtree", side_effect=OSError("busy")):
            with scoped_workspace("test-", workspace_root):
                pass

        warnings = [r.getMessage() for r in provisioning_logs.records if r.levelname == "WARNING"]
        assert any("Failed to remove workspace" in msg and "busy" in msg for msg in warnings)

    def test_cleanup_failure_does_not_mask_body_error(self, workspace_root: Path) -> None:
        """Body exception should surface even when removal fails."""
        with patch("dev_certs.lib.workspace.shutil.rmtree", side_effect=OSError("busy")):
            with pytest.raises(RuntimeError, match="original"):
                with scoped_workspace("test-", workspace_root):
                    raise RuntimeError("original")


class TestReadMaterial:
    """Tests for read_material."""

    def test_reads_utf8_text(self, tmp_path: Path) -> None:
        """Key and certificate text should be returned unchanged."""
        (tmp_path / "key.pem").write_text("KEY", encoding="utf-8")
        (tmp_path / "cert.pem").write_text("CERT", encoding="utf-8")

        material = read_material(tmp_path / "key.pem", tmp_path / "cert.pem")

        assert material.key == "KEY"
        assert material.cert == "CERT"

    def test_missing_file_raises_workspace_error(self, tmp_path: Path) -> None:
        """Missing certificate file should raise WorkspaceError."""
        (tmp_path / "key.pem").write_text("KEY")
        with pytest.raises(WorkspaceError, match="failed to read"):
            read_material(tmp_path / "key.pem", tmp_path / "cert.pem")

    def test_non_utf8_raises_workspace_error(self, tmp_path: Path) -> None:
        """Binary output should raise WorkspaceError."""
        (tmp_path / "key.pem").write_bytes(b"\xff\xfe\x00")
        (tmp_path / "cert.pem").write_text("CERT")
        with pytest.raises(WorkspaceError):
            read_material(tmp_path / "key.pem", tmp_path / "cert.pem")

    def test_key_hidden_from_repr(self, tmp_path: Path) -> None:
        """Private key text should never appear in repr."""
        (tmp_path / "key.pem").write_text("SECRET-KEY")
        (tmp_path / "cert.pem").write_text("CERT")
        material = read_material(tmp_path / "key.pem", tmp_path / "cert.pem")
        assert "SECRET-KEY" not in repr(material)
