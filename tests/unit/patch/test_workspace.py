"""Unit tests for vendorpatch.patch.workspace module."""

from pathlib import Path

import pytest

from vendorpatch.config.schema import PatchConfig
from vendorpatch.core.errors import PathSecurityError, ReadError, WriteError
from vendorpatch.patch import PatchOptions, TrailingPolicy, Workspace


class TestPatchOptions:
    """Tests for PatchOptions."""

    def test_defaults(self) -> None:
        options = PatchOptions()

        assert options.strip == 1
        assert options.trailing is TrailingPolicy.KEEP
        assert options.encoding == "utf-8"
        assert options.create_parents is True

    def test_from_config(self) -> None:
        config = PatchConfig(strip=0, trailing="drop", encoding="latin-1", create_parents=False)

        options = PatchOptions.from_config(config)

        assert options == PatchOptions(
            strip=0,
            trailing=TrailingPolicy.DROP,
            encoding="latin-1",
            create_parents=False,
        )


class TestWorkspace:
    """Tests for Workspace file access."""

    def test_resolve_uses_strip(self, project: Path) -> None:
        assert Workspace(project).resolve("a/src/x.c") == project / "src" / "x.c"
        assert Workspace(project, PatchOptions(strip=0)).resolve("src/x.c") == (
            project / "src" / "x.c"
        )

    def test_resolve_rejects_escape(self, project: Path) -> None:
        with pytest.raises(PathSecurityError):
            Workspace(project).resolve("a/../../etc/passwd")

    def test_read_keeps_line_endings(self, project: Path) -> None:
        target = project / "f"
        target.write_bytes(b"a\r\nb\n")

        assert Workspace(project).read(target) == "a\r\nb\n"

    def test_read_missing(self, project: Path) -> None:
        with pytest.raises(ReadError, match="Failed to read"):
            Workspace(project).read(project / "missing")

    def test_read_with_configured_encoding(self, project: Path) -> None:
        target = project / "f"
        target.write_bytes("café\n".encode("latin-1"))

        workspace = Workspace(project, PatchOptions(encoding="latin-1"))

        assert workspace.read(target) == "café\n"

    def test_write_creates_parents(self, project: Path) -> None:
        target = project / "a" / "b" / "f"

        Workspace(project).write(target, "x\n")

        assert target.read_text() == "x\n"

    def test_write_leaves_no_temp_files(self, project: Path) -> None:
        Workspace(project).write(project / "f", "x\n")

        assert [p.name for p in project.iterdir()] == ["f"]

    def test_write_without_parent(self, project: Path) -> None:
        workspace = Workspace(project, PatchOptions(create_parents=False))

        with pytest.raises(WriteError) as exc_info:
            workspace.write(project / "missing" / "f", "x\n")

        assert exc_info.value.path == project / "missing" / "f"

    def test_write_unencodable_content(self, project: Path) -> None:
        workspace = Workspace(project, PatchOptions(encoding="ascii"))

        with pytest.raises(WriteError):
            workspace.write(project / "f", "é\n")

    def test_remove(self, project: Path) -> None:
        target = project / "f"
        target.write_text("x\n")

        Workspace(project).remove(target)

        assert not target.exists()

    def test_remove_missing(self, project: Path) -> None:
        with pytest.raises(WriteError):
            Workspace(project).remove(project / "missing")


class TestDryRunWorkspace:
    """Tests for the in-memory overlay used by dry runs."""

    def test_write_is_kept_in_memory(self, project: Path) -> None:
        target = project / "f"
        target.write_text("old\n")
        workspace = Workspace(project, dry_run=True)

        workspace.write(target, "new\n")

        assert target.read_text() == "old\n"
        assert workspace.read(target) == "new\n"
        assert workspace.pending_paths() == [target]

    def test_created_file_exists_in_overlay(self, project: Path) -> None:
        target = project / "new"
        workspace = Workspace(project, dry_run=True)

        workspace.write(target, "x\n")

        assert workspace.exists(target)
        assert not target.exists()

    def test_removed_file_is_gone_from_overlay(self, project: Path) -> None:
        target = project / "f"
        target.write_text("x\n")
        workspace = Workspace(project, dry_run=True)

        workspace.remove(target)

        assert target.exists()
        assert not workspace.exists(target)
        with pytest.raises(ReadError, match="removed earlier"):
            workspace.read(target)
