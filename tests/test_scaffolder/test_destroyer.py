"""Tests for the safety-checked destroyer.

Covers:
- Fixed layout matches the catalog-derived layout for the core scaffold
- Successful teardown of a generated project
- Refusal (with zero side effects) on extra files, missing files, symlinks,
  replaced directories, and non-projects
- Removal order: files, then directories deepest first, then markers last
- Deletion-phase failures surface as removal errors
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from rext_scaffold.config import Module
from rext_scaffold.errors import (
    DirectoryReadError,
    DirectoryRemovalError,
    FileRemovalError,
    SafetyCheckError,
)
from rext_scaffold.scaffolder.catalog import FileDescriptor, FileIdentity, catalog, select
from rext_scaffold.scaffolder.destroyer import (
    MINIMAL_LAYOUT,
    DirectoryExpectation,
    ProjectLayout,
    destroy,
    layout_from_catalog,
    verify,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Layouts
# ---------------------------------------------------------------------------


class TestLayouts:
    def test_fixed_layout_matches_core_catalog(self):
        assert layout_from_catalog(select(catalog(), {Module.CORE})) == MINIMAL_LAYOUT

    def test_layout_from_catalog_registers_ancestors(self):
        descriptor = FileDescriptor(
            identity=FileIdentity.PERMISSION_MACRO_RS,
            display_name="deep.rs",
            relative_directory="a/b/c",
            module=Module.CORE,
            needs_directory=True,
            content_source="deep.rs.tmpl",
        )
        layout = layout_from_catalog([descriptor])
        assert layout.root_files == ()
        assert layout.directories == {
            "a": DirectoryExpectation(frozenset(), frozenset({"b"})),
            "a/b": DirectoryExpectation(frozenset(), frozenset({"c"})),
            "a/b/c": DirectoryExpectation(frozenset({"deep.rs"}), frozenset()),
        }

    def test_empty_selection(self):
        layout = layout_from_catalog([])
        assert layout.root_files == ()
        assert dict(layout.directories) == {}

    def test_deepest_first(self):
        order = MINIMAL_LAYOUT.directories_deepest_first()
        depths = [len(Path(rel).parts) for rel in order]
        assert depths == sorted(depths, reverse=True)
        assert order.index("backend/bridge/handlers") < order.index("backend/bridge")
        assert order.index("backend/bridge") < order.index("backend")

    def test_expected_count(self):
        expectation = MINIMAL_LAYOUT.directories["backend"]
        assert expectation.expected_count == 6


# ---------------------------------------------------------------------------
# Successful destroy
# ---------------------------------------------------------------------------


class TestDestroy:
    def test_removes_everything(self, generated_project: Path):
        removed = destroy(generated_project)
        assert list(generated_project.iterdir()) == []
        assert len(removed) == len(catalog()) + len(MINIMAL_LAYOUT.directories)

    def test_removal_order(self, generated_project: Path):
        removed = destroy(generated_project)
        first_dir = next(i for i, p in enumerate(removed) if p == generated_project / "backend/bridge/handlers")
        assert all(p.suffix for p in removed[:first_dir])
        assert removed.index(generated_project / "backend/bridge/handlers") < removed.index(
            generated_project / "backend"
        )
        assert removed[-2:] == [generated_project / "rext.toml", generated_project / "Cargo.toml"]

    def test_leaves_unrelated_root_entries(self, generated_project: Path):
        (generated_project / ".git").mkdir()
        (generated_project / "target").mkdir()
        (generated_project / ".env").write_text("SECRET=1", encoding="utf-8")
        destroy(generated_project)
        assert sorted(p.name for p in generated_project.iterdir()) == [".env", ".git", "target"]

    def test_missing_root_file_skipped(self, generated_project: Path):
        (generated_project / "README.md").unlink()
        removed = destroy(generated_project)
        assert generated_project / "README.md" not in removed
        assert list(generated_project.iterdir()) == []

    def test_custom_layout(self, tmp_project_dir: Path):
        (tmp_project_dir / "rext.toml").write_text("", encoding="utf-8")
        (tmp_project_dir / "src").mkdir()
        (tmp_project_dir / "src" / "main.rs").write_text("", encoding="utf-8")
        layout = ProjectLayout(
            root_files=("rext.toml",),
            directories={"src": DirectoryExpectation(frozenset({"main.rs"}))},
        )
        assert destroy(tmp_project_dir, layout) == [
            tmp_project_dir / "src" / "main.rs",
            tmp_project_dir / "src",
            tmp_project_dir / "rext.toml",
        ]


# ---------------------------------------------------------------------------
# Safety checks
# ---------------------------------------------------------------------------


class TestSafetyChecks:
    def _assert_refused(self, root: Path, snapshot_tree, reason_fragment: str) -> None:
        before = snapshot_tree(root)
        with pytest.raises(SafetyCheckError) as exc_info:
            destroy(root)
        assert reason_fragment in str(exc_info.value)
        assert snapshot_tree(root) == before

    def test_extra_file_aborts(self, generated_project: Path, snapshot_tree):
        extra = generated_project / "backend" / "control" / "services" / "billing.rs"
        extra.write_text("// user code", encoding="utf-8")
        self._assert_refused(generated_project, snapshot_tree, "billing.rs")
        assert extra.exists()
        assert (generated_project / "rext.toml").exists()

    def test_extra_directory_aborts(self, generated_project: Path, snapshot_tree):
        (generated_project / "frontend" / "node_modules").mkdir()
        self._assert_refused(generated_project, snapshot_tree, "node_modules")

    def test_missing_file_aborts(self, generated_project: Path, snapshot_tree):
        (generated_project / "backend" / "domain" / "user.rs").unlink()
        self._assert_refused(generated_project, snapshot_tree, "expected 5 entries, found 4")

    def test_renamed_file_aborts(self, generated_project: Path, snapshot_tree):
        domain = generated_project / "backend" / "domain"
        (domain / "user.rs").rename(domain / "account.rs")
        self._assert_refused(generated_project, snapshot_tree, "'user.rs'")

    def test_file_replaced_by_directory_aborts(self, generated_project: Path, snapshot_tree):
        target = generated_project / "migration" / "src" / "main.rs"
        target.unlink()
        target.mkdir()
        self._assert_refused(generated_project, snapshot_tree, "'main.rs'")

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlinked_file_aborts(self, generated_project: Path, tmp_path: Path, snapshot_tree):
        outside = tmp_path / "outside.rs"
        outside.write_text("// keep me", encoding="utf-8")
        target = generated_project / "backend" / "entity" / "mod.rs"
        target.unlink()
        target.symlink_to(outside)
        with pytest.raises(SafetyCheckError):
            destroy(generated_project)
        assert outside.read_text(encoding="utf-8") == "// keep me"
        assert target.is_symlink()

    def test_missing_guarded_directory_aborts(self, generated_project: Path, snapshot_tree):
        macros = generated_project / "backend" / "infrastructure" / "macros"
        for child in macros.iterdir():
            child.unlink()
        macros.rmdir()
        self._assert_refused(generated_project, snapshot_tree, "macros")

    def test_root_file_replaced_by_directory_aborts(self, generated_project: Path, snapshot_tree):
        (generated_project / "Dockerfile").unlink()
        (generated_project / "Dockerfile").mkdir()
        self._assert_refused(generated_project, snapshot_tree, "regular file")

    def test_not_a_project(self, tmp_project_dir: Path, snapshot_tree):
        (tmp_project_dir / "notes.txt").write_text("mine", encoding="utf-8")
        self._assert_refused(tmp_project_dir, snapshot_tree, "not a Rext project")

    def test_verify_alone_never_deletes(self, generated_project: Path, snapshot_tree):
        before = snapshot_tree(generated_project)
        verify(generated_project)
        assert snapshot_tree(generated_project) == before

    def test_unreadable_directory(self, generated_project: Path):
        real_iterdir = Path.iterdir
        blocked = generated_project / "frontend"

        def fake_iterdir(self):
            if self == blocked:
                raise PermissionError(13, "Permission denied", str(self))
            return real_iterdir(self)

        with patch.object(Path, "iterdir", fake_iterdir):
            with pytest.raises(DirectoryReadError) as exc_info:
                destroy(generated_project)
        assert exc_info.value.path == blocked
        assert (generated_project / "rext.toml").exists()


# ---------------------------------------------------------------------------
# Deletion-phase failures
# ---------------------------------------------------------------------------


class TestRemovalFailures:
    def test_file_removal_failure(self, generated_project: Path):
        real_unlink = Path.unlink
        blocked = generated_project / "backend" / "main.rs"

        def fake_unlink(self, *args, **kwargs):
            if self == blocked:
                raise PermissionError(13, "Permission denied", str(self))
            return real_unlink(self, *args, **kwargs)

        with patch.object(Path, "unlink", fake_unlink):
            with pytest.raises(FileRemovalError) as exc_info:
                destroy(generated_project)
        assert exc_info.value.path == blocked
        assert blocked.exists()

    def test_directory_removal_failure(self, generated_project: Path):
        real_rmdir = Path.rmdir
        blocked = generated_project / "frontend" / "config"

        def fake_rmdir(self):
            if self == blocked:
                raise OSError(39, "Directory not empty", str(self))
            return real_rmdir(self)

        with patch.object(Path, "rmdir", fake_rmdir):
            with pytest.raises(DirectoryRemovalError) as exc_info:
                destroy(generated_project)
        assert exc_info.value.path == blocked
        # Deletion had already begun: a partial teardown is reported, not hidden.
        assert not (generated_project / "backend" / "main.rs").exists()
