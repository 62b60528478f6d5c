"""Shared pytest fixtures for the Rext scaffold test suite.

Provides reusable fixtures for:
- Temporary project directories
- Generation configs for the default and custom module sets
- A fully generated core project
- A recording console that captures Rich output
"""

from __future__ import annotations

from io import StringIO
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from rext_scaffold.config import GenerationConfig, Module
from rext_scaffold.scaffolder.catalog import FileDescriptor, FileIdentity


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Empty target directory for a generated project (auto-cleanup)."""
    project_dir = tmp_path / "test-project"
    project_dir.mkdir()
    yield project_dir


# ---------------------------------------------------------------------------
# Configs
# ---------------------------------------------------------------------------

@pytest.fixture
def core_config() -> GenerationConfig:
    """The default scaffold: core module only."""
    return GenerationConfig(app_name="demo-app", modules={Module.CORE})


@pytest.fixture
def blog_config() -> GenerationConfig:
    return GenerationConfig(app_name="blog", modules={Module.CORE})


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

@pytest.fixture
def recording_console():
    """Swap the shared Rich console for one that records instead of printing."""
    console = Console(file=StringIO(), record=True, width=200, force_terminal=False)
    with patch("rext_scaffold.utils.console", console):
        yield console


# ---------------------------------------------------------------------------
# Generated project
# ---------------------------------------------------------------------------

@pytest.fixture
def generated_project(tmp_project_dir: Path, core_config: GenerationConfig, recording_console) -> Path:
    """A target directory holding a freshly generated core project."""
    from rext_scaffold.scaffolder import ProjectGenerator

    ProjectGenerator(core_config, tmp_project_dir).generate()
    return tmp_project_dir


def _snapshot_tree(root: Path) -> dict[str, bytes | None]:
    snapshot: dict[str, bytes | None] = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root).as_posix()
        snapshot[rel] = None if path.is_dir() else path.read_bytes()
    return snapshot


@pytest.fixture
def snapshot_tree():
    """Callable mapping every path under a root to its bytes (``None`` for dirs)."""
    return _snapshot_tree


# ---------------------------------------------------------------------------
# Synthetic catalog
# ---------------------------------------------------------------------------

@pytest.fixture
def mixed_catalog() -> list[FileDescriptor]:
    """A small catalog spanning several modules, for selection tests."""
    def entry(identity, name, directory, module):
        return FileDescriptor(
            identity=identity,
            display_name=name,
            relative_directory=directory,
            module=module,
            needs_directory=directory != ".",
            content_source=f"{name}.tmpl",
        )

    return [
        entry(FileIdentity.REXT_CONFIG, "rext.toml", ".", Module.CORE),
        entry(FileIdentity.HANDLERS_ADMIN_RS, "admin.rs", "backend/bridge/handlers", Module.ADMIN),
        entry(FileIdentity.MAIN_RS, "main.rs", "backend", Module.CORE),
        entry(FileIdentity.INFRASTRUCTURE_JOB_QUEUE_RS, "job_queue.rs", "backend/infrastructure", Module.QUEUE),
        entry(FileIdentity.INFRASTRUCTURE_EMAIL_RS, "email.rs", "backend/infrastructure", Module.EMAIL),
        entry(FileIdentity.PACKAGE_JSON, "package.json", "frontend", Module.VUE),
        entry(FileIdentity.ROUTES_ADMIN_RS, "admin.rs", "backend/bridge/routes", Module.ADMIN),
    ]
