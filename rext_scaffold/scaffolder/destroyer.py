"""Safety-checked teardown of a generated project.

Destroy works from an explicit ``ProjectLayout``: the root-level files and,
for every guarded directory, the exact set of files and subdirectories that
generation put there.  Every guarded directory is inspected before anything
is removed.  If any of them holds something unexpected (an extra file, a
missing file, a symlink standing in for a file) the whole operation is
refused and the filesystem is left untouched.

Two layouts are available:

* ``MINIMAL_LAYOUT`` -- hardcoded, matches the default ``{core}`` scaffold.
* ``layout_from_catalog()`` -- derived from the catalog entries of a module
  selection, for projects generated with other module combinations.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from rext_scaffold.errors import (
    DirectoryReadError,
    DirectoryRemovalError,
    FileRemovalError,
    SafetyCheckError,
)
from rext_scaffold.scaffolder.catalog import ROOT_DIRECTORY, FileDescriptor
from rext_scaffold.scaffolder.guard import MARKER_FILES, PROJECT_MARKER


# ---------------------------------------------------------------------------
# Layout model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DirectoryExpectation:
    """Exact immediate contents of one guarded directory."""

    files: frozenset[str] = field(default_factory=frozenset)
    subdirectories: frozenset[str] = field(default_factory=frozenset)

    @property
    def expected_count(self) -> int:
        return len(self.files) + len(self.subdirectories)


@dataclass(frozen=True)
class ProjectLayout:
    """Everything a generation created, keyed by project-relative path."""

    root_files: tuple[str, ...]
    directories: Mapping[str, DirectoryExpectation]

    def directories_deepest_first(self) -> list[str]:
        return sorted(
            self.directories,
            key=lambda rel: (-len(PurePosixPath(rel).parts), rel),
        )


def _expect(files: Iterable[str], subdirectories: Iterable[str] = ()) -> DirectoryExpectation:
    return DirectoryExpectation(frozenset(files), frozenset(subdirectories))


MINIMAL_LAYOUT = ProjectLayout(
    root_files=(
        "rext.toml",
        "example.env",
        "docker-compose.yml",
        "dockerignore",
        "Dockerfile",
        ".gitignore",
        "README.md",
        "build.rs",
        "Cargo.toml",
    ),
    directories={
        "backend": _expect(
            ["main.rs"],
            ["bridge", "control", "domain", "entity", "infrastructure"],
        ),
        "backend/bridge": _expect(["mod.rs"], ["handlers", "middleware", "routes", "types"]),
        "backend/bridge/handlers": _expect(
            ["mod.rs", "websocket.rs", "admin.rs", "roles.rs", "auth.rs"]
        ),
        "backend/bridge/middleware": _expect(["mod.rs", "auth.rs", "admin.rs", "logging.rs"]),
        "backend/bridge/routes": _expect(["mod.rs", "admin.rs", "auth.rs"]),
        "backend/bridge/types": _expect(["mod.rs", "admin.rs", "auth.rs", "logging.rs"]),
        "backend/control": _expect(["mod.rs"], ["services"]),
        "backend/control/services": _expect(
            [
                "mod.rs",
                "server_config.rs",
                "startup.rs",
                "user_service.rs",
                "database_service.rs",
                "admin_service.rs",
                "token_service.rs",
                "session_service.rs",
                "auth_service.rs",
                "permission_service.rs",
                "system_monitor.rs",
            ]
        ),
        "backend/domain": _expect(
            ["mod.rs", "permissions.rs", "user.rs", "validation.rs", "auth.rs"]
        ),
        "backend/entity": _expect(["mod.rs"]),
        "backend/infrastructure": _expect(
            [
                "mod.rs",
                "job_queue.rs",
                "logging.rs",
                "scheduler.rs",
                "websocket.rs",
                "app_error.rs",
                "email.rs",
                "database.rs",
                "query_performance.rs",
                "server.rs",
                "cors.rs",
                "openapi.rs",
                "jwt_claims.rs",
            ],
            ["macros"],
        ),
        "backend/infrastructure/macros": _expect(["mod.rs", "permission_macro.rs"]),
        "frontend": _expect(
            ["package.json", "vite.config.ts", "openapi-ts.config.ts", "tsconfig.json"],
            ["config"],
        ),
        "frontend/config": _expect(["unified.config.ts"]),
        "migration": _expect(["Cargo.toml"], ["src"]),
        "migration/src": _expect(["lib.rs", "main.rs", "initial_migration.rs"]),
    },
)


def layout_from_catalog(descriptors: Iterable[FileDescriptor]) -> ProjectLayout:
    """Build the layout that generating *descriptors* produces.

    Every ancestor of a file's directory becomes a guarded directory too, with
    the child registered as an expected subdirectory.
    """
    root_files: list[str] = []
    files: dict[str, set[str]] = {}
    subdirectories: dict[str, set[str]] = {}

    for descriptor in descriptors:
        if descriptor.relative_directory == ROOT_DIRECTORY:
            root_files.append(descriptor.display_name)
            continue
        rel = PurePosixPath(descriptor.relative_directory)
        files.setdefault(str(rel), set()).add(descriptor.display_name)
        subdirectories.setdefault(str(rel), set())
        for parent in rel.parents:
            if str(parent) == ROOT_DIRECTORY:
                break
            files.setdefault(str(parent), set())
            subdirectories.setdefault(str(parent), set()).add(rel.relative_to(parent).parts[0])

    return ProjectLayout(
        root_files=tuple(root_files),
        directories={
            rel: _expect(files[rel], subdirectories[rel]) for rel in files
        },
    )


# ---------------------------------------------------------------------------
# Inspection
# ---------------------------------------------------------------------------


def _is_regular_file(path: Path) -> bool:
    return path.is_file() and not path.is_symlink()


def _is_real_directory(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()


def _verify_directory(path: Path, expected: DirectoryExpectation) -> None:
    """Raise ``SafetyCheckError`` unless *path* holds exactly *expected*."""
    if not _is_real_directory(path):
        raise SafetyCheckError(path, "expected a directory")

    try:
        entries = {entry.name: entry for entry in path.iterdir()}
    except OSError as exc:
        raise DirectoryReadError(path, exc) from exc

    if len(entries) != expected.expected_count:
        known = expected.files | expected.subdirectories
        reason = f"expected {expected.expected_count} entries, found {len(entries)}"
        unexpected = sorted(set(entries) - known)
        missing = sorted(known - set(entries))
        if unexpected:
            reason += f"; unexpected: {', '.join(unexpected)}"
        if missing:
            reason += f"; missing: {', '.join(missing)}"
        raise SafetyCheckError(path, reason)

    for name in sorted(expected.files):
        entry = entries.get(name)
        if entry is None or not _is_regular_file(entry):
            raise SafetyCheckError(path, f"expected file {name!r} is missing or not a regular file")

    for name in sorted(expected.subdirectories):
        entry = entries.get(name)
        if entry is None or not _is_real_directory(entry):
            raise SafetyCheckError(path, f"expected directory {name!r} is missing or not a directory")


def verify(target_dir: str | Path, layout: ProjectLayout = MINIMAL_LAYOUT) -> None:
    """Run every safety check without deleting anything.

    Raises:
        SafetyCheckError: If the target is not a project or holds unexpected
            contents.
        DirectoryReadError: If a guarded directory cannot be listed.
    """
    root = Path(target_dir)
    if not _is_regular_file(root / PROJECT_MARKER):
        raise SafetyCheckError(root, f"{PROJECT_MARKER} not found, not a Rext project")

    for rel in sorted(layout.directories):
        _verify_directory(root / rel, layout.directories[rel])

    for name in layout.root_files:
        path = root / name
        if (path.exists() or path.is_symlink()) and not _is_regular_file(path):
            raise SafetyCheckError(path, "expected a regular file")


# ---------------------------------------------------------------------------
# Teardown
# ---------------------------------------------------------------------------


def _remove_file(path: Path) -> None:
    try:
        path.unlink()
    except OSError as exc:
        raise FileRemovalError(path, exc) from exc


def _remove_directory(path: Path) -> None:
    try:
        path.rmdir()
    except OSError as exc:
        raise DirectoryRemovalError(path, exc) from exc


def destroy(target_dir: str | Path, layout: ProjectLayout = MINIMAL_LAYOUT) -> list[Path]:
    """Remove everything *layout* describes from *target_dir*.

    All checks run first; nothing is deleted unless every one of them passes.
    Deletion then removes the files inside guarded directories, the
    directories deepest first, and finally the root-level files with the
    marker files last.  A failure during deletion is raised immediately and
    may leave a partial teardown behind.

    Returns:
        Every removed path, in removal order.
    """
    root = Path(target_dir)
    verify(root, layout)

    removed: list[Path] = []
    ordered_dirs = layout.directories_deepest_first()

    for rel in ordered_dirs:
        for name in sorted(layout.directories[rel].files):
            path = root / rel / name
            _remove_file(path)
            removed.append(path)

    for rel in ordered_dirs:
        path = root / rel
        _remove_directory(path)
        removed.append(path)

    root_files = sorted(layout.root_files, key=lambda name: name in MARKER_FILES)
    for name in root_files:
        path = root / name
        if not path.exists():
            continue
        _remove_file(path)
        removed.append(path)

    return removed
