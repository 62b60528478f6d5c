"""Pre-flight check that refuses to scaffold over an existing project."""

from __future__ import annotations

from pathlib import Path

from rext_scaffold.errors import AppAlreadyExistsError


PROJECT_MARKER = "rext.toml"
BUILD_MANIFEST_MARKER = "Cargo.toml"

MARKER_FILES: tuple[str, ...] = (PROJECT_MARKER, BUILD_MANIFEST_MARKER)


def find_marker(target_dir: str | Path) -> Path | None:
    """Return the first marker present at *target_dir*, if any.

    A dangling symlink counts as present.
    """
    root = Path(target_dir)
    for name in MARKER_FILES:
        candidate = root / name
        if candidate.exists() or candidate.is_symlink():
            return candidate
    return None


def check(target_dir: str | Path) -> None:
    """Raise ``AppAlreadyExistsError`` if *target_dir* already holds a project.

    Touches nothing on disk.  Must run before any directory is created.
    """
    marker = find_marker(target_dir)
    if marker is not None:
        raise AppAlreadyExistsError(marker)
