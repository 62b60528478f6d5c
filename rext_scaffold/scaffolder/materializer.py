"""Write rendered files to disk.

Directories are created first (deduplicated, recursive, idempotent), then
every file is written, overwriting whatever is already there.  The first
failure aborts the run.  Files written before the failure stay on disk:
generation is not atomic.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rext_scaffold.errors import DirectoryCreationError, FileWriteError
from rext_scaffold.scaffolder.templates import RenderedFile


def required_directories(files: Sequence[RenderedFile]) -> set[Path]:
    """Distinct directories of the files that need one."""
    return {f.directory_path for f in files if f.needs_directory}


def create_directories(files: Sequence[RenderedFile]) -> set[Path]:
    """Create every directory the files need.

    Pre-existing directories are not an error.

    Returns:
        The set of directories that were ensured.

    Raises:
        DirectoryCreationError: On the first directory that cannot be created.
    """
    directories = required_directories(files)
    # Sorted so parents precede children and failures are reproducible.
    for directory in sorted(directories):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationError(directory, exc) from exc
    return directories


def write_files(files: Sequence[RenderedFile]) -> list[Path]:
    """Write each file's content to its absolute path.

    Raises:
        FileWriteError: On the first file that cannot be written.
    """
    written: list[Path] = []
    for rendered in files:
        path = rendered.absolute_path
        try:
            # newline="" keeps the payload's line endings untouched.
            with path.open("w", encoding="utf-8", newline="") as fh:
                fh.write(rendered.content)
        except OSError as exc:
            raise FileWriteError(path, exc) from exc
        written.append(path)
    return written


def materialize(files: Sequence[RenderedFile]) -> list[Path]:
    """Create the needed directories, then write every file.

    Returns:
        Paths of the written files, in input order.
    """
    create_directories(files)
    return write_files(files)
