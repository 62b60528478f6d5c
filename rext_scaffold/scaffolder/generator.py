"""Main scaffolding orchestrator.

Takes a ``GenerationConfig`` and a target directory and either generates a
new Rext application there or tears a generated one down again.

Generation order:

1. Pre-flight guard (refuse if ``rext.toml`` or ``Cargo.toml`` exist)
2. Module filter over the catalog
3. Placeholder substitution for every selected entry
4. Directory creation, then file writes

Generation is not atomic: if a write fails part-way, the files written so far
remain on disk and the error is raised to the caller.
"""

from __future__ import annotations

from pathlib import Path

from rext_scaffold.config import DestroyStrategy, GenerationConfig
from rext_scaffold.errors import CurrentDirError
from rext_scaffold.utils import (
    print_path,
    print_success,
    print_summary_table,
    print_warning,
)

from . import destroyer, guard, materializer
from .catalog import FileDescriptor, catalog, select
from .templates import RenderedFile, TemplateRenderer


def _resolve_target(target_dir: str | Path | None) -> Path:
    if target_dir is not None:
        return Path(target_dir)
    try:
        return Path.cwd()
    except OSError as exc:
        raise CurrentDirError(exc) from exc


class ProjectGenerator:
    """Generates and destroys Rext applications.

    Given a ``GenerationConfig``, produces:
    - Root project files (``rext.toml``, ``Cargo.toml``, Docker files, README)
    - The layered backend source tree under ``backend/``
    - Frontend build configuration under ``frontend/``
    - The database migration crate under ``migration/``
    """

    def __init__(
        self,
        config: GenerationConfig | None = None,
        target_dir: str | Path | None = None,
        *,
        destroy_strategy: DestroyStrategy = DestroyStrategy.FIXED,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config or GenerationConfig()
        self.target_dir = _resolve_target(target_dir)
        self.destroy_strategy = destroy_strategy
        self.renderer = renderer or TemplateRenderer()

    # -- Planning ----------------------------------------------------------

    def selected_descriptors(self) -> list[FileDescriptor]:
        """Catalog entries for the configured modules, in catalog order."""
        return select(catalog(), self.config.modules)

    def planned_files(self) -> list[RenderedFile]:
        """Render every selected entry without touching the filesystem."""
        return self.renderer.render_all(
            self.selected_descriptors(), self.config, self.target_dir
        )

    def layout(self) -> destroyer.ProjectLayout:
        """The layout destroy checks against, per ``destroy_strategy``."""
        if self.destroy_strategy is DestroyStrategy.CATALOG:
            return destroyer.layout_from_catalog(self.selected_descriptors())
        return destroyer.MINIMAL_LAYOUT

    # -- Public API --------------------------------------------------------

    def generate(self) -> list[Path]:
        """Generate the application into ``target_dir``.

        Returns:
            Paths of every written file.

        Raises:
            AppAlreadyExistsError: A marker file is already present.
            DirectoryCreationError: A directory could not be created.
            FileWriteError: A file could not be written.
        """
        guard.check(self.target_dir)

        files = self.planned_files()
        if not files:
            print_warning("No files selected for the configured modules; nothing generated.")
            return []

        directories = materializer.required_directories(files)
        written = materializer.materialize(files)
        for directory in sorted(directories):
            print_path("Created", directory, self.target_dir)
        for path in written:
            print_path("Created", path, self.target_dir)

        print_summary_table(
            {
                "App name": self.config.app_name,
                "Modules": ", ".join(sorted(m.value for m in self.config.modules)),
                "Directory": str(self.target_dir),
                "Directories": str(len(directories)),
                "Files": str(len(written)),
            },
            title="Rext app created",
        )
        print_success(f"Created Rext app {self.config.app_name!r}")
        return written

    def destroy(self) -> list[Path]:
        """Remove a previously generated application from ``target_dir``.

        Returns:
            Every removed path, in removal order.

        Raises:
            SafetyCheckError: Unexpected contents were found; nothing was removed.
            DirectoryReadError: A guarded directory could not be listed.
            FileRemovalError: A file could not be removed.
            DirectoryRemovalError: A directory could not be removed.
        """
        removed = destroyer.destroy(self.target_dir, self.layout())
        for path in removed:
            print_path("Removed", path, self.target_dir, style="red")
        print_success(f"Destroyed Rext app in {self.target_dir}")
        return removed
